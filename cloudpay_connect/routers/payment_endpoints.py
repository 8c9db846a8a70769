from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional
import httpx
from ..exceptions import MissingParameter, ProviderError
from ..providers.cloudpayments.adapter import CloudPaymentsAdapter
from ..schemas.api import (
    PaymentLinkIn,
    PaymentLinkOut,
    PaymentResultOut,
    ScheduleRemovedOut,
    ScheduleSavedOut,
    TokenPaymentIn,
)
from ..schemas.payment import PayServiceOption, Schedule
from .dependencies import get_adapter

router = APIRouter()


def _provider_failure(e: Exception) -> HTTPException:
    if isinstance(e, ProviderError):
        return HTTPException(status_code=502, detail=e.message)
    return HTTPException(status_code=502, detail=f"Gateway unreachable: {e}")


@router.post("/pay", response_model=PaymentLinkOut)
async def pay(body: PaymentLinkIn, adapter: CloudPaymentsAdapter = Depends(get_adapter)):
    """
    Charge by card cryptogram packet. The url is the 3-D Secure page when the
    issuer asks for it, the success url in widget mode, empty otherwise.
    """
    try:
        url = await adapter.get_payment_link(
            body.order_id,
            body.payment_id,
            body.amount,
            currency=body.currency,
            payment_type=body.payment_type,
            success_url=body.success_url,
            fail_url=body.fail_url,
            description=body.description,
            extra_params=body.extra_params,
            receipt=body.receipt,
        )
    except MissingParameter as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (ProviderError, httpx.HTTPError) as e:
        raise _provider_failure(e)
    return PaymentLinkOut(url=url, need_form=adapter.need_form())


@router.post("/pay/token", response_model=PaymentResultOut)
async def pay_by_token(body: TokenPaymentIn, adapter: CloudPaymentsAdapter = Depends(get_adapter)):
    try:
        raw = await adapter.pay_by_token(
            body.token,
            body.amount,
            body.currency,
            body.account_id,
            order_id=body.order_id,
            payment_id=body.payment_id,
            description=body.description,
            email=body.email,
        )
    except (ProviderError, httpx.HTTPError) as e:
        raise _provider_failure(e)

    return PaymentResultOut(
        success=adapter.is_success(),
        status=adapter.get_status(),
        order_id=adapter.get_order_id(),
        payment_id=adapter.get_payment_id(),
        transaction_id=adapter.get_transaction_id(),
        amount=adapter.get_amount(),
        pan=adapter.get_pan(),
        message=adapter.get_error_code(),
        raw=raw,
    )


@router.get("/options", response_model=List[PayServiceOption])
async def options(adapter: CloudPaymentsAdapter = Depends(get_adapter)):
    return adapter.get_options()


# ---- Recurring schedules ----
@router.post("/schedules", response_model=ScheduleSavedOut)
async def save_schedule(body: Schedule, adapter: CloudPaymentsAdapter = Depends(get_adapter)):
    try:
        schedule_id = await adapter.save_schedule(body)
    except (ProviderError, httpx.HTTPError) as e:
        raise _provider_failure(e)
    return ScheduleSavedOut(id=schedule_id)


@router.get("/schedules", response_model=List[Schedule])
async def list_schedules(account_id: Optional[str] = None, adapter: CloudPaymentsAdapter = Depends(get_adapter)):
    try:
        return await adapter.get_all_schedules(account_id)
    except (ProviderError, httpx.HTTPError) as e:
        raise _provider_failure(e)


@router.get("/schedules/{schedule_id}", response_model=Schedule)
async def get_schedule(schedule_id: str, adapter: CloudPaymentsAdapter = Depends(get_adapter)):
    try:
        return await adapter.get_schedule(schedule_id)
    except (ProviderError, httpx.HTTPError) as e:
        raise _provider_failure(e)


@router.delete("/schedules/{schedule_id}", response_model=ScheduleRemovedOut)
async def remove_schedule(schedule_id: str, adapter: CloudPaymentsAdapter = Depends(get_adapter)):
    try:
        removed = await adapter.remove_schedule(schedule_id)
    except (ProviderError, httpx.HTTPError) as e:
        raise _provider_failure(e)
    return ScheduleRemovedOut(id=schedule_id, removed=removed)
