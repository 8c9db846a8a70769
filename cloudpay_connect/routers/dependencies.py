from fastapi import HTTPException, Request
from typing import Optional

from ..providers.cloudpayments.adapter import CloudPaymentsAdapter
from ..providers.registry import get_provider_by_name
from ..settings import settings


def client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def get_adapter(request: Request) -> CloudPaymentsAdapter:
    adapter = get_provider_by_name(settings.DEFAULT_PROVIDER, client_ip=client_ip(request))
    if not adapter:
        raise HTTPException(status_code=400, detail="Provider not found")
    return adapter
