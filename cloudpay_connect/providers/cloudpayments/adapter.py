from typing import Dict, Any, List, Mapping, Optional
import json
import structlog
from fastapi.responses import JSONResponse
from ...exceptions import MissingParameter
from ...schemas.payment import (
    CURRENCY_RUR,
    PAYMENT_CLOUDPAYMENTS,
    PAYMENT_TYPE_CARD,
    RESPONSE_ERROR,
    RESPONSE_SUCCESS,
    Form,
    PayServiceOption,
    Receipt,
    Schedule,
)
from ...utils.lookup import lookup
from ..base import CloudPaymentProtocol, PayProtocol
from .schemas import ChargeRequest, CloudPaymentsConfig, TokenChargeRequest

logger = structlog.get_logger(__name__)

PAN_MASK = "******"


class CloudPaymentsAdapter:
    """
    CloudPayments pay service + recurring schedules.

    Synchronous API replies nest fields under "Model", webhook notifications
    carry them at the top level, so every accessor reads "Model.X" first and
    falls back to "X".

    validate() does not check the notification HMAC (Content-HMAC header);
    the caller decides whether an incoming notification is trusted.
    """

    name = "CloudPayments"

    def __init__(
        self,
        config: CloudPaymentsConfig,
        protocol: Optional[CloudPaymentProtocol] = None,
        client_ip: Optional[str] = None,
    ):
        self.config = config
        self.client_ip = client_ip
        self.response: Dict[str, Any] = {}
        self._transport: Optional[PayProtocol] = None
        self._cloudpayments_protocol: Optional[CloudPaymentProtocol] = None
        if protocol is not None:
            self.set_cloudpayments_protocol(protocol)

    def get_name(self) -> str:
        return PAYMENT_CLOUDPAYMENTS

    # ---- Transport ----
    @property
    def transport(self) -> PayProtocol:
        return self._transport

    def set_transport(self, protocol: PayProtocol) -> "CloudPaymentsAdapter":
        self._transport = protocol
        return self

    @property
    def cloudpayments_protocol(self) -> CloudPaymentProtocol:
        return self._cloudpayments_protocol

    def set_cloudpayments_protocol(self, protocol: CloudPaymentProtocol) -> "CloudPaymentsAdapter":
        self._cloudpayments_protocol = protocol
        return self.set_transport(protocol)

    @property
    def use_widget(self) -> bool:
        return self.config.use_widget

    # ---- Payments ----
    async def get_payment_link(
        self,
        order_id: Any,
        payment_id: Any,
        amount: float,
        currency: str = CURRENCY_RUR,
        payment_type: str = PAYMENT_TYPE_CARD,
        success_url: str = "",
        fail_url: str = "",
        description: str = "",
        extra_params: Optional[Dict[str, Any]] = None,
        receipt: Optional[Receipt] = None,
    ) -> str:
        if self.use_widget:
            logger.info("payment_link_widget_mode", order_id=order_id)
            return success_url

        extra_params = dict(extra_params or {})
        missing = [k for k in ("checkout", "cardholder_name") if extra_params.get(k) is None]
        if missing:
            logger.warning("payment_params_missing", order_id=order_id, missing=missing)
            raise MissingParameter(*missing)

        request = ChargeRequest(
            email=extra_params.get("email"),
            amount=float(amount),
            currency=currency,
            invoice_id=str(order_id),
            description=description,
            account_id=self.config.account_id,
            name=extra_params["cardholder_name"],
            card_cryptogram_packet=extra_params["checkout"],
            ip_address=extra_params.get("ip") or self.client_ip or "",
            json_data={**extra_params, "PaymentId": payment_id},
        )

        logger.info("payment_link_requested", order_id=order_id, payment_id=payment_id, currency=currency)
        return await self.transport.get_payment_url(request.to_request())

    async def pay_by_token(
        self,
        token: str,
        amount: float,
        currency: str,
        account_id: str,
        order_id: Any = None,
        payment_id: Any = None,
        description: str = "",
        email: Optional[str] = None,
        ip: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Charge a saved card token. The provider reply is stored as the current
        response, so accessors (get_status, get_transaction_id, ...) describe it.
        """
        request = TokenChargeRequest(
            token=token,
            amount=float(amount),
            currency=currency,
            account_id=account_id,
            invoice_id=str(order_id) if order_id is not None else None,
            description=description,
            email=email,
            ip_address=ip or self.client_ip,
            json_data={"PaymentId": payment_id} if payment_id is not None else {},
        )
        logger.info("token_payment_requested", order_id=order_id, account_id=account_id)
        result = await self.cloudpayments_protocol.payment_by_token(request.to_request())
        self.set_response(result)
        return result

    def need_form(self) -> bool:
        # charged by API or by the client widget, never via a hosted form
        return False

    def get_payment_form(
        self,
        order_id: Any,
        payment_id: Any,
        amount: float,
        currency: str = CURRENCY_RUR,
        payment_type: str = PAYMENT_TYPE_CARD,
        success_url: str = "",
        fail_url: str = "",
        description: str = "",
        extra_params: Optional[Dict[str, Any]] = None,
        receipt: Optional[Receipt] = None,
    ) -> Form:
        return Form()

    def validate(self, data: Dict[str, Any]) -> bool:
        return True

    # ---- Notification ----
    def set_response(self, data: Mapping[str, Any]) -> "CloudPaymentsAdapter":
        self.response = dict(data)
        return self

    def get_response_param(self, name: str, default: Any = "") -> Any:
        return lookup(self.response, [name], default)

    def _model_or_top(self, name: str, default: Any = "") -> Any:
        return lookup(self.response, [f"Model.{name}", name], default)

    def get_param(self, name: str) -> Any:
        return self.get_response_param(name)

    def get_order_id(self) -> str:
        return str(self._model_or_top("InvoiceId"))

    def get_payment_id(self) -> str:
        data = lookup(self.response, ["Model.JsonData", "Data"], {})
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError:
                return ""
        if not isinstance(data, Mapping):
            return ""
        payment_id = data.get("PaymentId")
        return "" if payment_id is None else str(payment_id)

    def get_status(self) -> str:
        return str(self._model_or_top("Status"))

    def is_success(self) -> bool:
        value = self.get_response_param("Success", True)
        if isinstance(value, str):
            return value.strip().lower() in {"true", "1"}
        return bool(value)

    def get_transaction_id(self) -> str:
        return str(self._model_or_top("TransactionId"))

    def get_amount(self) -> float:
        value = self._model_or_top("Amount", 0)
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0

    def get_error_code(self) -> str:
        return str(self.get_response_param("Model.Message", ""))

    def get_provider(self) -> str:
        return PAYMENT_TYPE_CARD

    def get_pan(self) -> str:
        return f"{self._model_or_top('CardFirstSix')}{PAN_MASK}{self._model_or_top('CardLastFour')}"

    def get_date_time(self) -> str:
        return str(self._model_or_top("CreatedDateIso"))

    def get_last_error(self) -> int:
        return 0

    # ---- Acknowledgements ----
    def _map_error(self, error_code: Optional[int]) -> int:
        codes = {
            RESPONSE_SUCCESS: 0,
            RESPONSE_ERROR: 1,
        }
        return codes.get(error_code, codes[RESPONSE_ERROR])

    def get_notification_response(self, error_code: Optional[int] = RESPONSE_SUCCESS) -> JSONResponse:
        body = self.transport.get_notification_response(self.response, self._map_error(error_code))
        return JSONResponse(content=body)

    def get_check_response(self, error_code: Optional[int] = RESPONSE_SUCCESS) -> JSONResponse:
        # same body as notifications for now; CloudPayments "check" may diverge
        body = self.transport.get_notification_response(self.response, self._map_error(error_code))
        return JSONResponse(content=body)

    def get_options(self) -> List[PayServiceOption]:
        return [
            PayServiceOption(type=PayServiceOption.TYPE_STRING, label="Public Id", alias="publicId"),
            PayServiceOption(type=PayServiceOption.TYPE_STRING, label="Secret key", alias="secretKey"),
        ]

    # ---- Recurring schedules ----
    def schedule(self) -> Schedule:
        return Schedule()

    async def save_schedule(self, schedule: Schedule) -> str:
        if schedule.id:
            await self.cloudpayments_protocol.update_schedule(schedule.id, schedule.to_provider_dict())
            logger.info("schedule_updated", schedule_id=schedule.id)
        else:
            schedule.id = await self.cloudpayments_protocol.create_schedule(schedule.to_provider_dict())
            logger.info("schedule_created", schedule_id=schedule.id, account_id=schedule.account_id)
        return schedule.id

    async def remove_schedule(self, schedule_id: str) -> bool:
        removed = await self.cloudpayments_protocol.remove_schedule(schedule_id)
        logger.info("schedule_removed", schedule_id=schedule_id, removed=removed)
        return removed

    async def get_schedule(self, schedule_id: str) -> Schedule:
        return self._fill_schedule(await self.cloudpayments_protocol.get_schedule(schedule_id))

    async def get_all_schedules(self, account_id: Optional[str] = None) -> List[Schedule]:
        items = await self.cloudpayments_protocol.get_schedule_list(account_id)
        return [self._fill_schedule(item) for item in items]

    def _fill_schedule(self, data: Mapping[str, Any]) -> Schedule:
        model = data.get("Model")
        if isinstance(model, Mapping):
            data = model
        max_periods = data.get("MaxPeriods")
        return Schedule(
            period=data.get("Interval"),
            interval=data.get("Period"),
            id=data.get("Id"),
            max_payments=int(max_periods) if max_periods is not None else None,
            account_id=data.get("AccountId"),
            description=data.get("Description"),
            email=data.get("Email"),
            amount=data.get("Amount"),
            currency=data.get("Currency"),
            require_confirmation=bool(data.get("RequireConfirmation")),
            start_date=data.get("StartDateIso"),
        )
