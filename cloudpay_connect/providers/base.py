from typing import Protocol, Optional, Dict, Any, List, runtime_checkable

from ..schemas.payment import Form, PayServiceOption, Receipt, Schedule


@runtime_checkable
class PayProtocol(Protocol):
    """Transport that talks to a provider's HTTP API."""

    async def get_payment_url(self, request: Dict[str, Any]) -> str:
        ...

    def get_notification_response(self, payload: Dict[str, Any], error_code: int) -> Dict[str, Any]:
        ...


@runtime_checkable
class CloudPaymentProtocol(PayProtocol, Protocol):

    async def payment_by_token(self, data: Dict[str, Any]) -> Dict[str, Any]:
        ...

    async def create_schedule(self, data: Dict[str, Any]) -> str:
        ...

    async def update_schedule(self, schedule_id: str, data: Dict[str, Any]) -> bool:
        ...

    async def remove_schedule(self, schedule_id: str) -> bool:
        ...

    async def get_schedule(self, schedule_id: str) -> Dict[str, Any]:
        ...

    async def get_schedule_list(self, account_id: Optional[str] = None) -> List[Dict[str, Any]]:
        ...


@runtime_checkable
class PayService(Protocol):
    name: str

    def get_name(self) -> str:
        ...

    async def get_payment_link(
        self,
        order_id: Any,
        payment_id: Any,
        amount: float,
        currency: str = ...,
        payment_type: str = ...,
        success_url: str = "",
        fail_url: str = "",
        description: str = "",
        extra_params: Optional[Dict[str, Any]] = None,
        receipt: Optional[Receipt] = None,
    ) -> str:
        ...

    def need_form(self) -> bool:
        ...

    def get_payment_form(
        self,
        order_id: Any,
        payment_id: Any,
        amount: float,
        currency: str = ...,
        payment_type: str = ...,
        success_url: str = "",
        fail_url: str = "",
        description: str = "",
        extra_params: Optional[Dict[str, Any]] = None,
        receipt: Optional[Receipt] = None,
    ) -> Form:
        ...

    def validate(self, data: Dict[str, Any]) -> bool:
        ...

    def set_response(self, data: Dict[str, Any]) -> "PayService":
        ...

    # ---- notification accessors ----
    def get_order_id(self) -> str:
        ...

    def get_payment_id(self) -> str:
        ...

    def get_status(self) -> str:
        ...

    def is_success(self) -> bool:
        ...

    def get_transaction_id(self) -> str:
        ...

    def get_amount(self) -> float:
        ...

    def get_error_code(self) -> str:
        ...

    def get_provider(self) -> str:
        ...

    def get_pan(self) -> str:
        ...

    def get_date_time(self) -> str:
        ...

    def get_last_error(self) -> int:
        ...

    def get_param(self, name: str) -> Any:
        ...

    def get_notification_response(self, error_code: int = ...) -> Any:
        ...

    def get_check_response(self, error_code: int = ...) -> Any:
        ...

    def get_options(self) -> List[PayServiceOption]:
        ...


@runtime_checkable
class RecurringPaymentSchedule(Protocol):

    def schedule(self) -> Schedule:
        ...

    async def save_schedule(self, schedule: Schedule) -> str:
        ...

    async def remove_schedule(self, schedule_id: str) -> bool:
        ...

    async def get_schedule(self, schedule_id: str) -> Schedule:
        ...

    async def get_all_schedules(self, account_id: Optional[str] = None) -> List[Schedule]:
        ...
