"""Shared fixtures: a recording CloudPayments transport and adapters built on it."""

from typing import Any, Dict, List, Optional

import pytest

from cloudpay_connect.providers.cloudpayments.adapter import CloudPaymentsAdapter
from cloudpay_connect.providers.cloudpayments.schemas import CloudPaymentsConfig


class RecordingProtocol:
    """
    In-memory stand-in for CloudPaymentsProtocol.

    Records every call as (method, args) and answers with canned data.
    """

    def __init__(
        self,
        payment_url: str = "https://3ds.example.com/acs",
        schedule_id: str = "sc_8cf8a9338fb8ebf7202b08d09c938",
        schedules: Optional[List[Dict[str, Any]]] = None,
    ):
        self.payment_url = payment_url
        self.schedule_id = schedule_id
        self.schedules = schedules or []
        self.token_response: Dict[str, Any] = {"Success": True, "Message": None, "Model": {}}
        self.calls: List[tuple] = []

    async def get_payment_url(self, request: Dict[str, Any]) -> str:
        self.calls.append(("get_payment_url", request))
        return self.payment_url

    def get_notification_response(self, payload: Dict[str, Any], error_code: int) -> Dict[str, Any]:
        self.calls.append(("get_notification_response", payload, error_code))
        return {"code": error_code}

    async def payment_by_token(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("payment_by_token", data))
        return self.token_response

    async def create_schedule(self, data: Dict[str, Any]) -> str:
        self.calls.append(("create_schedule", data))
        return self.schedule_id

    async def update_schedule(self, schedule_id: str, data: Dict[str, Any]) -> bool:
        self.calls.append(("update_schedule", schedule_id, data))
        return True

    async def remove_schedule(self, schedule_id: str) -> bool:
        self.calls.append(("remove_schedule", schedule_id))
        return True

    async def get_schedule(self, schedule_id: str) -> Dict[str, Any]:
        self.calls.append(("get_schedule", schedule_id))
        return {"Success": True, "Model": self.schedules[0]}

    async def get_schedule_list(self, account_id: Optional[str] = None) -> List[Dict[str, Any]]:
        self.calls.append(("get_schedule_list", account_id))
        return list(self.schedules)

    def methods(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def config() -> CloudPaymentsConfig:
    return CloudPaymentsConfig(
        public_id="pk_test_public",
        secret_key="test_secret",
        account_id="merchant-account-1",
    )


@pytest.fixture
def protocol() -> RecordingProtocol:
    return RecordingProtocol()


@pytest.fixture
def adapter(config: CloudPaymentsConfig, protocol: RecordingProtocol) -> CloudPaymentsAdapter:
    return CloudPaymentsAdapter(config, protocol, client_ip="203.0.113.7")


@pytest.fixture
def widget_adapter(config: CloudPaymentsConfig, protocol: RecordingProtocol) -> CloudPaymentsAdapter:
    widget_config = config.model_copy(update={"use_widget": True})
    return CloudPaymentsAdapter(widget_config, protocol)


@pytest.fixture
def subscription_model() -> Dict[str, Any]:
    """Subscription as returned in CloudPayments /subscriptions/get Model."""
    return {
        "Id": "sc_8cf8a9338fb8ebf7202b08d09c938",
        "AccountId": "user@example.com",
        "Description": "Monthly subscription",
        "Email": "user@example.com",
        "Amount": 1.02,
        "CurrencyCode": 0,
        "Currency": "RUB",
        "RequireConfirmation": False,
        "StartDateIso": "2014-08-09T11:49:41",
        "IntervalCode": 1,
        "Interval": "Month",
        "Period": 1,
        "MaxPeriods": 12,
        "StatusCode": 0,
        "Status": "Active",
    }
