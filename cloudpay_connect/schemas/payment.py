from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional, Any, ClassVar, Dict, List


# ====== Constants shared by pay services ======

PAYMENT_CLOUDPAYMENTS = "cloudpayments"

PAYMENT_TYPE_CARD = "card"

CURRENCY_RUR = "RUB"

# application-level codes passed to notification/check responses
RESPONSE_SUCCESS = 0
RESPONSE_ERROR = 1


# ====== Generic value objects ======

class Form(BaseModel):
    # hosted payment form; empty for providers that never need one
    action: str = ""
    method: str = "POST"
    fields: Dict[str, Any] = Field(default_factory=dict)


class Receipt(BaseModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    items: List[Dict[str, Any]] = Field(default_factory=list)
    model_config = {"extra": "allow"}


class PayServiceOption(BaseModel):
    """Settings field a pay service needs, described for a generic settings UI."""

    TYPE_STRING: ClassVar[str] = "string"

    type: str = "string"
    label: str
    alias: str


class Schedule(BaseModel):
    """
    Recurring payment definition. An empty id means the schedule is not yet
    stored at the provider.
    """

    PERIOD_DAY: ClassVar[str] = "Day"
    PERIOD_WEEK: ClassVar[str] = "Week"
    PERIOD_MONTH: ClassVar[str] = "Month"

    id: Optional[str] = None
    # unit (Day | Week | Month) and number of units between payments
    period: Optional[str] = None
    interval: Optional[int] = None
    max_payments: Optional[int] = None
    account_id: Optional[str] = None
    description: Optional[str] = None
    email: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    require_confirmation: bool = False
    start_date: Optional[datetime] = None
    # card token the provider charges on each run (create only)
    token: Optional[str] = None

    def set_period(self, period: str, interval: int) -> "Schedule":
        self.period = period
        self.interval = interval
        return self

    def to_provider_dict(self) -> Dict[str, Any]:
        # CloudPayments names the unit "Interval" and the count "Period"
        data = {
            "Id": self.id or None,
            "Token": self.token,
            "AccountId": self.account_id,
            "Description": self.description,
            "Email": self.email,
            "Amount": self.amount,
            "Currency": self.currency,
            "RequireConfirmation": self.require_confirmation,
            "StartDate": self.start_date.isoformat() if self.start_date else None,
            "Interval": self.period,
            "Period": self.interval,
            "MaxPeriods": self.max_payments,
        }
        return {k: v for k, v in data.items() if v is not None}
