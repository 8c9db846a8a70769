from pydantic import BaseModel, Field
from typing import Optional, Any, Dict

from .payment import CURRENCY_RUR, PAYMENT_TYPE_CARD, Receipt


# ====== Input ======

class PaymentLinkIn(BaseModel):
    order_id: str
    payment_id: str
    amount: float
    currency: str = CURRENCY_RUR
    payment_type: str = PAYMENT_TYPE_CARD
    success_url: str = ""
    fail_url: str = ""
    description: str = ""
    # checkout (card cryptogram packet), cardholder_name, email, ip, ...
    extra_params: Dict[str, Any] = Field(default_factory=dict)
    receipt: Optional[Receipt] = None


class TokenPaymentIn(BaseModel):
    token: str
    amount: float
    currency: str = CURRENCY_RUR
    account_id: str
    order_id: Optional[str] = None
    payment_id: Optional[str] = None
    description: str = ""
    email: Optional[str] = None


# ====== Output ======

class PaymentLinkOut(BaseModel):
    url: str
    need_form: bool = False


class PaymentResultOut(BaseModel):
    success: bool
    status: str
    order_id: str
    payment_id: str
    transaction_id: str
    amount: float
    pan: str
    message: str
    raw: Optional[Dict[str, Any]] = None


class ScheduleSavedOut(BaseModel):
    id: str


class ScheduleRemovedOut(BaseModel):
    id: str
    removed: bool
