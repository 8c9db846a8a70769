from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Any, Dict

from ...settings import Settings, settings as default_settings


class CloudPaymentsConfig(BaseModel):
    public_id: str = ""
    secret_key: str = ""
    account_id: Optional[str] = None
    use_widget: bool = False
    base_url: str = "https://api.cloudpayments.ru"

    @classmethod
    def from_settings(cls, s: Optional[Settings] = None) -> "CloudPaymentsConfig":
        s = s or default_settings
        return cls(
            public_id=s.CLOUDPAYMENTS_PUBLIC_ID,
            secret_key=s.CLOUDPAYMENTS_SECRET_KEY,
            account_id=s.CLOUDPAYMENTS_ACCOUNT_ID,
            use_widget=s.CLOUDPAYMENTS_USE_WIDGET,
            base_url=s.CLOUDPAYMENTS_BASE_URL,
        )


# ====== Requests to CloudPayments ======

class ChargeRequest(BaseModel):
    """POST /payments/cards/charge body (card cryptogram packet)."""

    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = Field(default=None, alias="Email")
    amount: float = Field(alias="Amount")
    currency: str = Field(alias="Currency")
    invoice_id: Optional[str] = Field(default=None, alias="InvoiceId")
    description: str = Field(default="", alias="Description")
    account_id: Optional[str] = Field(default=None, alias="AccountId")
    name: str = Field(alias="Name")
    card_cryptogram_packet: str = Field(alias="CardCryptogramPacket")
    ip_address: str = Field(default="", alias="IpAddress")
    json_data: Dict[str, Any] = Field(default_factory=dict, alias="JsonData")

    def to_request(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TokenChargeRequest(BaseModel):
    """POST /payments/tokens/charge body (saved card token)."""

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(alias="Token")
    amount: float = Field(alias="Amount")
    currency: str = Field(alias="Currency")
    account_id: str = Field(alias="AccountId")
    invoice_id: Optional[str] = Field(default=None, alias="InvoiceId")
    description: str = Field(default="", alias="Description")
    email: Optional[str] = Field(default=None, alias="Email")
    ip_address: Optional[str] = Field(default=None, alias="IpAddress")
    json_data: Dict[str, Any] = Field(default_factory=dict, alias="JsonData")

    def to_request(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
