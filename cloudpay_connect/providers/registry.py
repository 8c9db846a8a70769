from typing import Callable, Dict, Optional

from .cloudpayments.adapter import CloudPaymentsAdapter
from .cloudpayments.protocol import CloudPaymentsProtocol
from .cloudpayments.schemas import CloudPaymentsConfig


def build_cloudpayments_adapter(client_ip: Optional[str] = None) -> CloudPaymentsAdapter:
    config = CloudPaymentsConfig.from_settings()
    return CloudPaymentsAdapter(config, CloudPaymentsProtocol(config), client_ip=client_ip)


# Adapters hold the current notification, so the registry keeps factories
# and every request gets its own instance
_registry: Dict[str, Callable[..., CloudPaymentsAdapter]] = {
    "CloudPayments": build_cloudpayments_adapter,
}

# Alias names → canonical registry keys
_aliases = {
    "cloudpayments": "CloudPayments",
    "cloud_payments": "CloudPayments",
    "cloud-payments": "CloudPayments",
    "cp": "CloudPayments",
}

def get_provider_by_name(name: str | None, client_ip: Optional[str] = None):
    if not name:
        return None
    key = _aliases.get(name.strip().lower(), name)
    factory = _registry.get(key)
    return factory(client_ip=client_ip) if factory else None

def resolve_provider_by_payment_method(payment_method: str | None, client_ip: Optional[str] = None):
    if not payment_method:
        return None
    pm = payment_method.strip().upper()
    if "CARD" in pm:
        return _registry["CloudPayments"](client_ip=client_ip)
    return None
