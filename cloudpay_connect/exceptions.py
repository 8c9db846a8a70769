"""Exceptions raised by provider adapters and transports."""

from typing import Any, Dict, Optional


class PaymentGatewayError(Exception):
    """Base exception for payment gateway errors."""

    pass


class MissingParameter(PaymentGatewayError, ValueError):
    """
    Raised when a charge request lacks a required extra parameter.

    Raised before any provider call is made.
    """

    def __init__(self, *names: str):
        self.names = names
        super().__init__(f"{' and '.join(names)} params are required")


class ProviderError(PaymentGatewayError):
    """
    Raised by a transport when the provider answers with Success=false.

    Network and HTTP status failures are not wrapped; they surface as httpx errors.
    """

    def __init__(self, message: str, response: Optional[Dict[str, Any]] = None):
        self.message = message
        self.response = response or {}
        super().__init__(message)
