from typing import Optional


class PaywallError(Exception):
    """Base class for every error raised by the paywall."""


class ConfigurationError(PaywallError):
    """Required configuration is missing or invalid. Fatal at startup."""


class ProviderError(PaywallError):
    def __init__(self, message: str, status_code: Optional[int] = None, detail=None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class ProviderAuthError(ProviderError):
    pass


class ProviderRequestError(ProviderError):
    pass


class TransactionError(PaywallError):
    """An error surfaced to API callers as ``{"error": public_message}``."""

    status_code = 400
    public_message = "Invalid request."


class UnknownProductError(TransactionError):
    public_message = "Invalid product."


class InvalidRequestError(TransactionError):
    public_message = "Invalid data."


class PaymentVerificationFailed(TransactionError):
    public_message = "Invalid or incomplete payment."


class PaymentCreateError(TransactionError):
    status_code = 500
    public_message = "Error creating PayPal order."


class PaymentCaptureError(TransactionError):
    status_code = 500
    public_message = "Error capturing payment."


class CredentialInvalid(PaywallError):
    """The access credential is absent, forged, expired or for another tier."""
