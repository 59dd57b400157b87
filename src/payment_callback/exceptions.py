"""Exceptions raised while reconciling a payment redirect."""


class PaymentCallbackError(Exception):
    """Base exception for payment callback errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class CallbackParseError(PaymentCallbackError):
    """Raised when redirect parameters cannot be turned into a canonical result."""


class UnrecognizedGatewayError(CallbackParseError):
    """Raised when the redirect matches neither gateway, or matches both."""

    def __init__(self, message: str = "Unrecognized payment gateway callback"):
        super().__init__(message)


class MissingFieldError(CallbackParseError):
    """Raised when a required redirect parameter is absent."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Missing required field: {field_name}")


class MalformedAmountError(CallbackParseError):
    """Raised when an amount is not a non-negative integer in the gateway's encoding."""

    def __init__(self, field_name: str, value: str):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Malformed amount in {field_name}: {value!r}")


class SignatureVerificationError(CallbackParseError):
    """Raised when the redirect signature is missing or does not match."""

    def __init__(self, message: str = "Signature verification failed"):
        super().__init__(message)


class BackendConfirmationError(PaymentCallbackError):
    """Base exception for order backend confirmation errors."""


class BackendTransportError(BackendConfirmationError):
    """Raised when the backend cannot be reached, times out, or answers garbage."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class BackendRejectedError(BackendConfirmationError):
    """Raised when the backend explicitly refuses the confirmation (HTTP 4xx)."""

    def __init__(self, message: str, status_code: int):
        self.status_code = status_code
        super().__init__(message)


class InvalidStateTransition(PaymentCallbackError):
    """Raised when a terminal callback state is asked to transition again."""
