"""Recharge domain specific exceptions."""


class RechargeError(Exception):
    """Base class for recharge domain errors."""


class RechargeValidationError(RechargeError):
    """Raised when a submission or admin action carries malformed input."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class DuplicateTransactionError(RechargeError):
    """Raised when the external transaction id has already been submitted."""


class RechargeNotFoundError(RechargeError):
    """Raised when the requested recharge request does not exist."""


class RechargeAlreadyProcessedError(RechargeError):
    """Raised when approving or rejecting a request that is no longer pending."""
