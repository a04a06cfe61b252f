"""
Business-rule violations raised by the rental card aggregate.
"""

from rental.utils.error_handling import AppError, ErrorSeverity


class RentalCardError(AppError):
    """Base class for rental card rule violations."""

    def __init__(self, message: str, **details):
        super().__init__(message, severity=ErrorSeverity.WARNING, details=details)


class StatusConflictError(RentalCardError):
    """The card's status forbids the operation."""


class LimitExceededError(RentalCardError):
    """The card already holds the maximum number of active items."""


class ItemNotFoundError(RentalCardError):
    """The item is not currently rented on this card."""


class OutstandingItemsRemainError(RentalCardError):
    """The card cannot be unblocked while items are still rented."""


class PaymentMismatchError(RentalCardError):
    """The payment does not exactly match the outstanding late fee."""
