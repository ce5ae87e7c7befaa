"""
Domain exceptions for the marketplace core.

Services raise these; app.main turns them into JSON error responses.
Ownership failures are reported as NotFoundError so callers cannot probe
for records that belong to someone else.
"""
from typing import Optional


class MarketplaceError(Exception):
    """Base class for errors the API reports to clients."""
    status_code = 500
    error = "internal_error"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"detail": self.message, "error": self.error}


class NotFoundError(MarketplaceError):
    status_code = 404
    error = "not_found"
    default_message = "Resource not found"


class InvalidReferenceError(MarketplaceError):
    """Hiring record does not allow a review (wrong owner, employee or status)."""
    status_code = 400
    error = "invalid_reference"
    default_message = "Invalid hiring record or hiring not completed"


class DuplicateReviewError(MarketplaceError):
    status_code = 400
    error = "duplicate_review"
    default_message = "This hiring record has already been reviewed"


class InvalidTransitionError(MarketplaceError):
    status_code = 409
    error = "invalid_transition"
    default_message = "Status transition not allowed"

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change hiring status from '{current}' to '{requested}'")


class ConflictError(MarketplaceError):
    status_code = 409
    error = "conflict"
    default_message = "Resource already exists"


class AggregateUpdateError(MarketplaceError):
    """Rating aggregate could not be recomputed; the review change was rolled back."""
    status_code = 500
    error = "aggregate_update_failed"
    default_message = "Failed to update employee rating"


class InvalidPasswordError(MarketplaceError):
    status_code = 400
    error = "invalid_password"
    default_message = "Current password is incorrect"
