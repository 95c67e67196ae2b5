"""Error codes and exceptions surfaced to callers."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Codes for failures that block an action locally."""

    LOGIN_REQUIRED = "LOGIN_REQUIRED"
    EMPTY_SELECTION = "EMPTY_SELECTION"
    TERMS_NOT_ACCEPTED = "TERMS_NOT_ACCEPTED"
    NO_CATEGORY = "NO_CATEGORY"
    INCOMPLETE_BUYER = "INCOMPLETE_BUYER"
    VOTE_LOCKED = "VOTE_LOCKED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class CheckoutError(DomainError):
    """A checkout could not be started."""


class AuthenticationRequired(CheckoutError):
    """Raised when checkout is attempted without a logged-in user.

    The selection has been saved for restore after login, when a store
    was available.
    """

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.LOGIN_REQUIRED, message="Login required")


class InvalidSelection(CheckoutError):
    """Raised when the selection cannot be purchased as it stands."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(code=code, message=message)


class VoteLocked(DomainError):
    """Raised when a judge tries to change a final vote."""

    def __init__(self, vote_id: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.VOTE_LOCKED,
            message="This vote is final and can no longer be changed",
        )
        self.vote_id = vote_id


class BackendError(Exception):
    """A call to the backend service failed.

    Attributes:
        message: Message to show the user (the backend's own, when it sent one)
        status_code: HTTP status, or None for transport failures
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StaleSlotReference(BackendError):
    """The purchase backend rejected the selected slots.

    Usually another buyer claimed one of them first.
    """
