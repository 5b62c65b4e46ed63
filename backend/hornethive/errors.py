"""
Identity Errors
Typed failures for the signup, login, approval and account lookup workflows.

Workflows raise these internally and hand them back inside a Result at their
public boundary. The HTTP layer maps each error to its status code.
"""

import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure kinds the transport layer can tell apart."""
    DUPLICATE_EMAIL = "duplicate_email"
    ACCOUNT_NOT_FOUND = "account_not_found"
    PENDING_APPROVAL = "pending_approval"
    INCORRECT_PASSWORD = "incorrect_password"
    STORE_ERROR = "store_error"
    NOT_FOUND = "not_found"
    NOTIFICATION_FAILED = "notification_failed"


class IdentityError(Exception):
    """Base exception for all identity workflow failures."""

    def __init__(self, message: str, kind: ErrorKind, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.http_status = http_status

    def to_response(self) -> dict:
        return {"error": self.message, "code": self.kind.value}


class DuplicateEmailError(IdentityError):
    def __init__(self, message: str = "Email already registered"):
        super().__init__(message, ErrorKind.DUPLICATE_EMAIL, 400)


class AccountNotFoundError(IdentityError):
    def __init__(self, message: str = "No account found"):
        super().__init__(message, ErrorKind.ACCOUNT_NOT_FOUND, 401)


class PendingApprovalError(IdentityError):
    """Account exists but an administrator has not approved it yet."""
    def __init__(self, message: str = "Account awaiting approval"):
        super().__init__(message, ErrorKind.PENDING_APPROVAL, 403)


class IncorrectPasswordError(IdentityError):
    def __init__(self, message: str = "Incorrect password"):
        super().__init__(message, ErrorKind.INCORRECT_PASSWORD, 401)


class StoreError(IdentityError):
    """The user store failed; message carries the underlying detail."""
    def __init__(self, detail: str):
        super().__init__(detail, ErrorKind.STORE_ERROR, 500)
        self.detail = detail


class NotFoundError(IdentityError):
    def __init__(self, message: str = "User not found"):
        super().__init__(message, ErrorKind.NOT_FOUND, 404)


class NotificationError(IdentityError):
    def __init__(self, message: str):
        super().__init__(message, ErrorKind.NOTIFICATION_FAILED, 502)


@dataclass
class Result(Generic[T]):
    """Outcome of a workflow call: either a value or an IdentityError."""
    value: Optional[T] = None
    error: Optional[IdentityError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: IdentityError) -> "Result[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.value


def returns_result(method: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[Result[T]]]:
    """
    Wrap an async workflow method so that it returns a Result instead of
    raising. Unexpected exceptions are logged and reported as StoreError.
    """
    @functools.wraps(method)
    async def wrapper(*args, **kwargs) -> Result[T]:
        try:
            return Result.success(await method(*args, **kwargs))
        except IdentityError as e:
            return Result.failure(e)
        except Exception as e:
            logger.exception(f"Unexpected failure in {method.__qualname__}")
            return Result.failure(StoreError(str(e)))
    return wrapper
