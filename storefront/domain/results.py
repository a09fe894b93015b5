"""
Explicit outcome values for gateway operations.

Every gateway call returns either ``Ok`` wrapping the normalized value or
one failure value from the taxonomy below. Failures are plain immutable
values; ``unwrap()`` converts them into the matching application exception
at the HTTP boundary.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from storefront.utils.error_handler import (
    AppException,
    CartOperationException,
    ShopifyAPIException,
    ShopifyTransportException,
    ValidationException,
)

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))

    def unwrap(self) -> T:
        return self.value


class _FailureMixin:
    """Shared behaviour of failure values."""

    @property
    def is_ok(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]):
        return self

    def to_exception(self) -> AppException:  # pragma: no cover - overridden
        raise NotImplementedError

    def unwrap(self):
        raise self.to_exception()


@dataclass(frozen=True)
class TransportFailure(_FailureMixin):
    """The network call did not complete or its payload could not be decoded."""

    cause: str
    query: Optional[str] = None

    def to_exception(self) -> AppException:
        return ShopifyTransportException(
            message=f"Storefront API call failed: {self.cause}",
            cause=self.cause,
            query=self.query,
        )


@dataclass(frozen=True)
class BackendError(_FailureMixin):
    """The call completed but the backend reported errors (first one kept)."""

    message: str
    cause: str = "unknown"
    status: int = 500
    query: Optional[str] = None

    def to_exception(self) -> AppException:
        return ShopifyAPIException(
            message=self.message,
            api_response_code=self.status,
            cause=self.cause,
            query=self.query,
        )


@dataclass(frozen=True)
class ValidationFailure(_FailureMixin):
    """The caller supplied malformed variables; no network call was made."""

    message: str
    field: str = "variables"

    def to_exception(self) -> AppException:
        return ValidationException(message=self.message, field=self.field)


@dataclass(frozen=True)
class CartActionFailure(_FailureMixin):
    """Opaque cart write failure; never carries backend internals."""

    message: str = "Error adding item to cart"

    def to_exception(self) -> AppException:
        return CartOperationException(message=self.message)


Failure = Union[TransportFailure, BackendError, ValidationFailure, CartActionFailure]
Result = Union[Ok[T], TransportFailure, BackendError, ValidationFailure]
