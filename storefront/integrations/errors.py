"""
Error taxonomy for catalog and cart integrations.

Concrete failure kinds (NetworkUnavailable, ServerError, Unauthorized,
MalformedResponse) say *what* went wrong; the operation mixins
(CatalogFetchError, CartFetchError, CartMutationError) say *where*. The
``classify`` helper combines both so callers can catch either axis.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Type


class StorefrontError(Exception):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload or {}


class IntegrationError(StorefrontError):
    """A remote call failed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, payload=payload)
        self.status_code = status_code


class NetworkUnavailable(IntegrationError):
    """No response at all: DNS, refused connection, timeout."""


class ServerError(IntegrationError):
    """Non-2xx response."""


class Unauthorized(IntegrationError):
    """Cart endpoint called without a valid bearer token."""


class MalformedResponse(IntegrationError):
    """2xx response whose body did not match the expected schema."""


class EndpointNotConfigured(IntegrationError):
    """No base URL for the storefront service; nothing was sent."""


class NotFound(StorefrontError):
    """Search returned no matches. A valid empty state, not a failure."""


class PreconditionRejected(StorefrontError):
    """A mutation was refused locally before any network call."""

    def __init__(self, message: str, *, reason: str, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, payload=payload)
        self.reason = reason


# -- operation mixins --------------------------------------------------------

class CatalogFetchError(IntegrationError):
    pass


class CartFetchError(IntegrationError):
    pass


class CartMutationError(IntegrationError):
    pass


_CLASSIFIED: Dict[tuple, Type[IntegrationError]] = {}


def classify(kind: Type[IntegrationError], operation: Type[IntegrationError]) -> Type[IntegrationError]:
    """Return a class deriving from both ``kind`` and ``operation``.

    ``classify(Unauthorized, CartFetchError)`` is caught by ``except Unauthorized``
    as well as ``except CartFetchError``. Classes are cached so repeated calls
    return the same type.
    """
    key = (kind, operation)
    cls = _CLASSIFIED.get(key)
    if cls is None:
        cls = type(f"{operation.__name__[:-len('Error')]}{kind.__name__}", (kind, operation), {})
        _CLASSIFIED[key] = cls
    return cls
