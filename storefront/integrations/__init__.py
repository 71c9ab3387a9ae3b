"""
Integrations layer.
This package contains all code used to communicate with the remote services:
- Catalog service (full catalog and search)
- Cart service (persisted cart and cart mutations)

Key rule:
- The orchestrator MUST NOT build HTTP requests itself.
- It calls integration clients (under storefront/integrations/clients).
- MOCK clients are used during development and tests; REAL_HTTP clients talk to the backend.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (storefront.orchestrator.build_orchestrator).
"""

from .contracts.interfaces import (
    CartClient,
    CartEntry,
    CatalogClient,
    Notice,
    NoticeVariant,
    OperationClass,
    OrderSummary,
    Product,
    RawCartLine,
    SessionAuth,
    StorefrontView,
)
from .errors import (
    CartFetchError,
    CartMutationError,
    CatalogFetchError,
    EndpointNotConfigured,
    IntegrationError,
    MalformedResponse,
    NetworkUnavailable,
    NotFound,
    PreconditionRejected,
    ServerError,
    StorefrontError,
    Unauthorized,
)

__all__ = [
    # contracts
    "Product", "RawCartLine", "CartEntry", "SessionAuth", "Notice",
    "NoticeVariant", "OperationClass", "OrderSummary", "StorefrontView",
    "CatalogClient", "CartClient",
    # errors
    "StorefrontError", "IntegrationError", "NetworkUnavailable", "ServerError",
    "Unauthorized", "MalformedResponse", "EndpointNotConfigured", "NotFound", "PreconditionRejected",
    "CatalogFetchError", "CartFetchError", "CartMutationError",
]
