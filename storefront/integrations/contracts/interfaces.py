from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class NoticeVariant(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"
    INFO = "info"


class OperationClass(str, Enum):
    # Full catalog snapshot used for reconciliation.
    CATALOG = "catalog"
    # Products shown in the grid: the snapshot or a search result.
    DISPLAY = "display"
    CART = "cart"


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Product:
    id: str
    name: str
    category: str
    cost: float                          # > 0
    rating: int                          # 0..5
    image_url: str = ""


@dataclass(frozen=True)
class RawCartLine:
    product_id: str
    qty: int                             # > 0

    def to_payload(self) -> Dict[str, Any]:
        return {"productId": self.product_id, "qty": self.qty}


@dataclass(frozen=True)
class CartEntry:
    id: str
    name: str
    category: str
    cost: float
    rating: int
    image_url: str
    qty: int

    @classmethod
    def from_product(cls, product: Product, qty: int) -> "CartEntry":
        return cls(
            id=product.id,
            name=product.name,
            category=product.category,
            cost=product.cost,
            rating=product.rating,
            image_url=product.image_url,
            qty=qty,
        )


@dataclass(frozen=True)
class SessionAuth:
    """Credentials handed over by the login flow.

    Only ``token`` is used for authorization; ``username`` and ``balance``
    ride along for display.
    """
    token: Optional[str] = None
    username: Optional[str] = None
    balance: Optional[float] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.token.strip())

    @classmethod
    def guest(cls) -> "SessionAuth":
        return cls()


@dataclass
class Notice:
    message: str
    variant: NoticeVariant = NoticeVariant.INFO
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class OrderSummary:
    products: int
    subtotal: float
    shipping: float
    total: float


@dataclass(frozen=True)
class StorefrontView:
    """Read-only snapshot handed to the view layer."""
    products: List[Product]
    cart_items: List[CartEntry]
    is_loading: bool
    is_authenticated: bool
    total_value: float
    total_count: int

    @property
    def is_empty_result(self) -> bool:
        return not self.is_loading and not self.products


# ---------------------------------------------------------------------------
# Abstract client interfaces
# ---------------------------------------------------------------------------

class CatalogClient(ABC):
    """Every catalog source (HTTP or mock) must implement this interface."""

    @abstractmethod
    async def fetch_catalog(self) -> List[Product]:
        """Return the full, unfiltered catalog."""

    @abstractmethod
    async def search_catalog(self, query: str) -> List[Product]:
        """Return products matching ``query``; an empty list when nothing matches."""


class CartClient(ABC):
    """Every cart backend (HTTP or mock) must implement this interface."""

    @abstractmethod
    async def fetch_cart(self, session: SessionAuth) -> Optional[List[RawCartLine]]:
        """Return the persisted cart, or None for guests without calling out."""

    @abstractmethod
    async def mutate_cart(self, session: SessionAuth, product_id: str, qty: int) -> List[RawCartLine]:
        """Upsert one line and return the full authoritative cart."""


def product_index(catalog: Sequence[Product]) -> Dict[str, Product]:
    """Map product id -> product; the first occurrence wins on duplicate ids."""
    index: Dict[str, Product] = {}
    for product in catalog:
        index.setdefault(product.id, product)
    return index
