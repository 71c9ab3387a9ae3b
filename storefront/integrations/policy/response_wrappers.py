from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from storefront.integrations.contracts.interfaces import Product, RawCartLine
from storefront.integrations.errors import MalformedResponse

DEFAULT_ERROR_MESSAGE = (
    "Something went wrong. Check that the backend is running, reachable and returns valid JSON."
)


class ProductModel(BaseModel):
    id: str = Field(min_length=1)
    name: str
    category: str = ""
    cost: float = Field(gt=0)
    rating: int = Field(default=0, ge=0, le=5)
    image_url: str = ""


class CartLineModel(BaseModel):
    product_id: str = Field(min_length=1)
    qty: int = Field(gt=0)


class ErrorBodyModel(BaseModel):
    success: bool = False
    message: Optional[str] = None


def normalize_products(raw: Any) -> List[Product]:
    """Validate a ``Product[]`` body and convert it to contracts."""
    items = _require_list(raw, "product list")
    products: List[Product] = []
    for item in items:
        data = _require_dict(item, "product")
        model = _build_model(
            ProductModel,
            {
                "id": str(_first_non_empty(data, "_id", "id", "productId")),
                "name": _first_non_empty(data, "name", "title"),
                "category": _first_non_empty(data, "category", default=""),
                "cost": _first_non_empty(data, "cost", "price"),
                "rating": _first_non_empty(data, "rating", default=0),
                "image_url": _first_non_empty(data, "image", "imageUrl", "image_url", default=""),
            },
            data,
        )
        products.append(Product(**model.model_dump()))
    return products


def normalize_cart_lines(raw: Any) -> List[RawCartLine]:
    """Validate a ``RawCartLine[]`` body and convert it to contracts."""
    items = _require_list(raw, "cart")
    lines: List[RawCartLine] = []
    for item in items:
        data = _require_dict(item, "cart line")
        model = _build_model(
            CartLineModel,
            {
                "product_id": str(_first_non_empty(data, "productId", "product_id")),
                "qty": _first_non_empty(data, "qty", "quantity"),
            },
            data,
        )
        lines.append(RawCartLine(**model.model_dump()))
    return lines


def extract_error_message(raw: Any, default: str = DEFAULT_ERROR_MESSAGE) -> str:
    """Pull ``message`` out of an error body, falling back to ``default``."""
    if not isinstance(raw, dict):
        return default
    try:
        body = ErrorBodyModel(**raw)
    except ValidationError:
        return default
    message = (body.message or "").strip()
    return message or default


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise MalformedResponse(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)


def _require_list(raw: Any, label: str) -> List[Any]:
    if not isinstance(raw, list):
        raise MalformedResponse(f"Expected a JSON array for {label}; got {type(raw).__name__}.")
    return raw


def _require_dict(raw: Any, label: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise MalformedResponse(f"Expected a JSON object for {label}; got {type(raw).__name__}.")
    return raw


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise MalformedResponse(f"Response validation failed: {exc}", payload=raw) from exc
