"""
Development catalog/cart service.

Serves the JSON protocol the engine consumes, from memory, so the demo script
and the HTTP client tests can run without the real backend:

- GET  /products
- GET  /products/search?value=<q>   (404 when nothing matches)
- GET  /cart                        (Bearer token)
- POST /cart {productId, qty}       (Bearer token, answers with the full cart)

Not a production backend: carts live in process memory and are lost on
restart.

Run standalone:
  uvicorn storefront.api.dev_server:app --port 8082
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from fastapi import APIRouter, FastAPI, Header, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from storefront.integrations.clients.mocks.catalog import SEED_PRODUCTS
from storefront.integrations.contracts.interfaces import Product, RawCartLine

logger = logging.getLogger(__name__)

DEFAULT_TOKENS = ("dev-token",)


class CartUpdateRequest(BaseModel):
    productId: str = Field(..., min_length=1)
    qty: int


class DevStore:
    """In-memory state behind the dev app; exposed on ``app.state.store``."""

    def __init__(self, products: Iterable[Product], tokens: Iterable[str]):
        self.products: List[Product] = list(products)
        self.tokens = set(tokens)
        self.carts: Dict[str, List[RawCartLine]] = {}
        self.fail_search = False

    def product_payload(self, product: Product) -> Dict[str, object]:
        return {
            "_id": product.id,
            "name": product.name,
            "category": product.category,
            "cost": product.cost,
            "rating": product.rating,
            "image": product.image_url,
        }

    def cart_payload(self, token: str) -> List[Dict[str, object]]:
        return [line.to_payload() for line in self.carts.get(token, [])]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer "):].strip()
    return token or None


router = APIRouter()


@router.get("/products")
async def list_products(request: Request):
    store: DevStore = request.app.state.store
    return [store.product_payload(p) for p in store.products]


@router.get("/products/search")
async def search_products(request: Request, value: str = Query(default="")):
    store: DevStore = request.app.state.store
    if store.fail_search:
        return _error(500, "Something went wrong. Check the backend console for more details")
    needle = value.strip().lower()
    matches = [p for p in store.products if needle in p.name.lower() or needle in p.category.lower()]
    if not matches:
        return _error(404, "No products found")
    return [store.product_payload(p) for p in matches]


@router.get("/cart")
async def get_cart(request: Request, authorization: Optional[str] = Header(default=None)):
    store: DevStore = request.app.state.store
    token = _bearer(authorization)
    if token is None or token not in store.tokens:
        return _error(401, "Protected route, Oauth2 Bearer token not found")
    return store.cart_payload(token)


@router.post("/cart")
async def update_cart(
    request: Request,
    body: CartUpdateRequest,
    authorization: Optional[str] = Header(default=None),
):
    store: DevStore = request.app.state.store
    token = _bearer(authorization)
    if token is None or token not in store.tokens:
        return _error(401, "Protected route, Oauth2 Bearer token not found")
    if not any(p.id == body.productId for p in store.products):
        return _error(400, "Product doesn't exist")
    if body.qty < 0:
        return _error(400, "Quantity must be zero or more")

    # Upsert in place so line order is stable; qty 0 removes the line.
    lines: List[RawCartLine] = []
    found = False
    for line in store.carts.get(token, []):
        if line.product_id == body.productId:
            found = True
            if body.qty > 0:
                lines.append(RawCartLine(product_id=body.productId, qty=body.qty))
        else:
            lines.append(line)
    if not found and body.qty > 0:
        lines.append(RawCartLine(product_id=body.productId, qty=body.qty))
    store.carts[token] = lines
    logger.info("Cart updated: product=%s qty=%s lines=%d", body.productId, body.qty, len(lines))
    return store.cart_payload(token)


def create_app(
    products: Optional[Iterable[Product]] = None,
    tokens: Iterable[str] = DEFAULT_TOKENS,
) -> FastAPI:
    app = FastAPI(
        title="Storefront Dev Service",
        description="In-memory catalog and cart endpoints for local development",
        version="1.0.0",
    )
    app.state.store = DevStore(SEED_PRODUCTS if products is None else products, tokens)
    app.include_router(router)
    return app


app = create_app()
