"""
Session helpers.

The login flow itself lives outside the engine; it hands over its response
body, which is turned into an explicit SessionAuth here. Nothing in the engine
reads credentials from ambient storage.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from storefront.integrations.contracts.interfaces import SessionAuth
from storefront.integrations.errors import MalformedResponse

logger = logging.getLogger(__name__)


class LoginResponseModel(BaseModel):
    success: bool = True
    token: str
    username: Optional[str] = None
    balance: Optional[float] = None


def session_from_login(raw: Dict[str, Any]) -> SessionAuth:
    """Build a SessionAuth from a login response body.

    Raises MalformedResponse when the body lacks a token or reports failure.
    """
    try:
        body = LoginResponseModel(**(raw or {}))
    except (TypeError, ValidationError) as exc:
        raise MalformedResponse(f"Login response validation failed: {exc}", payload=raw) from exc
    if not body.success or not body.token.strip():
        raise MalformedResponse("Login response did not carry a usable token.", payload=raw)
    logger.info("Session opened for %s", body.username or "<anonymous>")
    return SessionAuth(token=body.token, username=body.username, balance=body.balance)
