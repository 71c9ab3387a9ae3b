"""
Shared plumbing for the storefront HTTP clients.

Implementation notes:
- httpx for async requests; one short-lived AsyncClient per call unless a
  client is injected (tests, connection reuse)
- Transport failures, non-2xx responses and undecodable bodies are turned into
  the error taxonomy in storefront/integrations/errors.py here, so the
  concrete clients only decide which operation class a failure belongs to
- Bearer tokens are never logged
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional, Type

import httpx

from storefront.integrations.errors import (
    EndpointNotConfigured,
    IntegrationError,
    MalformedResponse,
    NetworkUnavailable,
    ServerError,
    Unauthorized,
    classify,
)
from storefront.integrations.policy.response_wrappers import DEFAULT_ERROR_MESSAGE, extract_error_message

logger = logging.getLogger(__name__)


class HttpResult:
    """Status code plus decoded JSON body of a completed request."""

    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class BaseHttpClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: float = 20.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("STOREFRONT_ENDPOINT", "")).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._client = client

    async def _request(
        self,
        method: str,
        path: str,
        operation: Type[IntegrationError],
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> HttpResult:
        """Send one request and decode the body.

        Returns the result for any HTTP status; callers decide which non-2xx
        codes are acceptable. Raises ``EndpointNotConfigured``,
        ``NetworkUnavailable`` or ``MalformedResponse`` (combined with
        ``operation``) otherwise.
        """
        if not self.base_url:
            logger.error("No storefront endpoint configured; cannot call %s %s", method, path)
            raise classify(EndpointNotConfigured, operation)(
                "The storefront endpoint is not configured. Set STOREFRONT_ENDPOINT or the endpoint config value.",
                payload={"path": path},
            )

        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.info("%s %s", method, path)
        if json is not None:
            logger.debug("Request payload: %s", json)
        try:
            if self._client is not None:
                response = await self._client.request(method, url, params=params, json=json, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.request(method, url, params=params, json=json, headers=headers)
        except httpx.RequestError as exc:
            logger.error("Request error calling %s %s: %s", method, path, exc)
            raise classify(NetworkUnavailable, operation)(DEFAULT_ERROR_MESSAGE, payload={"path": path}) from exc

        logger.info("%s %s -> %s", method, path, response.status_code)
        body = self._decode(response, path, operation)
        return HttpResult(response.status_code, body)

    def _decode(self, response: httpx.Response, path: str, operation: Type[IntegrationError]) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            if response.is_success:
                logger.error("Non-JSON body from %s: %r", path, response.text[:200])
                raise classify(MalformedResponse, operation)(
                    DEFAULT_ERROR_MESSAGE, status_code=response.status_code, payload={"path": path}
                ) from exc
            return None

    @staticmethod
    def _raise_for_status(result: HttpResult, path: str, operation: Type[IntegrationError]) -> None:
        if result.ok:
            return
        message = extract_error_message(result.body)
        payload = result.body if isinstance(result.body, dict) else {}
        if result.status_code in (401, 403):
            kind: Type[IntegrationError] = Unauthorized
        else:
            kind = ServerError
        logger.warning("HTTP %s from %s: %s", result.status_code, path, message)
        raise classify(kind, operation)(message, status_code=result.status_code, payload=payload)

    @staticmethod
    def _malformed(exc: MalformedResponse, operation: Type[IntegrationError]) -> IntegrationError:
        logger.error("Malformed response: %s", exc)
        return classify(MalformedResponse, operation)(
            DEFAULT_ERROR_MESSAGE, status_code=exc.status_code, payload=exc.payload
        )
