"""Request Gateway - single funnel for every backend call.

Invariants:
    - Credentials read once per call, from one SessionStore snapshot, at header-build time
    - Every call ends in exactly one outcome: Success | HttpError | NetworkError | AuthExpired
    - 401 while a session is active => SessionStore.destroy() + AuthExpired
    - 401 with no active session => HttpError(401, ...) (nothing to expire)
    - Any httpx.RequestError (redirect loops included) is logged,
      never returned verbatim: one fixed NetworkError message
    - A success body that is not valid JSON, or fails payload_type validation,
      raises ResponseParseError - never converted to empty data
    - No retries at this layer; retry policy belongs to the caller

Design Decisions:
    - httpx.AsyncClient: async, injectable transport (MockTransport / ASGITransport in tests)
    - Outcomes returned, not raised: callers render NetworkError/HttpError inline
      and keep the page usable
    - Absolute URLs built here (not httpx base_url): join rule lives in core and is testable
"""

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from meridian.config import Settings
from meridian.core.domain_types import HttpMethod
from meridian.core.errors import (
    ErrorContext, NETWORK_ERROR_MESSAGE, ResponseParseError,
)
from meridian.core.outcomes import (
    AuthExpired, HttpError, NetworkError, RequestOutcome, Success,
)
from meridian.core.request_building import (
    build_headers, extract_error_message, join_url,
)
from meridian.services.session_store import SessionStore

logger = logging.getLogger(__name__)


@lru_cache(maxsize=64)
def _adapter(payload_type: Any) -> TypeAdapter:
    return TypeAdapter(payload_type)


class RequestGateway:
    """Injects credentials, issues the call, classifies the result."""

    def __init__(
        self,
        session_store: SessionStore,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.session_store = session_store
        self.settings = settings or session_store.settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self.settings.request_timeout_seconds,
            follow_redirects=True,
            transport=transport,
        )
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        return self._in_flight

    async def call(
        self,
        path: str,
        method: HttpMethod | str = HttpMethod.GET,
        body: Any = None,
        extra_headers: Mapping[str, str] | None = None,
        payload_type: Any = None,
    ) -> RequestOutcome:
        """Issue one backend call and return its classified outcome."""
        verb = HttpMethod(method.upper()).value
        url = join_url(self.settings.api_base_url, path)
        session = self.session_store.snapshot()
        headers = build_headers(
            session.credential if session is not None else None, extra_headers,
        )
        log_extra = {"method": verb, "path": path}

        self._in_flight += 1
        try:
            response = await self._client.request(
                verb, url, headers=headers, json=body,
            )
        except httpx.RequestError as e:
            logger.warning(
                f"Request failure: {e!r}",
                extra={**log_extra, "outcome": "network_error"},
            )
            return NetworkError(NETWORK_ERROR_MESSAGE)
        finally:
            self._in_flight -= 1

        return self._interpret(response, verb, path, payload_type)

    def _interpret(
        self, response: httpx.Response, verb: str, path: str, payload_type: Any,
    ) -> RequestOutcome:
        status = response.status_code
        log_extra = {"method": verb, "path": path, "status_code": status}

        if not response.is_success:
            if status == 401 and self.session_store.is_active():
                logger.warning(
                    "Authorization rejected for active session, ending it",
                    extra={**log_extra, "outcome": "auth_expired"},
                )
                self.session_store.destroy()
                return AuthExpired()
            message = extract_error_message(self._error_body(response), status)
            logger.info(
                f"Request rejected: {message}",
                extra={**log_extra, "outcome": "http_error"},
            )
            return HttpError(status, message)

        payload = self._parse_payload(response, verb, path, payload_type)
        logger.debug("Request succeeded", extra={**log_extra, "outcome": "success"})
        return Success(payload)

    @staticmethod
    def _error_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def _parse_payload(
        self, response: httpx.Response, verb: str, path: str, payload_type: Any,
    ) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        context = ErrorContext(method=verb, path=path, status_code=response.status_code)
        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"Success response is not JSON: {e}",
                extra={"method": verb, "path": path, "error_code": "PARSE_ERROR"},
            )
            raise ResponseParseError(str(e), context=context) from e
        if payload_type is None:
            return data
        try:
            return _adapter(payload_type).validate_python(data)
        except ValidationError as e:
            logger.error(
                f"Success response failed validation: {e.error_count()} error(s)",
                extra={"method": verb, "path": path, "error_code": "PARSE_ERROR"},
            )
            raise ResponseParseError(str(e), context=context) from e

    async def aclose(self) -> None:
        """Close the HTTP client if this gateway created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "RequestGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
