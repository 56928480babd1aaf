"""Request Outcomes - the tagged result of every RequestGateway.call().

Invariants:
    - Exactly one tag per call: Success | HttpError | NetworkError | AuthExpired
    - Only Success carries a payload; only the failure tags carry a message
    - AuthExpired always names the page the caller must navigate to
    - unwrap() preserves the classification (maps each tag to its typed error)

Design Decisions:
    - Frozen dataclasses + Union over one class with optional fields: an outcome
      can never hold both data and an error
    - Outcomes returned, not raised: NetworkError and HttpError leave the page
      usable for retry, so callers branch instead of unwinding
"""

from dataclasses import dataclass
from typing import Any, Union

from meridian.core.domain_types import Page
from meridian.core.errors import (
    HttpRequestError,
    NetworkUnavailableError,
    SessionExpiredError,
    SESSION_EXPIRED_MESSAGE,
)


@dataclass(frozen=True)
class Success:
    payload: Any = None
    ok = True
    requires_login = False

    @property
    def error_message(self) -> None:
        return None

    def unwrap(self) -> Any:
        return self.payload


@dataclass(frozen=True)
class HttpError:
    status_code: int
    message: str
    ok = False
    requires_login = False

    @property
    def error_message(self) -> str:
        return self.message

    def unwrap(self) -> Any:
        raise HttpRequestError(self.status_code, self.message)


@dataclass(frozen=True)
class NetworkError:
    message: str
    ok = False
    requires_login = False

    @property
    def error_message(self) -> str:
        return self.message

    def unwrap(self) -> Any:
        raise NetworkUnavailableError(self.message)


@dataclass(frozen=True)
class AuthExpired:
    redirect_to: Page = Page.LOGIN
    ok = False
    requires_login = True

    @property
    def error_message(self) -> str:
        return SESSION_EXPIRED_MESSAGE

    def unwrap(self) -> Any:
        raise SessionExpiredError()


RequestOutcome = Union[Success, HttpError, NetworkError, AuthExpired]
