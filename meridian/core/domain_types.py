"""Domain Types - credential variants and the enums shared across the client.

Invariants:
    - CredentialMaterial is exactly one of OpaqueToken | UsernamePassword
    - Each variant renders its own Authorization header value
    - Secrets never appear in repr() (credentials end up in log lines otherwise)
    - All valid states encoded as Enums - no raw string matching

Design Decisions:
    - Frozen dataclasses over a dict with a "kind" key: equality and hashing for
      free, and isinstance() dispatch reads naturally at the few seams that care
    - str Enums: serialize to JSON without custom encoders (SessionStorage is JSON)
"""

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


# ─── Enums ───────────────────────────────────────────────────────

class AuthProtocol(str, Enum):
    """How a login exchange produces credential material."""
    TOKEN = "token"   # POST /auth issues a bearer token
    BASIC = "basic"   # username/password kept and sent on every call


class Page(str, Enum):
    """Navigation targets signalled to the UI collaborator."""
    LOGIN = "index.html"
    SIGNUP = "signup.html"
    DASHBOARD = "dashboard.html"


class GuardDecision(str, Enum):
    """Result of a route guard check before rendering a protected view."""
    ALLOW = "allow"
    REDIRECT = "redirect"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


# ─── Credential Material ─────────────────────────────────────────

@dataclass(frozen=True)
class OpaqueToken:
    """Bearer token issued by the backend's credential exchange."""
    token: str = field(repr=False)

    def authorization_header(self) -> str:
        return f"Bearer {self.token}"


@dataclass(frozen=True)
class UsernamePassword:
    """Basic-auth pair kept for the session and sent with every call."""
    username: str
    password: str = field(repr=False)

    def authorization_header(self) -> str:
        raw = f"{self.username}:{self.password}".encode("utf-8")
        return f"Basic {base64.b64encode(raw).decode('ascii')}"


CredentialMaterial = Union[OpaqueToken, UsernamePassword]
