"""Request Building - pure URL, header and error-message rules for the gateway.

Invariants:
    - join_url puts exactly one "/" between base URL and path; nothing else is
      validated (callers are trusted)
    - Authorization is added only when a credential is present
    - Caller-supplied extra headers are applied last and win over computed ones
    - extract_error_message never raises; it falls back to the status message

Design Decisions:
    - Header names compared case-insensitively when overriding, so an
      "authorization" extra header replaces the computed "Authorization"
"""

from collections.abc import Mapping
from typing import Any

from meridian.core.domain_types import CredentialMaterial

DEFAULT_CONTENT_TYPE = "application/json"


def join_url(base_url: str, path: str) -> str:
    """Concatenate base URL and path with a single slash at the seam."""
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def build_headers(
    credential: CredentialMaterial | None,
    extra_headers: Mapping[str, str] | None = None,
) -> dict[str, str]:
    headers = {"Content-Type": DEFAULT_CONTENT_TYPE}
    if credential is not None:
        headers["Authorization"] = credential.authorization_header()
    for name, value in (extra_headers or {}).items():
        for existing in [k for k in headers if k.lower() == name.lower()]:
            del headers[existing]
        headers[name] = value
    return headers


def fallback_error_message(status_code: int) -> str:
    return f"Request failed with status {status_code}"


def extract_error_message(data: Any, status_code: int) -> str:
    """Pick the backend's message from a parsed error body.

    Accepts {"message": "..."}, {"error": "..."} and
    {"error": {"message": "..."}}; anything else yields the fallback.
    """
    if isinstance(data, dict):
        for key in ("message", "error"):
            value = data.get(key)
            if isinstance(value, dict):
                value = value.get("message")
            if isinstance(value, str) and value.strip():
                return value
    return fallback_error_message(status_code)
