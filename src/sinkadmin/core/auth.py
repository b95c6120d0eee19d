# src/sinkadmin/core/auth.py
"""Authentication header providers for the HTTP engine.

The engine asks its provider for headers on every request, so providers
that read credentials from disk pick up rotated tokens without a restart.

Usage:
    from sinkadmin.core.auth import TokenAuthentication

    auth = TokenAuthentication("file:/var/run/secrets/admin-token")
    engine = HttpEngine("https://admin.example.com", authentication=auth)
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pydantic import SecretStr

_FILE_PREFIX = "file:"


class Authentication(Protocol):
    """Protocol for request authentication providers."""

    def auth_headers(self) -> dict[str, str]:
        """Headers to add to the next request. May be empty."""
        ...


class NoAuthentication:
    """Sends no credentials."""

    def auth_headers(self) -> dict[str, str]:
        return {}


class TokenAuthentication:
    """Bearer-token authentication.

    Args:
        token: The token itself, or ``file:<path>`` to read it from a file
            on every request (trailing whitespace stripped).
    """

    def __init__(self, token: str | SecretStr) -> None:
        self._token = token if isinstance(token, SecretStr) else SecretStr(token)

    def _resolve(self) -> str:
        raw = self._token.get_secret_value()
        if raw.startswith(_FILE_PREFIX):
            return Path(raw[len(_FILE_PREFIX) :]).read_text(encoding="utf-8").strip()
        return raw

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._resolve()}"}

    def __repr__(self) -> str:
        return "TokenAuthentication(token=**********)"


def authentication_from_token(token: SecretStr | None) -> Authentication:
    """Provider for an optional configured token."""
    if token is None:
        return NoAuthentication()
    return TokenAuthentication(token)
