"""
HTTP Basic Auth for the admin viewer.

A single username/password pair from configuration; no sessions, no hashing.
"""
from __future__ import annotations

import base64
import binascii
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import Any

from flask import current_app, request

CHALLENGE = 'Basic realm="Restricted"'


class AuthError(Exception):
    def __init__(self, challenge: str = CHALLENGE):
        self.challenge = challenge
        super().__init__("Authentication required")


@dataclass(frozen=True)
class AuthResult:
    authenticated: bool
    challenge: str | None = None


_DENIED = AuthResult(authenticated=False, challenge=CHALLENGE)


@dataclass(frozen=True)
class BasicAuthVerifier:
    username: str
    password: str

    def verify(self, header: str | None) -> AuthResult:
        creds = parse_basic_header(header)
        # An unset password never authenticates.
        if creds is None or not self.password:
            return _DENIED
        user, pwd = creds
        if user == self.username and pwd == self.password:
            return AuthResult(authenticated=True)
        return _DENIED


def parse_basic_header(header: str | None) -> tuple[str, str] | None:
    """Return (username, password) from a `Basic <base64>` header, or None if malformed."""
    if not header:
        return None
    scheme, sep, encoded = header.partition(" ")
    if scheme != "Basic" or not sep or not encoded or " " in encoded:
        return None
    try:
        raw = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    user, colon, pwd = raw.partition(":")
    if not colon:
        return None
    return user, pwd


def verifier_from_config(config: dict) -> BasicAuthVerifier:
    return BasicAuthVerifier(
        username=config.get("ADMIN_USER") or "admin",
        password=config.get("ADMIN_PASS") or "",
    )


def require_basic_auth(fn: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        verifier: BasicAuthVerifier = current_app.extensions["intake_verifier"]
        result = verifier.verify(request.headers.get("Authorization"))
        if not result.authenticated:
            current_app.logger.warning(
                "Admin auth failed: path=%s remote_addr=%s", request.path, request.remote_addr
            )
            raise AuthError(result.challenge or CHALLENGE)
        return fn(*args, **kwargs)

    return wrapped
