"""Credential extraction from the X-Sentry-Auth header or the query string.

Header format (current):
    X-Sentry-Auth: Sentry sentry_key=<public>, sentry_secret=<secret>, ...
Earlier clients send the bare comma-separated pairs without the scheme token.

Query string:
    ?sentry_key=<public>&sentry_secret=<secret>
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from yarl import URL

from dsngate.errors import MissingCredential

log = logging.getLogger(__name__)

_PUBLIC_KEY_RE = re.compile(r"sentry_key=[a-f0-9]{32}")
_SECRET_KEY_RE = re.compile(r"sentry_secret=[a-f0-9]{32}")


@dataclass(frozen=True)
class Credential:
    public_key: str
    secret_key: str = ""

    def __post_init__(self) -> None:
        if not self.public_key:
            raise ValueError("Credential requires a public key")


def _mask_key(raw_key: str) -> str:
    """Return last 6 characters of the key for debugging."""
    if not raw_key:
        return ""
    return raw_key[-6:]


def _strip_scheme(value: str, allow_bare: bool) -> str:
    """Drop the leading scheme token ("Sentry ") from an auth header value."""
    value = value.strip()
    if allow_bare:
        first_token = value.split(",", 1)[0].strip()
        if not any(c.isspace() for c in first_token):
            return value
    parts = value.split(None, 1)
    return parts[1] if len(parts) == 2 else ""


def extract_from_header(values: list[str], allow_bare: bool = True) -> Credential:
    """Extract key material from the values of the auth header.

    Only the first header value is read. Tokens that are not a well-formed
    ``sentry_key`` or ``sentry_secret`` pair are ignored. Raises
    MissingCredential when no public key is present, even if a secret is.
    """
    if not values or not values[0]:
        raise MissingCredential("auth header absent or empty")

    public_key = ""
    secret_key = ""
    for token in _strip_scheme(values[0], allow_bare).split(","):
        token = token.strip()
        if _PUBLIC_KEY_RE.match(token):
            public_key = token.split("=", 1)[1].strip()
            log.debug("Header: public key found (...%s)", _mask_key(public_key))
        elif _SECRET_KEY_RE.match(token):
            secret_key = token.split("=", 1)[1].strip()
            log.debug("Header: secret key found")

    if not public_key:
        raise MissingCredential("auth header carries no public key")
    return Credential(public_key=public_key, secret_key=secret_key)


def extract_from_query(url: URL) -> Credential:
    """Extract key material from the query string, taken verbatim."""
    public_key = url.query.get("sentry_key", "")
    if not public_key:
        raise MissingCredential("query string carries no sentry_key")
    secret_key = url.query.get("sentry_secret", "")
    log.debug("Query string: public key found (...%s)", _mask_key(public_key))
    return Credential(public_key=public_key, secret_key=secret_key)
