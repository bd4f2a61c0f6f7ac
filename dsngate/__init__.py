"""Reconstruct Sentry client DSNs from proxied ingestion requests."""

from dsngate.credentials import Credential
from dsngate.dsn import DSN, build_dsn, from_request, resolve
from dsngate.errors import DSNError, ErrorKind, MissingCredential, MissingProjectID

__all__ = [
    "Credential",
    "DSN",
    "DSNError",
    "ErrorKind",
    "MissingCredential",
    "MissingProjectID",
    "build_dsn",
    "from_request",
    "resolve",
]
