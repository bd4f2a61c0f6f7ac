"""Error kinds raised while reconstructing a DSN."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    MISSING_PROJECT_ID = "missing_project_id"


class DSNError(Exception):
    kind: ErrorKind


class MissingCredential(DSNError):
    """No public key in the auth header or the query string."""

    kind = ErrorKind.MISSING_CREDENTIAL


class MissingProjectID(DSNError):
    """Request path matches neither the project store path nor the legacy one."""

    kind = ErrorKind.MISSING_PROJECT_ID
