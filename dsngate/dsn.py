"""DSN assembly and the request-level resolution pipeline.

A DSN has the form ``https://<public_key>[:<secret_key>]@<host>/<project_id>``.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from multidict import CIMultiDict
from yarl import URL

from dsngate.credentials import Credential, extract_from_header, extract_from_query
from dsngate.errors import MissingCredential
from dsngate.paths import check_path

log = logging.getLogger(__name__)

AUTH_HEADER = "X-Sentry-Auth"
_SCHEME = "https://"


@dataclass(frozen=True)
class DSN:
    dsn: str
    host: str
    project_id: str
    public_key: str
    secret_key: str

    @property
    def is_legacy(self) -> bool:
        """True when the request hit the project-less /api/store/ endpoint."""
        return not self.project_id

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_dsn(credential: Credential, host: str, project_id: str) -> DSN:
    """Assemble a DSN. An empty project id yields an empty DSN string."""
    dsn = ""
    if project_id:
        user = credential.public_key
        if credential.secret_key:
            user += ":" + credential.secret_key
        dsn = f"{_SCHEME}{user}@{host}/{project_id}"
    return DSN(
        dsn=dsn,
        host=host,
        project_id=project_id,
        public_key=credential.public_key,
        secret_key=credential.secret_key,
    )


def _url_host(url: URL) -> str:
    host = url.host
    if not host:
        return ""
    if ":" in host:
        host = f"[{host}]"
    if url.explicit_port is not None:
        return f"{host}:{url.explicit_port}"
    return host


def resolve(
    url: URL,
    header_values: list[str],
    host: str = "",
    allow_bare_header: bool = True,
) -> DSN:
    """Run credential lookup, path validation and assembly for one request.

    The auth header is tried first and the query string only when the header
    yields no public key. ``host`` is used when the URL carries no authority.
    """
    try:
        credential = extract_from_header(header_values, allow_bare=allow_bare_header)
    except MissingCredential:
        try:
            credential = extract_from_query(url)
        except MissingCredential:
            raise MissingCredential("sentry: missing public key") from None

    project_id = check_path(url.path)
    return build_dsn(credential, _url_host(url) or host, project_id)


def from_request(
    request: Any,
    auth_header: str = AUTH_HEADER,
    allow_bare_header: bool = True,
) -> DSN:
    """Resolve the DSN for an aiohttp-style request (``url``, ``headers``, ``host``)."""
    headers = request.headers
    if not hasattr(headers, "getall"):
        headers = CIMultiDict(headers)
    return resolve(
        request.url,
        headers.getall(auth_header, []),
        host=request.host or "",
        allow_bare_header=allow_bare_header,
    )
