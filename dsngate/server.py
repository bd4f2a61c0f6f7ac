"""aiohttp application: DSN resolution for any store path, plus /healthz."""

from __future__ import annotations

import logging
from typing import Any

from aiohttp import web

from dsngate.dsn import from_request
from dsngate.errors import MissingCredential, MissingProjectID

log = logging.getLogger(__name__)


async def healthz(request: web.Request) -> web.Response:
    return web.Response(text="ok")


async def resolve_dsn(request: web.Request) -> web.Response:
    dsn_config = request.app["config"]["dsn"]
    try:
        dsn = from_request(
            request,
            auth_header=dsn_config["auth_header"],
            allow_bare_header=dsn_config["allow_bare_auth_header"],
        )
    except MissingCredential:
        log.info("Rejected %s %s: missing credential", request.method, request.path)
        return web.Response(status=401, text="missing credential")
    except MissingProjectID:
        log.info("Rejected %s %s: missing project id", request.method, request.path)
        return web.Response(status=400, text="missing project id")

    headers = {}
    if dsn.dsn:
        headers = {"X-Sentry-DSN": dsn.dsn, "X-Sentry-Project-ID": dsn.project_id}
    return web.json_response(dsn.as_dict(), headers=headers)


def create_app(config: dict[str, Any]) -> web.Application:
    app = web.Application()
    app["config"] = config

    app.router.add_get("/healthz", healthz)
    app.router.add_route("*", "/{tail:.*}", resolve_dsn)
    return app
