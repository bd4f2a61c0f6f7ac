"""Store endpoint path validation and project id extraction.

Recognized shapes (matched anywhere in the path):
- /api/<project_id>/store/
- /api/store/            legacy, no project id
"""

from __future__ import annotations

import re

from dsngate.errors import MissingProjectID

_STORE_PATH_RE = re.compile(r"/api/([0-9]+)/store/")
_LEGACY_STORE_PATH_RE = re.compile(r"/api/store/")


def check_path(path: str) -> str:
    """Return the project id from a store path, or "" for the legacy path.

    Raises MissingProjectID when the path matches neither shape.
    """
    if not path.endswith("/"):
        path += "/"

    m = _STORE_PATH_RE.search(path)
    if m:
        return m.group(1)
    if _LEGACY_STORE_PATH_RE.search(path):
        return ""
    raise MissingProjectID(f"Missing project ID. Attempted to parse project from: {path}")
