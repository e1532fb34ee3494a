# src/scrapers/session_info.py

"""Parser for the storefront's ``user/info.js`` session script.

The endpoint returns JavaScript rather than JSON, e.g.::

    session = {"tid": "a1b2c3", "user": null, ...};

Grammar accepted here, and nothing more:

1. The first ``session = `` assignment in the body.
2. Its right-hand side must start with a JSON object, which is decoded
   as-is (a trailing ``;`` or anything after the object is ignored).
3. The object must carry a non-empty string field ``tid``.

Any deviation is a :class:`SessionError`; there is no best-effort
recovery.
"""

import json
import re
from typing import Any

from src.scrapers.errors import SessionError

_ASSIGNMENT_RE = re.compile(r"\bsession\s*=\s*")

_decoder = json.JSONDecoder()


def parse_session_object(body: str) -> dict[str, Any]:
    """Extract and decode the object assigned to ``session``."""
    match = _ASSIGNMENT_RE.search(body or "")
    if not match:
        raise SessionError("No 'session = ...' assignment in session info")

    try:
        obj, _ = _decoder.raw_decode(body, match.end())
    except json.JSONDecodeError as exc:
        raise SessionError(
            f"Session assignment is not valid JSON: {exc}"
        ) from exc

    if not isinstance(obj, dict):
        raise SessionError(
            f"Session assignment is a {type(obj).__name__}, not an object"
        )
    return obj


def parse_session_token(body: str) -> str:
    """Return the ``tid`` session token from a ``user/info.js`` body."""
    tid = parse_session_object(body).get("tid")
    if not isinstance(tid, str) or not tid.strip():
        raise SessionError("Session object has no 'tid' token")
    return tid.strip()
