"""Helpers that pull data out of :class:`httpx.Response` objects.

* :func:`extract_response_data` -- JSON body, raw text, or ``None``.
* :func:`parse_error_body` -- the fields of an Okta error document.
* :func:`get_next_link` -- the ``rel="next"`` target of the ``Link`` header,
  which is how Okta paginates every collection endpoint.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx


def extract_response_data(response: httpx.Response) -> Any:
    """Return the decoded JSON body, the raw text if it is not JSON, or ``None`` if empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def parse_error_body(response: httpx.Response) -> dict[str, Any]:
    """Extract ``errorCode``, ``errorSummary``, ``errorId``, and ``errorCauses``.

    Okta error responses look like::

        {
            "errorCode": "E0000007",
            "errorSummary": "Not found: Resource not found: 00g1 (UserGroup)",
            "errorLink": "E0000007",
            "errorId": "oae2f3...",
            "errorCauses": []
        }

    Missing keys, non-JSON bodies, and non-object bodies produce ``None``
    values; ``error_summary`` then falls back to a snippet of the body text.
    """
    data = extract_response_data(response)
    fields: dict[str, Any] = {
        "error_code": None,
        "error_summary": None,
        "error_id": None,
        "error_causes": [],
    }
    if isinstance(data, dict):
        fields["error_code"] = data.get("errorCode")
        fields["error_summary"] = (
            data.get("errorSummary") or data.get("error_description") or data.get("error")
        )
        fields["error_id"] = data.get("errorId")
        causes = data.get("errorCauses")
        if isinstance(causes, list):
            fields["error_causes"] = causes
    elif isinstance(data, str) and data:
        fields["error_summary"] = data[:200]
    return fields


def get_next_link(response: httpx.Response) -> Optional[str]:
    """Return the URL of the next page, or ``None`` when this is the last page.

    Okta sends ``Link: <...?limit=200>; rel="self", <...?after=00g2&limit=200>;
    rel="next"``; the ``next`` URL is opaque and returned unmodified.
    """
    link = response.links.get("next")
    if not link:
        return None
    return link.get("url") or None
