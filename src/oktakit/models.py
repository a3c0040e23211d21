"""Canonical Pydantic models for configuration and request description.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`AuthConfig`, :class:`RequestConfig`, :class:`OutputConfig`,
    :class:`GlobalConfig`, and :class:`Profile`.

**Request models** -- describe a single API call independently of the
transport that executes it:
    :class:`HTTPMethod`, :class:`HttpRequest`, and :class:`RequestContext`.

Resource payloads (groups, users) live in :mod:`oktakit.resources`.
"""

from __future__ import annotations

import enum
from typing import Any, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field


# --- Auth Config ---


class AuthConfig(BaseModel):
    """Authentication configuration embedded in a :class:`Profile`.

    ``type`` selects the auth plugin (``ssws`` for an Okta API token,
    ``bearer`` for an OAuth 2.0 access token) and ``source`` tells the plugin
    where to read the secret from.

    Example::

        AuthConfig(type="ssws", source="env:OKTA_CLIENT_TOKEN")
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(default="ssws", description="Auth type: ssws, bearer")
    source: str = Field(
        default="prompt",
        description="Credential source: env:VAR, file:/path, prompt",
    )


class RequestConfig(BaseModel):
    """Default HTTP request settings applied to every API call in a profile."""

    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    max_retries: int = Field(default=2, description="Max retry attempts on 429/5xx")


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/oktakit/config.json``.

    See :func:`~oktakit.config.resolve_config` for the full precedence chain.
    """

    default_profile: Optional[str] = None
    auto_select_single_profile: bool = True
    output: OutputConfig = Field(default_factory=OutputConfig)


class Profile(BaseModel):
    """Per-org profile stored as JSON under the ``profiles/`` config directory.

    See Also:
        :func:`~oktakit.config.load_profile`: Deserialise a profile by name.
        :func:`~oktakit.config.save_profile`: Persist a profile to disk.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    org_url: str = Field(description="Org base URL, e.g. https://dev-123.okta.com")
    auth: Optional[AuthConfig] = Field(default_factory=AuthConfig)
    request: RequestConfig = Field(default_factory=RequestConfig)


# --- Request Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods used by the Okta management API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class HttpRequest(BaseModel):
    """Description of one HTTP call, as consumed by :class:`~oktakit.datastore.DataStore`.

    ``uri`` is either a path template relative to the org URL
    (``/api/v1/groups/{groupId}``) or an absolute URL such as a ``next``
    link returned by the server. Absolute URLs are passed through verbatim.
    """

    uri: str
    method: HTTPMethod = HTTPMethod.GET
    path_params: dict[str, Any] = Field(default_factory=dict)
    query_params: dict[str, Any] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    payload: Any = None

    def resolved_uri(self) -> str:
        """Return ``uri`` with every ``{name}`` placeholder substituted."""
        uri = self.uri
        for key, value in self.path_params.items():
            uri = uri.replace("{" + key + "}", quote(str(value), safe=""))
        return uri

    def effective_query(self) -> dict[str, Any]:
        """Query parameters with ``None`` entries dropped."""
        return {k: v for k, v in self.query_params.items() if v is not None}


class RequestContext(BaseModel):
    """Cross-cutting metadata sent with every request of one logical operation.

    Attributes:
        request_id: Correlation id sent as ``X-Request-Id``.
        user_agent: Extra product token appended to the ``User-Agent`` header.
        x_forwarded_for: Value for ``X-Forwarded-For``.
        x_forwarded_proto: Value for ``X-Forwarded-Proto``.
        x_forwarded_port: Value for ``X-Forwarded-Port``.
    """

    request_id: Optional[str] = None
    user_agent: Optional[str] = None
    x_forwarded_for: Optional[str] = None
    x_forwarded_proto: Optional[str] = None
    x_forwarded_port: Optional[str] = None

    def to_headers(self) -> dict[str, str]:
        """Return the context as HTTP headers, skipping unset fields."""
        headers: dict[str, str] = {}
        if self.request_id:
            headers["X-Request-Id"] = self.request_id
        if self.x_forwarded_for:
            headers["X-Forwarded-For"] = self.x_forwarded_for
        if self.x_forwarded_proto:
            headers["X-Forwarded-Proto"] = self.x_forwarded_proto
        if self.x_forwarded_port:
            headers["X-Forwarded-Port"] = self.x_forwarded_port
        return headers
