"""Asynchronous HTTP client for the Okta management API.

:class:`AsyncClient` wraps :class:`httpx.AsyncClient` and adds:

* auth header injection from an :class:`~oktakit.auth.manager.AuthManager`,
* the default ``Accept`` / ``Content-Type`` / ``User-Agent`` headers,
* retry on HTTP 429 (honouring ``X-Rate-Limit-Reset``), on 5xx, and on
  network errors, bounded by ``RequestConfig.max_retries``,
* mapping of error statuses to :class:`~oktakit.exceptions.OktaApiError`
  subclasses carrying the Okta error body fields.

It must be used as an async context manager.
"""

from __future__ import annotations

import asyncio
import platform
import time
from email.utils import parsedate_to_datetime
from typing import Any, Optional

import httpx

from oktakit import __version__
from oktakit.auth.base import AuthResult
from oktakit.auth.manager import AuthManager
from oktakit.client.response import parse_error_body
from oktakit.exceptions import (
    AuthError,
    ConnectionError_,
    NotFoundError,
    OktaApiError,
    RateLimitError,
    ServerError,
)
from oktakit.models import Profile
from oktakit.output import get_output

USER_AGENT = f"oktakit/{__version__} python/{platform.python_version()}"


class AsyncClient:
    """Asynchronous HTTP client bound to one Okta org.

    Args:
        profile: The connection profile containing ``org_url``, auth
            config, and request settings (timeout, retries, SSL verify).
        auth_manager: Optional manager that resolves credentials on enter.
            When ``None``, no auth is injected.
        transport: Optional custom :mod:`httpx` transport, e.g.
            :class:`httpx.MockTransport` in tests.

    Example::

        async with AsyncClient(profile, auth_manager=am) as client:
            response = await client.get("/api/v1/groups/00g1")
    """

    def __init__(
        self,
        profile: Profile,
        auth_manager: Optional[AuthManager] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._profile = profile
        self._auth_manager = auth_manager
        self._transport = transport
        self._auth_result: Optional[AuthResult] = None
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def user_agent(self) -> str:
        return USER_AGENT

    @property
    def is_open(self) -> bool:
        return self._client is not None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        config = self._profile.request
        kwargs: dict[str, Any] = {
            "base_url": self._profile.org_url.rstrip("/"),
            "timeout": config.timeout,
            "verify": config.verify_ssl,
            "follow_redirects": True,
            "headers": {
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
            },
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        self._client = httpx.AsyncClient(**kwargs)
        if self._auth_manager and self._profile.auth:
            try:
                self._auth_result = self._auth_manager.authenticate(self._profile)
            except BaseException:
                await self.aclose()
                raise
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    async def request(
        self,
        method: str,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        json_body: Optional[Any] = None,
    ) -> httpx.Response:
        """Make a request with auth injection, retry, and error mapping.

        Args:
            method: HTTP method.
            url: Path relative to the org URL, or an absolute URL (next links).
            params: Query parameters.
            headers: Extra request headers; they win over auth and defaults.
            json_body: JSON-serialisable body.

        Returns:
            The successful :class:`httpx.Response`.

        Raises:
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            RateLimitError: On 429 after all retries.
            ServerError: On 5xx after all retries.
            OktaApiError: On any other 4xx.
            ConnectionError_: On network / timeout errors after all retries.
        """
        merged_headers: dict[str, str] = {}
        if self._auth_result is not None:
            merged_headers.update(self._auth_result.headers)
        merged_headers.update(headers or {})

        response = await self._execute_with_retry(
            method, url, merged_headers, dict(params) if params else None, json_body,
        )
        self._map_response_error(response)
        return response

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _execute_with_retry(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        params: Optional[dict[str, Any]],
        json_body: Any,
    ) -> httpx.Response:
        """Execute the request, retrying on 429, 5xx, and network errors.

        *params* stays ``None`` when empty: httpx replaces the query string of
        an absolute next link with an empty ``params`` mapping.

        Retried requests carry ``X-Okta-Retry-For`` (the request id of the
        first attempt) and ``X-Okta-Retry-Count``.
        """
        assert self._client is not None, "Client not initialised -- use as async context manager"

        max_retries = self._profile.request.max_retries
        output = get_output()
        retry_for: Optional[str] = None

        for attempt in range(max_retries + 1):
            attempt_headers = dict(headers)
            if attempt > 0:
                attempt_headers["X-Okta-Retry-Count"] = str(attempt)
                if retry_for:
                    attempt_headers["X-Okta-Retry-For"] = retry_for

            kwargs: dict[str, Any] = {
                "method": method,
                "url": url,
                "headers": attempt_headers,
            }
            if params:
                kwargs["params"] = params
            if json_body is not None:
                kwargs["json"] = json_body

            try:
                response = await self._client.request(**kwargs)
            except (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError) as exc:
                if attempt < max_retries:
                    delay = 2 ** attempt
                    output.debug(
                        f"Connection error: {exc}, retrying in {delay}s "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    await asyncio.sleep(delay)
                    continue
                raise ConnectionError_(
                    f"Connection failed after {max_retries + 1} attempts: {exc}"
                ) from exc

            retryable = response.status_code == 429 or response.status_code >= 500
            if retryable and attempt < max_retries:
                if retry_for is None:
                    retry_for = response.headers.get("X-Okta-Request-Id")
                if response.status_code == 429:
                    delay = _rate_limit_delay(response, attempt)
                else:
                    delay = 2 ** attempt
                output.debug(
                    f"HTTP {response.status_code} from {method} {url}, retrying in "
                    f"{delay}s (attempt {attempt + 1}/{max_retries})"
                )
                await asyncio.sleep(delay)
                continue

            return response

        raise ServerError("Request failed after all retries")  # pragma: no cover

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for error HTTP status codes."""
        status = response.status_code
        if status < 400:
            return

        fields = parse_error_body(response)
        summary = fields["error_summary"]
        prefix = f"HTTP {status}"
        if fields["error_code"]:
            prefix = f"{prefix} ({fields['error_code']})"
        full_msg = f"{prefix}: {summary}" if summary else prefix

        exc_type: type[OktaApiError]
        if status in (401, 403):
            exc_type = AuthError
        elif status == 404:
            exc_type = NotFoundError
        elif status == 429:
            exc_type = RateLimitError
        elif status >= 500:
            exc_type = ServerError
        else:
            exc_type = OktaApiError
        raise exc_type(full_msg, status=status, **fields)


def _rate_limit_delay(response: httpx.Response, attempt: int) -> float:
    """Seconds to wait before retrying a 429.

    Uses ``X-Rate-Limit-Reset`` (epoch seconds) measured against the
    server's ``Date`` header, plus one second. Falls back to the local
    clock without ``Date``, and to ``2 ** attempt`` without a reset header.
    """
    reset = response.headers.get("X-Rate-Limit-Reset")
    if not reset:
        return float(2 ** attempt)
    try:
        reset_at = float(reset)
    except ValueError:
        return float(2 ** attempt)

    now = time.time()
    date_header = response.headers.get("Date")
    if date_header:
        try:
            now = parsedate_to_datetime(date_header).timestamp()
        except (TypeError, ValueError):
            pass
    return max(reset_at - now, 0.0) + 1.0
