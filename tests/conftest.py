"""Shared test fixtures for oktakit.

Provides an in-memory fake data store for the collection cursors, helpers
for building Okta-style paged HTTP responses, isolated config directories,
and output-state resets.
"""

from __future__ import annotations

import asyncio
import gc
import weakref
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Optional

import httpx
import pytest

from oktakit.collection.page import CollectionPage
from oktakit.models import AuthConfig, HttpRequest, Profile, RequestConfig, RequestContext
from oktakit.output import OutputManager, reset_output, set_output

ORG_URL = "https://dev-123.okta.com"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Install a quiet, colourless OutputManager and drop it afterwards."""
    set_output(OutputManager(no_color=True, quiet=True))
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Fake data store
# ---------------------------------------------------------------------------


class FakeDataStore:
    """Serves scripted pages keyed by request URI.

    ``pages`` maps a URI (the initial path, or a next link) to either a
    ``(items, next_link)`` tuple or an exception instance to raise. Exceptions
    are consumed on use so a retry sees the next scripted response, if any,
    via ``retry_pages``.

    Served pages are tracked by weak reference so tests can check how many
    are still alive.
    """

    def __init__(
        self,
        pages: dict[str, Any],
        retry_pages: Optional[dict[str, Any]] = None,
    ) -> None:
        self.pages = dict(pages)
        self.retry_pages = dict(retry_pages or {})
        self.calls: list[str] = []
        self.contexts: list[Optional[RequestContext]] = []
        self.held_pages: list[weakref.ref[CollectionPage[Any]]] = []

    async def get_page(
        self,
        request: HttpRequest,
        model: type,
        context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> CollectionPage[Any]:
        uri = request.resolved_uri()
        self.calls.append(uri)
        self.contexts.append(context)
        await asyncio.sleep(0)

        scripted = self.pages[uri]
        if isinstance(scripted, BaseException):
            if uri in self.retry_pages:
                self.pages[uri] = self.retry_pages.pop(uri)
            raise scripted

        items, next_link = scripted
        page = CollectionPage(items=list(items), next_link=next_link)
        self.held_pages.append(weakref.ref(page))
        return page

    def live_pages(self) -> int:
        """How many pages served so far are still referenced by someone."""
        gc.collect()
        return sum(1 for ref in self.held_pages if ref() is not None)


@pytest.fixture
def make_store() -> Callable[..., FakeDataStore]:
    def _factory(pages: dict[str, Any], retry_pages: Optional[dict[str, Any]] = None) -> FakeDataStore:
        return FakeDataStore(pages, retry_pages)

    return _factory


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------


def link_header(next_url: Optional[str], self_url: str) -> str:
    """Build an Okta-style Link header value."""
    value = f'<{self_url}>; rel="self"'
    if next_url:
        value += f', <{next_url}>; rel="next"'
    return value


def paged_handler(
    pages: dict[str, tuple[Sequence[dict[str, Any]], Optional[str]]],
    seen: Optional[list[httpx.Request]] = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Return an httpx.MockTransport handler serving *pages* keyed by path+query."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        key = request.url.raw_path.decode()
        if key not in pages:
            return httpx.Response(
                404,
                json={"errorCode": "E0000007", "errorSummary": f"Not found: {key}"},
            )
        items, next_url = pages[key]
        return httpx.Response(
            200,
            json=list(items),
            headers={"Link": link_header(next_url, str(request.url))},
        )

    return handler


# ---------------------------------------------------------------------------
# Profile fixtures
# ---------------------------------------------------------------------------


def make_profile(max_retries: int = 0, auth: Optional[AuthConfig] = None) -> Profile:
    return Profile(
        name="test",
        org_url=ORG_URL,
        auth=auth,
        request=RequestConfig(timeout=5, max_retries=max_retries),
    )


@pytest.fixture
def sample_profile() -> Profile:
    """A profile with SSWS auth read from ``OKTA_TEST_TOKEN``."""
    return Profile(
        name="test-org",
        org_url=ORG_URL,
        auth=AuthConfig(type="ssws", source="env:OKTA_TEST_TOKEN"),
        request=RequestConfig(timeout=5, max_retries=0),
    )


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG dirs at tmp_path, clear oktakit env vars, and chdir there."""
    monkeypatch.setattr("oktakit.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["OKTAKIT_PROFILE", "OKTA_CLIENT_ORGURL", "OKTA_CLIENT_TOKEN"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def cli_runner():
    from typer.testing import CliRunner

    return CliRunner()
