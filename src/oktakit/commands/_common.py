"""Helpers shared by the resource sub-commands."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, Optional, TypeVar

import typer

from oktakit.client import OktaClient
from oktakit.exit_codes import EXIT_INVALID_USAGE
from oktakit.models import Profile
from oktakit.output import error

T = TypeVar("T")


def require_profile(ctx: typer.Context) -> Profile:
    """Resolve the active profile or exit with a hint.

    Raises:
        typer.Exit: With code 2 when no profile can be resolved.
    """
    from oktakit.config import resolve_config

    obj = ctx.obj or {}
    _, profile = resolve_config(cli_profile=obj.get("profile"), cli_org_url=obj.get("org_url"))
    if profile is None:
        error(
            "No active profile. Run: oktakit config init --org-url <url> "
            "or set OKTA_CLIENT_ORGURL and OKTA_CLIENT_TOKEN"
        )
        raise typer.Exit(code=EXIT_INVALID_USAGE)
    return profile


def create_client(profile: Profile) -> OktaClient:
    return OktaClient(profile)


def run(coro: Coroutine[Any, Any, T]) -> T:
    return asyncio.run(coro)


def fmt(value: Optional[object]) -> str:
    if value is None:
        return ""
    return str(value)
