"""User commands -- ``oktakit users list|get|groups``."""

from __future__ import annotations

from typing import Optional

import typer

from oktakit.commands import _common
from oktakit.output import info, print_document, print_table
from oktakit.resources import Group, User

users_app = typer.Typer(no_args_is_help=True)

_USER_HEADERS = ["ID", "Login", "Name", "Status"]


def _user_row(user: User) -> list[str]:
    name = " ".join(p for p in (user.profile.first_name, user.profile.last_name) if p)
    return [
        _common.fmt(user.id),
        _common.fmt(user.profile.login),
        name,
        _common.fmt(user.status),
    ]


@users_app.command("list")
def users_list(
    ctx: typer.Context,
    q: Optional[str] = typer.Option(None, "--q", help="Prefix match on name or email."),
    search: Optional[str] = typer.Option(None, "--search", help="Search expression."),
    filter: Optional[str] = typer.Option(None, "--filter", help="Filter expression."),
    limit: Optional[int] = typer.Option(None, "--limit", help="Page size."),
    max_items: Optional[int] = typer.Option(
        None, "--max", help="Stop after this many users."
    ),
) -> None:
    """List users, following pagination until done or ``--max`` is reached.

    Example::

        oktakit users list --filter 'status eq "ACTIVE"' --max 50
    """
    profile = _common.require_profile(ctx)

    async def _collect() -> list[User]:
        async with _common.create_client(profile) as client:
            collection = client.users.list_users(
                q=q, search=search, filter=filter, limit=limit,
            )
            return await collection.to_list(limit=max_items)

    users = _common.run(_collect())
    print_table(_USER_HEADERS, [_user_row(u) for u in users], title="Users")
    info(f"{len(users)} user(s)")


@users_app.command("get")
def users_get(
    ctx: typer.Context,
    user_id: str = typer.Argument(help="User id or login."),
) -> None:
    """Show one user as JSON."""
    profile = _common.require_profile(ctx)

    async def _fetch() -> User:
        async with _common.create_client(profile) as client:
            return await client.users.get_user(user_id)

    user = _common.run(_fetch())
    print_document(user.model_dump(mode="json", by_alias=True, exclude_none=True))


@users_app.command("groups")
def users_groups(
    ctx: typer.Context,
    user_id: str = typer.Argument(help="User id or login."),
) -> None:
    """List the groups a user belongs to."""
    profile = _common.require_profile(ctx)

    async def _collect() -> list[Group]:
        async with _common.create_client(profile) as client:
            return await client.users.list_user_groups(user_id).to_list()

    groups = _common.run(_collect())
    rows = [
        [_common.fmt(g.id), _common.fmt(g.profile.name), _common.fmt(g.type)]
        for g in groups
    ]
    print_table(["ID", "Name", "Type"], rows, title=f"Groups of {user_id}")
    info(f"{len(groups)} group(s)")
