"""Group commands -- ``oktakit groups list|get|members``."""

from __future__ import annotations

from typing import Optional

import typer

from oktakit.commands import _common
from oktakit.output import info, print_document, print_table
from oktakit.resources import Group, User

groups_app = typer.Typer(no_args_is_help=True)

_GROUP_HEADERS = ["ID", "Name", "Type", "Description"]
_MEMBER_HEADERS = ["ID", "Login", "Status"]


def _group_row(group: Group) -> list[str]:
    return [
        _common.fmt(group.id),
        _common.fmt(group.profile.name),
        _common.fmt(group.type),
        _common.fmt(group.profile.description),
    ]


@groups_app.command("list")
def groups_list(
    ctx: typer.Context,
    q: Optional[str] = typer.Option(None, "--q", help="Prefix match on group name."),
    search: Optional[str] = typer.Option(None, "--search", help="Search expression."),
    filter: Optional[str] = typer.Option(None, "--filter", help="Filter expression."),
    limit: Optional[int] = typer.Option(None, "--limit", help="Page size."),
    max_items: Optional[int] = typer.Option(
        None, "--max", help="Stop after this many groups."
    ),
) -> None:
    """List groups, following pagination until done or ``--max`` is reached.

    Example::

        oktakit groups list --q eng --limit 200
    """
    profile = _common.require_profile(ctx)

    async def _collect() -> list[Group]:
        async with _common.create_client(profile) as client:
            collection = client.groups.list_groups(
                q=q, search=search, filter=filter, limit=limit,
            )
            return await collection.to_list(limit=max_items)

    groups = _common.run(_collect())
    print_table(_GROUP_HEADERS, [_group_row(g) for g in groups], title="Groups")
    info(f"{len(groups)} group(s)")


@groups_app.command("get")
def groups_get(
    ctx: typer.Context,
    group_id: str = typer.Argument(help="Group id."),
) -> None:
    """Show one group as JSON."""
    profile = _common.require_profile(ctx)

    async def _fetch() -> Group:
        async with _common.create_client(profile) as client:
            return await client.groups.get_group(group_id)

    group = _common.run(_fetch())
    print_document(group.model_dump(mode="json", by_alias=True, exclude_none=True))


@groups_app.command("members")
def groups_members(
    ctx: typer.Context,
    group_id: str = typer.Argument(help="Group id."),
    limit: Optional[int] = typer.Option(None, "--limit", help="Page size."),
    max_items: Optional[int] = typer.Option(
        None, "--max", help="Stop after this many users."
    ),
) -> None:
    """List the users in a group."""
    profile = _common.require_profile(ctx)

    async def _collect() -> list[User]:
        async with _common.create_client(profile) as client:
            members = client.groups.list_group_users(group_id, limit=limit)
            return await members.to_list(limit=max_items)

    users = _common.run(_collect())
    rows = [
        [_common.fmt(u.id), _common.fmt(u.profile.login), _common.fmt(u.status)]
        for u in users
    ]
    print_table(_MEMBER_HEADERS, rows, title=f"Members of {group_id}")
    info(f"{len(users)} member(s)")
