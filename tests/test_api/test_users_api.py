"""End-to-end tests for UsersClient over a mocked Okta org."""

from __future__ import annotations

import json

import httpx
import pytest

from conftest import ORG_URL, make_profile, paged_handler
from oktakit.client import OktaClient
from oktakit.resources import User, UserProfile


def _user(uid: str, login: str, **extra) -> dict:
    profile = {"login": login, "email": login, "firstName": "Ada", "lastName": "Lovelace"}
    profile.update(extra)
    return {"id": uid, "status": "ACTIVE", "profile": profile}


def _client(handler) -> OktaClient:
    return OktaClient(make_profile(), transport=httpx.MockTransport(handler))


class TestListUsers:
    @pytest.mark.asyncio
    async def test_follows_next_link_cursor(self) -> None:
        seen: list[httpx.Request] = []
        pages = {
            "/api/v1/users?limit=1": (
                [_user("00u1", "a@example.com")],
                f"{ORG_URL}/api/v1/users?after=00u1&limit=1",
            ),
            "/api/v1/users?after=00u1&limit=1": ([_user("00u2", "b@example.com")], None),
        }
        async with _client(paged_handler(pages, seen)) as client:
            ids = [u.id async for u in client.users.list_users(limit=1)]

        assert ids == ["00u1", "00u2"]
        assert len(seen) == 2
        assert seen[1].url.params["after"] == "00u1"

    @pytest.mark.asyncio
    async def test_empty_middle_page_is_skipped(self) -> None:
        pages = {
            "/api/v1/users?limit=1": (
                [_user("00u1", "a@example.com")],
                f"{ORG_URL}/api/v1/users?after=00u1&limit=1",
            ),
            "/api/v1/users?after=00u1&limit=1": (
                [],
                f"{ORG_URL}/api/v1/users?after=00u2&limit=1",
            ),
            "/api/v1/users?after=00u2&limit=1": ([_user("00u3", "c@example.com")], None),
        }
        async with _client(paged_handler(pages)) as client:
            users = await client.users.list_users(limit=1).to_list()

        assert [u.id for u in users] == ["00u1", "00u3"]

    @pytest.mark.asyncio
    async def test_custom_profile_attributes_are_kept(self) -> None:
        pages = {"/api/v1/users": ([_user("00u1", "a@example.com", costCenter="42")], None)}
        async with _client(paged_handler(pages)) as client:
            user = await client.users.list_users().first()

        assert user.profile.first_name == "Ada"
        assert user.profile.get_property("costCenter") == "42"

    @pytest.mark.asyncio
    async def test_filter_is_url_encoded(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with _client(handler) as client:
            assert await client.users.list_users(filter='status eq "ACTIVE"').to_list() == []

        assert seen[0].url.params["filter"] == 'status eq "ACTIVE"'


class TestUserCrud:
    @pytest.mark.asyncio
    async def test_get_user_by_login_escapes_path(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_user("00u1", "a@example.com"))

        async with _client(handler) as client:
            user = await client.users.get_user("a@example.com")

        assert seen[0].url.path == "/api/v1/users/a@example.com"
        assert user.id == "00u1"

    @pytest.mark.asyncio
    async def test_create_user_with_activate_flag(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_user("00u9", "new@example.com"))

        new_user = User(profile=UserProfile(login="new@example.com", first_name="New"))
        async with _client(handler) as client:
            created = await client.users.create_user(new_user, activate=False)

        assert seen[0].url.params["activate"] == "false"
        assert json.loads(seen[0].content) == {
            "profile": {"login": "new@example.com", "firstName": "New"},
        }
        assert created.id == "00u9"

    @pytest.mark.asyncio
    async def test_update_user_sends_profile(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_user("00u1", "a@example.com"))

        async with _client(handler) as client:
            await client.users.update_user(
                "00u1", User(profile=UserProfile(login="a@example.com", mobile_phone="555"))
            )

        assert seen[0].method == "PUT"
        assert json.loads(seen[0].content) == {
            "profile": {"login": "a@example.com", "mobilePhone": "555"},
        }

    @pytest.mark.asyncio
    async def test_deactivate_then_delete(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        async with _client(handler) as client:
            await client.users.deactivate_user("00u1")
            await client.users.delete_user("00u1")

        assert [(r.method, r.url.path) for r in seen] == [
            ("POST", "/api/v1/users/00u1/lifecycle/deactivate"),
            ("DELETE", "/api/v1/users/00u1"),
        ]


class TestUserGroups:
    @pytest.mark.asyncio
    async def test_list_user_groups(self) -> None:
        pages = {
            "/api/v1/users/00u1/groups": (
                [{"id": "00g1", "type": "BUILT_IN", "profile": {"name": "Everyone"}}],
                None,
            ),
        }
        async with _client(paged_handler(pages)) as client:
            groups = await client.users.list_user_groups("00u1").to_list()

        assert [g.profile.name for g in groups] == ["Everyone"]
