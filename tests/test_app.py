"""CLI tests: commands run against a mocked org through Typer's CliRunner."""

from __future__ import annotations

import json

import httpx
import pytest

from conftest import ORG_URL, paged_handler
from oktakit import __version__
from oktakit.app import app, main
from oktakit.client import OktaClient
from oktakit.config import load_global_config, load_profile, save_profile
from oktakit.models import Profile


def _group(gid: str, name: str) -> dict:
    return {"id": gid, "type": "OKTA_GROUP", "profile": {"name": name, "description": f"{name} team"}}


def _user(uid: str, login: str) -> dict:
    return {
        "id": uid,
        "status": "ACTIVE",
        "profile": {"login": login, "firstName": "Ada", "lastName": "Lovelace"},
    }


PAGES = {
    "/api/v1/groups?limit=2": (
        [_group("00g1", "Everyone"), _group("00g2", "Eng")],
        f"{ORG_URL}/api/v1/groups?after=00g2&limit=2",
    ),
    "/api/v1/groups?after=00g2&limit=2": ([_group("00g3", "Ops")], None),
    "/api/v1/groups/00g1/users": ([_user("00u1", "ada@example.com")], None),
    "/api/v1/users": ([_user("00u1", "ada@example.com")], None),
    "/api/v1/users/00u1/groups": ([_group("00g1", "Everyone")], None),
}


@pytest.fixture
def org(isolated_config, monkeypatch: pytest.MonkeyPatch) -> list[httpx.Request]:
    """Route the CLI to a mocked org configured purely through env vars."""
    monkeypatch.setenv("OKTA_CLIENT_ORGURL", ORG_URL)
    monkeypatch.setenv("OKTA_CLIENT_TOKEN", "00cliTOKEN")
    seen: list[httpx.Request] = []
    handler = paged_handler(PAGES, seen)
    monkeypatch.setattr(
        "oktakit.commands._common.create_client",
        lambda profile: OktaClient(profile, transport=httpx.MockTransport(handler)),
    )
    return seen


# ---------------------------------------------------------------------------
# Root callback
# ---------------------------------------------------------------------------


class TestRoot:
    def test_version(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"oktakit {__version__}" in result.output

    def test_no_profile_exits_with_usage_error(self, cli_runner, isolated_config) -> None:
        result = cli_runner.invoke(app, ["groups", "list"])
        assert result.exit_code == 2
        assert "No active profile" in result.output


# ---------------------------------------------------------------------------
# Groups and users
# ---------------------------------------------------------------------------


class TestGroupsCommands:
    def test_list_follows_pages(self, cli_runner, org) -> None:
        result = cli_runner.invoke(app, ["--json", "--quiet", "groups", "list", "--limit", "2"])

        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)
        assert [r["Name"] for r in rows] == ["Everyone", "Eng", "Ops"]
        assert rows[0]["Description"] == "Everyone team"
        assert org[0].headers["Authorization"] == "SSWS 00cliTOKEN"

    def test_list_max_stops_early(self, cli_runner, org) -> None:
        result = cli_runner.invoke(
            app, ["--json", "--quiet", "groups", "list", "--limit", "2", "--max", "2"]
        )
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.stdout)) == 2
        assert len(org) == 1

    def test_plain_members(self, cli_runner, org) -> None:
        result = cli_runner.invoke(app, ["--plain", "--quiet", "groups", "members", "00g1"])
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "00u1\tada@example.com\tACTIVE"


class TestUsersCommands:
    def test_list(self, cli_runner, org) -> None:
        result = cli_runner.invoke(app, ["--json", "--quiet", "users", "list"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == [
            {"ID": "00u1", "Login": "ada@example.com", "Name": "Ada Lovelace", "Status": "ACTIVE"}
        ]

    def test_groups_of_user(self, cli_runner, org) -> None:
        result = cli_runner.invoke(app, ["--plain", "--quiet", "users", "groups", "00u1"])
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "00g1\tEveryone\tOKTA_GROUP"


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfigCommands:
    def test_init_saves_default_profile(self, cli_runner, isolated_config) -> None:
        result = cli_runner.invoke(app, ["config", "init", "--org-url", "https://dev-1.okta.com/"])

        assert result.exit_code == 0, result.output
        profile = load_profile("default")
        assert profile.org_url == "https://dev-1.okta.com"
        assert profile.auth.source == "env:OKTA_CLIENT_TOKEN"
        assert load_global_config().default_profile == "default"

    def test_init_rejects_bad_url(self, cli_runner, isolated_config) -> None:
        result = cli_runner.invoke(app, ["config", "init", "--org-url", "dev-1.okta.com"])
        assert result.exit_code == 2

    def test_init_refuses_overwrite_without_force(self, cli_runner, isolated_config) -> None:
        save_profile(Profile(name="default", org_url="https://old.okta.com"))
        result = cli_runner.invoke(app, ["config", "init", "--org-url", "https://new.okta.com"])
        assert result.exit_code == 2
        assert load_profile("default").org_url == "https://old.okta.com"

    def test_init_rejects_unknown_auth_type(self, cli_runner, isolated_config) -> None:
        result = cli_runner.invoke(
            app, ["config", "init", "--org-url", "https://dev-1.okta.com", "--auth-type", "saml"]
        )
        assert result.exit_code == 2

    def test_show_reports_active_profile(self, cli_runner, isolated_config) -> None:
        save_profile(Profile(name="prod", org_url="https://prod.okta.com"))
        result = cli_runner.invoke(app, ["--json", "--quiet", "config", "show"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["profiles"] == ["prod"]
        assert data["active_profile"]["org_url"] == "https://prod.okta.com"


# ---------------------------------------------------------------------------
# Entry point exit codes
# ---------------------------------------------------------------------------


class TestMain:
    @pytest.fixture(autouse=True)
    def _no_signal_handlers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("oktakit.app._setup_signal_handlers", lambda: None)

    def test_api_error_maps_to_exit_code(self, org, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.setattr("sys.argv", ["oktakit", "--no-color", "groups", "get", "00gX"])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 4
        assert "E0000007" in capsys.readouterr().err

    def test_success_exits_zero(self, org, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.argv", ["oktakit", "--quiet", "users", "list"])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 0
