"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- print_document and print_table in every format
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from oktakit import output as output_module
from oktakit.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("oktakit.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("oktakit.output._is_tty", lambda: True)


@pytest.fixture()
def clean_env(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("TERM", "xterm-256color")


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, clean_env):
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_tty_but_no_color(self, tty, clean_env):
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, clean_env):
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout / stderr
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    def test_document_goes_to_stdout(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_document("hello world")
        captured = capfd.readouterr()
        assert "hello world" in captured.out
        assert captured.err == ""

    @pytest.mark.parametrize("method", ["info", "error", "warning", "success"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        getattr(mgr, method)("a message")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "a message" in captured.err

    def test_error_prefix(self, capfd, non_tty):
        OutputManager(no_color=True).error("boom")
        assert capfd.readouterr().err.strip() == "Error: boom"


class TestQuietAndVerbose:
    def test_quiet_suppresses_info_and_success(self, capfd, non_tty):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.success("hidden too")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_errors_and_warnings(self, capfd, non_tty):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.warning("careful")
        mgr.error("broken")
        err = capfd.readouterr().err
        assert "Warning: careful" in err
        assert "Error: broken" in err

    def test_debug_hidden_by_default(self, capfd, non_tty):
        OutputManager(no_color=True).debug("trace")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty):
        mgr = OutputManager(no_color=True, verbose=True)
        mgr.debug("trace")
        assert "[debug] trace" in capfd.readouterr().err
        assert mgr.is_verbose


# ------------------------------------------------------------------ #
# Data rendering
# ------------------------------------------------------------------ #


class TestPrintDocument:
    def test_json_document(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON, no_color=True).print_document(
            {"id": "00g1", "profile": {"name": "Eng"}}
        )
        assert json.loads(capfd.readouterr().out) == {"id": "00g1", "profile": {"name": "Eng"}}

    def test_plain_dict_is_key_value(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_document(
            {"id": "00g1", "type": "OKTA_GROUP"}
        )
        assert capfd.readouterr().out.splitlines() == ["id\t00g1", "type\tOKTA_GROUP"]

    def test_plain_flattens_nested_profile(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_document(
            {
                "id": "00u1",
                "profile": {"login": "ada@example.com", "email": None},
                "credentials": {},
                "objectClass": ["okta:user"],
            }
        )
        assert capfd.readouterr().out.splitlines() == [
            "id\t00u1",
            "profile.login\tada@example.com",
            "profile.email\t",
            "credentials\t{}",
            'objectClass\t["okta:user"]',
        ]


class TestPrintTable:
    HEADERS = ["ID", "Name"]
    ROWS = [["00g1", "Everyone"], ["00g2", "Eng"]]

    def test_json_records(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON, no_color=True).print_table(self.HEADERS, self.ROWS)
        assert json.loads(capfd.readouterr().out) == [
            {"ID": "00g1", "Name": "Everyone"},
            {"ID": "00g2", "Name": "Eng"},
        ]

    def test_plain_rows_without_header(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_table(self.HEADERS, self.ROWS)
        assert capfd.readouterr().out.splitlines() == ["00g1\tEveryone", "00g2\tEng"]

    def test_rich_table_contains_cells(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).print_table(
            self.HEADERS, self.ROWS, title="Groups"
        )
        out = capfd.readouterr().out
        assert "Everyone" in out
        assert "Groups" in out


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default_lazily(self, non_tty):
        reset_output()
        first = get_output()
        assert get_output() is first

    def test_set_output_is_used_by_helpers(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.info("via helper")
        output_module.print_table(["A"], [["1"]])
        captured = capfd.readouterr()
        assert "via helper" in captured.err
        assert captured.out.strip() == "1"
