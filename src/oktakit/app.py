"""The ``oktakit`` command line.

``oktakit [global options] <groups|users|config> <command> ...``

:func:`main` is the console-script entry point. It runs the Typer app
without Click's standalone handling so that every
:class:`~oktakit.exceptions.OktaError` leaves with its own exit code.
Anything unexpected is written to a crash log under the data directory.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime, timezone
from typing import Optional

import click
import typer

from oktakit import __version__
from oktakit.exceptions import OktaError
from oktakit.exit_codes import EXIT_CANCELLED, EXIT_GENERIC_FAILURE, EXIT_SUCCESS

app = typer.Typer(
    name="oktakit",
    help="Browse Okta groups and users from the command line.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"oktakit {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True,
        help="Print the oktakit version.",
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Saved profile (org) to connect to."
    ),
    org_url: Optional[str] = typer.Option(
        None, "--org-url", help="Org URL, overriding the profile."
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON on stdout."),
    plain_output: bool = typer.Option(False, "--plain", help="Emit tab-separated text."),
    no_color: bool = typer.Option(False, "--no-color", help="Never use colour."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print data and errors."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and retries."),
) -> None:
    """Configure output and remember connection overrides for sub-commands.

    ``--verbose`` also sends the ``oktakit`` logger to stderr at DEBUG.
    """
    from oktakit.output import OutputFormat, OutputManager, set_output

    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = OutputFormat.AUTO
    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    if verbose:
        logging.basicConfig(stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
        logging.getLogger("oktakit").setLevel(logging.DEBUG)

    ctx.obj = {"profile": profile, "org_url": org_url}


def _register_commands() -> None:
    from oktakit.commands.config import config_app
    from oktakit.commands.groups import groups_app
    from oktakit.commands.users import users_app

    app.add_typer(groups_app, name="groups", help="List groups and their members.")
    app.add_typer(users_app, name="users", help="List users and their groups.")
    app.add_typer(config_app, name="config", help="Create and inspect profiles.")


_register_commands()


def _setup_signal_handlers() -> None:
    """Turn Ctrl-C into a one-line message and exit code 130."""

    def _on_sigint(signum: int, frame: object) -> None:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)

    signal.signal(signal.SIGINT, _on_sigint)


def _write_crash_log() -> str:
    from oktakit.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    path = logs_dir / f"crash-{stamp}.log"
    path.write_text(f"oktakit {__version__}\n{traceback.format_exc()}", encoding="utf-8")
    return str(path)


def main() -> None:
    """Run the CLI and exit with a code from :mod:`oktakit.exit_codes`."""
    from oktakit.output import error

    _setup_signal_handlers()
    try:
        rv = app(standalone_mode=False)
    except OktaError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except click.exceptions.Abort:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)
    except click.ClickException as exc:
        exc.show()
        sys.exit(exc.exit_code)
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)
    except Exception:
        error(f"Unexpected error; details written to {_write_crash_log()}")
        sys.exit(EXIT_GENERIC_FAILURE)
    sys.exit(rv if isinstance(rv, int) else EXIT_SUCCESS)
