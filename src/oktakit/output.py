"""Terminal output for the ``oktakit`` CLI.

Resources and tables go to stdout; every status line, warning, error, and
debug trace goes to stderr, so ``oktakit users list --json | jq`` always
sees clean data.

The format is chosen once per invocation:

* ``json`` -- machine-readable documents and arrays of row objects.
* ``plain`` -- tab-separated lines, nested keys flattened to ``a.b``.
* ``rich`` -- coloured tables and highlighted JSON.
* ``auto`` -- ``rich`` on a colour-capable terminal, otherwise ``plain``.

Colour is off with ``--no-color``, ``NO_COLOR`` (any value), or
``TERM=dumb``.

Library code only touches :func:`get_output` ``.debug()``; the CLI installs
the configured :class:`OutputManager` with :func:`set_output`.
"""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Iterable, Iterator, Sequence
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.table import Table


class OutputFormat(str, Enum):
    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Per-invocation output settings and the two consoles they drive.

    Args:
        format: Requested format; ``AUTO`` is resolved immediately.
        no_color: Force colour off regardless of the environment.
        quiet: Drop ``info`` and ``success`` lines.
        verbose: Show ``debug`` lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._format = _resolve_format(format, self._no_color)

        rich_stdout = self._format is OutputFormat.RICH
        self._out = Console(file=sys.stdout, no_color=self._no_color, force_terminal=rich_stdout)
        self._err = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # --- stdout ---

    def print_document(self, document: Any) -> None:
        """Print one resource dump (or any JSON-like value)."""
        if self._format is OutputFormat.JSON:
            self._write(json.dumps(document, indent=2, ensure_ascii=False, default=str))
        elif self._format is OutputFormat.PLAIN:
            for line in _plain_lines(document):
                self._write(line)
        else:
            self._out.print_json(data=document, default=str)

    def print_table(
        self,
        headers: Sequence[str],
        rows: Iterable[Sequence[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows under *headers*.

        JSON output is an array of objects keyed by header; plain output
        is one tab-separated line per row with no header line.
        """
        if self._format is OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self._write(json.dumps(records, indent=2, ensure_ascii=False))
            return
        if self._format is OutputFormat.PLAIN:
            for row in rows:
                self._write("\t".join(row))
            return

        table = Table(title=title, header_style="bold")
        for header in headers:
            table.add_column(header, overflow="fold")
        for row in rows:
            table.add_row(*row)
        self._out.print(table)

    def _write(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    # --- stderr ---

    def info(self, message: str) -> None:
        if not self._quiet:
            self._status(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._status(message, "green")

    def warning(self, message: str) -> None:
        self._status(f"Warning: {message}", "yellow")

    def error(self, message: str) -> None:
        self._status(f"Error: {message}", "bold red")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._status(f"[debug] {message}", "dim")

    def _status(self, text: str, style: Optional[str] = None) -> None:
        if self._no_color:
            print(text, file=sys.stderr, flush=True)
        else:
            self._err.print(text, style=style, markup=False, highlight=False)


def _resolve_format(requested: OutputFormat, no_color: bool) -> OutputFormat:
    if requested is not OutputFormat.AUTO:
        return requested
    return OutputFormat.RICH if _is_tty() and not no_color else OutputFormat.PLAIN


def _plain_lines(value: Any, prefix: str = "") -> Iterator[str]:
    """Flatten nested dicts into ``key.sub<TAB>value`` lines."""
    if isinstance(value, dict):
        for key, item in value.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            if isinstance(item, dict) and item:
                yield from _plain_lines(item, path)
            else:
                yield f"{path}\t{_plain_scalar(item)}"
    elif prefix:
        yield f"{prefix}\t{_plain_scalar(value)}"
    else:
        yield _plain_scalar(value)


def _plain_scalar(value: Any) -> str:
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return "" if value is None else str(value)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- Global instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    global _output
    _output = None


def print_document(document: Any) -> None:
    get_output().print_document(document)


def print_table(
    headers: Sequence[str],
    rows: Iterable[Sequence[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)
