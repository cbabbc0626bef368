"""
Keyward Console
================

Thin layer over :class:`rich.console.Console` so every command shares one
theme: banner, section rules, tagged status lines, tables and a spinner.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, Optional, Sequence

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

THEME = Theme(
    {
        "kw.accent": "bright_cyan",
        "kw.rule": "bold magenta",
        "kw.muted": "dim",
        "kw.ok": "bold green",
        "kw.warn": "bold yellow",
        "kw.fail": "bold red",
        "kw.note": "bold blue",
    }
)

_WORDMARK = r"""
  _  __ ___ __   __ __        __ _    ___  ___
 | |/ /| __|\ \ / / \ \      / // \  | _ \|   \
 | ' < | _|  \ V /   \ \ /\ / // _ \ |   /| |) |
 |_|\_\|___|  |_|     \_/\_//_/ \_\|_|_\|___/
"""

# style, marker, tag
_NOTICES = {
    "success": ("kw.ok", "✔", "OK"),
    "warning": ("kw.warn", "!", "WARN"),
    "error": ("kw.fail", "✘", "ERROR"),
    "info": ("kw.note", "i", "INFO"),
}


class KeywardConsole:
    """Themed console shared by the CLI and the result renderers.

    ``quiet`` silences everything; ``record`` keeps a transcript that
    :meth:`export_text` returns (the tests read it).
    """

    def __init__(self, *, quiet: bool = False, record: bool = False) -> None:
        self.rich = Console(theme=THEME, quiet=quiet, record=record, highlight=False)

    def banner(self, version: str = "1.0.0") -> None:
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M")
        body = Group(
            Text(_WORDMARK.strip("\n"), style="kw.accent"),
            Text("Password Strength Analysis & Secure Generation", style="bold"),
            Text(f"v{version} · {stamp}", style="kw.muted"),
        )
        self.rich.print(Panel(Align.center(body), border_style="kw.accent"))

    def section(self, title: str) -> None:
        self.rich.rule(Text(title, style="kw.rule"), style="kw.rule")
        self.rich.print()

    def _notice(self, kind: str, message: str) -> None:
        style, marker, tag = _NOTICES[kind]
        line = Text.assemble((f"{marker} {tag} ", style), message)
        self.rich.print(line)

    def success(self, message: str) -> None:
        self._notice("success", message)

    def warning(self, message: str) -> None:
        self._notice("warning", message)

    def error(self, message: str) -> None:
        self._notice("error", message)

    def info(self, message: str) -> None:
        self._notice("info", message)

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: Optional[str] = None,
        styles: Optional[Sequence[str]] = None,
    ) -> None:
        """Print a table; cells that are not :class:`Text` are stringified."""
        grid = Table(
            title=title,
            caption=caption,
            border_style="kw.accent",
            header_style="kw.rule",
        )
        column_styles = list(styles or ())
        column_styles += [""] * (len(columns) - len(column_styles))
        for name, style in zip(columns, column_styles):
            grid.add_column(name, style=style)
        for row in rows:
            grid.add_row(*(c if isinstance(c, Text) else str(c) for c in row))
        self.rich.print(grid)

    @contextmanager
    def status(self, message: str = "Working...") -> Iterator[Status]:
        """Spinner shown while the block runs."""
        with self.rich.status(Text(message, style="kw.note"), spinner="dots") as spinner:
            yield spinner

    def print(self, *args: Any, **kwargs: Any) -> None:
        self.rich.print(*args, **kwargs)

    def export_text(self) -> str:
        return self.rich.export_text()
