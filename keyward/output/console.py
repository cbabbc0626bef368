"""
Keyward Console Output
=======================

Rich-based console output formatters for Keyward: a five-segment strength
meter, analysis detail and crack-time tables, suggestions, breach status,
generated batches and the analysis history.

Generated passwords are the only plaintext ever printed; analysed
passwords are shown by length alone.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import KeywardConsole
from keyward.core.models import (
    AnalysisResult,
    BreachOutcome,
    BreachStatus,
    GeneratedPassword,
    HistoryEntry,
    StrengthLevel,
)

_BREACH_STYLES: dict[BreachStatus, str] = {
    BreachStatus.FOUND: "bold white on red",
    BreachStatus.NOT_FOUND: "bold green",
    BreachStatus.UNKNOWN: "bold yellow",
}

_SCENARIO_LABELS: dict[str, str] = {
    "online_throttling_100_per_hour": "Online, throttled (100/hour)",
    "online_no_throttling_10_per_second": "Online, unthrottled (10/s)",
    "offline_slow_hashing_1e4_per_second": "Offline, slow hash (1e4/s)",
    "offline_fast_hashing_1e10_per_second": "Offline, fast hash (1e10/s)",
}

_METER_SEGMENT = "█" * 6
_METER_EMPTY = "░" * 6


class KeywardConsoleOutput:
    """Console output formatters for Keyward results.

    Usage::

        console = KeywardConsole()
        output = KeywardConsoleOutput(console)
        output.display_analysis(report.result, report.breach)
        output.display_batch(batch, strongest)
        output.display_history(engine.history.entries())
    """

    def __init__(self, console: Optional[KeywardConsole] = None) -> None:
        self.console = console or KeywardConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Analysis Display
    # ------------------------------------------------------------------ #

    def strength_meter(self, score: int) -> Text:
        """Five segments, ``score + 1`` of them filled in the tier colour."""
        level = StrengthLevel.from_score(score)
        meter = Text()
        meter.append("Strength: ", style="bold")
        for segment in range(len(StrengthLevel)):
            if segment <= level.value:
                meter.append(_METER_SEGMENT, style=level.colour)
            else:
                meter.append(_METER_EMPTY, style="dim")
            meter.append(" ")
        meter.append(f" {level.label.upper()}", style=level.colour)
        meter.append(f"  ({level.description})", style="dim")
        return meter

    def display_analysis(
        self,
        result: AnalysisResult,
        breach: Optional[BreachOutcome] = None,
    ) -> None:
        """Display a strength analysis and, if given, its breach outcome."""
        self.console.section("Password Analysis")
        self._rich.print(
            Panel(self.strength_meter(result.score), title="Strength Meter", border_style="cyan")
        )

        tbl = Table(
            border_style="kw.accent",
            header_style="kw.rule",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")
        tbl.add_row("Length", str(result.length))
        tbl.add_row("Entropy", f"{result.entropy_bits:.1f} bits")
        tbl.add_row("Score", f"{result.score}/4")
        if result.patterns:
            tbl.add_row(
                "Patterns",
                ", ".join(p.value.replace("_", " ") for p in result.patterns),
            )
        if breach is not None:
            tbl.add_row("Breach Status", self.breach_text(breach))
        self._rich.print(tbl)

        crack_tbl = Table(
            title="Crack Time Estimates",
            border_style="kw.accent",
            header_style="kw.rule",
            show_lines=True,
        )
        crack_tbl.add_column("Attack Scenario", style="bold")
        crack_tbl.add_column("Estimated Time", justify="right")
        for field_name, label in _SCENARIO_LABELS.items():
            crack_tbl.add_row(label, getattr(result.crack_times, field_name))
        self._rich.print(crack_tbl)

        if result.warning:
            self._rich.print()
            self.console.warning(result.warning)

        if result.suggestions:
            self._rich.print()
            self._rich.print("[bold]Suggestions:[/bold]")
            for suggestion in result.suggestions:
                self._rich.print(f"  [bright_cyan]•[/bright_cyan] {suggestion}")

    @staticmethod
    def breach_text(breach: BreachOutcome) -> Text:
        return Text(breach.display, style=_BREACH_STYLES[breach.status])

    def display_breach(self, breach: BreachOutcome) -> None:
        self.console.section("Breach Lookup")
        if breach.status == BreachStatus.FOUND:
            self.console.error(
                f"{breach.display}. This password appears in known breaches; "
                "do not use it."
            )
        elif breach.status == BreachStatus.NOT_FOUND:
            self.console.success("Not found in the breach corpus")
        else:
            self.console.warning(f"{breach.display}: {breach.reason}")

    # ------------------------------------------------------------------ #
    #  Generation Display
    # ------------------------------------------------------------------ #

    def display_batch(
        self,
        batch: Sequence[GeneratedPassword],
        strongest: Optional[GeneratedPassword] = None,
    ) -> None:
        """Display a generated batch, marking the strongest member."""
        self.console.section("Generated Passwords")
        tbl = Table(
            border_style="kw.accent",
            header_style="kw.rule",
            show_lines=True,
        )
        tbl.add_column("#", justify="right", style="dim")
        tbl.add_column("Password", style="bold bright_white", no_wrap=True)
        tbl.add_column("Strength")
        tbl.add_column("Entropy", justify="right")
        tbl.add_column("", justify="center")

        for index, item in enumerate(batch, start=1):
            level = item.analysis.strength
            marker = Text("★ best", style="bold bright_green") if (
                strongest is not None and item.id == strongest.id
            ) else Text("")
            tbl.add_row(
                str(index),
                Text(item.password),
                Text(level.label, style=level.colour),
                f"{item.analysis.entropy_bits:.1f} bits",
                marker,
            )
        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  History Display
    # ------------------------------------------------------------------ #

    def display_history(self, entries: Sequence[HistoryEntry]) -> None:
        self.console.section("Analysis History")
        if not entries:
            self.console.info("No analyses recorded")
            return
        rows = []
        for entry in entries:
            level = StrengthLevel.from_score(entry.score)
            rows.append((
                entry.timestamp.strftime("%H:%M:%S"),
                entry.truncated_hash,
                Text(entry.strength_label, style=level.colour),
                f"{entry.entropy_bits:.0f} bits",
            ))
        self.console.table(
            "Newest first",
            ["Time", "Tag", "Strength", "Entropy"],
            rows,
            styles=["dim", "cyan", "", ""],
        )
