"""
Keyward CLI
============

Click-based command-line interface for Keyward: password strength
analysis, k-anonymity breach lookups, secure generation and an
interactive debounced analysis session.

Usage::

    python -m keyward analyze                 # prompts with hidden input
    python -m keyward analyze --no-breach "correct horse"
    python -m keyward breach
    python -m keyward generate --mode passphrase --count 4
    python -m keyward --output json generate --length 24
    python -m keyward session < candidates.txt

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, Optional

import click
from pydantic import ValidationError

from shared.config import KeywardConfig
from shared.console import KeywardConsole
from shared.logger import configure_logging

from keyward import __version__
from keyward.core.engine import KeywardEngine
from keyward.core.errors import GenerationError
from keyward.core.models import AnalysisState, AnalysisStatus
from keyward.output.console import KeywardConsoleOutput


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _read_password(password: Optional[str]) -> str:
    if password is not None:
        return password
    return click.prompt("Password", hide_input=True, default="", show_default=False)


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to Keyward configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Output format (defaults to [global] output_format).",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and console output.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured log level.",
)
@click.version_option(__version__, prog_name="keyward")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: Optional[str],
    quiet: bool,
    log_level: Optional[str],
) -> None:
    """Keyward -- Password Strength Analysis & Secure Generation.

    Score passwords, check them against the breach corpus without
    revealing them, and generate strong replacements.
    """
    ctx.ensure_object(dict)

    keyward_config = KeywardConfig.load(config) if config else KeywardConfig()
    settings = keyward_config.global_settings
    configure_logging(
        log_level=log_level or settings.log_level,
        log_file=settings.log_file or None,
        json_logs=settings.log_json,
    )

    output_format = output or settings.output_format
    ctx.obj["config"] = keyward_config
    ctx.obj["output_format"] = output_format
    ctx.obj["quiet"] = quiet

    console = KeywardConsole(quiet=quiet)
    ctx.obj["console"] = console
    ctx.obj["engine"] = KeywardEngine(keyward_config)
    ctx.obj["display"] = KeywardConsoleOutput(console)

    if not quiet and output_format == "console":
        console.banner(version=settings.version)


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.argument("password", required=False)
@click.option(
    "--no-breach",
    is_flag=True,
    default=False,
    help="Skip the breach corpus lookup.",
)
@click.pass_context
def analyze(ctx: click.Context, password: Optional[str], no_breach: bool) -> None:
    """Analyse password strength and check it against known breaches.

    When PASSWORD is omitted it is read from a hidden prompt, which keeps
    it out of shell history.
    """
    engine: KeywardEngine = ctx.obj["engine"]
    display: KeywardConsoleOutput = ctx.obj["display"]
    console: KeywardConsole = ctx.obj["console"]

    password = _read_password(password)

    async def _go():
        async with engine:
            return await engine.analyze(password, check_breach=not no_breach)

    if ctx.obj["output_format"] == "json":
        report = asyncio.run(_go())
        _echo_json(report.model_dump(mode="json"))
        return

    with console.status("Checking..."):
        report = asyncio.run(_go())
    display.display_analysis(report.result, report.breach)


@cli.command()
@click.argument("password", required=False)
@click.pass_context
def breach(ctx: click.Context, password: Optional[str]) -> None:
    """Look PASSWORD up in the breach corpus.

    Only the first five hex characters of its SHA-1 digest are sent.
    """
    engine: KeywardEngine = ctx.obj["engine"]
    display: KeywardConsoleOutput = ctx.obj["display"]
    console: KeywardConsole = ctx.obj["console"]

    password = _read_password(password)

    async def _go():
        async with engine:
            return await engine.check_breach(password)

    if ctx.obj["output_format"] == "json":
        _echo_json(asyncio.run(_go()).model_dump(mode="json"))
        return

    with console.status("Checking..."):
        outcome = asyncio.run(_go())
    display.display_breach(outcome)


@cli.command()
@click.option(
    "--mode", "-m",
    type=click.Choice(["random", "passphrase", "memorable"]),
    default=None,
    help="Generation mode.",
)
@click.option("--length", "-l", type=int, default=None, help="Length (random mode, 8-64).")
@click.option("--count", "-n", type=int, default=None, help="Batch size (1-20).")
@click.option("--uppercase/--no-uppercase", default=None, help="Include uppercase letters.")
@click.option("--numbers/--no-numbers", default=None, help="Include digits.")
@click.option("--symbols/--no-symbols", default=None, help="Include symbols.")
@click.pass_context
def generate(
    ctx: click.Context,
    mode: Optional[str],
    length: Optional[int],
    count: Optional[int],
    uppercase: Optional[bool],
    numbers: Optional[bool],
    symbols: Optional[bool],
) -> None:
    """Generate a batch of scored passwords and mark the strongest."""
    engine: KeywardEngine = ctx.obj["engine"]
    display: KeywardConsoleOutput = ctx.obj["display"]
    console: KeywardConsole = ctx.obj["console"]

    try:
        policy = engine.default_generation(
            mode=mode,
            length=length,
            count=count,
            use_uppercase=uppercase,
            use_numbers=numbers,
            use_symbols=symbols,
        )
    except ValidationError as exc:
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.error(f"{field}: {error['msg']}")
        sys.exit(2)

    async def _go():
        async with engine:
            return await engine.generate_batch(policy)

    try:
        batch = asyncio.run(_go())
    except GenerationError as exc:
        console.error(str(exc))
        sys.exit(1)

    strongest = engine.generator.select_strongest(batch)

    if ctx.obj["output_format"] == "json":
        _echo_json({
            "mode": policy.mode.value,
            "strongest": strongest.id,
            "passwords": [
                {
                    "id": item.id,
                    "password": item.password,
                    "score": item.score,
                    "strength": item.analysis.strength.label,
                    "entropy_bits": item.analysis.entropy_bits,
                }
                for item in batch
            ],
        })
        return

    display.display_batch(batch, strongest)


@cli.command()
@click.pass_context
def session(ctx: click.Context) -> None:
    """Analyse successive inputs read from stdin, one per line.

    Each line is fed to the debounced analysis controller as the new value
    of the password field; the history is printed at end of input.
    """
    engine: KeywardEngine = ctx.obj["engine"]
    display: KeywardConsoleOutput = ctx.obj["display"]
    console: KeywardConsole = ctx.obj["console"]
    stream = click.get_text_stream("stdin")

    def _render(state: AnalysisState) -> None:
        if state.status == AnalysisStatus.LOADING:
            console.info("Checking...")
        elif state.status == AnalysisStatus.SUCCESS and state.result is not None:
            level = state.result.strength
            breach_text = state.breach.display if state.breach else "Check failed"
            console.print(
                f"[{level.colour}]{level.label}[/{level.colour}]"
                f"  {state.result.entropy_bits:.1f} bits  |  {breach_text}"
            )
        elif state.status == AnalysisStatus.ERROR:
            console.error(state.error or "analysis failed")

    async def _go() -> None:
        loop = asyncio.get_running_loop()
        async with engine:
            controller = engine.controller()
            if ctx.obj["output_format"] == "console":
                controller.subscribe(_render)
            while True:
                line = await loop.run_in_executor(None, stream.readline)
                if not line:
                    break
                controller.set_input(line.rstrip("\r\n"))
                await controller.wait()
            await controller.close()

    asyncio.run(_go())

    entries = engine.history.entries()
    if ctx.obj["output_format"] == "json":
        _echo_json([entry.model_dump(mode="json") for entry in entries])
        return
    display.display_history(entries)


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the Keyward CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
