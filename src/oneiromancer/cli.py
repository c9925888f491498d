"""Command-line interface for oneiromancer.

Resolves the endpoint configuration, runs the annotation pipeline and
reports its results on the console.

oneiromancer/src/oneiromancer/cli.py
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from oneiromancer import __version__
from oneiromancer.annotate import run
from oneiromancer.config import load_env_files, resolve_endpoint_config
from oneiromancer.errors import OneiromancerError
from oneiromancer.ollama import OllamaClient

console = Console()
logger = logging.getLogger(__name__)

__all__ = ["cli", "main"]


def _print_banner() -> None:
    console.print(
        f"[bold]oneiromancer {__version__}[/bold] - Reverse engineering assistant that uses "
        "a locally running LLM to aid with pseudocode analysis."
    )
    console.print()


@click.command("oneiromancer")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--base-url", "-b", help="Ollama base URL [env: OLLAMA_BASEURL]")
@click.option("--model", "-m", help="Model to use for the analysis [env: OLLAMA_MODEL]")
@click.option("--timeout", type=float, help="Seconds to wait for Ollama (default: no limit)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(__version__, prog_name="oneiromancer")
@click.pass_context
def cli(
    ctx: click.Context,
    filepath: Path,
    base_url: str | None,
    model: str | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Analyze the pseudocode in FILEPATH and save an annotated copy as FILEPATH.out.c."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)

    load_env_files()
    config = resolve_endpoint_config(base_url, model, os.environ)

    _print_banner()
    console.print(f"[*] Analyzing pseudocode in `{escape(str(filepath))}`")

    try:
        with OllamaClient(timeout=timeout) as client:
            outcome = run(filepath, config, client=client, console=console)
    except OneiromancerError as e:
        console.print(f"[bold red][!] Error: {escape(str(e))}[/bold red]")
        logger.debug("Analysis failed", exc_info=True)
        ctx.exit(1)

    logger.debug(f"Wrote {outcome.output_path}")
    console.print("[green][+] Done analyzing pseudocode[/green]")


def main() -> None:
    """Entry point for the oneiromancer console script."""
    try:
        cli(prog_name="oneiromancer")
    except SystemExit as e:
        sys.exit(e.code)
    except (RuntimeError, ValueError, OSError) as e:
        console.print(f"[bold red][!] An unexpected error occurred: {escape(str(e))}[/bold red]")
        logger.debug("Unhandled exception in CLI execution.", exc_info=True)
        sys.exit(1)
