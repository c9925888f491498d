"""Annotate a pseudocode file with the model's analysis.

Reads the input file, queries Ollama, renders a Phrack-style description
header, applies the variable renames and writes everything to
``<input>.out.c``. Nothing is written unless every step before it succeeded,
and an existing output file is never overwritten. Line endings of the input
are preserved byte for byte.

oneiromancer/src/oneiromancer/annotate.py
"""

import logging
import textwrap
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from oneiromancer.config import EndpointConfig
from oneiromancer.errors import OutputWriteFailed
from oneiromancer.models import AnalysisResult
from oneiromancer.ollama import OllamaClient, read_pseudocode
from oneiromancer.rewrite import RewriteResult, find_rename_collisions, rewrite

logger = logging.getLogger(__name__)

DESCRIPTION_WIDTH = 76
OUTPUT_SUFFIX = ".out.c"

__all__ = [
    "AnnotationOutcome",
    "format_description",
    "output_path_for",
    "run",
]


@dataclass
class AnnotationOutcome:
    """Everything produced while annotating one file."""

    analysis: AnalysisResult
    rewritten: RewriteResult
    description: str
    output_path: Path


def format_description(result: AnalysisResult, width: int = DESCRIPTION_WIDTH) -> str:
    """Render the function name and description as a C block comment.

    Each line of the description is wrapped on its own, so paragraph breaks
    in the model's comment survive.
    """
    lines = []
    for line in result.comment.splitlines() or [""]:
        wrapped = textwrap.fill(line, width=width, initial_indent=" * ", subsequent_indent=" * ")
        lines.append(wrapped or " *")
    body = "\n".join(lines)
    return f"/*\n * {result.function_name}()\n *\n{body}\n */\n\n"


def output_path_for(filepath: Path) -> Path:
    """``foo.c`` -> ``foo.out.c``."""
    return filepath.with_suffix(OUTPUT_SUFFIX)


def _write_output(output_path: Path, description: str, text: str) -> None:
    try:
        # newline="" keeps CRLF pseudocode as CRLF
        with open(output_path, "x", encoding="utf-8", newline="") as f:
            f.write(description)
            f.write(text)
    except OSError as e:
        raise OutputWriteFailed(f"Failed to create `{output_path}`", e) from e


def _print_analysis(console: Console, description: str, rewritten: RewriteResult) -> None:
    console.print("[green][+] Successfully analyzed pseudocode[/green]")
    console.print()
    console.print(escape(description), end="")

    if rewritten.log:
        table = Table(title="Variable renaming suggestions", title_justify="left")
        table.add_column("Original", style="cyan")
        table.add_column("Suggested", style="magenta")
        for original_name, new_name in rewritten.log:
            table.add_row(escape(original_name), escape(new_name))
        console.print(table)
    else:
        console.print("[-] No variable renaming suggestions")
    console.print()


def run(
    filepath: Union[str, Path],
    config: EndpointConfig,
    client: Optional[OllamaClient] = None,
    console: Optional[Console] = None,
) -> AnnotationOutcome:
    """Analyze ``filepath`` and save the improved pseudocode next to it.

    Args:
        filepath: Pseudocode file to analyze.
        config: Ollama endpoint to query.
        client: Client to use; a fresh OllamaClient if omitted.
        console: If given, progress and results are reported on it.

    Raises:
        FileReadFailed: if the input cannot be read.
        OutputWriteFailed: if the output file already exists or cannot be
            written.
        QueryFailed, ResponseParseFailed, PatternCompileFailed: from the
            analysis and rewrite steps.

    """
    filepath = Path(filepath)
    output_path = output_path_for(filepath)

    pseudocode = read_pseudocode(filepath)

    # Fail before spending an inference call on a result we could not save
    if output_path.exists():
        raise OutputWriteFailed(
            f"Failed to create `{output_path}`", FileExistsError(str(output_path))
        )

    logger.info(f"Analyzing pseudocode in {filepath}")
    owns_client = client is None
    client = client or OllamaClient()
    status = console.status("Querying the Oneiromancer") if console else nullcontext()
    try:
        with status:
            analysis = client.analyze(pseudocode, config)
    finally:
        if owns_client:
            client.close()

    description = format_description(analysis)

    for collision in find_rename_collisions(analysis.variables):
        logger.warning(f"Rename collision: {collision}")

    rewritten = rewrite(pseudocode, analysis.variables)

    if console:
        _print_analysis(console, description, rewritten)
        console.print(f"[*] Saving improved pseudocode in `{escape(str(output_path))}`")
    logger.info(f"Saving improved pseudocode in {output_path}")
    _write_output(output_path, description, rewritten.text)

    return AnnotationOutcome(
        analysis=analysis,
        rewritten=rewritten,
        description=description,
        output_path=output_path,
    )
