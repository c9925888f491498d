"""Apply variable renaming suggestions to pseudocode.

Renames are textual, not syntax-aware: each suggestion replaces every
whole-word occurrence of the original name, including occurrences inside
string literals and comments. Suggestions are applied one after the other to
the evolving text, so a later suggestion sees the output of earlier ones.

oneiromancer/src/oneiromancer/rewrite.py
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from oneiromancer.errors import PatternCompileFailed
from oneiromancer.models import RenameSuggestion

logger = logging.getLogger(__name__)

__all__ = [
    "RenameCollision",
    "RewriteResult",
    "compile_word_pattern",
    "find_rename_collisions",
    "rewrite",
]


@dataclass
class RewriteResult:
    """Rewritten text plus the (original, new) pairs that were applied."""

    text: str
    log: list[tuple[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class RenameCollision:
    """A rename whose new name is renamed again by a later suggestion."""

    earlier_index: int
    later_index: int
    name: str

    def __str__(self) -> str:
        return (
            f"suggestion #{self.earlier_index + 1} introduces `{self.name}`, "
            f"which suggestion #{self.later_index + 1} renames again"
        )


def compile_word_pattern(name: str) -> re.Pattern:
    """Compile a pattern matching ``name`` literally, as a whole identifier."""
    try:
        return re.compile(rf"(?<!\w){re.escape(name)}(?!\w)")
    except re.error as e:
        raise PatternCompileFailed(f"Failed to compile pattern for `{name}`", e) from e


def rewrite(original_text: str, suggestions: Sequence[RenameSuggestion]) -> RewriteResult:
    """Apply ``suggestions`` to ``original_text`` in order.

    Raises:
        PatternCompileFailed: if a name cannot be compiled into a pattern.

    """
    text = original_text
    log: list[tuple[str, str]] = []

    for suggestion in suggestions:
        original_name, new_name = suggestion.original_name, suggestion.new_name
        if not original_name:
            # An empty pattern would match between every pair of characters
            logger.warning(f"Skipping rename with empty original name (-> `{new_name}`)")
            continue

        pattern = compile_word_pattern(original_name)
        # Callable replacement: new_name is inserted literally, never as a template
        text = pattern.sub(lambda _match: new_name, text)
        log.append((original_name, new_name))

    return RewriteResult(text=text, log=log)


def find_rename_collisions(suggestions: Sequence[RenameSuggestion]) -> list[RenameCollision]:
    """Find renames whose result would be caught up by a later rename.

    Sequential application assumes suggestions are collision-safe; this
    reports where that assumption does not hold (e.g. the cycle ``a -> b,
    b -> a``). A new name also collides when it merely contains a later
    original name as a whole word, e.g. ``a -> b.c`` followed by ``b -> x``.
    It neither repairs nor rejects anything.

    Raises:
        PatternCompileFailed: if a name cannot be compiled into a pattern.

    """
    collisions = []
    for j, later in enumerate(suggestions):
        if not later.original_name:
            # rewrite() skips these, so they cannot catch anything
            continue
        pattern = compile_word_pattern(later.original_name)
        for i in range(j):
            if pattern.search(suggestions[i].new_name):
                collisions.append(RenameCollision(i, j, later.original_name))
    collisions.sort(key=lambda c: (c.earlier_index, c.later_index))
    return collisions
