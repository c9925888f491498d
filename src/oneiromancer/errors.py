"""Error types raised by oneiromancer.

One exception class per failure kind, all sharing OneiromancerError as a
base, so callers can branch on what went wrong. Each error keeps the
underlying exception in ``cause`` (and it is also chained via ``raise ... from``).

oneiromancer/src/oneiromancer/errors.py
"""

from typing import Optional

__all__ = [
    "OneiromancerError",
    "QueryFailed",
    "ResponseParseFailed",
    "PatternCompileFailed",
    "FileReadFailed",
    "OutputWriteFailed",
]


class OneiromancerError(Exception):
    """Base class for every error surfaced by oneiromancer."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class QueryFailed(OneiromancerError):
    """The Ollama endpoint could not be queried (transport, URL or HTTP status)."""


class ResponseParseFailed(OneiromancerError):
    """The endpoint answered, but its response did not decode into an analysis."""


class PatternCompileFailed(OneiromancerError):
    """A variable name could not be turned into a whole-word search pattern."""


class FileReadFailed(OneiromancerError):
    """The input pseudocode file could not be read."""


class OutputWriteFailed(OneiromancerError):
    """The annotated output file could not be created."""
