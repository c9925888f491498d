"""oneiromancer: reverse engineering assistant backed by a local LLM.

Submits decompiler pseudocode to an Ollama endpoint and applies the model's
function name, description and variable renames back onto the source.
"""

__version__ = "0.6.3"

from oneiromancer.config import EndpointConfig, resolve_endpoint_config
from oneiromancer.errors import (
    FileReadFailed,
    OneiromancerError,
    OutputWriteFailed,
    PatternCompileFailed,
    QueryFailed,
    ResponseParseFailed,
)
from oneiromancer.models import AnalysisResult, RenameSuggestion
from oneiromancer.ollama import OllamaClient, analyze_code, analyze_file
from oneiromancer.rewrite import RewriteResult, find_rename_collisions, rewrite

__all__ = [
    # Configuration
    "EndpointConfig",
    "resolve_endpoint_config",
    # Errors
    "OneiromancerError",
    "QueryFailed",
    "ResponseParseFailed",
    "PatternCompileFailed",
    "FileReadFailed",
    "OutputWriteFailed",
    # Analysis
    "AnalysisResult",
    "RenameSuggestion",
    "OllamaClient",
    "analyze_code",
    "analyze_file",
    # Rewriting
    "RewriteResult",
    "rewrite",
    "find_rename_collisions",
]
