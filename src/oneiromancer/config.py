"""Endpoint configuration for oneiromancer.

The Ollama base URL and model name are resolved once, at the CLI boundary,
with the precedence explicit value > environment variable > built-in default.
The analysis core only ever receives the resulting EndpointConfig.

oneiromancer/src/oneiromancer/config.py
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Built-in defaults
OLLAMA_BASEURL = "http://127.0.0.1:11434"
OLLAMA_MODEL = "aidapal"

# Environment variables consulted by resolve_endpoint_config
BASEURL_ENV_VAR = "OLLAMA_BASEURL"
MODEL_ENV_VAR = "OLLAMA_MODEL"

__all__ = [
    "EndpointConfig",
    "OLLAMA_BASEURL",
    "OLLAMA_MODEL",
    "BASEURL_ENV_VAR",
    "MODEL_ENV_VAR",
    "resolve_endpoint_config",
    "load_env_files",
]


@dataclass(frozen=True)
class EndpointConfig:
    """Where to send pseudocode and which model should analyze it."""

    base_url: str = OLLAMA_BASEURL
    model: str = OLLAMA_MODEL

    def with_base_url(self, base_url: str) -> "EndpointConfig":
        """Return a copy of this config pointing at another Ollama instance."""
        return replace(self, base_url=base_url)

    def with_model(self, model: str) -> "EndpointConfig":
        """Return a copy of this config using another model."""
        return replace(self, model=model)


def _pick(explicit: Optional[str], environ: Mapping[str, str], key: str, default: str) -> str:
    """Resolve a single setting. An explicit empty string still counts as explicit."""
    if explicit is not None:
        return explicit
    value = environ.get(key)
    if value:
        return value
    return default


def resolve_endpoint_config(
    base_url: Optional[str] = None,
    model: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> EndpointConfig:
    """Build the EndpointConfig for one invocation.

    Each field is resolved independently: an explicit argument wins, then the
    matching environment variable, then the built-in default.

    Args:
        base_url: Base URL given on the command line, if any.
        model: Model name given on the command line, if any.
        environ: Environment to consult. Defaults to os.environ; tests pass
            a plain dict instead of mutating the process environment.

    Returns:
        The resolved, immutable EndpointConfig.

    """
    if environ is None:
        environ = os.environ

    config = EndpointConfig(
        base_url=_pick(base_url, environ, BASEURL_ENV_VAR, OLLAMA_BASEURL),
        model=_pick(model, environ, MODEL_ENV_VAR, OLLAMA_MODEL),
    )
    logger.debug(f"Resolved endpoint config: base_url={config.base_url!r} model={config.model!r}")
    return config


def load_env_files(search_paths: Optional[list[Path]] = None) -> Optional[Path]:
    """Load OLLAMA_* variables from the first .env file found.

    Variables already present in the process environment are never overridden.

    Returns:
        The path that was loaded, or None if no file was found.

    """
    env_paths = search_paths or [
        Path.cwd() / ".env",  # Current directory
        Path.home() / ".oneiromancer.env",  # User home directory
    ]

    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path, override=False)
            logger.debug(f"Loaded environment from {env_path}")
            return env_path

    return None
