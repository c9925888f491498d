"""Interaction with the Ollama generate API.

One analysis is exactly one synchronous request/response cycle: the
pseudocode is posted with ``stream=false`` and ``format="json"`` so Ollama
answers with a single complete JSON document, which is then decoded into an
AnalysisResult.

oneiromancer/src/oneiromancer/ollama.py
"""

import logging
from pathlib import Path
from typing import Optional, Union

import requests
from pydantic import ValidationError

from oneiromancer.config import EndpointConfig
from oneiromancer.errors import FileReadFailed, QueryFailed, ResponseParseFailed
from oneiromancer.models import AnalysisRequest, AnalysisResponse, AnalysisResult

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate"

__all__ = [
    "GENERATE_PATH",
    "OllamaClient",
    "analyze_code",
    "analyze_file",
    "generate_url",
    "read_pseudocode",
    "send_request",
]


def generate_url(base_url: str) -> str:
    """Return the generate endpoint for ``base_url`` (trailing slashes stripped)."""
    return f"{base_url.rstrip('/')}{GENERATE_PATH}"


def send_request(
    session: requests.Session,
    request: AnalysisRequest,
    base_url: str,
    timeout: Optional[float] = None,
) -> AnalysisResponse:
    """Send ``request`` to the generate endpoint at ``base_url``.

    Raises:
        QueryFailed: on any transport, URL or HTTP status failure.
        ResponseParseFailed: if the envelope is not a JSON object with a
            string ``response`` field.

    """
    url = generate_url(base_url)
    logger.debug(f"POST {url} model={request.model!r} prompt_length={len(request.prompt)}")

    try:
        http_response = session.post(url, json=request.model_dump(), timeout=timeout)
        logger.debug(f"HTTP response status: {http_response.status_code}")
        http_response.raise_for_status()
    except requests.RequestException as e:
        raise QueryFailed(f"Failed to query Ollama at {url!r}", e) from e

    logger.debug(f"Raw response length: {len(http_response.text)} chars")

    try:
        return AnalysisResponse.model_validate_json(http_response.text)
    except ValidationError as e:
        raise ResponseParseFailed("Unexpected response envelope from Ollama", e) from e


class OllamaClient:
    """Synchronous client for the Ollama generate API.

    No retries are attempted and no results are cached; the only state kept
    between calls is the pooled HTTP session.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        """Initialize the client.

        Args:
            session: HTTP session to use. A new one is created if omitted.
            timeout: Seconds to wait for Ollama. None waits indefinitely,
                since model inference latency is unbounded.

        """
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def analyze(self, code: str, config: EndpointConfig) -> AnalysisResult:
        """Submit ``code`` for analysis and return the decoded result.

        ``code`` is sent as-is; empty input is not rejected here, Ollama
        answers it with an empty document which fails to decode.

        Raises:
            QueryFailed: if the endpoint cannot be queried.
            ResponseParseFailed: if the answer does not decode into an
                AnalysisResult.

        """
        request = AnalysisRequest(model=config.model, prompt=code)
        response = send_request(self.session, request, config.base_url, self.timeout)
        result = response.decode()
        logger.info(
            f"Analysis complete: {result.function_name}() with "
            f"{len(result.variables)} rename suggestion(s)"
        )
        return result

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "OllamaClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def analyze_code(code: str, config: Optional[EndpointConfig] = None) -> AnalysisResult:
    """Submit pseudocode to the local LLM via the Ollama API.

    Args:
        code: Pseudocode to analyze.
        config: Endpoint to use; EndpointConfig() (the built-in defaults)
            if omitted. The process environment is never consulted here.

    """
    with OllamaClient() as client:
        return client.analyze(code, config or EndpointConfig())


def read_pseudocode(filepath: Union[str, Path]) -> str:
    """Read ``filepath`` as UTF-8 text, keeping its line endings as they are.

    Raises:
        FileReadFailed: if the file cannot be read.

    """
    path = Path(filepath)
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadFailed(f"Failed to read `{path}`", e) from e


def analyze_file(
    filepath: Union[str, Path], config: Optional[EndpointConfig] = None
) -> AnalysisResult:
    """Submit the pseudocode stored in ``filepath`` for analysis.

    Raises:
        FileReadFailed: if the file cannot be read.

    """
    return analyze_code(read_pseudocode(filepath), config)
