"""Pytest configuration and fixtures for oneiromancer tests."""

import socket
import tempfile
from pathlib import Path
from typing import Iterator
from unittest.mock import MagicMock

import pytest
import requests

from helpers.ollama_responses import SAMPLE_ANALYSIS, make_ollama_response
from oneiromancer.config import EndpointConfig

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def hello_c(temp_dir: Path) -> Path:
    """A copy of the hello world pseudocode in a scratch directory."""
    file_path = temp_dir / "test.c"
    file_path.write_text((DATA_DIR / "hello.c").read_text())
    return file_path


@pytest.fixture
def mock_session() -> MagicMock:
    """A requests.Session stand-in answering with SAMPLE_ANALYSIS."""
    session = MagicMock(spec=requests.Session)
    session.post.return_value = make_ollama_response(SAMPLE_ANALYSIS)
    return session


@pytest.fixture
def endpoint_config() -> EndpointConfig:
    return EndpointConfig(base_url="http://127.0.0.1:11434", model="aidapal")


@pytest.fixture
def closed_port_url() -> str:
    """Base URL of a local port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"


@pytest.fixture
def clean_ollama_env(monkeypatch):
    """Remove OLLAMA_* variables, restoring the original state afterwards."""
    for name in ("OLLAMA_BASEURL", "OLLAMA_MODEL"):
        # setenv first so the deletion is undone even if the variable was absent
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
