import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from reconciler.extraction.example_client_adapter import ExampleVisionClientAdapter
from reconciler.extraction.extractor import IdentifierExtractor

# Smallest valid PNG: a 1x1 transparent pixel.
_PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


@pytest.fixture
def screenshot_path(tmp_path: Path) -> Path:
    path = tmp_path / "screenshot.png"
    path.write_bytes(_PNG_BYTES)
    return path


@pytest.fixture
def example_extractor() -> IdentifierExtractor:
    return IdentifierExtractor(client=ExampleVisionClientAdapter(), model="example", temperature=0.0)


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Run the CLI against the offline example provider without touching a real .env."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("EXTRACTION_PROVIDER", "example")
    monkeypatch.setenv("ANALYSIS_DEBOUNCE_SECONDS", "0")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    logger = logging.getLogger("reconciler")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)
