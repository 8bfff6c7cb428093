"""
Pytest configuration and fixtures.

Provides common test fixtures for all test modules.
"""

import tempfile
from pathlib import Path
from typing import Any, ClassVar, Generator

import pytest

from file_indexer.config import Settings, get_settings
from file_indexer.extractors.base import ExtractionError, FileExtractor
from file_indexer.extractors.registry import register_implementation, unregister_implementation
from file_indexer.models import FileDescriptor


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# Settings Fixtures
# ==============================================================================


def make_settings(**overrides: Any) -> Settings:
    """Build settings that ignore the environment's .env file."""
    return Settings(_env_file=None, **overrides)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with all built-in extractors and no limits."""
    return make_settings()


@pytest.fixture
def clear_settings_cache() -> Generator[None, None, None]:
    """Reset the cached settings around a test that reads the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ==============================================================================
# Spy Extractors
# ==============================================================================


class SpyExtractor(FileExtractor):
    """Records every file it is asked to read."""

    id: ClassVar[str] = "spy_first"
    label: ClassVar[str] = "Spy"
    SUPPORTED_EXTENSIONS: ClassVar[tuple[str, ...]] = ("pdf", "spy")

    calls: ClassVar[list[str]] = []
    result: ClassVar[str | None] = "spy text"

    def get_text(self, file: FileDescriptor) -> str | None:
        type(self).calls.append(file.path)
        return type(self).result


class SecondSpyExtractor(FileExtractor):
    """Claims the same extensions as SpyExtractor."""

    id: ClassVar[str] = "spy_second"
    label: ClassVar[str] = "Second spy"
    SUPPORTED_EXTENSIONS: ClassVar[tuple[str, ...]] = ("pdf", "spy")

    calls: ClassVar[list[str]] = []
    result: ClassVar[str | None] = "second spy text"

    def get_text(self, file: FileDescriptor) -> str | None:
        type(self).calls.append(file.path)
        return type(self).result


class FailingExtractor(FileExtractor):
    """Always fails."""

    id: ClassVar[str] = "failing"
    label: ClassVar[str] = "Failing"
    SUPPORTED_EXTENSIONS: ClassVar[tuple[str, ...]] = ("bad",)

    def get_text(self, file: FileDescriptor) -> str | None:
        raise ExtractionError("corrupt document", file.path)


@pytest.fixture
def spy_extractors() -> Generator[tuple[type[FileExtractor], type[FileExtractor]], None, None]:
    """Register the spy extractors for the duration of a test."""
    for extractor_cls in (SpyExtractor, SecondSpyExtractor, FailingExtractor):
        register_implementation(extractor_cls)
    SpyExtractor.calls = []
    SecondSpyExtractor.calls = []

    yield SpyExtractor, SecondSpyExtractor

    for extractor_cls in (SpyExtractor, SecondSpyExtractor, FailingExtractor):
        unregister_implementation(extractor_cls.id)


# ==============================================================================
# File Fixtures
# ==============================================================================


@pytest.fixture
def sample_txt_file(temp_dir: Path) -> Path:
    """Create a sample text file."""
    file_path = temp_dir / "hello.txt"
    file_path.write_text("hello world", encoding="utf-8")
    return file_path


@pytest.fixture
def sample_pdf_file(temp_dir: Path) -> Path:
    """Create a one-page PDF."""
    import fitz

    file_path = temp_dir / "sample.pdf"
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Hello PDF")
    doc.save(str(file_path))
    doc.close()
    return file_path


@pytest.fixture
def dummy_file(temp_dir: Path):
    """Factory creating a file with the given name and size."""

    def _create(name: str, size: int = 16) -> Path:
        file_path = temp_dir / name
        file_path.write_bytes(b"x" * size)
        return file_path

    return _create
