"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from mediapart_bills.core import config as config_module
from mediapart_bills.mediapart.markup import SoupNode
from mediapart_bills.mediapart.records import ExtractionMetadata


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def fixtures_dir() -> Path:
    """Get the Mediapart HTML fixtures directory."""
    return Path(__file__).parent / "fixtures" / "mediapart"


@pytest.fixture
def metadata() -> ExtractionMetadata:
    """Fixed extraction provenance so records compare equal across runs."""
    return ExtractionMetadata(date=datetime(2024, 3, 1, 9, 30, 0), version=1)


@pytest.fixture
def make_document():
    """Build a document node from an HTML snippet."""

    def _make(html: str) -> SoupNode:
        return SoupNode.from_html(html)

    return _make


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    # Ensure tests don't write into a real data folder
    monkeypatch.setenv("MEDIAPART_ENV", "test")
    monkeypatch.setenv("MEDIAPART_DATA_DIR", str(Path(tempfile.gettempdir()) / "test_mediapart_bills_data"))

    # Mock credentials
    monkeypatch.setenv("MEDIAPART_LOGIN", "lecteur@example.com")
    monkeypatch.setenv("MEDIAPART_PASSWORD", "test-password")

    # Each test reads configuration from its own environment
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for amount handling and precision")
    config.addinivalue_line("markers", "mediapart: Tests for Mediapart bill extraction")
