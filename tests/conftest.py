"""
Pytest configuration and shared fixtures for the spark_helper test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules.
"""

import re
import shutil
import sys
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")


# ============================================================================
# Core Fixtures
# ============================================================================


class FakeClock:
    """Deterministic replacement for datetime.now, advanced by hand."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def clock():
    """A clock starting on 2017-03-27 at 10:23:05."""
    return FakeClock(datetime(2017, 3, 27, 10, 23, 5))


@pytest.fixture
def memory_storage():
    from spark_helper.storage import MemoryStorage

    return MemoryStorage()


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "monitor": {
            "report_title": "Processing of whatever",
            "point_of_contact": "someone@box.com",
            "additional_info": "Documentation: https://example.com/whatever",
            "log_folder": "logs/whatever",
            "purge_logs": True,
            "purge_window": 7,
        },
        "storage": {
            "backend": "memory",
            "kpi_history": True,
            "compression": "zstd",
        },
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write sample_config_data to a temporary config.toml."""
    import toml

    config_path = temp_dir / "config.toml"
    with open(config_path, "w") as f:
        toml.dump(sample_config_data, f)
    return config_path


# ============================================================================
# Test Utilities
# ============================================================================


def remove_timestamps(report: str) -> str:
    """Replace ``[HH:MM]`` and ``[HH:MM-HH:MM]`` stamps with dots."""
    report = re.sub(r"\[\d\d:\d\d-\d\d:\d\d\]", "[..:..-..:..]", report)
    return re.sub(r"\[\d\d:\d\d\]", "[..:..]", report)


@pytest.fixture
def strip_timestamps():
    return remove_timestamps


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically reset the configuration singleton after each test."""
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield

    from spark_helper.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(original_config_path)
