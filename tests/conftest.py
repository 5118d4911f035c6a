"""
Pytest configuration og shared fixtures.
"""

import pytest

from dkutils.config import reset_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Reset cached settings before hver test, and keep the environment out of them."""
    for name in ("DKUTILS_CHUNK_SIZE_KB", "DKUTILS_DEFAULT_DATE_FORMAT", "DKUTILS_DEFAULT_TIME_ZONE"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def sample_file(tmp_path):
    """A 20 KiB file, large enough to need several 8 KiB chunks."""
    path = tmp_path / "source" / "sample.bin"
    path.parent.mkdir()
    path.write_bytes(bytes(range(256)) * 80)
    return path
