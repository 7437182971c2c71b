"""
Shared fixtures for the prosefmt tests.
"""

import logging
import os
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(autouse=True)
def reset_prosefmt_logger():
    """Undo any handler the CLI installed so later tests start clean."""
    yield
    logger = logging.getLogger("prosefmt")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def make_file(tmp_path):
    """Write bytes to a file under tmp_path and return its path as a string."""
    def _make(name: str, data: bytes) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return str(path)
    return _make
