"""Shared pytest fixtures: synthetic drive images and canned tool output."""

import os

import pytest

from discmode.sector import SIGNATURE_OFFSET

FIXTURES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "fixtures")


@pytest.fixture
def disk_image(tmp_path):
    """
    Factory: write a zero-filled image with ``signature`` at offset 510.

        path = disk_image(b"\\x55\\xaa")
    """
    counter = 0

    def _make(signature: bytes = b"\x00\x00", size: int = 512, name: str = "") -> str:
        nonlocal counter
        counter += 1
        data = bytearray(size)
        data[SIGNATURE_OFFSET:SIGNATURE_OFFSET + len(signature)] = signature
        path = tmp_path / (name or f"disk{counter}.img")
        path.write_bytes(bytes(data[:size]))
        return str(path)

    return _make


@pytest.fixture
def fixture_text():
    """Load a canned command output from fixtures/, line endings untouched."""
    def _load(name: str) -> str:
        with open(os.path.join(FIXTURES_DIR, name), newline="") as f:
            return f.read()
    return _load
