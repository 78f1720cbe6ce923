"""
Shared pytest fixtures for fspaths tests.
"""

import os
import sys
from collections.abc import Generator
from pathlib import Path as StdPath

import pytest

from fspaths.path import Path


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_file(tmp_path: StdPath) -> StdPath:
    """A regular file with known content."""
    path = tmp_path / "sample.txt"
    path.write_bytes(b"hello world")
    return path


@pytest.fixture
def sample_tree(tmp_path: StdPath) -> Generator[StdPath, None, None]:
    """
    Creates a directory with one file and one subdirectory:

        tree/
            a        (file, 3 bytes)
            b/       (directory)
    """
    root = tmp_path / "tree"
    root.mkdir()
    (root / "a").write_bytes(b"abc")
    (root / "b").mkdir()
    yield root


@pytest.fixture
def cached_path(sample_file: StdPath, clock: FakeClock) -> Path:
    """A Path on an existing file, driven by the fake clock."""
    return Path(str(sample_file), clock=clock)


@pytest.fixture
def unprivileged():
    """Skip tests that rely on permission checks being enforced."""
    if sys.platform == "win32":
        pytest.skip("POSIX permissions")
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        pytest.skip("permission checks are bypassed for root")
