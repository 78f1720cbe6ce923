from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .path import Path


class PathList(list):
    """Ordered list of Path values. Duplicates are allowed."""

    def add(self, path: Path) -> None:
        self.append(path)

    def as_strings(self) -> list[str]:
        return [p.path for p in self]

    def sort(self, *, key=None, reverse: bool = False) -> None:
        """Sort in place, by path string unless a key is given."""
        super().sort(key=key or (lambda p: p.path), reverse=reverse)

    def filter_dirs(self) -> PathList:
        """
        Return the paths that are directories.

        Uses each path's cached metadata when fresh, so filtering the result
        of read_dir() costs no extra system calls.
        """
        return PathList(p for p in self if p.is_dir())

    def filter_out_dirs(self) -> PathList:
        return PathList(p for p in self if not p.is_dir())
