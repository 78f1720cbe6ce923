"""
Unit tests for fspaths.pathlist module.
"""

import os
from unittest.mock import patch

from fspaths.path import Path
from fspaths.pathlist import PathList


class TestPathList:
    """Tests for PathList operations."""

    def test_add_keeps_order_and_duplicates(self):
        paths = PathList()
        paths.add(Path("b"))
        paths.add(Path("a"))
        paths.add(Path("b"))

        assert paths.as_strings() == ["b", "a", "b"]

    def test_sort_by_path_string(self):
        paths = PathList([Path("c"), Path("a/b"), Path("a")])
        paths.sort()
        assert paths.as_strings() == ["a", "a/b", "c"]

    def test_sort_reverse(self):
        paths = PathList([Path("a"), Path("c"), Path("b")])
        paths.sort(reverse=True)
        assert paths.as_strings() == ["c", "b", "a"]

    def test_sort_with_key(self):
        paths = PathList([Path("long/name"), Path("x")])
        paths.sort(key=lambda p: len(p.path))
        assert paths.as_strings() == ["x", "long/name"]

    def test_filter_dirs(self, sample_tree):
        paths = Path(str(sample_tree)).read_dir()

        dirs = paths.filter_dirs()
        files = paths.filter_out_dirs()

        assert isinstance(dirs, PathList)
        assert [p.base() for p in dirs] == ["b"]
        assert [p.base() for p in files] == ["a"]

    def test_filter_uses_cached_metadata(self, sample_tree, clock):
        paths = Path(str(sample_tree), clock=clock).read_dir()

        with patch("fspaths.path.os.stat", wraps=os.stat) as mock_stat:
            paths.filter_dirs()

        mock_stat.assert_not_called()

    def test_filter_missing_paths_are_not_dirs(self, tmp_path):
        paths = PathList([Path(str(tmp_path)), Path(str(tmp_path / "missing"))])
        assert paths.filter_dirs().as_strings() == [str(tmp_path)]
        assert paths.filter_out_dirs().as_strings() == [str(tmp_path / "missing")]
