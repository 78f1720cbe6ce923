"""
Path value with a short-lived metadata cache.

Wraps a path string and delegates to os, os.path and shutil. Joining
appends elements and cleans the result; unlike os.path.join it never
restarts at an absolute element.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
from collections.abc import Callable
from datetime import datetime

from .cache import FRESHNESS_WINDOW, MetadataCache
from .fileinfo import FileInfo
from .pathlist import PathList

logger = logging.getLogger(__name__)

DEFAULT_DIR_MODE = 0o755
DEFAULT_FILE_MODE = 0o644


class Path(os.PathLike):
    """
    A filesystem location, which need not exist.

    The path string is mutable: to_abs() and follow_symlink() rewrite it in
    place and clear the cached metadata in the same call. Derived paths
    (join, parent, clone...) share the clock and freshness window but never
    the cache.

    Not safe for concurrent use of one instance from several threads.
    """

    __hash__ = None  # mutable

    def __init__(
        self,
        path: str,
        *,
        clock: Callable[[], float] | None = None,
        freshness: float = FRESHNESS_WINDOW,
    ):
        if not path:
            raise ValueError("Path requires a non-empty string, use Path.new() to accept ''")
        self.path = str(path)
        self._cache = MetadataCache(freshness, clock)

    @classmethod
    def new(cls, path: str, **kwargs) -> Path | None:
        """Create a Path, or return None if path is the empty string."""
        if not path:
            return None
        return cls(path, **kwargs)

    def _derive(self, path: str) -> Path | None:
        return Path.new(
            path, clock=self._cache.clock, freshness=self._cache.freshness_seconds
        )

    # Metadata

    def stat(self) -> FileInfo:
        """
        Query the filesystem for this path's metadata and cache the result.

        Always hits the filesystem; call it again to refresh the cached
        entry. On error the OSError propagates and the cache is untouched.
        """
        st = os.stat(self.path)
        info = FileInfo.from_stat(self.base(), st)
        self._cache.put(info)
        return info

    def _stat(self) -> FileInfo:
        info = self._cache.get()
        if info is not None:
            return info
        return self.stat()

    def exist(self) -> bool:
        """
        Return True if the path exists.

        Raises:
            OSError: For any failure other than the path not existing.
        """
        try:
            self._stat()
        except FileNotFoundError:
            return False
        return True

    def is_dir(self) -> bool:
        """
        Return True if the path exists and is a directory.

        Raises:
            OSError: For any failure other than the path not existing.
        """
        try:
            info = self._stat()
        except FileNotFoundError:
            return False
        return info.is_dir

    # Lexical operations

    def clone(self) -> Path:
        return self._derive(self.path)

    def join(self, *paths: str) -> Path:
        """Create a new Path by appending the given elements."""
        return self._derive(_join(self.path, _join(*paths)))

    def join_path(self, *paths: Path) -> Path:
        res = self.clone()
        for p in paths:
            res = res.join(p.path)
        return res

    def base(self) -> str:
        """Return the last element of the path, '/' for the root."""
        return _base(self.path)

    def clean(self) -> Path:
        """Shortest equivalent path, by purely lexical processing."""
        return self._derive(_clean(self.path))

    def parent(self) -> Path:
        """All but the last element, cleaned; '.' for a bare name."""
        return self._derive(_clean(os.path.dirname(self.path)))

    def rel_to(self, r: Path) -> Path:
        """
        Return a relative Path that is lexically equivalent to r when
        joined to this Path.

        Raises:
            ValueError: If one path is absolute and the other is not, or if
                this Path has leading ".." elements that r does not share.
        """
        return self._derive(_rel(self.path, r.path))

    def abs(self) -> Path:
        return self._derive(os.path.abspath(self.path))

    def is_abs(self) -> bool:
        return os.path.isabs(self.path)

    def to_abs(self) -> None:
        """Rewrite this Path in place to its absolute form."""
        self.path = os.path.abspath(self.path)
        self._cache.invalidate()

    # Filesystem operations

    def mkdir_all(self, mode: int = DEFAULT_DIR_MODE) -> None:
        """Create the directory along with any missing parents."""
        logger.debug("Creating directory: %s", self.path)
        os.makedirs(self.path, mode=mode, exist_ok=True)

    def remove(self) -> None:
        """Remove the file or empty directory."""
        logger.debug("Removing: %s", self.path)
        if os.path.isdir(self.path) and not os.path.islink(self.path):
            os.rmdir(self.path)
        else:
            os.remove(self.path)

    def follow_symlink(self) -> None:
        """
        Rewrite this Path in place to the target of the symlinks it
        traverses. A relative path stays relative; a path without symlinks
        is only cleaned. Clears the cached metadata.

        Raises:
            OSError: If the path, or any link target, does not exist.
        """
        resolved = _eval_symlinks(self.path)
        logger.debug("Resolved %s -> %s", self.path, resolved)
        self.path = resolved
        self._cache.invalidate()

    def read_dir(self) -> PathList:
        """
        List the directory's immediate children, sorted by name.

        Each child's metadata cache is filled from the scan, so a follow-up
        exist() or is_dir() on it needs no further system call.
        """
        logger.debug("Listing directory: %s", self.path)
        with os.scandir(self.path) as it:
            entries = sorted(it, key=lambda e: e.name)

        paths = PathList()
        for entry in entries:
            child = self.join(entry.name)
            child._cache.put(FileInfo.from_dir_entry(entry))
            paths.add(child)

        logger.debug("Listed %d entries in %s", len(paths), self.path)
        return paths

    def copy_to(self, dst: Path) -> None:
        """
        Copy the contents of this file to dst.

        The destination is created if missing and truncated otherwise. The
        copied data is flushed to stable storage, then the source's
        permission bits are applied to the destination. A failure stops the
        copy where it happened; the destination is not rolled back.
        """
        logger.debug("Copying %s -> %s", self.path, dst.path)
        with open(self.path, "rb") as src, open(dst.path, "wb") as out:
            shutil.copyfileobj(src, out)
            out.flush()
            os.fsync(out.fileno())

            info = self.stat()
            os.chmod(dst.path, info.perm)

    def chtimes(self, atime: datetime, mtime: datetime) -> None:
        """Change the access and modification times of the file."""
        os.utime(self.path, (atime.timestamp(), mtime.timestamp()))

    def read_file(self) -> bytes:
        with open(self.path, "rb") as f:
            return f.read()

    def write_file(self, data: bytes, mode: int = DEFAULT_FILE_MODE) -> None:
        """
        Write data to the file, creating it with mode if it does not exist
        and truncating it otherwise.
        """
        logger.debug("Writing %d bytes to %s", len(data), self.path)
        flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)
        fd = os.open(self.path, flags, mode)
        with os.fdopen(fd, "wb") as f:
            f.write(data)

    # Rendering

    def __fspath__(self) -> str:
        return self.path

    def __str__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"Path({self.path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.path == other.path


new = Path.new


_SEPS = os.sep + (os.altsep or "")
_MAX_LINKS = 255


def _clean(path: str) -> str:
    """
    Lexical normalisation. Unlike os.path.normpath, a leading '//' on POSIX
    collapses to a single '/'.
    """
    cleaned = os.path.normpath(path)
    if os.altsep is None and cleaned.startswith(os.sep * 2):
        cleaned = cleaned[1:]
    return cleaned


def _join(*elems: str) -> str:
    elems = [e for e in elems if e]
    if not elems:
        return ""
    return _clean(os.sep.join(elems))


def _base(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip(_SEPS)
    if not stripped:
        return os.sep
    return os.path.basename(stripped)


def _split(path: str) -> list[str]:
    return [part for part in path.split(os.sep) if part and part != "."]


def _rel(basepath: str, targpath: str) -> str:
    """
    Relative path from basepath to targpath, computed without consulting
    the filesystem or the working directory.
    """
    base = _clean(basepath)
    targ = _clean(targpath)
    if targ == base:
        return "."
    if base == ".":
        base = ""
    if os.path.isabs(base) != os.path.isabs(targ):
        raise ValueError(f"Can't make {targpath} relative to {basepath}")

    base_parts = _split(base)
    targ_parts = _split(targ)
    common = 0
    for b, t in zip(base_parts, targ_parts):
        if b != t:
            break
        common += 1

    # A cleaned path only has '..' as leading elements
    remaining = base_parts[common:]
    if ".." in remaining:
        raise ValueError(f"Can't make {targpath} relative to {basepath}")
    return os.sep.join([".."] * len(remaining) + targ_parts[common:])


def _last_sep(path: str, floor: int) -> int:
    r = len(path) - 1
    while r >= floor and path[r] not in _SEPS:
        r -= 1
    return r


def _volume_len(path: str) -> int:
    n = len(os.path.splitdrive(path)[0])
    if n < len(path) and path[n] in _SEPS:
        n += 1
    return n


def _eval_symlinks(path: str) -> str:
    """
    Resolve the symlinks in path one component at a time.

    Relative link targets are joined lexically onto the directory holding
    the link, so a relative path stays relative. A path without symlinks
    comes back cleaned.

    Raises:
        FileNotFoundError: If a component does not exist.
        NotADirectoryError: If a non-final component is not a directory.
        OSError: With ELOOP after too many links.
    """
    vol_len = _volume_len(path)
    vol = path[:vol_len]
    dest = vol
    links_walked = 0

    end = vol_len
    while end < len(path):
        start = end
        while start < len(path) and path[start] in _SEPS:
            start += 1
        end = start
        while end < len(path) and path[end] not in _SEPS:
            end += 1
        elem = path[start:end]

        if not elem:
            break
        if elem == ".":
            continue
        if elem == "..":
            r = _last_sep(dest, vol_len)
            if r < vol_len or dest[r + 1 :] == "..":
                # Nothing left to back out of, keep the '..'
                if len(dest) > vol_len:
                    dest += os.sep
                dest += ".."
            else:
                dest = dest[:r]
            continue

        if len(dest) > len(os.path.splitdrive(dest)[0]) and dest[-1] not in _SEPS:
            dest += os.sep
        dest += elem

        st = os.lstat(dest)
        if not stat.S_ISLNK(st.st_mode):
            if not stat.S_ISDIR(st.st_mode) and end < len(path):
                raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), dest)
            continue

        links_walked += 1
        if links_walked > _MAX_LINKS:
            raise OSError(errno.ELOOP, os.strerror(errno.ELOOP), path)

        link = os.readlink(dest)
        path = link + path[end:]

        link_vol_len = _volume_len(link)
        if link_vol_len > 0:
            # Absolute target, restart from its root
            vol = link[:link_vol_len]
            vol_len = link_vol_len
            dest = vol
            end = vol_len
        else:
            # Relative target replaces the link's own component
            r = _last_sep(dest, vol_len)
            dest = vol if r < vol_len else dest[:r]
            end = 0

    return _clean(dest)
