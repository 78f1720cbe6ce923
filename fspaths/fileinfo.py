import os
import stat
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FileInfo:
    """Metadata snapshot of a filesystem entry at a point in time"""

    name: str
    size: int
    mode: int  # full st_mode, file type and permission bits
    mtime: datetime
    is_dir: bool

    @property
    def perm(self) -> int:
        return stat.S_IMODE(self.mode)

    @property
    def is_file(self) -> bool:
        return stat.S_ISREG(self.mode)

    @classmethod
    def from_stat(cls, name: str, st: os.stat_result) -> "FileInfo":
        return cls(
            name=name,
            size=st.st_size,
            mode=st.st_mode,
            mtime=datetime.fromtimestamp(st.st_mtime),
            is_dir=stat.S_ISDIR(st.st_mode),
        )

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry) -> "FileInfo":
        """
        Build a snapshot from a scandir entry.

        Symlinks are followed so the result matches os.stat on the child.
        A dangling symlink has no target to describe and falls back to
        the link itself.
        """
        try:
            st = entry.stat()
        except FileNotFoundError:
            if not entry.is_symlink():
                raise
            st = entry.stat(follow_symlinks=False)
        return cls.from_stat(entry.name, st)
