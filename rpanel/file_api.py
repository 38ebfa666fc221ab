"""Listing the contents of a directory below a fixed root."""

from __future__ import annotations

import dataclasses
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rpanel.errors import AppIOError, NotFound

DEFAULT_ROOT = "/home"


@dataclass(frozen=True)
class FileInfo:
    """One directory entry: name, size in bytes, kind and Unix timestamps."""

    name: str
    size: int
    is_dir: bool
    created_at: int
    modified_at: int

    def to_dict(self) -> dict[str, Any]:
        """Return the entry as plain JSON-compatible values."""
        return dataclasses.asdict(self)


def _epoch_seconds(timestamp: float | None) -> int:
    if timestamp is None or timestamp < 0:
        return 0
    return int(timestamp)


def _lossy(name: str) -> str:
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _entry_info(entry: os.DirEntry[str]) -> FileInfo:
    try:
        st = entry.stat(follow_symlinks=False)
    except OSError:
        raise AppIOError("无法读取文件元数据") from None
    return FileInfo(
        name=_lossy(entry.name),
        size=st.st_size if stat.S_ISREG(st.st_mode) else 0,
        is_dir=stat.S_ISDIR(st.st_mode),
        created_at=_epoch_seconds(getattr(st, "st_birthtime", None)),
        modified_at=_epoch_seconds(st.st_mtime),
    )


def list_directory(
    root: str | os.PathLike[str] = DEFAULT_ROOT,
    dir: str = "",
    page: int | None = None,
    page_size: int | None = None,
) -> list[FileInfo]:
    """List the entries of ``root/dir``; raises NotFound if it is not a directory.

    ``page`` and ``page_size`` are accepted but do not limit the listing.
    Symbolic links are described as links, not as their targets.
    """
    path = Path(root) / dir
    if not path.is_dir():
        raise NotFound("目录不存在")
    try:
        with os.scandir(path) as entries:
            found = list(entries)
    except OSError:
        return []
    return [_entry_info(entry) for entry in found]