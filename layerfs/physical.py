"""A file system rooted at a directory on disk."""

from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path, PurePosixPath
from typing import BinaryIO, List, Optional

from .core import VFS, FilesystemError, Metadata, OpenOptions, PathLike, sanitize_path


def _os_flags(options: OpenOptions) -> int:
    writable = options.write or options.append
    if options.read and writable:
        flags = os.O_RDWR
    elif writable:
        flags = os.O_WRONLY
    else:
        flags = os.O_RDONLY
    if options.append:
        flags |= os.O_APPEND
    if options.create:
        flags |= os.O_CREAT
    if options.truncate:
        flags |= os.O_TRUNC
    return flags | getattr(os, "O_BINARY", 0)


class PhysicalFS(VFS):
    """A file system that uses a real directory as its root.

    The root is created lazily, the first time it is needed.
    """

    def __init__(self, root: PathLike, readonly: bool = False) -> None:
        self._root = Path(root)
        self.readonly = readonly

    def __repr__(self) -> str:
        return f"<PhysicalFS root: {self._root}>"

    def _to_absolute(self, path: PathLike) -> Path:
        safe = sanitize_path(path)
        if safe is None:
            raise FilesystemError(
                f"Path {str(path)!r} is not valid: must be an absolute path "
                "with no references to parent directories"
            )
        return self._root.joinpath(*safe.parts)

    def _create_root(self) -> None:
        if not self._root.exists():
            self._root.mkdir(parents=True, exist_ok=True)

    def _require_writable(self, action: str, path: PathLike) -> None:
        if self.readonly:
            raise FilesystemError(
                f"Tried to {action} {str(path)!r} but FS is read-only"
            )

    def open_options(self, path: PathLike, options: OpenOptions) -> BinaryIO:
        if self.readonly and options.is_mutating():
            raise FilesystemError(
                f"Cannot alter file {str(path)!r} in root {self!r}, "
                "filesystem read-only"
            )
        self._create_root()
        target = self._to_absolute(path)
        mode = options.to_mode()
        flags = _os_flags(options)
        return open(target, mode, opener=lambda p, _flags: os.open(p, flags, 0o666))

    def mkdir(self, path: PathLike) -> None:
        self._require_writable("make directory", path)
        self._create_root()
        os.makedirs(self._to_absolute(path), exist_ok=True)

    def rm(self, path: PathLike) -> None:
        self._require_writable("remove file", path)
        self._create_root()
        target = self._to_absolute(path)
        if target.is_dir():
            os.rmdir(target)
        else:
            os.remove(target)

    def rmrf(self, path: PathLike) -> None:
        self._require_writable("remove file/dir", path)
        self._create_root()
        target = self._to_absolute(path)
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            os.remove(target)

    def exists(self, path: PathLike) -> bool:
        try:
            return self._to_absolute(path).exists()
        except FilesystemError:
            return False

    def metadata(self, path: PathLike) -> Metadata:
        self._create_root()
        info = os.stat(self._to_absolute(path))
        return Metadata(
            is_dir=stat.S_ISDIR(info.st_mode),
            is_file=stat.S_ISREG(info.st_mode),
            length=info.st_size,
        )

    def read_dir(self, path: PathLike) -> List[PurePosixPath]:
        self._create_root()
        target = self._to_absolute(path)
        base = PurePosixPath(path.as_posix() if isinstance(path, os.PathLike) else path)
        return [base / name for name in os.listdir(target)]

    def to_path_buf(self) -> Optional[Path]:
        return self._root