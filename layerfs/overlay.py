"""A file system that stacks several others and searches them in order."""

from __future__ import annotations

from collections import deque
from pathlib import Path, PurePath, PurePosixPath
from typing import BinaryIO, Deque, List, Optional, Tuple

from .core import (
    VFS,
    FilesystemError,
    Metadata,
    OpenOptions,
    PathLike,
    ResourceNotFound,
    VfsError,
)

_FAILURES = (VfsError, OSError)


def _path_text(path: PathLike) -> str:
    return path.as_posix() if isinstance(path, PurePath) else str(path)


class OverlayFS(VFS):
    """Joins several file systems; the first one that succeeds wins."""

    def __init__(self) -> None:
        self._roots: Deque[VFS] = deque()

    def __repr__(self) -> str:
        inner = ", ".join(repr(fs) for fs in self._roots)
        return f"<OverlayFS roots: [{inner}]>"

    def push_front(self, fs: VFS) -> None:
        """Add a file system to the front of the search order."""
        self._roots.appendleft(fs)

    def push_back(self, fs: VFS) -> None:
        """Add a file system to the end of the search order."""
        self._roots.append(fs)

    def roots(self) -> Deque[VFS]:
        """The file systems, in the order they are searched."""
        return self._roots

    def open_options(self, path: PathLike, options: OpenOptions) -> BinaryIO:
        tried: List[Tuple[PurePath, BaseException]] = []
        for fs in self._roots:
            try:
                return fs.open_options(path, options)
            except _FAILURES as err:
                location = fs.to_path_buf()
                tried.append(
                    (location if location is not None else PurePath("<invalid path>"), err)
                )
        raise ResourceNotFound(_path_text(path), tried)

    def mkdir(self, path: PathLike) -> None:
        for fs in self._roots:
            try:
                fs.mkdir(path)
                return
            except _FAILURES:
                continue
        raise FilesystemError(
            f"Could not find anywhere writeable to make dir {_path_text(path)!r}"
        )

    def rm(self, path: PathLike) -> None:
        for fs in self._roots:
            try:
                fs.rm(path)
                return
            except _FAILURES:
                continue
        raise FilesystemError(f"Could not remove file {_path_text(path)!r}")

    def rmrf(self, path: PathLike) -> None:
        for fs in self._roots:
            try:
                fs.rmrf(path)
                return
            except _FAILURES:
                continue
        raise FilesystemError(f"Could not remove file/dir {_path_text(path)!r}")

    def exists(self, path: PathLike) -> bool:
        return any(fs.exists(path) for fs in self._roots)

    def metadata(self, path: PathLike) -> Metadata:
        for fs in self._roots:
            try:
                return fs.metadata(path)
            except _FAILURES:
                continue
        raise FilesystemError(
            f"Could not get metadata for file/dir {_path_text(path)!r}"
        )

    def read_dir(self, path: PathLike) -> List[PurePosixPath]:
        entries: List[PurePosixPath] = []
        for fs in self._roots:
            try:
                entries.extend(fs.read_dir(path))
            except _FAILURES:
                continue
        return entries

    def to_path_buf(self) -> Optional[Path]:
        return None