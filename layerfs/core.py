"""Core types shared by every virtual file system: errors, open options,
metadata and the abstract file system interface."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from pathlib import Path, PurePath, PurePosixPath
from typing import BinaryIO, Iterable, List, Optional, Tuple, Union

PathLike = Union[str, PurePath]


class VfsError(Exception):
    """Base class for every error raised by a virtual file system."""


class FilesystemError(VfsError):
    """An operation on a virtual file system could not be carried out."""


class ResourceNotFound(VfsError):
    """A resource was not found in any of the searched file systems."""

    def __init__(
        self,
        path: str,
        tried: Iterable[Tuple[PurePath, BaseException]] = (),
    ) -> None:
        self.path = path
        self.tried: List[Tuple[PurePath, BaseException]] = list(tried)
        searched = ", ".join(str(root) for root, _ in self.tried)
        super().__init__(f"Resource not found: {path}, searched in: [{searched}]")


def sanitize_path(path: PathLike) -> Optional[PurePosixPath]:
    """Turn an absolute virtual path into a relative one.

    Returns ``None`` when the path is not absolute or refers to a parent
    directory. Empty and ``.`` components are dropped.
    """
    text = path.as_posix() if isinstance(path, PurePath) else str(path)
    if not text.startswith("/"):
        return None
    parts = []
    for part in text.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            return None
        parts.append(part)
    return PurePosixPath(*parts)


@dataclass(frozen=True)
class OpenOptions:
    """How a file is to be opened."""

    read: bool = False
    write: bool = False
    create: bool = False
    append: bool = False
    truncate: bool = False

    def is_mutating(self) -> bool:
        """Whether opening with these options may alter the file."""
        return self.write or self.create or self.append or self.truncate

    def _validate(self) -> None:
        writable = self.write or self.append
        if not (self.read or writable):
            raise FilesystemError(
                "A file must be opened for reading, writing or appending"
            )
        if not writable and (self.create or self.truncate):
            raise FilesystemError(
                "Creating or truncating a file requires write or append access"
            )
        if self.append and self.truncate:
            raise FilesystemError("A file cannot be both appended to and truncated")

    def to_mode(self) -> str:
        """The binary mode string for a file object opened with these options."""
        self._validate()
        if self.append:
            return "a+b" if self.read else "ab"
        if self.write:
            return "r+b" if self.read else "wb"
        return "rb"


@dataclass(frozen=True)
class Metadata:
    """What is known about a file or directory."""

    is_dir: bool
    is_file: bool
    length: int


class VFS(abc.ABC):
    """A file system with absolute, slash-separated virtual paths."""

    @abc.abstractmethod
    def open_options(self, path: PathLike, options: OpenOptions) -> BinaryIO:
        """Open the file at ``path`` with the given options."""

    def open(self, path: PathLike) -> BinaryIO:
        """Open the file at ``path`` for reading."""
        return self.open_options(path, OpenOptions(read=True))

    def create(self, path: PathLike) -> BinaryIO:
        """Open the file for writing, truncating it if it exists."""
        return self.open_options(
            path, OpenOptions(write=True, create=True, truncate=True)
        )

    def append(self, path: PathLike) -> BinaryIO:
        """Open the file for appending, creating it if necessary."""
        return self.open_options(path, OpenOptions(write=True, create=True, append=True))

    @abc.abstractmethod
    def mkdir(self, path: PathLike) -> None:
        """Create a directory, with any missing parents."""

    @abc.abstractmethod
    def rm(self, path: PathLike) -> None:
        """Remove a file or an empty directory."""

    @abc.abstractmethod
    def rmrf(self, path: PathLike) -> None:
        """Remove a file or a directory with all its contents."""

    @abc.abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Whether something exists at ``path``."""

    @abc.abstractmethod
    def metadata(self, path: PathLike) -> Metadata:
        """The metadata of the file or directory at ``path``."""

    @abc.abstractmethod
    def read_dir(self, path: PathLike) -> List[PurePosixPath]:
        """The virtual paths of all entries in the directory at ``path``."""

    @abc.abstractmethod
    def to_path_buf(self) -> Optional[Path]:
        """The real location of this file system's root, if it has one."""