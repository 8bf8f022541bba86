"""A read-only file system backed by a zip archive."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path, PurePath, PurePosixPath
from typing import BinaryIO, List, Optional

from .core import VFS, FilesystemError, Metadata, OpenOptions, PathLike


def _path_text(path: PathLike) -> str:
    return path.as_posix() if isinstance(path, PurePath) else str(path)


class ZipFileWrapper(io.BytesIO):
    """The whole contents of one archive member, readable and seekable."""

    def writable(self) -> bool:
        return False

    def _ensure_writable(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        if not self.writable():
            raise FilesystemError("Cannot write to a zip file!")

    def write(self, data) -> int:  # type: ignore[override]
        self._ensure_writable()
        return super().write(data)

    def writelines(self, lines) -> None:  # type: ignore[override]
        self._ensure_writable()
        super().writelines(lines)

    def truncate(self, size=None) -> int:  # type: ignore[override]
        self._ensure_writable()
        return super().truncate(size)

    def __repr__(self) -> str:
        return "<Zipfile>"


class ZipFS(VFS):
    """A read-only file system whose contents come from a zip archive."""

    def __init__(self, archive: zipfile.ZipFile, source: Optional[PathLike] = None) -> None:
        self._archive = archive
        self._source = Path(source) if source is not None else None
        self._index: List[str] = archive.namelist()

    @classmethod
    def from_path(cls, filename: PathLike) -> "ZipFS":
        """Open the zip archive stored at ``filename``."""
        try:
            archive = zipfile.ZipFile(Path(filename))
        except zipfile.BadZipFile as err:
            raise FilesystemError(f"Invalid zip file {str(filename)!r}: {err}") from err
        return cls(archive, filename)

    @classmethod
    def from_read(cls, reader: BinaryIO) -> "ZipFS":
        """Read a zip archive from any readable, seekable binary stream."""
        try:
            archive = zipfile.ZipFile(reader)
        except zipfile.BadZipFile as err:
            raise FilesystemError(f"Invalid zip data: {err}") from err
        return cls(archive, None)

    def __repr__(self) -> str:
        where = self._source if self._source is not None else "<memory>"
        return f"<ZipFS source: {where}>"

    def _read_only(self, action: str, path: PathLike) -> FilesystemError:
        return FilesystemError(
            f"Cannot {action} {_path_text(path)!r} in zipfile {self!r}, "
            "filesystem read-only"
        )

    def open_options(self, path: PathLike, options: OpenOptions) -> BinaryIO:
        name = _path_text(path)
        if options.is_mutating():
            raise self._read_only("alter file", name)
        try:
            data = self._archive.read(name)
        except KeyError as err:
            raise FilesystemError(
                f"File {name!r} not found in zipfile {self!r}"
            ) from err
        return ZipFileWrapper(data)

    def mkdir(self, path: PathLike) -> None:
        raise self._read_only("mkdir", path)

    def rm(self, path: PathLike) -> None:
        raise self._read_only("rm", path)

    def rmrf(self, path: PathLike) -> None:
        raise self._read_only("rmrf", path)

    def exists(self, path: PathLike) -> bool:
        try:
            self._archive.getinfo(_path_text(path))
        except KeyError:
            return False
        return True

    def metadata(self, path: PathLike) -> Metadata:
        name = _path_text(path)
        try:
            info = self._archive.getinfo(name)
        except KeyError as err:
            raise FilesystemError(
                f"Metadata not found in zip file for {name}"
            ) from err
        # Zip archives have no real directories, only long member names.
        return Metadata(is_dir=False, is_file=True, length=info.file_size)

    def read_dir(self, path: PathLike) -> List[PurePosixPath]:
        prefix = _path_text(path)
        return [PurePosixPath(name) for name in self._index if name.startswith(prefix)]

    def to_path_buf(self) -> Optional[Path]:
        return self._source