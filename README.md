# layerfs

A small virtual file system layer. It lets you describe several "file
systems" with different backing stores and merge them into a single
hierarchy, so that assets, configuration and user data can all be reached
through one set of paths such as `/sprites/player.png`.

## Modules

- `layerfs.core`: the shared pieces: the abstract `VFS` interface,
  `OpenOptions`, `Metadata`, `sanitize_path` and the error classes.
- `layerfs.physical`: `PhysicalFS`, backed by a directory on disk.
- `layerfs.zipfs`: `ZipFS`, a read-only view of a zip archive, and
  `ZipFileWrapper`, the in-memory file object it hands out.
- `layerfs.overlay`: `OverlayFS`, which stacks other file systems.

## Backends

- `PhysicalFS(root, readonly=False)`: a directory on disk used as the root
  of its hierarchy. Paths must be absolute (start with `/`) and may not
  contain `..`; empty and `.` components are ignored. The root directory
  is created the first time it is needed. A read-only instance refuses
  `mkdir`, `rm`, `rmrf` and any open that would write, create, append or
  truncate.
- `ZipFS`: a read-only view of a zip archive, built with
  `ZipFS.from_path(filename)` or, for any readable and seekable binary
  stream such as an `io.BytesIO`, `ZipFS.from_read(reader)`. Paths are
  looked up as archive member names exactly as given, for example
  `"sprites/player.png"`, with no leading slash. An opened member is read
  wholly into memory as a `ZipFileWrapper`, which can be read from and
  seeked in; writing to it raises `FilesystemError`. `metadata` always
  reports a file, since zip archives have no real directories, and
  `read_dir` returns every member whose name starts with the given text.
- `OverlayFS()`: joins several file systems in order. Add them with
  `push_back` or `push_front`; `roots()` returns them in search order.
  `open`, `create`, `append`, `open_options`, `mkdir`, `rm`, `rmrf` and
  `metadata` try each one in turn and use the first that succeeds;
  `exists` is true if any of them has the path; `read_dir` concatenates
  the listings of all of them that can list the path.

All of them share the `VFS` interface: `open`, `create`, `append`,
`open_options`, `mkdir`, `rm`, `rmrf`, `exists`, `metadata`, `read_dir`
and `to_path_buf`. `to_path_buf` returns the root directory of a
`PhysicalFS`, the archive path of a `ZipFS` made with `from_path`, and
`None` otherwise.

## Example

```python
from layerfs.core import OpenOptions
from layerfs.overlay import OverlayFS
from layerfs.physical import PhysicalFS

fs = OverlayFS()
fs.push_back(PhysicalFS("save_data", readonly=False))
fs.push_back(PhysicalFS("resources", readonly=True))

with fs.create("/settings.toml") as f:
    f.write(b"volume = 0.8\n")

with fs.open("/settings.toml") as f:
    print(f.read())

for entry in fs.read_dir("/"):
    info = fs.metadata(entry)
    print(entry, info.is_file, info.length)

with fs.open_options("/settings.toml", OpenOptions(read=True, write=True)) as f:
    f.seek(0)
    f.write(b"volume = 0.5\n")
```

Reading from a zip archive held in memory:

```python
import io
import zipfile

from layerfs.zipfs import ZipFS

buffer = io.BytesIO()
with zipfile.ZipFile(buffer, "w") as archive:
    archive.writestr("fake_file_name.txt", b"Zip contents!")
buffer.seek(0)

zfs = ZipFS.from_read(buffer)
print(zfs.exists("fake_file_name.txt"))
print(zfs.open("fake_file_name.txt").read())
```

## Open options

`OpenOptions` is a frozen dataclass with the flags `read`, `write`,
`create`, `append` and `truncate`, all `False` by default.
`is_mutating()` tells whether any flag other than `read` is set.
`to_mode()` gives the matching binary mode string and raises
`FilesystemError` for combinations that make no sense: no read, write or
append access at all, `create` or `truncate` without write access, or
`append` together with `truncate`.

## Errors

`VfsError` is the base class of the package's own errors.
`FilesystemError` is raised for invalid paths, operations refused by a
read-only file system, invalid option combinations, invalid zip data and
members missing from an archive. When an `OverlayFS` cannot open a file
anywhere it raises `ResourceNotFound`, whose `tried` attribute lists each
root it tried (or `<invalid path>` for one without a location) together
with the error it got there; when its other operations fail everywhere it
raises `FilesystemError`.

Errors from the operating system in a `PhysicalFS`, such as a missing
file or a non-empty directory passed to `rm`, are raised as the usual
`OSError` subclasses. `OverlayFS` treats those, like `VfsError`, as "try
the next root".

## What it does not do

This is a library only; it has no command-line tool. Zip archives can
only be read, never created or changed, and an `OverlayFS` cannot write
into one.

## Running the tests

```
pip install -e ".[test]"
pytest
```