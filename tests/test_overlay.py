from pathlib import PurePosixPath

import pytest

from layerfs.core import FilesystemError, OpenOptions, ResourceNotFound
from layerfs.overlay import OverlayFS
from layerfs.physical import PhysicalFS


@pytest.fixture
def layered(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "Cargo.toml").write_text("[package]\n")
    (second / "lib.rs").write_text("pub fn x() {}\n")
    (first / "shared.txt").write_text("from first")
    (second / "shared.txt").write_text("from second")
    fs1 = PhysicalFS(first, True)
    fs2 = PhysicalFS(second, True)
    ofs = OverlayFS()
    ofs.push_back(fs1)
    ofs.push_back(fs2)
    return ofs, fs1, fs2, first, second


def test_read_overlay_exists(layered):
    ofs = layered[0]
    assert ofs.exists("/Cargo.toml")
    assert ofs.exists("/lib.rs")
    assert not ofs.exists("/foobaz.rs")


def test_open_prefers_first_root(layered):
    ofs = layered[0]
    with ofs.open("/shared.txt") as f:
        assert f.read() == b"from first"
    with ofs.open("/lib.rs") as f:
        assert f.read() == b"pub fn x() {}\n"


def test_push_front_changes_priority(layered, tmp_path):
    ofs = layered[0]
    front = tmp_path / "front"
    front.mkdir()
    (front / "shared.txt").write_text("from front")
    ofs.push_front(PhysicalFS(front, True))
    assert ofs.roots()[0].to_path_buf() == front
    with ofs.open("/shared.txt") as f:
        assert f.read() == b"from front"


def test_roots_order(layered):
    ofs, fs1, fs2 = layered[:3]
    assert list(ofs.roots()) == [fs1, fs2]


def test_missing_resource_reports_tried(layered):
    ofs, _, _, first, second = layered
    with pytest.raises(ResourceNotFound) as info:
        ofs.open("/nope.txt")
    assert info.value.path == "/nope.txt"
    assert [root for root, _ in info.value.tried] == [first, second]


def test_readonly_everywhere_cannot_create(layered):
    ofs = layered[0]
    with pytest.raises(ResourceNotFound):
        ofs.create("/new.txt")
    with pytest.raises(FilesystemError):
        ofs.mkdir("/newdir")
    with pytest.raises(FilesystemError):
        ofs.rm("/shared.txt")
    with pytest.raises(FilesystemError):
        ofs.rmrf("/shared.txt")


def test_writes_fall_through_to_writable_root(layered, tmp_path):
    ofs = layered[0]
    writable = tmp_path / "writable"
    ofs.push_back(PhysicalFS(writable, False))
    ofs.mkdir("/made")
    assert (writable / "made").is_dir()
    with ofs.open_options("/made/a.txt", OpenOptions(write=True, create=True)) as f:
        f.write(b"abc")
    assert (writable / "made" / "a.txt").read_bytes() == b"abc"
    ofs.rm("/made/a.txt")
    assert not ofs.exists("/made/a.txt")
    ofs.rmrf("/made")
    assert not (writable / "made").exists()


def test_metadata_and_errors(layered):
    ofs = layered[0]
    meta = ofs.metadata("/lib.rs")
    assert meta.is_file
    assert meta.length == len("pub fn x() {}\n")
    with pytest.raises(FilesystemError):
        ofs.metadata("/absent")


def test_read_dir_merges(layered):
    ofs = layered[0]
    entries = sorted(str(p) for p in ofs.read_dir("/"))
    assert entries == ["/Cargo.toml", "/lib.rs", "/shared.txt", "/shared.txt"]


def test_read_dir_skips_failures(layered):
    ofs = layered[0]
    assert ofs.read_dir("/missing_dir") == []
    assert ofs.read_dir("relative") == []


def test_to_path_buf_is_none():
    assert OverlayFS().to_path_buf() is None


def test_empty_overlay():
    ofs = OverlayFS()
    assert not ofs.exists("/x")
    assert ofs.read_dir(PurePosixPath("/")) == []
    with pytest.raises(ResourceNotFound) as info:
        ofs.open(PurePosixPath("/x"))
    assert info.value.tried == []