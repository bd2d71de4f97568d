from pathlib import Path

from lumen_backend.path_utils import is_under_any_root, is_within_root, normalize_path, relative_parts


def test_normalize_path(tmp_path: Path):
    assert normalize_path("") is None
    assert normalize_path("a\x00b") is None
    assert normalize_path(str(tmp_path / "x" / ".." / "y")) == (tmp_path / "y").resolve()
    assert normalize_path("~").is_absolute()


def test_is_within_root(tmp_path: Path):
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    inside = root / "sub" / "a.jpg"
    inside.write_bytes(b"a")
    outside = tmp_path / "b.jpg"
    outside.write_bytes(b"b")

    assert is_within_root(inside, root)
    assert is_within_root(root, root)
    assert not is_within_root(outside, root)
    assert not is_within_root(root / "sub" / ".." / ".." / "b.jpg", root)
    assert not is_within_root(root / "missing.jpg", root)


def test_is_within_root_rejects_symlink_escape(tmp_path: Path):
    root = tmp_path / "root"
    root.mkdir()
    secret = tmp_path / "secret.jpg"
    secret.write_bytes(b"s")
    (root / "link.jpg").symlink_to(secret)
    assert not is_within_root(root / "link.jpg", root)


def test_relative_parts():
    assert relative_parts("/data", "/data") == ""
    assert relative_parts("/data/raw/c.txt", "/data") == "raw/c.txt"


def test_is_under_any_root(tmp_path: Path):
    root = tmp_path / "photos"
    root.mkdir()
    other = tmp_path / "photos-archive"
    other.mkdir()

    assert is_under_any_root(str(root), [str(root)])
    assert is_under_any_root(str(root / "not" / "yet"), [str(other), str(root)])
    assert not is_under_any_root(str(other), [str(root)])
    assert not is_under_any_root(str(root / ".." / "x"), [str(root)])
    assert not is_under_any_root("", [str(root)])
    assert not is_under_any_root(str(root), [])
