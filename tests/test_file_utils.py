import os
import re
import stat
import time

import pytest

from fontinstaller import file_utils


def test_check_path_exist(tmp_path):
    assert file_utils.check_path_exist(tmp_path) is True
    assert file_utils.check_path_exist(tmp_path / "missing") is False
    assert file_utils.check_path_exist("") is False


def test_create_dir_with_permission(tmp_path):
    target = tmp_path / "fonts"
    assert file_utils.create_dir_with_permission(str(target)) is True
    assert target.is_dir()
    assert os.stat(target).st_mode & stat.S_IWOTH == 0


def test_create_dir_existing_is_ok(tmp_path):
    target = tmp_path / "fonts"
    target.mkdir()
    os.chmod(target, 0o777)
    assert file_utils.create_dir_with_permission(str(target)) is True
    assert os.stat(target).st_mode & stat.S_IWOTH == 0


@pytest.mark.parametrize("name", ["", "a/./b", "../x", "dir/.hidden"])
def test_create_dir_rejects_invalid(name):
    assert file_utils.create_dir_with_permission(name) is False


def test_create_dir_missing_parent(tmp_path):
    assert file_utils.create_dir_with_permission(str(tmp_path / "a" / "b")) is False


def test_create_file_with_permission(tmp_path):
    target = tmp_path / "install_fontconfig.json"
    target.write_text("old content that is long")
    os.chmod(target, 0o666)
    content = '{"fontlist": []}'
    assert file_utils.create_file_with_permission(str(target), content) is True
    assert target.read_text() == content
    assert os.stat(target).st_mode & stat.S_IWOTH == 0


def test_create_file_empty_default(tmp_path):
    target = tmp_path / "empty.json"
    assert file_utils.create_file_with_permission(str(target)) is True
    assert target.read_text() == ""


@pytest.mark.parametrize("name", ["", "x/./y.json", "./y.json"])
def test_create_file_rejects_invalid(name):
    assert file_utils.create_file_with_permission(name, "data") is False


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/data/test/HarmonyOS_Sans.ttf", "HarmonyOS_Sans.ttf"),
        ("NotoSansCJK-Regular.ttc", "NotoSansCJK-Regular.ttc"),
        ("/data/test/", ""),
    ],
)
def test_get_file_name(path, expected):
    assert file_utils.get_file_name(path) == expected


def test_copy_file_from_descriptor(tmp_path):
    data = bytes(range(256)) * 300
    src = tmp_path / "src.ttf"
    src.write_bytes(data)
    dest = tmp_path / "dest.ttf"
    fd = os.open(src, os.O_RDONLY)
    try:
        os.lseek(fd, 100, os.SEEK_SET)
        assert file_utils.copy_file(fd, str(dest)) is True
    finally:
        os.close(fd)
    assert dest.read_bytes() == data
    assert stat.S_IMODE(os.stat(dest).st_mode) & stat.S_IWOTH == 0


def test_copy_file_from_file_object(tmp_path):
    data = b"font bytes" * 5000
    src = tmp_path / "src.ttf"
    src.write_bytes(data)
    dest = tmp_path / "dest.ttf"
    with open(src, "rb") as handle:
        handle.read(10)
        assert file_utils.copy_file(handle, dest) is True
    assert dest.read_bytes() == data


def test_copy_file_invalid_source(tmp_path):
    dest = tmp_path / "dest.ttf"
    assert file_utils.copy_file(-1, str(dest)) is False
    assert not dest.exists()


def test_copy_file_bad_target(tmp_path):
    src = tmp_path / "src.ttf"
    src.write_bytes(b"abc")
    fd = os.open(src, os.O_RDONLY)
    try:
        assert file_utils.copy_file(fd, str(tmp_path / "no" / "dest.ttf")) is False
    finally:
        os.close(fd)


def test_get_file_path_by_fd(tmp_path):
    src = tmp_path / "font.ttf"
    src.write_bytes(b"abc")
    fd = os.open(src, os.O_RDONLY)
    try:
        assert file_utils.get_file_path_by_fd(fd) == os.path.realpath(src)
    finally:
        os.close(fd)


def test_get_file_path_by_bad_fd():
    assert file_utils.get_file_path_by_fd(-1) == ""


def test_get_file_time_format():
    before = time.strftime("%Y%m%d", time.localtime())
    value = file_utils.get_file_time()
    assert re.fullmatch(r"\d{8}-\d{6}", value)
    assert value[:8] >= before


def test_rename_file(tmp_path):
    src = tmp_path / "a.ttf"
    src.write_bytes(b"one")
    dest = tmp_path / "b.ttf"
    dest.write_bytes(b"two")
    assert file_utils.rename_file(str(src), str(dest)) is True
    assert not src.exists()
    assert dest.read_bytes() == b"one"


def test_rename_missing_file(tmp_path):
    assert file_utils.rename_file(str(tmp_path / "a"), str(tmp_path / "b")) is False
    assert not (tmp_path / "b").exists()


def test_remove_file(tmp_path):
    target = tmp_path / "a.ttf"
    target.write_bytes(b"x")
    assert file_utils.remove_file(str(target)) is True
    assert not target.exists()
    assert file_utils.remove_file(str(target)) is True


def test_remove_file_directory_tree(tmp_path):
    tree = tmp_path / "temp"
    (tree / "sub").mkdir(parents=True)
    (tree / "sub" / "f.ttf").write_bytes(b"x")
    assert file_utils.remove_file(tree) is True
    assert not tree.exists()


def test_delete_dir_keeps_root(tmp_path):
    root = tmp_path / "fonts"
    (root / "temp").mkdir(parents=True)
    (root / "a.ttf").write_bytes(b"x")
    (root / "temp" / "b.ttf").write_bytes(b"y")
    file_utils.delete_dir(str(root), False)
    assert root.is_dir()
    assert list(root.iterdir()) == []


def test_delete_dir_removes_root(tmp_path):
    root = tmp_path / "fonts"
    root.mkdir()
    (root / "a.ttf").write_bytes(b"x")
    file_utils.delete_dir(str(root), True)
    assert not root.exists()


def test_delete_dir_missing_is_harmless(tmp_path):
    missing = tmp_path / "missing"
    file_utils.delete_dir(str(missing), True)
    assert not missing.exists()
    assert list(tmp_path.iterdir()) == []