"""Small filesystem helpers used when installing fonts."""

from __future__ import annotations

import logging
import os
import shutil
import stat
import time
from pathlib import Path

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 20
_TARGET_MODE = 0o644


def check_path_exist(path_name) -> bool:
    """Return True if the path exists; an empty path never exists."""
    path_name = os.fspath(path_name)
    if not path_name:
        logger.error("check_path_exist: path name is empty")
        return False
    try:
        os.stat(path_name)
    except FileNotFoundError:
        return False
    except OSError as exc:
        logger.error("check_path_exist: %s: %s", path_name, exc)
        return False
    return True


def _is_valid_target(path: str) -> bool:
    return bool(path) and "/." not in path and "./" not in path


def _drop_others_write(path: str) -> bool:
    try:
        mode = os.stat(path).st_mode
        os.chmod(path, stat.S_IMODE(mode) & ~stat.S_IWOTH)
    except OSError as exc:
        logger.error("assigning permissions to %s failed: %s", path, exc)
        return False
    return True


def create_dir_with_permission(file_dir) -> bool:
    """Create a directory that others may not write to."""
    file_dir = os.fspath(file_dir)
    if not _is_valid_target(file_dir):
        logger.error("directory name %s is invalid", file_dir)
        return False
    try:
        os.mkdir(file_dir)
    except FileExistsError:
        if not os.path.isdir(file_dir):
            logger.error("creating directory %s failed: not a directory", file_dir)
            return False
    except OSError as exc:
        logger.error("creating directory %s failed: %s", file_dir, exc)
        return False
    return _drop_others_write(file_dir)


def create_file_with_permission(file_path, default_str="") -> bool:
    """Create (or truncate) a file holding default_str that others may not write to."""
    file_path = os.fspath(file_path)
    if not _is_valid_target(file_path):
        logger.error("file path %s is invalid", file_path)
        return False
    try:
        with open(file_path, "w", encoding="utf-8") as handle:
            if default_str:
                handle.write(default_str)
    except OSError as exc:
        logger.error("creating file %s failed: %s", file_path, exc)
        return False
    return _drop_others_write(file_path)


def get_file_name(path) -> str:
    """Return the part of the path after the last slash."""
    path = os.fspath(path)
    return path.rpartition("/")[2]


def get_file_path_by_fd(fd) -> str:
    """Return the path an open descriptor refers to, or "" if it cannot be found."""
    link = f"/proc/{os.getpid()}/fd/{fd}"
    try:
        return os.readlink(link)
    except OSError as exc:
        logger.error("readlink %s failed: %s", link, exc)
        return ""


def _read_chunks(source):
    if isinstance(source, int):
        while chunk := os.read(source, _CHUNK_SIZE):
            yield chunk
    else:
        while chunk := source.read(_CHUNK_SIZE):
            yield chunk


def copy_file(source, path) -> bool:
    """Copy everything from an open descriptor or binary file object to path.

    The source is read from its start. The target is opened without
    truncation, so only its leading bytes are overwritten.
    """
    if isinstance(source, int):
        if source < 0:
            logger.error("invalid source descriptor")
            return False
        try:
            os.fstat(source)
        except OSError:
            logger.error("failed to get source file stat")
            return False
    try:
        target = os.open(os.fspath(path), os.O_WRONLY | os.O_CREAT | os.O_SYNC, _TARGET_MODE)
    except OSError as exc:
        logger.error("failed to open target file %s: %s", path, exc)
        return False
    try:
        if isinstance(source, int):
            os.lseek(source, 0, os.SEEK_SET)
        else:
            source.seek(0)
        for chunk in _read_chunks(source):
            if os.write(target, chunk) != len(chunk):
                logger.error("failed to write to target file")
                return False
    except OSError as exc:
        logger.error("copying to %s failed: %s", path, exc)
        return False
    finally:
        os.close(target)
    return True


def get_file_time() -> str:
    """Return the local time as YYYYMMDD-HHMMSS."""
    return time.strftime("%Y%m%d-%H%M%S", time.localtime())


def rename_file(src, dest) -> bool:
    """Move src to dest, replacing dest; False if src is missing or the move fails."""
    if not check_path_exist(src):
        logger.info("file %s does not exist", src)
        return False
    try:
        os.replace(src, dest)
    except OSError as exc:
        logger.error("rename failed: %s", exc)
        return False
    return True


def _remove_all(path) -> bool:
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.unlink(path)
    except FileNotFoundError:
        return True
    except OSError as exc:
        logger.info("removing %s failed: %s", path, exc)
        return False
    return True


def remove_file(path) -> bool:
    """Remove a file or directory tree; a missing path counts as removed."""
    if not check_path_exist(path):
        logger.info("file %s does not exist", path)
        return True
    return _remove_all(path)


def delete_dir(root_path, is_delete_root_dir) -> None:
    """Remove a directory tree, or only its contents when is_delete_root_dir is false."""
    if not check_path_exist(root_path):
        logger.info("dir %s does not exist", root_path)
        return
    root = Path(root_path)
    if is_delete_root_dir:
        _remove_all(root)
        return
    for entry in root.iterdir():
        _remove_all(entry)