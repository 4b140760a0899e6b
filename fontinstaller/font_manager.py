"""Installing and uninstalling font files under a managed font directory."""

from __future__ import annotations

import logging
import os
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Callable, Optional

from .errors import (
    FontError,
    FontErrorCode,
    install_error_message,
    uninstall_error_message,
)
from .file_utils import (
    check_path_exist,
    copy_file,
    create_dir_with_permission,
    create_file_with_permission,
    get_file_name,
    get_file_path_by_fd,
    get_file_time,
    remove_file,
    rename_file,
)
from .font_config import FontConfig

logger = logging.getLogger(__name__)

DEFAULT_INSTALL_PATH = "/data/service/el1/public/for-all-app/fonts/"
CONFIG_FILE_NAME = "install_fontconfig.json"
TEMP_DIR_NAME = "temp"
MAX_INSTALL_NUM = 200

FONT_UPDATE_FOR_POLICY = "usual.event.FONT_UPDATE_FOR_POLICY"
FONT_EVENT_TYPE = "eventType"
FONT_EVENT_FONT_NAMES = "fontFullNames"

_EMPTY_FONT_LIST = '{\n        "fontlist": []\n    }'
_READ_CHUNK = 1024 * 20
_SFNT_VERSIONS = {b"\x00\x01\x00\x00", b"OTTO", b"true", b"typ1"}
_FULL_NAME_ID = 4
_WINDOWS_PLATFORM = 3
_UNICODE_PLATFORM = 0
_MAC_PLATFORM = 1
_ENGLISH_US = 0x409


class FontEventType(IntEnum):
    """Kind of change announced after fonts are installed or removed."""

    INSTALL = 0
    UNINSTALL = 1


@dataclass(frozen=True)
class FontEvent:
    """A font update notification."""

    event_type: FontEventType
    full_names: str
    action: str = field(default=FONT_UPDATE_FOR_POLICY)

    @property
    def params(self) -> dict:
        """The parameters carried by the notification."""
        return {FONT_EVENT_TYPE: int(self.event_type), FONT_EVENT_FONT_NAMES: self.full_names}


def _decode_name(platform: int, encoding: int, raw: bytes) -> str:
    if platform in (_UNICODE_PLATFORM, _WINDOWS_PLATFORM):
        return raw.decode("utf-16-be", errors="replace")
    if platform == _MAC_PLATFORM and encoding == 0:
        return raw.decode("mac_roman", errors="replace")
    return raw.decode("latin-1")


def _name_priority(platform: int, language: int) -> int:
    if platform == _WINDOWS_PLATFORM and language == _ENGLISH_US:
        return 0
    if platform == _WINDOWS_PLATFORM:
        return 1
    if platform == _UNICODE_PLATFORM:
        return 2
    if platform == _MAC_PLATFORM:
        return 3
    return 4


def _checked_slice(data: bytes, start: int, length: int) -> bytes:
    chunk = data[start:start + length]
    if len(chunk) != length:
        raise ValueError("truncated font data")
    return chunk


def _full_name_from_table(data: bytes, start: int, length: int) -> str:
    table = _checked_slice(data, start, length)
    _, count, string_offset = struct.unpack_from(">3H", table, 0)
    records = _checked_slice(table, 6, 12 * count)
    candidates = []
    for platform, encoding, language, name_id, size, offset in struct.iter_unpack(">6H", records):
        if name_id != _FULL_NAME_ID:
            continue
        begin = string_offset + offset
        raw = table[begin:begin + size]
        if len(raw) != size:
            continue
        text = _decode_name(platform, encoding, raw).replace("\0", "")
        if text:
            candidates.append((_name_priority(platform, language), text))
    if not candidates:
        return ""
    return min(candidates, key=lambda candidate: candidate[0])[1]


def _face_full_name(data: bytes, offset: int) -> str:
    if data[offset:offset + 4] not in _SFNT_VERSIONS:
        raise ValueError("not an sfnt font")
    (num_tables,) = struct.unpack_from(">H", data, offset + 4)
    records = _checked_slice(data, offset + 12, 16 * num_tables)
    for tag, _checksum, table_offset, length in struct.iter_unpack(">4sIII", records):
        if tag == b"name":
            return _full_name_from_table(data, table_offset, length)
    return ""


def _face_offsets(data: bytes) -> list[int]:
    if data[:4] != b"ttcf":
        return [0]
    (count,) = struct.unpack_from(">I", data, 8)
    table = _checked_slice(data, 12, 4 * count)
    return [offset for (offset,) in struct.iter_unpack(">I", table)]


def read_font_full_names(data) -> list[str]:
    """Return the full name of every face in a TrueType/OpenType font or collection.

    An empty list means the data is not a usable font.
    """
    data = bytes(data)
    names = []
    try:
        for offset in _face_offsets(data):
            name = _face_full_name(data, offset)
            if not name:
                return []
            names.append(name)
    except (struct.error, ValueError):
        return []
    return names


def format_full_name(full_names) -> str:
    """Join full names with commas."""
    return ",".join(full_names)


def _read_source(source) -> bytes:
    if isinstance(source, int):
        os.lseek(source, 0, os.SEEK_SET)
        return b"".join(iter(lambda: os.read(source, _READ_CHUNK), b""))
    source.seek(0)
    return source.read()


def _source_path(source) -> str:
    if isinstance(source, int):
        return get_file_path_by_fd(source)
    name = getattr(source, "name", "")
    if isinstance(name, int):
        return get_file_path_by_fd(name)
    if isinstance(name, (str, os.PathLike)):
        return os.fspath(name)
    return ""


class FontManager:
    """Copies font files into an install directory and keeps their record."""

    def __init__(
        self,
        install_path=DEFAULT_INSTALL_PATH,
        publisher: Optional[Callable[[FontEvent], object]] = None,
    ):
        self.install_path = Path(install_path)
        self.temp_path = self.install_path / TEMP_DIR_NAME
        self.config_file = self.install_path / CONFIG_FILE_NAME
        self.publisher = publisher

    def _publish(self, event_type: FontEventType, full_names: str) -> None:
        if self.publisher is not None:
            self.publisher(FontEvent(event_type, full_names))

    def check_install_path(self) -> bool:
        """True if the install directory exists; creates its temp directory if needed."""
        if not check_path_exist(self.install_path):
            return False
        if not check_path_exist(self.temp_path):
            return create_dir_with_permission(self.temp_path)
        return True

    def check_font_config_path(self) -> bool:
        """Make sure the configuration file exists, creating an empty one if needed."""
        if check_path_exist(self.config_file):
            return True
        return create_file_with_permission(self.config_file, _EMPTY_FONT_LIST)

    def get_font_full_name(self, source) -> list[str]:
        """Return the full names found in a font given as a descriptor or binary file."""
        try:
            data = _read_source(source)
        except OSError as exc:
            logger.error("reading font data failed: %s", exc)
            return []
        names = read_font_full_names(data)
        if not names:
            logger.error("font file could not be verified")
        return names

    def _copy_into_place(self, source_path: str, source) -> str:
        file_name = get_file_name(source_path)
        temp_path = self.temp_path / file_name
        if not file_name or not copy_file(source, temp_path):
            logger.error("copying to %s failed", temp_path)
            return ""
        dest_path = self.install_path / file_name
        if check_path_exist(dest_path):
            dest_path = self.install_path / f"{get_file_time()}_{file_name}"
            logger.info("target file name exists, storing as %s", dest_path)
        if not rename_file(temp_path, dest_path):
            logger.error("renaming %s failed", temp_path)
            remove_file(temp_path)
            return ""
        return str(dest_path)

    def install_font(self, source) -> str:
        """Install the font read from a descriptor or binary file; return its new path."""
        if not (self.check_install_path() and self.check_font_config_path()):
            raise _install_error(FontErrorCode.ERR_FILE_NOT_EXISTS)
        full_names = self.get_font_full_name(source)
        if not full_names:
            raise _install_error(FontErrorCode.ERR_FILE_VERIFY_FAIL)
        config = FontConfig(self.config_file)
        if any(config.get_font_file_by_name(name) for name in full_names):
            logger.info("font already installed")
            raise _install_error(FontErrorCode.ERR_INSTALLED_ALRADY)
        if config.get_installed_fonts_num() >= MAX_INSTALL_NUM:
            logger.info("installed fonts reached %d", MAX_INSTALL_NUM)
            raise _install_error(FontErrorCode.ERR_MAX_FILE_COUNT)
        dest_path = self._copy_into_place(_source_path(source), source)
        if not dest_path:
            raise _install_error(FontErrorCode.ERR_COPY_FAIL)
        if not config.insert_font_record(dest_path, full_names):
            raise _install_error(FontErrorCode.ERR_INSTALL_FAIL)
        self._publish(FontEventType.INSTALL, format_full_name(full_names))
        return dest_path

    def uninstall_font(self, font_full_name) -> str:
        """Remove the installed font file providing font_full_name; return its path."""
        logger.info("uninstalling %s", font_full_name)
        if not font_full_name:
            raise _uninstall_error(FontErrorCode.ERR_UNINSTALL_FILE_NOT_EXISTS)
        config = FontConfig(self.config_file)
        path = config.get_font_file_by_name(font_full_name)
        if not path:
            logger.error("cannot find font %s", font_full_name)
            raise _uninstall_error(FontErrorCode.ERR_UNINSTALL_FILE_NOT_EXISTS)
        if not remove_file(path):
            raise _uninstall_error(FontErrorCode.ERR_UNINSTALL_REMOVE_FAIL)
        if not config.delete_font_record(path):
            logger.error("updating the font config failed")
            raise _uninstall_error(FontErrorCode.ERR_UNINSTALL_FAIL)
        self._publish(FontEventType.UNINSTALL, font_full_name)
        return path


def _install_error(code: FontErrorCode) -> FontError:
    return FontError(code, install_error_message(code))


def _uninstall_error(code: FontErrorCode) -> FontError:
    return FontError(code, uninstall_error_message(code))