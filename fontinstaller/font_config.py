"""The JSON record of installed fonts and the names each font file provides."""

from __future__ import annotations

import json
import logging
import os
import threading

logger = logging.getLogger(__name__)

FONT_LIST_KEY = "fontlist"
FONT_PATH_KEY = "fontfullpath"
FONT_FULL_NAME_KEY = "fullname"


class FontConfig:
    """Reads and updates the installed-fonts configuration file.

    The file holds an object whose "fontlist" array lists records of the
    form {"fontfullpath": <path>, "fullname": [<name>, ...]}.
    """

    def __init__(self, config_path):
        self.config_path = os.fspath(config_path)
        self._fonts_map: dict[str, list[str]] = {}
        self._config_lock = threading.Lock()
        self._fonts_map_lock = threading.Lock()

    def _read_document(self):
        """Return the parsed configuration document, or None if unreadable."""
        with self._config_lock:
            try:
                with open(self.config_path, "rb") as handle:
                    raw = handle.read()
            except OSError as exc:
                logger.error("failed to open %s: %s", self.config_path, exc)
                return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error("failed to parse %s: %s", self.config_path, exc)
            return None

    def _write_document(self, document) -> bool:
        text = json.dumps(document, indent="\t", ensure_ascii=False)
        with self._config_lock:
            try:
                with open(self.config_path, "w", encoding="utf-8") as handle:
                    handle.write(text)
            except OSError as exc:
                logger.error("failed to write %s: %s", self.config_path, exc)
                return False
        return True

    def _cached_map(self) -> dict[str, list[str]]:
        if not self._fonts_map:
            self._fonts_map = self.get_fonts_map()
        return self._fonts_map

    def insert_font_record(self, font_path, full_names) -> bool:
        """Append a record for font_path to the file; False if the file is unusable."""
        document = self._read_document()
        if not isinstance(document, dict):
            logger.error("checking the config file failed")
            return False
        font_list = document.get(FONT_LIST_KEY)
        if not isinstance(font_list, list):
            logger.error("font config file's format is incorrect")
            return False
        font_list.append(
            {FONT_PATH_KEY: os.fspath(font_path), FONT_FULL_NAME_KEY: list(full_names)}
        )
        return self._write_document(document)

    def delete_font_record(self, font_path) -> bool:
        """Remove the record for font_path and rewrite the file; False if there is none."""
        font_path = os.fspath(font_path)
        with self._fonts_map_lock:
            fonts = self._cached_map()
            if font_path not in fonts:
                return False
            del fonts[font_path]
            document = {
                FONT_LIST_KEY: [
                    {FONT_PATH_KEY: path, FONT_FULL_NAME_KEY: list(names)}
                    for path, names in fonts.items()
                ]
            }
            return self._write_document(document)

    def get_installed_fonts_num(self) -> int:
        """Return how many font files are recorded."""
        with self._fonts_map_lock:
            return len(self._cached_map())

    def get_font_file_by_name(self, full_name) -> str:
        """Return the path of the font file providing full_name, or ""."""
        with self._fonts_map_lock:
            for path, names in self._cached_map().items():
                if full_name in names:
                    return path
        return ""

    def get_fonts_map(self) -> dict[str, list[str]]:
        """Read the file and map each recorded font path to its full names."""
        document = self._read_document()
        if not isinstance(document, dict):
            logger.error("checking the config file failed")
            return {}
        font_list = document.get(FONT_LIST_KEY)
        if not isinstance(font_list, list):
            return {}
        fonts: dict[str, list[str]] = {}
        for item in font_list:
            if not isinstance(item, dict):
                continue
            names_value = item.get(FONT_FULL_NAME_KEY)
            names = (
                [name for name in names_value if isinstance(name, str)]
                if isinstance(names_value, list)
                else []
            )
            path = item.get(FONT_PATH_KEY)
            if isinstance(path, str):
                fonts.setdefault(path, names)
        return fonts