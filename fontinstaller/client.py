"""Client entry points for installing and uninstalling fonts by path or name."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .errors import (
    INVALID_PARAM_MESSAGE,
    FontError,
    FontErrorCode,
    install_error_message,
    uninstall_error_message,
)
from .font_manager import DEFAULT_INSTALL_PATH, FontManager

logger = logging.getLogger(__name__)

PATH_MAX = 4096


def path_to_real_path(path) -> str:
    """Resolve path to an existing canonical path.

    Raises ValueError for an empty or over-long path and OSError if it cannot
    be resolved or does not exist.
    """
    path = os.fspath(path)
    if not path:
        raise ValueError("path is empty")
    if len(path) >= PATH_MAX:
        raise ValueError(f"path length {len(path)} is too long")
    real_path = os.path.realpath(path, strict=True)
    if not os.access(real_path, os.F_OK):
        raise FileNotFoundError(real_path)
    return real_path


def _install_error(code) -> FontError:
    return FontError(code, install_error_message(code))


def install_font(font_path, manager=None) -> str:
    """Install the font file at font_path; return the path it was installed to."""
    if manager is None:
        manager = FontManager()
    font_path = os.fspath(font_path)
    if not font_path:
        raise FontError(FontErrorCode.ERR_FILE_NOT_EXISTS, INVALID_PARAM_MESSAGE)
    try:
        real_path = path_to_real_path(font_path)
        handle = open(real_path, "rb")
    except (OSError, ValueError) as exc:
        logger.error("cannot open font file %s: %s", font_path, exc)
        raise _install_error(FontErrorCode.ERR_FILE_NOT_EXISTS) from exc
    with handle:
        try:
            return manager.install_font(handle)
        except FontError as exc:
            raise _install_error(exc.code) from exc


def uninstall_font(font_name, manager=None) -> str:
    """Uninstall the font providing font_name; return the removed file's path."""
    if manager is None:
        manager = FontManager()
    if not font_name:
        raise FontError(FontErrorCode.ERR_UNINSTALL_FILE_NOT_EXISTS, INVALID_PARAM_MESSAGE)
    try:
        return manager.uninstall_font(font_name)
    except FontError as exc:
        raise FontError(exc.code, uninstall_error_message(exc.code)) from exc


def main(argv=None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(prog="fontinstaller", description="Install or remove fonts.")
    parser.add_argument(
        "--install-path",
        default=DEFAULT_INSTALL_PATH,
        help="directory holding installed fonts",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    install_parser = commands.add_parser("install", help="install a font file")
    install_parser.add_argument("font_path")
    uninstall_parser = commands.add_parser("uninstall", help="remove a font by full name")
    uninstall_parser.add_argument("font_name")
    args = parser.parse_args(argv)

    manager = FontManager(args.install_path)
    try:
        if args.command == "install":
            print(install_font(args.font_path, manager))
        else:
            print(f"removed {uninstall_font(args.font_name, manager)}")
    except FontError as exc:
        print(f"error {int(exc.code)}: {exc.message}", file=sys.stderr)
        return 1
    return 0