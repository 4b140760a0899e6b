"""Error codes and exceptions shared by the font installer."""

from __future__ import annotations

from enum import IntEnum

FONT_SA_ID = 66262

INVALID_PARAM_MESSAGE = "invalid param"
OTHER_ERROR_MESSAGE = "Other error."


class FontErrorCode(IntEnum):
    """Result codes reported by font installation and removal."""

    SUCCESS = 0
    ERR_NO_PERMISSION = 201
    ERR_NOT_SYSTEM_APP = 202

    ERR_FILE_NOT_EXISTS = 31100101
    ERR_FILE_VERIFY_FAIL = 31100102
    ERR_COPY_FAIL = 31100103
    ERR_INSTALLED_ALRADY = 31100104
    ERR_MAX_FILE_COUNT = 31100105
    ERR_INSTALL_FAIL = 31100106
    ERR_UNINSTALL_FILE_NOT_EXISTS = 31100107
    ERR_UNINSTALL_REMOVE_FAIL = 31100108
    ERR_UNINSTALL_FAIL = 31100109


class FontError(Exception):
    """A failed font operation, carrying its error code and message."""

    def __init__(self, code, message):
        try:
            code = FontErrorCode(code)
        except ValueError:
            code = int(code)
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.message} (code {int(self.code)})"


_COMMON_MESSAGES = {
    FontErrorCode.ERR_NO_PERMISSION: "Permission denied.",
    FontErrorCode.ERR_NOT_SYSTEM_APP: "Non-system application.",
}

_INSTALL_MESSAGES = {
    **_COMMON_MESSAGES,
    FontErrorCode.ERR_FILE_NOT_EXISTS: "Font does not exist.",
    FontErrorCode.ERR_FILE_VERIFY_FAIL: "Font is not supported.",
    FontErrorCode.ERR_COPY_FAIL: "Font file copy failed.",
    FontErrorCode.ERR_INSTALLED_ALRADY: "Font file installed.",
    FontErrorCode.ERR_MAX_FILE_COUNT: "Exceeded maximum number of installed files.",
}

_UNINSTALL_MESSAGES = {
    **_COMMON_MESSAGES,
    FontErrorCode.ERR_UNINSTALL_FILE_NOT_EXISTS: "Font file does not exist.",
    FontErrorCode.ERR_UNINSTALL_REMOVE_FAIL: "Font file delete error.",
}


def install_error_message(code) -> str:
    """Return the user-facing message for an installation error code."""
    return _INSTALL_MESSAGES.get(int(code), OTHER_ERROR_MESSAGE)


def uninstall_error_message(code) -> str:
    """Return the user-facing message for an uninstallation error code."""
    return _UNINSTALL_MESSAGES.get(int(code), OTHER_ERROR_MESSAGE)