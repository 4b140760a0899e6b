# fontinstaller

Install user fonts (TrueType and OpenType files and TrueType collections)
into a managed font directory, keep a JSON registry of what is installed,
and remove fonts again by their full name.

## What it does

- Reads the full name (name ID 4) of every face in a font file from its
  `name` table. A file that is not a font, or in which any face has no
  readable full name, is rejected.
- Refuses a font if any of its full names is already registered.
- Allows at most 200 installed font files.
- Copies the file into the install directory through a `temp/` staging
  directory inside it; if a file of the same name is already installed, the
  new copy gets a `YYYYMMDD-HHMMSS_` local-time prefix.
- Records each installed file and its full names in
  `install_fontconfig.json` inside the install directory, creating the file
  if it is missing:

  ```json
  {
      "fontlist": [
          {"fontfullpath": "/srv/fonts/Example.ttf", "fullname": ["Example Regular"]}
      ]
  }
  ```

- Uninstalling by any one of a font's full names removes the file and its
  registry entry.
- After each successful install or uninstall, a `FontEvent` is passed to an
  optional publisher callable.

The install directory itself must already exist; it is not created. The
default is `/data/service/el1/public/for-all-app/fonts/`.

## Installation

```
pip install fontinstaller
```

## Command line

```
fontinstaller [--install-path DIR] install FONT_PATH
fontinstaller [--install-path DIR] uninstall FONT_NAME
```

`install` prints the path the font was installed to; `uninstall` prints
`removed <path>`. On failure the command prints `error <code>: <message>` to
standard error and exits with status 1.

## Library use

`fontinstaller.client` works with file paths and font names:

```python
from fontinstaller.client import install_font, uninstall_font
from fontinstaller.errors import FontError
from fontinstaller.font_manager import FontManager

manager = FontManager("/srv/fonts/", print)

try:
    installed = install_font("/home/me/Downloads/Example.ttf", manager)
    removed = uninstall_font("Example Regular", manager)
except FontError as err:
    print(int(err.code), err.message)
```

`FontManager.install_font` itself takes an open binary file or a file
descriptor and returns the installed path; `FontManager.uninstall_font`
takes a full name and returns the removed path. Both raise `FontError`.

Other pieces:

- `fontinstaller.font_manager.read_font_full_names(data)` returns the full
  names found in font bytes (an empty list if they are not a usable font),
  and `format_full_name(names)` joins them with commas, as carried in the
  `fontFullNames` parameter of a `FontEvent`.
- `fontinstaller.font_config.FontConfig` reads and updates the registry file
  directly.
- `fontinstaller.client.path_to_real_path(path)` resolves a path to an
  existing canonical path.
- `fontinstaller.file_utils` holds the file helpers the manager is built on.

## Error codes

`fontinstaller.errors.FontErrorCode` lists the codes a `FontError` carries:

| Code       | Name                            | Message                                       |
|------------|---------------------------------|-----------------------------------------------|
| 201        | `ERR_NO_PERMISSION`             | Permission denied.                            |
| 202        | `ERR_NOT_SYSTEM_APP`            | Non-system application.                       |
| 31100101   | `ERR_FILE_NOT_EXISTS`           | Font does not exist.                          |
| 31100102   | `ERR_FILE_VERIFY_FAIL`          | Font is not supported.                        |
| 31100103   | `ERR_COPY_FAIL`                 | Font file copy failed.                        |
| 31100104   | `ERR_INSTALLED_ALRADY`          | Font file installed.                          |
| 31100105   | `ERR_MAX_FILE_COUNT`            | Exceeded maximum number of installed files.   |
| 31100106   | `ERR_INSTALL_FAIL`              | Other error.                                  |
| 31100107   | `ERR_UNINSTALL_FILE_NOT_EXISTS` | Font file does not exist.                     |
| 31100108   | `ERR_UNINSTALL_REMOVE_FAIL`     | Font file delete error.                       |
| 31100109   | `ERR_UNINSTALL_FAIL`            | Other error.                                  |

An empty path or name is reported with the message `invalid param`.
`install_error_message(code)` and `uninstall_error_message(code)` return the
message for a code.

## What it does not do

- It runs in the caller's own process: there is no background service, no
  permission or caller checks, and the permission codes above are never
  raised by the package itself.
- Font update events go only to the publisher callable given to
  `FontManager`; nothing is broadcast to other programs.
- Installed fonts are not registered with any system font lookup; they are
  only copied and recorded in the registry file.

## Running the tests

```
pip install "fontinstaller[test]"
pytest
```