"""Install and uninstall user fonts with a JSON registry of installed files."""

__version__ = "1.0.0"

__all__ = ["client", "errors", "file_utils", "font_config", "font_manager"]