"""UTF-8 strings and code point helpers, MAC formatting, timing utilities and a threaded logger."""

__version__ = "0.1.0"
__all__ = ["utf8", "mac", "text", "clock", "log"]