"""
bytestring.errors
-----------------

Exception hierarchy shared by all byte string types.

Every error derives from ByteStringError and from the closest builtin,
so callers may catch either.
"""

from __future__ import annotations


class ByteStringError(Exception):
    """Base exception for bytestring errors."""


class InvalidStateError(ByteStringError, RuntimeError):
    """Raised when an operation needs a byte string of a different shape."""


class SizeMismatchError(ByteStringError, ValueError):
    """Raised when combining byte strings of different lengths."""


class IndexOutOfRangeError(ByteStringError, IndexError):
    """Raised when assigning past the end of a byte string."""


class InvalidFormatError(ByteStringError, ValueError):
    """Raised when decoding malformed input such as bad hex."""


class TypeMismatchError(ByteStringError, TypeError):
    """Raised when a constructor is handed the wrong kind of source."""


class UnsupportedOperationError(ByteStringError, NotImplementedError):
    """Raised for operations a byte string deliberately does not offer."""
