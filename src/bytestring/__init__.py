"""
bytestring: binary-safe byte strings with an erasable immutable variant.
"""

from .base import ByteOps
from .mutable import ByteString
from .immutable import ImmutableByteString
from .utils import secure_compare, secure_clear
from .errors import (
    ByteStringError,
    InvalidStateError,
    SizeMismatchError,
    IndexOutOfRangeError,
    InvalidFormatError,
    TypeMismatchError,
    UnsupportedOperationError,
)

__all__ = ["ByteOps",
                "ByteString",
                "ImmutableByteString",
                "secure_compare",
                "secure_clear",
                "ByteStringError",
                "InvalidStateError",
                "SizeMismatchError",
                "IndexOutOfRangeError",
                "InvalidFormatError",
                "TypeMismatchError",
                "UnsupportedOperationError",
                ]

__version__ = "1.0.0"
__license__ = "MIT"
