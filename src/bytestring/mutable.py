"""
bytestring.mutable
------------------

Growable, in-place writable byte string.

- ByteString() / ByteString(source)
- ByteString.from_hex(text) and ByteString.from_stream(io)
- set_byte_at(), append() / concat() / +=
- every read operation from bytestring.base.ByteOps

Construction never transcodes: buffers are copied verbatim, text is stored
as its UTF-8 bytes (``surrogateescape`` keeps undecodable bytes intact).
"""

from __future__ import annotations

import logging
import operator
import re
import typing as _typing

from .base import ByteOps, _octets
from .errors import (
    IndexOutOfRangeError,
    InvalidFormatError,
    UnsupportedOperationError,
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")


def _encode_text(text: str) -> bytes:
    return text.encode("utf-8", "surrogateescape")


def _coerce(source) -> bytearray:
    """Copy `source` into a new bytearray without any charset conversion."""
    if source is None:
        return bytearray()
    if isinstance(source, ByteOps):
        return bytearray(source._inner)
    if isinstance(source, str):
        return bytearray(_encode_text(source))
    try:
        view = memoryview(source)
    except TypeError:
        return bytearray(_encode_text(str(source)))
    with view:
        return bytearray(view)


def _read_all(stream) -> bytearray:
    data = stream.read()
    if data is None:
        raise ValueError("stream returned no data; non-blocking streams are not supported")
    if isinstance(data, str):
        data = _encode_text(data)
    buf = bytearray(data)
    logger.debug("read %d bytes from %s", len(buf), type(stream).__name__)
    return buf


class ByteString(ByteOps):
    """Mutable byte string owning a bytearray."""

    __slots__ = ("_inner",)

    def __init__(self, source: _typing.Any = None):
        self._inner = _coerce(source)

    # ---- Convenience factories ----
    @classmethod
    def from_hex(cls, text: str) -> "ByteString":
        """Decode a hex string; raises InvalidFormatError when malformed."""
        if not isinstance(text, str):
            raise TypeError("hex input must be str")
        if len(text) % 2:
            raise InvalidFormatError(f"odd-length hex string ({len(text)} characters)")
        if not _HEX_RE.fullmatch(text):
            raise InvalidFormatError("hex string contains non-hex characters")
        return cls(bytes.fromhex(text))

    @classmethod
    def from_stream(cls, stream) -> "ByteString":
        """Read `stream` to exhaustion and wrap its bytes."""
        bs = cls()
        bs._inner = _read_all(stream)
        return bs

    read = from_stream

    # ---- Mutation ----
    def set_byte_at(self, index: int, value: int) -> None:
        index = operator.index(index)
        size = len(self._inner)
        if index >= size or index < -size:
            raise IndexOutOfRangeError(f"index {index} out of range for size {size}")
        # bytearray rejects values outside 0..255 with ValueError
        self._inner[index] = value

    def __setitem__(self, index: int, value: int) -> None:
        self.set_byte_at(index, value)

    def append(self, other) -> "ByteString":
        """Append one byte (int) or every byte of a sequence; returns self."""
        if isinstance(other, int):
            self._inner.append(other)
            return self
        view = _octets(other)
        if view is None:
            raise TypeError(f"cannot append {type(other).__name__!r}")
        with view:
            data = bytes(view)
        # copied first: `view` may be an export of self._inner
        self._inner += data
        return self

    concat = append

    def __iadd__(self, other) -> "ByteString":
        return self.append(other)

    def slice_in_place(self, key, length: _typing.Optional[int] = None):
        raise UnsupportedOperationError("destructive slicing is not supported")

    def __delitem__(self, key) -> None:
        self.slice_in_place(key)

    def __repr__(self) -> str:
        return f"ByteString.from_hex({self.to_hex()!r})"
