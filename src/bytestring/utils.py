"""
bytestring.utils

Convenience utilities for secure memory operations.
"""

from __future__ import annotations

import logging
from typing import Union

from cryptography.hazmat.primitives import constant_time

from . import _sodium

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def _comparable(value) -> bytes:
    # ByteOps instances hand out a copy; raw buffers are copied too
    to_bytes = getattr(value, "to_bytes", None)
    if callable(to_bytes) and not isinstance(value, int):
        return to_bytes()
    try:
        return bytes(memoryview(value))
    except TypeError:
        raise TypeError(
            f"cannot compare {type(value).__name__!r} as bytes"
        ) from None


def secure_compare(a, b) -> bool:
    """
    Constant-time comparison of two byte sequences.

    Accepts byte strings or any bytes-like object.
    Returns True if equal, False otherwise.
    Length differences are still observable.
    """
    return constant_time.bytes_eq(_comparable(a), _comparable(b))


def secure_clear(buf: Union[bytearray, memoryview]) -> None:
    """
    Securely zero a mutable buffer in-place.

    Tries sodium_memzero, then ctypes.memset, then a slice fill.
    Works for bytearray or writable memoryview.
    """
    if isinstance(buf, memoryview):
        if buf.readonly:
            raise ValueError("memoryview is read-only")
        buf = buf.cast("B")
    elif not isinstance(buf, bytearray):
        raise TypeError("buf must be bytearray or memoryview")

    if not len(buf):
        return
    try:
        _sodium.sodium_memzero(buf)
        return
    except (TypeError, ValueError, BufferError) as e:
        logger.debug("native zeroing failed, using slice fill: %s", e)
    # still in place: slice assignment of equal length never reallocates
    buf[:] = bytes(len(buf))
