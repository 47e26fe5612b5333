"""
bytestring.immutable
--------------------

Read-only byte string for sensitive data such as key material.

- ImmutableByteString(io) reads the stream to exhaustion and keeps no
  reference to it
- erase() zeroes the storage in place and keeps the length
- usable as a context manager; leaving the block erases
- every read operation from bytestring.base.ByteOps

Implementation notes:
 - There is no __setitem__, append or slice_in_place; item assignment fails
   with Python's own TypeError.
 - Reads hand out copies (bytes, new ByteString) or ints, never the backing
   bytearray.
 - Zeroing goes through utils.secure_clear (sodium_memzero when libsodium is
   present, ctypes.memset otherwise). Copies made before erase() (results of
   to_bytes(), slices, the stream's own buffers) are not reached.
"""

from __future__ import annotations

import logging

from .base import ByteOps
from .errors import TypeMismatchError
from .mutable import _read_all
from .utils import secure_clear

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def _is_stream(source) -> bool:
    if isinstance(source, (ByteOps, str, bytes, bytearray, memoryview)):
        return False
    return callable(getattr(source, "read", None))


class ImmutableByteString(ByteOps):
    """Fixed-length byte string whose only mutation is erase()."""

    __slots__ = ("_inner", "_erased")

    def __init__(self, stream):
        if getattr(self, "_inner", None) is not None:
            raise TypeError("ImmutableByteString cannot be re-initialised")
        if not _is_stream(stream):
            raise TypeMismatchError(
                f"expected a readable stream, got {type(stream).__name__!r}"
            )
        self._inner = _read_all(stream)
        self._erased = False

    @property
    def erased(self) -> bool:
        return self._erased

    def erase(self) -> None:
        """Overwrite every byte with 0 in place. Safe to call repeatedly."""
        secure_clear(self._inner)
        if not self._erased:
            logger.debug("erased %d bytes", len(self._inner))
        self._erased = True

    # ---- Context management ----
    def __enter__(self) -> "ImmutableByteString":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.erase()

    def __del__(self) -> None:
        # __init__ may have failed before _inner was set
        if getattr(self, "_inner", None) is None:
            return
        try:
            self.erase()
        except Exception:
            pass

    def __repr__(self) -> str:
        state = "erased" if self._erased else "sealed"
        return f"<ImmutableByteString size={len(self._inner)} {state}>"
