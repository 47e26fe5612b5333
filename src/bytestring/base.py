"""
bytestring.base
---------------

Operations shared by mutable and immutable byte strings.

ByteOps is a stateless mixin. Each concrete class declares its own
``_inner`` slot holding a bytearray and decides which mutations, if any,
it exposes. Everything here only reads ``_inner``; derived values are
always fresh mutable ByteString instances.

Out-of-range reads return None. Only size mismatches (bitwise ops) and
``ord()`` on a string whose length is not 1 raise.
"""

from __future__ import annotations

import operator
import typing as _typing

from .errors import InvalidStateError, SizeMismatchError

if _typing.TYPE_CHECKING:
    from .mutable import ByteString


def _new(data) -> "ByteString":
    # deferred: mutable imports this module
    from .mutable import ByteString
    return ByteString(data)


def _octets(other) -> _typing.Optional[memoryview]:
    """Return a byte view over `other`, or None when it is not byte-like."""
    if isinstance(other, ByteOps):
        return memoryview(other._inner)
    if isinstance(other, (str, int)):
        return None
    try:
        view = memoryview(other)
    except TypeError:
        return None
    if not view.c_contiguous:
        # cast needs a contiguous layout; copy strided views
        with view:
            return memoryview(view.tobytes())
    return view.cast("B")


def _is_octets(other) -> bool:
    view = _octets(other)
    if view is None:
        return False
    view.release()
    return True


class ByteOps:
    """Read-only and algebraic operations over ``self._inner``."""

    __slots__ = ()

    _inner: bytearray

    # ---- Size ----
    def size(self) -> int:
        return len(self._inner)

    def __len__(self) -> int:
        return len(self._inner)

    def ord(self) -> int:
        """Return the only byte; raises InvalidStateError unless size is 1."""
        if len(self._inner) != 1:
            raise InvalidStateError(f"size is not 1 but {len(self._inner)}")
        return self._inner[0]

    # ---- Indexing and slicing ----
    def byte_at(self, index: int) -> _typing.Optional[int]:
        return self.slice(index)

    def __getitem__(self, key):
        return self.slice(key)

    def slice(self, key, length: _typing.Optional[int] = None):
        """
        Read a byte or a sub-range.

        - slice(i): byte at offset i, or None when out of range
        - slice(slice(a, b)): ByteString over the overlap with [0, size)
        - slice(start, length): ByteString of up to `length` bytes

        Ranges starting past the end return None; a range starting exactly
        at the end is empty. Partial overlaps are clipped, never raised.
        """
        if length is not None:
            return self._slice_n(key, length)
        if isinstance(key, slice):
            return self._slice_range(key)
        index = operator.index(key)
        size = len(self._inner)
        if index < 0:
            index += size
        if 0 <= index < size:
            return self._inner[index]
        return None

    def _start(self, start: int) -> _typing.Optional[int]:
        size = len(self._inner)
        if start < 0:
            start += size
        if start < 0 or start > size:
            return None
        return start

    def _slice_n(self, start, length) -> _typing.Optional["ByteString"]:
        start = self._start(operator.index(start))
        length = operator.index(length)
        if start is None or length < 0:
            return None
        return _new(self._inner[start:start + length])

    def _slice_range(self, key: slice) -> _typing.Optional["ByteString"]:
        if key.step not in (None, 1):
            raise ValueError("slice step must be 1")
        start = self._start(0 if key.start is None else operator.index(key.start))
        if start is None:
            return None
        return _new(self._inner[start:key.stop])

    def __contains__(self, value) -> bool:
        """Membership of a single byte value; other ints are never present."""
        value = operator.index(value)
        if not 0 <= value <= 255:
            return False
        return value in self._inner

    # ---- Bitwise ----
    def _bitwise(self, op, other) -> "ByteString":
        view = _octets(other)
        if view is None:
            raise TypeError(
                f"cannot combine byte string with {type(other).__name__!r}"
            )
        with view:
            if len(view) != len(self._inner):
                raise SizeMismatchError(
                    f"sizes are different: {len(self._inner)}, {len(view)}"
                )
            return _new(bytes(op(a, b) for a, b in zip(self._inner, view)))

    def bitwise_xor(self, other) -> "ByteString":
        return self._bitwise(operator.xor, other)

    def bitwise_and(self, other) -> "ByteString":
        return self._bitwise(operator.and_, other)

    def bitwise_or(self, other) -> "ByteString":
        return self._bitwise(operator.or_, other)

    def complement(self) -> "ByteString":
        return _new(bytes(255 - b for b in self._inner))

    def __xor__(self, other):
        if not _is_octets(other):
            return NotImplemented
        return self.bitwise_xor(other)

    def __and__(self, other):
        if not _is_octets(other):
            return NotImplemented
        return self.bitwise_and(other)

    def __or__(self, other):
        if not _is_octets(other):
            return NotImplemented
        return self.bitwise_or(other)

    __rxor__ = __xor__
    __rand__ = __and__
    __ror__ = __or__

    def __invert__(self) -> "ByteString":
        return self.complement()

    # ---- Iteration ----
    def iterate(self) -> _typing.Iterator[int]:
        """Return a fresh iterator over the bytes, left to right."""
        return iter(self._inner)

    def __iter__(self) -> _typing.Iterator[int]:
        return self.iterate()

    def for_each_byte(self, visitor: _typing.Callable[[int], _typing.Any]) -> None:
        for b in self._inner:
            visitor(b)

    # ---- Export ----
    def to_bytes(self) -> bytes:
        """Return a copy of the raw bytes."""
        return bytes(self._inner)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def to_hex(self) -> str:
        return self._inner.hex()

    # ---- Equality ----
    def equals(self, other: "ByteOps") -> bool:
        if not isinstance(other, ByteOps):
            return False
        if len(self._inner) != len(other._inner):
            return False
        return all(a == b for a, b in zip(self._inner, other._inner))

    def __eq__(self, other):
        if not isinstance(other, ByteOps):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other):
        if not isinstance(other, ByteOps):
            return NotImplemented
        return not self.equals(other)

    # contents can change, so neither variant is hashable
    __hash__ = None

    # ---- Copy ----
    def copy(self) -> "ByteString":
        """Return an independent mutable copy, whatever the source type."""
        return _new(self._inner)

    def __copy__(self) -> "ByteString":
        return self.copy()

    def __deepcopy__(self, memo) -> "ByteString":
        return self.copy()
