"""
bytestring._sodium
------------------

Shim for libsodium zeroing.

- Provides: have_libsodium, sodium_memzero, memset_zero
- If libsodium is unavailable, sodium_memzero falls back to ctypes.memset.

Notes:
- Both primitives write through the buffer's own address, so the zeroing
  happens in place and is not elided.
- Neither primitive can reach copies made elsewhere (bytes temporaries,
  swapped pages).
"""

from __future__ import annotations
import ctypes
import ctypes.util
import logging
from typing import Optional, Union

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

Writable = Union[bytearray, memoryview]

_libsodium = None
_have_sodium = False

c_void_p = ctypes.c_void_p
c_size_t = ctypes.c_size_t


def _try_load_libsodium() -> Optional[ctypes.CDLL]:
    for name in ("sodium", "libsodium"):
        libname = ctypes.util.find_library(name)
        if libname:
            try:
                return ctypes.CDLL(libname)
            except OSError:
                logger.debug("found %s but could not load it", libname)
    return None


# Load libsodium if present
_libsodium = _try_load_libsodium()
if _libsodium:
    try:
        _libsodium.sodium_init.restype = ctypes.c_int
        if _libsodium.sodium_init() < 0:
            raise OSError("sodium_init failed")
        _libsodium.sodium_memzero.argtypes = (c_void_p, c_size_t)
        _libsodium.sodium_memzero.restype = None
        _have_sodium = True
    except (AttributeError, OSError) as e:
        logger.debug("libsodium unusable, using ctypes.memset: %s", e)
        _have_sodium = False


# --- Public API -----------------------------------------------------------
def have_libsodium() -> bool:
    return _have_sodium


def _address_of(buf: Writable, size: int):
    # from_buffer raises TypeError for read-only buffers
    return (ctypes.c_char * size).from_buffer(buf)


def memset_zero(buf: Writable) -> None:
    """Zero `buf` in place with ctypes.memset."""
    size = len(buf)
    if not size:
        return
    c_arr = _address_of(buf, size)
    try:
        ctypes.memset(ctypes.addressof(c_arr), 0, size)
    finally:
        # drop the exported pointer so the bytearray can be resized again
        del c_arr


def sodium_memzero(buf: Writable) -> None:
    """Zero `buf` in place with libsodium, or ctypes.memset without it."""
    if not _have_sodium:
        memset_zero(buf)
        return
    size = len(buf)
    if not size:
        return
    c_arr = _address_of(buf, size)
    try:
        _libsodium.sodium_memzero(ctypes.addressof(c_arr), size)
    finally:
        del c_arr


__all__ = [
    "have_libsodium",
    "memset_zero",
    "sodium_memzero",
]
