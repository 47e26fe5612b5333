import gc
import io
import weakref

import pytest
from hypothesis import given, strategies as st

import bytestring.immutable
from bytestring import (
    ByteString,
    ImmutableByteString,
    InvalidStateError,
    SizeMismatchError,
    TypeMismatchError,
)
from bytestring.utils import secure_clear

TEST = b"letest"

# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def test_accepts_a_stream_only(new_immutable):
    s = new_immutable(TEST)
    assert isinstance(s, ImmutableByteString)
    assert s.to_bytes() == TEST


@pytest.mark.parametrize(
    "source",
    [TEST, "letest", bytearray(TEST), memoryview(TEST), ByteString(TEST), object(), None],
)
def test_rejects_non_stream_sources(source):
    with pytest.raises(TypeMismatchError):
        ImmutableByteString(source)


def test_type_mismatch_is_type_error():
    with pytest.raises(TypeError):
        ImmutableByteString(TEST)


def test_reads_stream_fully_and_keeps_no_reference():
    stream = io.BytesIO(TEST * 100)
    s = ImmutableByteString(stream)
    assert stream.read() == b""
    ref = weakref.ref(stream)
    del stream
    gc.collect()
    assert ref() is None
    assert s.size() == len(TEST) * 100


def test_cannot_be_reinitialised(new_immutable):
    s = new_immutable(b"key")
    with pytest.raises(TypeError):
        s.__init__(io.BytesIO(b"other!"))
    assert s.to_bytes() == b"key"
    s.erase()
    with pytest.raises(TypeError):
        s.__init__(io.BytesIO(b"other!"))
    assert s.to_bytes() == bytes(3)


def test_text_stream_is_stored_as_utf8():
    assert ImmutableByteString(io.StringIO("ä")).to_bytes() == b"\xc3\xa4"


# ---------------------------------------------------------------------------
# Shared operations
# ---------------------------------------------------------------------------

def test_compares_with_mutable(new_immutable):
    s = new_immutable(TEST)
    assert s == ByteString(TEST)
    assert ByteString(TEST) == s
    assert s != ByteString(b"letest2")
    assert s == new_immutable(TEST)


def test_read_operations(new_immutable):
    s = new_immutable(TEST)
    assert s[0] == ord("l")
    assert s[20] is None
    assert s.slice(2, 20).to_bytes() == b"test"
    assert s[20:40] is None
    assert s.to_hex() == TEST.hex()
    assert list(s) == list(TEST)
    assert new_immutable(b"l").ord() == ord("l")
    with pytest.raises(InvalidStateError):
        s.ord()


def test_derived_values_are_mutable_byte_strings(new_immutable):
    s = new_immutable(b"\x00\xff")
    for derived in (s[0:2], s.slice(0, 1), ~s, s ^ ByteString(b"\xff\x00"), s.copy()):
        assert type(derived) is ByteString
    assert (s ^ ByteString(b"\xff\x00")).to_bytes() == b"\xff\xff"
    with pytest.raises(SizeMismatchError):
        s & ByteString(TEST)


def test_copy_is_isolated(new_immutable):
    s = new_immutable(TEST)
    c = s.copy()
    c[0] = ord("L")
    c.append(ord("!"))
    assert s.to_bytes() == TEST
    assert c.to_bytes() == b"Letest!"


def test_slices_do_not_share_storage(new_immutable):
    s = new_immutable(TEST)
    part = s[0:3]
    part[0] = 0
    assert s[0] == ord("l")


# ---------------------------------------------------------------------------
# No mutation surface
# ---------------------------------------------------------------------------

def test_item_assignment_is_not_supported(new_immutable):
    s = new_immutable(TEST)
    with pytest.raises(TypeError):
        s[0] = 42
    with pytest.raises(TypeError):
        del s[0]
    assert s.to_bytes() == TEST


@pytest.mark.parametrize("name", ["set_byte_at", "append", "concat", "slice_in_place", "__setitem__", "__iadd__"])
def test_mutation_methods_are_absent(new_immutable, name):
    assert not hasattr(new_immutable(TEST), name)


def test_no_new_attributes(new_immutable):
    s = new_immutable(TEST)
    with pytest.raises(AttributeError):
        s.extra = 1


def test_augmented_add_does_not_touch_contents(new_immutable):
    s = new_immutable(TEST)
    alias = s
    with pytest.raises(TypeError):
        s += ByteString(b"x")
    assert alias.to_bytes() == TEST


def test_repr_does_not_leak_contents(new_immutable):
    text = repr(new_immutable(TEST))
    assert "letest" not in text
    assert TEST.hex() not in text
    assert "size=6" in text


# ---------------------------------------------------------------------------
# erase
# ---------------------------------------------------------------------------

def test_erase_overwrites_with_zeros(new_immutable):
    s = new_immutable(TEST)
    assert s == ByteString(TEST)
    s.erase()
    assert s == ByteString(b"\x00\x00\x00\x00\x00\x00")
    assert s.size() == 6
    assert s.erased


def test_erase_is_idempotent(new_immutable):
    s = new_immutable(TEST)
    s.erase()
    s.erase()
    assert s.to_bytes() == bytes(6)


def test_erased_string_stays_usable(new_immutable):
    s = new_immutable(TEST)
    s.erase()
    assert s[0] == 0
    assert s.slice(2, 4).to_bytes() == bytes(4)
    assert s.to_hex() == "00" * 6
    assert s.to_bytes() != TEST
    assert "erased" in repr(s)


def test_erase_empty_stream(new_immutable):
    s = new_immutable(b"")
    s.erase()
    assert s.size() == 0


def test_erase_zeroes_storage_in_place(new_immutable, monkeypatch):
    calls = []

    def recording_clear(buf):
        calls.append(buf)
        secure_clear(buf)

    monkeypatch.setattr(bytestring.immutable, "secure_clear", recording_clear)
    s = new_immutable(TEST)
    s.erase()
    assert len(calls) == 1
    assert calls[0] is s._inner
    assert calls[0] == bytearray(6)


def test_context_manager_erases_on_exit(new_immutable):
    with new_immutable(b"key") as key:
        assert key.to_bytes() == b"key"
        assert not key.erased
    assert key.erased
    assert key.to_bytes() == b"\x00\x00\x00"


def test_context_manager_erases_on_error(new_immutable):
    with pytest.raises(RuntimeError):
        with new_immutable(b"key") as key:
            raise RuntimeError("boom")
    assert key.to_bytes() == b"\x00\x00\x00"


# ---------------------------------------------------------------------------
# Hypothesis fuzz tests
# ---------------------------------------------------------------------------

@pytest.mark.fuzz
@given(data=st.binary(min_size=0, max_size=1024))
def test_construct_from_stream_fuzz(data):
    s = ImmutableByteString(io.BytesIO(data))
    assert s.to_bytes() == data
    assert s == ByteString(data)


@pytest.mark.fuzz
@given(data=st.binary(min_size=0, max_size=1024))
def test_erase_fuzz(data):
    s = ImmutableByteString(io.BytesIO(data))
    s.erase()
    assert s.size() == len(data)
    assert all(b == 0 for b in s)
    assert s == ByteString(bytes(len(data)))
