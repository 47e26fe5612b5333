import io

import pytest

from bytestring import ByteString, ImmutableByteString


@pytest.fixture()
def letest():
    """Six-byte mutable string used across the read-operation tests."""
    return ByteString(b"letest")


@pytest.fixture()
def new_immutable():
    """Factory building an ImmutableByteString from raw bytes via a stream."""
    def _make(data: bytes) -> ImmutableByteString:
        return ImmutableByteString(io.BytesIO(data))

    return _make
