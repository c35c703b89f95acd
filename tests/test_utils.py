#!/usr/bin/env python3

# Copyright (C) 2024 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `hdkeys.utils` module."

from io import BytesIO

import pytest

from hdkeys.exceptions import HDKeysTypeError, HDKeysValueError
from hdkeys.utils import bytes_from_octets, bytesio_from_binarydata, hex_string


def test_bytes_from_octets() -> None:

    assert bytes_from_octets("deadbeef") == b"\xde\xad\xbe\xef"
    assert bytes_from_octets("de ad be ef") == b"\xde\xad\xbe\xef"
    assert bytes_from_octets(bytearray(b"\x01\x02")) == b"\x01\x02"
    assert bytes_from_octets(memoryview(b"\x01\x02")) == b"\x01\x02"
    assert bytes_from_octets(b"\x01\x02", 2) == b"\x01\x02"
    assert bytes_from_octets(b"\x01\x02", (2, 33)) == b"\x01\x02"

    with pytest.raises(HDKeysValueError, match="invalid size: "):
        bytes_from_octets(b"\x01\x02", 3)
    with pytest.raises(HDKeysValueError, match="invalid size: "):
        bytes_from_octets(b"\x01\x02", (3, 4))
    with pytest.raises(HDKeysTypeError, match="not bytes nor hex-string: int"):
        bytes_from_octets(42)  # type: ignore
    with pytest.raises(HDKeysValueError, match="invalid hex-string"):
        bytes_from_octets("not an hex-string")


def test_bytesio_from_binarydata() -> None:

    stream = bytesio_from_binarydata("0102")
    assert stream.read() == b"\x01\x02"
    stream = bytesio_from_binarydata(b"\x01\x02")
    assert stream.read(1) == b"\x01"
    existing = BytesIO(b"\x01\x02")
    assert bytesio_from_binarydata(existing) is existing


def test_hex_string() -> None:
    assert hex_string("") == ""
    assert hex_string(b"\xde\xad\xbe\xef\x01") == "DEADBEEF 01"
