#!/usr/bin/env python3

# Copyright (C) 2024 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Assorted conversion utilities."""

from collections.abc import Iterable as IterableCollection
from io import BytesIO
from typing import Iterable, Optional, Union

from hdkeys.alias import BinaryData, Octets
from hdkeys.exceptions import HDKeysTypeError, HDKeysValueError

NoneOneOrMoreInt = Optional[Union[int, Iterable[int]]]


def bytes_from_octets(octets: Octets, out_size: NoneOneOrMoreInt = None) -> bytes:
    """Return bytes from a hex-string or bytes-like object.

    Optionally, it also ensures required output size.
    """

    if isinstance(octets, str):  # hex string
        try:
            octets = bytes.fromhex(octets)
        except ValueError as e:
            raise HDKeysValueError("invalid hex-string") from e
    elif isinstance(octets, (bytearray, memoryview)):
        octets = bytes(octets)
    elif not isinstance(octets, bytes):
        raise HDKeysTypeError(f"not bytes nor hex-string: {type(octets).__name__}")

    if (
        out_size is None
        or isinstance(out_size, int)
        and len(octets) == out_size
        or isinstance(out_size, IterableCollection)
        and len(octets) in out_size
    ):
        return octets

    err_msg = f"invalid size: {len(octets)} bytes instead of {out_size}"
    raise HDKeysValueError(err_msg)


def bytesio_from_binarydata(stream: BinaryData) -> BytesIO:
    """Return a BytesIO stream object from BinaryIO or Octets.

    If the input is not Octets (i.e. str or bytes),
    then it goes untouched.
    """

    if isinstance(stream, str):  # hex string
        stream = bytes_from_octets(stream)

    if isinstance(stream, bytes):
        stream = BytesIO(stream)

    return stream


def hex_string(octets: Octets) -> str:
    """Return an upper-case hex-string with a space every four bytes.

    Used to make error messages readable.
    """

    a_str = bytes_from_octets(octets).hex()
    lresult = [a_str[i : i + 8] for i in range(0, len(a_str), 8)]
    return " ".join(lresult).upper()
