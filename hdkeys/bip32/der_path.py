#!/usr/bin/env python3

# Copyright (C) 2024 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 derivation path.

A BIP32 derivation path can be represented as:

- "m/44h/0'/1H/0/10" or "44h/0'/1H/0/10" string
- sequence of integer indexes (even a single int)
- bytes (multiples of 4-bytes little endian index)

Indexes greater or equal to 0x80000000 are hardened.
"""

from typing import List, Sequence, Union

from hdkeys.exceptions import HDKeysTypeError, HDKeysValueError

HARDENED = 0x80000000

# default hardening symbol among the possible ones: "h", "H", "'"
_HARDENING = "h"

DerPath = Union[str, Sequence[Union[int, str]], int, bytes]


def int_from_index_str(s: str) -> int:
    "Return the integer index from its string representation (e.g. '44h')."

    s = s.strip().lower()
    hardened = False
    if s and s[-1] in ("'", "h"):
        s = s[:-1].rstrip()
        hardened = True

    # ascii digits only
    if not (s.isascii() and s.isdigit()):
        raise HDKeysValueError(f"invalid index: '{s}'")
    index = int(s)
    if not 0 <= index < HARDENED:
        raise HDKeysValueError(f"invalid index: {index}")
    return index + (HARDENED if hardened else 0)


def str_from_index_int(i: int, hardening: str = _HARDENING) -> str:
    "Return the string representation (e.g. '44h') of an integer index."

    if hardening not in ("'", "h", "H"):
        raise HDKeysValueError(f"invalid hardening symbol: {hardening}")
    if not 0 <= i <= 0xFFFFFFFF:
        raise HDKeysValueError(f"invalid index: {i}")
    if i < HARDENED:
        return str(i)
    return str(i - HARDENED) + hardening


def _indexes_from_der_path_str(der_path: str, skip_m: bool = True) -> List[int]:

    steps = [x.strip().lower() for x in der_path.split("/")]
    if skip_m and steps[0] == "m":
        steps = steps[1:]

    indexes = [int_from_index_str(s) for s in steps if s != ""]

    if len(indexes) > 255:
        err_msg = f"depth greater than 255: {len(indexes)}"
        raise HDKeysValueError(err_msg)
    return indexes


def _index_from_item(i: Union[int, str]) -> int:
    if isinstance(i, str):
        return int_from_index_str(i)
    if not isinstance(i, int):
        raise HDKeysTypeError(f"invalid index type: {type(i).__name__}")
    return i


def indexes_from_der_path(der_path: DerPath) -> List[int]:
    "Return the list of integer indexes of a derivation path."

    if isinstance(der_path, str):
        return _indexes_from_der_path_str(der_path)

    if isinstance(der_path, int):
        indexes = [der_path]
    elif isinstance(der_path, bytes):
        if len(der_path) % 4 != 0:
            err_msg = f"index are not a multiple of 4-bytes: {len(der_path)}"
            raise HDKeysValueError(err_msg)
        indexes = [
            int.from_bytes(der_path[n : n + 4], byteorder="little", signed=False)
            for n in range(0, len(der_path), 4)
        ]
    else:  # Sequence[Union[int, str]]
        indexes = [_index_from_item(i) for i in der_path]

    for i in indexes:
        if not 0 <= i <= 0xFFFFFFFF:
            raise HDKeysValueError(f"invalid index: {i}")
    return indexes


def str_from_der_path(der_path: DerPath, hardening: str = _HARDENING) -> str:
    "Return the 'm/...' string representation of a derivation path."

    indexes = indexes_from_der_path(der_path)
    result = "/".join(str_from_index_int(i, hardening) for i in indexes)
    return "m" + ("/" + result if result else "")


def bytes_from_der_path(der_path: DerPath) -> bytes:
    "Return the derivation path as concatenated 4-bytes little endian indexes."

    indexes = indexes_from_der_path(der_path)
    result = [i.to_bytes(4, byteorder="little", signed=False) for i in indexes]
    return b"".join(result)
