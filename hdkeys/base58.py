#!/usr/bin/env python3

# Copyright (C) 2024 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Base58Check encoding and decoding functions.

Base58 omits the similar-looking letters
0 (zero), O (capital o), I (capital i), and l (lower case L)
to avoid ambiguity when printed; moreover, it has no '+' and '/'
so that a double-click does select the whole string.

Base58Check is the checksummed version of Base58, using
hash256(v)[:4] as checksum suffix before encoding;
at the decoding stage the checksum validity ensures data integrity.

BIP32 extended keys are Base58Check encoded 78-byte payloads:
the version prefix makes their text form start with
'xprv', 'xpub', 'tprv', 'zpub', etc.

The interface mimics the native python3 base64 interface, i.e.
it supports encoding bytes-like objects to ASCII bytes,
and decoding ASCII bytes-like objects or ASCII strings to bytes.
"""

from typing import Optional

from hdkeys.alias import Octets, String
from hdkeys.exceptions import InvalidEncoding
from hdkeys.hashes import hash256
from hdkeys.utils import bytes_from_octets

_ALPHABET = b"123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE = len(_ALPHABET)


def _b58encode_from_int(i: int) -> bytes:

    result = b""
    while i or not result:
        i, idx = divmod(i, _BASE)
        result = _ALPHABET[idx : idx + 1] + result

    return result


def _b58encode(v: bytes) -> bytes:

    # leading-0s become base58 leading-1s
    n_pad = len(v)
    v = v.lstrip(b"\0")
    n_pad -= len(v)
    result = _ALPHABET[:1] * n_pad

    if v:
        result += _b58encode_from_int(int.from_bytes(v, byteorder="big"))

    return result


def b58encode(v: Octets, in_size: Optional[int] = None) -> bytes:
    """Encode a bytes-like object using Base58Check."""

    v = bytes_from_octets(v, in_size)
    h256 = hash256(v)
    return _b58encode(v + h256[:4])


def _b58decode_to_int(v: bytes) -> int:

    i = 0
    for char in v:
        i *= _BASE
        i += _ALPHABET.index(char)
    return i


def _b58decode(v: bytes) -> bytes:

    if any(x not in _ALPHABET for x in v):
        raise InvalidEncoding("base58 string contains invalid characters")

    # base58 leading-1s become leading-0s
    n_pad = len(v)
    v = v.lstrip(_ALPHABET[:1])
    n_pad -= len(v)
    result = b"\0" * n_pad

    if v:
        i = _b58decode_to_int(v)
        nbytes = (i.bit_length() + 7) // 8
        result += i.to_bytes(nbytes, byteorder="big")

    return result


def b58decode(v: String, out_size: Optional[int] = None) -> bytes:
    """Decode a Base58Check encoded bytes-like object or ASCII string.

    Optionally, it also ensures required output size.
    """

    if isinstance(v, str):
        # do not trim spaces
        try:
            v = v.encode("ascii")
        except UnicodeEncodeError as e:
            raise InvalidEncoding("base58 string is not ascii") from e

    result = _b58decode(v)
    if len(result) < 4:
        err_msg = "not enough bytes for checksum, "
        err_msg += f"invalid base58 decoded size: {len(result)}"
        raise InvalidEncoding(err_msg)

    result, checksum = result[:-4], result[-4:]
    h256 = hash256(result)
    if checksum != h256[:4]:
        err_msg = f"invalid checksum: 0x{checksum.hex()} instead of 0x{h256[:4].hex()}"
        raise InvalidEncoding(err_msg)

    if out_size is None or len(result) == out_size:
        return result

    err_msg = "valid checksum, invalid decoded size: "
    err_msg += f"{len(result)} bytes instead of {out_size}"
    raise InvalidEncoding(err_msg)
