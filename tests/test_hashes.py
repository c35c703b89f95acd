#!/usr/bin/env python3

# Copyright (C) 2024 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `hdkeys.hashes` module."

from Crypto.Hash import RIPEMD160

from hdkeys import hashes
from hdkeys.hashes import hash160, hash256, hmac_sha512, ripemd160, sha256


def test_hashes() -> None:

    assert (
        sha256(b"").hex()
        == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )
    assert ripemd160(b"").hex() == "9c1185a5c5e9fc54612808977ee8f548b2258d31"
    assert (
        hash256(b"").hex()
        == "5df6e0e2761359d30a8275058e299fcc0381534545f55cf43e41983f5d4c9456"
    )
    assert hash160(b"") == ripemd160(sha256(b""))

    # hex-string input
    assert sha256("") == sha256(b"")
    assert hash160("00") == hash160(b"\x00")


def test_ripemd160_providers() -> None:

    # the pycryptodome implementation agrees with hashlib
    msg = b"message digest"
    expected = "5d0689ef49d2fae572b881b123a85ffa21595f36"
    assert RIPEMD160.new(msg).hexdigest() == expected
    assert ripemd160(msg).hex() == expected
    assert isinstance(hashes._HASHLIB_RIPEMD160, bool)


def test_hmac_sha512() -> None:
    "RFC 4231 test case 2."

    key = b"Jefe"
    msg = b"what do ya want for nothing?"
    expected = (
        "164b7a7bfcf819e2e395fbe73b56e0a387bd64222e831fd610270cd7ea250554"
        "9758bf75c05a994a6d034f65f8f0e6fdcaeab1a34d4a6b4b636e070a38bce737"
    )
    assert hmac_sha512(key, msg).hex() == expected
    assert hmac_sha512(key.hex(), msg.hex()).hex() == expected
