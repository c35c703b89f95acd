#!/usr/bin/env python3

# Copyright (C) 2024 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions."""

import hashlib
import hmac

from hdkeys.alias import Octets
from hdkeys.utils import bytes_from_octets

# With OpenSSL 3.x, hashlib might not provide ripemd160
# (it lives in the legacy provider): use pycryptodome then.
try:
    hashlib.new("ripemd160")
    _HASHLIB_RIPEMD160 = True
except ValueError:  # pragma: no cover
    from Crypto.Hash import RIPEMD160

    _HASHLIB_RIPEMD160 = False


def ripemd160(octets: Octets) -> bytes:
    """Return the RIPEMD160(*) of the input octet sequence."""
    octets = bytes_from_octets(octets)
    if _HASHLIB_RIPEMD160:
        return hashlib.new("ripemd160", octets).digest()
    return RIPEMD160.new(octets).digest()  # pragma: no cover


def sha256(octets: Octets) -> bytes:
    """Return the SHA256(*) of the input octet sequence."""
    octets = bytes_from_octets(octets)
    return hashlib.sha256(octets).digest()


def hash160(octets: Octets) -> bytes:
    """Return the HASH160=RIPEMD160(SHA256) of the input octet sequence."""
    return ripemd160(sha256(octets))


def hash256(octets: Octets) -> bytes:
    """Return the SHA256(SHA256(*)) of the input octet sequence."""
    return sha256(sha256(octets))


def hmac_sha512(key: Octets, msg: Octets) -> bytes:
    """Return the HMAC-SHA512 of msg keyed with key."""
    key = bytes_from_octets(key)
    msg = bytes_from_octets(msg)
    return hmac.new(key, msg, "sha512").digest()
