#!/usr/bin/env python3

# Copyright (C) 2024 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve group operations needed by BIP32.

Curve arithmetic is not implemented here: it is delegated to
libsecp256k1 by means of its coincurve python bindings.

Points are handled as SEC 1 octet sequences: compressed for any
finite point, the single byte 0x00 for the point at infinity.
Any object implementing the CurveGroup protocol can be used
in place of the default secp256k1 instance.
"""

from typing import Protocol

from coincurve import PublicKey

from hdkeys.alias import Octets
from hdkeys.exceptions import HDKeysValueError, InvalidEncoding
from hdkeys.utils import bytes_from_octets, hex_string

# SEC 1 v.2, section 2.3.3: the infinity point is a single zero byte
INF = b"\x00"


class CurveGroup(Protocol):
    "Group operations required by hierarchical deterministic derivation."

    n: int

    def mult(self, q: int) -> bytes:
        "Return the compressed q*G point."

    def add(self, Q1: bytes, Q2: bytes) -> bytes:
        """Return the compressed Q1+Q2 point, INF if the sum is infinity.

        Invalid operands raise InvalidEncoding.
        """

    def compress(self, pub_key: Octets) -> bytes:
        "Return the compressed representation of a valid point."

    def is_valid_prv_key(self, q: int) -> bool:
        "Return True if q is in [1, n-1]."

    def is_valid_pub_key(self, pub_key: Octets) -> bool:
        "Return True if pub_key is a valid SEC 1 encoded point."


class Secp256k1:
    "The secp256k1 group, as provided by libsecp256k1."

    name = "secp256k1"
    n = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
    n_size = 32

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def is_valid_prv_key(self, q: int) -> bool:
        return 0 < q < self.n

    def mult(self, q: int) -> bytes:
        m = q % self.n
        if m == 0:
            return INF
        secret = m.to_bytes(self.n_size, byteorder="big", signed=False)
        return PublicKey.from_valid_secret(secret).format(compressed=True)

    def add(self, Q1: bytes, Q2: bytes) -> bytes:
        if Q1 == INF:
            return Q2
        if Q2 == INF:
            return Q1
        points = [self._public_key(Q1), self._public_key(Q2)]
        try:
            Q = PublicKey.combine_keys(points)
        except ValueError:
            # valid operands summing to the infinity point
            return INF
        return Q.format(compressed=True)

    @staticmethod
    def _public_key(pub_key: Octets) -> PublicKey:
        pub_key = bytes_from_octets(pub_key)
        if pub_key[:1] not in (b"\x02", b"\x03", b"\x04"):
            raise InvalidEncoding(f"not a point: 0x{pub_key.hex()}")
        try:
            return PublicKey(pub_key)
        except ValueError as e:
            err_msg = f"invalid public key: {hex_string(pub_key)}"
            raise InvalidEncoding(err_msg) from e

    def compress(self, pub_key: Octets) -> bytes:
        return self._public_key(pub_key).format(compressed=True)

    def is_valid_pub_key(self, pub_key: Octets) -> bool:
        try:
            self.compress(pub_key)
        except HDKeysValueError:
            return False
        return True


secp256k1 = Secp256k1()
