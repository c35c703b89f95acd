#!/usr/bin/env python3

# Copyright (C) 2024 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 Hierarchical Deterministic Wallet functions.

A deterministic wallet is a hash-chain of private/public key pairs that
derives from a single root, which is the only element requiring backup.
Moreover, there are schemes where public keys can be calculated without
accessing private keys.

A hierarchical deterministic wallet is a tree of multiple hash-chains,
derived from a single root, allowing for selective sharing of keypair
chains.

Here, the HD wallet is implemented according to BIP32 bitcoin standard
https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki.

A BIP32 extended key is 78 bytes:

- [  : 4] version
- [ 4: 5] depth in the derivation path
- [ 5: 9] parent fingerprint
- [ 9:13] index
- [13:45] chain code
- [45:78] compressed pub_key or [0x00][prv_key]

Extended keys are immutable: derivation always returns a new key.
"""

import logging
from dataclasses import dataclass, field
from functools import cached_property
from io import BytesIO
from typing import Optional, Type, TypeVar, Union, cast

from hdkeys import base58
from hdkeys.alias import BinaryData, Octets, String
from hdkeys.bip32.der_path import HARDENED, DerPath, indexes_from_der_path
from hdkeys.curve import INF, CurveGroup, secp256k1
from hdkeys.exceptions import (
    HardenedOnPublicParent,
    HDKeysTypeError,
    HDKeysValueError,
    InvalidDerivationIndex,
    InvalidEncoding,
    InvalidSeed,
)
from hdkeys.hashes import hash160, hash256, hmac_sha512
from hdkeys.network import MAINNET, PROFILES, VersionProfile, VersionProfiles
from hdkeys.utils import bytes_from_octets, bytesio_from_binarydata

_LOGGER = logging.getLogger(__name__)

_REQUIRED_LENGTH = 78
_CHECKSUM_LENGTH = 4

_BIP32KeyData = TypeVar("_BIP32KeyData", bound="BIP32KeyData")


def _assert_valid_root_fields(depth: int, parent_fingerprint: bytes, index: int) -> None:
    if depth != 0:
        return
    if parent_fingerprint != b"\x00" * 4:
        err_msg = "zero depth with non-zero parent fingerprint: "
        err_msg += f"0x{parent_fingerprint.hex()}"
        raise InvalidEncoding(err_msg)
    if index != 0:
        raise InvalidEncoding(f"zero depth with non-zero index: {index}")


@dataclass(frozen=True)
class BIP32KeyData:
    """Common fields of BIP32 extended keys.

    This class is not meant to be instantiated:
    use BIP32PrvKeyData or BIP32PubKeyData.
    """

    profile: VersionProfile
    depth: int
    parent_fingerprint: bytes
    # index is an int, not bytes, to avoid any byteorder ambiguity
    index: int
    chain_code: bytes

    def __post_init__(self) -> None:

        if type(self) is BIP32KeyData:
            raise HDKeysTypeError("use BIP32PrvKeyData or BIP32PubKeyData")

        if not isinstance(self.profile, VersionProfile):
            err_msg = f"not a VersionProfile: {type(self.profile).__name__}"
            raise HDKeysTypeError(err_msg)

        fingerprint = bytes_from_octets(self.parent_fingerprint, 4)
        object.__setattr__(self, "parent_fingerprint", fingerprint)
        object.__setattr__(self, "chain_code", bytes_from_octets(self.chain_code, 32))

        if not 0 <= self.depth <= 255:
            raise HDKeysValueError(f"invalid depth: {self.depth}")
        if not 0 <= self.index <= 0xFFFFFFFF:
            raise HDKeysValueError(f"invalid index: {self.index}")

        _assert_valid_root_fields(self.depth, self.parent_fingerprint, self.index)

    @property
    def is_private(self) -> bool:
        return isinstance(self, BIP32PrvKeyData)

    @property
    def is_hardened(self) -> bool:
        return self.index >= HARDENED

    @property
    def is_root(self) -> bool:
        return (
            self.depth == 0
            and self.index == 0
            and self.parent_fingerprint == b"\x00" * 4
        )

    @property
    def key(self) -> bytes:
        "Return the 33-byte key data: compressed pub_key or [0x00][prv_key]."
        raise NotImplementedError  # pragma: no cover

    @property
    def fingerprint(self) -> bytes:
        "Return the fingerprint used by child keys to identify their parent."
        return hash160(neuter(self).pub_key)[:4]

    @property
    def version(self) -> bytes:
        return self.profile.version(self.is_private)

    def serialize(self, checksum: bool = False) -> bytes:
        "Return the 78 bytes serialization, optionally with checksum suffix."

        data = b"".join(
            [
                self.version,
                self.depth.to_bytes(1, byteorder="big", signed=False),
                self.parent_fingerprint,
                self.index.to_bytes(4, byteorder="big", signed=False),
                self.chain_code,
                self.key,
            ]
        )
        if checksum:
            data += hash256(data)[:_CHECKSUM_LENGTH]
        return data

    def b58encode(self) -> str:
        return base58.b58encode(self.serialize()).decode("ascii")

    def __str__(self) -> str:
        return self.b58encode()

    @classmethod
    def parse(
        cls: Type[_BIP32KeyData],
        xkey_bin: BinaryData,
        profiles: VersionProfiles = PROFILES,
        ec: CurveGroup = secp256k1,
        checksum: bool = False,
    ) -> _BIP32KeyData:
        """Return a BIP32 key by parsing 78 bytes from binary data.

        If checksum is True, 82 bytes are parsed
        and the last four are checked to be a valid hash256 checksum.
        The returned key is BIP32PrvKeyData or BIP32PubKeyData
        according to the version prefix.
        """

        size = _REQUIRED_LENGTH + (_CHECKSUM_LENGTH if checksum else 0)
        if not isinstance(xkey_bin, BytesIO):
            try:
                xkey_bin = bytes_from_octets(xkey_bin)
            except HDKeysValueError as e:
                raise InvalidEncoding(f"invalid binary data: {e}") from e
            if len(xkey_bin) != size:
                err_msg = f"invalid decoded length: {len(xkey_bin)}"
                err_msg += f" instead of {size}"
                raise InvalidEncoding(err_msg)
        stream = bytesio_from_binarydata(xkey_bin)
        data = stream.read(size)
        if len(data) != size:
            err_msg = f"invalid decoded length: {len(data)} instead of {size}"
            raise InvalidEncoding(err_msg)

        if checksum:
            data, check = data[:_REQUIRED_LENGTH], data[_REQUIRED_LENGTH:]
            if check != hash256(data)[:_CHECKSUM_LENGTH]:
                raise InvalidEncoding(f"invalid checksum: 0x{check.hex()}")

        profile, is_private = profiles.from_version(data[0:4])
        depth = data[4]
        parent_fingerprint = data[5:9]
        index = int.from_bytes(data[9:13], byteorder="big", signed=False)
        chain_code = data[13:45]
        key = data[45:78]

        _assert_valid_root_fields(depth, parent_fingerprint, index)

        xkey: BIP32KeyData
        if is_private:
            if key[0] in (2, 3):
                err_msg = f"public key data with private version: 0x{key[:1].hex()}"
                raise InvalidEncoding(err_msg)
            if key[0] != 0:
                raise InvalidEncoding(f"invalid private key prefix: 0x{key[:1].hex()}")
            prv_key = int.from_bytes(key[1:], byteorder="big", signed=False)
            xkey = BIP32PrvKeyData(
                profile, depth, parent_fingerprint, index, chain_code, prv_key, ec
            )
        else:
            if key[0] == 0:
                raise InvalidEncoding("private key data with public version")
            xkey = BIP32PubKeyData(
                profile, depth, parent_fingerprint, index, chain_code, key, ec
            )

        if not isinstance(xkey, cls):
            err_msg = f"not a {cls.__name__}: {type(xkey).__name__}"
            raise HDKeysTypeError(err_msg)
        return xkey

    @classmethod
    def b58decode(
        cls: Type[_BIP32KeyData],
        xkey: String,
        profiles: VersionProfiles = PROFILES,
        ec: CurveGroup = secp256k1,
    ) -> _BIP32KeyData:
        "Return a BIP32 key from its Base58Check text form."

        if isinstance(xkey, str):
            xkey = xkey.strip()

        xkey_bin = base58.b58decode(xkey, _REQUIRED_LENGTH)
        return cls.parse(xkey_bin, profiles, ec)

    def child(self, index: int) -> "BIP32KeyData":
        "Return the child key at the given index."
        return ckd(self, index)

    def neuter(self) -> "BIP32PubKeyData":
        "Return the corresponding extended public key."
        return neuter(self)

    def derive(
        self, der_path: DerPath, forced_profile: Optional[VersionProfile] = None
    ) -> "BIP32KeyData":
        "Return the key derived along the derivation path."
        return _derive(self, der_path, forced_profile)


@dataclass(frozen=True)
class BIP32PrvKeyData(BIP32KeyData):
    prv_key: int
    ec: CurveGroup = field(default=secp256k1, repr=False, compare=False)

    def __post_init__(self) -> None:
        super().__post_init__()

        if not isinstance(self.prv_key, int):
            q_bytes = bytes_from_octets(self.prv_key, 32)
            object.__setattr__(self, "prv_key", int.from_bytes(q_bytes, "big"))
        if not self.ec.is_valid_prv_key(self.prv_key):
            raise InvalidEncoding(f"private key not in 1..n-1: {hex(self.prv_key)}")

    @property
    def prv_key_bytes(self) -> bytes:
        return self.prv_key.to_bytes(32, byteorder="big", signed=False)

    @property
    def key(self) -> bytes:
        return b"\x00" + self.prv_key_bytes

    @cached_property
    def pub_key(self) -> bytes:
        return self.ec.mult(self.prv_key)


@dataclass(frozen=True)
class BIP32PubKeyData(BIP32KeyData):
    pub_key: bytes
    ec: CurveGroup = field(default=secp256k1, repr=False, compare=False)

    def __post_init__(self) -> None:
        super().__post_init__()

        pub_key = bytes_from_octets(self.pub_key, 33)
        if pub_key[0] not in (2, 3):
            err_msg = "invalid public key prefix not in (0x02, 0x03): "
            err_msg += f"0x{pub_key[:1].hex()}"
            raise InvalidEncoding(err_msg)
        if not self.ec.is_valid_pub_key(pub_key):
            raise InvalidEncoding(f"invalid public key: 0x{pub_key.hex()}")
        object.__setattr__(self, "pub_key", pub_key)

    @property
    def key(self) -> bytes:
        return self.pub_key


BIP32Key = Union[BIP32KeyData, String]


def _as_xpub(xkey: BIP32KeyData) -> BIP32PubKeyData:
    # the only BIP32KeyData variants are BIP32PrvKeyData and BIP32PubKeyData
    return cast(BIP32PubKeyData, xkey)


def _xkey_from(xkey: BIP32Key, ec: CurveGroup = secp256k1) -> BIP32KeyData:
    if isinstance(xkey, BIP32KeyData):
        return xkey
    return BIP32KeyData.b58decode(xkey, ec=ec)


def _rootxprv_from_seed(
    seed: Octets, profile: VersionProfile = MAINNET, ec: CurveGroup = secp256k1
) -> BIP32PrvKeyData:
    """Return BIP32 root master extended private key from seed.

    BIP32 recommends 128 to 512 bits of entropy,
    but seeds of any length are accepted.
    """

    seed = bytes_from_octets(seed)
    hmac_ = hmac_sha512(b"Bitcoin seed", seed)
    q = int.from_bytes(hmac_[:32], byteorder="big", signed=False)
    if not ec.is_valid_prv_key(q):
        _LOGGER.debug("seed yields an invalid master key")
        raise InvalidSeed("invalid seed: master private key not in 1..n-1")

    return BIP32PrvKeyData(
        profile=profile,
        depth=0,
        parent_fingerprint=b"\x00" * 4,
        index=0,
        chain_code=hmac_[32:],
        prv_key=q,
        ec=ec,
    )


def rootxprv_from_seed(
    seed: Octets, profile: VersionProfile = MAINNET, ec: CurveGroup = secp256k1
) -> str:
    """Return BIP32 root master extended private key from seed."""
    xkey = _rootxprv_from_seed(seed, profile, ec)
    return xkey.b58encode()


def neuter(xkey: BIP32Key, ec: CurveGroup = secp256k1) -> BIP32PubKeyData:
    """Neutered Derivation (ND).

    Derivation of the extended public key corresponding to an extended
    private key ("neutered" as it removes the ability to sign transactions).
    Public keys are returned unchanged.
    """

    xkey = _xkey_from(xkey, ec)
    if not isinstance(xkey, BIP32PrvKeyData):
        return _as_xpub(xkey)

    return BIP32PubKeyData(
        profile=xkey.profile,
        depth=xkey.depth,
        parent_fingerprint=xkey.parent_fingerprint,
        index=xkey.index,
        chain_code=xkey.chain_code,
        pub_key=xkey.pub_key,
        ec=xkey.ec,
    )


def xpub_from_xprv(xprv: BIP32Key, ec: CurveGroup = secp256k1) -> str:
    """Neutered Derivation (ND).

    Derivation of the extended public key corresponding to an extended
    private key ("neutered" as it removes the ability to sign transactions).
    """
    return neuter(xprv, ec).b58encode()


def _ckd(xkey: BIP32KeyData, index: int) -> BIP32KeyData:

    if not 0 <= index <= 0xFFFFFFFF:
        raise HDKeysValueError(f"invalid index: {index}")
    if xkey.depth >= 255:
        raise HDKeysValueError(f"final depth greater than 255: {xkey.depth + 1}")

    if index >= HARDENED and not isinstance(xkey, BIP32PrvKeyData):
        _LOGGER.debug("hardened derivation from public key at index %s", index)
        raise HardenedOnPublicParent(index)

    if isinstance(xkey, BIP32PrvKeyData):
        ec, parent_pub_key = xkey.ec, xkey.pub_key
    else:
        xpub = _as_xpub(xkey)
        ec, parent_pub_key = xpub.ec, xpub.pub_key
    index_bytes = index.to_bytes(4, byteorder="big", signed=False)

    if index >= HARDENED:
        hmac_ = hmac_sha512(xkey.chain_code, xkey.key + index_bytes)
    else:
        hmac_ = hmac_sha512(xkey.chain_code, parent_pub_key + index_bytes)

    offset = int.from_bytes(hmac_[:32], byteorder="big", signed=False)
    if offset >= ec.n:
        _LOGGER.debug("invalid child at index %s: IL not less than n", index)
        raise InvalidDerivationIndex(index, "IL not less than n")

    if isinstance(xkey, BIP32PrvKeyData):
        q = (xkey.prv_key + offset) % ec.n
        if q == 0:
            _LOGGER.debug("invalid child at index %s: zero private key", index)
            raise InvalidDerivationIndex(index, "zero private key")
        return BIP32PrvKeyData(
            xkey.profile,
            xkey.depth + 1,
            hash160(parent_pub_key)[:4],
            index,
            hmac_[32:],
            q,
            ec,
        )

    Q = ec.add(ec.mult(offset), parent_pub_key)
    if Q == INF:
        _LOGGER.debug("invalid child at index %s: infinity point", index)
        raise InvalidDerivationIndex(index, "infinity point")
    return BIP32PubKeyData(
        xkey.profile,
        xkey.depth + 1,
        hash160(parent_pub_key)[:4],
        index,
        hmac_[32:],
        Q,
        ec,
    )


def ckd(xkey: BIP32Key, index: int, ec: CurveGroup = secp256k1) -> BIP32KeyData:
    """Child Key Derivation (CKD) of a single level.

    Private parents return private children (CKDpriv),
    public parents return public children (CKDpub).
    Indexes greater or equal to 0x80000000 are hardened
    and require a private parent.

    If the child key is invalid (probability lower than 1 in 2^127)
    InvalidDerivationIndex is raised: the caller should proceed
    with the next index.
    """

    return _ckd(_xkey_from(xkey, ec), index)


def _derive(
    xkey: BIP32Key,
    der_path: DerPath,
    forced_profile: Optional[VersionProfile] = None,
    ec: CurveGroup = secp256k1,
) -> BIP32KeyData:

    xkey = _xkey_from(xkey, ec)
    indexes = indexes_from_der_path(der_path)

    final_depth = xkey.depth + len(indexes)
    if final_depth > 255:
        err_msg = f"final depth greater than 255: {final_depth}"
        raise HDKeysValueError(err_msg)

    for index in indexes:
        xkey = _ckd(xkey, index)

    if forced_profile is not None:
        if not isinstance(forced_profile, VersionProfile):
            err_msg = f"not a VersionProfile: {type(forced_profile).__name__}"
            raise HDKeysTypeError(err_msg)
        xkey = _replace_profile(xkey, forced_profile)

    return xkey


def _replace_profile(xkey: BIP32KeyData, profile: VersionProfile) -> BIP32KeyData:
    if isinstance(xkey, BIP32PrvKeyData):
        return BIP32PrvKeyData(
            profile,
            xkey.depth,
            xkey.parent_fingerprint,
            xkey.index,
            xkey.chain_code,
            xkey.prv_key,
            xkey.ec,
        )
    xpub = _as_xpub(xkey)
    return BIP32PubKeyData(
        profile,
        xpub.depth,
        xpub.parent_fingerprint,
        xpub.index,
        xpub.chain_code,
        xpub.pub_key,
        xpub.ec,
    )


def derive(
    xkey: BIP32Key,
    der_path: DerPath,
    forced_profile: Optional[VersionProfile] = None,
    ec: CurveGroup = secp256k1,
) -> str:
    """Derive a BIP32 key across a path spanning multiple depth levels.

    Valid DerPath examples:

    - string like "m/44h/0'/1H/0/10"
    - iterable integer indexes
    - one single integer index
    - bytes in multiples of the 4-bytes index

    DerPath is case/blank/extra-slash insensitive
    (e.g. "M /44h / 0' /1H // 0/ 10 / ").

    If forced_profile is given, the derived key is serialized
    with its version prefixes (e.g. zprv instead of xprv).
    """
    xkey = _derive(xkey, der_path, forced_profile, ec)
    return xkey.b58encode()


def _derive_from_account(
    mxkey: BIP32Key,
    branch: int,
    address_index: int,
    branches_0_1_only: bool = True,
    max_index: int = 0xFFFF,
    ec: CurveGroup = secp256k1,
) -> BIP32KeyData:

    mxkey = _xkey_from(mxkey, ec)

    if not mxkey.is_hardened:
        raise HDKeysValueError("unhardened account/master key")

    if branch >= HARDENED:
        raise HDKeysValueError("invalid private derivation at branch level")
    if branch > max_index:
        raise HDKeysValueError(f"too high branch: {branch}")
    if branches_0_1_only and branch not in (0, 1):
        raise HDKeysValueError(f"invalid branch: {branch} not in (0, 1)")

    if address_index >= HARDENED:
        raise HDKeysValueError("invalid private derivation at address index level")
    if address_index > max_index:
        raise HDKeysValueError(f"too high address index: {address_index}")

    return _derive(mxkey, [branch, address_index])


def derive_from_account(
    mxkey: BIP32Key,
    branch: int,
    address_index: int,
    branches_0_1_only: bool = True,
    max_index: int = 0xFFFF,
    ec: CurveGroup = secp256k1,
) -> str:
    """Derive a key with public derivation at the given branch and index.

    It also ensures that the account key is hardened,
    that the branch is a standard receive or change,
    and that the index is not arbitrarily high.
    """

    return _derive_from_account(
        mxkey, branch, address_index, branches_0_1_only, max_index, ec
    ).b58encode()


def _crack_prv_key(
    parent_xpub: BIP32Key, child_xprv: BIP32Key, ec: CurveGroup = secp256k1
) -> BIP32PrvKeyData:

    p = _xkey_from(parent_xpub, ec)
    if not isinstance(p, BIP32PubKeyData):
        err_msg = f"extended parent key is not a public key: {p.b58encode()}"
        raise HDKeysValueError(err_msg)

    c = _xkey_from(child_xprv, ec)
    if not isinstance(c, BIP32PrvKeyData):
        err_msg = f"extended child key is not a private key: {c.b58encode()}"
        raise HDKeysValueError(err_msg)

    # check depth
    if c.depth != p.depth + 1:
        raise HDKeysValueError("not a parent's child: wrong depths")

    # check fingerprint
    if c.parent_fingerprint != p.fingerprint:
        raise HDKeysValueError("not a parent's child: wrong parent fingerprint")

    if c.is_hardened:
        raise HDKeysValueError("hardened child derivation")

    hmac_ = hmac_sha512(
        p.chain_code, p.pub_key + c.index.to_bytes(4, byteorder="big", signed=False)
    )
    offset = int.from_bytes(hmac_[:32], byteorder="big", signed=False)
    parent_q = (c.prv_key - offset) % p.ec.n

    _LOGGER.debug("recovered private key of parent 0x%s", p.fingerprint.hex())
    return BIP32PrvKeyData(
        c.profile,
        p.depth,
        p.parent_fingerprint,
        p.index,
        p.chain_code,
        parent_q,
        p.ec,
    )


def crack_prv_key(
    parent_xpub: BIP32Key, child_xprv: BIP32Key, ec: CurveGroup = secp256k1
) -> str:
    """Return the parent private key from its public key and a child one.

    The parent extended public key and any of its normally derived
    private children leak the parent private key.
    """
    return _crack_prv_key(parent_xpub, child_xprv, ec).b58encode()
