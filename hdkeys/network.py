#!/usr/bin/env python3

# Copyright (C) 2024 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Network constants and extended key version profiles.

Each network (mainnet, testnet) comes with a set of 4-byte version
prefixes, one private/public pair for each SLIP132 script type:

- p2pkh (BIP32/BIP44): xprv/xpub, tprv/tpub
- p2wpkh_p2sh (BIP49): yprv/ypub, uprv/upub
- p2wpkh (BIP84): zprv/zpub, vprv/vpub
- p2wsh_p2sh: Yprv/Ypub, Uprv/Upub
- p2wsh: Zprv/Zpub, Vprv/Vpub

The network constants are loaded from the json files in the _data
directory; the VersionProfiles table built from them is an explicit
value that can be passed to the extended key decoder.
"""

import logging
from dataclasses import dataclass, field
from os import path
from typing import Dict, Iterable, Iterator, List, Tuple

from dataclasses_json import DataClassJsonMixin, config

from hdkeys.alias import Octets
from hdkeys.exceptions import HDKeysValueError, UnknownNetworkProfile
from hdkeys.utils import bytes_from_octets

_LOGGER = logging.getLogger(__name__)

SCRIPT_TYPES = ("p2pkh", "p2wpkh_p2sh", "p2wpkh", "p2wsh_p2sh", "p2wsh")

# purpose to SLIP132 script type
_PURPOSES = {
    "bip32": "p2pkh",
    "bip44": "p2pkh",
    "bip49": "p2wpkh_p2sh",
    "bip84": "p2wpkh",
}

_HEX_BYTES = config(encoder=lambda v: v.hex(), decoder=bytes.fromhex)


def _attr_names(script_type: str) -> Tuple[str, str]:
    if script_type == "p2pkh":
        return "bip32_prv", "bip32_pub"
    return f"slip132_{script_type}_prv", f"slip132_{script_type}_pub"


@dataclass(frozen=True)
class Network(DataClassJsonMixin):
    name: str

    # "m / 44h / 0h" p2pkh or p2sh
    bip32_prv: bytes = field(metadata=_HEX_BYTES)
    bip32_pub: bytes = field(metadata=_HEX_BYTES)

    # "m / 49h / 0h" p2wpkh-p2sh (p2sh-wrapped legacy-segwit p2wpkh)
    slip132_p2wpkh_p2sh_prv: bytes = field(metadata=_HEX_BYTES)
    slip132_p2wpkh_p2sh_pub: bytes = field(metadata=_HEX_BYTES)

    # "m / 84h / 0h" p2wpkh (native-segwit p2wpkh)
    slip132_p2wpkh_prv: bytes = field(metadata=_HEX_BYTES)
    slip132_p2wpkh_pub: bytes = field(metadata=_HEX_BYTES)

    # p2wsh-p2sh (p2sh-wrapped legacy-segwit p2wsh)
    slip132_p2wsh_p2sh_prv: bytes = field(metadata=_HEX_BYTES)
    slip132_p2wsh_p2sh_pub: bytes = field(metadata=_HEX_BYTES)

    # p2wsh (native-segwit p2wsh)
    slip132_p2wsh_prv: bytes = field(metadata=_HEX_BYTES)
    slip132_p2wsh_pub: bytes = field(metadata=_HEX_BYTES)

    def __post_init__(self) -> None:
        for script_type in SCRIPT_TYPES:
            for attr in _attr_names(script_type):
                value = bytes_from_octets(getattr(self, attr))
                object.__setattr__(self, attr, value)
        self.assert_valid()

    def assert_valid(self) -> None:

        if not self.name.strip():
            raise HDKeysValueError("empty network name")

        versions = self.versions()
        for version in versions:
            if len(version) != 4:
                err_msg = f"invalid version length: {len(version)} bytes"
                err_msg += " instead of 4"
                raise HDKeysValueError(err_msg)
        if len(set(versions)) != len(versions):
            raise HDKeysValueError(f"duplicated versions in network {self.name}")

    def versions(self) -> List[bytes]:
        "Return all the version prefixes, private before public."
        return [
            getattr(self, attr)
            for script_type in SCRIPT_TYPES
            for attr in _attr_names(script_type)
        ]


NETWORKS: Dict[str, Network] = {}
datadir = path.join(path.dirname(__file__), "_data")
for net in ("mainnet", "testnet"):
    filename = path.join(datadir, net + ".json")
    with open(filename, "r", encoding="ascii") as file_:
        NETWORKS[net] = Network.from_json(file_.read())
    _LOGGER.debug("loaded %s network constants from %s", net, filename)


@dataclass(frozen=True)
class VersionProfile:
    """Version prefixes for a (network, script type) pair.

    The profile is used only for serialization:
    it plays no role in key derivation.
    """

    network: str
    script_type: str
    prv: bytes
    pub: bytes

    def version(self, is_private: bool) -> bytes:
        return self.prv if is_private else self.pub


class VersionProfiles:
    """Table of the known version profiles.

    Profiles can be selected by (network, purpose)
    or looked up by one of their version prefixes.
    """

    def __init__(self, profiles: Iterable[VersionProfile]) -> None:

        self._profiles = tuple(profiles)
        self._by_selector: Dict[Tuple[str, str], VersionProfile] = {}
        self._by_version: Dict[bytes, Tuple[VersionProfile, bool]] = {}
        for profile in self._profiles:
            selector = (profile.network, profile.script_type)
            if selector in self._by_selector:
                raise HDKeysValueError(f"duplicated profile: {selector}")
            self._by_selector[selector] = profile
            for version, is_private in ((profile.prv, True), (profile.pub, False)):
                if version in self._by_version:
                    raise HDKeysValueError(f"duplicated version: 0x{version.hex()}")
                self._by_version[version] = (profile, is_private)

    @classmethod
    def from_networks(cls, networks: Iterable[Network]) -> "VersionProfiles":
        profiles = []
        for network in networks:
            for script_type in SCRIPT_TYPES:
                prv_attr, pub_attr = _attr_names(script_type)
                profile = VersionProfile(
                    network.name,
                    script_type,
                    getattr(network, prv_attr),
                    getattr(network, pub_attr),
                )
                profiles.append(profile)
        return cls(profiles)

    def __iter__(self) -> Iterator[VersionProfile]:
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, profile: object) -> bool:
        return profile in self._profiles

    def select(self, network: str = "mainnet", purpose: str = "bip32") -> VersionProfile:
        """Return the profile for the given network and purpose.

        The purpose can be one of bip32, bip44, bip49, bip84
        or a SLIP132 script type (e.g. p2wpkh).
        """

        network = network.strip().lower()
        purpose = purpose.strip().lower()
        script_type = _PURPOSES.get(purpose, purpose)
        try:
            return self._by_selector[(network, script_type)]
        except KeyError as e:
            err_msg = f"unknown network profile: {network}, {purpose}"
            raise UnknownNetworkProfile(err_msg) from e

    def from_version(self, version: Octets) -> Tuple[VersionProfile, bool]:
        "Return the profile and the private flag for a version prefix."

        version = bytes_from_octets(version, 4)
        try:
            return self._by_version[version]
        except KeyError as e:
            err_msg = f"unknown extended key version: 0x{version.hex()}"
            raise UnknownNetworkProfile(err_msg) from e


PROFILES = VersionProfiles.from_networks(NETWORKS.values())
MAINNET = PROFILES.select("mainnet", "bip32")
TESTNET = PROFILES.select("testnet", "bip32")


def network_profile(
    network: str = "mainnet",
    purpose: str = "bip32",
    profiles: VersionProfiles = PROFILES,
) -> VersionProfile:
    "Return the version profile for the given network and purpose."
    return profiles.select(network, purpose)
