#!/usr/bin/env python3

# Copyright (C) 2024 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SLIP132 account extended keys.

https://github.com/satoshilabs/slips/blob/master/slip-0132.md

Account keys derived from a root key at the BIP44/BIP49/BIP84
default path "m / purpose' / coin_type' / account'",
serialized with the version prefixes of the matching script type.
"""

from typing import Optional

from hdkeys.bip32.bip32 import BIP32Key, BIP32KeyData, _xkey_from, derive
from hdkeys.bip32.der_path import DerPath
from hdkeys.curve import CurveGroup, secp256k1
from hdkeys.exceptions import HDKeysValueError, UnknownNetworkProfile
from hdkeys.network import PROFILES, VersionProfiles

# SLIP44 coin types
_COIN_TYPES = {"mainnet": 0, "testnet": 1}


def _helper_checks(
    xkey: BIP32Key, check_root_xkey: bool, ec: CurveGroup
) -> BIP32KeyData:
    xkey = _xkey_from(xkey, ec)
    if check_root_xkey and not xkey.is_root:
        raise HDKeysValueError(f"not a root key: {xkey.b58encode()}")
    return xkey


def _purpose_xkey(
    xkey: BIP32Key,
    purpose: str,
    der_path: Optional[DerPath],
    check_root_xkey: bool,
    profiles: VersionProfiles,
    ec: CurveGroup,
) -> str:

    xkey = _helper_checks(xkey, check_root_xkey, ec)
    network = xkey.profile.network
    if der_path is None:
        if network not in _COIN_TYPES:
            raise UnknownNetworkProfile(f"no default coin type for {network}")
        der_path = f"m/{purpose[3:]}h/{_COIN_TYPES[network]}h/0h"
    profile = profiles.select(network, purpose)
    return derive(xkey, der_path, profile)


def p2pkh_xkey(
    xkey: BIP32Key,
    der_path: Optional[DerPath] = None,
    check_root_xkey: bool = True,
    profiles: VersionProfiles = PROFILES,
    ec: CurveGroup = secp256k1,
) -> str:
    """Return a p2pkh BIP32 xprv/xpub account key at the derivation path.

    The default path is "m/44h/0h/0h" (mainnet) or "m/44h/1h/0h" (testnet).
    """
    return _purpose_xkey(xkey, "bip44", der_path, check_root_xkey, profiles, ec)


def p2wpkh_p2sh_xkey(
    xkey: BIP32Key,
    der_path: Optional[DerPath] = None,
    check_root_xkey: bool = True,
    profiles: VersionProfiles = PROFILES,
    ec: CurveGroup = secp256k1,
) -> str:
    """Return a p2wpkh-p2sh BIP32 yprv/ypub account key at the derivation path.

    The default path is "m/49h/0h/0h" (mainnet) or "m/49h/1h/0h" (testnet).
    """
    return _purpose_xkey(xkey, "bip49", der_path, check_root_xkey, profiles, ec)


def p2wpkh_xkey(
    xkey: BIP32Key,
    der_path: Optional[DerPath] = None,
    check_root_xkey: bool = True,
    profiles: VersionProfiles = PROFILES,
    ec: CurveGroup = secp256k1,
) -> str:
    """Return a p2wpkh BIP32 zprv/zpub account key at the derivation path.

    The default path is "m/84h/0h/0h" (mainnet) or "m/84h/1h/0h" (testnet).
    """
    return _purpose_xkey(xkey, "bip84", der_path, check_root_xkey, profiles, ec)
