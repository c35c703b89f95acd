#!/usr/bin/env python3

# Copyright (C) 2024 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module hdkeys.bip32."""

from hdkeys.bip32.bip32 import (
    BIP32Key,
    BIP32KeyData,
    BIP32PrvKeyData,
    BIP32PubKeyData,
    ckd,
    crack_prv_key,
    derive,
    derive_from_account,
    neuter,
    rootxprv_from_seed,
    xpub_from_xprv,
)
from hdkeys.bip32.der_path import (
    HARDENED,
    DerPath,
    bytes_from_der_path,
    indexes_from_der_path,
    int_from_index_str,
    str_from_der_path,
    str_from_index_int,
)
from hdkeys.bip32.slip132 import p2pkh_xkey, p2wpkh_p2sh_xkey, p2wpkh_xkey

__all__ = [
    "BIP32Key",
    "BIP32KeyData",
    "BIP32PrvKeyData",
    "BIP32PubKeyData",
    "ckd",
    "crack_prv_key",
    "derive",
    "derive_from_account",
    "neuter",
    "rootxprv_from_seed",
    "xpub_from_xprv",
    "HARDENED",
    "DerPath",
    "bytes_from_der_path",
    "indexes_from_der_path",
    "int_from_index_str",
    "str_from_der_path",
    "str_from_index_int",
    "p2pkh_xkey",
    "p2wpkh_p2sh_xkey",
    "p2wpkh_xkey",
]
