#!/usr/bin/env python3

# Copyright (C) 2024 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

These are meant to discriminate between Exceptions being raised
by hdkeys from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the hdkeys versions are derived.
"""


class HDKeysValueError(ValueError):
    pass


class HDKeysTypeError(TypeError):
    pass


class HDKeysRuntimeError(RuntimeError):
    pass


class InvalidSeed(HDKeysValueError):
    """The seed yields a master private key not in 1..n-1."""


class InvalidDerivationIndex(HDKeysValueError):
    """The child key for this index is invalid: retry with index+1."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        msg = f"invalid child index {index} ({reason}), retry with index+1"
        super().__init__(msg)


class HardenedOnPublicParent(HDKeysValueError):
    """Hardened derivation requires the parent private key."""

    def __init__(self, index: int) -> None:
        self.index = index
        msg = f"invalid hardened derivation from public key: index {hex(index)}"
        super().__init__(msg)


class InvalidEncoding(HDKeysValueError):
    pass


class UnknownNetworkProfile(InvalidEncoding):
    """Unknown version bytes or network profile selector."""
