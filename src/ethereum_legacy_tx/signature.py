"""
Transaction Signatures
^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Turns the raw output of the secp256k1 signer into the `v`, `r` and `s` fields
of a legacy transaction.

`r` and `s` are stored as minimal big endian byte strings, the form that the
RLP integer rule expects. `v` folds the chain id into the recovery id as
described in `EIP-155 <https://eips.ethereum.org/EIPS/eip-155>`_, so that a
transaction signed for one network cannot be replayed on another.
"""

import logging
from dataclasses import dataclass

from ethereum_types.bytes import Bytes
from ethereum_types.frozen import slotted_freezable
from ethereum_types.numeric import U64, U256

from .crypto.elliptic_curve import secp256k1_sign
from .crypto.hash import Hash32
from .exceptions import InvalidSignatureError

logger = logging.getLogger(__name__)

EIP155_V_OFFSET = 35


@slotted_freezable
@dataclass
class Signature:
    """
    Signature fields ready to be placed in a transaction.
    """

    v: U256
    r: Bytes
    s: Bytes


def trim_leading_zeros(raw: Bytes) -> Bytes:
    """
    Strips leading zero bytes from `raw`, keeping a single zero byte when the
    value itself is zero.

    Parameters
    ----------
    raw :
        Big endian integer, possibly zero padded.

    Returns
    -------
    trimmed : `Bytes`
        The minimal big endian representation, at least one byte long.
    """
    trimmed = bytes(raw).lstrip(b"\x00")
    if not trimmed:
        return b"\x00"
    return trimmed


def replay_protected_v(recovery_id: int, chain_id: U64) -> U256:
    """
    Computes `recovery_id + chain_id * 2 + 35`.

    Parameters
    ----------
    recovery_id :
        Parity reported by the signer, 0 or 1.
    chain_id :
        Chain id of the transaction being signed.

    Returns
    -------
    v : `U256`
        The replay protected `v` value.
    """
    if recovery_id not in (0, 1):
        raise InvalidSignatureError(f"bad recovery id {recovery_id}")
    return U256(recovery_id) + U256(chain_id) * U256(2) + U256(EIP155_V_OFFSET)


def recovery_id_from_v(v: U256, chain_id: U64) -> int:
    """
    Inverse of `replay_protected_v`.
    """
    base = U256(EIP155_V_OFFSET) + U256(chain_id) * U256(2)
    if v != base and v != base + U256(1):
        raise InvalidSignatureError("bad v")
    return int(v - base)


def sign_digest(
    msg_hash: Hash32, private_key: Bytes, chain_id: U64
) -> Signature:
    """
    Signs `msg_hash` and normalizes the result for inclusion in a legacy
    transaction.

    Parameters
    ----------
    msg_hash :
        Keccak-256 hash of the unsigned transaction.
    private_key :
        32 byte secret scalar. It is not retained.
    chain_id :
        Chain id folded into `v`.

    Returns
    -------
    signature : `Signature`
        Replay protected `v` and trimmed `r`, `s`.
    """
    recovery_id, r, s = secp256k1_sign(msg_hash, private_key)
    v = replay_protected_v(recovery_id, chain_id)
    logger.debug("signature for chain %d has v=%d", int(chain_id), int(v))
    return Signature(
        v=v,
        r=trim_leading_zeros(r),
        s=trim_leading_zeros(s),
    )
