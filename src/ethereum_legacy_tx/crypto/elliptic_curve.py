"""
Elliptic Curves
^^^^^^^^^^^^^^^

Recoverable ECDSA over secp256k1. The curve arithmetic is delegated to
`coincurve`; this module only checks the inputs and splits or assembles the
65 byte `r || s || recovery_id` signature format.
"""

import logging
from typing import Tuple

import coincurve
from ethereum_types.bytes import Bytes, Bytes32
from ethereum_types.numeric import U256

from ..exceptions import InvalidPrivateKeyError, InvalidSignatureError
from .hash import Hash32

logger = logging.getLogger(__name__)

SECP256K1B = U256(7)
SECP256K1P = U256(
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
)
SECP256K1N = U256(
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
)


def validate_private_key(private_key: Bytes) -> Bytes32:
    """
    Checks that `private_key` is a 32 byte scalar in `[1, SECP256K1N)`.

    Parameters
    ----------
    private_key :
        Candidate secret scalar, big endian.

    Returns
    -------
    private_key : `Bytes32`
        The same scalar, typed.
    """
    if len(private_key) != 32:
        raise InvalidPrivateKeyError(
            f"private key must be 32 bytes, got {len(private_key)}"
        )
    scalar = int.from_bytes(private_key, "big")
    if not 0 < scalar < int(SECP256K1N):
        raise InvalidPrivateKeyError("private key is out of range")
    return Bytes32(private_key)


def secp256k1_sign(
    msg_hash: Hash32, private_key: Bytes
) -> Tuple[int, Bytes32, Bytes32]:
    """
    Signs a message hash, producing a recoverable signature.

    Parameters
    ----------
    msg_hash :
        32 byte hash of the message being signed.
    private_key :
        32 byte secret scalar.

    Returns
    -------
    signature : `Tuple[int, Bytes32, Bytes32]`
        The recovery id (0 or 1) and the raw, zero padded `r` and `s`.
    """
    if len(msg_hash) != 32:
        raise InvalidSignatureError(
            f"message hash must be 32 bytes, got {len(msg_hash)}"
        )
    secret = validate_private_key(private_key)

    try:
        signature = coincurve.PrivateKey(secret).sign_recoverable(
            bytes(msg_hash), hasher=None
        )
    except ValueError as e:
        raise InvalidSignatureError("secp256k1 signing failed") from e

    recovery_id = signature[64]
    logger.debug("signed %s (recovery id %d)", msg_hash.hex(), recovery_id)
    return (
        recovery_id,
        Bytes32(signature[0:32]),
        Bytes32(signature[32:64]),
    )


def secp256k1_recover(
    r: U256, s: U256, recovery_id: int, msg_hash: Hash32
) -> Bytes:
    """
    Recovers the public key from a given signature.

    Parameters
    ----------
    r :
        x-coordinate of the ephemeral point, reduced modulo `SECP256K1N`.
    s :
        Signature proof.
    recovery_id :
        Parity of the ephemeral point's y-coordinate (0 or 1).
    msg_hash :
        Hash of the message being recovered.

    Returns
    -------
    public_key : `Bytes`
        Recovered public key, 64 bytes without the `0x04` prefix.
    """
    is_square = pow(
        pow(r, U256(3), SECP256K1P) + SECP256K1B,
        (SECP256K1P - U256(1)) // U256(2),
        SECP256K1P,
    )

    if is_square != 1:
        raise InvalidSignatureError(
            "r is not the x-coordinate of a point on the secp256k1 curve"
        )

    signature = r.to_be_bytes32() + s.to_be_bytes32() + bytes([recovery_id])

    # The point at infinity is rejected by coincurve with a ValueError.
    try:
        public_key = coincurve.PublicKey.from_signature_and_message(
            signature, bytes(msg_hash), hasher=None
        )
    except ValueError as e:
        raise InvalidSignatureError from e

    return Bytes(public_key.format(compressed=False)[1:])
