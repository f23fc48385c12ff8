import logging

import pytest
from ethereum_types.bytes import Bytes
from ethereum_types.numeric import U256

from ethereum_legacy_tx.crypto.elliptic_curve import (
    SECP256K1N,
    SECP256K1P,
    secp256k1_recover,
    secp256k1_sign,
    validate_private_key,
)
from ethereum_legacy_tx.crypto.hash import keccak256
from ethereum_legacy_tx.exceptions import (
    InvalidPrivateKeyError,
    InvalidSignatureError,
)
from ethereum_legacy_tx.utils.hexadecimal import hex_to_bytes, hex_to_bytes20
from tests.helpers import (
    EIP155_R,
    EIP155_S,
    EIP155_SENDER,
    EIP155_SIGNING_HASH,
)

PRIVATE_KEY = b"\x46" * 32


def test_secp256k1_sign() -> None:
    recovery_id, r, s = secp256k1_sign(
        hex_to_bytes(EIP155_SIGNING_HASH), PRIVATE_KEY
    )
    assert recovery_id == 0
    assert int.from_bytes(r, "big") == EIP155_R
    assert int.from_bytes(s, "big") == EIP155_S


def test_secp256k1_sign_is_deterministic() -> None:
    msg_hash = keccak256(b"deterministic")
    assert secp256k1_sign(msg_hash, PRIVATE_KEY) == secp256k1_sign(
        msg_hash, PRIVATE_KEY
    )


def test_secp256k1_sign_low_s() -> None:
    for i in range(16):
        _, _, s = secp256k1_sign(keccak256(bytes([i])), PRIVATE_KEY)
        assert int.from_bytes(s, "big") <= int(SECP256K1N) // 2


@pytest.mark.parametrize("msg_hash", [b"", b"\x11" * 31, b"\x11" * 33])
def test_secp256k1_sign_bad_hash_length(msg_hash: Bytes) -> None:
    with pytest.raises(InvalidSignatureError):
        secp256k1_sign(msg_hash, PRIVATE_KEY)


@pytest.mark.parametrize(
    "private_key",
    [
        b"\x46" * 31,
        b"\x00" * 32,
        SECP256K1N.to_be_bytes32(),
        b"\xff" * 32,
    ],
)
def test_validate_private_key_rejects(private_key: Bytes) -> None:
    with pytest.raises(InvalidPrivateKeyError):
        validate_private_key(private_key)


def test_validate_private_key_accepts_bounds() -> None:
    assert validate_private_key(b"\x00" * 31 + b"\x01") == b"\x00" * 31 + b"\x01"
    assert validate_private_key(
        (SECP256K1N - U256(1)).to_be_bytes32()
    ) == (SECP256K1N - U256(1)).to_be_bytes32()


def test_validate_private_key_eip155_key() -> None:
    assert validate_private_key(PRIVATE_KEY) == PRIVATE_KEY


def test_secp256k1_recover() -> None:
    public_key = secp256k1_recover(
        U256(EIP155_R), U256(EIP155_S), 0, hex_to_bytes(EIP155_SIGNING_HASH)
    )
    assert len(public_key) == 64
    assert keccak256(public_key)[12:] == hex_to_bytes20(EIP155_SENDER)


def test_secp256k1_recover_not_on_curve() -> None:
    # x = -2 gives x**3 + 7 == -1, which is not a square modulo p.
    with pytest.raises(InvalidSignatureError):
        secp256k1_recover(
            SECP256K1P - U256(2),
            U256(EIP155_S),
            0,
            hex_to_bytes(EIP155_SIGNING_HASH),
        )


def test_private_key_is_not_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG):
        secp256k1_sign(keccak256(b"log"), PRIVATE_KEY)
    assert PRIVATE_KEY.hex() not in caplog.text
    assert "46" * 32 not in caplog.text
