from typing import Tuple

import pytest
from ethereum_types.bytes import Bytes, Bytes32
from ethereum_types.numeric import U64, U256

from ethereum_legacy_tx import signature
from ethereum_legacy_tx.exceptions import InvalidSignatureError
from ethereum_legacy_tx.signature import (
    Signature,
    recovery_id_from_v,
    replay_protected_v,
    sign_digest,
    trim_leading_zeros,
)
from ethereum_legacy_tx.utils.hexadecimal import hex_to_bytes
from tests.helpers import EIP155_R, EIP155_S, EIP155_SIGNING_HASH


@pytest.mark.parametrize(
    "raw, expected",
    [
        (b"\x00" * 32, b"\x00"),
        (b"\x00" * 31 + b"\x01", b"\x01"),
        (b"\x00\x00\x80" + b"\xff" * 29, b"\x80" + b"\xff" * 29),
        (b"\x01" + b"\x00" * 31, b"\x01" + b"\x00" * 31),
        (b"\x00", b"\x00"),
        (b"", b"\x00"),
    ],
)
def test_trim_leading_zeros(raw: Bytes, expected: Bytes) -> None:
    assert trim_leading_zeros(raw) == expected


@pytest.mark.parametrize("recovery_id", [0, 1])
@pytest.mark.parametrize("chain_id", [0, 1, 3, 5, 56, 137, 2**32, 2**64 - 1])
def test_replay_protected_v(recovery_id: int, chain_id: int) -> None:
    v = replay_protected_v(recovery_id, U64(chain_id))
    assert v == recovery_id + chain_id * 2 + 35
    assert recovery_id_from_v(v, U64(chain_id)) == recovery_id


@pytest.mark.parametrize("recovery_id", [-1, 2, 3, 27])
def test_replay_protected_v_bad_recovery_id(recovery_id: int) -> None:
    with pytest.raises(InvalidSignatureError):
        replay_protected_v(recovery_id, U64(1))


@pytest.mark.parametrize("v", [27, 28, 35, 36, 39])
def test_recovery_id_from_v_wrong_chain(v: int) -> None:
    with pytest.raises(InvalidSignatureError):
        recovery_id_from_v(U256(v), U64(1))


def test_sign_digest_eip155_example() -> None:
    result = sign_digest(
        hex_to_bytes(EIP155_SIGNING_HASH), b"\x46" * 32, U64(1)
    )
    assert result == Signature(
        v=U256(37),
        r=EIP155_R.to_bytes(32, "big"),
        s=EIP155_S.to_bytes(32, "big"),
    )


def test_sign_digest_trims_and_protects(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def fake_sign(
        msg_hash: Bytes, private_key: Bytes
    ) -> Tuple[int, Bytes32, Bytes32]:
        return (
            1,
            Bytes32(b"\x00" * 2 + b"\xaa" * 30),
            Bytes32(b"\x00" * 31 + b"\x05"),
        )

    monkeypatch.setattr(signature, "secp256k1_sign", fake_sign)

    result = sign_digest(b"\x11" * 32, b"\x46" * 32, U64(11155111))
    assert result.v == 1 + 11155111 * 2 + 35
    assert result.r == b"\xaa" * 30
    assert result.s == b"\x05"


def test_sign_digest_bad_hash_length() -> None:
    with pytest.raises(InvalidSignatureError):
        sign_digest(b"\x11" * 31, b"\x46" * 32, U64(1))
