import pytest
from ethereum_types.bytes import Bytes

from ethereum_legacy_tx.transactions import UnsignedTransaction, new_transaction
from ethereum_legacy_tx.utils.hexadecimal import hex_to_bytes
from tests.helpers import EIP155_PRIVATE_KEY


@pytest.fixture
def private_key() -> Bytes:
    return hex_to_bytes(EIP155_PRIVATE_KEY)


@pytest.fixture
def unsigned_tx() -> UnsignedTransaction:
    return new_transaction(
        nonce=9,
        gas_price=0x4A817C800,
        gas=0x5208,
        to=b"\x35" * 20,
        value=0xDE0B6B3A7640000,
        data=b"",
        chain_id=1,
    )
