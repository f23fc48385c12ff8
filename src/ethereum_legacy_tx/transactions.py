"""
Transactions are atomic units of work created externally to Ethereum and
submitted to be executed.

This module covers the legacy transaction envelope only: a nine element RLP
list `[nonce, gas_price, gas, to, value, data, v, r, s]`. An unsigned
transaction and a signed transaction are separate types, and signing turns
the former into the latter without modifying it.
"""
import logging
from dataclasses import dataclass
from typing import Union

from ethereum_types.bytes import Bytes, Bytes0, Bytes20
from ethereum_types.frozen import slotted_freezable
from ethereum_types.numeric import U64, U256, Uint

from . import rlp
from .crypto.elliptic_curve import SECP256K1N, secp256k1_recover
from .crypto.hash import Hash32, keccak256
from .exceptions import (
    InvalidAddressError,
    InvalidSignatureError,
    InvalidTransaction,
    RLPDecodingError,
    TransactionAlreadySignedError,
)
from .signature import (
    recovery_id_from_v,
    sign_digest,
    trim_leading_zeros,
)
from .utils.hexadecimal import hex_to_bytes

logger = logging.getLogger(__name__)

Address = Bytes20

To = Union[Bytes0, Address]
"""
Destination of a transaction. `Bytes0` marks a contract creation.
"""

LEGACY_TRANSACTION_FIELD_COUNT = 9


@slotted_freezable
@dataclass
class UnsignedTransaction:
    """
    Transaction intent, before a signature is attached.

    The EIP-155 signing preimage places `chain_id` where `v` goes and zero
    where `r` and `s` go.
    """

    nonce: U256
    gas_price: Uint
    gas: Uint
    to: To
    value: U256
    data: Bytes
    chain_id: U64


@slotted_freezable
@dataclass
class SignedTransaction:
    """
    Transaction with a replay protected signature. `chain_id` is not part of
    the encoding, it is implied by `v`.
    """

    nonce: U256
    gas_price: Uint
    gas: Uint
    to: To
    value: U256
    data: Bytes
    v: U256
    r: Bytes
    s: Bytes
    chain_id: U64


def to_destination(to: Union[None, str, Bytes]) -> To:
    """
    Converts a caller supplied destination into a `To`. `None` and the empty
    string both mean contract creation. Strings are read as `0x` prefixed
    hexadecimal, such as a checksummed address.
    """
    if isinstance(to, str):
        try:
            to = hex_to_bytes(to)
        except ValueError as e:
            raise InvalidAddressError(f"address is not hex: {to!r}") from e
    if to is None or len(to) == 0:
        return Bytes0(b"")
    if len(to) != 20:
        raise InvalidAddressError(
            f"address must be 20 bytes, got {len(to)}"
        )
    return Address(to)


def new_transaction(
    nonce: int,
    gas_price: int,
    gas: int,
    to: Union[None, str, Bytes],
    value: int,
    data: Union[str, Bytes],
    chain_id: int,
) -> UnsignedTransaction:
    """
    Creates an unsigned legacy transaction.

    Parameters
    ----------
    nonce :
        Sequence number of the sending account.
    gas_price :
        Price paid per unit of gas, in wei.
    gas :
        Maximum amount of gas the transaction may use.
    to :
        20 byte recipient, or `None` to create a contract. A `0x` prefixed
        hex string is also accepted.
    value :
        Amount transferred, in wei.
    data :
        Call data or contract init code, as bytes or a `0x` prefixed hex
        string.
    chain_id :
        Id of the network the transaction is meant for.

    Returns
    -------
    tx : `UnsignedTransaction`
        The unsigned transaction.
    """
    if isinstance(data, str):
        data = hex_to_bytes(data)

    return UnsignedTransaction(
        nonce=U256(nonce),
        gas_price=Uint(gas_price),
        gas=Uint(gas),
        to=to_destination(to),
        value=U256(value),
        data=Bytes(data),
        chain_id=U64(chain_id),
    )


def encode_unsigned_transaction(tx: UnsignedTransaction) -> Bytes:
    """
    Encodes the EIP-155 signing preimage of `tx`.
    """
    return rlp.encode_sequence(
        [
            rlp.encode_uint(tx.nonce),
            rlp.encode_uint(tx.gas_price),
            rlp.encode_uint(tx.gas),
            rlp.encode_to(tx.to),
            rlp.encode_uint(tx.value),
            rlp.encode_bytes(tx.data),
            rlp.encode_uint(tx.chain_id),
            rlp.encode_uint(0),
            rlp.encode_uint(0),
        ]
    )


def encode_transaction(tx: SignedTransaction) -> Bytes:
    """
    Encodes a signed transaction into the raw bytes a node accepts.

    Parameters
    ----------
    tx :
        Signed transaction.

    Returns
    -------
    raw_transaction : `Bytes`
        RLP list of the nine legacy fields.
    """
    return rlp.encode_sequence(
        [
            rlp.encode_uint(tx.nonce),
            rlp.encode_uint(tx.gas_price),
            rlp.encode_uint(tx.gas),
            rlp.encode_to(tx.to),
            rlp.encode_uint(tx.value),
            rlp.encode_bytes(tx.data),
            rlp.encode_uint(tx.v),
            rlp.encode_uint(Uint.from_be_bytes(tx.r)),
            rlp.encode_uint(Uint.from_be_bytes(tx.s)),
        ]
    )


def signing_hash(tx: UnsignedTransaction) -> Hash32:
    """
    Compute the hash of a transaction used in a EIP 155 signature.

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    hash : `Hash32`
        Hash of the transaction.
    """
    return keccak256(encode_unsigned_transaction(tx))


def sign_transaction(
    tx: UnsignedTransaction, private_key: Bytes
) -> SignedTransaction:
    """
    Signs `tx` with `private_key`.

    The unsigned transaction is encoded, hashed with keccak256 and signed.
    `v` is derived from the transaction's own `chain_id`. `tx` itself is left
    untouched.

    Parameters
    ----------
    tx :
        Transaction to sign.
    private_key :
        32 byte secret scalar of the sender.

    Returns
    -------
    signed_tx : `SignedTransaction`
        The signed transaction.
    """
    if isinstance(tx, SignedTransaction):
        raise TransactionAlreadySignedError(
            "transaction already carries a signature"
        )

    msg_hash = signing_hash(tx)
    logger.debug(
        "signing transaction nonce=%d chain_id=%d hash=%s",
        int(tx.nonce),
        int(tx.chain_id),
        msg_hash.hex(),
    )
    signature = sign_digest(msg_hash, private_key, tx.chain_id)

    return SignedTransaction(
        nonce=tx.nonce,
        gas_price=tx.gas_price,
        gas=tx.gas,
        to=tx.to,
        value=tx.value,
        data=tx.data,
        v=signature.v,
        r=signature.r,
        s=signature.s,
        chain_id=tx.chain_id,
    )


def sign(tx: UnsignedTransaction, private_key: Bytes) -> Bytes:
    """
    Signs `tx` and returns the raw transaction ready for
    `eth_sendRawTransaction`.
    """
    return encode_transaction(sign_transaction(tx, private_key))


def strip_signature(tx: SignedTransaction) -> UnsignedTransaction:
    """
    Returns the unsigned transaction that `tx` was signed over.
    """
    return UnsignedTransaction(
        nonce=tx.nonce,
        gas_price=tx.gas_price,
        gas=tx.gas,
        to=tx.to,
        value=tx.value,
        data=tx.data,
        chain_id=tx.chain_id,
    )


def transaction_hash(tx: SignedTransaction) -> Hash32:
    """
    Hash identifying a signed transaction on the network.
    """
    return keccak256(encode_transaction(tx))


def decode_transaction(raw_transaction: Bytes) -> SignedTransaction:
    """
    Decodes raw transaction bytes into a `SignedTransaction`.

    Only EIP-155 replay protected transactions are accepted, since `chain_id`
    is recovered from `v`.

    Parameters
    ----------
    raw_transaction :
        RLP encoded legacy transaction.

    Returns
    -------
    tx : `SignedTransaction`
        The decoded transaction.
    """
    decoded = rlp.decode(raw_transaction)
    if isinstance(decoded, bytes):
        raise RLPDecodingError("legacy transaction must be an RLP list")
    if len(decoded) != LEGACY_TRANSACTION_FIELD_COUNT:
        raise RLPDecodingError(
            f"legacy transaction needs {LEGACY_TRANSACTION_FIELD_COUNT} "
            f"field(s), but got {len(decoded)} instead"
        )

    nonce, gas_price, gas, to, value, data, v, r, s = decoded
    if not isinstance(to, bytes) or not isinstance(data, bytes):
        raise RLPDecodingError("expected bytes, got a list")

    try:
        decoded_v = U256(rlp.decode_to_uint(v))
        decoded_nonce = U256(rlp.decode_to_uint(nonce))
        decoded_value = U256(rlp.decode_to_uint(value))
        decoded_r = U256(rlp.decode_to_uint(r))
        decoded_s = U256(rlp.decode_to_uint(s))
    except OverflowError as e:
        raise RLPDecodingError("integer does not fit in 256 bits") from e

    if decoded_v in (27, 28):
        raise InvalidTransaction("transaction is not replay protected")
    if decoded_v < U256(35):
        raise InvalidSignatureError("bad v")
    try:
        chain_id = U64((decoded_v - U256(35)) // U256(2))
    except OverflowError as e:
        raise InvalidSignatureError("chain id does not fit in 64 bits") from e

    logger.debug("decoded transaction for chain %d", int(chain_id))
    return SignedTransaction(
        nonce=decoded_nonce,
        gas_price=rlp.decode_to_uint(gas_price),
        gas=rlp.decode_to_uint(gas),
        to=to_destination(to),
        value=decoded_value,
        data=data,
        v=decoded_v,
        r=trim_leading_zeros(decoded_r.to_be_bytes()),
        s=trim_leading_zeros(decoded_s.to_be_bytes()),
        chain_id=chain_id,
    )


def recover_sender(tx: SignedTransaction) -> Address:
    """
    Extracts the sender address from a transaction.

    The v, r, and s values are the three parts that make up the signature
    of a transaction. In order to recover the sender of a transaction the two
    components needed are the signature (``v``, ``r``, and ``s``) and the
    signing hash of the transaction. The sender's public key can be obtained
    with these two values and therefore the sender address can be retrieved.

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    sender : `Address`
        The address of the account that signed the transaction.
    """
    r = U256.from_be_bytes(tx.r)
    s = U256.from_be_bytes(tx.s)
    if U256(0) >= r or r >= SECP256K1N:
        raise InvalidSignatureError("bad r")
    if U256(0) >= s or s > SECP256K1N // U256(2):
        raise InvalidSignatureError("bad s")

    recovery_id = recovery_id_from_v(tx.v, tx.chain_id)
    public_key = secp256k1_recover(
        r, s, recovery_id, signing_hash(strip_signature(tx))
    )
    return Address(keccak256(public_key)[12:32])
