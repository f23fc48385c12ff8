"""
.. _rlp:

Recursive Length Prefix (RLP) Encoding
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Defines the serialization and deserialization format used both to build the
preimage that is signed and to produce the raw transaction that is broadcast.

Every value is either a byte string or a list. Unsigned integers are turned
into their minimal big endian byte string first, so `0` becomes the empty
string.
"""

from typing import Sequence, TypeAlias, Union

from ethereum_types.bytes import Bytes, Bytes0, Bytes20
from ethereum_types.numeric import FixedUnsigned, Uint

from .crypto.hash import Hash32, keccak256
from .exceptions import RLPDecodingError, RLPEncodingError

Simple: TypeAlias = Union[Sequence["Simple"], bytes]

Extended: TypeAlias = Union[
    Sequence["Extended"],
    bytearray,
    bytes,
    int,
    Uint,
    FixedUnsigned,
    str,
    bool,
]


#
# RLP Encode
#


def encode(raw_data: Extended) -> Bytes:
    """
    Encodes `raw_data` into a sequence of bytes using RLP.

    Parameters
    ----------
    raw_data :
        A `Bytes`, an unsigned integer, a string, a boolean, or a sequence of
        those.

    Returns
    -------
    encoded : `Bytes`
        The RLP encoded bytes representing `raw_data`.
    """
    if isinstance(raw_data, (bytearray, bytes)):
        return encode_bytes(bytes(raw_data))
    elif isinstance(raw_data, str):
        return encode_bytes(raw_data.encode())
    elif isinstance(raw_data, bool):
        return encode_bytes(b"\x01" if raw_data else b"")
    elif isinstance(raw_data, (int, Uint, FixedUnsigned)):
        return encode_uint(raw_data)
    elif isinstance(raw_data, Sequence):
        return encode_sequence([encode(item) for item in raw_data])
    else:
        raise RLPEncodingError(
            "RLP Encoding of type {} is not supported".format(type(raw_data))
        )


def encode_uint(value: Union[int, Uint, FixedUnsigned]) -> Bytes:
    """
    Encodes an unsigned integer as its minimal big endian byte string.

    Parameters
    ----------
    value :
        Non-negative integer of any width.

    Returns
    -------
    encoded : `Bytes`
        The RLP encoded bytes representing `value`.
    """
    if int(value) < 0:
        raise RLPEncodingError(f"cannot encode negative integer {value}")
    raw_bytes = Uint(value).to_be_bytes()
    assert len(raw_bytes) == 0 or raw_bytes[0] != 0, "non-minimal integer"
    return encode_bytes(raw_bytes)


def encode_bytes(raw_bytes: Bytes) -> Bytes:
    """
    Encodes `raw_bytes`, a sequence of bytes, using RLP.

    Parameters
    ----------
    raw_bytes :
        Bytes to encode with RLP.

    Returns
    -------
    encoded : `Bytes`
        The RLP encoded bytes representing `raw_bytes`.
    """
    len_raw_data = len(raw_bytes)

    if len_raw_data == 1 and raw_bytes[0] < 0x80:
        return bytes(raw_bytes)
    elif len_raw_data < 0x38:
        return bytes([0x80 + len_raw_data]) + raw_bytes
    else:
        # length of raw data represented as big endian bytes
        len_raw_data_as_be = Uint(len_raw_data).to_be_bytes()
        return (
            bytes([0xB7 + len(len_raw_data_as_be)])
            + len_raw_data_as_be
            + raw_bytes
        )


def encode_to(to: Union[Bytes0, Bytes20]) -> Bytes:
    """
    Encodes a transaction destination. A contract creation (`Bytes0`) is the
    empty string, it is never left out of the list.
    """
    if not isinstance(to, (Bytes0, Bytes20)):
        raise RLPEncodingError(f"not a destination: {type(to).__name__}")
    return encode_bytes(bytes(to))


def encode_sequence(encoded_items: Sequence[Bytes]) -> Bytes:
    """
    Wraps already encoded items in an RLP list header.

    Parameters
    ----------
    encoded_items :
        RLP encodings of each element, in order.

    Returns
    -------
    encoded : `Bytes`
        The RLP encoded list.
    """
    joined_encodings = b"".join(encoded_items)
    len_joined_encodings = len(joined_encodings)

    if len_joined_encodings < 0x38:
        return bytes([0xC0 + len_joined_encodings]) + joined_encodings
    else:
        len_joined_encodings_as_be = Uint(len_joined_encodings).to_be_bytes()
        return (
            bytes([0xF7 + len(len_joined_encodings_as_be)])
            + len_joined_encodings_as_be
            + joined_encodings
        )


#
# RLP Decode
#


def decode(encoded_data: Bytes) -> Simple:
    """
    Decodes a byte string, or a list of RLP encodable objects, from the byte
    sequence `encoded_data`.

    Parameters
    ----------
    encoded_data :
        A sequence of bytes, in RLP form.

    Returns
    -------
    decoded_data : `Simple`
        Object decoded from `encoded_data`.
    """
    if len(encoded_data) <= 0:
        raise RLPDecodingError("Cannot decode empty bytestring")

    if decode_item_length(encoded_data) != len(encoded_data):
        raise RLPDecodingError("trailing or missing bytes after RLP item")

    if encoded_data[0] <= 0xBF:
        # This means that the raw data is of type bytes
        return decode_to_bytes(encoded_data)
    else:
        # This means that the raw data is of type sequence
        return decode_to_sequence(encoded_data)


def decode_to_uint(raw_bytes: Simple) -> Uint:
    """
    Interprets a decoded byte string as a minimally encoded unsigned integer.
    """
    if not isinstance(raw_bytes, bytes):
        raise RLPDecodingError("expected bytes, got a list")
    if len(raw_bytes) > 0 and raw_bytes[0] == 0:
        raise RLPDecodingError("integer has leading zero bytes")
    return Uint.from_be_bytes(raw_bytes)


def decode_to_bytes(encoded_bytes: Bytes) -> Bytes:
    """
    Decodes a rlp encoded byte stream assuming that the decoded data
    should be of type `bytes`.

    Parameters
    ----------
    encoded_bytes :
        RLP encoded byte stream.

    Returns
    -------
    decoded : `Bytes`
        RLP decoded Bytes data
    """
    if len(encoded_bytes) == 1 and encoded_bytes[0] < 0x80:
        return bytes(encoded_bytes)
    elif encoded_bytes[0] <= 0xB7:
        len_raw_data = encoded_bytes[0] - 0x80
        if len_raw_data >= len(encoded_bytes):
            raise RLPDecodingError("truncated byte string")
        raw_data = encoded_bytes[1 : 1 + len_raw_data]
        if len_raw_data == 1 and raw_data[0] < 0x80:
            raise RLPDecodingError("single byte below 0x80 has a prefix")
        return bytes(raw_data)
    else:
        # This is the index in the encoded data at which decoded data
        # starts from.
        decoded_data_start_idx = 1 + encoded_bytes[0] - 0xB7
        if decoded_data_start_idx - 1 >= len(encoded_bytes):
            raise RLPDecodingError("truncated length prefix")
        if encoded_bytes[1] == 0:
            raise RLPDecodingError("length prefix has leading zero bytes")
        len_decoded_data = int(
            Uint.from_be_bytes(encoded_bytes[1:decoded_data_start_idx])
        )
        if len_decoded_data < 0x38:
            raise RLPDecodingError("long form used for a short string")
        decoded_data_end_idx = decoded_data_start_idx + len_decoded_data
        if decoded_data_end_idx - 1 >= len(encoded_bytes):
            raise RLPDecodingError("truncated byte string")
        return bytes(
            encoded_bytes[decoded_data_start_idx:decoded_data_end_idx]
        )


def decode_to_sequence(encoded_sequence: Bytes) -> Sequence[Simple]:
    """
    Decodes a rlp encoded byte stream assuming that the decoded data
    should be of type `Sequence` of objects.

    Parameters
    ----------
    encoded_sequence :
        An RLP encoded Sequence.

    Returns
    -------
    decoded : `Sequence[Simple]`
        Sequence of objects decoded from `encoded_sequence`.
    """
    if encoded_sequence[0] <= 0xF7:
        len_joined_encodings = encoded_sequence[0] - 0xC0
        if len_joined_encodings >= len(encoded_sequence):
            raise RLPDecodingError("truncated list")
        joined_encodings = encoded_sequence[1 : 1 + len_joined_encodings]
    else:
        joined_encodings_start_idx = 1 + encoded_sequence[0] - 0xF7
        if joined_encodings_start_idx - 1 >= len(encoded_sequence):
            raise RLPDecodingError("truncated length prefix")
        if encoded_sequence[1] == 0:
            raise RLPDecodingError("length prefix has leading zero bytes")
        len_joined_encodings = int(
            Uint.from_be_bytes(encoded_sequence[1:joined_encodings_start_idx])
        )
        if len_joined_encodings < 0x38:
            raise RLPDecodingError("long form used for a short list")
        joined_encodings_end_idx = (
            joined_encodings_start_idx + len_joined_encodings
        )
        if joined_encodings_end_idx - 1 >= len(encoded_sequence):
            raise RLPDecodingError("truncated list")
        joined_encodings = encoded_sequence[
            joined_encodings_start_idx:joined_encodings_end_idx
        ]

    return decode_joined_encodings(joined_encodings)


def decode_joined_encodings(joined_encodings: Bytes) -> Sequence[Simple]:
    """
    Decodes `joined_encodings`, which is a concatenation of RLP encoded
    objects.
    """
    decoded_sequence = []

    item_start_idx = 0
    while item_start_idx < len(joined_encodings):
        encoded_item_length = decode_item_length(
            joined_encodings[item_start_idx:]
        )
        if item_start_idx + encoded_item_length > len(joined_encodings):
            raise RLPDecodingError("list item overruns its list")
        encoded_item = joined_encodings[
            item_start_idx : item_start_idx + encoded_item_length
        ]
        decoded_sequence.append(decode(encoded_item))
        item_start_idx += encoded_item_length

    return decoded_sequence


def decode_item_length(encoded_data: Bytes) -> int:
    """
    Find the length of the rlp encoding for the first object in
    `encoded_data`, prefix included.

    Parameters
    ----------
    encoded_data :
        RLP encoded data, possibly followed by further items.

    Returns
    -------
    rlp_length : `int`
    """
    if len(encoded_data) <= 0:
        raise RLPDecodingError("Cannot decode empty bytestring")

    first_rlp_byte = encoded_data[0]

    # This is the length of the big endian representation of the length of
    # rlp encoded object byte stream.
    length_length = 0
    decoded_data_length = 0

    # This occurs only when the raw_data is a single byte whose value < 128
    if first_rlp_byte < 0x80:
        return 1
    # This occurs only when the raw_data is a byte stream with length < 56
    # and doesn't fall into the above cases
    elif first_rlp_byte <= 0xB7:
        decoded_data_length = first_rlp_byte - 0x80
    # This occurs only when the raw_data is a byte stream and doesn't fall
    # into the above cases
    elif first_rlp_byte <= 0xBF:
        length_length = first_rlp_byte - 0xB7
        if length_length >= len(encoded_data):
            raise RLPDecodingError("truncated length prefix")
        if encoded_data[1] == 0:
            raise RLPDecodingError("length prefix has leading zero bytes")
        decoded_data_length = int(
            Uint.from_be_bytes(encoded_data[1 : 1 + length_length])
        )
    # This occurs only when the raw_data is a sequence of objects with
    # length(concatenation of encoding of each object) < 56
    elif first_rlp_byte <= 0xF7:
        decoded_data_length = first_rlp_byte - 0xC0
    # This occurs only when the raw_data is a sequence of objects and
    # doesn't fall into the above cases.
    else:
        length_length = first_rlp_byte - 0xF7
        if length_length >= len(encoded_data):
            raise RLPDecodingError("truncated length prefix")
        if encoded_data[1] == 0:
            raise RLPDecodingError("length prefix has leading zero bytes")
        decoded_data_length = int(
            Uint.from_be_bytes(encoded_data[1 : 1 + length_length])
        )

    return 1 + length_length + decoded_data_length


def rlp_hash(data: Extended) -> Hash32:
    """
    Obtain the keccak-256 hash of the rlp encoding of the passed in data.

    Parameters
    ----------
    data :
        The data for which we need the rlp hash.

    Returns
    -------
    hash : `Hash32`
        The rlp hash of the passed in data.
    """
    return keccak256(encode(data))
