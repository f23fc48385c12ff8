"""
Error types raised while building, encoding and signing transactions.
"""


class EthereumException(Exception):
    """
    Base class for all exceptions _expected_ to be thrown during normal
    operation.
    """


class RLPEncodingError(EthereumException):
    """
    Indicates that RLP encoding failed.
    """


class RLPDecodingError(EthereumException):
    """
    Indicates that RLP decoding failed, usually because the input is not
    canonical.
    """


class InvalidTransaction(EthereumException):
    """
    Thrown when a transaction is found to be invalid.
    """


class InvalidAddressError(InvalidTransaction):
    """
    Thrown when a destination is neither empty nor exactly 20 bytes long.
    """


class InvalidSignatureError(InvalidTransaction):
    """
    Thrown when a transaction has an invalid signature, or a signature could
    not be produced for the given message hash.
    """


class TransactionAlreadySignedError(InvalidTransaction):
    """
    Thrown when signing is requested for a transaction that already carries
    a signature.
    """


class InvalidPrivateKeyError(EthereumException):
    """
    Thrown when a private key is not 32 bytes long or lies outside
    `[1, SECP256K1N)`.
    """
