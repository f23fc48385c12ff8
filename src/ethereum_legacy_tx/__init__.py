"""
Construction, RLP encoding and EIP-155 signing of legacy Ethereum
transactions.
"""

__version__ = "0.1.0"
