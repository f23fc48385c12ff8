"""
Cryptographic primitives used to sign legacy transactions.
"""
