"""
Utility functions used by the legacy transaction signer.
"""
