"""
Hash Functions

SHA-256 helpers used for transaction hashes and secp256k1 sign digests.
"""

import hashlib


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def transaction_hash(tx_bytes: bytes) -> str:
    """Upper-case hex SHA-256 of encoded TxRaw bytes, as reported by Tendermint."""
    return sha256_bytes(tx_bytes).hex().upper()
