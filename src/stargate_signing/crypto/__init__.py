"""
Key primitives for transaction signing.

Both key types are backed by the `cryptography` package.
"""

from .ed25519 import Ed25519Error, Ed25519PrivateKey, Ed25519PublicKey
from .secp256k1 import Secp256k1Error, Secp256k1PrivateKey, Secp256k1PublicKey
from ..messages.types import PUBKEY_ED25519, PUBKEY_SECP256K1

PUBLIC_KEY_TYPES = {
    PUBKEY_SECP256K1: Secp256k1PublicKey,
    PUBKEY_ED25519: Ed25519PublicKey,
}


def public_key_for(type_url: str, key_bytes: bytes):
    """Instantiate the public key class registered for a pubkey type URL."""
    try:
        cls = PUBLIC_KEY_TYPES[type_url]
    except KeyError:
        raise ValueError(f"Unsupported public key type: {type_url}")
    return cls(key_bytes)


__all__ = [
    "Ed25519Error",
    "Ed25519PrivateKey",
    "Ed25519PublicKey",
    "Secp256k1Error",
    "Secp256k1PrivateKey",
    "Secp256k1PublicKey",
    "PUBLIC_KEY_TYPES",
    "public_key_for",
]
