"""
SECP256K1 cryptographic operations.

Signatures are ECDSA over SHA-256 of the message, serialized as 64-byte
r || s with s normalized to the lower half of the curve order. Public keys
are 33-byte compressed points.
"""

from __future__ import annotations
import hashlib
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature, encode_dss_signature

from ..messages.types import PUBKEY_SECP256K1

CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
HALF_CURVE_ORDER = CURVE_ORDER // 2


class Secp256k1Error(Exception):
    """Base exception for SECP256K1 operations."""
    pass


class Secp256k1PublicKey:
    """SECP256K1 public key for verification."""

    type_url = PUBKEY_SECP256K1

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize public key.

        Args:
            public_key_bytes: Compressed (33) or uncompressed (65) SEC1 point
        """
        try:
            self._crypto_key = ec.EllipticCurvePublicKey.from_encoded_point(
                ec.SECP256K1(), bytes(public_key_bytes)
            )
        except ValueError as e:
            raise Secp256k1Error(f"Invalid secp256k1 public key: {e}")
        self._key_bytes = self._crypto_key.public_bytes(
            serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint
        )

    def to_bytes(self) -> bytes:
        """Compressed 33-byte public key."""
        return self._key_bytes

    def to_hex(self) -> str:
        return self._key_bytes.hex()

    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify a 64-byte r || s signature over SHA-256(message).

        High-S signatures are rejected, as on chain.
        """
        if len(signature) != 64:
            return False
        r = int.from_bytes(signature[:32], "big")
        s = int.from_bytes(signature[32:], "big")
        if not (0 < r < CURVE_ORDER and 0 < s <= HALF_CURVE_ORDER):
            return False
        try:
            self._crypto_key.verify(encode_dss_signature(r, s), message, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, Secp256k1PublicKey):
            return False
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __repr__(self) -> str:
        return f"Secp256k1PublicKey('{self.to_hex()}')"


class Secp256k1PrivateKey:
    """SECP256K1 private key."""

    type_url = PUBKEY_SECP256K1

    def __init__(self, private_key_bytes: bytes):
        """
        Initialize from a 32-byte big-endian secret.

        Raises:
            Secp256k1Error: If the secret is not in [1, n-1]
        """
        if len(private_key_bytes) != 32:
            raise Secp256k1Error(f"secp256k1 private key must be 32 bytes, got {len(private_key_bytes)}")
        secret = int.from_bytes(private_key_bytes, "big")
        if not 0 < secret < CURVE_ORDER:
            raise Secp256k1Error("secp256k1 private key out of range")
        self._crypto_key = ec.derive_private_key(secret, ec.SECP256K1())
        self._public_key = Secp256k1PublicKey(
            self._crypto_key.public_key().public_bytes(
                serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint
            )
        )

    @classmethod
    def generate(cls) -> Secp256k1PrivateKey:
        key = ec.generate_private_key(ec.SECP256K1())
        return cls(key.private_numbers().private_value.to_bytes(32, "big"))

    @classmethod
    def from_seed(cls, seed: Union[str, bytes]) -> Secp256k1PrivateKey:
        """
        Derive private key from seed using SHA-256.

        For deterministic test keys, not a wallet derivation scheme.
        """
        if isinstance(seed, str):
            seed = seed.encode('utf-8')
        return cls(hashlib.sha256(seed).digest())

    def public_key(self) -> Secp256k1PublicKey:
        return self._public_key

    def sign(self, message: bytes) -> bytes:
        """
        Sign SHA-256(message).

        Returns:
            64-byte r || s with low S
        """
        der = self._crypto_key.sign(message, ec.ECDSA(hashes.SHA256()))
        r, s = decode_dss_signature(der)
        if s > HALF_CURVE_ORDER:
            s = CURVE_ORDER - s
        return r.to_bytes(32, "big") + s.to_bytes(32, "big")


__all__ = [
    "CURVE_ORDER",
    "Secp256k1Error",
    "Secp256k1PublicKey",
    "Secp256k1PrivateKey",
]
