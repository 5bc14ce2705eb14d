"""
Signer infrastructure.

Signer variants differ only in the sign modes they advertise; key type
(secp256k1 or ed25519) is independent of capability.
"""

from .signer import PrivateKey, Signer
from .direct import DirectCapableSigner
from .legacy import LegacyOnlySigner
from .dual import DualModeSigner
from .verify import verify_signature

__all__ = [
    "PrivateKey",
    "Signer",
    "DirectCapableSigner",
    "LegacyOnlySigner",
    "DualModeSigner",
    "verify_signature",
]
