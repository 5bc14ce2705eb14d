"""
Base signer interface.

A signer advertises the sign modes it can handle and signs signing
documents of those modes. Mode gating happens before the key is touched;
any failure inside the key is surfaced as SigningFailureError with no
partial signature kept.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import FrozenSet, Union
import logging
import threading

from ..crypto.ed25519 import Ed25519PrivateKey
from ..crypto.secp256k1 import Secp256k1PrivateKey
from ..runtime.errors import SigningFailureError, UnsupportedModeError
from ..tx.documents import SigningDocument
from ..tx.models import Signature, SignerInfo, SignMode

logger = logging.getLogger(__name__)

PrivateKey = Union[Secp256k1PrivateKey, Ed25519PrivateKey]


class Signer(ABC):
    """
    Base signer.

    A single instance never signs two documents at once: sign() holds a
    per-instance lock for the duration of the key operation.
    """

    def __init__(self, private_key: PrivateKey):
        """
        Initialize signer.

        Args:
            private_key: secp256k1 or ed25519 private key
        """
        self._private_key = private_key
        self._lock = threading.Lock()

    @abstractmethod
    def supported_modes(self) -> FrozenSet[SignMode]:
        """
        Sign modes this signer can produce signatures for.

        Returns:
            Frozen set of SignMode values
        """
        pass

    def supports(self, mode: SignMode) -> bool:
        return mode in self.supported_modes()

    @property
    def public_key(self) -> bytes:
        """Public key bytes as they appear in SignerInfo."""
        return self._private_key.public_key().to_bytes()

    @property
    def pubkey_type_url(self) -> str:
        return self._private_key.type_url

    def signer_info(self, sequence: int, mode: SignMode) -> SignerInfo:
        """
        SignerInfo for this signer.

        Raises:
            UnsupportedModeError: If mode is not supported
        """
        if not self.supports(mode):
            raise UnsupportedModeError(
                f"{self.__class__.__name__} does not support {mode.name}",
                {"mode": mode.name, "supported": sorted(m.name for m in self.supported_modes())},
            )
        return SignerInfo(
            public_key=self.public_key,
            sequence=sequence,
            sign_mode=mode,
            pubkey_type_url=self.pubkey_type_url,
        )

    def sign(self, document: SigningDocument) -> Signature:
        """
        Sign a signing document.

        Args:
            document: DirectDoc or LegacyJsonDoc

        Returns:
            Signature carrying this signer's public key and the document mode

        Raises:
            UnsupportedModeError: If the document mode is not supported
            SigningFailureError: If the key operation fails
        """
        mode = document.mode
        if not self.supports(mode):
            raise UnsupportedModeError(
                f"{self.__class__.__name__} cannot sign {mode.name} documents",
                {"mode": mode.name, "supported": sorted(m.name for m in self.supported_modes())},
            )

        with self._lock:
            try:
                signature_bytes = self._private_key.sign(document.sign_bytes)
                public_key = self.public_key
            except Exception as e:
                raise SigningFailureError(f"{mode.name} signing failed: {e}", cause=e)

        logger.debug(f"{self.__class__.__name__} signed {mode.name} document "
                     f"({len(document.sign_bytes)} bytes)")
        return Signature(signer_public_key=public_key, signature_bytes=signature_bytes, mode=mode)

    def __repr__(self) -> str:
        modes = ",".join(sorted(m.name for m in self.supported_modes()))
        return f"{self.__class__.__name__}(modes={modes}, pubkey='{self.public_key.hex()}')"


__all__ = [
    "PrivateKey",
    "Signer",
]
