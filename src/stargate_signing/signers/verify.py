"""
Signature verification.

Verifies a signature against the document's sign bytes using the key type
recorded in the document's signer infos, the way an independent verifier
that re-derived the document would.
"""

from __future__ import annotations
import logging

from ..crypto import Ed25519Error, Secp256k1Error, public_key_for
from ..tx.documents import SigningDocument
from ..tx.models import Signature

logger = logging.getLogger(__name__)


def verify_signature(document: SigningDocument, signature: Signature) -> bool:
    """
    Verify a signature over a signing document.

    The signer must appear in document.signer_infos with the same sign mode
    as the document.

    Returns:
        True if the signature is valid
    """
    if signature.mode != document.mode:
        return False

    for info in document.signer_infos:
        if info.public_key == signature.signer_public_key and info.sign_mode == document.mode:
            try:
                key = public_key_for(info.pubkey_type_url, info.public_key)
            except (ValueError, Ed25519Error, Secp256k1Error) as e:
                logger.debug(f"Cannot load {info.pubkey_type_url} key for verification: {e}")
                return False
            return key.verify(signature.signature_bytes, document.sign_bytes)

    logger.debug("Signature public key not found among document signer infos")
    return False


__all__ = ["verify_signature"]
