"""
Transaction construction: data model, signing documents, assembly, decoding.
"""

from .models import (
    SignMode,
    Fee,
    SignerInfo,
    TypedOperation,
    DirectDoc,
    LegacyJsonDoc,
    Signature,
    SignedTransaction,
)
from .direct import build_direct_document
from .amino import build_legacy_document, make_std_sign_doc
from .documents import SigningDocument, DOCUMENT_BUILDERS, build_signing_document
from .assembler import TransactionAssembler
from .decoding import TxRaw, decode_tx_raw, decode_tx_body, decode_auth_info
from .fee import GasPrice, calculate_fee

__all__ = [
    "SignMode",
    "Fee",
    "SignerInfo",
    "TypedOperation",
    "DirectDoc",
    "LegacyJsonDoc",
    "Signature",
    "SignedTransaction",
    "build_direct_document",
    "build_legacy_document",
    "make_std_sign_doc",
    "SigningDocument",
    "DOCUMENT_BUILDERS",
    "build_signing_document",
    "TransactionAssembler",
    "TxRaw",
    "decode_tx_raw",
    "decode_tx_body",
    "decode_auth_info",
    "GasPrice",
    "calculate_fee",
]
