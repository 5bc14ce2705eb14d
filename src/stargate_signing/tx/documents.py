"""
Signing document dispatch.

The two builders share one logical contract and are selected by sign mode
through a table, never by type identity.
"""

from __future__ import annotations
from typing import Callable, Dict, Sequence, Union

from ..messages.registry import MessageRegistry
from ..runtime.errors import UnsupportedModeError
from .amino import build_legacy_document
from .direct import build_direct_document
from .models import DirectDoc, Fee, LegacyJsonDoc, SignerInfo, SignMode, TypedOperation

SigningDocument = Union[DirectDoc, LegacyJsonDoc]

DOCUMENT_BUILDERS: Dict[SignMode, Callable[..., SigningDocument]] = {
    SignMode.DIRECT: build_direct_document,
    SignMode.LEGACY_JSON: build_legacy_document,
}


def build_signing_document(
    mode: SignMode,
    registry: MessageRegistry,
    operations: Sequence[TypedOperation],
    fee: Fee,
    signer_infos: Sequence[SignerInfo],
    chain_id: str,
    account_number: int,
    memo: str = "",
    timeout_height: int = 0,
    signer_index: int = 0,
) -> SigningDocument:
    """
    Build the signing document for the given mode.

    signer_index only matters for LEGACY_JSON, whose document carries the
    sequence of a single signer.
    """
    builder = DOCUMENT_BUILDERS.get(mode)
    if builder is None:
        raise UnsupportedModeError(f"No document builder for sign mode {mode!r}")
    if mode == SignMode.LEGACY_JSON:
        return builder(registry, operations, fee, signer_infos, chain_id, account_number,
                       memo, timeout_height, signer_index)
    return builder(registry, operations, fee, signer_infos, chain_id, account_number,
                   memo, timeout_height)


__all__ = [
    "SigningDocument",
    "DOCUMENT_BUILDERS",
    "build_signing_document",
]
