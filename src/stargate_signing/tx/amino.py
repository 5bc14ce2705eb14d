"""
Legacy Amino JSON signing document builder.

Produces the StdSignDoc:

    {"account_number": "...", "chain_id": "...",
     "fee": {"amount": [{"amount": "...", "denom": "..."}], "gas": "..."},
     "memo": "...", "msgs": [{"type": "cosmos-sdk/...", "value": {...}}],
     "sequence": "..."}

with every key sorted and every integer rendered as a decimal string.
"""

from __future__ import annotations
from typing import Any, Dict, Sequence
import logging

from ..canonjson import dumps_canonical_bytes
from ..messages.registry import MessageRegistry
from ..messages.staking import coin_to_amino
from .models import Fee, LegacyJsonDoc, SignerInfo, TypedOperation

logger = logging.getLogger(__name__)


def fee_to_amino(fee: Fee) -> Dict[str, Any]:
    """StdFee JSON; payer and granter appear only when set."""
    out: Dict[str, Any] = {
        "amount": [coin_to_amino(coin) for coin in fee.amount],
        "gas": str(fee.gas_limit),
    }
    if fee.payer:
        out["payer"] = fee.payer
    if fee.granter:
        out["granter"] = fee.granter
    return out


def make_std_sign_doc(
    registry: MessageRegistry,
    operations: Sequence[TypedOperation],
    fee: Fee,
    chain_id: str,
    account_number: int,
    sequence: int,
    memo: str = "",
    timeout_height: int = 0,
) -> Dict[str, Any]:
    """
    StdSignDoc as a plain dict.

    Raises:
        UnknownTypeIdError: If an operation type is not registered
        UnsupportedLegacyEncodingError: If an operation has no legacy mapping
    """
    doc: Dict[str, Any] = {
        "account_number": str(account_number),
        "chain_id": chain_id,
        "fee": fee_to_amino(fee),
        "memo": memo,
        "msgs": [registry.to_legacy_json(op.type_id, op.payload) for op in operations],
        "sequence": str(sequence),
    }
    if timeout_height:
        doc["timeout_height"] = str(timeout_height)
    return doc


def build_legacy_document(
    registry: MessageRegistry,
    operations: Sequence[TypedOperation],
    fee: Fee,
    signer_infos: Sequence[SignerInfo],
    chain_id: str,
    account_number: int,
    memo: str = "",
    timeout_height: int = 0,
    signer_index: int = 0,
) -> LegacyJsonDoc:
    """
    Build a legacy Amino JSON signing document.

    An Amino sign doc carries a single sequence, so the document is built
    for one signer: the one at signer_index.

    Raises:
        IndexError: If signer_index is outside signer_infos
        UnknownTypeIdError: If an operation type is not registered
        UnsupportedLegacyEncodingError: If an operation has no legacy mapping
    """
    if not 0 <= signer_index < len(signer_infos):
        raise IndexError(f"signer_index {signer_index} out of range for {len(signer_infos)} signer(s)")

    doc = make_std_sign_doc(
        registry, operations, fee, chain_id, account_number,
        signer_infos[signer_index].sequence, memo, timeout_height,
    )
    sign_bytes = dumps_canonical_bytes(doc)

    logger.debug(f"Built legacy sign doc for signer {signer_index}: "
                 f"{len(operations)} operation(s), {len(sign_bytes)} bytes")

    return LegacyJsonDoc(
        signer_infos=tuple(signer_infos),
        signer_index=signer_index,
        sign_bytes=sign_bytes,
    )
