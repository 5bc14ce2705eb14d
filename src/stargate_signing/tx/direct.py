"""
Direct-mode signing document builder.

Produces a protobuf SignDoc that embeds the exact TxBody and AuthInfo bytes
the assembled transaction will carry.
"""

from __future__ import annotations
from typing import Sequence
import logging

from ..messages.registry import MessageRegistry
from .encoding import encode_auth_info, encode_sign_doc, encode_tx_body
from .models import DirectDoc, Fee, SignerInfo, TypedOperation

logger = logging.getLogger(__name__)


def build_direct_document(
    registry: MessageRegistry,
    operations: Sequence[TypedOperation],
    fee: Fee,
    signer_infos: Sequence[SignerInfo],
    chain_id: str,
    account_number: int,
    memo: str = "",
    timeout_height: int = 0,
) -> DirectDoc:
    """
    Build a direct-mode signing document.

    Pure function of its inputs: equal inputs give byte-identical sign_bytes.

    Args:
        registry: Registry holding the operations' encode rules
        operations: Operations in execution order
        fee: Transaction fee
        signer_infos: Signers in verification order
        chain_id: Target chain id
        account_number: Account number of the signing account
        memo: Transaction memo
        timeout_height: Block height after which the tx is invalid (0 = none)

    Returns:
        DirectDoc

    Raises:
        UnknownTypeIdError: If an operation type is not registered
        MalformedPayloadError: If a payload is structurally invalid
    """
    body_bytes = encode_tx_body(registry, operations, memo, timeout_height)
    auth_info_bytes = encode_auth_info(signer_infos, fee)
    sign_bytes = encode_sign_doc(body_bytes, auth_info_bytes, chain_id, account_number)

    logger.debug(f"Built direct sign doc: {len(operations)} operation(s), "
                 f"{len(signer_infos)} signer(s), {len(sign_bytes)} bytes")

    return DirectDoc(
        body_bytes=body_bytes,
        auth_info_bytes=auth_info_bytes,
        chain_id=chain_id,
        account_number=account_number,
        signer_infos=tuple(signer_infos),
        sign_bytes=sign_bytes,
    )
