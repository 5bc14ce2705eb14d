"""
Canonical protobuf encoders for cosmos.tx.v1beta1 messages.

Shared by the direct builder (which signs these bytes) and the assembler
(which broadcasts them), so both always see identical bytes.
"""

from __future__ import annotations
from typing import Sequence

from ..codec.writer import ProtoWriter
from ..messages.registry import MessageRegistry
from ..messages.staking import encode_coin
from .models import Fee, SignerInfo, TypedOperation


def encode_tx_body(
    registry: MessageRegistry,
    operations: Sequence[TypedOperation],
    memo: str = "",
    timeout_height: int = 0,
) -> bytes:
    """TxBody{messages=1 (repeated Any), memo=2, timeout_height=3}."""
    w = ProtoWriter()
    for op in operations:
        w.message_field(1, registry.encode_any(op.type_id, op.payload))
    return w.string_field(2, memo).uint64_field(3, timeout_height).to_bytes()


def encode_pubkey(type_url: str, key: bytes) -> bytes:
    """Any{type_url, value=PubKey{key=1}}."""
    inner = ProtoWriter().bytes_field(1, key).to_bytes()
    return ProtoWriter().string_field(1, type_url).bytes_field(2, inner).to_bytes()


def encode_signer_info(info: SignerInfo) -> bytes:
    """SignerInfo{public_key=1, mode_info=2 (single), sequence=3}."""
    single = ProtoWriter().enum_field(1, info.sign_mode).to_bytes()
    mode_info = ProtoWriter().message_field(1, single).to_bytes()
    return (ProtoWriter()
            .message_field(1, encode_pubkey(info.pubkey_type_url, info.public_key))
            .message_field(2, mode_info)
            .uint64_field(3, info.sequence)
            .to_bytes())


def encode_fee(fee: Fee) -> bytes:
    """Fee{amount=1 (repeated Coin), gas_limit=2, payer=3, granter=4}."""
    w = ProtoWriter()
    for coin in fee.amount:
        w.message_field(1, encode_coin(coin))
    return (w.uint64_field(2, fee.gas_limit)
            .string_field(3, fee.payer)
            .string_field(4, fee.granter)
            .to_bytes())


def encode_auth_info(signer_infos: Sequence[SignerInfo], fee: Fee) -> bytes:
    """AuthInfo{signer_infos=1, fee=2}. Signer infos keep caller order."""
    w = ProtoWriter()
    for info in signer_infos:
        w.message_field(1, encode_signer_info(info))
    return w.message_field(2, encode_fee(fee)).to_bytes()


def encode_sign_doc(body_bytes: bytes, auth_info_bytes: bytes, chain_id: str, account_number: int) -> bytes:
    """SignDoc{body_bytes=1, auth_info_bytes=2, chain_id=3, account_number=4}."""
    return (ProtoWriter()
            .bytes_field(1, body_bytes)
            .bytes_field(2, auth_info_bytes)
            .string_field(3, chain_id)
            .uint64_field(4, account_number)
            .to_bytes())


__all__ = [
    "encode_tx_body",
    "encode_pubkey",
    "encode_signer_info",
    "encode_fee",
    "encode_auth_info",
    "encode_sign_doc",
]
