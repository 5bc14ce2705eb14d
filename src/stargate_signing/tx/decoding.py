"""
Decoders for assembled transactions.

Inverse of tx.encoding: parse TxRaw, TxBody and AuthInfo bytes back into
engine types. Used to inspect envelopes before or after broadcast.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple

from pydantic import ValidationError

from ..codec.reader import first_bytes, first_string, first_uint, read_fields
from ..messages.registry import MessageRegistry
from ..messages.staking import decode_coin
from ..runtime.errors import DecodeError
from .models import Fee, SignerInfo, SignMode, TypedOperation


@dataclass(frozen=True)
class TxRaw:
    """The three parts of a broadcast transaction."""
    body_bytes: bytes
    auth_info_bytes: bytes
    signatures: Tuple[bytes, ...]


def decode_tx_raw(data: bytes) -> TxRaw:
    """TxRaw{body_bytes=1, auth_info_bytes=2, signatures=3 (repeated)}."""
    f = read_fields(data)
    signatures = tuple(f.get(3, []))
    if not all(isinstance(s, bytes) for s in signatures):
        raise DecodeError("TxRaw signatures must be length-delimited")
    return TxRaw(
        body_bytes=first_bytes(f, 1),
        auth_info_bytes=first_bytes(f, 2),
        signatures=signatures,
    )


def decode_tx_body(registry: MessageRegistry, body_bytes: bytes) -> Tuple[List[TypedOperation], str, int]:
    """
    Decode TxBody bytes.

    Args:
        registry: Registry used to decode each Any payload
        body_bytes: Encoded TxBody

    Returns:
        (operations, memo, timeout_height)

    Raises:
        DecodeError: If the bytes are malformed
        UnknownTypeIdError: If a message type is not registered
    """
    f = read_fields(body_bytes)
    operations = []
    for any_bytes in f.get(1, []):
        if not isinstance(any_bytes, bytes):
            raise DecodeError("TxBody message must be length-delimited")
        a = read_fields(any_bytes)
        type_id = first_string(a, 1)
        operations.append(TypedOperation(type_id=type_id, payload=registry.decode(type_id, first_bytes(a, 2))))
    return operations, first_string(f, 2), first_uint(f, 3)


def _decode_signer_info(data: bytes) -> SignerInfo:
    f = read_fields(data)
    pubkey_any = read_fields(first_bytes(f, 1))
    key = first_bytes(read_fields(first_bytes(pubkey_any, 2)), 1)
    mode_info = read_fields(first_bytes(f, 2))
    single = read_fields(first_bytes(mode_info, 1))
    try:
        mode = SignMode(first_uint(single, 1))
    except ValueError as e:
        raise DecodeError(f"Unsupported sign mode {first_uint(single, 1)}", cause=e)
    try:
        return SignerInfo(
            public_key=key,
            sequence=first_uint(f, 3),
            sign_mode=mode,
            pubkey_type_url=first_string(pubkey_any, 1),
        )
    except ValidationError as e:
        raise DecodeError(f"Invalid signer info: {e}", cause=e)


def _decode_fee(data: bytes) -> Fee:
    f = read_fields(data)
    payer: Optional[str] = first_string(f, 3) or None
    granter: Optional[str] = first_string(f, 4) or None
    try:
        return Fee(
            amount=tuple(decode_coin(c) for c in f.get(1, [])),
            gas_limit=first_uint(f, 2),
            payer=payer,
            granter=granter,
        )
    except ValidationError as e:
        raise DecodeError(f"Invalid fee: {e}", cause=e)


def decode_auth_info(auth_info_bytes: bytes) -> Tuple[List[SignerInfo], Fee]:
    """
    Decode AuthInfo bytes.

    Returns:
        (signer_infos in wire order, fee)
    """
    f = read_fields(auth_info_bytes)
    infos = [_decode_signer_info(b) for b in f.get(1, [])]
    return infos, _decode_fee(first_bytes(f, 2))


__all__ = [
    "TxRaw",
    "decode_tx_raw",
    "decode_tx_body",
    "decode_auth_info",
]
