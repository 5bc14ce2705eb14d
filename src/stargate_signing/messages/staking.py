"""
Staking module operation kinds.

Protobuf encode/decode rules follow cosmos.staking.v1beta1 field numbers.
Amino JSON rules use snake_case keys, render commission rates as 18-decimal
strings and consensus keys as {"type": ..., "value": base64}.
"""

from __future__ import annotations
import base64
from typing import Any, Dict

from ..codec.reader import first_bytes, first_int64, first_string, read_fields
from ..codec.writer import ProtoWriter
from ..runtime.errors import DecodeError
from .registry import MessageRegistry
from .types import (
    PUBKEY_ED25519,
    PUBKEY_SECP256K1,
    BeginRedelegatePayload,
    CancelUnbondingDelegationPayload,
    Coin,
    CommissionRates,
    ConsensusPubKey,
    CreateValidatorPayload,
    DelegatePayload,
    Description,
    EditValidatorPayload,
    UndelegatePayload,
)

MSG_CREATE_VALIDATOR = "/cosmos.staking.v1beta1.MsgCreateValidator"
MSG_EDIT_VALIDATOR = "/cosmos.staking.v1beta1.MsgEditValidator"
MSG_DELEGATE = "/cosmos.staking.v1beta1.MsgDelegate"
MSG_UNDELEGATE = "/cosmos.staking.v1beta1.MsgUndelegate"
MSG_BEGIN_REDELEGATE = "/cosmos.staking.v1beta1.MsgBeginRedelegate"
MSG_CANCEL_UNBONDING_DELEGATION = "/cosmos.staking.v1beta1.MsgCancelUnbondingDelegation"

AMINO_PUBKEY_TYPES = {
    PUBKEY_ED25519: "tendermint/PubKeyEd25519",
    PUBKEY_SECP256K1: "tendermint/PubKeySecp256k1",
}

DECIMAL_PRECISION = 18


def decimal_from_atomics(atomics: str, precision: int = DECIMAL_PRECISION) -> str:
    """Render fixed-point atomics as a decimal string: "100000000000000000" -> "0.100000000000000000"."""
    whole, fractional = divmod(int(atomics), 10 ** precision)
    return f"{whole}.{fractional:0{precision}d}"


# Shared sub-messages

def encode_coin(coin: Coin) -> bytes:
    return ProtoWriter().string_field(1, coin.denom).string_field(2, coin.amount).to_bytes()


def decode_coin(data: bytes) -> Coin:
    f = read_fields(data)
    return Coin(denom=first_string(f, 1), amount=first_string(f, 2) or "0")


def coin_to_amino(coin: Coin) -> Dict[str, str]:
    return {"amount": coin.amount, "denom": coin.denom}


def _encode_description(d: Description) -> bytes:
    return (ProtoWriter()
            .string_field(1, d.moniker)
            .string_field(2, d.identity)
            .string_field(3, d.website)
            .string_field(4, d.security_contact)
            .string_field(5, d.details)
            .to_bytes())


def _decode_description(data: bytes) -> Description:
    f = read_fields(data)
    return Description(
        moniker=first_string(f, 1),
        identity=first_string(f, 2),
        website=first_string(f, 3),
        security_contact=first_string(f, 4),
        details=first_string(f, 5),
    )


def _description_to_amino(d: Description) -> Dict[str, str]:
    return {
        "moniker": d.moniker,
        "identity": d.identity,
        "website": d.website,
        "security_contact": d.security_contact,
        "details": d.details,
    }


def _encode_pubkey_any(pubkey: ConsensusPubKey) -> bytes:
    inner = ProtoWriter().bytes_field(1, pubkey.key).to_bytes()
    return ProtoWriter().string_field(1, pubkey.type_url).bytes_field(2, inner).to_bytes()


def _decode_pubkey_any(data: bytes) -> ConsensusPubKey:
    f = read_fields(data)
    inner = read_fields(first_bytes(f, 2))
    return ConsensusPubKey(type_url=first_string(f, 1), key=first_bytes(inner, 1))


def _pubkey_to_amino(pubkey: ConsensusPubKey) -> Dict[str, str]:
    return {
        "type": AMINO_PUBKEY_TYPES[pubkey.type_url],
        "value": base64.b64encode(pubkey.key).decode("ascii"),
    }


def _required(f, field: int, name: str) -> bytes:
    if not f.get(field):
        raise DecodeError(f"Missing required field {name}")
    return first_bytes(f, field)


# MsgCreateValidator

def encode_create_validator(msg: CreateValidatorPayload) -> bytes:
    commission = (ProtoWriter()
                  .string_field(1, msg.commission.rate)
                  .string_field(2, msg.commission.max_rate)
                  .string_field(3, msg.commission.max_change_rate)
                  .to_bytes())
    return (ProtoWriter()
            .message_field(1, _encode_description(msg.description))
            .message_field(2, commission)
            .string_field(3, msg.min_self_delegation)
            .string_field(4, msg.delegator_address)
            .string_field(5, msg.validator_address)
            .message_field(6, _encode_pubkey_any(msg.pubkey))
            .message_field(7, encode_coin(msg.value))
            .to_bytes())


def decode_create_validator(data: bytes) -> CreateValidatorPayload:
    f = read_fields(data)
    c = read_fields(_required(f, 2, "commission"))
    return CreateValidatorPayload(
        description=_decode_description(_required(f, 1, "description")),
        commission=CommissionRates(
            rate=first_string(c, 1) or "0",
            max_rate=first_string(c, 2) or "0",
            max_change_rate=first_string(c, 3) or "0",
        ),
        min_self_delegation=first_string(f, 3) or "0",
        delegator_address=first_string(f, 4),
        validator_address=first_string(f, 5),
        pubkey=_decode_pubkey_any(_required(f, 6, "pubkey")),
        value=decode_coin(_required(f, 7, "value")),
    )


def create_validator_to_amino(msg: CreateValidatorPayload) -> Dict[str, Any]:
    return {
        "description": _description_to_amino(msg.description),
        "commission": {
            "rate": decimal_from_atomics(msg.commission.rate),
            "max_rate": decimal_from_atomics(msg.commission.max_rate),
            "max_change_rate": decimal_from_atomics(msg.commission.max_change_rate),
        },
        "min_self_delegation": msg.min_self_delegation,
        "delegator_address": msg.delegator_address,
        "validator_address": msg.validator_address,
        "pubkey": _pubkey_to_amino(msg.pubkey),
        "value": coin_to_amino(msg.value),
    }


# MsgEditValidator

def encode_edit_validator(msg: EditValidatorPayload) -> bytes:
    return (ProtoWriter()
            .message_field(1, _encode_description(msg.description))
            .string_field(2, msg.validator_address)
            .string_field(3, msg.commission_rate)
            .string_field(4, msg.min_self_delegation)
            .to_bytes())


def decode_edit_validator(data: bytes) -> EditValidatorPayload:
    f = read_fields(data)
    return EditValidatorPayload(
        description=_decode_description(_required(f, 1, "description")),
        validator_address=first_string(f, 2),
        commission_rate=first_string(f, 3) or None,
        min_self_delegation=first_string(f, 4) or None,
    )


def edit_validator_to_amino(msg: EditValidatorPayload) -> Dict[str, Any]:
    value: Dict[str, Any] = {
        "description": _description_to_amino(msg.description),
        "validator_address": msg.validator_address,
    }
    # Unset fields are left out entirely rather than sent as null
    if msg.commission_rate is not None:
        value["commission_rate"] = decimal_from_atomics(msg.commission_rate)
    if msg.min_self_delegation is not None:
        value["min_self_delegation"] = msg.min_self_delegation
    return value


# MsgDelegate / MsgUndelegate

def encode_delegate(msg: DelegatePayload) -> bytes:
    return (ProtoWriter()
            .string_field(1, msg.delegator_address)
            .string_field(2, msg.validator_address)
            .message_field(3, encode_coin(msg.amount))
            .to_bytes())


def _decode_delegation(data: bytes, model):
    f = read_fields(data)
    return model(
        delegator_address=first_string(f, 1),
        validator_address=first_string(f, 2),
        amount=decode_coin(_required(f, 3, "amount")),
    )


def decode_delegate(data: bytes) -> DelegatePayload:
    return _decode_delegation(data, DelegatePayload)


def decode_undelegate(data: bytes) -> UndelegatePayload:
    return _decode_delegation(data, UndelegatePayload)


def delegate_to_amino(msg: DelegatePayload) -> Dict[str, Any]:
    return {
        "delegator_address": msg.delegator_address,
        "validator_address": msg.validator_address,
        "amount": coin_to_amino(msg.amount),
    }


# MsgBeginRedelegate

def encode_begin_redelegate(msg: BeginRedelegatePayload) -> bytes:
    return (ProtoWriter()
            .string_field(1, msg.delegator_address)
            .string_field(2, msg.validator_src_address)
            .string_field(3, msg.validator_dst_address)
            .message_field(4, encode_coin(msg.amount))
            .to_bytes())


def decode_begin_redelegate(data: bytes) -> BeginRedelegatePayload:
    f = read_fields(data)
    return BeginRedelegatePayload(
        delegator_address=first_string(f, 1),
        validator_src_address=first_string(f, 2),
        validator_dst_address=first_string(f, 3),
        amount=decode_coin(_required(f, 4, "amount")),
    )


def begin_redelegate_to_amino(msg: BeginRedelegatePayload) -> Dict[str, Any]:
    return {
        "delegator_address": msg.delegator_address,
        "validator_src_address": msg.validator_src_address,
        "validator_dst_address": msg.validator_dst_address,
        "amount": coin_to_amino(msg.amount),
    }


# MsgCancelUnbondingDelegation (direct mode only)

def encode_cancel_unbonding_delegation(msg: CancelUnbondingDelegationPayload) -> bytes:
    return (ProtoWriter()
            .string_field(1, msg.delegator_address)
            .string_field(2, msg.validator_address)
            .message_field(3, encode_coin(msg.amount))
            .int64_field(4, msg.creation_height)
            .to_bytes())


def decode_cancel_unbonding_delegation(data: bytes) -> CancelUnbondingDelegationPayload:
    f = read_fields(data)
    return CancelUnbondingDelegationPayload(
        delegator_address=first_string(f, 1),
        validator_address=first_string(f, 2),
        amount=decode_coin(_required(f, 3, "amount")),
        creation_height=first_int64(f, 4),
    )


def register_staking_messages(registry: MessageRegistry) -> None:
    """Register every staking operation kind on the given registry."""
    registry.register(
        MSG_CREATE_VALIDATOR, encode_create_validator, decode_create_validator,
        model=CreateValidatorPayload,
        legacy_name="cosmos-sdk/MsgCreateValidator", legacy_rule=create_validator_to_amino,
    )
    registry.register(
        MSG_EDIT_VALIDATOR, encode_edit_validator, decode_edit_validator,
        model=EditValidatorPayload,
        legacy_name="cosmos-sdk/MsgEditValidator", legacy_rule=edit_validator_to_amino,
    )
    registry.register(
        MSG_DELEGATE, encode_delegate, decode_delegate,
        model=DelegatePayload,
        legacy_name="cosmos-sdk/MsgDelegate", legacy_rule=delegate_to_amino,
    )
    registry.register(
        MSG_UNDELEGATE, encode_delegate, decode_undelegate,
        model=UndelegatePayload,
        legacy_name="cosmos-sdk/MsgUndelegate", legacy_rule=delegate_to_amino,
    )
    registry.register(
        MSG_BEGIN_REDELEGATE, encode_begin_redelegate, decode_begin_redelegate,
        model=BeginRedelegatePayload,
        legacy_name="cosmos-sdk/MsgBeginRedelegate", legacy_rule=begin_redelegate_to_amino,
    )
    registry.register(
        MSG_CANCEL_UNBONDING_DELEGATION, encode_cancel_unbonding_delegation,
        decode_cancel_unbonding_delegation,
        model=CancelUnbondingDelegationPayload,
    )


__all__ = [
    "MSG_CREATE_VALIDATOR",
    "MSG_EDIT_VALIDATOR",
    "MSG_DELEGATE",
    "MSG_UNDELEGATE",
    "MSG_BEGIN_REDELEGATE",
    "MSG_CANCEL_UNBONDING_DELEGATION",
    "decimal_from_atomics",
    "encode_coin",
    "decode_coin",
    "coin_to_amino",
    "register_staking_messages",
]
