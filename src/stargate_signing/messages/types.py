"""
Payload types for the registered operation kinds.

Models accept both the camelCase keys used by JavaScript-style encode objects
and snake_case field names. Validation is structural only: required fields
present, integers carried as base-10 digit strings, key material of the right
length. Chain-side rules (rate ceilings, cooldowns) are never checked here.
"""

from __future__ import annotations
import base64
import binascii
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

PUBKEY_SECP256K1 = "/cosmos.crypto.secp256k1.PubKey"
PUBKEY_ED25519 = "/cosmos.crypto.ed25519.PubKey"

PUBKEY_SIZES = {
    PUBKEY_SECP256K1: 33,
    PUBKEY_ED25519: 32,
}

DENOM_PATTERN = r"^[a-zA-Z][a-zA-Z0-9/:._-]{2,127}$"

_DIGITS = re.compile(r"[0-9]+")


def parse_uint_string(v: Any) -> str:
    """
    Normalize an unsigned integer given as int or digit string.

    Floats are rejected so that amounts never pass through binary floating
    point. Leading zeros are stripped, so every value has one canonical
    string and one Amino rendering.
    """
    if isinstance(v, bool) or isinstance(v, float):
        raise ValueError(f"expected integer or digit string, got {type(v).__name__}")
    if isinstance(v, int):
        if v < 0:
            raise ValueError("value must not be negative")
        return str(v)
    if isinstance(v, str) and _DIGITS.fullmatch(v):
        return str(int(v))
    raise ValueError(f"expected unsigned base-10 integer string, got {v!r}")


def _empty_to_none(v: Any) -> Any:
    if v is None or v == "":
        return None
    return parse_uint_string(v)


class PayloadModel(BaseModel):
    """Base for immutable, strictly-shaped payload models."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")


class Coin(PayloadModel):
    """Denominated integer amount."""

    denom: str = Field(pattern=DENOM_PATTERN)
    amount: str

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> str:
        return parse_uint_string(v)


class Description(PayloadModel):
    """Validator description. All fields are free text."""

    moniker: str = ""
    identity: str = ""
    website: str = ""
    security_contact: str = Field(default="", alias="securityContact")
    details: str = ""


class CommissionRates(PayloadModel):
    """Commission rates as 18-decimal fixed-point atomics ("100000000000000000" is 0.1)."""

    rate: str
    max_rate: str = Field(alias="maxRate")
    max_change_rate: str = Field(alias="maxChangeRate")

    @field_validator("rate", "max_rate", "max_change_rate", mode="before")
    @classmethod
    def _atomics(cls, v: Any) -> str:
        return parse_uint_string(v)


class ConsensusPubKey(PayloadModel):
    """Validator consensus key, wrapped in an Any on the wire."""

    type_url: str = Field(alias="typeUrl")
    key: bytes

    @field_validator("key", mode="before")
    @classmethod
    def _key(cls, v: Any) -> Any:
        # JSON callers send base64
        if isinstance(v, str):
            try:
                return base64.b64decode(v, validate=True)
            except binascii.Error as e:
                raise ValueError(f"key is not valid base64: {e}")
        return v

    @field_validator("type_url")
    @classmethod
    def _type_url(cls, v: str) -> str:
        if v not in PUBKEY_SIZES:
            raise ValueError(f"unsupported public key type {v}")
        return v

    @model_validator(mode="after")
    def _key_size(self) -> "ConsensusPubKey":
        expected = PUBKEY_SIZES[self.type_url]
        if len(self.key) != expected:
            raise ValueError(f"{self.type_url} key must be {expected} bytes, got {len(self.key)}")
        return self


class CreateValidatorPayload(PayloadModel):
    description: Description
    commission: CommissionRates
    min_self_delegation: str = Field(alias="minSelfDelegation")
    delegator_address: str = Field(alias="delegatorAddress", min_length=1)
    validator_address: str = Field(alias="validatorAddress", min_length=1)
    pubkey: ConsensusPubKey
    value: Coin

    @field_validator("min_self_delegation", mode="before")
    @classmethod
    def _min_self_delegation(cls, v: Any) -> str:
        return parse_uint_string(v)


class EditValidatorPayload(PayloadModel):
    """
    Validator edit.

    Unset optional fields mean "leave unchanged"; an empty string is treated
    the same as unset so each payload has a single wire form.
    """

    description: Description
    validator_address: str = Field(alias="validatorAddress", min_length=1)
    commission_rate: Optional[str] = Field(default=None, alias="commissionRate")
    min_self_delegation: Optional[str] = Field(default=None, alias="minSelfDelegation")

    @field_validator("commission_rate", "min_self_delegation", mode="before")
    @classmethod
    def _optional_uint(cls, v: Any) -> Optional[str]:
        return _empty_to_none(v)


class DelegatePayload(PayloadModel):
    delegator_address: str = Field(alias="delegatorAddress", min_length=1)
    validator_address: str = Field(alias="validatorAddress", min_length=1)
    amount: Coin


class UndelegatePayload(DelegatePayload):
    pass


class BeginRedelegatePayload(PayloadModel):
    delegator_address: str = Field(alias="delegatorAddress", min_length=1)
    validator_src_address: str = Field(alias="validatorSrcAddress", min_length=1)
    validator_dst_address: str = Field(alias="validatorDstAddress", min_length=1)
    amount: Coin


class CancelUnbondingDelegationPayload(PayloadModel):
    delegator_address: str = Field(alias="delegatorAddress", min_length=1)
    validator_address: str = Field(alias="validatorAddress", min_length=1)
    amount: Coin
    creation_height: int = Field(alias="creationHeight", ge=0)


__all__ = [
    "PUBKEY_SECP256K1",
    "PUBKEY_ED25519",
    "PUBKEY_SIZES",
    "parse_uint_string",
    "PayloadModel",
    "Coin",
    "Description",
    "CommissionRates",
    "ConsensusPubKey",
    "CreateValidatorPayload",
    "EditValidatorPayload",
    "DelegatePayload",
    "UndelegatePayload",
    "BeginRedelegatePayload",
    "CancelUnbondingDelegationPayload",
]
