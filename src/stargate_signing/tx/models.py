"""
Transaction data model.

Fee and SignerInfo are pydantic models so callers can pass JSON-shaped
input; documents, signatures and signed transactions are frozen dataclasses
produced by the engine itself.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple
import json

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from ..enums import SignMode
from ..codec.hashes import transaction_hash
from ..codec.writer import ProtoWriter
from ..messages.types import PUBKEY_SECP256K1, PUBKEY_SIZES, Coin, parse_uint_string
from ..runtime.errors import MalformedPayloadError


class Fee(BaseModel):
    """
    Transaction fee.

    Invariants: denoms are unique, gas_limit is positive.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    amount: Tuple[Coin, ...] = ()
    gas_limit: int = Field(validation_alias=AliasChoices("gas_limit", "gasLimit", "gas"), gt=0)
    payer: Optional[str] = None
    granter: Optional[str] = None

    @field_validator("gas_limit", mode="before")
    @classmethod
    def _gas(cls, v: Any) -> int:
        return int(parse_uint_string(v))

    @field_validator("payer", "granter", mode="before")
    @classmethod
    def _optional_address(cls, v: Any) -> Optional[str]:
        return v or None

    @model_validator(mode="after")
    def _unique_denoms(self) -> "Fee":
        denoms = [coin.denom for coin in self.amount]
        if len(denoms) != len(set(denoms)):
            raise ValueError(f"fee amount has duplicate denoms: {denoms}")
        return self


class SignerInfo(BaseModel):
    """
    Public key, anti-replay sequence and sign mode of one signer.

    The sequence is supplied by the caller and never changed by the engine.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    public_key: bytes = Field(alias="publicKey")
    sequence: int = Field(ge=0)
    sign_mode: SignMode = Field(alias="signMode")
    pubkey_type_url: str = Field(default=PUBKEY_SECP256K1, alias="pubkeyTypeUrl")

    @model_validator(mode="after")
    def _key_size(self) -> "SignerInfo":
        expected = PUBKEY_SIZES.get(self.pubkey_type_url)
        if expected is None:
            raise ValueError(f"unsupported public key type {self.pubkey_type_url}")
        if len(self.public_key) != expected:
            raise ValueError(f"{self.pubkey_type_url} key must be {expected} bytes, got {len(self.public_key)}")
        return self


@dataclass(frozen=True)
class TypedOperation:
    """One operation: a registered type id and its payload."""
    type_id: str
    payload: Any

    @classmethod
    def from_encode_object(cls, obj: Mapping[str, Any]) -> TypedOperation:
        """Build from the {"typeUrl": ..., "value": ...} encode-object shape."""
        if not isinstance(obj, Mapping):
            raise MalformedPayloadError("operation", f"expected an encode object, got {type(obj).__name__}")
        missing = [k for k in ("typeUrl", "value") if k not in obj]
        if missing:
            type_id = obj.get("typeUrl")
            raise MalformedPayloadError(type_id if isinstance(type_id, str) else "operation",
                                        f"encode object is missing {', '.join(missing)}")
        return cls(type_id=obj["typeUrl"], payload=obj["value"])


@dataclass(frozen=True)
class DirectDoc:
    """
    Direct-mode signing document.

    body_bytes and auth_info_bytes are the exact bytes later placed in the
    broadcast TxRaw; sign_bytes is the encoded SignDoc.
    """
    body_bytes: bytes
    auth_info_bytes: bytes
    chain_id: str
    account_number: int
    signer_infos: Tuple[SignerInfo, ...]
    sign_bytes: bytes
    mode: SignMode = field(default=SignMode.DIRECT, init=False)


@dataclass(frozen=True)
class LegacyJsonDoc:
    """Legacy Amino JSON signing document for the signer at signer_index."""
    signer_infos: Tuple[SignerInfo, ...]
    signer_index: int
    sign_bytes: bytes
    mode: SignMode = field(default=SignMode.LEGACY_JSON, init=False)

    @property
    def document(self) -> Dict[str, Any]:
        """Parsed StdSignDoc."""
        return json.loads(self.sign_bytes.decode("utf-8"))


@dataclass(frozen=True)
class Signature:
    """Signature over one signing document."""
    signer_public_key: bytes
    signature_bytes: bytes
    mode: SignMode


@dataclass(frozen=True)
class SignedTransaction:
    """
    Assembled, immutable transaction.

    Signatures are stored in signer order, which is the order the chain
    verifies them in.
    """
    operations: Tuple[TypedOperation, ...]
    fee: Fee
    signatures: Tuple[Signature, ...]
    memo: str
    signer_infos: Tuple[SignerInfo, ...]
    body_bytes: bytes
    auth_info_bytes: bytes
    timeout_height: int = 0

    def encode(self) -> bytes:
        """Protobuf TxRaw bytes, the blob handed to the transport."""
        return (ProtoWriter()
                .bytes_field(1, self.body_bytes)
                .bytes_field(2, self.auth_info_bytes)
                .repeated_bytes_field(3, [s.signature_bytes for s in self.signatures])
                .to_bytes())

    @property
    def hash(self) -> str:
        """Upper-case hex transaction hash."""
        return transaction_hash(self.encode())


__all__ = [
    "SignMode",
    "Coin",
    "Fee",
    "SignerInfo",
    "TypedOperation",
    "DirectDoc",
    "LegacyJsonDoc",
    "Signature",
    "SignedTransaction",
]
