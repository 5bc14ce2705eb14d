"""
Chain response record returned by transports.
"""

from __future__ import annotations
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ResponseAttribute(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: str = ""
    value: str = ""

    @field_validator("key", "value", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return "" if v is None else str(v)


class ResponseEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    attributes: List[ResponseAttribute] = Field(default_factory=list)


class ChainResponse(BaseModel):
    """
    Result of submitting a transaction.

    Accepts camelCase or snake_case keys, and numeric strings as Tendermint
    RPC returns them. The result code is required: a record without one was
    not reported by the chain.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    code: int
    log: str = ""
    height: int = 0
    transaction_hash: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("transaction_hash", "transactionHash", "txhash", "hash")
    )
    gas_used: int = Field(default=0, validation_alias=AliasChoices("gas_used", "gasUsed"))
    gas_wanted: int = Field(default=0, validation_alias=AliasChoices("gas_wanted", "gasWanted"))
    codespace: str = ""
    events: List[ResponseEvent] = Field(default_factory=list)

    @field_validator("log", "codespace", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        return "" if v is None else v


__all__ = [
    "ResponseAttribute",
    "ResponseEvent",
    "ChainResponse",
]
