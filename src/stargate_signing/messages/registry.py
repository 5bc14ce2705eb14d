"""
Message registry.

Maps an operation type id (the protobuf type URL) to the rules that encode
and decode its payload, and separately to its legacy Amino JSON name and
JSON rule. The two tables are keyed by the same type id; an operation kind
may appear only in the direct table.

Registration is configuration: do it once at start-up, before signing.
Re-registering a type id replaces the whole entry (last write wins).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type
import logging

from pydantic import BaseModel, ValidationError

from ..codec.writer import ProtoWriter
from ..runtime.errors import (
    DecodeError,
    MalformedPayloadError,
    UnknownTypeIdError,
    UnsupportedLegacyEncodingError,
)

logger = logging.getLogger(__name__)

EncodeRule = Callable[[Any], bytes]
DecodeRule = Callable[[bytes], Any]
LegacyRule = Callable[[Any], Dict[str, Any]]


@dataclass(frozen=True)
class MessageRule:
    """Direct-mode rule for one operation kind."""
    type_id: str
    encode: EncodeRule
    decode: DecodeRule
    model: Optional[Type[BaseModel]] = None


@dataclass(frozen=True)
class LegacyMessageRule:
    """Legacy Amino JSON rule for one operation kind."""
    type_id: str
    name: str
    to_json: LegacyRule


class MessageRegistry:
    """
    Registry of supported operation kinds.

    Builders receive a registry explicitly; there is no module-level
    registry so document building never depends on hidden global state.
    """

    def __init__(self):
        self._rules: Dict[str, MessageRule] = {}
        self._legacy: Dict[str, LegacyMessageRule] = {}

    def register(
        self,
        type_id: str,
        encode_rule: EncodeRule,
        decode_rule: DecodeRule,
        *,
        model: Optional[Type[BaseModel]] = None,
        legacy_name: Optional[str] = None,
        legacy_rule: Optional[LegacyRule] = None,
    ) -> None:
        """
        Register (or replace) an operation kind.

        Args:
            type_id: Fully qualified type URL, e.g. "/cosmos.staking.v1beta1.MsgCreateValidator"
            encode_rule: Payload -> protobuf bytes, injective over well-formed payloads
            decode_rule: Protobuf bytes -> payload
            model: Pydantic model used to validate payload structure before encoding
            legacy_name: Amino type name, e.g. "cosmos-sdk/MsgCreateValidator"
            legacy_rule: Payload -> Amino JSON value

        Raises:
            ValueError: If only one of legacy_name / legacy_rule is given
        """
        if not type_id:
            raise ValueError("type_id must not be empty")
        if (legacy_name is None) != (legacy_rule is None):
            raise ValueError("legacy_name and legacy_rule must be given together")

        if type_id in self._rules:
            logger.debug(f"Replacing registration for {type_id}")

        self._rules[type_id] = MessageRule(type_id, encode_rule, decode_rule, model)
        if legacy_name is not None:
            self._legacy[type_id] = LegacyMessageRule(type_id, legacy_name, legacy_rule)
        else:
            self._legacy.pop(type_id, None)

        logger.debug(f"Registered {type_id} (legacy: {legacy_name or 'none'})")

    def is_registered(self, type_id: str) -> bool:
        return type_id in self._rules

    def supports_legacy(self, type_id: str) -> bool:
        return type_id in self._legacy

    def type_ids(self) -> List[str]:
        """Registered type ids in registration order."""
        return list(self._rules.keys())

    def _rule(self, type_id: str) -> MessageRule:
        rule = self._rules.get(type_id)
        if rule is None:
            raise UnknownTypeIdError(type_id)
        return rule

    def validate(self, type_id: str, payload: Any) -> Any:
        """
        Check payload structure and return the normalized payload.

        Mappings are parsed into the registered model; model instances of
        the right type pass through unchanged.

        Raises:
            UnknownTypeIdError: If type_id is not registered
            MalformedPayloadError: If the payload is structurally invalid
        """
        rule = self._rule(type_id)
        if rule.model is None or isinstance(payload, rule.model):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(by_alias=True)
        try:
            return rule.model.model_validate(payload)
        except ValidationError as e:
            raise MalformedPayloadError(type_id, str(e), cause=e)

    def encode(self, type_id: str, payload: Any) -> bytes:
        """
        Encode a payload to its protobuf bytes.

        Raises:
            UnknownTypeIdError: If type_id is not registered
            MalformedPayloadError: If the payload is structurally invalid
        """
        rule = self._rule(type_id)
        return rule.encode(self.validate(type_id, payload))

    def decode(self, type_id: str, data: bytes) -> Any:
        """
        Decode protobuf bytes to a payload.

        Raises:
            UnknownTypeIdError: If type_id is not registered
            DecodeError: If the bytes do not form a valid payload
        """
        rule = self._rule(type_id)
        try:
            return rule.decode(data)
        except ValidationError as e:
            raise DecodeError(f"Decoded {type_id} payload is malformed: {e}", cause=e)

    def encode_any(self, type_id: str, payload: Any) -> bytes:
        """Encode a payload wrapped in google.protobuf.Any."""
        value = self.encode(type_id, payload)
        return ProtoWriter().string_field(1, type_id).bytes_field(2, value).to_bytes()

    def legacy_type_name(self, type_id: str) -> str:
        """
        Amino type name for an operation kind.

        Raises:
            UnknownTypeIdError: If type_id is not registered at all
            UnsupportedLegacyEncodingError: If it has no legacy mapping
        """
        self._rule(type_id)
        legacy = self._legacy.get(type_id)
        if legacy is None:
            raise UnsupportedLegacyEncodingError(type_id)
        return legacy.name

    def to_legacy_json(self, type_id: str, payload: Any) -> Dict[str, Any]:
        """
        Amino JSON form of an operation: {"type": legacy name, "value": {...}}.

        Raises:
            UnknownTypeIdError: If type_id is not registered
            UnsupportedLegacyEncodingError: If it has no legacy mapping
            MalformedPayloadError: If the payload is structurally invalid
        """
        name = self.legacy_type_name(type_id)
        value = self._legacy[type_id].to_json(self.validate(type_id, payload))
        return {"type": name, "value": value}


def create_default_registry() -> MessageRegistry:
    """Registry with the staking module's operation kinds registered."""
    from .staking import register_staking_messages

    registry = MessageRegistry()
    register_staking_messages(registry)
    return registry


__all__ = [
    "MessageRule",
    "LegacyMessageRule",
    "MessageRegistry",
    "create_default_registry",
]
