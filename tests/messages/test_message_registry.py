"""
Message registry tests.

Covers lookup errors, structural validation, last-write-wins registration
and the separate legacy table.
"""

import pytest

from stargate_signing.messages import (
    MSG_CANCEL_UNBONDING_DELEGATION,
    MSG_CREATE_VALIDATOR,
    MSG_DELEGATE,
    MSG_EDIT_VALIDATOR,
    CreateValidatorPayload,
    MessageRegistry,
    create_default_registry,
)
from stargate_signing.codec import read_fields
from stargate_signing.runtime.errors import (
    MalformedPayloadError,
    UnknownTypeIdError,
    UnsupportedLegacyEncodingError,
)

from helpers import mk_create_validator_payload, mk_edit_validator_payload


def _encode_text(payload):
    return payload["text"].encode("utf-8")


def _decode_text(data):
    return {"text": data.decode("utf-8")}


@pytest.mark.unit
class TestRegistryLookup:
    """Test registry lookups and errors."""

    def test_default_registry_contents(self, registry):
        assert registry.type_ids() == [
            "/cosmos.staking.v1beta1.MsgCreateValidator",
            "/cosmos.staking.v1beta1.MsgEditValidator",
            "/cosmos.staking.v1beta1.MsgDelegate",
            "/cosmos.staking.v1beta1.MsgUndelegate",
            "/cosmos.staking.v1beta1.MsgBeginRedelegate",
            "/cosmos.staking.v1beta1.MsgCancelUnbondingDelegation",
        ]

    def test_unknown_type_id(self, registry):
        with pytest.raises(UnknownTypeIdError) as exc_info:
            registry.encode("/cosmos.bank.v1beta1.MsgSend", {})
        assert exc_info.value.type_id == "/cosmos.bank.v1beta1.MsgSend"

    def test_legacy_names(self, registry):
        assert registry.legacy_type_name(MSG_CREATE_VALIDATOR) == "cosmos-sdk/MsgCreateValidator"
        assert registry.legacy_type_name(MSG_EDIT_VALIDATOR) == "cosmos-sdk/MsgEditValidator"

    def test_direct_only_kind_has_no_legacy_name(self, registry):
        assert registry.is_registered(MSG_CANCEL_UNBONDING_DELEGATION)
        assert not registry.supports_legacy(MSG_CANCEL_UNBONDING_DELEGATION)
        with pytest.raises(UnsupportedLegacyEncodingError):
            registry.legacy_type_name(MSG_CANCEL_UNBONDING_DELEGATION)

    def test_legacy_lookup_of_unknown_id(self, registry):
        with pytest.raises(UnknownTypeIdError):
            registry.to_legacy_json("/unknown.Msg", {})

    def test_registries_are_independent(self):
        first = create_default_registry()
        second = MessageRegistry()
        assert first.is_registered(MSG_DELEGATE)
        assert not second.is_registered(MSG_DELEGATE)


@pytest.mark.unit
class TestPayloadValidation:
    """Test structural payload validation."""

    def test_missing_required_field(self, registry):
        payload = mk_create_validator_payload()
        del payload["validatorAddress"]
        with pytest.raises(MalformedPayloadError) as exc_info:
            registry.encode(MSG_CREATE_VALIDATOR, payload)
        assert exc_info.value.type_id == MSG_CREATE_VALIDATOR

    def test_non_digit_amount(self, registry):
        payload = mk_create_validator_payload()
        payload["value"] = {"amount": "1.5", "denom": "ustake"}
        with pytest.raises(MalformedPayloadError):
            registry.encode(MSG_CREATE_VALIDATOR, payload)

    def test_wrong_consensus_key_size(self, registry):
        payload = mk_create_validator_payload(consensus_key=b"\x01" * 31)
        with pytest.raises(MalformedPayloadError):
            registry.encode(MSG_CREATE_VALIDATOR, payload)

    def test_chain_rules_not_checked(self, registry):
        # rate above max_rate is the chain's business, not the encoder's
        payload = mk_create_validator_payload()
        payload["commission"]["rate"] = "900000000000000000"
        assert registry.encode(MSG_CREATE_VALIDATOR, payload)

    def test_model_instance_accepted(self, registry):
        payload = mk_create_validator_payload()
        model = CreateValidatorPayload.model_validate(payload)
        assert registry.encode(MSG_CREATE_VALIDATOR, model) == registry.encode(MSG_CREATE_VALIDATOR, payload)

    def test_camel_and_snake_case_equivalent(self, registry):
        camel = mk_edit_validator_payload()
        snake = {
            "description": {
                "moniker": "new name",
                "identity": "ZZZZ",
                "website": "http://example.com/new-site",
                "details": "Still no idea",
                "security_contact": "DM on Discord",
            },
            "min_self_delegation": "1",
            "validator_address": camel["validatorAddress"],
            "commission_rate": "100000000000000000",
        }
        assert registry.encode(MSG_EDIT_VALIDATOR, camel) == registry.encode(MSG_EDIT_VALIDATOR, snake)


@pytest.mark.unit
class TestRegistration:
    """Test registration semantics."""

    def test_last_write_wins(self):
        registry = MessageRegistry()
        registry.register("/test.Msg", _encode_text, _decode_text)
        registry.register("/test.Msg", lambda p: b"v2:" + _encode_text(p), _decode_text)
        assert registry.encode("/test.Msg", {"text": "x"}) == b"v2:x"

    def test_reregistration_drops_legacy_mapping(self):
        registry = MessageRegistry()
        registry.register("/test.Msg", _encode_text, _decode_text,
                          legacy_name="test/Msg", legacy_rule=lambda p: dict(p))
        assert registry.to_legacy_json("/test.Msg", {"text": "x"}) == {"type": "test/Msg", "value": {"text": "x"}}

        registry.register("/test.Msg", _encode_text, _decode_text)
        with pytest.raises(UnsupportedLegacyEncodingError):
            registry.to_legacy_json("/test.Msg", {"text": "x"})

    def test_legacy_name_requires_rule(self):
        with pytest.raises(ValueError):
            MessageRegistry().register("/test.Msg", _encode_text, _decode_text, legacy_name="test/Msg")

    def test_encode_any_wraps_type_url(self):
        registry = MessageRegistry()
        registry.register("/test.Msg", _encode_text, _decode_text)
        fields = read_fields(registry.encode_any("/test.Msg", {"text": "hi"}))
        assert fields[1] == [b"/test.Msg"]
        assert fields[2] == [b"hi"]


@pytest.mark.unit
class TestInjectivity:
    """Distinct payloads encode to distinct bytes."""

    def test_distinct_monikers(self, registry):
        a = registry.encode(MSG_CREATE_VALIDATOR, mk_create_validator_payload(moniker="a"))
        b = registry.encode(MSG_CREATE_VALIDATOR, mk_create_validator_payload(moniker="b"))
        assert a != b

    def test_unset_and_empty_commission_rate_share_one_form(self, registry):
        unset = mk_edit_validator_payload(commission_rate=None)
        empty = mk_edit_validator_payload(commission_rate="")
        assert registry.encode(MSG_EDIT_VALIDATOR, unset) == registry.encode(MSG_EDIT_VALIDATOR, empty)

    def test_set_commission_rate_differs_from_unset(self, registry):
        unset = registry.encode(MSG_EDIT_VALIDATOR, mk_edit_validator_payload(commission_rate=None))
        zero = registry.encode(MSG_EDIT_VALIDATOR, mk_edit_validator_payload(commission_rate="0"))
        assert unset != zero
