"""
Signer capability and failure tests.

A signer never touches its key for a mode it does not support, and a key
failure surfaces as SigningFailureError without a partial signature.
"""

import dataclasses
import threading

import pytest

from stargate_signing.runtime.errors import SigningFailureError, UnsupportedModeError
from stargate_signing.signers import (
    DirectCapableSigner,
    DualModeSigner,
    LegacyOnlySigner,
    verify_signature,
)
from stargate_signing.tx import SignMode

from helpers import (
    ACCOUNT_NUMBER,
    CHAIN_ID,
    FailingKey,
    mk_ed25519_key,
    mk_secp256k1_key,
)


@pytest.fixture
def documents(assembler, create_validator_op, fee, dual_signer):
    """Direct and legacy documents for the dual signer."""
    direct = assembler.build_document(SignMode.DIRECT, [create_validator_op], fee,
                                      [dual_signer.signer_info(0, SignMode.DIRECT)], CHAIN_ID, ACCOUNT_NUMBER)
    legacy = assembler.build_document(SignMode.LEGACY_JSON, [create_validator_op], fee,
                                      [dual_signer.signer_info(0, SignMode.LEGACY_JSON)], CHAIN_ID, ACCOUNT_NUMBER)
    return direct, legacy


@pytest.mark.unit
class TestModeGating:
    """Test that signers only sign documents of supported modes."""

    def test_supported_modes(self, direct_signer, legacy_signer, dual_signer):
        assert direct_signer.supported_modes() == frozenset({SignMode.DIRECT})
        assert legacy_signer.supported_modes() == frozenset({SignMode.LEGACY_JSON})
        assert dual_signer.supported_modes() == frozenset({SignMode.DIRECT, SignMode.LEGACY_JSON})

    def test_direct_signer_rejects_legacy_document(self, documents):
        key = FailingKey(mk_secp256k1_key("gate"))
        signer = DirectCapableSigner(key)
        with pytest.raises(UnsupportedModeError):
            signer.sign(documents[1])
        assert key.sign_calls == 0

    def test_legacy_signer_rejects_direct_document(self, documents):
        key = FailingKey(mk_secp256k1_key("gate"))
        signer = LegacyOnlySigner(key)
        with pytest.raises(UnsupportedModeError):
            signer.sign(documents[0])
        assert key.sign_calls == 0

    def test_signer_info_for_unsupported_mode(self, legacy_signer):
        with pytest.raises(UnsupportedModeError):
            legacy_signer.signer_info(0, SignMode.DIRECT)

    def test_dual_signer_signs_both(self, dual_signer, documents):
        for doc in documents:
            signature = dual_signer.sign(doc)
            assert signature.mode == doc.mode
            assert signature.signer_public_key == dual_signer.public_key
            assert verify_signature(doc, signature)


@pytest.mark.unit
class TestSigningFailure:
    """Test key failures."""

    def test_key_error_wrapped(self, documents):
        key = FailingKey(mk_secp256k1_key("broken"), "device disconnected")
        signer = DualModeSigner(key)
        with pytest.raises(SigningFailureError) as exc_info:
            signer.sign(documents[0])
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert "device disconnected" in str(exc_info.value)

    def test_lock_released_after_failure(self, documents):
        signer = DualModeSigner(FailingKey(mk_secp256k1_key("broken")))
        for _ in range(2):
            with pytest.raises(SigningFailureError):
                signer.sign(documents[0])


@pytest.mark.unit
class TestKeys:
    """Test key types behind the signers."""

    def test_secp256k1_signature_shape(self, documents):
        signer = DirectCapableSigner(mk_secp256k1_key("shape"))
        signature = signer.sign(documents[0])
        assert len(signer.public_key) == 33
        assert len(signature.signature_bytes) == 64
        assert signer.pubkey_type_url == "/cosmos.crypto.secp256k1.PubKey"

    def test_ed25519_signer(self, assembler, create_validator_op, fee):
        signer = DualModeSigner(mk_ed25519_key("ed"))
        info = signer.signer_info(0, SignMode.LEGACY_JSON)
        doc = assembler.build_document(SignMode.LEGACY_JSON, [create_validator_op], fee, [info],
                                       CHAIN_ID, ACCOUNT_NUMBER)
        signature = signer.sign(doc)
        assert len(signer.public_key) == 32
        assert len(signature.signature_bytes) == 64
        assert verify_signature(doc, signature)

    def test_tampered_document_fails_verification(self, dual_signer, documents):
        signature = dual_signer.sign(documents[1])
        tampered = dataclasses.replace(documents[1], sign_bytes=documents[1].sign_bytes.replace(b'"1"', b'"2"'))
        assert not verify_signature(tampered, signature)

    def test_unknown_signer_fails_verification(self, documents, dual_signer):
        other = DualModeSigner(mk_secp256k1_key("other"))
        assert not verify_signature(documents[0], other.sign(documents[0]))


@pytest.mark.unit
def test_concurrent_signing_on_one_instance(dual_signer, documents):
    """One signer used from several threads yields valid signatures."""
    results = []
    errors = []

    def worker():
        try:
            results.append(dual_signer.sign(documents[0]))
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert not errors
    assert len(results) == 8
    assert all(verify_signature(documents[0], s) for s in results)
