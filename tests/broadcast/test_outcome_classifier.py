"""
Broadcast outcome classification tests.

Every input lands in exactly one of Success, Failure or SubmissionError.
"""

import asyncio

import pytest
import requests
from pydantic import ValidationError

from stargate_signing.broadcast import (
    BroadcastAssertionError,
    ChainResponse,
    Failure,
    SubmissionError,
    Success,
    assert_is_failure,
    assert_is_success,
    classify,
    is_retryable,
)
from stargate_signing.runtime.errors import (
    BroadcastRejectedError,
    BroadcastTimeoutError,
    TransportError,
    UnknownTypeIdError,
)

TX_HASH = "A" * 64


@pytest.mark.unit
class TestClassify:
    """Test the three-way classification."""

    def test_success(self):
        outcome = classify({
            "code": 0, "height": "120", "txhash": TX_HASH, "gasUsed": "151000",
            "events": [{"type": "message", "attributes": [{"key": "action", "value": "create_validator"}]}],
        })
        assert isinstance(outcome, Success)
        assert outcome.height == 120
        assert outcome.transaction_hash == TX_HASH
        assert outcome.gas_used == 151000
        assert outcome.events[0].type == "message"
        assert outcome.events[0].attributes[0].value == "create_validator"

    def test_failure_keeps_log_verbatim(self):
        log = "failed to execute message; message index: 0: commission cannot be changed more than once in 24h"
        outcome = classify({"code": 12, "log": log, "transactionHash": TX_HASH})
        assert outcome == Failure(code=12, log=log, transaction_hash=TX_HASH)

    def test_failure_hash_from_caller(self):
        outcome = classify(ChainResponse(code=5, log="insufficient funds"), transaction_hash=TX_HASH)
        assert outcome.transaction_hash == TX_HASH

    def test_failure_without_hash(self):
        outcome = classify({"code": 5, "log": "insufficient funds"})
        assert isinstance(outcome, Failure)
        assert outcome.transaction_hash is None

    @pytest.mark.parametrize("error", [
        asyncio.TimeoutError(),
        TimeoutError(),
        requests.Timeout("read timed out"),
        BroadcastTimeoutError(),
    ])
    def test_timeouts(self, error):
        assert classify(error) == SubmissionError(reason="timeout")

    def test_connection_failure(self):
        outcome = classify(requests.ConnectionError("refused"))
        assert isinstance(outcome, SubmissionError)
        assert outcome.reason.startswith("connection failed")

    def test_check_tx_rejection(self):
        outcome = classify(BroadcastRejectedError("CheckTx failed", rejection_code=32,
                                                  log="account sequence mismatch"))
        assert isinstance(outcome, SubmissionError)
        assert "account sequence mismatch" in outcome.reason

    def test_malformed_response(self):
        outcome = classify({"code": "not a number"})
        assert isinstance(outcome, SubmissionError)
        assert outcome.reason.startswith("malformed response")

    @pytest.mark.parametrize("response", [
        {},
        {"height": "10", "txhash": TX_HASH},
    ])
    def test_response_without_code(self, response):
        outcome = classify(response, transaction_hash=TX_HASH)
        assert isinstance(outcome, SubmissionError)
        assert outcome.reason.startswith("malformed response")

    def test_rpc_error_envelope(self):
        outcome = classify({"jsonrpc": "2.0", "id": 1, "error": {"code": -32603, "message": "Internal error"}})
        assert isinstance(outcome, SubmissionError)
        assert "Internal error" in outcome.reason

    def test_chain_response_requires_code(self):
        with pytest.raises(ValidationError):
            ChainResponse.model_validate({"hash": TX_HASH})

    def test_non_mapping_response(self):
        assert isinstance(classify(["code", 0]), SubmissionError)

    def test_idempotent(self):
        response = {"code": 3, "log": "out of gas", "hash": TX_HASH}
        assert classify(response) == classify(response)
        assert classify(classify(response)) == classify(response)

    def test_failure_requires_nonzero_code(self):
        with pytest.raises(ValueError):
            Failure(code=0, log="")


@pytest.mark.unit
class TestRetryable:
    """Only submission errors and transport errors are retryable."""

    def test_outcomes(self):
        assert is_retryable(SubmissionError("timeout"))
        assert not is_retryable(Failure(code=1, log="x"))
        assert not is_retryable(Success(height=1, transaction_hash=TX_HASH, gas_used=1))

    def test_errors(self):
        assert is_retryable(TransportError("down"))
        assert is_retryable(requests.ConnectionError())
        assert not is_retryable(UnknownTypeIdError("/x"))
        assert not is_retryable(ValueError("bad"))


@pytest.mark.unit
class TestAssertions:
    """Test outcome assertion helpers."""

    def test_assert_is_success(self):
        success = Success(height=1, transaction_hash=TX_HASH, gas_used=10)
        assert assert_is_success(success) is success

    def test_assert_is_success_on_failure(self):
        failure = Failure(code=12, log="commission cannot be changed more than once in 24h")
        with pytest.raises(BroadcastAssertionError) as exc_info:
            assert_is_success(failure)
        assert exc_info.value.outcome is failure
        assert "24h" in str(exc_info.value)

    def test_assert_is_failure(self):
        with pytest.raises(BroadcastAssertionError):
            assert_is_failure(SubmissionError("timeout"))
