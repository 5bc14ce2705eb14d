"""
Tendermint RPC transport tests with a mocked requests session.
"""

import base64
from unittest.mock import Mock

import pytest
import requests

from stargate_signing.broadcast import ChainResponse, SubmissionError, classify
from stargate_signing.config import TransportConfig
from stargate_signing.runtime.errors import BroadcastRejectedError, BroadcastTimeoutError, TransportError
from stargate_signing.transport import TendermintRpcTransport

TX_BYTES = b"\x0a\x02hi"
TX_HASH = "B" * 64


def _session(body=None, side_effect=None, status=200):
    response = Mock()
    response.json.return_value = body
    if status >= 400:
        response.status_code = status
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Server Error", response=response)
    else:
        response.raise_for_status.return_value = None
    session = Mock(spec=requests.Session)
    if side_effect is not None:
        session.post.side_effect = side_effect
    else:
        session.post.return_value = response
    return session


def _commit_result(check_code=0, deliver=None, key="tx_result"):
    result = {
        "check_tx": {"code": check_code, "log": "account sequence mismatch" if check_code else ""},
        "hash": TX_HASH,
        "height": "57",
    }
    result[key] = deliver or {"code": 0, "log": "", "gas_used": "1000", "gas_wanted": "2000", "events": []}
    return {"jsonrpc": "2.0", "id": 1, "result": result}


@pytest.mark.unit
class TestTendermintRpcTransport:
    """Test broadcast_tx_commit handling."""

    def test_request_shape(self):
        session = _session(_commit_result())
        transport = TendermintRpcTransport(TransportConfig(endpoint="http://node:26657",
                                                           request_timeout=3.0, broadcast_timeout=9.0),
                                           session=session)
        transport.broadcast_tx_commit(TX_BYTES)

        args, kwargs = session.post.call_args
        assert args[0] == "http://node:26657"
        assert kwargs["json"]["method"] == "broadcast_tx_commit"
        assert kwargs["json"]["params"] == {"tx": base64.b64encode(TX_BYTES).decode("ascii")}
        assert kwargs["timeout"] == (3.0, 9.0)

    def test_success_response(self):
        transport = TendermintRpcTransport(session=_session(_commit_result()))
        response = transport.broadcast_tx_commit(TX_BYTES)
        assert isinstance(response, ChainResponse)
        assert response.code == 0
        assert response.height == 57
        assert response.transaction_hash == TX_HASH
        assert response.gas_used == 1000
        assert response.gas_wanted == 2000

    def test_legacy_deliver_tx_key(self):
        events = [{"type": "message", "attributes": [
            {"key": "YWN0aW9u", "value": "ZWRpdF92YWxpZGF0b3I=", "index": True},
            {"key": "bW9kdWxl", "value": None},
        ]}]
        body = _commit_result(deliver={"code": 12, "log": "commission cannot be changed more than once in 24h",
                                       "events": events},
                              key="deliver_tx")
        response = TendermintRpcTransport(session=_session(body)).broadcast_tx_commit(TX_BYTES)
        assert response.code == 12
        assert response.log == "commission cannot be changed more than once in 24h"
        attributes = response.events[0].attributes
        assert (attributes[0].key, attributes[0].value) == ("action", "edit_validator")
        assert (attributes[1].key, attributes[1].value) == ("module", "")

    def test_legacy_deliver_tx_bad_attribute(self):
        events = [{"type": "message", "attributes": [{"key": "not base64!", "value": ""}]}]
        body = _commit_result(deliver={"code": 0, "events": events}, key="deliver_tx")
        with pytest.raises(TransportError):
            TendermintRpcTransport(session=_session(body)).broadcast_tx_commit(TX_BYTES)

    def test_tx_result_events_plain_text(self):
        events = [{"type": "message", "attributes": [{"key": "action", "value": "create_validator"}]}]
        body = _commit_result(deliver={"code": 0, "events": events})
        response = TendermintRpcTransport(session=_session(body)).broadcast_tx_commit(TX_BYTES)
        assert response.events[0].attributes[0].key == "action"

    def test_missing_deliver_tx_result(self):
        body = {"jsonrpc": "2.0", "id": 1, "result": {"check_tx": {"code": 0}, "hash": "AB", "height": "0"}}
        with pytest.raises(TransportError) as exc_info:
            TendermintRpcTransport(session=_session(body)).broadcast_tx_commit(TX_BYTES)
        assert not isinstance(exc_info.value, BroadcastRejectedError)
        assert "no DeliverTx result" in exc_info.value.message

    def test_missing_deliver_tx_classified_as_submission_error(self):
        body = {"jsonrpc": "2.0", "id": 1, "result": {"check_tx": {"code": 0}, "hash": "AB", "height": "0"}}
        with pytest.raises(TransportError) as exc_info:
            TendermintRpcTransport(session=_session(body)).broadcast_tx_commit(TX_BYTES)
        outcome = classify(exc_info.value)
        assert isinstance(outcome, SubmissionError)

    def test_deliver_tx_zero_code_omitted(self):
        body = _commit_result(deliver={"log": "", "gas_used": "700"})
        response = TendermintRpcTransport(session=_session(body)).broadcast_tx_commit(TX_BYTES)
        assert response.code == 0
        assert response.gas_used == 700

    def test_check_tx_rejection(self):
        transport = TendermintRpcTransport(session=_session(_commit_result(check_code=32)))
        with pytest.raises(BroadcastRejectedError) as exc_info:
            transport.broadcast_tx_commit(TX_BYTES)
        assert exc_info.value.rejection_code == 32
        assert exc_info.value.log == "account sequence mismatch"

    def test_json_rpc_error(self):
        body = {"jsonrpc": "2.0", "id": 1, "error": {"code": -32603, "message": "Internal error",
                                                    "data": "tx already exists in cache"}}
        with pytest.raises(BroadcastRejectedError) as exc_info:
            TendermintRpcTransport(session=_session(body)).broadcast_tx_commit(TX_BYTES)
        assert exc_info.value.log == "tx already exists in cache"

    def test_node_commit_timeout(self):
        body = {"jsonrpc": "2.0", "id": 1, "error": {
            "code": -32603, "message": "Internal error",
            "data": "timed out waiting for tx to be included in a block"}}
        with pytest.raises(BroadcastTimeoutError) as exc_info:
            TendermintRpcTransport(session=_session(body)).broadcast_tx_commit(TX_BYTES)
        assert classify(exc_info.value) == SubmissionError(reason="timeout")

    def test_timeout(self):
        transport = TendermintRpcTransport(session=_session(side_effect=requests.ReadTimeout("slow")))
        with pytest.raises(BroadcastTimeoutError):
            transport.broadcast_tx_commit(TX_BYTES)

    def test_connection_error(self):
        transport = TendermintRpcTransport(session=_session(side_effect=requests.ConnectionError("refused")))
        with pytest.raises(TransportError):
            transport.broadcast_tx_commit(TX_BYTES)

    def test_http_error(self):
        transport = TendermintRpcTransport(session=_session({}, status=502))
        with pytest.raises(TransportError) as exc_info:
            transport.broadcast_tx_commit(TX_BYTES)
        assert exc_info.value.details["status"] == 502

    def test_invalid_json(self):
        session = _session()
        session.post.return_value.json.side_effect = ValueError("Expecting value")
        with pytest.raises(TransportError):
            TendermintRpcTransport(session=session).broadcast_tx_commit(TX_BYTES)

    def test_endpoint_string_config(self):
        transport = TendermintRpcTransport("http://example:26657", session=_session(_commit_result()))
        assert transport.config.endpoint == "http://example:26657"

    @pytest.mark.asyncio
    async def test_async_broadcast(self):
        transport = TendermintRpcTransport(session=_session(_commit_result()))
        response = await transport.broadcast_tx(TX_BYTES)
        assert response.transaction_hash == TX_HASH
