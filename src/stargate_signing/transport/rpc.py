"""
Tendermint RPC transport.

Submits TxRaw bytes with the JSON-RPC broadcast_tx_commit method over HTTP,
using requests. The blocking call runs in a worker thread for async callers.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
import asyncio
import base64
import itertools
import json
import logging

import requests

from ..broadcast.response import ChainResponse
from ..config import TransportConfig
from ..runtime.errors import BroadcastRejectedError, BroadcastTimeoutError, ErrorCode, TransportError

_ids = itertools.count(1)

# Tendermint reports its own commit timeout as a JSON-RPC error
COMMIT_TIMEOUT_TEXT = "timed out waiting for tx to be included in a block"


def _decode_base64_text(value: Any) -> str:
    if value is None:
        return ""
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (TypeError, ValueError) as e:
        raise TransportError(f"Event attribute is not base64 text: {value!r}", ErrorCode.NETWORK_ERROR, cause=e)


def _decode_legacy_events(events: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Decode base64 attribute keys and values of Tendermint 0.34 events."""
    decoded = []
    for event in events:
        attributes = [
            dict(attr, key=_decode_base64_text(attr.get("key")), value=_decode_base64_text(attr.get("value")))
            for attr in event.get("attributes") or []
        ]
        decoded.append(dict(event, attributes=attributes))
    return decoded


class TendermintRpcTransport:
    """
    Minimal Tendermint / CometBFT RPC client.

    CheckTx rejections and JSON-RPC errors raise BroadcastRejectedError: the
    transaction never reached a block. The node's own commit timeout raises
    BroadcastTimeoutError, since the transaction may still be included. A
    DeliverTx result, successful or not, is returned as a ChainResponse.
    """

    def __init__(self, config: Union[str, TransportConfig, None] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the transport.

        Args:
            config: Endpoint URL or TransportConfig
            session: Optional requests session to reuse
        """
        if isinstance(config, str):
            self.config = TransportConfig(endpoint=config)
        else:
            self.config = config or TransportConfig()

        self.logger = logging.getLogger(__name__)
        if self.config.debug:
            self.logger.setLevel(logging.DEBUG)

        self._session = session or requests.Session()

    def _call(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        payload = {
            "jsonrpc": "2.0",
            "id": next(_ids),
            "method": method,
            "params": params,
        }
        if self.config.debug:
            self.logger.debug(f"Request: {method} -> {self.config.endpoint}")

        try:
            response = self._session.post(
                self.config.endpoint,
                json=payload,
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                timeout=(self.config.request_timeout, self.config.broadcast_timeout),
            )
            response.raise_for_status()
            body = response.json()
        except requests.Timeout as e:
            raise BroadcastTimeoutError(cause=e)
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise TransportError(f"HTTP error {status}", ErrorCode.NETWORK_ERROR, {"status": status}, e)
        except requests.RequestException as e:
            raise TransportError(f"Network error: {e}", ErrorCode.NETWORK_ERROR, cause=e)
        except ValueError as e:
            raise TransportError("Response is not valid JSON", ErrorCode.NETWORK_ERROR, cause=e)

        if self.config.debug:
            self.logger.debug(f"Response: {json.dumps(body)}")

        if not isinstance(body, dict):
            raise TransportError("JSON-RPC response is not an object", ErrorCode.NETWORK_ERROR)

        if body.get("error"):
            error = body["error"]
            if isinstance(error, dict):
                message = error.get("message", str(error))
                data = error.get("data")
                if isinstance(data, str) and COMMIT_TIMEOUT_TEXT in data:
                    raise BroadcastTimeoutError(f"Node timed out waiting for commit: {data}")
                raise BroadcastRejectedError(
                    f"JSON-RPC error: {message}",
                    rejection_code=error.get("code"),
                    log=data if isinstance(data, str) else "",
                    details={"error": error},
                )
            raise BroadcastRejectedError(f"JSON-RPC error: {error}")

        result = body.get("result")
        if not isinstance(result, dict):
            raise TransportError("JSON-RPC response has no result", ErrorCode.NETWORK_ERROR)
        return result

    def broadcast_tx_commit(self, tx_bytes: bytes) -> ChainResponse:
        """
        Submit a transaction and wait for it to be committed.

        Returns:
            ChainResponse built from the DeliverTx result

        Raises:
            BroadcastRejectedError: If CheckTx fails or the node returns an error
            BroadcastTimeoutError: If the node does not answer in time
            TransportError: On network or protocol errors
        """
        result = self._call("broadcast_tx_commit", {"tx": base64.b64encode(tx_bytes).decode("ascii")})

        check_tx = result.get("check_tx") or {}
        check_code = int(check_tx.get("code") or 0)
        if check_code != 0:
            log = check_tx.get("log") or ""
            raise BroadcastRejectedError(
                f"CheckTx failed with code {check_code}",
                rejection_code=check_code,
                log=log,
                details={"codespace": check_tx.get("codespace", ""), "hash": result.get("hash")},
            )

        if isinstance(result.get("tx_result"), dict):
            record = dict(result["tx_result"])
        elif isinstance(result.get("deliver_tx"), dict):
            # Tendermint 0.34 base64-encodes event attributes
            record = dict(result["deliver_tx"])
            record["events"] = _decode_legacy_events(record.get("events") or [])
        else:
            raise TransportError("broadcast_tx_commit result has no DeliverTx result", ErrorCode.NETWORK_ERROR,
                                 {"hash": result.get("hash")})

        # proto3 JSON omits a zero code
        record.setdefault("code", 0)
        record["hash"] = result.get("hash")
        record["height"] = result.get("height") or 0
        self.logger.debug(f"Transaction {record['hash']} committed at height {record['height']}")
        return ChainResponse.model_validate(record)

    async def broadcast_tx(self, tx_bytes: bytes) -> ChainResponse:
        """Async form of broadcast_tx_commit, run in a worker thread."""
        return await asyncio.to_thread(self.broadcast_tx_commit, tx_bytes)

    def close(self):
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


__all__ = ["TendermintRpcTransport"]
