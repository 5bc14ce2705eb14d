"""
Async broadcast driver.

The only suspension point of the engine: hands the encoded transaction to a
transport and classifies whatever comes back.
"""

from __future__ import annotations
from typing import Any, Mapping, Optional, Protocol, Union
import asyncio
import logging

from ..tx.models import SignedTransaction
from .classifier import classify
from .outcome import BroadcastOutcome, SubmissionError
from .response import ChainResponse

logger = logging.getLogger(__name__)


class BroadcastTransport(Protocol):
    """Anything that can submit TxRaw bytes to a node."""

    async def broadcast_tx(self, tx_bytes: bytes) -> Union[ChainResponse, Mapping[str, Any]]:
        ...


async def broadcast_transaction(
    transport: BroadcastTransport,
    tx: SignedTransaction,
    timeout: Optional[float] = None,
) -> BroadcastOutcome:
    """
    Submit a signed transaction and classify the result.

    Transport exceptions and timeouts become SubmissionError outcomes; they
    are never raised. Cancelling the awaiting task only stops waiting (the
    node may still include the transaction) and propagates CancelledError.

    Args:
        transport: Transport implementing broadcast_tx
        tx: Transaction to submit
        timeout: Seconds to wait, or None to wait indefinitely

    Returns:
        Success, Failure or SubmissionError
    """
    tx_bytes = tx.encode()
    tx_hash = tx.hash
    logger.debug(f"Broadcasting transaction {tx_hash} ({len(tx_bytes)} bytes)")

    try:
        response = await asyncio.wait_for(transport.broadcast_tx(tx_bytes), timeout=timeout)
    except asyncio.CancelledError:
        logger.debug(f"Broadcast of {tx_hash} cancelled")
        raise
    except Exception as e:
        return classify(e, transaction_hash=tx_hash)

    outcome = classify(response, transaction_hash=tx_hash)
    if isinstance(outcome, SubmissionError):
        logger.warning(f"Broadcast of {tx_hash} returned an unusable response: {outcome.reason}")
    else:
        logger.debug(f"Broadcast of {tx_hash} classified as {type(outcome).__name__}")
    return outcome


__all__ = [
    "BroadcastTransport",
    "broadcast_transaction",
]
