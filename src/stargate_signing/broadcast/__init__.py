"""
Broadcast: outcome types, classification and the async submit driver.
"""

from .outcome import (
    EventAttribute,
    Event,
    Success,
    Failure,
    SubmissionError,
    BroadcastOutcome,
    BroadcastAssertionError,
    assert_is_success,
    assert_is_failure,
)
from .response import ChainResponse, ResponseEvent, ResponseAttribute
from .classifier import TIMEOUT_REASON, classify, is_retryable
from .broadcaster import BroadcastTransport, broadcast_transaction

__all__ = [
    "EventAttribute",
    "Event",
    "Success",
    "Failure",
    "SubmissionError",
    "BroadcastOutcome",
    "BroadcastAssertionError",
    "assert_is_success",
    "assert_is_failure",
    "ChainResponse",
    "ResponseEvent",
    "ResponseAttribute",
    "TIMEOUT_REASON",
    "classify",
    "is_retryable",
    "BroadcastTransport",
    "broadcast_transaction",
]
