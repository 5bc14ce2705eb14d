"""
Broadcast outcome classifier.

Maps whatever the transport produced, a response record or an exception,
onto exactly one BroadcastOutcome arm. Classification is a pure function of
its input: the same response always yields an equal outcome.
"""

from __future__ import annotations
from typing import Any, Mapping, Optional, Union
import asyncio
import logging

import requests
from pydantic import ValidationError

from ..runtime.errors import BroadcastRejectedError, BroadcastTimeoutError, TransportError
from .outcome import (
    BroadcastOutcome,
    Event,
    EventAttribute,
    Failure,
    SubmissionError,
    Success,
)
from .response import ChainResponse

logger = logging.getLogger(__name__)

TIMEOUT_REASON = "timeout"

_TIMEOUT_TYPES = (asyncio.TimeoutError, TimeoutError, requests.Timeout, BroadcastTimeoutError)
_RETRYABLE_TYPES = (TransportError, requests.RequestException, ConnectionError) + _TIMEOUT_TYPES

ResponseLike = Union[ChainResponse, Mapping[str, Any], BaseException, Success, Failure, SubmissionError]


def _submission_reason(error: BaseException) -> str:
    if isinstance(error, _TIMEOUT_TYPES):
        return TIMEOUT_REASON
    if isinstance(error, BroadcastRejectedError):
        if error.rejection_code is not None:
            return f"rejected before inclusion (code {error.rejection_code}): {error.log or error.message}"
        return f"rejected before inclusion: {error.message}"
    if isinstance(error, requests.HTTPError):
        status = error.response.status_code if error.response is not None else "unknown"
        return f"http error {status}: {error}"
    if isinstance(error, (requests.ConnectionError, ConnectionError)):
        return f"connection failed: {error}"
    if isinstance(error, TransportError):
        return error.message
    return f"{type(error).__name__}: {error}"


def _events(response: ChainResponse):
    return tuple(
        Event(type=e.type, attributes=tuple(EventAttribute(key=a.key, value=a.value) for a in e.attributes))
        for e in response.events
    )


def classify(response: ResponseLike, transaction_hash: Optional[str] = None) -> BroadcastOutcome:
    """
    Classify a broadcast response.

    Args:
        response: ChainResponse, its mapping form, or the exception raised
            while submitting. An outcome is returned unchanged.
        transaction_hash: Hash to use when the response does not carry one

    Returns:
        Success if code == 0, Failure if code != 0, SubmissionError for
        exceptions and malformed responses
    """
    if isinstance(response, (Success, Failure, SubmissionError)):
        return response

    if isinstance(response, BaseException):
        outcome = SubmissionError(reason=_submission_reason(response))
        logger.warning(f"Broadcast submission error: {outcome.reason}")
        return outcome

    if not isinstance(response, ChainResponse):
        if not isinstance(response, Mapping):
            logger.warning(f"Malformed broadcast response of type {type(response).__name__}")
            return SubmissionError(reason=f"malformed response: expected a mapping, got {type(response).__name__}")
        if "error" in response:
            logger.warning(f"Broadcast response is an RPC error: {response['error']}")
            return SubmissionError(reason=f"malformed response: RPC error {response['error']}")
        try:
            response = ChainResponse.model_validate(response)
        except ValidationError as e:
            logger.warning(f"Malformed broadcast response: {e}")
            return SubmissionError(reason=f"malformed response: {e.error_count()} validation error(s)")

    tx_hash = response.transaction_hash or transaction_hash
    if response.code == 0:
        return Success(
            height=response.height,
            transaction_hash=tx_hash or "",
            gas_used=response.gas_used,
            events=_events(response),
        )

    logger.debug(f"Transaction {tx_hash} failed with code {response.code}")
    return Failure(code=response.code, log=response.log, transaction_hash=tx_hash)


def is_retryable(outcome_or_error: Union[BroadcastOutcome, BaseException]) -> bool:
    """
    Whether resubmitting the same transaction can help.

    True only for SubmissionError outcomes and transport errors. Failures
    and construction errors are never retryable.
    """
    if isinstance(outcome_or_error, (Success, Failure, SubmissionError)):
        return outcome_or_error.retryable
    return isinstance(outcome_or_error, _RETRYABLE_TYPES)


__all__ = [
    "TIMEOUT_REASON",
    "classify",
    "is_retryable",
]
