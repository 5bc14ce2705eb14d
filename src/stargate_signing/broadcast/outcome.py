"""
Broadcast outcomes.

Exactly three arms. Success and Failure mean the chain processed the
transaction; SubmissionError means it may never have been seen, so only
that arm is safe to retry without first checking for inclusion.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class EventAttribute:
    key: str
    value: str


@dataclass(frozen=True)
class Event:
    """Chain event emitted while executing a transaction."""
    type: str
    attributes: Tuple[EventAttribute, ...] = ()


@dataclass(frozen=True)
class Success:
    """Transaction included with code 0."""
    height: int
    transaction_hash: str
    gas_used: int
    events: Tuple[Event, ...] = ()

    @property
    def retryable(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    """
    Transaction processed and rejected by chain logic.

    The log is kept verbatim; callers match on it.
    """
    code: int
    log: str
    transaction_hash: Optional[str] = None

    def __post_init__(self):
        if self.code == 0:
            raise ValueError("Failure requires a non-zero code")

    @property
    def retryable(self) -> bool:
        return False


@dataclass(frozen=True)
class SubmissionError:
    """Transport-level failure; the chain never processed the transaction."""
    reason: str

    @property
    def retryable(self) -> bool:
        return True


BroadcastOutcome = Union[Success, Failure, SubmissionError]


class BroadcastAssertionError(AssertionError):
    """Outcome was not the expected arm."""

    def __init__(self, message: str, outcome: BroadcastOutcome):
        super().__init__(message)
        self.outcome = outcome


def assert_is_success(outcome: BroadcastOutcome) -> Success:
    """
    Return the outcome if it is a Success.

    Raises:
        BroadcastAssertionError: Otherwise, with the outcome attached
    """
    if not isinstance(outcome, Success):
        if isinstance(outcome, Failure):
            detail = f"code {outcome.code}: {outcome.log}"
        else:
            detail = getattr(outcome, "reason", repr(outcome))
        raise BroadcastAssertionError(f"Expected Success, got {type(outcome).__name__} ({detail})", outcome)
    return outcome


def assert_is_failure(outcome: BroadcastOutcome) -> Failure:
    """
    Return the outcome if it is a Failure.

    Raises:
        BroadcastAssertionError: Otherwise, with the outcome attached
    """
    if not isinstance(outcome, Failure):
        raise BroadcastAssertionError(f"Expected Failure, got {type(outcome).__name__}", outcome)
    return outcome


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
]
