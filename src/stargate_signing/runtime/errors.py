"""
Stargate Signing Error Model

This module provides the error handling framework for the signing engine.
Construction errors (registry, builders, signers, assembler) are raised
immediately and never retried; transport errors originate at the network
boundary and are turned into broadcast outcomes by the classifier.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Engine error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Registry errors (100-199)
    UNKNOWN_TYPE_ID = 100
    MALFORMED_PAYLOAD = 101
    UNSUPPORTED_LEGACY_ENCODING = 102

    # Encoding errors (200-299)
    ENCODING_ERROR = 200
    DECODING_ERROR = 201

    # Signing errors (300-399)
    UNSUPPORTED_MODE = 300
    SIGNING_FAILURE = 301

    # Assembly errors (400-499)
    SIGNATURE_COUNT_MISMATCH = 400
    SIGNER_ORDER_MISMATCH = 401

    # Transport errors (500-599)
    NETWORK_ERROR = 500
    TIMEOUT = 501
    BROADCAST_REJECTED = 502


class SigningEngineError(Exception):
    """
    Base class for all engine errors.

    Carries a machine-readable code, optional details and the underlying
    exception that caused it.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        """
        Initialize an engine error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class UnknownTypeIdError(SigningEngineError):
    """Operation type id is not registered."""

    def __init__(self, type_id: str):
        super().__init__(f"Unknown type id: {type_id}", ErrorCode.UNKNOWN_TYPE_ID,
                         {"typeId": type_id})
        self.type_id = type_id


class MalformedPayloadError(SigningEngineError):
    """Operation payload is structurally invalid."""

    def __init__(self, type_id: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"Malformed payload for {type_id}: {message}", ErrorCode.MALFORMED_PAYLOAD,
                         {"typeId": type_id}, cause)
        self.type_id = type_id


class UnsupportedLegacyEncodingError(SigningEngineError):
    """Operation kind has no legacy Amino JSON mapping."""

    def __init__(self, type_id: str):
        super().__init__(f"No legacy Amino JSON encoding registered for {type_id}",
                         ErrorCode.UNSUPPORTED_LEGACY_ENCODING, {"typeId": type_id})
        self.type_id = type_id


class EncodingError(SigningEngineError):
    """Data encoding errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.ENCODING_ERROR, details, cause)


class DecodeError(SigningEngineError):
    """Data decoding errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.DECODING_ERROR, details, cause)


class UnsupportedModeError(SigningEngineError):
    """Signer cannot sign documents of the requested mode."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_MODE, details)


class SigningFailureError(SigningEngineError):
    """Underlying cryptographic operation failed."""

    def __init__(self, message: str = "Signing failed", cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.SIGNING_FAILURE, None, cause)


class SignatureCountMismatchError(SigningEngineError):
    """Number of signatures differs from the number of signer infos."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected {expected} signature(s), got {actual}",
                         ErrorCode.SIGNATURE_COUNT_MISMATCH,
                         {"expected": expected, "actual": actual})
        self.expected = expected
        self.actual = actual


class SignerOrderMismatchError(SigningEngineError):
    """Signature at some position does not belong to the signer info at that position."""

    def __init__(self, index: int, reason: str):
        super().__init__(f"Signature {index} does not match signer info {index}: {reason}",
                         ErrorCode.SIGNER_ORDER_MISMATCH, {"index": index})
        self.index = index


class TransportError(SigningEngineError):
    """Network-related errors raised by transport adapters."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.NETWORK_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message, code, details, cause)


class BroadcastTimeoutError(TransportError):
    """Broadcast did not complete in time; the transaction may still be included."""

    def __init__(self, message: str = "timeout", cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.TIMEOUT, None, cause)


class BroadcastRejectedError(TransportError):
    """Node refused the transaction before it reached a block."""

    def __init__(self, message: str, rejection_code: Optional[int] = None, log: str = "",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.BROADCAST_REJECTED, details)
        self.rejection_code = rejection_code
        self.log = log


__all__ = [
    "ErrorCode",
    "SigningEngineError",
    "UnknownTypeIdError",
    "MalformedPayloadError",
    "UnsupportedLegacyEncodingError",
    "EncodingError",
    "DecodeError",
    "UnsupportedModeError",
    "SigningFailureError",
    "SignatureCountMismatchError",
    "SignerOrderMismatchError",
    "TransportError",
    "BroadcastTimeoutError",
    "BroadcastRejectedError",
]
