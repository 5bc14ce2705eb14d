"""
Enumerations shared across the signing engine.
"""

from enum import IntEnum


class SignMode(IntEnum):
    """Signing document encodings, numbered as in cosmos.tx.signing.v1beta1.SignMode."""
    DIRECT = 1
    LEGACY_JSON = 127


__all__ = ["SignMode"]
