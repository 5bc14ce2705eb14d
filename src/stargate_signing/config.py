"""
Engine configuration.

Plain dataclasses with defaults; nothing is read from the environment.
"""

from dataclasses import dataclass
from typing import Tuple

from .enums import SignMode

DEFAULT_MODE_PREFERENCE: Tuple[SignMode, ...] = (SignMode.DIRECT, SignMode.LEGACY_JSON)


@dataclass(frozen=True)
class SigningConfig:
    """Configuration for transaction signing."""
    mode_preference: Tuple[SignMode, ...] = DEFAULT_MODE_PREFERENCE
    default_memo: str = ""

    def __post_init__(self):
        if not self.mode_preference:
            raise ValueError("mode_preference must name at least one sign mode")
        if len(set(self.mode_preference)) != len(self.mode_preference):
            raise ValueError("mode_preference must not repeat a sign mode")


@dataclass(frozen=True)
class TransportConfig:
    """Configuration for the Tendermint RPC transport."""
    endpoint: str = "http://localhost:26657"
    request_timeout: float = 30.0
    broadcast_timeout: float = 60.0
    debug: bool = False


__all__ = [
    "DEFAULT_MODE_PREFERENCE",
    "SigningConfig",
    "TransportConfig",
]
