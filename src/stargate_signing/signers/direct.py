"""
Direct-mode signer.

Signs protobuf SignDocs only, like wallets that understand the binary
transaction schema.
"""

from typing import FrozenSet

from ..tx.models import SignMode
from .signer import Signer


class DirectCapableSigner(Signer):
    """Signer supporting only SignMode.DIRECT."""

    _MODES = frozenset({SignMode.DIRECT})

    def supported_modes(self) -> FrozenSet[SignMode]:
        return self._MODES
