"""
Dual-mode signer.
"""

from typing import FrozenSet

from ..tx.models import SignMode
from .signer import Signer


class DualModeSigner(Signer):
    """Signer supporting both DIRECT and LEGACY_JSON; the assembler's preference order decides."""

    _MODES = frozenset({SignMode.DIRECT, SignMode.LEGACY_JSON})

    def supported_modes(self) -> FrozenSet[SignMode]:
        return self._MODES
