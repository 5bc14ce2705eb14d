"""
Legacy Amino JSON signer.

For signer software (hardware wallets, older extensions) that can only
display and sign the JSON StdSignDoc.
"""

from typing import FrozenSet

from ..tx.models import SignMode
from .signer import Signer


class LegacyOnlySigner(Signer):
    """Signer supporting only SignMode.LEGACY_JSON."""

    _MODES = frozenset({SignMode.LEGACY_JSON})

    def supported_modes(self) -> FrozenSet[SignMode]:
        return self._MODES
