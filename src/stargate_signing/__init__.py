"""
Stargate Signing - dual-mode transaction signing engine

Builds direct (protobuf) and legacy Amino JSON signing documents for
Cosmos SDK staking transactions, signs them with capability-gated signers,
assembles TxRaw envelopes and classifies broadcast results.
"""

from .enums import SignMode
from .config import DEFAULT_MODE_PREFERENCE, SigningConfig, TransportConfig
from .runtime.errors import *
from .canonjson import dumps_canonical, dumps_canonical_bytes

# Operation kinds
from .messages import *

# Keys and signers
from .crypto import *
from .signers import *

# Transactions
from .tx import *

# Broadcast
from .broadcast import *
from .transport import TendermintRpcTransport

from . import broadcast as _broadcast
from . import crypto as _crypto
from . import messages as _messages
from . import runtime as _runtime
from . import signers as _signers
from . import tx as _tx

__version__ = "0.1.0"
__all__ = (
    [
        "SignMode",
        "DEFAULT_MODE_PREFERENCE",
        "SigningConfig",
        "TransportConfig",
        "dumps_canonical",
        "dumps_canonical_bytes",
        "TendermintRpcTransport",
    ]
    + _runtime.__all__
    + _messages.__all__
    + _crypto.__all__
    + _signers.__all__
    + [name for name in _tx.__all__ if name != "SignMode"]
    + _broadcast.__all__
)
