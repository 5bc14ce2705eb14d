"""
Transports that submit encoded transactions to a node.
"""

from .rpc import TendermintRpcTransport

__all__ = ["TendermintRpcTransport"]
