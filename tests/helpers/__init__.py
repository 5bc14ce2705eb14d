from .factories import (
    ACCOUNT_NUMBER,
    CHAIN_ID,
    DELEGATOR_ADDRESS,
    DENOM_STAKING,
    GAS_PRICE,
    VALIDATOR_ADDRESS,
    mk_consensus_key_bytes,
    mk_create_validator_op,
    mk_create_validator_payload,
    mk_direct_signer,
    mk_dual_signer,
    mk_ed25519_key,
    mk_edit_validator_op,
    mk_edit_validator_payload,
    mk_fee,
    mk_legacy_signer,
    mk_secp256k1_key,
)
from .mocks import COMMISSION_COOLDOWN_LOG, FailingKey, FakeTransport, SimulatedChain

__all__ = [
    "ACCOUNT_NUMBER",
    "CHAIN_ID",
    "DELEGATOR_ADDRESS",
    "DENOM_STAKING",
    "GAS_PRICE",
    "VALIDATOR_ADDRESS",
    "mk_consensus_key_bytes",
    "mk_create_validator_op",
    "mk_create_validator_payload",
    "mk_direct_signer",
    "mk_dual_signer",
    "mk_ed25519_key",
    "mk_edit_validator_op",
    "mk_edit_validator_payload",
    "mk_fee",
    "mk_legacy_signer",
    "mk_secp256k1_key",
    "COMMISSION_COOLDOWN_LOG",
    "FailingKey",
    "FakeTransport",
    "SimulatedChain",
]
