"""
Shared fixtures for the signing engine tests.
"""

import pytest

from stargate_signing.messages import create_default_registry
from stargate_signing.tx import TransactionAssembler

from helpers import (
    mk_create_validator_op,
    mk_direct_signer,
    mk_dual_signer,
    mk_fee,
    mk_legacy_signer,
)


@pytest.fixture
def registry():
    """Registry with the staking operation kinds."""
    return create_default_registry()


@pytest.fixture
def assembler(registry):
    return TransactionAssembler(registry)


@pytest.fixture
def direct_signer():
    return mk_direct_signer()


@pytest.fixture
def legacy_signer():
    return mk_legacy_signer()


@pytest.fixture
def dual_signer():
    return mk_dual_signer()


@pytest.fixture
def create_validator_op():
    return mk_create_validator_op()


@pytest.fixture
def fee():
    """Fee for 200000 gas at 0.025ucosm."""
    return mk_fee()
