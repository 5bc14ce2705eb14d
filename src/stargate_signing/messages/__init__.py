"""
Operation kinds and their encode/decode rules.

The registry maps type ids to direct (protobuf) rules and, separately, to
legacy Amino JSON names and rules.
"""

from .registry import MessageRegistry, MessageRule, LegacyMessageRule, create_default_registry
from .staking import (
    MSG_BEGIN_REDELEGATE,
    MSG_CANCEL_UNBONDING_DELEGATION,
    MSG_CREATE_VALIDATOR,
    MSG_DELEGATE,
    MSG_EDIT_VALIDATOR,
    MSG_UNDELEGATE,
    register_staking_messages,
)
from .types import *  # noqa: F401,F403
from . import types as _types

__all__ = [
    "MessageRegistry",
    "MessageRule",
    "LegacyMessageRule",
    "create_default_registry",
    "register_staking_messages",
    "MSG_CREATE_VALIDATOR",
    "MSG_EDIT_VALIDATOR",
    "MSG_DELEGATE",
    "MSG_UNDELEGATE",
    "MSG_BEGIN_REDELEGATE",
    "MSG_CANCEL_UNBONDING_DELEGATION",
] + _types.__all__
