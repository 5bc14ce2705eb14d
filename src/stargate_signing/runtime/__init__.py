"""
Runtime support for the signing engine.

Provides the error model shared by every component.
"""

from .errors import *  # noqa: F401,F403
from .errors import __all__  # noqa: F401
