"""Core engine components.

Engine class, its abstract interface, and exception hierarchy.
"""
from __future__ import annotations
from .exceptions import (
    MockError, ConfigurationError, UnknownMethodError,
    OutOfRangeError, NoCallsError
)
from .base import Mocked
from .engine import MockEngine

__all__ = [
    "MockEngine", "Mocked",
    "MockError", "ConfigurationError", "UnknownMethodError",
    "OutOfRangeError", "NoCallsError"
]
