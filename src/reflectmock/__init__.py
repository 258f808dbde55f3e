"""reflectmock: name-based method interception for test doubles.

Wrap a subject in a MockEngine, stub any of its methods with a function of
the same shape (subject first), dispatch through call(), and assert on the
recorded arguments afterwards.
"""
from __future__ import annotations
from .core import (
    MockEngine, Mocked,
    MockError, ConfigurationError, UnknownMethodError,
    OutOfRangeError, NoCallsError
)
from .stubs import validate_stub_signature
from .utils.logger import log

__version__ = "0.1.0"

__all__ = [
    "MockEngine", "Mocked",
    "MockError", "ConfigurationError", "UnknownMethodError",
    "OutOfRangeError", "NoCallsError",
    "validate_stub_signature", "log",
]
