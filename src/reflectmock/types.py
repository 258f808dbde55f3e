"""Common type aliases for reflectmock.

Provides consistent type hints across the codebase.
"""
from __future__ import annotations
from typing import Callable, Any, Tuple, List, Dict

# Names
MethodName = str  # Name of a method on the subject's type
TypeName = str  # Display name of the subject's type

# Stubs
StubFn = Callable[..., Any]  # (subject, *args) -> result(s)

# Recorded calls
CallArgs = Tuple[Any, ...]  # Positional args of one call, receiver excluded
CallHistory = List[CallArgs]  # Calls to one method, in record order
Results = List[Any]  # Outputs of one dispatched call

# Tables
StubDict = Dict[MethodName, StubFn]  # method name -> stub
CallDict = Dict[MethodName, CallHistory]  # method name -> history

__all__ = [
    "MethodName", "TypeName",
    "StubFn",
    "CallArgs", "CallHistory", "Results",
    "StubDict", "CallDict",
]
