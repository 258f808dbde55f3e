"""Stub installation and signature validation.

Stubs replace a subject's methods by name; each one is shape-checked
against the real method before it is installed.
"""
from __future__ import annotations
from .signature import (
    Shape, Slot, validate_stub_signature, resolve_method, shape_of
)
from .registry import StubTable

__all__ = [
    "StubTable",
    "Shape", "Slot", "validate_stub_signature", "resolve_method", "shape_of",
]
