"""Custom exception classes for reflectmock."""
from __future__ import annotations


class MockError(Exception):
    """Base class for all engine exceptions."""
    pass


class ConfigurationError(MockError):
    """Raised when a stub cannot be installed or the engine is misconfigured."""
    pass


class UnknownMethodError(MockError):
    """Raised when a call names neither a stub nor a real method."""
    def __init__(self, type_name: str, method_name: str):
        self.type_name = type_name
        self.method_name = method_name
        super().__init__(f"{type_name} does not have a method named {method_name}")


class OutOfRangeError(MockError, IndexError):
    """Raised when a recorded call index does not exist."""
    def __init__(self, method_name: str, index: int, count: int):
        self.method_name = method_name
        self.index = index
        self.count = count
        super().__init__(
            f"no call to {method_name} at index {index} ({count} recorded)"
        )


class NoCallsError(MockError):
    """Raised when a method's last call is requested but none were made."""
    def __init__(self, method_name: str):
        self.method_name = method_name
        super().__init__(f"no calls to {method_name} were made")
