"""Abstract interface for mock engines."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any
from ..types import CallArgs, CallHistory, MethodName, Results, StubFn


class Mocked(ABC):
    """Operations a wrapper class gets by holding a mock engine.

    The intended composition is Wrapper -> engine -> subject: the wrapper
    exposes one method per subject method and forwards each of them to
    call(), while tests use the rest of this interface to stub methods and
    inspect recorded calls.
    """

    @abstractmethod
    def stub(self, method_name: MethodName, fn: StubFn) -> None:
        """Install fn in place of the subject's method_name."""
        ...

    @abstractmethod
    def is_stubbed(self, method_name: MethodName) -> bool:
        ...

    @abstractmethod
    def unstub(self, method_name: MethodName) -> None:
        ...

    @abstractmethod
    def all_call_args(self, method_name: MethodName) -> CallHistory:
        ...

    @abstractmethod
    def call_args(self, method_name: MethodName, idx: int) -> CallArgs:
        ...

    @abstractmethod
    def last_call_args(self, method_name: MethodName) -> CallArgs:
        ...

    @abstractmethod
    def method_call_count(self, method_name: MethodName) -> int:
        ...

    @abstractmethod
    def was_method_called_with(self, method_name: MethodName, *args: Any) -> bool:
        ...

    @abstractmethod
    def call(self, method_name: MethodName, *args: Any) -> Results:
        """Dispatch to the stub or the real method and record the call."""
        ...
