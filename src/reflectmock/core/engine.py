"""Mock engine: stub table, call log and name-based dispatch around one subject."""
from __future__ import annotations
import threading
from typing import Any, List
from ..types import CallArgs, CallHistory, MethodName, Results, StubFn
from ..utils.logger import log
from ..stubs.registry import StubTable
from ..stubs.signature import resolve_method, result_arity, type_name
from ..calls.recorder import CallLog
from .base import Mocked
from .exceptions import ConfigurationError, UnknownMethodError


class MockEngine(Mocked):
    """Method-interception engine for building test doubles.

    Holds one subject for its whole lifetime. Each method of the subject is
    either stubbed (a validated substitute runs instead) or falls through to
    the real implementation; every dispatched call is recorded either way.
    Safe to use from several test threads at once.
    """

    def __init__(self, wrapper: Any, subject: Any, verbose: bool = False):
        """Initialize engine.

        Args:
            wrapper: Object embedding this engine; kept for introspection only
            subject: Object whose methods are stubbed or passed through
            verbose: Enable verbose debug logging

        Raises:
            ConfigurationError: If subject is None
        """
        log.set_verbose(verbose)
        if subject is None:
            raise ConfigurationError("subject must not be None")

        self._wrapper = wrapper
        self._subject = subject
        # One lock guards both tables; never held while a stub or method runs
        self._lock = threading.Lock()
        self.stubs = StubTable(subject, self._lock)
        self.calls = CallLog(self._lock)
        log.info(f"MockEngine: wrapping {type_name(subject)}")

    @property
    def subject(self) -> Any:
        """The object being stubbed."""
        return self._subject

    @property
    def wrapper(self) -> Any:
        return self._wrapper

    # ---- Stubs ----

    def stub(self, method_name: MethodName, fn: StubFn) -> None:
        """Install fn in place of the subject's method_name.

        Args:
            method_name: Real method to replace
            fn: Substitute with the real method's exact shape, taking the
                subject as its first parameter

        Raises:
            ConfigurationError: If fn is not callable, the method does not
                exist, or the shapes differ
        """
        self.stubs.install(method_name, fn)

    def is_stubbed(self, method_name: MethodName) -> bool:
        return self.stubs.contains(method_name)

    def unstub(self, method_name: MethodName) -> None:
        """Restore the real method; no-op if it was not stubbed."""
        self.stubs.remove(method_name)

    def stubbed_methods(self) -> List[MethodName]:
        """Sorted names of all stubbed methods."""
        return self.stubs.names()

    # ---- Recorded calls ----

    def all_call_args(self, method_name: MethodName) -> CallHistory:
        """Every recorded argument tuple for method_name, oldest first."""
        return self.calls.all(method_name)

    def call_args(self, method_name: MethodName, idx: int) -> CallArgs:
        """Arguments of the idx-th recorded call.

        Raises:
            OutOfRangeError: If fewer than idx + 1 calls were recorded
        """
        return self.calls.at(method_name, idx)

    def last_call_args(self, method_name: MethodName) -> CallArgs:
        """Arguments of the most recent call.

        Raises:
            NoCallsError: If method_name was never called
        """
        return self.calls.last(method_name)

    def method_call_count(self, method_name: MethodName) -> int:
        return self.calls.count(method_name)

    def was_method_called_with(self, method_name: MethodName, *args: Any) -> bool:
        """Check if any recorded call's arguments structurally equal args."""
        return self.calls.contains(method_name, args)

    # ---- Dispatch ----

    def call(self, method_name: MethodName, *args: Any) -> Results:
        """Invoke the stub or real method as fn(subject, *args) and record args.

        Args:
            method_name: Method to dispatch
            *args: Positional arguments, receiver excluded

        Returns:
            Results as a list shaped by the callable's declared returns:
            [] for None, one entry per member of a fixed tuple annotation,
            otherwise [result]

        Raises:
            UnknownMethodError: If there is no stub and no real method
        """
        fn = self.stubs.get(method_name)
        path = "stub"
        if fn is None:
            fn = resolve_method(self._subject, method_name)
            path = "real"
            if fn is None:
                raise UnknownMethodError(type_name(self._subject), method_name)

        if log.enabled():
            log.debug(f"call: {type_name(self._subject)}.{method_name} via {path}, args={args!r}")
        try:
            out = fn(self._subject, *args)
        finally:
            # Recorded once per dispatch, in completion order
            self.calls.record(method_name, args)
        return self._results(fn, out)

    def _results(self, fn: StubFn, out: Any) -> Results:
        """Spread a return value into the declared number of results."""
        arity = result_arity(fn)
        if arity == 0:
            return []
        if arity == 1:
            return [out]
        return list(out)
