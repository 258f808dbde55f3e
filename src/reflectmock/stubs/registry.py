"""Stub table keyed by method name."""
from __future__ import annotations
import threading
from typing import Any, List, Optional
from ..types import MethodName, StubDict, StubFn
from ..utils.logger import log
from .signature import validate_stub_signature, type_name


class StubTable:
    """Method name -> validated stub.

    Every entry has passed validate_stub_signature against the subject, so
    whatever get() returns can be called as fn(subject, *args) without
    further checks. The lock is shared with the engine's call log.
    """

    def __init__(self, subject: Any, lock: threading.Lock) -> None:
        self.subject = subject
        self._lock = lock
        self._stubs: StubDict = {}

    def install(self, method_name: MethodName, fn: StubFn) -> None:
        """Validate and install a stub, replacing any prior one.

        Args:
            method_name: Real method being replaced
            fn: Stub taking the subject as its first parameter

        Raises:
            ConfigurationError: If fn does not match the real method's shape
        """
        validate_stub_signature(self.subject, method_name, fn)
        with self._lock:
            replaced = method_name in self._stubs
            self._stubs[method_name] = fn
        log.debug(
            f"StubTable.install: {type_name(self.subject)}.{method_name} "
            f"{'replaced' if replaced else 'stubbed'}"
        )

    def get(self, method_name: MethodName) -> Optional[StubFn]:
        """Get the active stub, or None to fall through to the real method."""
        with self._lock:
            return self._stubs.get(method_name)

    def contains(self, method_name: MethodName) -> bool:
        with self._lock:
            return method_name in self._stubs

    def remove(self, method_name: MethodName) -> None:
        """Remove a stub; unknown names are ignored."""
        with self._lock:
            fn = self._stubs.pop(method_name, None)
        if fn is not None:
            log.debug(f"StubTable.remove: {type_name(self.subject)}.{method_name} unstubbed")

    def names(self) -> List[MethodName]:
        """Sorted names of all stubbed methods."""
        with self._lock:
            return sorted(self._stubs)
