"""Per-method call history."""
from __future__ import annotations
import threading
from typing import Any, Optional, Sequence, Set, Tuple
from ..core.exceptions import NoCallsError, OutOfRangeError
from ..types import CallArgs, CallDict, CallHistory, MethodName
from ..utils.logger import log


def deep_equal(a: Any, b: Any, _seen: Optional[Set[Tuple[int, int]]] = None) -> bool:
    """Structural equality that also requires matching types.

    Containers are compared element-wise (order-sensitive for sequences),
    so 1, 1.0 and True are all different arguments. A container pair that is
    already being compared further up counts as equal, so self-referencing
    arguments terminate.
    """
    if type(a) is not type(b):
        return False
    if not isinstance(a, (tuple, list, dict)):
        return a == b
    if _seen is None:
        _seen = set()
    pair = (id(a), id(b))
    if pair in _seen:
        return True
    _seen.add(pair)
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(deep_equal(v, b[k], _seen) for k, v in a.items())
    return len(a) == len(b) and all(deep_equal(x, y, _seen) for x, y in zip(a, b))


class CallLog:
    """Append-only argument tuples per method, in record order.

    Recorded tuples are never replaced or reordered; readers get list copies
    so later calls cannot shift what a test already holds. The lock is shared
    with the engine's stub table.
    """

    def __init__(self, lock: threading.Lock) -> None:
        self._lock = lock
        self._calls: CallDict = {}

    def record(self, method_name: MethodName, args: Sequence[Any]) -> int:
        """Append one call.

        Args:
            method_name: Method that was called
            args: Positional arguments, receiver excluded

        Returns:
            Call count for the method after appending
        """
        entry: CallArgs = tuple(args)
        with self._lock:
            history = self._calls.setdefault(method_name, [])
            history.append(entry)
            count = len(history)
        if log.enabled():
            log.debug(f"CallLog.record: {method_name} call #{count - 1} args={entry!r}")
        return count

    def all(self, method_name: MethodName) -> CallHistory:
        """Copy of every recorded call; empty if there were none."""
        with self._lock:
            return list(self._calls.get(method_name, ()))

    def at(self, method_name: MethodName, idx: int) -> CallArgs:
        """Arguments of the idx-th call (0-based).

        Raises:
            OutOfRangeError: If idx is negative or not below the call count
        """
        with self._lock:
            history = self._calls.get(method_name, ())
            if not 0 <= idx < len(history):
                raise OutOfRangeError(method_name, idx, len(history))
            return history[idx]

    def last(self, method_name: MethodName) -> CallArgs:
        """Arguments of the most recent call.

        Raises:
            NoCallsError: If the method was never called
        """
        with self._lock:
            history = self._calls.get(method_name)
            if not history:
                raise NoCallsError(method_name)
            return history[-1]

    def count(self, method_name: MethodName) -> int:
        with self._lock:
            return len(self._calls.get(method_name, ()))

    def contains(self, method_name: MethodName, args: Sequence[Any]) -> bool:
        """Check if any recorded call structurally equals args."""
        wanted = tuple(args)
        return any(deep_equal(wanted, entry) for entry in self.all(method_name))
