"""Signature shape checks between stubs and the subject's real methods.

A stub is called exactly like the real method would be called through its
class: the subject instance first, followed by the positional arguments.
"""
from __future__ import annotations
import inspect
import types
import typing
from dataclasses import dataclass
from typing import Any, List, Optional, Set, Tuple
from ..core.exceptions import ConfigurationError
from ..types import MethodName, StubFn, TypeName
from ..utils.logger import log

EMPTY = inspect.Parameter.empty


@dataclass(frozen=True)
class Slot:
    """One parameter position of a signature shape."""
    kind: Any  # inspect.Parameter.kind
    annotation: Any


@dataclass(frozen=True)
class Shape:
    """Ordered parameter slots (receiver first) and ordered return types."""
    params: Tuple[Slot, ...]
    returns: Tuple[Any, ...]

    @property
    def arity(self) -> int:
        """Number of results a call produces."""
        return len(self.returns)


def type_name(subject: Any) -> TypeName:
    """Display name of the subject's type."""
    return type(subject).__name__


def resolve_method(subject: Any, method_name: MethodName) -> Optional[StubFn]:
    """Look up a real instance method on the subject's type.

    Args:
        subject: Object whose type is searched
        method_name: Method name

    Returns:
        The class-level function (receiver not bound), or None when the type
        has no such instance method. Properties, staticmethods, classmethods
        and plain attributes are not instance methods.
    """
    cls = type(subject)
    try:
        attr = inspect.getattr_static(cls, method_name)
    except AttributeError:
        return None
    if isinstance(attr, (staticmethod, classmethod)):
        return None
    if not (inspect.isfunction(attr) or inspect.ismethoddescriptor(attr)):
        return None
    return getattr(cls, method_name)


def _resolve(annotation: Any, globalns: dict) -> Any:
    """Evaluate one string annotation; names that don't resolve stay as text."""
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns)
    except (NameError, AttributeError, SyntaxError, TypeError):
        return annotation


def _signature(fn: StubFn) -> inspect.Signature:
    sig = inspect.signature(fn)
    target = inspect.unwrap(getattr(fn, "func", fn))
    globalns = getattr(target, "__globals__", None) or {}
    params = [
        p.replace(annotation=_resolve(p.annotation, globalns))
        for p in sig.parameters.values()
    ]
    return sig.replace(
        parameters=params,
        return_annotation=_resolve(sig.return_annotation, globalns),
    )


_TUPLE_PREFIXES = ("tuple[", "Tuple[", "typing.Tuple[")


def _split_members(inner: str) -> List[str]:
    """Split 'A, B[C, D]' on top-level commas."""
    members, depth, start = [], 0, 0
    for i, ch in enumerate(inner):
        if ch in "[(":
            depth += 1
        elif ch in "])":
            depth -= 1
        elif ch == "," and depth == 0:
            members.append(inner[start:i].strip())
            start = i + 1
    tail = inner[start:].strip()
    if tail:
        members.append(tail)
    return members


def _text_return_shape(text: str) -> Tuple[Any, ...]:
    text = text.strip()
    if text in ("None", "NoneType"):
        return ()
    for prefix in _TUPLE_PREFIXES:
        if text.startswith(prefix) and text.endswith("]"):
            members = _split_members(text[len(prefix):-1])
            if members in ([], ["()"]):
                return ()
            if len(members) == 2 and members[1] == "...":
                return (text,)
            return tuple(members)
    return (text,)


def return_shape(annotation: Any) -> Tuple[Any, ...]:
    """Expand a return annotation into an ordered tuple of result types.

    Args:
        annotation: Return annotation, resolved or left as text

    Returns:
        () for None, the member types of a fixed-size tuple annotation,
        otherwise a single entry (which may be the empty marker).
    """
    if isinstance(annotation, str):
        return _text_return_shape(annotation)
    if annotation is None or annotation is type(None):
        return ()
    if annotation is typing.Tuple:
        return (annotation,)
    if typing.get_origin(annotation) is tuple:
        args = typing.get_args(annotation)
        if args in ((), ((),)):
            return ()
        if len(args) == 2 and args[1] is Ellipsis:
            return (annotation,)
        return tuple(args)
    return (annotation,)


def shape_of(fn: StubFn) -> Shape:
    """Derive the signature shape of a callable.

    Raises:
        ConfigurationError: If the callable has no introspectable signature
    """
    try:
        sig = _signature(fn)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"cannot inspect signature of {fn!r}: {e}") from e
    params = tuple(Slot(p.kind, p.annotation) for p in sig.parameters.values())
    return Shape(params, return_shape(sig.return_annotation))


def result_arity(fn: StubFn) -> int:
    """Number of results fn declares; callables without a signature count as one."""
    try:
        return shape_of(fn).arity
    except ConfigurationError:
        return 1


def _fmt(annotation: Any) -> str:
    if annotation is EMPTY:
        return "<untyped>"
    if isinstance(annotation, str):
        return annotation
    return inspect.formatannotation(annotation)


def _spellings(annotation: Any) -> Set[str]:
    """Ways a resolved annotation can be written as text."""
    names = {inspect.formatannotation(annotation)}
    if isinstance(annotation, type):
        names.update((annotation.__name__, annotation.__qualname__))
        names.add(f"{annotation.__module__}.{annotation.__qualname__}")
    return names


def _normalize(annotation: Any) -> Any:
    """Fold alias spellings together: List[int] -> list[int], Optional[X] -> X | None."""
    origin = typing.get_origin(annotation)
    if origin is None:
        return annotation
    if origin is types.UnionType:
        origin = typing.Union
    args = typing.get_args(annotation)
    if not args:
        return origin
    return (origin, tuple(_normalize(a) for a in args))


def same_type(expected: Any, actual: Any) -> bool:
    """Compare two annotations, each either resolved or left as text."""
    if expected is EMPTY or actual is EMPTY:
        return expected is actual
    if isinstance(expected, str) and isinstance(actual, str):
        return expected.replace(" ", "") == actual.replace(" ", "")
    if isinstance(expected, str):
        return expected in _spellings(actual)
    if isinstance(actual, str):
        return actual in _spellings(expected)
    return _normalize(expected) == _normalize(actual)


def _receiver_ok(subject: Any, expected: Slot, actual: Slot) -> bool:
    """Receiver slot: an untyped `self` accepts untyped or any class of the subject."""
    if expected.annotation is not EMPTY:
        return same_type(expected.annotation, actual.annotation)
    if actual.annotation is EMPTY:
        return True
    if isinstance(actual.annotation, str):
        return any(actual.annotation in _spellings(cls) for cls in type(subject).__mro__)
    return isinstance(actual.annotation, type) and isinstance(subject, actual.annotation)


def validate_stub_signature(subject: Any, method_name: MethodName, fn: Any) -> None:
    """Check fn against the real method's shape.

    Args:
        subject: Object being stubbed
        method_name: Name of the real method fn replaces
        fn: Candidate stub; must take the subject as its first parameter

    Raises:
        ConfigurationError: If fn is not callable, the method does not exist,
            or any parameter/return count, kind or type differs
    """
    if not callable(fn):
        raise ConfigurationError(f"fn must be callable, got {type(fn).__name__}")

    so_name = type_name(subject)
    method = resolve_method(subject, method_name)
    if method is None:
        raise ConfigurationError(f"method_name ({method_name}) must be a method of {so_name}")

    real = shape_of(method)
    cand = shape_of(fn)
    where = f"{so_name}.{method_name}"

    if len(real.params) != len(cand.params):
        raise ConfigurationError(
            f"fn must have the same arg count as {where}'s func signature "
            f"({len(real.params)} expected, {len(cand.params)} given)\n"
            "Did you forget to include the receiver arg?"
        )
    if real.arity != cand.arity:
        raise ConfigurationError(
            f"fn must have the same return count as {where}'s func signature "
            f"({real.arity} expected, {cand.arity} given)"
        )

    for i, (exp, act) in enumerate(zip(real.params, cand.params)):
        if exp.kind != act.kind:
            raise ConfigurationError(
                f"fn param #{i} must have the same kind as {where}'s func signature:"
                f"\n\t{exp.kind.description} (expected) is not {act.kind.description} (actual)"
            )
        same = _receiver_ok(subject, exp, act) if i == 0 else same_type(exp.annotation, act.annotation)
        if not same:
            raise ConfigurationError(
                f"fn param #{i} must have the same type as {where}'s func signature:"
                f"\n\t{_fmt(exp.annotation)} (expected) is not {_fmt(act.annotation)} (actual)"
            )
    for i, (exp, act) in enumerate(zip(real.returns, cand.returns)):
        if not same_type(exp, act):
            raise ConfigurationError(
                f"fn return #{i} must have the same type as {where}'s func signature:"
                f"\n\t{_fmt(exp)} (expected) is not {_fmt(act)} (actual)"
            )
    if log.enabled():
        log.debug(f"validate_stub_signature: {where} accepted {fn!r}")
