"""Reflection capability used by the engines.

The engines never inspect classes or functions themselves; they go through a
:class:`Reflection` implementation. :class:`DefaultReflection` is the stock
one, built on :mod:`inspect` and :func:`typing.get_type_hints`.
"""

import inspect
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, Union, get_args, get_origin, get_type_hints

from .descriptors import ConstructorSignature, ParameterSpec


class Reflection(Protocol):
    """Capability interface over the language's reflection primitives."""

    def instantiate(self, cls: type, constructor: ConstructorSignature, args: Dict[str, Any]) -> Any: ...
    def invoke(self, owner: Any, method: Callable[..., Any], args: Dict[str, Any]) -> Any: ...
    def parameter_types(self, fn: Callable[..., Any], *, bound: bool = True) -> Tuple[ParameterSpec, ...]: ...
    def return_type(self, fn: Callable[..., Any]) -> Optional[type]: ...
    def is_assignable_to(self, concrete: Any, target: Any) -> bool: ...


def _check_optional(ann: Any) -> Tuple[Any, bool]:
    origin = get_origin(ann)
    if origin is Union:
        args = [a for a in get_args(ann) if a is not type(None)]
        if len(args) == 1:
            return args[0], True
    return ann, False


def _resolve_each(fn: Callable[..., Any]) -> Dict[str, Any]:
    # evaluate annotations one at a time so one bad forward reference
    # does not hide the others
    target = inspect.unwrap(getattr(fn, "__func__", fn))
    globalns = getattr(target, "__globals__", {})
    hints: Dict[str, Any] = {}
    for name, ann in getattr(target, "__annotations__", {}).items():
        if isinstance(ann, str):
            try:
                ann = eval(ann, globalns)
            except Exception:
                continue
        hints[name] = ann
    return hints


def _type_hints(fn: Callable[..., Any]) -> Dict[str, Any]:
    try:
        return get_type_hints(fn)
    except Exception:
        return _resolve_each(fn)


def _protocol_members(proto: type) -> set:
    attrs = getattr(proto, "__protocol_attrs__", None)
    if attrs is not None:
        return set(attrs)
    members: set = set()
    for base in proto.__mro__[:-1]:
        if base.__name__ in ("Protocol", "Generic"):
            continue
        members.update(n for n in vars(base) if not n.startswith("_"))
        members.update(getattr(base, "__annotations__", {}))
    return members


def implements_protocol(cls: type, proto: type) -> bool:
    members = _protocol_members(proto)
    return bool(members) and all(hasattr(cls, m) for m in members)


class DefaultReflection:
    def instantiate(self, cls: type, constructor: ConstructorSignature, args: Dict[str, Any]) -> Any:
        return constructor.target(**args)

    def invoke(self, owner: Any, method: Callable[..., Any], args: Dict[str, Any]) -> Any:
        if inspect.ismethod(method) and method.__self__ is owner:
            return method(**args)
        return method(owner, **args)

    def parameter_types(self, fn: Callable[..., Any], *, bound: bool = True) -> Tuple[ParameterSpec, ...]:
        """Describe the injectable parameters of *fn*.

        Args:
            fn: The callable to analyse.
            bound: ``False`` when *fn* is a plain function whose first
                positional parameter is the receiver (``cls.__init__``).

        Returns:
            One :class:`ParameterSpec` per named parameter; ``*args`` and
            ``**kwargs`` are skipped.
        """
        try:
            sig = inspect.signature(fn)
        except (ValueError, TypeError):
            return ()

        hints = _type_hints(fn)
        params = list(sig.parameters.values())
        if not bound and params:
            params = params[1:]

        plan: List[ParameterSpec] = []
        for param in params:
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            ann = hints.get(param.name, param.annotation)
            if ann is inspect.Parameter.empty or isinstance(ann, str):
                ann = None
            base, is_optional = _check_optional(ann)
            key_type = base if isinstance(base, type) else None
            plan.append(
                ParameterSpec(
                    parameter_name=param.name,
                    key_type=key_type,
                    is_optional=is_optional,
                    has_default=param.default is not inspect.Parameter.empty,
                )
            )
        return tuple(plan)

    def return_type(self, fn: Callable[..., Any]) -> Optional[type]:
        ret = _type_hints(fn).get("return")
        return ret if isinstance(ret, type) else None

    def is_assignable_to(self, concrete: Any, target: Any) -> bool:
        if not isinstance(concrete, type) or not isinstance(target, type):
            return False
        if target in concrete.__mro__:
            return True
        if getattr(target, "_is_protocol", False):
            return implements_protocol(concrete, target)
        try:
            return issubclass(concrete, target)
        except TypeError:
            return False
