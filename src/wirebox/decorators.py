# wirebox/decorators.py
from __future__ import annotations
from typing import Any, Optional

from .constants import (
    WIREBOX_ROLE, WIREBOX_BEAN, WIREBOX_NAME, WIREBOX_CONSTRUCTOR,
    ROLE_COMPONENT, ROLE_SERVICE, ROLE_REPOSITORY, ROLE_CONFIGURATION,
)


def _role(role: str):
    def mark(cls=None):
        def dec(c):
            setattr(c, WIREBOX_ROLE, role)
            return c
        return dec(cls) if cls else dec
    mark.__name__ = role
    mark.__doc__ = f"Tag a class with the '{role}' role so the scanner picks it up."
    return mark


component = _role(ROLE_COMPONENT)
service = _role(ROLE_SERVICE)
repository = _role(ROLE_REPOSITORY)
configuration = _role(ROLE_CONFIGURATION)


def bean(fn=None, *, name: Optional[str] = None):
    """
    Mark a method of a @configuration class as a factory method.

    The product is registered under `name` when given and non-empty,
    otherwise under the method's own name.
    """
    def dec(f):
        setattr(f, WIREBOX_BEAN, True)
        setattr(f, WIREBOX_NAME, name or None)
        return f
    return dec(fn) if fn else dec


def constructor(obj: Any):
    """
    Mark a classmethod as an alternate constructor, considered alongside __init__.
    Works above or below @classmethod.
    """
    target = obj.__func__ if isinstance(obj, classmethod) else obj
    setattr(target, WIREBOX_CONSTRUCTOR, True)
    return obj


def role_of(cls: type) -> Optional[str]:
    # own __dict__ only: subclasses of a tagged class are not tagged
    return vars(cls).get(WIREBOX_ROLE)


def is_factory_method(fn: Any) -> bool:
    return bool(getattr(fn, WIREBOX_BEAN, False))


def explicit_name_of(fn: Any) -> Optional[str]:
    return getattr(fn, WIREBOX_NAME, None)


def is_constructor(fn: Any) -> bool:
    return bool(getattr(fn, WIREBOX_CONSTRUCTOR, False))


__all__ = [
    "component", "service", "repository", "configuration",
    "bean", "constructor",
    "role_of", "is_factory_method", "explicit_name_of", "is_constructor",
]
