"""Descriptors consumed and produced by the resolution engines.

This module defines :class:`ParameterSpec` and :class:`ConstructorSignature`
(the injectable shape of a callable), :class:`TypeDescriptor` and
:class:`FactoryMethodDescriptor` (what discovery hands to the engines), and
:class:`BeanEntry` (what the engines put into the registry).
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple


def decapitalize(name: str) -> str:
    """Lower-case the first character of *name*, leaving the rest untouched.

    Example:
        >>> decapitalize("UserService")
        'userService'
    """
    if not name:
        return name
    return name[0].lower() + name[1:]


@dataclass(frozen=True)
class ParameterSpec:
    """One injectable parameter of a constructor or factory method.

    Attributes:
        parameter_name: Name used as the keyword argument.
        key_type: The annotated type to bind, or ``None`` when the
            parameter carries no usable annotation.
        is_optional: ``True`` for ``Optional[X]`` annotations.
        has_default: ``True`` when the signature declares a default value.
    """
    parameter_name: str
    key_type: Optional[Any]
    is_optional: bool = False
    has_default: bool = False

    def describe(self) -> str:
        type_name = getattr(self.key_type, "__name__", None) or str(self.key_type)
        return f"{self.parameter_name}: {type_name}"


@dataclass(frozen=True)
class ConstructorSignature:
    """A way to build an instance of a class.

    Attributes:
        name: ``"__init__"`` for the class itself, otherwise the name of the
            alternate constructor classmethod.
        target: The callable invoked with keyword arguments.
        parameters: Injectable parameters, in declaration order.
    """
    name: str
    target: Callable[..., Any]
    parameters: Tuple[ParameterSpec, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.parameters)


@dataclass(frozen=True)
class TypeDescriptor:
    """A concrete role-tagged class found by discovery.

    Attributes:
        cls: The class itself.
        role: One of the role names in :data:`wirebox.constants.ROLES`.
        constructors: Every candidate constructor, ``__init__`` first.
    """
    cls: type
    role: str
    constructors: Tuple[ConstructorSignature, ...] = ()

    @property
    def simple_name(self) -> str:
        return self.cls.__name__

    @property
    def bean_name(self) -> str:
        return decapitalize(self.simple_name)


@dataclass(frozen=True)
class FactoryMethodDescriptor:
    """A factory method bound to a configuration singleton.

    Attributes:
        owner_name: Bean name of the owning configuration instance.
        owner: The owning configuration instance.
        method_name: Attribute name of the method on the owner's class.
        method: The bound method to invoke.
        explicit_name: Bean name given to ``@bean(name=...)``, if any.
        parameters: Injectable parameters, in declaration order.
        return_type: The annotated return type, if it is a class.
    """
    owner_name: str
    owner: Any
    method_name: str
    method: Callable[..., Any]
    explicit_name: Optional[str] = None
    parameters: Tuple[ParameterSpec, ...] = ()
    return_type: Optional[type] = None

    @property
    def bean_name(self) -> str:
        return self.explicit_name or self.method_name

    @property
    def qualified_name(self) -> str:
        return f"{type(self.owner).__name__}.{self.method_name}"


@dataclass(frozen=True)
class BeanEntry:
    """A singleton stored in the registry.

    Attributes:
        name: Unique bean name.
        instance: The singleton itself.
        declared_type: The class (or factory return type) it was declared as.
        role: Role tag of the declaring class, ``None`` for factory and
            external beans.
        dependencies: Names of the beans its creation call needed; for a
            factory product the owning configuration comes first.
        origin: ``"class"``, ``"factory"`` or ``"external"``.
    """
    name: str
    instance: Any
    declared_type: Optional[type]
    role: Optional[str] = None
    dependencies: Tuple[str, ...] = ()
    origin: str = "class"
