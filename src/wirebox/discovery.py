import fnmatch
import importlib
import inspect
import pkgutil
import logging
from typing import Any, Iterable, List, Optional, Protocol, Sequence, Set, Tuple, Union

from .decorators import role_of, is_constructor, is_factory_method, explicit_name_of
from .descriptors import ConstructorSignature, FactoryMethodDescriptor, TypeDescriptor
from .exceptions import DiscoveryError
from .reflection import DefaultReflection, Reflection

_logger = logging.getLogger(__name__)

Namespace = Union[str, Any, Iterable[Union[str, Any]]]


class TypeDiscovery(Protocol):
    """What the container needs from a type scanner."""

    def list_types_with_role(self, role: str) -> List[TypeDescriptor]: ...
    def list_factory_methods(self, owner_name: str, owner: Any) -> List[FactoryMethodDescriptor]: ...


def _scan_package(package) -> Iterable[Any]:
    for _, name, _ in pkgutil.walk_packages(package.__path__, package.__name__ + "."):
        yield importlib.import_module(name)


def _import(name: str):
    try:
        return importlib.import_module(name)
    except ImportError as e:
        raise DiscoveryError(f"Cannot import namespace '{name}': {e}") from e


def _iter_input_modules(inputs: Namespace) -> Iterable[Any]:
    seq = inputs if isinstance(inputs, Iterable) and not inspect.ismodule(inputs) and not isinstance(inputs, str) else [inputs]
    seen: Set[str] = set()
    for it in seq:
        mod = _import(it) if isinstance(it, str) else it
        name = getattr(mod, "__name__", None)
        if name and name not in seen:
            seen.add(name)
            yield mod
        if hasattr(mod, "__path__"):
            for sub in _scan_package(mod):
                sub_name = getattr(sub, "__name__", None)
                if sub_name and sub_name not in seen:
                    seen.add(sub_name)
                    yield sub


def constructors_of(cls: type, reflection: Reflection) -> Tuple[ConstructorSignature, ...]:
    ctors: List[ConstructorSignature] = []
    if cls.__init__ is object.__init__:
        ctors.append(ConstructorSignature("__init__", cls, ()))
    else:
        ctors.append(ConstructorSignature("__init__", cls, reflection.parameter_types(cls.__init__, bound=False)))
    for name, attr in vars(cls).items():
        if isinstance(attr, classmethod) and is_constructor(attr.__func__):
            bound = getattr(cls, name)
            ctors.append(ConstructorSignature(name, bound, reflection.parameter_types(bound)))
    return tuple(ctors)


def _declared_members(cls: type) -> List[str]:
    # base classes first, each in definition order
    names: List[str] = []
    seen: Set[str] = set()
    for klass in reversed(cls.__mro__):
        for name in vars(klass):
            if name not in seen:
                seen.add(name)
                names.append(name)
    return names


class ModuleScanner:
    """Finds role-tagged classes in one or more packages or modules.

    Modules are visited in ``pkgutil.walk_packages`` order and classes in
    definition order, so the descriptors it returns come out in the same
    order on every run.

    Args:
        namespace: A package or module name, a module object, or an
            iterable of those.
        exclude: ``fnmatch`` patterns of module names to skip.
        reflection: Used to read constructor and factory signatures.
    """

    def __init__(self, namespace: Namespace, *, exclude: Sequence[str] = (), reflection: Optional[Reflection] = None) -> None:
        self._namespace = namespace
        self._exclude = tuple(exclude)
        self._reflection = reflection or DefaultReflection()
        self._classes: Optional[List[type]] = None

    def _excluded(self, module_name: str) -> bool:
        return any(fnmatch.fnmatch(module_name, pat) for pat in self._exclude)

    def _candidates(self) -> List[type]:
        if self._classes is not None:
            return self._classes
        classes: List[type] = []
        seen: Set[int] = set()
        for mod in _iter_input_modules(self._namespace):
            if self._excluded(mod.__name__):
                _logger.debug("Excluded module %s", mod.__name__)
                continue
            for obj in list(vars(mod).values()):
                if not inspect.isclass(obj) or id(obj) in seen or role_of(obj) is None:
                    continue
                seen.add(id(obj))
                # re-exported from an excluded module
                if self._excluded(getattr(obj, "__module__", "") or ""):
                    continue
                if inspect.isabstract(obj) or getattr(obj, "_is_protocol", False):
                    _logger.warning("Ignoring %s: role-tagged type is abstract", obj.__name__)
                    continue
                classes.append(obj)
        self._classes = classes
        return classes

    def list_types_with_role(self, role: str) -> List[TypeDescriptor]:
        return [
            TypeDescriptor(cls=c, role=role, constructors=constructors_of(c, self._reflection))
            for c in self._candidates()
            if role_of(c) == role
        ]

    def list_factory_methods(self, owner_name: str, owner: Any) -> List[FactoryMethodDescriptor]:
        cls = type(owner)
        out: List[FactoryMethodDescriptor] = []
        for name in _declared_members(cls):
            attr = inspect.getattr_static(cls, name)
            if not inspect.isfunction(attr) or not is_factory_method(attr):
                continue
            method = getattr(owner, name)
            out.append(
                FactoryMethodDescriptor(
                    owner_name=owner_name,
                    owner=owner,
                    method_name=name,
                    method=method,
                    explicit_name=explicit_name_of(attr),
                    parameters=self._reflection.parameter_types(method),
                    return_type=self._reflection.return_type(method),
                )
            )
        return out
