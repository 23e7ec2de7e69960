from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .descriptors import BeanEntry, ParameterSpec
from .reflection import Reflection
from .registry import SingletonRegistry


@dataclass(frozen=True)
class Binding:
    kwargs: Dict[str, Any] = field(default_factory=dict)
    dependencies: Tuple[str, ...] = ()


class BindingResolver:
    """Type-directed lookup against the registry as it currently stands.

    When several entries satisfy a type, the first one in registry
    insertion order wins. There is no qualifier or primary mechanism.
    """

    def __init__(self, registry: SingletonRegistry, reflection: Reflection) -> None:
        self._registry = registry
        self._reflection = reflection

    def _matches(self, entry: BeanEntry, target_type: Any) -> bool:
        if entry.declared_type is not None and self._reflection.is_assignable_to(entry.declared_type, target_type):
            return True
        return self._reflection.is_assignable_to(type(entry.instance), target_type)

    def resolve(self, target_type: Any) -> Optional[BeanEntry]:
        if target_type is None:
            return None
        for entry in self._registry:
            if self._matches(entry, target_type):
                return entry
        return None

    def resolve_all(self, target_type: Any) -> List[BeanEntry]:
        if target_type is None:
            return []
        return [e for e in self._registry if self._matches(e, target_type)]

    def bind(self, parameters: Sequence[ParameterSpec], *, strict: bool = False) -> Optional[Binding]:
        """Resolve *parameters* against the registry as it stands.

        With ``strict`` every parameter whose type could ever be a bean must
        resolve; defaults and ``None`` for ``Optional`` only stand in for
        parameters without a usable type. Without it, an unresolved
        parameter with a default is omitted and an unresolved ``Optional``
        one receives ``None``.
        """
        kwargs: Dict[str, Any] = {}
        deps: List[str] = []
        for p in parameters:
            entry = self.resolve(p.key_type)
            if entry is not None:
                kwargs[p.parameter_name] = entry.instance
                deps.append(entry.name)
            elif strict and p.key_type is not None:
                return None
            elif p.has_default:
                continue
            elif p.is_optional:
                kwargs[p.parameter_name] = None
            else:
                return None
        return Binding(kwargs=kwargs, dependencies=tuple(deps))

    def unresolved(self, parameters: Sequence[ParameterSpec]) -> List[ParameterSpec]:
        return [
            p for p in parameters
            if not (p.has_default or p.is_optional) and self.resolve(p.key_type) is None
        ]
