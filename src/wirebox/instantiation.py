"""Class instantiation engine: the first build phase.

Drains the pending class definitions into the registry by repeated rounds.
Each round tries every pending definition against the registry as it stands
at that moment, so definitions may arrive in any order. A round that builds
nothing while definitions remain means the remaining set is circular or
depends on something that will never exist.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from .constants import COLLISION_ERROR, COLLISION_SKIP, ORIGIN_CLASS
from .descriptors import BeanEntry, TypeDescriptor
from .exceptions import ComponentCreationError, NameCollisionError, UnresolvableDependencyError
from .reflection import Reflection
from .registry import SingletonRegistry
from .resolver import BindingResolver
from .selector import ConstructorSelector

_logger = logging.getLogger(__name__)


@dataclass
class PhaseReport:
    """Outcome of one engine run.

    Attributes:
        rounds: Number of rounds executed.
        registered: Bean names added, in registration order.
        skipped: Bean names whose definition was dropped because the name
            was already taken.
    """
    rounds: int = 0
    registered: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


class ClassInstantiationEngine:
    def __init__(
        self,
        registry: SingletonRegistry,
        reflection: Reflection,
        *,
        on_name_collision: str = COLLISION_SKIP,
        observers: Optional[Iterable] = None,
    ) -> None:
        self._registry = registry
        self._reflection = reflection
        self._resolver = BindingResolver(registry, reflection)
        self._selector = ConstructorSelector(self._resolver)
        self._on_name_collision = on_name_collision
        self._observers = list(observers or [])

    def run(self, descriptors: Sequence[TypeDescriptor]) -> PhaseReport:
        pending: List[TypeDescriptor] = list(descriptors)
        report = PhaseReport()

        while pending:
            report.rounds += 1
            still_pending, progress = self._pass(pending, report, strict=True)
            if still_pending and not progress:
                # no definition is fully wired: let one fall back to its defaults
                still_pending, progress = self._pass(still_pending, report, strict=False, limit=1)

            _logger.debug(
                "Class round %d: %d built, %d pending",
                report.rounds, len(pending) - len(still_pending), len(still_pending),
            )
            pending = still_pending
            if pending and not progress:
                raise UnresolvableDependencyError(
                    "class",
                    [d.simple_name for d in pending],
                    {d.simple_name: self._unresolved(d) for d in pending},
                )

        return report

    def _pass(
        self,
        pending: List[TypeDescriptor],
        report: PhaseReport,
        *,
        strict: bool,
        limit: Optional[int] = None,
    ) -> Tuple[List[TypeDescriptor], bool]:
        built = 0
        still_pending: List[TypeDescriptor] = []

        for idx, desc in enumerate(pending):
            if limit is not None and built >= limit:
                still_pending.extend(pending[idx:])
                break
            selection = self._selector.select(desc, strict=strict)
            if selection is None:
                still_pending.append(desc)
                continue

            t0 = time.perf_counter()
            try:
                instance = self._reflection.instantiate(desc.cls, selection.constructor, selection.binding.kwargs)
            except Exception as creation_error:
                raise ComponentCreationError(desc.bean_name, creation_error) from creation_error
            took_ms = (time.perf_counter() - t0) * 1000

            entry = BeanEntry(
                name=desc.bean_name,
                instance=instance,
                declared_type=desc.cls,
                role=desc.role,
                dependencies=selection.binding.dependencies,
                origin=ORIGIN_CLASS,
            )
            if self._registry.add(entry):
                built += 1
                report.registered.append(entry.name)
                for o in self._observers:
                    o.on_register(entry, took_ms)
            else:
                self._collide(desc)
                report.skipped.append(entry.name)

        return still_pending, built > 0

    def _collide(self, desc: TypeDescriptor) -> None:
        existing = self._registry.get(desc.bean_name)
        existing_type = existing.declared_type if existing is not None else None
        if self._on_name_collision == COLLISION_ERROR:
            raise NameCollisionError(desc.bean_name, existing_type, desc.cls)
        _logger.warning(
            "Bean name '%s' already taken by %s; discarding instance of %s",
            desc.bean_name, getattr(existing_type, "__name__", existing_type), desc.simple_name,
        )

    def _unresolved(self, desc: TypeDescriptor) -> List[str]:
        # report the richest constructor: it is the one the selector tries first
        if not desc.constructors:
            return []
        ctor = max(desc.constructors, key=lambda c: c.arity)
        return [p.describe() for p in self._resolver.unresolved(ctor.parameters)]
