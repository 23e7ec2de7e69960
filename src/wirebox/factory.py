"""Factory method engine: the second build phase.

Runs once every class-based bean exists. Factory methods of configuration
singletons are invoked in repeated rounds, mirroring the class engine, so a
factory method may depend on the product of another one declared after it.
"""

import logging
import time
from typing import Iterable, List, Optional, Sequence, Tuple

from .constants import ORIGIN_FACTORY
from .descriptors import BeanEntry, FactoryMethodDescriptor
from .exceptions import ComponentCreationError, InvalidFactoryProductError, UnresolvableDependencyError
from .instantiation import PhaseReport
from .reflection import Reflection
from .registry import SingletonRegistry
from .resolver import BindingResolver

_logger = logging.getLogger(__name__)


class FactoryMethodEngine:
    def __init__(self, registry: SingletonRegistry, reflection: Reflection, *, observers: Optional[Iterable] = None) -> None:
        self._registry = registry
        self._reflection = reflection
        self._resolver = BindingResolver(registry, reflection)
        self._observers = list(observers or [])

    def run(self, descriptors: Sequence[FactoryMethodDescriptor]) -> PhaseReport:
        pending: List[FactoryMethodDescriptor] = list(descriptors)
        report = PhaseReport()

        while pending:
            report.rounds += 1
            still_pending, progress = self._pass(pending, report, strict=True)
            if still_pending and not progress:
                # same fallback as the class phase: one method may use its defaults
                still_pending, progress = self._pass(still_pending, report, strict=False, limit=1)

            _logger.debug("Factory round %d: %d pending", report.rounds, len(still_pending))
            pending = still_pending
            if pending and not progress:
                raise UnresolvableDependencyError(
                    "factory",
                    [d.qualified_name for d in pending],
                    {d.qualified_name: [p.describe() for p in self._resolver.unresolved(d.parameters)] for d in pending},
                )

        return report

    def _pass(
        self,
        pending: List[FactoryMethodDescriptor],
        report: PhaseReport,
        *,
        strict: bool,
        limit: Optional[int] = None,
    ) -> Tuple[List[FactoryMethodDescriptor], bool]:
        built = 0
        still_pending: List[FactoryMethodDescriptor] = []

        for idx, desc in enumerate(pending):
            if limit is not None and built >= limit:
                still_pending.extend(pending[idx:])
                break
            name = desc.bean_name
            if name in self._registry:
                _logger.debug("Skipping factory method %s: bean '%s' already registered", desc.qualified_name, name)
                report.skipped.append(name)
                continue

            binding = self._resolver.bind(desc.parameters, strict=strict)
            if binding is None:
                still_pending.append(desc)
                continue

            t0 = time.perf_counter()
            try:
                product = self._reflection.invoke(desc.owner, desc.method, binding.kwargs)
            except Exception as creation_error:
                raise ComponentCreationError(name, creation_error) from creation_error
            took_ms = (time.perf_counter() - t0) * 1000

            if product is None:
                raise InvalidFactoryProductError(name, desc.qualified_name)

            entry = BeanEntry(
                name=name,
                instance=product,
                declared_type=desc.return_type or type(product),
                role=None,
                dependencies=(desc.owner_name,) + binding.dependencies,
                origin=ORIGIN_FACTORY,
            )
            self._registry.add(entry)
            built += 1
            report.registered.append(name)
            for o in self._observers:
                o.on_register(entry, took_ms)

        return still_pending, built > 0
