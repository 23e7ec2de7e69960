# src/wirebox/container.py
import random
import time
from typing import Any, Dict, List, Mapping, Optional, Protocol

from .config_builder import ContainerSettings
from .constants import LOGGER, ROLES, ROLE_CONFIGURATION, ORIGIN_EXTERNAL
from .descriptors import BeanEntry, FactoryMethodDescriptor, TypeDescriptor
from .discovery import ModuleScanner, Namespace, TypeDiscovery
from .exceptions import ContainerStateError
from .factory import FactoryMethodEngine
from .graph_export import export_graph
from .instantiation import ClassInstantiationEngine, PhaseReport
from .reflection import DefaultReflection, Reflection
from .registry import SingletonRegistry
from .resolver import BindingResolver

_NEW = "new"
_READY = "ready"
_FAILED = "failed"


class ContainerObserver(Protocol):
    """Receives callbacks while the container builds and serves beans."""

    def on_register(self, entry: BeanEntry, took_ms: float): ...
    def on_lookup(self, name: str, found: bool): ...


class ApplicationContext:
    """A singleton container built from the role-tagged types of a namespace.

    Constructing it only records what to scan; :meth:`init` discovers the
    types, builds every class-based bean, then every factory-method bean,
    and freezes the registry. Lookups are served only after a successful
    :meth:`init`. A failed build leaves no usable beans behind.
    """

    def __init__(
        self,
        namespace: Namespace,
        *,
        discovery: Optional[TypeDiscovery] = None,
        reflection: Optional[Reflection] = None,
        settings: Optional[ContainerSettings] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        observers: Optional[List[ContainerObserver]] = None,
        container_id: Optional[str] = None,
    ) -> None:
        self.namespace = namespace
        self.settings = settings or ContainerSettings()
        self._reflection = reflection or DefaultReflection()
        self._discovery = discovery or ModuleScanner(namespace, exclude=self.settings.exclude, reflection=self._reflection)
        self._overrides = dict(overrides or {})
        self._observers = list(observers or [])
        self.container_id = container_id or self._generate_container_id()
        self._registry = SingletonRegistry()
        self._state = _NEW
        self._reports: Dict[str, PhaseReport] = {}
        self._build_ms = 0.0
        self._lookup_count = 0

    @staticmethod
    def _generate_container_id() -> str:
        return f"c{time.time_ns():x}{random.randrange(1 << 16):04x}"

    def info(self, msg: str) -> None:
        LOGGER.info(f"[{self.container_id[:8]}] {msg}")

    def init(self) -> "ApplicationContext":
        if self._state == _READY:
            raise ContainerStateError("Container already initialized")
        if self._state == _FAILED:
            raise ContainerStateError("Container build failed; create a new container")

        t0 = time.perf_counter()
        try:
            self._build()
        except Exception:
            self._state = _FAILED
            self._registry = SingletonRegistry()
            self._registry.freeze()
            raise
        self._registry.freeze()
        self._state = _READY
        self._build_ms = (time.perf_counter() - t0) * 1000
        self.info(
            f"Initialized {len(self._registry)} beans in {self._build_ms:.1f} ms "
            f"({self._reports['class'].rounds} class rounds, {self._reports['factory'].rounds} factory rounds)"
        )
        return self

    def _build(self) -> None:
        for name, instance in self._overrides.items():
            self._registry.add(BeanEntry(name=name, instance=instance, declared_type=type(instance), origin=ORIGIN_EXTERNAL))

        types: List[TypeDescriptor] = []
        for role in ROLES:
            types.extend(self._discovery.list_types_with_role(role))
        LOGGER.debug("Discovered %d role-tagged types", len(types))

        class_engine = ClassInstantiationEngine(
            self._registry,
            self._reflection,
            on_name_collision=self.settings.on_name_collision,
            observers=self._observers,
        )
        self._reports["class"] = class_engine.run(types)

        methods: List[FactoryMethodDescriptor] = []
        for entry in self._registry.entries():
            if entry.role == ROLE_CONFIGURATION:
                methods.extend(self._discovery.list_factory_methods(entry.name, entry.instance))
        LOGGER.debug("Discovered %d factory methods", len(methods))

        factory_engine = FactoryMethodEngine(self._registry, self._reflection, observers=self._observers)
        self._reports["factory"] = factory_engine.run(methods)

    def _require_ready(self) -> None:
        if self._state != _READY:
            raise ContainerStateError(f"Container is not initialized (state: {self._state})")

    @property
    def initialized(self) -> bool:
        return self._state == _READY

    def get_bean(self, name: str, default: Any = None) -> Any:
        """Return the singleton registered under *name*, or *default*.

        The instance is returned as is; callers know what type they expect.
        """
        self._require_ready()
        entry = self._registry.get(name)
        self._lookup_count += 1
        for o in self._observers:
            o.on_lookup(name, entry is not None)
        return entry.instance if entry is not None else default

    gen_bean = get_bean

    def has_bean(self, name: str) -> bool:
        self._require_ready()
        return name in self._registry

    def __contains__(self, name: object) -> bool:
        return self.initialized and name in self._registry

    def bean_names(self) -> List[str]:
        self._require_ready()
        return self._registry.names()

    def beans_of_type(self, cls: type) -> Dict[str, Any]:
        """All beans assignable to *cls*, keyed by name, in registration order."""
        self._require_ready()
        resolver = BindingResolver(self._registry, self._reflection)
        return {e.name: e.instance for e in resolver.resolve_all(cls)}

    @property
    def registry(self) -> Mapping[str, BeanEntry]:
        self._require_ready()
        return self._registry.view()

    def stats(self) -> Dict[str, Any]:
        by_origin: Dict[str, int] = {}
        for e in self._registry:
            by_origin[e.origin] = by_origin.get(e.origin, 0) + 1
        return {
            "container_id": self.container_id,
            "state": self._state,
            "beans": len(self._registry),
            "beans_by_origin": by_origin,
            "class_rounds": self._reports["class"].rounds if "class" in self._reports else 0,
            "factory_rounds": self._reports["factory"].rounds if "factory" in self._reports else 0,
            "build_ms": self._build_ms,
            "lookups": self._lookup_count,
        }

    def export_graph(self, path: str, *, include_origin: bool = True, rankdir: str = "LR", title: Optional[str] = None) -> None:
        self._require_ready()
        export_graph(self._registry, path, include_origin=include_origin, rankdir=rankdir, title=title)
