import logging
from typing import Any, List, Mapping, Optional

from .config_builder import ContainerSettings
from .container import ApplicationContext, ContainerObserver
from .discovery import Namespace, TypeDiscovery
from .reflection import Reflection


def init(
    namespace: Namespace,
    *,
    settings: Optional[ContainerSettings] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    observers: Optional[List[ContainerObserver]] = None,
    discovery: Optional[TypeDiscovery] = None,
    reflection: Optional[Reflection] = None,
    container_id: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> ApplicationContext:
    """Create an :class:`ApplicationContext` for *namespace* and build it.

    Raises:
        UnresolvableDependencyError: If either build phase stalls.
        InvalidFactoryProductError: If a factory method returns ``None``.
    """
    ctx = ApplicationContext(
        namespace,
        discovery=discovery,
        reflection=reflection,
        settings=settings,
        overrides=overrides,
        observers=observers,
        container_id=container_id,
    )
    if logger:
        logger.info("Initializing container %s for %r", ctx.container_id, namespace)
    return ctx.init()
