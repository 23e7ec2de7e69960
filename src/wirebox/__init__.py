# wirebox/__init__.py
try:
    from importlib.metadata import version as _version
    __version__ = _version("wirebox")
except Exception:
    __version__ = "0.0.0"

from .container import ApplicationContext, ContainerObserver
from .decorators import component, service, repository, configuration, bean, constructor
from .descriptors import BeanEntry, ConstructorSignature, FactoryMethodDescriptor, ParameterSpec, TypeDescriptor
from .discovery import ModuleScanner, TypeDiscovery
from .reflection import DefaultReflection, Reflection
from .config_builder import ContainerSettings
from .config_builder import configuration as settings_from
from .config_sources import EnvSource, FlatDictSource, DictSource, JsonTreeSource, YamlTreeSource
from .exceptions import (
    WireboxError,
    UnresolvableDependencyError,
    InvalidFactoryProductError,
    NameCollisionError,
    ComponentCreationError,
    ContainerStateError,
    ConfigurationError,
    DiscoveryError,
)
from .api import init

__all__ = [
    "__version__",
    "ApplicationContext",
    "ContainerObserver",
    "init",
    "component",
    "service",
    "repository",
    "configuration",
    "bean",
    "constructor",
    "BeanEntry",
    "ConstructorSignature",
    "FactoryMethodDescriptor",
    "ParameterSpec",
    "TypeDescriptor",
    "ModuleScanner",
    "TypeDiscovery",
    "DefaultReflection",
    "Reflection",
    "ContainerSettings",
    "settings_from",
    "EnvSource",
    "FlatDictSource",
    "DictSource",
    "JsonTreeSource",
    "YamlTreeSource",
    "WireboxError",
    "UnresolvableDependencyError",
    "InvalidFactoryProductError",
    "NameCollisionError",
    "ComponentCreationError",
    "ContainerStateError",
    "ConfigurationError",
    "DiscoveryError",
]
