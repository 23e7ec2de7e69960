"""Container settings and the builder that assembles them from sources.

Sources are applied in the order given; a later source overrides an earlier
one for every key it defines, and ``overrides`` beat every source.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from .config_sources import FlatSource, TreeSource
from .constants import COLLISION_ERROR, COLLISION_SKIP
from .exceptions import ConfigurationError

_COLLISION_POLICIES = (COLLISION_SKIP, COLLISION_ERROR)


@dataclass(frozen=True)
class ContainerSettings:
    """Immutable settings passed to :class:`~wirebox.container.ApplicationContext`.

    Attributes:
        on_name_collision: ``"skip"`` discards a class-based bean whose name
            is already registered; ``"error"`` aborts the build instead.
        exclude: ``fnmatch`` patterns of module names the scanner skips.
    """

    on_name_collision: str = COLLISION_SKIP
    exclude: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.on_name_collision not in _COLLISION_POLICIES:
            raise ConfigurationError(
                f"Invalid on_name_collision '{self.on_name_collision}'; expected one of {list(_COLLISION_POLICIES)}"
            )


def _coerce_exclude(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        return tuple(p.strip() for p in value.split(",") if p.strip())
    if isinstance(value, (list, tuple)):
        return tuple(str(p) for p in value)
    raise ConfigurationError(f"Invalid exclude value: {value!r}")


def _coerce(key: str, value: Any) -> Any:
    if key == "exclude":
        return _coerce_exclude(value)
    if not isinstance(value, str):
        raise ConfigurationError(f"Invalid {key} value: {value!r}")
    return value.strip().lower()


def configuration(*sources: Any, overrides: Optional[Mapping[str, Any]] = None) -> ContainerSettings:
    """Build :class:`ContainerSettings` from one or more sources.

    Args:
        *sources: ``EnvSource``, ``FlatDictSource``, ``DictSource``,
            ``JsonTreeSource`` or ``YamlTreeSource`` instances.
        overrides: Values that take precedence over all sources.

    Returns:
        The resulting immutable settings.

    Raises:
        ConfigurationError: If a source has an unknown type, or a value is
            invalid.

    Example:
        >>> settings = configuration(EnvSource(), DictSource({"exclude": ["app.legacy*"]}))
    """
    keys = [f.name for f in fields(ContainerSettings)]
    values: Dict[str, Any] = {}

    for src in sources:
        if isinstance(src, FlatSource):
            for k in keys:
                v = src.get(k)
                if v is not None:
                    values[k] = _coerce(k, v)
        elif isinstance(src, TreeSource):
            tree = src.get_tree()
            if not isinstance(tree, Mapping):
                raise ConfigurationError(f"Config tree must be a mapping, got {type(tree).__name__}")
            for k in keys:
                if k in tree:
                    values[k] = _coerce(k, tree[k])
        else:
            raise ConfigurationError(f"Unknown configuration source type: {type(src)}")

    for k, v in dict(overrides or {}).items():
        if k not in keys:
            raise ConfigurationError(f"Unknown setting '{k}'")
        values[k] = _coerce(k, v)

    return ContainerSettings(**values)
