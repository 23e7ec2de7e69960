"""Exception hierarchy for wirebox.

All container-specific exceptions inherit from :class:`WireboxError`, making
it easy to catch any wirebox error with a single ``except WireboxError``
clause.
"""

from typing import Any, Iterable, Mapping, Optional


class WireboxError(Exception):
    """Base exception for all wirebox errors."""

    pass


class UnresolvableDependencyError(WireboxError):
    """Raised when a build round makes no progress while definitions remain.

    Covers both true circular dependencies and dependencies that are simply
    missing; the engines cannot tell the two apart.

    Attributes:
        phase: ``"class"`` or ``"factory"``.
        pending: Names of every definition still stuck, in pending order.
        details: Mapping of stuck definition name to the parameter
            descriptions that could not be bound.
    """

    def __init__(self, phase: str, pending: Iterable[str], details: Optional[Mapping[str, Iterable[str]]] = None):
        self.phase = phase
        self.pending = list(pending)
        self.details = {k: list(v) for k, v in (details or {}).items()}
        lines = [f"Unresolvable dependencies in {phase} phase (circular or missing):"]
        for name in self.pending:
            missing = self.details.get(name)
            if missing:
                lines.append(f"- {name} (unresolved: {', '.join(missing)})")
            else:
                lines.append(f"- {name}")
        super().__init__("\n".join(lines))


class InvalidFactoryProductError(WireboxError):
    """Raised when a factory method returns ``None``.

    Attributes:
        bean_name: The name the product would have been registered under.
        method: Qualified ``Owner.method`` name of the factory method.
    """

    def __init__(self, bean_name: str, method: str):
        super().__init__(f"Factory method {method} returned None for bean '{bean_name}'")
        self.bean_name = bean_name
        self.method = method


class NameCollisionError(WireboxError):
    """Raised under the ``"error"`` collision policy when a bean name is taken.

    Attributes:
        name: The contested bean name.
        existing: The type of the bean already registered.
        rejected: The type of the newly built bean.
    """

    def __init__(self, name: str, existing: Any, rejected: Any):
        existing_name = getattr(existing, "__name__", str(existing))
        rejected_name = getattr(rejected, "__name__", str(rejected))
        super().__init__(f"Bean name '{name}' already registered by {existing_name}; cannot register {rejected_name}")
        self.name = name
        self.existing = existing
        self.rejected = rejected


class ComponentCreationError(WireboxError):
    """Raised when a constructor or factory method fails while creating a bean.

    Attributes:
        name: The bean name whose creation failed.
        cause: The original exception that caused the failure.
    """

    def __init__(self, name: str, cause: Exception):
        super().__init__(f"Failed to create bean '{name}'; cause: {cause.__class__.__name__}: {cause}")
        self.name = name
        self.cause = cause


class ContainerStateError(WireboxError):
    """Raised when the container is used outside its lifecycle (lookup before init, double init)."""

    def __init__(self, msg: str):
        super().__init__(msg)


class ConfigurationError(WireboxError):
    """Raised for configuration problems (invalid values, unreadable sources)."""

    def __init__(self, msg: str):
        super().__init__(msg)


class DiscoveryError(WireboxError):
    """Raised when a namespace handed to the scanner cannot be imported."""

    def __init__(self, msg: str):
        super().__init__(msg)
