from dataclasses import dataclass
from typing import Optional

from .descriptors import ConstructorSignature, TypeDescriptor
from .resolver import Binding, BindingResolver


@dataclass(frozen=True)
class Selection:
    constructor: ConstructorSignature
    binding: Binding


class ConstructorSelector:
    """Pick the richest constructor whose parameters all bind right now."""

    def __init__(self, resolver: BindingResolver) -> None:
        self._resolver = resolver

    def select(self, descriptor: TypeDescriptor, *, strict: bool = True) -> Optional[Selection]:
        if not descriptor.constructors:
            # nothing declared: the bare class is a zero-argument constructor
            return Selection(ConstructorSignature("__init__", descriptor.cls), Binding())
        # sorted() is stable, so equal arity keeps declaration order
        for ctor in sorted(descriptor.constructors, key=lambda c: c.arity, reverse=True):
            binding = self._resolver.bind(ctor.parameters, strict=strict)
            if binding is not None:
                return Selection(ctor, binding)
        return None
