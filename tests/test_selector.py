from wirebox import constructor
from wirebox.descriptors import BeanEntry, TypeDescriptor
from wirebox.discovery import constructors_of
from wirebox.reflection import DefaultReflection
from wirebox.registry import SingletonRegistry
from wirebox.resolver import BindingResolver
from wirebox.selector import ConstructorSelector


class Repo: ...
class Clock: ...


class Report:
    def __init__(self, repo: Repo, clock: Clock):
        self.repo = repo
        self.clock = clock
        self.how = "full"

    @constructor
    @classmethod
    def blank(cls):
        inst = cls.__new__(cls)
        inst.repo = inst.clock = None
        inst.how = "blank"
        return inst


reflection = DefaultReflection()


def _selector(*instances):
    registry = SingletonRegistry()
    for inst in instances:
        registry.add(BeanEntry(type(inst).__name__.lower(), inst, type(inst)))
    return ConstructorSelector(BindingResolver(registry, reflection))


def _descriptor(cls):
    return TypeDescriptor(cls, "service", constructors_of(cls, reflection))


def test_richest_resolvable_constructor_wins():
    selection = _selector(Repo(), Clock()).select(_descriptor(Report))

    assert selection.constructor.name == "__init__"
    assert set(selection.binding.kwargs) == {"repo", "clock"}


def test_falls_back_to_smaller_constructor():
    selection = _selector(Repo()).select(_descriptor(Report))

    assert selection.constructor.name == "blank"
    assert selection.binding.kwargs == {}


def test_currently_unsatisfiable_returns_none():
    class NeedsRepo:
        def __init__(self, repo: Repo): ...

    assert _selector().select(_descriptor(NeedsRepo)) is None


def test_plain_class_is_trivially_satisfiable():
    class Plain: ...

    desc = _descriptor(Plain)
    selection = _selector().select(desc)

    assert desc.constructors[0].arity == 0
    assert selection.constructor.target is Plain


def test_descriptor_without_constructors_uses_the_class():
    class Bare: ...

    selection = _selector().select(TypeDescriptor(Bare, "component", ()))

    assert selection.constructor.target is Bare
    assert selection.binding.kwargs == {}
