from typing import List, Optional, Protocol

from wirebox.descriptors import ParameterSpec
from wirebox.reflection import DefaultReflection


class Repo: ...
class SqlRepo(Repo): ...


class Greeter(Protocol):
    def greet(self) -> str: ...


class English:
    def greet(self) -> str:
        return "hello"


class Mute: ...


reflection = DefaultReflection()


def test_parameter_types_of_init_skips_receiver():
    class Service:
        def __init__(self, repo: Repo, label: Optional[Repo], limit: int = 3, *args, **kwargs): ...

    params = reflection.parameter_types(Service.__init__, bound=False)

    assert params == (
        ParameterSpec("repo", Repo, False, False),
        ParameterSpec("label", Repo, True, False),
        ParameterSpec("limit", int, False, True),
    )


def test_unannotated_and_generic_parameters_have_no_key_type():
    def fn(a, b: List[Repo]): ...

    params = reflection.parameter_types(fn)

    assert [p.key_type for p in params] == [None, None]


def test_return_type():
    def make() -> SqlRepo: ...
    def untyped(): ...
    def generic() -> List[Repo]: ...

    assert reflection.return_type(make) is SqlRepo
    assert reflection.return_type(untyped) is None
    assert reflection.return_type(generic) is None


def test_is_assignable_to_is_covariant():
    assert reflection.is_assignable_to(SqlRepo, Repo)
    assert reflection.is_assignable_to(Repo, Repo)
    assert not reflection.is_assignable_to(Repo, SqlRepo)
    assert not reflection.is_assignable_to(SqlRepo, None)
    assert not reflection.is_assignable_to(SqlRepo, List[Repo])


def test_is_assignable_to_structural_protocol():
    assert reflection.is_assignable_to(English, Greeter)
    assert not reflection.is_assignable_to(Mute, Greeter)


def test_invoke_bound_method():
    class Owner:
        def build(self, n: int) -> int:
            return n * 2

    owner = Owner()
    assert reflection.invoke(owner, owner.build, {"n": 21}) == 42
    assert reflection.invoke(owner, Owner.build, {"n": 1}) == 2


def test_string_annotations_resolve_one_by_one():
    def fn(repo: "Repo", other: "NotDefinedAnywhere", maybe: "Optional[SqlRepo]" = None): ...

    params = reflection.parameter_types(fn)

    assert [p.key_type for p in params] == [Repo, None, SqlRepo]
    assert params[2].is_optional
