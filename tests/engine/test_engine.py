"""Tests for the deep copy engine."""

import array
import sys
from collections import Counter, OrderedDict, defaultdict, deque, namedtuple
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

import pytest
from pydantic import BaseModel

from structclone import (
    CopyDepthExceeded,
    CopyFailure,
    CopySettings,
    DeepCopyEngine,
    FieldAccessFailure,
    FixedSequenceBuilder,
    InstantiationFailure,
    UnsupportedContainerFailure,
    deep_copy,
)


class Status(Enum):
    ACTIVE = "active"
    RETIRED = "retired"


Pair = namedtuple("Pair", "left right")


@dataclass
class Employee:
    name: str
    tags: list[str] = field(default_factory=list)
    status: Status = Status.ACTIVE


@dataclass(frozen=True)
class Badge:
    number: int
    scopes: tuple[str, ...]


@dataclass(eq=False)
class Link:
    label: str
    target: "Link | None" = None


class Tags(list):
    def __init__(self, owner: str) -> None:
        super().__init__()
        self.owner = owner


class CopyHookIgnored:
    def __init__(self) -> None:
        self.items = [1]

    def __deepcopy__(self, memo):
        raise AssertionError("copy hooks must not be invoked")


class ReadOnlySequence(Sequence):
    def __init__(self) -> None:
        self._items = [1, 2]

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self):
        return len(self._items)


class Profile(BaseModel):
    name: str
    skills: list[str]


class AppError(Exception):
    def __init__(self, code: int) -> None:
        super().__init__(f"code {code}")
        self.code = code


class DecodeProblem(UnicodeDecodeError):
    def __init__(self) -> None:
        super().__init__("utf-8", b"\xff", 0, 1, "invalid start byte")


class TestNoneAndImmutables:
    def test_none_copies_to_none(self, engine):
        assert engine.deep_copy(None) is None

    @pytest.mark.parametrize("value", [42, 2.5, "text", True, b"raw", Status.ACTIVE])
    def test_immutables_are_shared(self, engine, value):
        """Immutable values are returned as is, no allocation."""
        assert engine.deep_copy(value) is value

    def test_enum_members_inside_objects_stay_singletons(self, engine):
        clone = engine.deep_copy(Employee("ann", status=Status.RETIRED))

        assert clone.status is Status.RETIRED


class TestGenericObjects:
    def test_distinct_equal_and_independent(self, engine):
        original = Employee("ann", ["admin"])

        clone = engine.deep_copy(original)

        assert clone is not original
        assert clone == original
        assert clone.tags is not original.tags

        original.tags.append("ops")
        original.name = "bob"
        assert clone.tags == ["admin"]
        assert clone.name == "ann"

    def test_required_constructor_arguments(self, engine, node_cls):
        """Objects without a zero-argument constructor are copied without running __init__."""
        original = node_cls(1, node_cls(2))

        clone = engine.deep_copy(original)

        assert clone is not original
        assert (clone.value, clone.next.value, clone.next.next) == (1, 2, None)
        assert clone.next is not original.next

    def test_frozen_dataclass(self, engine):
        original = Badge(7, ("read", "write"))

        clone = engine.deep_copy(original)

        assert clone == original
        assert clone is not original

    def test_pydantic_model(self, engine):
        original = Profile(name="ann", skills=["python"])

        clone = engine.deep_copy(original)

        assert clone == original
        assert clone.skills is not original.skills
        original.skills.append("rust")
        assert clone.skills == ["python"]

    def test_copy_hooks_are_not_invoked(self, engine):
        original = CopyHookIgnored()

        clone = engine.deep_copy(original)

        assert clone.items == [1]
        assert clone.items is not original.items

    def test_placeholder_disabled_fails_whole_copy(self, registry, node_cls):
        engine = DeepCopyEngine(strategies=registry, settings=CopySettings(allow_placeholder=False))

        with pytest.raises(InstantiationFailure) as info:
            engine.deep_copy([node_cls(1)])

        assert info.value.type is node_cls


class TestCyclesAndSharing:
    def test_two_node_cycle(self, engine):
        a = Link("a")
        b = Link("b", a)
        a.target = b

        clone = engine.deep_copy(a)

        assert clone.target.target is clone
        assert clone is not a
        assert clone.target is not b

    def test_self_reference(self, engine):
        node = Link("self")
        node.target = node

        clone = engine.deep_copy(node)

        assert clone.target is clone

    def test_shared_child_is_copied_once(self, engine, holder_cls):
        shared = Employee("shared")
        a, b = holder_cls(), holder_cls()
        a.child = shared
        b.child = shared

        copied_a, copied_b = engine.deep_copy([a, b])

        assert copied_a.child is copied_b.child
        assert copied_a.child is not shared

    def test_self_containing_list(self, engine):
        original = [1]
        original.append(original)

        clone = engine.deep_copy(original)

        assert clone[1] is clone
        assert clone is not original

    def test_self_containing_dict(self, engine):
        original = {"name": "root"}
        original["self"] = original

        clone = engine.deep_copy(original)

        assert clone["self"] is clone

    def test_cycle_through_tuple_keeps_single_copy(self, engine):
        """A tuple reached again through a mutable element resolves to one copy."""
        inner = []
        outer = (inner,)
        inner.append(outer)

        clone = engine.deep_copy(outer)

        assert clone is not outer
        assert clone[0][0] is clone
        assert clone[0] is not inner

    def test_shared_tuple_is_copied_once(self, engine):
        shared = ([1],)

        first, second = engine.deep_copy([shared, shared])

        assert first is second


class TestContainers:
    def test_list_fidelity_and_independence(self, engine):
        original = [1, 2, 3]

        clone = engine.deep_copy(original)

        assert clone == [1, 2, 3]
        assert clone is not original
        original.append(4)
        assert len(clone) == 3

    def test_nested_containers(self, engine):
        original = {"team": [Employee("ann")], "ids": {1, 2}, "pair": Pair([1], [2])}

        clone = engine.deep_copy(original)

        assert clone == original
        assert clone["team"][0] is not original["team"][0]
        assert type(clone["pair"]) is Pair
        assert clone["pair"].left is not original["pair"].left

    @pytest.mark.parametrize(
        "original",
        [
            OrderedDict([("b", 1), ("a", 2)]),
            Counter("mississippi"),
            deque([1, 2, 3]),
            frozenset({1, 2}),
            (1, [2]),
            {1, 2, 3},
        ],
    )
    def test_concrete_type_and_order_preserved(self, engine, original):
        clone = engine.deep_copy(original)

        assert type(clone) is type(original)
        assert clone == original
        assert list(clone) == list(original)

    def test_deque_maxlen(self, engine):
        clone = engine.deep_copy(deque([1, 2], maxlen=2))

        assert clone.maxlen == 2

    def test_defaultdict_factory(self, engine):
        original = defaultdict(list, a=[1])

        clone = engine.deep_copy(original)

        assert clone.default_factory is list
        assert clone == {"a": [1]}
        assert clone["a"] is not original["a"]

    def test_mappingproxy(self, engine):
        backing = {"a": [1]}
        original = MappingProxyType(backing)

        clone = engine.deep_copy(original)

        assert isinstance(clone, MappingProxyType)
        assert clone == original
        backing["a"].append(2)
        assert clone["a"] == [1]

    def test_composite_keys_are_copied(self, engine):
        key = Badge(1, ("r",))
        original = {key: "owner"}

        clone = engine.deep_copy(original)

        (clone_key,) = clone
        assert clone_key == key
        assert clone_key is not key
        assert clone[key] == "owner"

    def test_arrays(self, engine):
        numbers = array.array("i", [1, 2, 3])
        raw = bytearray(b"abc")

        copied_numbers, copied_raw = engine.deep_copy([numbers, raw])

        assert copied_numbers == numbers and copied_numbers is not numbers
        assert copied_raw == raw and copied_raw is not raw
        raw[0] = 0
        assert copied_raw == bytearray(b"abc")

    def test_container_subclass_attributes(self, engine):
        original = Tags("ann")
        original.extend(["a", "b"])

        clone = engine.deep_copy(original)

        assert type(clone) is Tags
        assert clone == ["a", "b"]
        assert clone.owner == "ann"

    def test_container_attributes_can_be_skipped(self, registry):
        engine = DeepCopyEngine(
            strategies=registry, settings=CopySettings(copy_container_attributes=False)
        )
        original = Tags("ann")
        original.append("a")

        clone = engine.deep_copy(original)

        assert clone == ["a"]
        assert not hasattr(clone, "owner")

    def test_read_only_container_without_strategy(self, engine):
        with pytest.raises(UnsupportedContainerFailure):
            engine.deep_copy({"items": ReadOnlySequence()})

    def test_registered_strategy_for_read_only_container(self, registry):
        registry.register_sequence(
            ReadOnlySequence,
            lambda original, instantiate: FixedSequenceBuilder(list),
        )
        engine = DeepCopyEngine(strategies=registry)

        assert engine.deep_copy(ReadOnlySequence()) == [1, 2]


class TestExceptions:
    def test_exception_inside_object_keeps_args(self, engine, holder_cls):
        holder = holder_cls()
        holder.child = AppError(5)

        clone = engine.deep_copy(holder)

        assert clone.child is not holder.child
        assert clone.child.args == ("code 5",)
        assert str(clone.child) == "code 5"
        assert clone.child.code == 5

    def test_exception_chain_is_copied_and_traceback_shared(self, engine):
        try:
            try:
                raise KeyError("missing")
            except KeyError as inner:
                raise AppError(7) from inner
        except AppError as exc:
            original = exc

        clone = engine.deep_copy(original)

        assert isinstance(clone.__cause__, KeyError)
        assert clone.__cause__ is not original.__cause__
        assert clone.__cause__.args == ("missing",)
        assert clone.__context__ is clone.__cause__
        assert clone.__suppress_context__ is True
        assert clone.__traceback__ is original.__traceback__

    def test_os_error_members(self, engine):
        original = FileNotFoundError(2, "No such file", "data.csv")

        clone = engine.deep_copy(original)

        assert type(clone) is FileNotFoundError
        assert (clone.errno, clone.strerror, clone.filename) == (2, "No such file", "data.csv")
        assert str(clone) == str(original)

    def test_unknown_native_state_fails_instead_of_dropping_it(self, engine):
        with pytest.raises(FieldAccessFailure, match="native UnicodeDecodeError state") as info:
            engine.deep_copy([DecodeProblem()])

        assert info.value.type is DecodeProblem


class TestFailures:
    def test_depth_guard(self, registry, node_cls):
        engine = DeepCopyEngine(strategies=registry, settings=CopySettings(max_depth=10))
        head = None
        for value in range(20):
            head = node_cls(value, head)

        with pytest.raises(CopyDepthExceeded) as info:
            engine.deep_copy(head)

        assert info.value.max_depth == 10

    def test_depth_guard_allows_graphs_within_limit(self, registry, node_cls):
        engine = DeepCopyEngine(strategies=registry, settings=CopySettings(max_depth=10))
        head = None
        for value in range(10):
            head = node_cls(value, head)

        assert engine.deep_copy(head).value == 9

    def test_recursion_limit_without_max_depth_is_a_copy_failure(self, registry, node_cls):
        engine = DeepCopyEngine(strategies=registry, settings=CopySettings(max_depth=None))
        head = None
        for value in range(sys.getrecursionlimit() * 2):
            head = node_cls(value, head)

        with pytest.raises(CopyDepthExceeded, match="recursion limit") as info:
            engine.deep_copy(head)

        assert info.value.max_depth is None
        assert isinstance(info.value.__cause__, RecursionError)

    def test_unhashable_key_copy_is_wrapped(self, engine):
        class MutableKey:
            def __init__(self) -> None:
                self.owner = None

            def __hash__(self):
                if isinstance(self.owner, list):
                    raise TypeError("unhashable while owned by a list")
                return 0

        key = MutableKey()
        original = {key: 1}
        key.owner = ["x"]

        with pytest.raises(CopyFailure, match="insert an entry into dict") as info:
            engine.deep_copy(original)

        assert isinstance(info.value.__cause__, TypeError)


def test_module_level_deep_copy_uses_global_registries(department_cls):
    hr = department_cls("HR")

    clone = deep_copy(hr)

    assert clone is not hr
    assert clone.name == "HR"


def test_engine_is_reusable_across_calls(engine):
    """Identity maps are per call: copying twice gives two distinct copies."""
    original = [Employee("ann")]

    first = engine.deep_copy(original)
    second = engine.deep_copy(original)

    assert first is not second
    assert first[0] is not second[0]
