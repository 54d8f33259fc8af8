"""Property tests: equality, independence and immutable sharing."""

from hypothesis import given
from hypothesis import strategies as st

from structclone import deep_copy

scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(allow_nan=False),
    st.text(max_size=10),
    st.binary(max_size=10),
)

hashables = st.one_of(st.integers(), st.text(max_size=10))

graphs = st.recursive(
    scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=5),
        st.dictionaries(hashables, children, max_size=5),
        st.tuples(children, children),
        st.sets(hashables, max_size=5),
    ),
    max_leaves=25,
)


def _mutable_nodes(value):
    """Yield every list, dict and set reachable from value."""
    if isinstance(value, (list, set)):
        yield value
        for item in value:
            yield from _mutable_nodes(item)
    elif isinstance(value, dict):
        yield value
        for item in value.values():
            yield from _mutable_nodes(item)
    elif isinstance(value, tuple):
        for item in value:
            yield from _mutable_nodes(item)


@given(graphs)
def test_copy_equals_original(value):
    assert deep_copy(value) == value


@given(graphs)
def test_copy_shares_no_mutable_node(value):
    """No list, dict or set of the copy is an object of the original."""
    original_ids = {id(node) for node in _mutable_nodes(value)}

    clone = deep_copy(value)

    assert all(id(node) not in original_ids for node in _mutable_nodes(clone))


@given(st.lists(st.lists(st.integers(), max_size=3), min_size=1, max_size=5))
def test_mutating_original_never_changes_copy(value):
    clone = deep_copy(value)
    snapshot = [list(inner) for inner in clone]

    for inner in value:
        inner.append(0)
    value.append([])

    assert clone == snapshot


@given(scalars)
def test_scalars_are_shared(value):
    assert deep_copy(value) is value
