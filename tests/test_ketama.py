import pytest

from asterproxy.fnv import fnv1a64
from asterproxy.ketama import HashRing, RingConfigError

NODES = [
    "mc-1",
    "mc-2",
    "mc-3",
    "mc-4",
    "mc-5",
    "mc-6",
    "mc-7",
    "mc-8",
    "mc-9",
    "mc-x",
]


@pytest.fixture
def ring():
    return HashRing(NODES, [10] * len(NODES))


def test_ketama_dist(ring):
    assert ring.get_node(fnv1a64(b"a")) == "mc-1"
    assert ring.get_node(fnv1a64(b"memtier-102")) == "mc-x"


def test_mismatched_lengths_raise():
    with pytest.raises(RingConfigError):
        HashRing(["a", "b"], [1])


def test_ring_error_is_value_error():
    with pytest.raises(ValueError):
        HashRing(["a"], [])


def test_empty_ring_returns_none():
    assert HashRing().get_node(12345) is None


def test_single_node_owns_everything():
    single = HashRing(["only"], [1])
    for key in (b"a", b"b", b"zzz", b"memtier-1"):
        assert single.get_node(fnv1a64(key)) == "only"
    assert single.get_node(0) == "only"
    assert single.get_node(2**64 - 1) == "only"


def test_tick_count_scales_with_nodes(ring):
    assert len(ring) == 160 * len(NODES)


def test_del_node_removes_ownership(ring):
    ring.del_node("mc-1")
    assert "mc-1" not in ring.nodes
    for i in range(200):
        assert ring.get_node(fnv1a64(f"key-{i}".encode())) != "mc-1"


def test_del_unknown_node_is_noop(ring):
    before = [ring.get_node(fnv1a64(f"k{i}".encode())) for i in range(50)]
    ring.del_node("missing")
    after = [ring.get_node(fnv1a64(f"k{i}".encode())) for i in range(50)]
    assert before == after


def test_add_node_then_remove_restores_mapping(ring):
    keys = [fnv1a64(f"key-{i}".encode()) for i in range(200)]
    before = [ring.get_node(k) for k in keys]
    ring.add_node("mc-new", 10)
    assert "mc-new" in ring.nodes
    owners = {ring.get_node(k) for k in keys}
    assert owners <= set(NODES) | {"mc-new"}
    ring.del_node("mc-new")
    assert [ring.get_node(k) for k in keys] == before


def test_add_existing_node_updates_weight():
    r = HashRing(["a", "b"], [1, 1])
    r.add_node("a", 3)
    assert r.nodes == ["a", "b"]
    assert len(r) == 320


def test_mapping_is_deterministic():
    first = HashRing(NODES, [10] * len(NODES))
    second = HashRing(NODES, [10] * len(NODES))
    for i in range(100):
        h = fnv1a64(f"item{i}".encode())
        assert first.get_node(h) == second.get_node(h)