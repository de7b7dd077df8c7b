from __future__ import annotations

import logging
import random
from itertools import count

import pytest

from ripgen.core.errors import EmptyTopologyError, RoleSelectionError
from ripgen.generators import AddressAllocator, NodeTypeSelector
from ripgen.runtime.config import GeneratorConfig
from ripgen.topology.generator import TopologyGenerator
from ripgen.topology.graph import NetworkGraph


class _FixedAllocator(AddressAllocator):
    def __init__(self, address: str) -> None:
        super().__init__()
        self.address = address

    def generate_address(self) -> str:
        return self.address


class _SequenceAllocator(AddressAllocator):
    def __init__(self, addresses: list[str]) -> None:
        super().__init__()
        self._it = iter(addresses)

    def generate_address(self) -> str:
        return next(self._it)


class _CountingAllocator(AddressAllocator):
    def __init__(self) -> None:
        super().__init__()
        self._counter = count(1)

    def generate_address(self) -> str:
        n = next(self._counter)
        return f"10.{n // 65536 % 256}.{n // 256 % 256}.{n % 256}"


class _ScriptedSelector(NodeTypeSelector):
    """Hands out fixed role pairs and allows only the listed role pairings."""

    def __init__(self, pairs: list[tuple[str, str]], allowed: set[frozenset[str]]) -> None:
        super().__init__(random.Random(0), policy=lambda a, b: frozenset((a, b)) in allowed)
        self._pairs = iter(pairs)

    def select_pair(self) -> tuple[str, str, int]:
        role_a, role_b = next(self._pairs)
        return role_a, role_b, 1


def _all_edges(gen: TopologyGenerator) -> list:
    return gen.graph.edges()


def test_addresses_are_unique_and_tracked() -> None:
    gen = TopologyGenerator(50, seed=7)
    addresses = [node.address for node in gen.all_nodes()]
    assert len(addresses) == len(set(addresses))
    assert set(addresses) == gen.allocated_addresses()


def test_every_edge_weight_in_range_and_endpoints_in_graph() -> None:
    gen = TopologyGenerator(40, seed=1)
    nodes = set(gen.all_nodes())
    for edge in _all_edges(gen):
        assert 1 <= edge.weight <= 99
        assert edge.x in nodes
        assert edge.y in nodes


def test_repair_adds_one_edge_per_consecutive_initial_pair() -> None:
    gen = TopologyGenerator(25, seed=3)
    n_initial = len(gen.initial_edges)
    assert len(gen.repair_edges) == n_initial - 1
    assert len(_all_edges(gen)) == 2 * n_initial - 1
    assert gen.graph.is_connected()


def test_repair_uses_first_endpoints_of_consecutive_edges() -> None:
    gen = TopologyGenerator(
        3,
        seed=0,
        allocator=_SequenceAllocator(["1.0.0.1", "1.0.0.2", "2.0.0.1", "2.0.0.2", "3.0.0.1", "3.0.0.2"]),
    )
    pairs = [(edge.x.address, edge.y.address) for edge in gen.repair_edges]
    assert pairs == [("1.0.0.1", "2.0.0.1"), ("2.0.0.1", "3.0.0.1")]


def test_repair_falls_back_to_next_allowed_pairing() -> None:
    # Only core-edge links are allowed, so phase 1 always yields one core
    # and one edge router per pair.
    gen = TopologyGenerator(2, seed=5, policy=lambda a, b: a != b, allocator=_CountingAllocator())
    assert len(gen.repair_edges) == 1
    repair = gen.repair_edges[0]
    assert repair.x.role != repair.y.role
    cur, nxt = gen.initial_edges
    assert repair.x in cur.endpoints
    assert repair.y in nxt.endpoints


@pytest.mark.parametrize(
    "allowed, expected",
    [
        ({("cur_x", "next_y"), ("cur_y", "next_x"), ("cur_y", "next_y")}, ("1.0.0.1", "2.0.0.2")),
        ({("cur_y", "next_x"), ("cur_y", "next_y")}, ("1.0.0.2", "2.0.0.1")),
        ({("cur_y", "next_y")}, ("1.0.0.2", "2.0.0.2")),
    ],
)
def test_repair_pairing_priority(allowed: set[tuple[str, str]], expected: tuple[str, str]) -> None:
    selector = _ScriptedSelector(
        pairs=[("cur_x", "cur_y"), ("next_x", "next_y")],
        allowed={frozenset(pair) for pair in allowed},
    )
    gen = TopologyGenerator(
        2,
        seed=0,
        selector=selector,
        allocator=_SequenceAllocator(["1.0.0.1", "1.0.0.2", "2.0.0.1", "2.0.0.2"]),
    )
    assert [(edge.x.address, edge.y.address) for edge in gen.repair_edges] == [expected]


def test_repair_skips_step_when_no_pairing_allowed() -> None:
    calls = {"n": 0}

    def allow_first_two(a: str, b: str) -> bool:
        calls["n"] += 1
        return calls["n"] <= 2

    gen = TopologyGenerator(2, seed=1, policy=allow_first_two, allocator=_CountingAllocator())
    assert len(gen.initial_edges) == 2
    assert gen.repair_edges == ()
    assert gen.stats.repair_misses == 1
    assert not gen.graph.is_connected()


def test_single_pair_has_one_edge_and_no_repair() -> None:
    gen = TopologyGenerator(1, seed=9)
    assert len(gen.all_nodes()) == 2
    assert len(_all_edges(gen)) == 1
    assert gen.repair_edges == ()
    assert gen.stats.repair_misses == 0


def test_zero_pairs_gives_empty_topology() -> None:
    gen = TopologyGenerator(0, seed=1)
    assert gen.all_nodes() == ()
    assert gen.allocated_addresses() == frozenset()
    assert gen.render() == ""


def test_zero_pairs_raises_when_empty_not_allowed() -> None:
    with pytest.raises(EmptyTopologyError):
        TopologyGenerator(0, allow_empty=False)


def test_negative_pair_count_rejected() -> None:
    with pytest.raises(ValueError):
        TopologyGenerator(-1)


@pytest.mark.parametrize("value", [2.9, "3", True])
def test_non_integer_pair_count_rejected(value: object) -> None:
    with pytest.raises(ValueError):
        TopologyGenerator(value)  # type: ignore[arg-type]


def test_colliding_addresses_are_skipped_silently() -> None:
    gen = TopologyGenerator(10, allocator=_FixedAllocator("1.2.3.4"))
    assert gen.all_nodes() == ()
    assert gen.stats.pairs_attempted == 10
    assert gen.stats.pairs_skipped == 10
    assert gen.initial_edges == ()


def test_collision_with_earlier_pair_wastes_iteration() -> None:
    allocator = _SequenceAllocator(["1.1.1.1", "2.2.2.2", "2.2.2.2", "3.3.3.3", "4.4.4.4", "5.5.5.5"])
    gen = TopologyGenerator(3, seed=2, allocator=allocator)
    assert gen.stats.pairs_skipped == 1
    assert len(gen.initial_edges) == 2
    assert gen.allocated_addresses() == {"1.1.1.1", "2.2.2.2", "4.4.4.4", "5.5.5.5"}


def test_stats_are_consistent() -> None:
    gen = TopologyGenerator(30, seed=11)
    stats = gen.stats
    assert stats.pairs_attempted == 30
    assert stats.pairs_attempted == stats.pairs_skipped + stats.initial_edges
    assert stats.repair_edges + stats.repair_misses == max(stats.initial_edges - 1, 0)


def test_every_generated_node_has_a_link() -> None:
    gen = TopologyGenerator(20, seed=4)
    assert gen.graph.isolated_nodes() == []
    assert all(node.degree >= 1 for node in gen.all_nodes())


def test_node_accessor_is_stable() -> None:
    gen = TopologyGenerator(5, seed=8)
    assert gen.all_nodes() == gen.all_nodes()


def test_same_seed_gives_same_topology() -> None:
    first = TopologyGenerator(15, seed=21).render()
    second = TopologyGenerator(15, seed=21).render()
    assert first == second


def test_generators_do_not_share_nodes_by_default() -> None:
    first = TopologyGenerator(3, seed=1)
    second = TopologyGenerator(3, seed=2)
    assert first.graph is not second.graph
    assert len(first.all_nodes()) == 6


def test_explicitly_shared_graph_collects_both_runs() -> None:
    shared = NetworkGraph()
    first = TopologyGenerator(3, seed=1, graph=shared)
    second = TopologyGenerator(3, seed=2, graph=shared)
    assert first.all_nodes() == second.all_nodes()
    assert len(shared) == 12
    assert first.allocated_addresses().isdisjoint(second.allocated_addresses())


def test_shared_graph_addresses_count_as_collisions() -> None:
    shared = NetworkGraph()
    TopologyGenerator(1, graph=shared, allocator=_SequenceAllocator(["1.1.1.1", "2.2.2.2"]))
    second = TopologyGenerator(1, graph=shared, allocator=_SequenceAllocator(["2.2.2.2", "3.3.3.3"]))
    assert second.stats.pairs_skipped == 1
    assert len(shared) == 2


def test_restrictive_policy_exhausts_role_attempts() -> None:
    with pytest.raises(RoleSelectionError):
        TopologyGenerator(1, seed=1, policy=lambda a, b: False, max_role_attempts=5)


def test_render_lists_each_link_twice() -> None:
    gen = TopologyGenerator(4, seed=6)
    lines = gen.render().splitlines()
    assert len(lines) == 2 * len(_all_edges(gen))
    assert all(" to " in line and " weight: " in line for line in lines)
    assert len(gen.render(dedupe=True).splitlines()) == len(_all_edges(gen))
    assert str(gen) == gen.render()


def test_from_config() -> None:
    cfg = GeneratorConfig(num_node_pairs=6, seed=13)
    assert TopologyGenerator.from_config(cfg).render() == TopologyGenerator(6, seed=13).render()


def test_empty_topology_logs_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="ripgen.topology"):
        TopologyGenerator(0)
    assert any("empty topology" in record.getMessage() for record in caplog.records)
