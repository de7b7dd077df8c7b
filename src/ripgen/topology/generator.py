from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, FrozenSet, List, Optional, Set, Tuple

from ripgen.core.errors import EmptyTopologyError
from ripgen.core.types import Edge, Node
from ripgen.generators.address import AddressAllocator
from ripgen.generators.roles import ConnectionPolicy, NodeTypeSelector, permissive_policy
from ripgen.generators.weight import WeightGenerator
from ripgen.topology.graph import NetworkGraph
from ripgen.utils.seed import make_rng

if TYPE_CHECKING:
    from ripgen.runtime.config import GeneratorConfig


@dataclass
class GenerationStats:
    pairs_attempted: int = 0
    pairs_skipped: int = 0
    initial_edges: int = 0
    repair_edges: int = 0
    repair_misses: int = 0


class TopologyGenerator:
    """Builds a random router topology from a number of node-pair attempts.

    Phase 1 draws ``num_node_pairs`` address pairs. A pair whose addresses
    collide with an earlier allocation is dropped without retry; every other
    pair becomes two new routers joined by one weighted link.

    Phase 2 walks the Phase-1 links in creation order and, for each
    consecutive pair of links, joins one endpoint of the first to one endpoint
    of the second (first allowed of xx, xy, yx, yy). This stitches the initial
    links into a chain but does not promise a connected graph when the
    connection policy rejects every pairing for some step.
    """

    def __init__(
        self,
        num_node_pairs: int,
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
        allocator: AddressAllocator | None = None,
        weights: WeightGenerator | None = None,
        selector: NodeTypeSelector | None = None,
        policy: ConnectionPolicy | str = permissive_policy,
        max_role_attempts: int = 1000,
        graph: NetworkGraph | None = None,
        allow_empty: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        if isinstance(num_node_pairs, bool) or not isinstance(num_node_pairs, int) or num_node_pairs < 0:
            raise ValueError(f"num_node_pairs must be >= 0, got {num_node_pairs!r}")
        self.num_node_pairs = int(num_node_pairs)
        self._log = logger or logging.getLogger("ripgen.topology")
        self._rng = rng or make_rng(seed)
        self._allocator = allocator or AddressAllocator(self._rng)
        self._weights = weights or WeightGenerator(self._rng)
        self._selector = selector or NodeTypeSelector(
            self._rng, policy=policy, max_attempts=max_role_attempts
        )
        self._graph = graph if graph is not None else NetworkGraph()
        self._addresses: Set[str] = set()
        self._initial_edges: List[Edge] = []
        self._repair_edges: List[Edge] = []
        self.stats = GenerationStats()

        self._generate_pairs()
        if not self._initial_edges:
            if not allow_empty:
                raise EmptyTopologyError(
                    f"no initial edges generated from {self.num_node_pairs} node-pair attempts"
                )
            self._log.warning(
                "empty topology: attempted=%s skipped=%s",
                self.stats.pairs_attempted,
                self.stats.pairs_skipped,
            )
        self._repair_connectivity()
        self._log.info(
            "topology generated: nodes=%s initial_edges=%s repair_edges=%s skipped_pairs=%s",
            2 * self.stats.initial_edges,
            self.stats.initial_edges,
            self.stats.repair_edges,
            self.stats.pairs_skipped,
        )

    @classmethod
    def from_config(
        cls,
        cfg: "GeneratorConfig",
        graph: NetworkGraph | None = None,
        logger: logging.Logger | None = None,
    ) -> "TopologyGenerator":
        return cls(
            cfg.num_node_pairs,
            seed=cfg.seed,
            policy=cfg.policy,
            max_role_attempts=cfg.max_role_attempts,
            allow_empty=cfg.allow_empty,
            graph=graph,
            logger=logger,
        )

    def _is_taken(self, address: str) -> bool:
        return address in self._addresses or address in self._graph

    def _generate_pairs(self) -> None:
        for attempt in range(self.num_node_pairs):
            self.stats.pairs_attempted += 1
            address1 = self._allocator.generate_address()
            address2 = self._allocator.generate_address()

            if address1 == address2 or self._is_taken(address1) or self._is_taken(address2):
                self.stats.pairs_skipped += 1
                self._log.debug("pair %s skipped: address collision %s/%s", attempt, address1, address2)
                continue

            role1, role2, draws = self._selector.select_pair()
            if draws > 1:
                self._log.debug("pair %s needed %s role draws", attempt, draws)

            x = Node(address1, role1)
            y = Node(address2, role2)
            self._graph.add_node(x)
            self._graph.add_node(y)
            edge = self._graph.connect(x, y, self._weights.generate_weight())

            self._initial_edges.append(edge)
            self._addresses.add(address1)
            self._addresses.add(address2)
            self.stats.initial_edges += 1

    def _repair_connectivity(self) -> None:
        for cur_edge, next_edge in zip(self._initial_edges, self._initial_edges[1:]):
            pair = self._first_allowed_pairing(cur_edge, next_edge)
            if pair is None:
                self.stats.repair_misses += 1
                self._log.debug("no allowed pairing between %s and %s", cur_edge, next_edge)
                continue
            edge = self._graph.connect(pair[0], pair[1], self._weights.generate_weight())
            self._repair_edges.append(edge)
            self.stats.repair_edges += 1
        if self._initial_edges and self._spans_components():
            self._log.warning("generated topology is not connected")

    def _spans_components(self) -> bool:
        touched = [c for c in self._graph.components() if self._addresses.intersection(c)]
        return len(touched) > 1

    def _first_allowed_pairing(self, cur_edge: Edge, next_edge: Edge) -> Optional[Tuple[Node, Node]]:
        cur_x, cur_y = cur_edge.endpoints
        next_x, next_y = next_edge.endpoints
        for a, b in ((cur_x, next_x), (cur_x, next_y), (cur_y, next_x), (cur_y, next_y)):
            if self._selector.is_connection_allowed(a.role, b.role):
                return a, b
        return None

    @property
    def graph(self) -> NetworkGraph:
        return self._graph

    @property
    def initial_edges(self) -> Tuple[Edge, ...]:
        return tuple(self._initial_edges)

    @property
    def repair_edges(self) -> Tuple[Edge, ...]:
        return tuple(self._repair_edges)

    def all_nodes(self) -> Tuple[Node, ...]:
        return self._graph.nodes

    def allocated_addresses(self) -> FrozenSet[str]:
        return frozenset(self._addresses)

    def render(self, dedupe: bool = False) -> str:
        return self._graph.render(dedupe=dedupe)

    def __str__(self) -> str:
        return self.render()
