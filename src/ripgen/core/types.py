from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

Address = str
Weight = int

ROLE_CORE = "core"
ROLE_EDGE = "edge"
NODE_ROLES: Tuple[str, ...] = (ROLE_CORE, ROLE_EDGE)

MIN_WEIGHT = 1
MAX_WEIGHT = 99


@dataclass(eq=False, frozen=True)
class Edge:
    """Undirected weighted link between two routers.

    Equality is identity: two parallel links with the same weight are still
    two links.
    """

    x: "Node"
    y: "Node"
    weight: Weight

    def __post_init__(self) -> None:
        if isinstance(self.weight, bool) or not isinstance(self.weight, int):
            raise ValueError(f"edge weight must be an int, got {self.weight!r}")
        if not MIN_WEIGHT <= self.weight <= MAX_WEIGHT:
            raise ValueError(f"edge weight {self.weight} outside [{MIN_WEIGHT}, {MAX_WEIGHT}]")

    @property
    def endpoints(self) -> Tuple["Node", "Node"]:
        return (self.x, self.y)

    def other(self, node: "Node") -> "Node":
        if node is self.x:
            return self.y
        if node is self.y:
            return self.x
        raise ValueError(f"{node.address} is not an endpoint of {self}")

    def __str__(self) -> str:
        return f"{self.x.address} to {self.y.address} weight: {self.weight}"


@dataclass(eq=False)
class Node:
    address: Address
    role: str
    _edges: List[Edge] = field(default_factory=list, init=False, repr=False)

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges)

    @property
    def degree(self) -> int:
        return len(self._edges)

    def add_edge(self, edge: Edge) -> bool:
        if self is not edge.x and self is not edge.y:
            raise ValueError(f"{self.address} is not an endpoint of {edge}")
        if any(existing is edge for existing in self._edges):
            return False
        self._edges.append(edge)
        return True

    def neighbors(self) -> Dict[Address, Weight]:
        out: Dict[Address, Weight] = {}
        for edge in self._edges:
            peer = edge.other(self).address
            if peer not in out or edge.weight < out[peer]:
                out[peer] = edge.weight
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.address == other.address and self.role == other.role

    def __hash__(self) -> int:
        return hash((self.address, self.role))
