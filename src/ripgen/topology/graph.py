from __future__ import annotations

import threading
from collections import deque
from typing import Dict, Iterator, List, Optional, Tuple

from ripgen.core.types import Address, Edge, Node, Weight


class NetworkGraph:
    """Insertion-ordered collection of routers.

    Edges are not stored separately; they are reached through node incidence.
    A graph may be handed to several generators to share one node collection,
    so mutation goes through a lock.
    """

    def __init__(self) -> None:
        self._nodes: Dict[Address, Node] = {}
        self._lock = threading.Lock()

    def add_node(self, node: Node) -> bool:
        with self._lock:
            existing = self._nodes.get(node.address)
            if existing is not None:
                if existing is not node:
                    raise ValueError(f"address {node.address} already belongs to another node")
                return False
            self._nodes[node.address] = node
            return True

    def connect(self, x: Node, y: Node, weight: Weight) -> Edge:
        for node in (x, y):
            if self._nodes.get(node.address) is not node:
                raise ValueError(f"{node.address} is not part of this graph")
        edge = Edge(x, y, weight)
        with self._lock:
            x.add_edge(edge)
            y.add_edge(edge)
        return edge

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes.values())

    def get(self, address: Address) -> Optional[Node]:
        return self._nodes.get(address)

    def addresses(self) -> List[Address]:
        return list(self._nodes.keys())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Node):
            return self._nodes.get(item.address) is item
        return item in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def edges(self) -> List[Edge]:
        seen: set[int] = set()
        out: List[Edge] = []
        for node in self._nodes.values():
            for edge in node.edges:
                if id(edge) in seen:
                    continue
                seen.add(id(edge))
                out.append(edge)
        return out

    def adjacency(self) -> Dict[Address, Dict[Address, Weight]]:
        return {address: node.neighbors() for address, node in self._nodes.items()}

    def isolated_nodes(self) -> List[Address]:
        return [address for address, node in self._nodes.items() if node.degree == 0]

    def components(self) -> List[List[Address]]:
        adj = self.adjacency()
        seen: set[Address] = set()
        out: List[List[Address]] = []
        for start in adj:
            if start in seen:
                continue
            seen.add(start)
            queue = deque([start])
            component: List[Address] = []
            while queue:
                cur = queue.popleft()
                component.append(cur)
                for nbr in adj[cur]:
                    if nbr not in seen:
                        seen.add(nbr)
                        queue.append(nbr)
            out.append(component)
        return out

    def is_connected(self) -> bool:
        return len(self.components()) <= 1

    def render(self, dedupe: bool = False) -> str:
        """Text listing of the links, one ``"<x> to <y> weight: <w>"`` per line.

        By default every link is listed once from each endpoint, so a link
        shows up twice. ``dedupe=True`` lists each link once.
        """
        if dedupe:
            return "\n".join(str(edge) for edge in self.edges())
        lines: List[str] = []
        for node in self._nodes.values():
            for edge in node.edges:
                lines.append(str(edge))
        return "\n".join(lines)
