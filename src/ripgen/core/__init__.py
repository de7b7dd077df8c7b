"""Topology data model shared by generators and consumers."""

from ripgen.core.errors import EmptyTopologyError, RoleSelectionError, TopologyError
from ripgen.core.types import NODE_ROLES, ROLE_CORE, ROLE_EDGE, Edge, Node

__all__ = [
    "Edge",
    "EmptyTopologyError",
    "NODE_ROLES",
    "Node",
    "ROLE_CORE",
    "ROLE_EDGE",
    "RoleSelectionError",
    "TopologyError",
]
