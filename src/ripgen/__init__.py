"""Randomized router topology generation for distance-vector routing simulations."""

from ripgen.core.errors import EmptyTopologyError, RoleSelectionError, TopologyError
from ripgen.core.types import NODE_ROLES, ROLE_CORE, ROLE_EDGE, Edge, Node
from ripgen.runtime.config import GeneratorConfig, load_generator_config
from ripgen.topology.generator import GenerationStats, TopologyGenerator
from ripgen.topology.graph import NetworkGraph

__all__ = [
    "Edge",
    "EmptyTopologyError",
    "GenerationStats",
    "GeneratorConfig",
    "NODE_ROLES",
    "NetworkGraph",
    "Node",
    "ROLE_CORE",
    "ROLE_EDGE",
    "RoleSelectionError",
    "TopologyError",
    "TopologyGenerator",
    "load_generator_config",
]
