"""Topology container and generator."""

from ripgen.topology.generator import GenerationStats, TopologyGenerator
from ripgen.topology.graph import NetworkGraph

__all__ = ["GenerationStats", "NetworkGraph", "TopologyGenerator"]
