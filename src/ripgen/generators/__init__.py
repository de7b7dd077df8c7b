"""Random draws used while building a topology."""

from ripgen.generators.address import AddressAllocator
from ripgen.generators.roles import (
    ConnectionPolicy,
    NodeTypeSelector,
    available_policies,
    load_policy,
    permissive_policy,
    register_policy,
)
from ripgen.generators.weight import WeightGenerator

__all__ = [
    "AddressAllocator",
    "ConnectionPolicy",
    "NodeTypeSelector",
    "WeightGenerator",
    "available_policies",
    "load_policy",
    "permissive_policy",
    "register_policy",
]
