from __future__ import annotations

import random
from typing import Callable, Dict, Sequence, Tuple

from ripgen.core.errors import RoleSelectionError
from ripgen.core.types import NODE_ROLES

ConnectionPolicy = Callable[[str, str], bool]


def permissive_policy(role_a: str, role_b: str) -> bool:
    # Hosts are not modelled, so every router role may peer with every other.
    _ = (role_a, role_b)
    return True


_REGISTRY: Dict[str, ConnectionPolicy] = {
    "permissive": permissive_policy,
}


def register_policy(name: str, policy: ConnectionPolicy) -> None:
    _REGISTRY[name] = policy


def load_policy(name: str) -> ConnectionPolicy:
    if name not in _REGISTRY:
        raise KeyError(f"Unknown connection policy: {name}. Available: {sorted(_REGISTRY.keys())}")
    return _REGISTRY[name]


def available_policies() -> list[str]:
    return sorted(_REGISTRY.keys())


class NodeTypeSelector:
    """Draws router roles and checks whether two roles may be linked.

    The compatibility rule is a plain predicate so that stricter rules can be
    swapped in without touching the generator. ``select_pair`` retries until
    the predicate accepts a pair; with the permissive default the first draw
    always succeeds. A restrictive predicate that rejects every pair would
    never terminate, so the loop is capped by ``max_attempts``.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        policy: ConnectionPolicy | str = permissive_policy,
        roles: Sequence[str] = NODE_ROLES,
        max_attempts: int = 1000,
    ) -> None:
        if not roles:
            raise ValueError("at least one node role is required")
        if max_attempts <= 0:
            raise ValueError("max_attempts must be > 0")
        self.rng = rng or random.Random()
        if isinstance(policy, str):
            self.policy_name = policy
            self.policy = load_policy(policy)
        else:
            self.policy_name = getattr(policy, "__name__", type(policy).__name__)
            self.policy = policy
        self.roles: Tuple[str, ...] = tuple(roles)
        self.max_attempts = int(max_attempts)

    def select_type(self) -> str:
        return self.roles[self.rng.randrange(len(self.roles))]

    def is_connection_allowed(self, role_a: str, role_b: str) -> bool:
        return bool(self.policy(role_a, role_b))

    def select_pair(self) -> Tuple[str, str, int]:
        """Return ``(role_a, role_b, draws)`` for the first allowed pair."""
        for attempt in range(1, self.max_attempts + 1):
            role_a = self.select_type()
            role_b = self.select_type()
            if self.is_connection_allowed(role_a, role_b):
                return role_a, role_b, attempt
        raise RoleSelectionError(self.max_attempts, self.policy_name)
