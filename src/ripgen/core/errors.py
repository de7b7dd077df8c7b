from __future__ import annotations


class TopologyError(ValueError):
    """Base class for topology generation failures."""


class EmptyTopologyError(TopologyError):
    """Raised when no initial edge could be generated and empty output is not allowed."""


class RoleSelectionError(TopologyError):
    """Raised when no allowed role pair was drawn within the attempt budget."""

    def __init__(self, attempts: int, policy: str) -> None:
        super().__init__(f"no allowed role pair after {attempts} draws (policy={policy})")
        self.attempts = attempts
        self.policy = policy
