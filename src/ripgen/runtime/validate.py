from __future__ import annotations

from typing import Any, Dict

from ripgen.generators.roles import available_policies


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(cfg: Dict[str, Any]) -> list[str]:
    errors: list[str] = []

    if "num_node_pairs" not in cfg:
        errors.append("Missing 'num_node_pairs'")
    elif not _is_int(cfg["num_node_pairs"]):
        errors.append("num_node_pairs must be an integer")
    elif cfg["num_node_pairs"] < 0:
        errors.append("num_node_pairs must be >= 0")

    seed = cfg.get("seed")
    if seed is not None and not _is_int(seed):
        errors.append("seed must be an integer or null")

    policy = cfg.get("policy", "permissive")
    if policy not in available_policies():
        errors.append(f"unknown policy '{policy}' (available: {available_policies()})")

    attempts = cfg.get("max_role_attempts", 1000)
    if not _is_int(attempts) or attempts <= 0:
        errors.append("max_role_attempts must be a positive integer")

    allow_empty = cfg.get("allow_empty", True)
    if not isinstance(allow_empty, bool):
        errors.append("allow_empty must be a boolean")

    return errors
