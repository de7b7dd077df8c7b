from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ripgen.runtime.validate import validate_config
from ripgen.utils.io import load_yaml


@dataclass(frozen=True)
class GeneratorConfig:
    num_node_pairs: int
    seed: int | None = None
    policy: str = "permissive"
    max_role_attempts: int = 1000
    allow_empty: bool = True


def config_from_dict(raw: Dict[str, Any]) -> GeneratorConfig:
    section = raw.get("generator") or raw
    if not isinstance(section, dict):
        raise ValueError(f"invalid generator config: expected a mapping, got {type(section).__name__}")
    errors = validate_config(section)
    if errors:
        raise ValueError("invalid generator config: " + "; ".join(errors))
    seed = section.get("seed")
    return GeneratorConfig(
        num_node_pairs=int(section["num_node_pairs"]),
        seed=None if seed is None else int(seed),
        policy=str(section.get("policy", "permissive")),
        max_role_attempts=int(section.get("max_role_attempts", 1000)),
        allow_empty=bool(section.get("allow_empty", True)),
    )


def load_generator_config(path: str | Path) -> GeneratorConfig:
    return config_from_dict(load_yaml(path))
