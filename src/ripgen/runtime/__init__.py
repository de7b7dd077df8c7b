"""Generator configuration."""

from ripgen.runtime.config import GeneratorConfig, config_from_dict, load_generator_config
from ripgen.runtime.validate import validate_config

__all__ = ["GeneratorConfig", "config_from_dict", "load_generator_config", "validate_config"]
