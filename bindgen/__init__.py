"""
bindgen - binding generator core

Derives glue code text from an extracted API model: type translation,
minimal constructor synthesis, template expansion and the per-class
generation driver.
"""

from .core.generator import Generator, GeneratorError, GenerationStats
from .core.model import (
    ApiModel,
    ArgumentEntity,
    ClassEntity,
    CodeGeneration,
    EnumEntity,
    FunctionEntity,
    TypeEntry,
    TypeInstantiation,
    TypeKind,
)
from .core.translator import Option, translate_type
from .core.constructors import MinimalConstructorBuilder, minimal_constructor
from .core.config import GeneratorConfig, ConfigError, load_config
from .registry import GeneratorRegistry, RegistryError, get_generator, list_generators
from .logging_config import get_logger, setup_logging

# Version info
__version__ = "0.1.0"


def run_generator(name, model, config=None, args=None):
    """
    Set up and run a registered generator.

    Args:
        name: Registered generator name
        model: Fully populated ApiModel
        config: GeneratorConfig, override dict or JSON file path
        args: Generator options

    Returns:
        GenerationStats of the run

    Raises:
        GeneratorError: If the generator's setup fails
    """
    generator = get_generator(name, config)
    if not generator.setup(model, args):
        raise GeneratorError(f"Setup of generator '{name}' failed")
    return generator.generate()


__all__ = [
    "Generator",
    "GeneratorError",
    "GenerationStats",
    "ApiModel",
    "ArgumentEntity",
    "ClassEntity",
    "CodeGeneration",
    "EnumEntity",
    "FunctionEntity",
    "TypeEntry",
    "TypeInstantiation",
    "TypeKind",
    "Option",
    "translate_type",
    "MinimalConstructorBuilder",
    "minimal_constructor",
    "GeneratorConfig",
    "ConfigError",
    "load_config",
    "GeneratorRegistry",
    "RegistryError",
    "get_generator",
    "list_generators",
    "get_logger",
    "setup_logging",
    "run_generator",
]
