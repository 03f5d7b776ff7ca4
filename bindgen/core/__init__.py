"""
Core binding generation components.

Provides the type model, the text derivation engines and the base
generator used by all binding targets.
"""

from .generator import Generator, GeneratorError, GenerationStats
from .model import (
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
from .translator import Option, translate_type
from .constructors import MinimalConstructorBuilder, minimal_constructor, is_pointer
from .naming import (
    class_target_full_name,
    module_name,
    sub_directory_for_class,
    sub_directory_for_package,
)
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import (
    TemplateEngine,
    TemplateError,
    create_template_engine,
    format_code,
    write_code,
)
from .fileout import FileOut

__all__ = [
    # Base generator interface
    "Generator",
    "GeneratorError",
    "GenerationStats",
    # Type model
    "ApiModel",
    "ArgumentEntity",
    "ClassEntity",
    "CodeGeneration",
    "EnumEntity",
    "FunctionEntity",
    "TypeEntry",
    "TypeInstantiation",
    "TypeKind",
    # Text derivation
    "Option",
    "translate_type",
    "MinimalConstructorBuilder",
    "minimal_constructor",
    "is_pointer",
    # Naming
    "class_target_full_name",
    "module_name",
    "sub_directory_for_class",
    "sub_directory_for_package",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Templates and code text
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    "format_code",
    "write_code",
    "FileOut",
]
