"""
Base generator interface for all binding targets.

Defines the contract concrete generators implement and drives the
per-class generation loop.
"""

import re
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Union

from ..logging_config import get_logger
from .config import GeneratorConfig, load_config
from .constructors import MinimalConstructorBuilder, Target, is_pointer
from .fileout import FileOut
from .model import (
    ApiModel,
    ArgumentEntity,
    ClassEntity,
    CodeGeneration,
    EnumEntity,
    EnumKey,
    FunctionEntity,
    TypeEntry,
    TypeInstantiation,
)
from .naming import module_name, sub_directory_for_package
from .templates import TemplateEngine, create_template_engine
from .translator import Option, translate_type

logger = get_logger(__name__)

_PLACEHOLDER = re.compile(
    r"%(RETURN_TYPE|FUNCTION_NAME|ARGUMENT_NAMES|ARGUMENTS|TYPE|\d+)"
)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


@dataclass(frozen=True)
class GenerationStats:
    """Counts produced by one generation run."""

    generated: int = 0
    written: int = 0

    def __add__(self, other: "GenerationStats") -> "GenerationStats":
        return GenerationStats(
            self.generated + other.generated, self.written + other.written
        )


class Generator(ABC):
    """Abstract base class for all binding generators."""

    def __init__(self, config: Union[GeneratorConfig, Dict[str, Any], None] = None):
        """Initialize generator with optional configuration."""
        if isinstance(config, GeneratorConfig):
            self.config = config
        else:
            self.config = load_config(custom_config=config)

        self._model: Optional[ApiModel] = None
        self._constructors: Optional[MinimalConstructorBuilder] = None
        self._package_name = ""
        self._last_stats = GenerationStats()
        self._template_engine = None

    # Setup

    def setup(self, model: ApiModel, args: Optional[Dict[str, str]] = None) -> bool:
        """
        Attach the extracted API and find the package name.

        The package is the first type system entry marked for generation.

        Args:
            model: Fully populated API model
            args: Generator options, see options()

        Returns:
            Result of do_setup()
        """
        self._model = model
        self._constructors = MinimalConstructorBuilder(model)

        entry = next(
            (
                e
                for e in model.type_entries
                if e.is_type_system and e.code_generation
            ),
            None,
        )
        if entry is not None:
            self._package_name = entry.name
        else:
            self._package_name = ""
            logger.warning("Couldn't find the package name!!")

        return self.do_setup(args or {})

    @abstractmethod
    def do_setup(self, args: Dict[str, str]) -> bool:
        """Generator specific setup; return False to abort."""
        pass

    def options(self) -> Dict[str, str]:
        """Options recognized by this generator, mapped to their help text."""
        return {}

    @property
    def model(self) -> ApiModel:
        if self._model is None:
            raise GeneratorError("Generator used before setup()")
        return self._model

    # Model accessors

    def classes(self) -> List[ClassEntity]:
        return self.model.classes

    def global_functions(self) -> List[FunctionEntity]:
        return self.model.global_functions

    def global_enums(self) -> List[EnumEntity]:
        return self.model.global_enums

    def primitive_types(self) -> List[TypeEntry]:
        return self.model.primitive_types

    def container_types(self) -> List[TypeEntry]:
        return self.model.container_types

    def find_enum(self, key: Optional[EnumKey]) -> Optional[EnumEntity]:
        return self.model.find_enum(key)

    def implicit_conversions(
        self, cpp_type: Union[TypeEntry, TypeInstantiation]
    ) -> List[FunctionEntity]:
        """Implicit conversions of a value type; empty for anything else."""
        entry = cpp_type
        if isinstance(cpp_type, TypeInstantiation):
            entry = cpp_type.type_entry
        if entry.is_value:
            cls = self.model.find_class(entry)
            if cls is not None:
                return cls.implicit_conversions()
        return []

    @staticmethod
    def is_object_type(
        value: Union[TypeEntry, TypeInstantiation, ClassEntity]
    ) -> bool:
        if isinstance(value, ClassEntity):
            return value.type_entry.is_object
        return value.is_object

    @staticmethod
    def is_pointer(cpp_type: TypeInstantiation) -> bool:
        return is_pointer(cpp_type)

    # Configuration

    @property
    def package_name(self) -> str:
        return self.config.package_name or self._package_name

    @property
    def module_name(self) -> str:
        return module_name(self.package_name)

    @property
    def output_directory(self) -> Path:
        return Path(self.config.output_directory)

    @output_directory.setter
    def output_directory(self, value: Union[str, Path]):
        self.config.output_directory = str(value)

    @property
    def license_comment(self) -> str:
        return self.config.license_comment

    @license_comment.setter
    def license_comment(self, value: str):
        self.config.license_comment = value

    @property
    def num_generated(self) -> int:
        """Classes generated by the last run."""
        return self._last_stats.generated

    @property
    def num_generated_and_written(self) -> int:
        """Classes whose output file changed in the last run."""
        return self._last_stats.written

    # Text helpers

    def translate_type(
        self,
        cpp_type: Optional[TypeInstantiation],
        context: Optional[ClassEntity] = None,
        options: Option = Option.NO_OPTION,
    ) -> str:
        return translate_type(cpp_type, context, options)

    def minimal_constructor(self, target: Target) -> Optional[str]:
        if self._constructors is None:
            raise GeneratorError("Generator used before setup()")
        return self._constructors.build(target)

    def write_argument_names(
        self, func: FunctionEntity, options: Option = Option.NO_OPTION
    ) -> str:
        """Comma separated argument names."""
        return ", ".join(a.name for a in self._arguments(func, options))

    def write_function_arguments(
        self, func: FunctionEntity, options: Option = Option.NO_OPTION
    ) -> str:
        """Comma separated argument declarations."""
        return ", ".join(
            self.argument_declaration(a, func.owner_class, options)
            for a in self._arguments(func, options)
        )

    def argument_declaration(
        self,
        arg: ArgumentEntity,
        context: Optional[ClassEntity] = None,
        options: Option = Option.NO_OPTION,
    ) -> str:
        type_options = options & (
            Option.EXCLUDE_CONST
            | Option.EXCLUDE_REFERENCE
            | Option.ENUM_AS_INTS
            | Option.ORIGINAL_NAME
        )
        declaration = self.translate_type(arg.type, context, type_options)
        if Option.SKIP_NAME not in options:
            declaration += f" {arg.name}"
        if Option.SKIP_DEFAULT_VALUES not in options and arg.default_value:
            declaration += f" = {arg.default_value}"
        return declaration

    @staticmethod
    def _arguments(func: FunctionEntity, options: Option) -> List[ArgumentEntity]:
        if Option.SKIP_REMOVED_ARGUMENTS in options:
            return [a for a in func.arguments if not a.removed]
        return list(func.arguments)

    def replace_template_variables(self, code: str, func: FunctionEntity) -> str:
        """
        Expand function placeholders in a code snippet.

        %TYPE, %1..%N, %RETURN_TYPE, %FUNCTION_NAME, %ARGUMENT_NAMES and
        %ARGUMENTS are replaced in one pass, so text coming from the
        function itself is never expanded again. Unknown placeholders are
        left as they are.
        """
        owner = func.owner_class
        values = {
            "RETURN_TYPE": self.translate_type(func.return_type, owner),
            "FUNCTION_NAME": func.original_name,
        }
        if owner is not None:
            values["TYPE"] = owner.name
        for arg in func.arguments:
            values[str(arg.argument_index + 1)] = arg.name
        if "%ARGUMENT_NAMES" in code:
            values["ARGUMENT_NAMES"] = self.write_argument_names(
                func, Option.SKIP_REMOVED_ARGUMENTS
            )
        if "%ARGUMENTS" in code:
            values["ARGUMENTS"] = self.write_function_arguments(
                func, Option.SKIP_DEFAULT_VALUES | Option.SKIP_REMOVED_ARGUMENTS
            )

        return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), code)

    # Templates

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._template_engine = create_template_engine(
                self.get_template_directory()
            )
        return self._template_engine

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        return self.template_engine.template_exists(template_name)

    # Generation

    def should_generate(self, cls: ClassEntity) -> bool:
        """Generate classes whose descriptor asks for target language code."""
        return CodeGeneration.GENERATE_TARGET_LANG in cls.type_entry.code_generation

    @abstractmethod
    def file_name_for_class(self, cls: ClassEntity) -> Optional[str]:
        """Output file name for a class; None skips the class."""
        pass

    @abstractmethod
    def generate_class(self, stream: TextIO, cls: ClassEntity) -> None:
        """Write the code for one class."""
        pass

    @abstractmethod
    def finish_generation(self) -> None:
        """Called once after every class has been processed."""
        pass

    def sub_directory_for_class(self, cls: ClassEntity) -> str:
        return self.sub_directory_for_package(cls.package)

    def sub_directory_for_package(self, package_name: str) -> str:
        return sub_directory_for_package(package_name, self.package_name)

    def generate(self, max_workers: Optional[int] = None) -> GenerationStats:
        """
        Generate every class of the model, then finish.

        Args:
            max_workers: Run classes on this many threads; defaults to the
                configured value, sequential when unset or 1

        Returns:
            Number of classes generated and of files actually changed
        """
        classes = list(self.classes())
        workers = max_workers if max_workers is not None else self.config.max_workers

        if workers and workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(self._generate_class_file, classes))
        else:
            results = [self._generate_class_file(cls) for cls in classes]

        stats = sum(results, GenerationStats())
        self._last_stats = stats

        self.finish_generation()

        logger.info(
            "Generated %d classes, %d files written", stats.generated, stats.written
        )
        return stats

    def _generate_class_file(self, cls: ClassEntity) -> GenerationStats:
        if not self.should_generate(cls):
            return GenerationStats()

        file_name = self.file_name_for_class(cls)
        if file_name is None:
            return GenerationStats()
        logger.debug("generating: %s", file_name)

        path = self.output_directory / self.sub_directory_for_class(cls) / file_name
        file_out = FileOut(path)
        self.generate_class(file_out.stream, cls)

        written = 1 if file_out.done() else 0
        return GenerationStats(generated=1, written=written)
