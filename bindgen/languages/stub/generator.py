"""
C++ wrapper stub generator.

Writes one wrapper source per class with constructor and method
forwarders, plus a module index calling every class initializer.
"""

import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from ...core.fileout import FileOut
from ...core.generator import Generator
from ...core.model import ClassEntity, FunctionEntity
from ...core.naming import class_target_full_name
from ...core.templates import format_code
from ...core.translator import Option
from ...logging_config import get_logger

logger = get_logger(__name__)

METHOD_CALL = "self->%FUNCTION_NAME(%ARGUMENT_NAMES);"
METHOD_RETURN = "return self->%FUNCTION_NAME(%ARGUMENT_NAMES);"
WRAPPER_ARGUMENTS = Option.SKIP_DEFAULT_VALUES | Option.SKIP_REMOVED_ARGUMENTS


class StubGenerator(Generator):
    """Generator for C++ wrapper stubs."""

    def __init__(self, config=None):
        super().__init__(config)
        self.header_pattern = "{name}.h"
        self._generated_classes = set()
        self._lock = threading.Lock()

    def get_template_directory(self) -> Optional[Path]:
        """Return the stub templates directory."""
        return Path(__file__).parent / "templates"

    def options(self) -> Dict[str, str]:
        return {
            "header-pattern": "Header included by each wrapper, {name} is the "
            "lower-case class name (default: {name}.h)",
        }

    def do_setup(self, args: Dict[str, str]) -> bool:
        self.header_pattern = args.get("header-pattern", self.header_pattern)
        self._generated_classes.clear()
        return True

    @property
    def namespace(self) -> str:
        return (self.package_name or "bindings").replace(".", "_") + "_wrappers"

    @staticmethod
    def init_name(cls: ClassEntity) -> str:
        return class_target_full_name(cls, include_package=False).replace(".", "_")

    def file_name_for_class(self, cls: ClassEntity) -> Optional[str]:
        """Classes without declared functions have nothing to wrap."""
        if not cls.functions:
            return None
        return f"{self.init_name(cls).lower()}_wrapper.cpp"

    def generate_class(self, stream: TextIO, cls: ClassEntity) -> None:
        context = {
            "license_comment": self.license_comment,
            "full_name": class_target_full_name(cls),
            "qualified_name": cls.qualified_cpp_name,
            "init_name": self.init_name(cls),
            "header": self.header_pattern.format(name=cls.name.lower()),
            "namespace": self.namespace,
            "constructors": [
                self._constructor_data(cls, ctor)
                for ctor in cls.constructors()
                if not ctor.is_private
            ],
            "default_instance": self.minimal_constructor(cls),
            "methods": [
                self._method_data(func)
                for func in cls.functions
                if not func.is_constructor and not func.is_private
            ],
            "injected_code": self._injected_code(cls),
        }
        stream.write(self.render_template("class_wrapper.cpp.j2", context))

        with self._lock:
            self._generated_classes.add(id(cls))

    def _constructor_data(
        self, cls: ClassEntity, ctor: FunctionEntity
    ) -> Dict[str, Any]:
        return {
            "arguments": self.write_function_arguments(ctor, WRAPPER_ARGUMENTS),
            "call": self.replace_template_variables(
                f"new ::{cls.qualified_cpp_name}(%ARGUMENT_NAMES)", ctor
            ),
        }

    def _method_data(self, func: FunctionEntity) -> Dict[str, Any]:
        returns = (
            func.return_type is not None and not func.return_type.type_entry.is_void
        )
        body = self.replace_template_variables(
            METHOD_RETURN if returns else METHOD_CALL, func
        )
        return {
            "name": func.name,
            "return_type": self.translate_type(func.return_type, func.owner_class),
            "arguments": self.write_function_arguments(
                func, WRAPPER_ARGUMENTS
            ),
            "body": body,
        }

    def _injected_code(self, cls: ClassEntity) -> str:
        """User snippets from config custom["inject_code"], keyed by class name."""
        snippets = self.config.custom.get("inject_code", {})
        code = snippets.get(cls.qualified_cpp_name) or snippets.get(cls.name)
        if not code:
            return ""
        return "\n".join(format_code(code))

    def finish_generation(self) -> None:
        """Write the module index for the generated classes."""
        names: List[str] = [
            self.init_name(cls)
            for cls in self.classes()
            if id(cls) in self._generated_classes
        ]
        if not names:
            logger.info("No classes generated, skipping module index")
            return

        module = self.module_name or "bindings"
        path = (
            self.output_directory
            / self.sub_directory_for_package(self.package_name)
            / f"{module.lower()}_module_wrapper.cpp"
        )
        file_out = FileOut(path)
        file_out.stream.write(
            self.render_template(
                "module_index.cpp.j2",
                {
                    "license_comment": self.license_comment,
                    "package": self.package_name,
                    "module": module,
                    "namespace": self.namespace,
                    "classes": names,
                },
            )
        )
        if file_out.done():
            logger.info("Wrote module index %s", path)
