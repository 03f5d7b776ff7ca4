"""
Shared fixtures: a small API model and a minimal concrete generator.
"""

from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest

from bindgen.core.generator import Generator
from bindgen.core.model import (
    ApiModel,
    ArgumentEntity,
    ClassEntity,
    CodeGeneration,
    FunctionEntity,
    TypeEntry,
    TypeInstantiation,
    TypeKind,
)


@pytest.fixture
def entries():
    """Commonly used type entries."""
    return SimpleNamespace(
        void=TypeEntry(TypeKind.VOID, "void"),
        int=TypeEntry(TypeKind.CPP_PRIMITIVE, "int"),
        double=TypeEntry(TypeKind.CPP_PRIMITIVE, "double"),
        char=TypeEntry(TypeKind.CPP_PRIMITIVE, "char"),
        color=TypeEntry(TypeKind.ENUM, "Color", "N::Color"),
        color_flags=TypeEntry(TypeKind.FLAGS, "Colors", "N::Colors"),
        string=TypeEntry(TypeKind.PRIMITIVE, "String"),
        qstring=TypeEntry(TypeKind.PRIMITIVE, "QString", default_constructor="QString()"),
        vector=TypeEntry(TypeKind.CONTAINER, "Vector"),
        widget=TypeEntry(TypeKind.OBJECT, "Widget"),
        package=TypeEntry(TypeKind.TYPE_SYSTEM, "gui"),
    )


@pytest.fixture
def make_class():
    """Build a ClassEntity whose constructors take the given argument lists."""

    def _make(
        name: str,
        kind: TypeKind = TypeKind.VALUE,
        constructors: Optional[List[List[ArgumentEntity]]] = None,
        **entry_args,
    ) -> ClassEntity:
        entry = TypeEntry(kind, name, **entry_args)
        cls = ClassEntity(name=name, type_entry=entry, package="gui")
        for arguments in constructors or []:
            cls.add_function(
                FunctionEntity(name=name, arguments=arguments, is_constructor=True)
            )
        return cls

    return _make


def arg(name: str, type_entry: TypeEntry, **kwargs) -> ArgumentEntity:
    """Argument of a plain (non-pointer) type unless qualifiers are given."""
    qualifiers = {
        key: kwargs.pop(key)
        for key in ("indirections", "reference", "constant", "native_pointer")
        if key in kwargs
    }
    return ArgumentEntity(name, TypeInstantiation(type_entry, **qualifiers), **kwargs)


@pytest.fixture
def make_arg():
    return arg


class RecordingGenerator(Generator):
    """Generator writing one line per class and recording hook calls."""

    def __init__(self, config=None, skip_files=()):
        super().__init__(config)
        self.skip_files = set(skip_files)
        self.setup_args: Optional[Dict[str, str]] = None
        self.finished = 0
        self.files_at_finish: Optional[int] = None

    def do_setup(self, args):
        self.setup_args = args
        return True

    def file_name_for_class(self, cls):
        if cls.name in self.skip_files:
            return None
        return f"{cls.name.lower()}.txt"

    def generate_class(self, stream, cls):
        stream.write(f"class {cls.qualified_cpp_name}\n")

    def finish_generation(self):
        self.finished += 1
        self.files_at_finish = sum(
            1 for path in self.output_directory.rglob("*") if path.is_file()
        )


@pytest.fixture
def generator_class():
    return RecordingGenerator


@pytest.fixture
def widget_model(entries):
    """A package with a generated Widget class and a C++-only Helper class."""
    int_type = TypeInstantiation(entries.int)

    widget = ClassEntity(name="Widget", type_entry=entries.widget, package="gui")
    widget.add_function(
        FunctionEntity(
            name="Widget",
            arguments=[ArgumentEntity("w", int_type), ArgumentEntity("h", int_type)],
            is_constructor=True,
        )
    )
    widget.add_function(
        FunctionEntity(
            name="resize",
            arguments=[
                ArgumentEntity("w", int_type, default_value="0"),
                ArgumentEntity("h", int_type),
            ],
            return_type=TypeInstantiation(entries.void),
        )
    )
    widget.add_function(FunctionEntity(name="width", return_type=int_type))

    helper_entry = TypeEntry(
        TypeKind.VALUE, "Helper", code_generation=CodeGeneration.GENERATE_CPP
    )
    helper = ClassEntity(name="Helper", type_entry=helper_entry, package="gui")

    return ApiModel(
        classes=[widget, helper],
        primitive_types=[entries.int],
        type_entries=[entries.package, entries.int, entries.widget, helper_entry],
    )
