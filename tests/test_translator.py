"""
Tests for type translation.
"""

import pytest

from bindgen.core.model import ClassEntity, TypeEntry, TypeInstantiation, TypeKind
from bindgen.core.translator import Option, translate_type


def test_none_is_void():
    assert translate_type(None) == "void"


def test_const_reference_renders_signature_verbatim(entries):
    cpp_type = TypeInstantiation(entries.widget, reference=True, constant=True)
    assert translate_type(cpp_type) == "const Widget&"


def test_exclude_const_and_reference_adds_global_scope(entries):
    cpp_type = TypeInstantiation(entries.widget, reference=True, constant=True)
    options = Option.EXCLUDE_CONST | Option.EXCLUDE_REFERENCE
    assert translate_type(cpp_type, options=options) == "::Widget"


def test_exclude_const_keeps_pointer(entries):
    cpp_type = TypeInstantiation(entries.widget, indirections=1, constant=True)
    assert translate_type(cpp_type, options=Option.EXCLUDE_CONST) == "::Widget*"


def test_builtin_primitive_gets_no_global_scope(entries):
    cpp_type = TypeInstantiation(entries.int, reference=True, constant=True)
    assert translate_type(cpp_type, options=Option.EXCLUDE_CONST) == "int&"


def test_void_gets_no_global_scope(entries):
    cpp_type = TypeInstantiation(entries.void, indirections=1, constant=True)
    assert translate_type(cpp_type, options=Option.EXCLUDE_CONST) == "void*"


def test_array_appends_brackets(entries):
    element = TypeInstantiation(entries.int)
    cpp_type = TypeInstantiation(entries.int, array_element_type=element)
    assert translate_type(cpp_type) == "int[]"


@pytest.mark.parametrize("entry_name", ["color", "color_flags"])
def test_enum_as_ints(entries, entry_name):
    cpp_type = TypeInstantiation(getattr(entries, entry_name), constant=True)
    assert translate_type(cpp_type, options=Option.ENUM_AS_INTS) == "int"
    assert translate_type(cpp_type) == f"const {cpp_type.type_entry.qualified_name}"


def test_enum_as_ints_ignores_other_types(entries):
    cpp_type = TypeInstantiation(entries.widget, indirections=1)
    assert translate_type(cpp_type, options=Option.ENUM_AS_INTS) == "Widget*"


def test_container_signature(entries):
    cpp_type = TypeInstantiation(
        entries.vector,
        instantiations=(TypeInstantiation(entries.int),),
        constant=True,
        reference=True,
    )
    assert translate_type(cpp_type) == "const Vector<int>&"
    options = Option.EXCLUDE_CONST | Option.EXCLUDE_REFERENCE
    assert translate_type(cpp_type, options=options) == "::Vector<int>"


class TestOriginalName:
    def _type(self, entries, description):
        return TypeInstantiation(
            entries.widget, original_type_description=description
        )

    def test_trims_description(self, entries):
        cpp_type = self._type(entries, "  Widget const &  ")
        assert translate_type(cpp_type, options=Option.ORIGINAL_NAME) == "Widget const &"

    def test_drops_trailing_reference(self, entries):
        cpp_type = self._type(entries, "Widget&")
        options = Option.ORIGINAL_NAME | Option.EXCLUDE_REFERENCE
        assert translate_type(cpp_type, options=options) == "Widget"

    def test_removes_trailing_const(self, entries):
        cpp_type = self._type(entries, "Widget const*")
        options = Option.ORIGINAL_NAME | Option.EXCLUDE_CONST
        assert translate_type(cpp_type, options=options) == "Widget *"

    def test_keeps_const_inside_template_arguments(self, entries):
        cpp_type = self._type(entries, "const QList<const Foo*>&")
        options = (
            Option.ORIGINAL_NAME | Option.EXCLUDE_CONST | Option.EXCLUDE_REFERENCE
        )
        assert translate_type(cpp_type, options=options) == "const QList<const Foo*>"

    def test_leading_const_is_not_trailing(self, entries):
        cpp_type = self._type(entries, "const int&")
        options = Option.ORIGINAL_NAME | Option.EXCLUDE_CONST
        assert translate_type(cpp_type, options=options) == "const int&"


class TestGenericContext:
    @pytest.fixture
    def template_type(self, entries):
        parameter = TypeInstantiation(TypeEntry(TypeKind.VALUE, "T"))
        return TypeInstantiation(entries.int, original_template_type=parameter)

    def test_generic_class_renders_template_parameter(self, template_type):
        entry = TypeEntry(TypeKind.VALUE, "Box", is_generic_class=True)
        context = ClassEntity(name="Box", type_entry=entry)
        assert translate_type(template_type, context) == "T"

    def test_plain_class_renders_instantiated_type(self, template_type):
        entry = TypeEntry(TypeKind.VALUE, "Box")
        context = ClassEntity(name="Box", type_entry=entry)
        assert translate_type(template_type, context) == "int"

    def test_without_context_renders_instantiated_type(self, template_type):
        assert translate_type(template_type) == "int"
