"""
Type translation for generated code.

Renders a TypeInstantiation to the text that should appear in generated
sources, under a set of formatting options.
"""

from enum import Flag
from typing import Optional

from .model import ClassEntity, TypeInstantiation

VOID_NAME = "void"
ENUM_INT_NAME = "int"

_CONST = "const"


class Option(Flag):
    """Formatting options shared by type and argument writers."""

    NO_OPTION = 0
    EXCLUDE_CONST = 0x01
    EXCLUDE_REFERENCE = 0x02
    ENUM_AS_INTS = 0x04
    SKIP_NAME = 0x08
    ORIGINAL_NAME = 0x20
    SKIP_REMOVED_ARGUMENTS = 0x40
    SKIP_DEFAULT_VALUES = 0x80


def translate_type(
    cpp_type: Optional[TypeInstantiation],
    context: Optional[ClassEntity] = None,
    options: Option = Option.NO_OPTION,
) -> str:
    """
    Translate a type use into its textual form.

    Args:
        cpp_type: Type to render; None means void
        context: Class the type appears in
        options: Formatting options

    Returns:
        The rendered type. Every input maps to some string.
    """
    # Template parameters inside a generic class render as written
    if (
        context is not None
        and cpp_type is not None
        and context.type_entry.is_generic_class
        and cpp_type.original_template_type is not None
    ):
        cpp_type = cpp_type.original_template_type

    if cpp_type is None:
        return VOID_NAME

    if cpp_type.is_array:
        return translate_type(cpp_type.array_element_type, context, options) + "[]"

    if Option.ENUM_AS_INTS in options and (cpp_type.is_enum or cpp_type.is_flags):
        return ENUM_INT_NAME

    if Option.ORIGINAL_NAME in options:
        return _strip_original_name(cpp_type.original_type_description, options)

    if options & (Option.EXCLUDE_CONST | Option.EXCLUDE_REFERENCE):
        changes = {}
        if Option.EXCLUDE_CONST in options:
            changes["constant"] = False
        if Option.EXCLUDE_REFERENCE in options:
            changes["reference"] = False
        stripped = cpp_type.copy(**changes)

        signature = stripped.cpp_signature()
        entry = stripped.type_entry
        if not entry.is_void and not entry.is_cpp_primitive:
            signature = "::" + signature
        return signature

    return cpp_type.cpp_signature()


def _strip_original_name(description: str, options: Option) -> str:
    """Apply const/reference exclusion to a type as originally spelled."""
    text = description.strip()

    if Option.EXCLUDE_REFERENCE in options and text.endswith("&"):
        text = text[:-1]

    # Only a trailing const goes: "T const", "T const*", "T const&".
    # A const inside template arguments must survive.
    if Option.EXCLUDE_CONST in options:
        index = text.rfind(_CONST)
        if index != -1 and index >= len(text) - (len(_CONST) + 1):
            text = text[:index] + text[index + len(_CONST):]

    return text
