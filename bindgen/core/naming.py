"""
Naming utilities for generated bindings.

Maps packages to output sub-directories and builds the dotted names
classes and enums carry in the target language.
"""

import os
from typing import Union

from .model import ClassEntity, EnumEntity

NAMESPACE_SEPARATOR = "."


def sub_directory_for_package(package_name: str, default_package: str = "") -> str:
    """
    Convert a dotted package name into a relative directory path.

    Args:
        package_name: Package such as "a.b.c"
        default_package: Used when package_name is empty

    Returns:
        Path using the platform separator, e.g. "a/b/c"
    """
    if not package_name:
        package_name = default_package
    return package_name.replace(NAMESPACE_SEPARATOR, os.sep)


def sub_directory_for_class(cls: ClassEntity, default_package: str = "") -> str:
    """Output sub-directory of a class, from its package."""
    return sub_directory_for_package(cls.package, default_package)


def module_name(package_name: str) -> str:
    """Last segment of a dotted package name."""
    return package_name.rsplit(NAMESPACE_SEPARATOR, 1)[-1]


def class_target_full_name(
    entity: Union[ClassEntity, EnumEntity], include_package: bool = True
) -> str:
    """
    Dotted target-language name of a class or enum.

    Enclosing classes are prepended outward-in, so a nested enum
    "Color" inside "Widget" in package "gui" becomes "gui.Widget.Color".
    """
    parts = [entity.name]
    context = entity.enclosing_class
    while context is not None:
        parts.insert(0, context.name)
        context = context.enclosing_class

    if include_package:
        parts.insert(0, entity.package)

    return NAMESPACE_SEPARATOR.join(parts)
