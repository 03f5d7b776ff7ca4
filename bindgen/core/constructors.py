"""
Minimal constructor synthesis.

Builds an expression that constructs a throwaway value of a given type,
for places where generated code needs "some valid value" and none exists
yet (e.g. an unused output slot). A result of None means the type cannot
be default-constructed safely by this engine; callers decide what to do.
"""

from typing import FrozenSet, Iterable, List, Optional, Union

from ..logging_config import get_logger
from .model import (
    ApiModel,
    ArgumentEntity,
    ClassEntity,
    FunctionEntity,
    TypeEntry,
    TypeInstantiation,
)

logger = get_logger(__name__)

NULL_POINTER = "0"

Target = Union[TypeInstantiation, TypeEntry, ClassEntity, None]


def is_pointer(cpp_type: TypeInstantiation) -> bool:
    """True for any pointer shape: indirections, native or value pointers."""
    return (
        cpp_type.indirections > 0
        or cpp_type.is_native_pointer
        or cpp_type.is_value_pointer
    )


def is_candidate_constructor(ctor: FunctionEntity) -> bool:
    """Public, user-declared, non-copy constructors take part in the search."""
    return not (ctor.is_user_added or ctor.is_private or ctor.is_copy_constructor)


class MinimalConstructorBuilder:
    """
    Synthesizes minimal construction expressions from an ApiModel.

    The model is only read; the builder holds no per-call state, so a
    single instance can be shared between threads.
    """

    def __init__(self, model: ApiModel):
        self.model = model

    def build(self, target: Target) -> Optional[str]:
        """Dispatch on a type use, a type entry or a class."""
        if isinstance(target, TypeInstantiation):
            return self.for_type(target)
        if isinstance(target, TypeEntry):
            return self.for_type_entry(target)
        if isinstance(target, ClassEntity):
            return self.for_class(target)
        return None

    def for_type(self, cpp_type: Optional[TypeInstantiation]) -> Optional[str]:
        return self._for_type(cpp_type, frozenset())

    def for_type_entry(self, type_entry: Optional[TypeEntry]) -> Optional[str]:
        """Minimal value for a bare descriptor (primitives and enums only)."""
        if type_entry is None:
            return None

        if type_entry.is_cpp_primitive:
            return f"(({type_entry.qualified_name})0)"

        if type_entry.is_enum or type_entry.is_flags:
            return f"((::{type_entry.qualified_name})0)"

        if type_entry.is_primitive:
            # A user primitive without a declared default constructor gets
            # "::Name()". If that is wrong the build of the generated code
            # will tell.
            if type_entry.has_default_constructor:
                return type_entry.default_constructor
            return f"::{type_entry.qualified_name}()"

        return None

    def for_class(self, cls: Optional[ClassEntity]) -> Optional[str]:
        return self._for_class(cls, frozenset())

    def _for_type(
        self, cpp_type: Optional[TypeInstantiation], visiting: FrozenSet[int]
    ) -> Optional[str]:
        if cpp_type is None:
            return None

        # A reference to an object type cannot be bound to a fabricated value
        if cpp_type.reference and cpp_type.is_object:
            return None

        if cpp_type.is_container:
            return self._container_constructor(cpp_type)

        entry = cpp_type.type_entry

        if cpp_type.is_native_pointer:
            return f"(({entry.qualified_name}*)0)"

        if is_pointer(cpp_type):
            return f"((::{entry.qualified_name}*)0)"

        if entry.is_complex:
            if entry.has_default_constructor:
                return entry.default_constructor
            return self._for_class(self.model.find_class(entry), visiting)

        return self.for_type_entry(entry)

    def _container_constructor(self, cpp_type: TypeInstantiation) -> str:
        name = cpp_type.cpp_signature()
        if name.startswith("const "):
            name = name[len("const "):]
        if name.endswith("&"):
            name = name[:-1].strip()
        if name.endswith("*"):
            return NULL_POINTER
        return f"::{name}()"

    def _for_class(
        self, cls: Optional[ClassEntity], visiting: FrozenSet[int]
    ) -> Optional[str]:
        if cls is None:
            return None

        if cls.type_entry.has_default_constructor:
            return cls.type_entry.default_constructor

        # Classes that can only be built from each other have no minimal value
        if id(cls) in visiting:
            return None
        visiting = visiting | {id(cls)}

        candidates = [c for c in cls.constructors() if is_candidate_constructor(c)]
        if not candidates:
            logger.debug("No public constructor for %s", cls.qualified_cpp_name)
            return None
        if any(not c.arguments for c in candidates):
            return f"::{cls.qualified_cpp_name}()"

        # Fewer arguments first, declaration order within the same count
        ordered = sorted(candidates, key=lambda c: len(c.arguments))

        first_pass = (
            self._call(cls, self._simple_arguments(cls, ctor.arguments, visiting))
            for ctor in ordered
        )
        result = next((call for call in first_pass if call), None)
        if result:
            return result

        second_pass = (
            self._call(cls, self._recursive_arguments(cls, ctor.arguments, visiting))
            for ctor in ordered
        )
        result = next((call for call in second_pass if call), None)
        if result is None:
            logger.debug("No minimal constructor for %s", cls.qualified_cpp_name)
        return result

    def _simple_arguments(
        self,
        cls: ClassEntity,
        arguments: Iterable[ArgumentEntity],
        visiting: FrozenSet[int],
    ) -> List[str]:
        """
        Argument values using only primitives, enums, pointers and defaults.

        An empty list means the constructor is not usable in this pass.
        """
        values: List[str] = []
        for arg in arguments:
            entry = arg.type.type_entry
            if entry is cls.type_entry:
                return []

            if arg.original_default_value:
                # Remaining parameters are covered by their own defaults.
                # Only a default replaced by the binding layer is spelled out.
                if (
                    arg.default_value
                    and arg.default_value != arg.original_default_value
                ):
                    values.append(arg.default_value)
                break

            if entry.is_cpp_primitive or entry.is_enum or is_pointer(arg.type):
                value = self._for_type(arg.type, visiting)
                if not value:
                    return []
                values.append(value)
            else:
                return []
        return values

    def _recursive_arguments(
        self,
        cls: ClassEntity,
        arguments: Iterable[ArgumentEntity],
        visiting: FrozenSet[int],
    ) -> List[str]:
        """Argument values built recursively for any argument type."""
        values: List[str] = []
        for arg in arguments:
            if arg.type.type_entry is cls.type_entry:
                return []
            value = self._for_type(arg.type, visiting)
            if not value:
                return []
            values.append(value)
        return values

    @staticmethod
    def _call(cls: ClassEntity, values: List[str]) -> Optional[str]:
        if not values:
            return None
        return f"::{cls.qualified_cpp_name}({', '.join(values)})"


def minimal_constructor(target: Target, model: ApiModel) -> Optional[str]:
    """
    Convenience function to synthesize a minimal constructor.

    Args:
        target: TypeInstantiation, TypeEntry or ClassEntity
        model: Model used to look up classes

    Returns:
        Construction expression, or None when none can be synthesized
    """
    return MinimalConstructorBuilder(model).build(target)
