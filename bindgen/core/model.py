"""
Read-only type model consumed by the code generators.

The parser/metamodel builder produces these objects once; every generator
component only derives text from them and never mutates them.
"""

from dataclasses import dataclass, field, replace
from enum import Enum, Flag, auto
from typing import List, Optional, Tuple, Union


class TypeKind(Enum):
    """Closed set of type descriptor categories."""

    VOID = "void"
    CPP_PRIMITIVE = "cpp_primitive"  # int, double, bool ...
    PRIMITIVE = "primitive"  # user-declared primitive (e.g. a string class)
    ENUM = "enum"
    FLAGS = "flags"
    CONTAINER = "container"
    OBJECT = "object"
    VALUE = "value"
    MANAGED_OBJECT = "managed_object"
    TYPE_SYSTEM = "type_system"  # namespace/package marker


class CodeGeneration(Flag):
    """Which outputs a descriptor asks to be generated."""

    GENERATE_NOTHING = 0
    GENERATE_TARGET_LANG = auto()
    GENERATE_CPP = auto()
    GENERATE_ALL = GENERATE_TARGET_LANG | GENERATE_CPP


_COMPLEX_KINDS = {TypeKind.OBJECT, TypeKind.VALUE, TypeKind.MANAGED_OBJECT}


@dataclass(frozen=True, eq=False)
class TypeEntry:
    """
    Immutable descriptor of one declared type.

    Entries compare by identity: two uses of the same declared type share
    the same TypeEntry object.
    """

    kind: TypeKind
    name: str
    qualified_name: str = field(default="")
    default_constructor: Optional[str] = None
    code_generation: CodeGeneration = CodeGeneration.GENERATE_ALL
    is_generic_class: bool = False

    def __post_init__(self):
        """Set qualified_name if not provided."""
        if not self.qualified_name:
            object.__setattr__(self, "qualified_name", self.name)

    @property
    def is_void(self) -> bool:
        return self.kind is TypeKind.VOID

    @property
    def is_cpp_primitive(self) -> bool:
        return self.kind is TypeKind.CPP_PRIMITIVE

    @property
    def is_primitive(self) -> bool:
        """True for built-in and user-declared primitives."""
        return self.kind in (TypeKind.CPP_PRIMITIVE, TypeKind.PRIMITIVE)

    @property
    def is_enum(self) -> bool:
        return self.kind is TypeKind.ENUM

    @property
    def is_flags(self) -> bool:
        return self.kind is TypeKind.FLAGS

    @property
    def is_container(self) -> bool:
        return self.kind is TypeKind.CONTAINER

    @property
    def is_object(self) -> bool:
        """Object types, managed objects included."""
        return self.kind in (TypeKind.OBJECT, TypeKind.MANAGED_OBJECT)

    @property
    def is_managed_object(self) -> bool:
        return self.kind is TypeKind.MANAGED_OBJECT

    @property
    def is_value(self) -> bool:
        return self.kind is TypeKind.VALUE

    @property
    def is_complex(self) -> bool:
        return self.kind in _COMPLEX_KINDS

    @property
    def is_type_system(self) -> bool:
        return self.kind is TypeKind.TYPE_SYSTEM

    @property
    def has_default_constructor(self) -> bool:
        return bool(self.default_constructor)

    def __repr__(self) -> str:
        return f"TypeEntry({self.kind.value}, {self.qualified_name!r})"


@dataclass(frozen=True)
class TypeInstantiation:
    """A use of a TypeEntry with its qualifiers."""

    type_entry: TypeEntry
    indirections: int = 0
    reference: bool = False
    constant: bool = False
    array_element_type: Optional["TypeInstantiation"] = None
    native_pointer: bool = False
    value_pointer: bool = False
    instantiations: Tuple["TypeInstantiation", ...] = ()
    original_template_type: Optional["TypeInstantiation"] = None
    original_type_description: str = ""

    def __post_init__(self):
        if self.indirections < 0:
            raise ValueError(
                f"Negative indirections for {self.type_entry.qualified_name}: "
                f"{self.indirections}"
            )
        if not self.original_type_description:
            object.__setattr__(self, "original_type_description", self.cpp_signature())

    @property
    def is_array(self) -> bool:
        return self.array_element_type is not None

    @property
    def is_container(self) -> bool:
        return self.type_entry.is_container

    @property
    def is_enum(self) -> bool:
        return self.type_entry.is_enum

    @property
    def is_flags(self) -> bool:
        return self.type_entry.is_flags

    @property
    def is_object(self) -> bool:
        return self.type_entry.is_object

    @property
    def is_native_pointer(self) -> bool:
        return self.native_pointer

    @property
    def is_value_pointer(self) -> bool:
        return self.value_pointer

    def cpp_signature(self) -> str:
        """Canonical spelling: [const ]Name[<args>][*...][&]."""
        signature = self.type_entry.qualified_name
        if self.instantiations:
            args = ", ".join(t.cpp_signature() for t in self.instantiations)
            # keep "> >" apart for pre-C++11 compilers
            if args.endswith(">"):
                args += " "
            signature = f"{signature}<{args}>"
        if self.constant:
            signature = "const " + signature
        signature += "*" * self.indirections
        if self.reference:
            signature += "&"
        return signature

    def copy(self, **changes) -> "TypeInstantiation":
        """Return a modified copy; the recorded original spelling is kept."""
        return replace(self, **changes)

    def __str__(self) -> str:
        return self.cpp_signature()


@dataclass(eq=False)
class ArgumentEntity:
    """A function argument."""

    name: str
    type: TypeInstantiation
    argument_index: int = 0
    original_default_value: str = ""
    default_value: str = ""
    removed: bool = False


@dataclass(eq=False)
class FunctionEntity:
    """A function, method or constructor."""

    name: str
    arguments: List[ArgumentEntity] = field(default_factory=list)
    return_type: Optional[TypeInstantiation] = None
    owner_class: Optional["ClassEntity"] = None
    original_name: str = ""
    is_constructor: bool = False
    is_user_added: bool = False
    is_private: bool = False
    is_copy_constructor: bool = False
    is_implicit_conversion: bool = False

    def __post_init__(self):
        if not self.original_name:
            self.original_name = self.name
        for index, argument in enumerate(self.arguments):
            argument.argument_index = index


@dataclass(eq=False)
class EnumEntity:
    """An enum and its optional flags companion."""

    name: str
    type_entry: TypeEntry
    package: str = ""
    flags_entry: Optional[TypeEntry] = None
    enclosing_class: Optional["ClassEntity"] = None


@dataclass(eq=False)
class ClassEntity:
    """A class or struct with its functions and nested enums."""

    name: str
    type_entry: TypeEntry
    package: str = ""
    enclosing_class: Optional["ClassEntity"] = None
    functions: List[FunctionEntity] = field(default_factory=list)
    enums: List[EnumEntity] = field(default_factory=list)

    @property
    def qualified_cpp_name(self) -> str:
        return self.type_entry.qualified_name

    def add_function(self, function: FunctionEntity) -> FunctionEntity:
        """Attach a function to this class (model building only)."""
        function.owner_class = self
        self.functions.append(function)
        return function

    def constructors(self) -> List[FunctionEntity]:
        return [f for f in self.functions if f.is_constructor]

    def implicit_conversions(self) -> List[FunctionEntity]:
        return [f for f in self.functions if f.is_implicit_conversion]


EnumKey = Union[TypeEntry, TypeInstantiation]


@dataclass
class ApiModel:
    """
    Everything a generator reads from the extracted API.

    Must be fully populated before generation starts.
    """

    classes: List[ClassEntity] = field(default_factory=list)
    global_functions: List[FunctionEntity] = field(default_factory=list)
    global_enums: List[EnumEntity] = field(default_factory=list)
    primitive_types: List[TypeEntry] = field(default_factory=list)
    container_types: List[TypeEntry] = field(default_factory=list)
    type_entries: List[TypeEntry] = field(default_factory=list)

    def find_class(self, type_entry: Optional[TypeEntry]) -> Optional[ClassEntity]:
        """Find the class declared by a type entry."""
        if type_entry is None:
            return None
        for cls in self.classes:
            if cls.type_entry is type_entry:
                return cls
        return None

    def all_enums(self) -> List[EnumEntity]:
        enums = list(self.global_enums)
        for cls in self.classes:
            enums.extend(cls.enums)
        return enums

    def find_enum(self, key: Optional[EnumKey]) -> Optional[EnumEntity]:
        """
        Find an enum by its enum entry, its flags entry or a type using it.
        """
        if isinstance(key, TypeInstantiation):
            key = key.type_entry
        if key is None:
            return None

        for enum in self.all_enums():
            if key.is_flags and enum.flags_entry is key:
                return enum
            if enum.type_entry is key:
                return enum
        return None
