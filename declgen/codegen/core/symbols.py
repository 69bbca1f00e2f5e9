"""
Type symbol representation.

Describes the source object-oriented types (classes, interfaces, structs,
enums) fed into the declaration pipeline, together with the structural
type descriptions of their members.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

ARITY_MARKER = "`"


class SymbolKind(Enum):
    """Kinds of declared source types."""

    CLASS = "class"
    INTERFACE = "interface"
    STRUCT = "struct"
    ENUM = "enum"


class PrimitiveKind(Enum):
    """Primitive kinds of the source type system."""

    STRING = "string"
    CHAR = "char"
    GUID = "guid"
    BOOL = "bool"
    BYTE = "byte"
    SBYTE = "sbyte"
    SHORT = "short"
    USHORT = "ushort"
    INT = "int"
    UINT = "uint"
    LONG = "long"
    ULONG = "ulong"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    DATETIME = "datetime"
    DATETIMEOFFSET = "datetimeoffset"
    DATEONLY = "dateonly"
    TIMEONLY = "timeonly"
    TIMESPAN = "timespan"
    OBJECT = "object"


class TypeKind(Enum):
    """Structural kinds a member type can take."""

    PRIMITIVE = "primitive"
    CLASS = "class"
    INTERFACE = "interface"
    STRUCT = "struct"
    ENUM = "enum"
    ARRAY = "array"
    NULLABLE = "nullable"
    GENERIC_PARAMETER = "generic_parameter"
    UNKNOWN = "unknown"


def strip_arity(name: str) -> str:
    """Strip the generic arity marker from a type name (``Result`1`` -> ``Result``)."""
    index = name.find(ARITY_MARKER)
    return name[:index] if index > 0 else name


def parse_arity(name: str) -> int:
    """Return the generic arity encoded in a type name, or 0."""
    index = name.find(ARITY_MARKER)
    if index <= 0:
        return 0
    suffix = name[index + 1 :]
    return int(suffix) if suffix.isdigit() else 0


@dataclass(frozen=True)
class TypeRef:
    """
    Immutable structural description of a member type.

    ``arguments`` holds the generic arguments of a constructed type, or the
    single element/underlying type of an array or nullable wrapper.
    """

    name: str
    kind: TypeKind
    namespace: Optional[str] = None
    arguments: Tuple["TypeRef", ...] = ()
    primitive: Optional[PrimitiveKind] = None
    enumerable: bool = False

    @property
    def simple_name(self) -> str:
        return strip_arity(self.name)

    @property
    def element(self) -> Optional["TypeRef"]:
        """Element type of an array or underlying type of a nullable."""
        return self.arguments[0] if self.arguments else None

    @property
    def is_generic(self) -> bool:
        return bool(self.arguments) and self.kind not in (
            TypeKind.ARRAY,
            TypeKind.NULLABLE,
        )

    # Factory helpers

    @classmethod
    def of_primitive(cls, kind: PrimitiveKind) -> "TypeRef":
        return cls(name=kind.value, kind=TypeKind.PRIMITIVE, primitive=kind)

    @classmethod
    def array_of(cls, element: "TypeRef") -> "TypeRef":
        return cls(name=f"{element.name}[]", kind=TypeKind.ARRAY, arguments=(element,))

    @classmethod
    def nullable_of(cls, underlying: "TypeRef") -> "TypeRef":
        return cls(
            name=f"{underlying.name}?", kind=TypeKind.NULLABLE, arguments=(underlying,)
        )

    @classmethod
    def parameter(cls, name: str) -> "TypeRef":
        return cls(name=name, kind=TypeKind.GENERIC_PARAMETER)

    @classmethod
    def named(
        cls,
        name: str,
        kind: TypeKind = TypeKind.CLASS,
        namespace: Optional[str] = None,
        arguments: Tuple["TypeRef", ...] = (),
    ) -> "TypeRef":
        """Reference to a named class, interface, struct or enum."""
        if arguments and ARITY_MARKER not in name:
            name = f"{name}{ARITY_MARKER}{len(arguments)}"
        return cls(name=name, kind=kind, namespace=namespace, arguments=tuple(arguments))

    @classmethod
    def unknown(cls, name: str = "unknown", enumerable: bool = False) -> "TypeRef":
        return cls(name=name, kind=TypeKind.UNKNOWN, enumerable=enumerable)


@dataclass(frozen=True)
class MemberSymbol:
    """A property or field declared by a source type."""

    name: str
    type: TypeRef
    is_public: bool = True
    is_static: bool = False
    is_indexer: bool = False
    member_kind: str = "property"  # property, field


@dataclass(frozen=True)
class EnumValueSymbol:
    """A named integer value of a source enum."""

    name: str
    value: int


@dataclass(frozen=True)
class TypeSymbol:
    """
    Descriptor of one source type as supplied by a type source.

    ``name`` may carry an arity marker (e.g. ``Result`1``). ``members`` and
    ``enum_values`` keep declaration order.
    """

    name: str
    namespace: Optional[str] = None
    kind: SymbolKind = SymbolKind.CLASS
    is_public: bool = True
    is_nested: bool = False
    is_static: bool = False
    is_abstract: bool = False
    generic_parameters: Tuple[str, ...] = ()
    members: Tuple[MemberSymbol, ...] = field(default_factory=tuple)
    enum_values: Tuple[EnumValueSymbol, ...] = field(default_factory=tuple)

    @property
    def simple_name(self) -> str:
        return strip_arity(self.name)

    @property
    def arity(self) -> int:
        return parse_arity(self.name) or len(self.generic_parameters)

    @property
    def is_generic_definition(self) -> bool:
        return self.arity > 0

    @property
    def is_enum(self) -> bool:
        return self.kind == SymbolKind.ENUM

    @property
    def full_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name
