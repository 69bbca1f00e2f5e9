"""
TypeScript-specific type system for declaration generation.

Maps structural member types to TypeScript type text in two steps: a
TypeRef is first classified into a TypeExpression, which is then rendered
against the emission-wide context.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from ...core.naming import interface_name
from ...core.symbols import PrimitiveKind, TypeKind, TypeRef

ANY = "any"

LIST_TYPES = {
    "List",
    "IList",
    "ICollection",
    "IEnumerable",
    "IReadOnlyList",
    "IReadOnlyCollection",
    "HashSet",
    "ISet",
}
MAP_TYPES = {"Dictionary", "IDictionary", "IReadOnlyDictionary", "SortedDictionary"}
TUPLE_TYPES = {"ValueTuple", "Tuple"}

PRIMITIVE_TYPES: Dict[PrimitiveKind, str] = {
    PrimitiveKind.STRING: "string",
    PrimitiveKind.CHAR: "string",
    PrimitiveKind.GUID: "string",
    PrimitiveKind.TIMEONLY: "string",
    PrimitiveKind.TIMESPAN: "string",
    PrimitiveKind.BOOL: "boolean",
    PrimitiveKind.BYTE: "number",
    PrimitiveKind.SBYTE: "number",
    PrimitiveKind.SHORT: "number",
    PrimitiveKind.USHORT: "number",
    PrimitiveKind.INT: "number",
    PrimitiveKind.UINT: "number",
    PrimitiveKind.LONG: "number",
    PrimitiveKind.ULONG: "number",
    PrimitiveKind.FLOAT: "number",
    PrimitiveKind.DOUBLE: "number",
    PrimitiveKind.DECIMAL: "number",
    PrimitiveKind.DATETIME: "Date",
    PrimitiveKind.DATETIMEOFFSET: "Date",
    PrimitiveKind.DATEONLY: "Date",
    PrimitiveKind.OBJECT: ANY,
}


@dataclass(frozen=True)
class EmissionContext:
    """
    Emission-wide state read by the type mapper.

    Built fresh for every generate call and threaded through explicitly.
    """

    namespace_mapping: Dict[str, str] = field(default_factory=dict)
    single_namespace: bool = False

    def qualify(self, name: str, namespace: Optional[str]) -> str:
        if self.single_namespace or not namespace:
            return name
        return f"{self.namespace_mapping.get(namespace, namespace)}.{name}"


# Type expressions


@dataclass(frozen=True)
class PrimitiveExpr:
    text: str


@dataclass(frozen=True)
class ArrayExpr:
    element: "TypeExpression"


@dataclass(frozen=True)
class TupleExpr:
    elements: Tuple["TypeExpression", ...]


@dataclass(frozen=True)
class MapExpr:
    key: "TypeExpression"
    value: "TypeExpression"


@dataclass(frozen=True)
class ReferenceExpr:
    name: str
    namespace: Optional[str] = None
    arguments: Tuple["TypeExpression", ...] = ()
    is_enum: bool = False


@dataclass(frozen=True)
class GenericParameterExpr:
    name: str


@dataclass(frozen=True)
class UnknownExpr:
    enumerable: bool = False


TypeExpression = Union[
    PrimitiveExpr,
    ArrayExpr,
    TupleExpr,
    MapExpr,
    ReferenceExpr,
    GenericParameterExpr,
    UnknownExpr,
]


class TypeScriptTypeMapper:
    """
    Maps member TypeRefs to TypeScript type text.

    Stateless: every piece of emission-wide state arrives in the
    EmissionContext argument.
    """

    def map(self, type_ref: TypeRef, context: Optional[EmissionContext] = None) -> str:
        """
        Map a member type to TypeScript text.

        Args:
            type_ref: Structural member type
            context: Emission context (defaults to an empty multi-namespace context)

        Returns:
            TypeScript type text
        """
        return self.render(self.to_expression(type_ref), context or EmissionContext())

    def to_expression(self, type_ref: TypeRef) -> TypeExpression:
        """Classify a TypeRef into a TypeExpression."""
        kind = type_ref.kind

        # Nullability is added by the member-type formatter
        if kind == TypeKind.NULLABLE:
            if type_ref.element is None:
                return UnknownExpr()
            return self.to_expression(type_ref.element)

        if kind == TypeKind.ARRAY:
            if type_ref.element is None:
                return UnknownExpr(enumerable=True)
            return ArrayExpr(self.to_expression(type_ref.element))

        if kind == TypeKind.GENERIC_PARAMETER:
            return GenericParameterExpr(type_ref.name)

        if kind == TypeKind.PRIMITIVE:
            text = PRIMITIVE_TYPES.get(type_ref.primitive)
            return PrimitiveExpr(text) if text else UnknownExpr()

        if kind in (TypeKind.CLASS, TypeKind.INTERFACE, TypeKind.STRUCT, TypeKind.ENUM):
            return self._named_expression(type_ref)

        return UnknownExpr(enumerable=type_ref.enumerable)

    def _named_expression(self, type_ref: TypeRef) -> TypeExpression:
        name = type_ref.simple_name
        arguments = type_ref.arguments

        if type_ref.kind != TypeKind.ENUM and arguments:
            if name in TUPLE_TYPES:
                return TupleExpr(tuple(self.to_expression(a) for a in arguments))
            if name in LIST_TYPES and len(arguments) == 1:
                return ArrayExpr(self.to_expression(arguments[0]))
            if name in MAP_TYPES and len(arguments) == 2:
                return MapExpr(
                    self.to_expression(arguments[0]), self.to_expression(arguments[1])
                )

        if type_ref.enumerable and not arguments:
            return UnknownExpr(enumerable=True)

        return ReferenceExpr(
            name=name,
            namespace=type_ref.namespace,
            arguments=tuple(self.to_expression(a) for a in arguments),
            is_enum=type_ref.kind == TypeKind.ENUM,
        )

    def render(self, expression: TypeExpression, context: EmissionContext) -> str:
        """Render a TypeExpression to TypeScript text."""
        if isinstance(expression, PrimitiveExpr):
            return expression.text

        if isinstance(expression, ArrayExpr):
            return f"{self.render(expression.element, context)}[]"

        if isinstance(expression, TupleExpr):
            elements = ", ".join(self.render(e, context) for e in expression.elements)
            return f"[{elements}]"

        if isinstance(expression, MapExpr):
            key = self.render(expression.key, context)
            value = self.render(expression.value, context)
            return f"{{ [key: {key}]: {value} }}"

        if isinstance(expression, GenericParameterExpr):
            return expression.name

        if isinstance(expression, ReferenceExpr):
            return self._render_reference(expression, context)

        if isinstance(expression, UnknownExpr) and expression.enumerable:
            return f"{ANY}[]"

        return ANY

    def _render_reference(self, expression: ReferenceExpr, context: EmissionContext) -> str:
        name = expression.name if expression.is_enum else interface_name(expression.name)
        if expression.arguments:
            arguments = ", ".join(self.render(a, context) for a in expression.arguments)
            name = f"{name}<{arguments}>"
        return context.qualify(name, expression.namespace)
