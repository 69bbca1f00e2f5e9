"""
Intermediate declaration model.

The ModelBuilder collects accepted type symbols and groups them into
namespace modules. Entries are projected into new values (never mutated)
when naming policy is applied.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Tuple, Union

from ...logging_config import get_logger
from .symbols import TypeRef, TypeSymbol, parse_arity

logger = get_logger(__name__)

DEFAULT_MODULE_NAME = "Global"


class SymbolError(Exception):
    """Exception raised for invalid type symbols handed to the model builder."""

    pass


@dataclass(frozen=True)
class PropertyEntry:
    """A property of a class entry. Its type is mapped at emission time."""

    name: str
    type: TypeRef


@dataclass(frozen=True)
class EnumMember:
    """A named enum value."""

    name: str
    value: int


@dataclass(frozen=True)
class ClassEntry:
    """A class, interface or struct to be emitted as an interface declaration."""

    name: str
    type_parameters: Tuple[str, ...] = ()
    properties: Tuple[PropertyEntry, ...] = ()

    def renamed(self, name: str) -> "ClassEntry":
        """Return a copy of this entry with a new display name."""
        return replace(self, name=name)


@dataclass(frozen=True)
class EnumEntry:
    """An enum declaration with ordered members."""

    name: str
    members: Tuple[EnumMember, ...] = ()

    def renamed(self, name: str) -> "EnumEntry":
        return replace(self, name=name)


Entry = Union[ClassEntry, EnumEntry]


@dataclass(frozen=True)
class Module:
    """All entries sharing one source namespace."""

    name: str
    classes: Tuple[ClassEntry, ...] = ()
    enums: Tuple[EnumEntry, ...] = ()

    @property
    def members(self) -> Iterator[Entry]:
        """Iterate classes first, then enums."""
        yield from self.classes
        yield from self.enums

    def with_classes(self, classes) -> "Module":
        return replace(self, classes=tuple(classes))

    def with_enums(self, enums) -> "Module":
        return replace(self, enums=tuple(enums))


@dataclass
class Model:
    """Ordered collection of namespace modules."""

    modules: List[Module] = field(default_factory=list)

    def get_module(self, name: str) -> Optional[Module]:
        for module in self.modules:
            if module.name == name:
                return module
        return None

    @property
    def class_count(self) -> int:
        return sum(len(m.classes) for m in self.modules)

    @property
    def enum_count(self) -> int:
        return sum(len(m.enums) for m in self.modules)

    def __len__(self) -> int:
        return len(self.modules)


class ModelBuilder:
    """
    Collects type symbols and builds the declaration model.

    Symbols are kept in insertion order; adding the same symbol twice is a
    no-op.
    """

    def __init__(self):
        # Frozen symbols hash by value; equal symbols from two manifests collapse
        self._symbols: Dict[TypeSymbol, None] = {}

    def add(self, symbol: Optional[TypeSymbol]) -> "ModelBuilder":
        """
        Add a type symbol to the model.

        Args:
            symbol: Type symbol to add

        Returns:
            This builder, for chaining

        Raises:
            SymbolError: If the symbol is None or its generic arity is inconsistent
        """
        if symbol is None:
            raise SymbolError("Cannot add a null type symbol to the model")

        declared_arity = parse_arity(symbol.name)
        if declared_arity and declared_arity != len(symbol.generic_parameters):
            raise SymbolError(
                f"Type '{symbol.full_name}' declares arity {declared_arity} "
                f"but has {len(symbol.generic_parameters)} generic parameter(s)"
            )

        if symbol not in self._symbols:
            self._symbols[symbol] = None
        else:
            logger.debug(f"Skipping duplicate type symbol {symbol.full_name}")
        return self

    def add_all(self, symbols) -> "ModelBuilder":
        for symbol in symbols:
            self.add(symbol)
        return self

    def __len__(self) -> int:
        return len(self._symbols)

    def build(self) -> Model:
        """
        Group collected symbols into modules by namespace.

        Returns:
            Model with modules in first-encounter order
        """
        classes: Dict[str, List[ClassEntry]] = {}
        enums: Dict[str, List[EnumEntry]] = {}
        order: List[str] = []

        for symbol in self._symbols:
            module_name = symbol.namespace or DEFAULT_MODULE_NAME
            if module_name not in classes:
                order.append(module_name)
                classes[module_name] = []
                enums[module_name] = []

            if symbol.is_enum:
                enums[module_name].append(self._build_enum(symbol))
            else:
                classes[module_name].append(self._build_class(symbol))

        modules = [
            Module(name=name, classes=tuple(classes[name]), enums=tuple(enums[name]))
            for name in order
        ]
        logger.debug(
            f"Built model with {len(modules)} module(s) from {len(self._symbols)} symbol(s)"
        )
        return Model(modules=modules)

    def _build_class(self, symbol: TypeSymbol) -> ClassEntry:
        properties = tuple(
            PropertyEntry(name=member.name, type=member.type)
            for member in symbol.members
            if member.is_public and not member.is_static and not member.is_indexer
        )
        type_parameters = (
            tuple(symbol.generic_parameters) if symbol.is_generic_definition else ()
        )
        return ClassEntry(
            name=symbol.simple_name,
            type_parameters=type_parameters,
            properties=properties,
        )

    def _build_enum(self, symbol: TypeSymbol) -> EnumEntry:
        return EnumEntry(
            name=symbol.simple_name,
            members=tuple(EnumMember(v.name, v.value) for v in symbol.enum_values),
        )
