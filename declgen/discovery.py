"""Type discovery from JSON type manifests.

A manifest is a JSON document of the form ``{"types": [...]}`` describing
the public types of a source library. This module parses manifests into
TypeSymbols and selects the ones matching the configured namespace rules.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .codegen.core.config import GeneratorConfig, get_manifest_paths
from .codegen.core.filters import TypeFilter
from .codegen.core.symbols import (
    EnumValueSymbol,
    MemberSymbol,
    PrimitiveKind,
    SymbolKind,
    TypeKind,
    TypeRef,
    TypeSymbol,
)
from .logging_config import get_logger
from .utils import JSONLoaderError, is_url, load_json

logger = get_logger(__name__)

_NAMED_KINDS = {
    "class": TypeKind.CLASS,
    "interface": TypeKind.INTERFACE,
    "struct": TypeKind.STRUCT,
    "enum": TypeKind.ENUM,
}

# Common aliases accepted for primitive keywords
_PRIMITIVE_ALIASES = {
    "boolean": PrimitiveKind.BOOL,
    "int16": PrimitiveKind.SHORT,
    "uint16": PrimitiveKind.USHORT,
    "int32": PrimitiveKind.INT,
    "uint32": PrimitiveKind.UINT,
    "int64": PrimitiveKind.LONG,
    "uint64": PrimitiveKind.ULONG,
    "single": PrimitiveKind.FLOAT,
}


class ManifestError(Exception):
    """Exception raised for malformed type manifests."""

    pass


class DiscoveryError(Exception):
    """Exception raised when type manifests cannot be located or loaded."""

    pass


def parse_type_ref(data: Any) -> TypeRef:
    """
    Parse a manifest type description.

    Args:
        data: A primitive keyword string, or an object with one shape key

    Returns:
        TypeRef describing the type; unrecognised shapes become unknown
    """
    if isinstance(data, str):
        primitive = _parse_primitive(data)
        if primitive is not None:
            return TypeRef.of_primitive(primitive)
        return TypeRef.unknown(data)

    if not isinstance(data, dict):
        return TypeRef.unknown()

    if "primitive" in data:
        primitive = _parse_primitive(str(data["primitive"]))
        return TypeRef.of_primitive(primitive) if primitive else TypeRef.unknown()

    if "nullable" in data:
        return TypeRef.nullable_of(parse_type_ref(data["nullable"]))

    if "array" in data:
        return TypeRef.array_of(parse_type_ref(data["array"]))

    if "list" in data:
        return TypeRef.named("List", arguments=(parse_type_ref(data["list"]),))

    if "map" in data:
        key, value = _pair(data["map"])
        return TypeRef.named("Dictionary", arguments=(key, value))

    if "tuple" in data:
        elements = data["tuple"] if isinstance(data["tuple"], list) else []
        return TypeRef.named(
            "ValueTuple",
            kind=TypeKind.STRUCT,
            arguments=tuple(parse_type_ref(e) for e in elements),
        )

    if "parameter" in data:
        return TypeRef.parameter(str(data["parameter"]))

    if data.get("enumerable") is True:
        return TypeRef.unknown("IEnumerable", enumerable=True)

    for key, kind in _NAMED_KINDS.items():
        if key in data:
            return _parse_named(data, str(data[key]), kind)

    if "generic" in data:
        return _parse_named(data, str(data["generic"]), TypeKind.CLASS)

    return TypeRef.unknown(str(data.get("unknown", "unknown")))


def _parse_primitive(keyword: str) -> Optional[PrimitiveKind]:
    key = keyword.strip().lower()
    if key in _PRIMITIVE_ALIASES:
        return _PRIMITIVE_ALIASES[key]
    try:
        return PrimitiveKind(key)
    except ValueError:
        return None


def _pair(value: Any):
    if isinstance(value, list) and len(value) == 2:
        return parse_type_ref(value[0]), parse_type_ref(value[1])
    raise ManifestError(f"Map type needs exactly two type arguments: {value!r}")


def _parse_named(data: Dict[str, Any], name: str, kind: TypeKind) -> TypeRef:
    kind = _NAMED_KINDS.get(str(data.get("kind", "")).lower(), kind)
    arguments = tuple(parse_type_ref(a) for a in data.get("arguments") or [])
    return TypeRef.named(
        name,
        kind=kind,
        namespace=data.get("namespace"),
        arguments=arguments,
    )


def parse_type_symbol(data: Any) -> TypeSymbol:
    """
    Parse one manifest type entry.

    Raises:
        ManifestError: If the entry has no name or an unknown kind
    """
    if not isinstance(data, dict):
        raise ManifestError(f"Type entry must be an object: {data!r}")

    name = data.get("name")
    if not name or not isinstance(name, str):
        raise ManifestError(f"Type entry is missing a name: {data!r}")

    kind_value = str(data.get("kind", "class")).lower()
    try:
        kind = SymbolKind(kind_value)
    except ValueError:
        raise ManifestError(f"Unknown kind '{kind_value}' for type '{name}'") from None

    members = tuple(_parse_member(name, m) for m in data.get("members") or [])
    values = tuple(_parse_enum_value(name, v) for v in data.get("values") or [])

    return TypeSymbol(
        name=name,
        namespace=data.get("namespace") or None,
        kind=kind,
        is_public=bool(data.get("isPublic", True)),
        is_nested=bool(data.get("isNested", False)),
        is_static=bool(data.get("isStatic", False)),
        is_abstract=bool(data.get("isAbstract", False)),
        generic_parameters=tuple(data.get("genericParameters") or ()),
        members=members,
        enum_values=values,
    )


def _parse_member(owner: str, data: Any) -> MemberSymbol:
    if not isinstance(data, dict) or not data.get("name"):
        raise ManifestError(f"Member of '{owner}' is missing a name: {data!r}")

    return MemberSymbol(
        name=data["name"],
        type=parse_type_ref(data.get("type", "object")),
        is_public=bool(data.get("isPublic", True)),
        is_static=bool(data.get("isStatic", False)),
        is_indexer=bool(data.get("isIndexer", False)),
        member_kind=str(data.get("memberKind", "property")),
    )


def _parse_enum_value(owner: str, data: Any) -> EnumValueSymbol:
    if not isinstance(data, dict) or not data.get("name"):
        raise ManifestError(f"Enum value of '{owner}' is missing a name: {data!r}")
    try:
        value = int(data.get("value", 0))
    except (TypeError, ValueError):
        raise ManifestError(
            f"Enum value '{owner}.{data['name']}' must be an integer"
        ) from None
    return EnumValueSymbol(name=data["name"], value=value)


def parse_manifest(data: Any) -> List[TypeSymbol]:
    """Parse a manifest document into type symbols, in document order."""
    if isinstance(data, list):
        entries = data
    elif isinstance(data, dict) and isinstance(data.get("types"), list):
        entries = data["types"]
    else:
        raise ManifestError("Manifest must be a list of types or an object with 'types'")

    return [parse_type_symbol(entry) for entry in entries]


class TypeDiscovery:
    """Loads type manifests and selects the symbols matching namespace rules."""

    def __init__(self, config: GeneratorConfig):
        self.config = config
        self.type_filter = TypeFilter(config.include_static_classes)

    def resolve_location(self, location: str) -> Union[str, Path]:
        if is_url(location):
            return location

        path = Path(location)
        if not path.is_absolute():
            base_directory = self.config.base_directory
            base = Path(base_directory) if base_directory else Path.cwd()
            path = base / path
        return path

    def load_manifests(self, locations: Optional[Sequence[str]] = None) -> List[TypeSymbol]:
        """
        Load and parse every configured manifest.

        Args:
            locations: Manifest paths or URLs (the configured ones by default)

        Returns:
            All type symbols, in manifest order

        Raises:
            DiscoveryError: If a manifest cannot be found or loaded
            ManifestError: If a manifest is malformed
        """
        if locations is None:
            locations = get_manifest_paths(self.config)

        symbols: List[TypeSymbol] = []
        for location in locations:
            resolved = self.resolve_location(location)
            try:
                source, data = load_json(resolved)
            except FileNotFoundError as e:
                raise DiscoveryError(f"Type manifest not found: {resolved}") from e
            except JSONLoaderError as e:
                raise DiscoveryError(f"Failed to load type manifest {resolved}: {e}") from e

            loaded = parse_manifest(data)
            logger.info(f"Loaded {len(loaded)} type(s) from {source}")
            symbols.extend(loaded)

        return symbols

    def discover(self, symbols: Iterable[TypeSymbol]) -> List[TypeSymbol]:
        """
        Select symbols matching the configured namespace rules.

        Rules are applied in configuration order; a symbol accepted by
        several rules is returned once per rule.
        """
        symbols = list(symbols)
        accepted: List[TypeSymbol] = []

        for rule in self.config.namespaces:
            matched = [s for s in symbols if self.type_filter.include(s, rule)]
            logger.debug(
                f"Namespace rule '{rule.namespace}' matched {len(matched)} type(s)"
            )
            accepted.extend(matched)

        return accepted
