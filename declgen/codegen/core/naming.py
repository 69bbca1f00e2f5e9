"""
Naming policy for generated declarations.

Handles property name casing, the "I" interface prefix, namespace name
resolution, and final member-type text normalisation.
"""

import re
from typing import Optional, Tuple

from ...logging_config import get_logger
from .model import Module, PropertyEntry
from .symbols import TypeKind

logger = get_logger(__name__)

INTERFACE_PREFIX = "I"

# Residual identifiers that still name a hidden or host-specific type,
# compared case-insensitively on the last dotted segment
_GUID_NAMES = {"guid", "iguid"}
_DATE_NAMES = {"System.DateTime", "System.DateTimeOffset"}


def to_snake_case(value: str) -> str:
    """Convert camelCase, PascalCase or kebab-case to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", str(value))
    s2 = re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()


def to_camel_case(value: str) -> str:
    """Convert snake_case to camelCase."""
    parts = to_snake_case(value).split("_")
    return parts[0] + "".join(p.capitalize() for p in parts[1:])


def format_property_name(prop: PropertyEntry) -> str:
    """Lower-case only the first character of a property name."""
    name = prop.name
    if not name:
        return name
    return name[0].lower() + name[1:]


def has_interface_prefix(name: str) -> bool:
    """True for names like ``IUser`` (an ``I`` followed by an uppercase letter)."""
    return len(name) > 1 and name[0] == INTERFACE_PREFIX and name[1].isupper()


def is_generic_type_parameter(name: str) -> bool:
    """Heuristic for generic parameter names such as ``T``, ``TKey``, ``TValue``."""
    if not name or len(name) > 6 or name[0] != "T":
        return False
    return len(name) == 1 or name[1].isupper()


def interface_name(name: str) -> str:
    """
    Apply the interface prefix to a class name.

    Idempotent: names that already carry the prefix, and names that look
    like generic parameters, are returned unchanged.
    """
    if has_interface_prefix(name) or is_generic_type_parameter(name):
        return name
    return INTERFACE_PREFIX + name


def prefix_interfaces(module: Module) -> Module:
    """Return a copy of the module with interface-prefixed class names."""
    return module.with_classes(
        entry.renamed(interface_name(entry.name)) for entry in module.classes
    )


def format_module_name(
    module: Module, output_namespace: Optional[str] = None
) -> Tuple[str, Module]:
    """
    Resolve the output namespace name of a module.

    Args:
        module: Source module
        output_namespace: Override applied to every module when non-empty

    Returns:
        Tuple of (resolved namespace name, prefixed module projection)
    """
    resolved = output_namespace if output_namespace else module.name
    logger.debug(f"Module '{module.name}' resolves to namespace '{resolved}'")
    return resolved, prefix_interfaces(module)


class ModuleNameFormatter:
    """Module-name formatter bound to an optional output namespace override."""

    def __init__(self, output_namespace: Optional[str] = None):
        self.output_namespace = output_namespace

    def __call__(self, module: Module) -> Tuple[str, Module]:
        return format_module_name(module, self.output_namespace)


class TypeFormatter:
    """Final normalisation of rendered member type text."""

    @staticmethod
    def format_member_type(prop: PropertyEntry, type_text: str) -> str:
        """
        Normalise a rendered member type and add nullability.

        Args:
            prop: Property the type belongs to
            type_text: Type text produced by the type mapper

        Returns:
            Final member type text
        """
        if type_text.rsplit(".", 1)[-1].lower() in _GUID_NAMES:
            type_text = "string"
        elif type_text in _DATE_NAMES:
            type_text = "Date"

        if prop.type.kind == TypeKind.NULLABLE:
            return f"{type_text} | null"
        return type_text

    def __call__(self, prop: PropertyEntry, type_text: str) -> str:
        return self.format_member_type(prop, type_text)
