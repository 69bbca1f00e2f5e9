"""
Type and visibility filters.

TypeFilter decides which discovered type symbols enter the model.
VisibilityFilter decides which rendered declarations reach the output.
"""

from typing import Iterable, Optional

from ...logging_config import get_logger
from .config import NamespaceRule
from .symbols import SymbolKind, TypeSymbol

logger = get_logger(__name__)

DEFAULT_HIDDEN_MARKER = "Guid"


class TypeFilter:
    """Selects exported, non-nested types matching a namespace rule."""

    def __init__(self, include_static_classes: bool = False):
        self.include_static_classes = include_static_classes

    def include(self, symbol: TypeSymbol, rule: NamespaceRule) -> bool:
        """
        Decide whether a symbol should be emitted for a rule.

        Args:
            symbol: Candidate type symbol
            rule: Namespace rule to test against

        Returns:
            True when the symbol passes every predicate
        """
        if not self.is_in_target_namespace(symbol, rule):
            return False

        if not self.is_eligible(symbol):
            logger.debug(f"Rejected {symbol.full_name}: nested or not public")
            return False

        if not self.include_static_classes and not self.is_not_static_class(symbol):
            logger.debug(f"Rejected {symbol.full_name}: static class")
            return False

        if not self.is_type_included(symbol, rule):
            logger.debug(f"Rejected {symbol.full_name}: include/exclude patterns")
            return False

        return True

    @staticmethod
    def is_in_target_namespace(symbol: TypeSymbol, rule: NamespaceRule) -> bool:
        """Exact namespace match, or a dotted descendant when include_nested is set."""
        if symbol.namespace is None:
            return False

        if symbol.namespace == rule.namespace:
            return True

        return rule.include_nested and symbol.namespace.startswith(rule.namespace + ".")

    @staticmethod
    def is_eligible(symbol: TypeSymbol) -> bool:
        return symbol.is_public and not symbol.is_nested

    @staticmethod
    def is_not_static_class(symbol: TypeSymbol) -> bool:
        """Interfaces and enums always pass; classes pass unless static."""
        if symbol.kind in (SymbolKind.INTERFACE, SymbolKind.ENUM):
            return True
        return not symbol.is_static

    @staticmethod
    def is_type_included(symbol: TypeSymbol, rule: NamespaceRule) -> bool:
        """
        Apply include/exclude substring patterns to the symbol's simple name.

        Generic definitions are matched against the generic pattern lists.
        An exclusion match always wins.
        """
        if symbol.is_generic_definition:
            include_patterns = rule.include_generic_types
            exclude_patterns = rule.exclude_generic_types
        else:
            include_patterns = rule.include_types
            exclude_patterns = rule.exclude_types

        name = symbol.simple_name
        if include_patterns and not _matches_any(name, include_patterns):
            return False

        if exclude_patterns and _matches_any(name, exclude_patterns):
            return False

        return True


def _matches_any(name: str, patterns: Optional[Iterable[str]]) -> bool:
    lowered = name.lower()
    return any(pattern.lower() in lowered for pattern in patterns or ())


class VisibilityFilter:
    """Hides declarations whose name contains a marker, case-insensitively."""

    def __init__(self, marker: str = DEFAULT_HIDDEN_MARKER):
        self.marker = marker

    def is_visible(self, name: str) -> bool:
        if not self.marker:
            return True
        return self.marker.lower() not in name.lower()

    def __call__(self, name: str) -> bool:
        return self.is_visible(name)
