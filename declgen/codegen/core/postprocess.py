"""
Final text normalisation of generated declarations.

Removes declarations that still carry the hidden-type marker, drops
namespace blocks left empty, collapses blank lines and trims.
"""

import re
from typing import Optional, Tuple

from ...logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_MARKER = "Guid"

# Declarations start a line or follow another statement; modifiers are optional
_DECLARATION_RE = re.compile(
    r"(?:^|(?<=[;{}]))[ \t]*(?:(?:export|declare)\s+)*"
    r"(interface|enum|class|type)\s+([A-Za-z_$][\w$]*)",
    re.MULTILINE,
)
_EMPTY_NAMESPACE_RE = re.compile(
    r"^[ \t]*declare\s+namespace\s+[\w$.]+\s*\{\s*\}[ \t]*\n?", re.MULTILINE
)
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_TRAILING_SPACE_RE = re.compile(r"[ \t]+$", re.MULTILINE)


class CodePostProcessor:
    """Pure text transform applied to the emitter's output."""

    def __init__(self, marker: str = DEFAULT_MARKER):
        self.marker = marker

    def process(self, code: Optional[str]) -> str:
        """
        Normalise generated code.

        Args:
            code: Raw generated code

        Returns:
            Cleaned code, or an empty string for empty/whitespace-only input
        """
        if not code or not code.strip():
            return ""

        result = code.replace("\r\n", "\n")
        if self.marker:
            result = self.remove_hidden_declarations(result)
            result = _EMPTY_NAMESPACE_RE.sub("", result)

        result = _TRAILING_SPACE_RE.sub("", result)
        result = _EXCESS_NEWLINES_RE.sub("\n\n", result)
        return result.strip()

    def remove_hidden_declarations(self, code: str) -> str:
        """Remove every declaration whose identifier contains the marker."""
        marker = self.marker.lower()
        position = 0

        while True:
            match = _DECLARATION_RE.search(code, position)
            if match is None:
                return code

            keyword, identifier = match.group(1), match.group(2)
            if marker not in identifier.lower():
                position = match.end()
                continue

            start, end = self._declaration_span(code, match, keyword)
            logger.debug(f"Removing hidden declaration '{identifier}'")
            code = code[:start] + code[end:]
            position = start

    def _declaration_span(
        self, code: str, match: "re.Match", keyword: str
    ) -> Tuple[int, int]:
        """Locate the full text span of a declaration, including its own line."""
        start = match.start()
        line_start = code.rfind("\n", 0, start) + 1
        if not code[line_start:start].strip():
            start = line_start

        if keyword == "type":
            end = _scan_to_terminator(code, match.end())
        else:
            end = _scan_block(code, match.end())

        # Consume the rest of the line when the declaration ends it
        line_end = code.find("\n", end)
        if line_end == -1:
            line_end = len(code)
        if not code[end:line_end].strip():
            end = min(line_end + 1, len(code))

        return start, end


def _scan_block(code: str, position: int) -> int:
    """Return the index just past the brace block opened after ``position``."""
    open_index = code.find("{", position)
    if open_index == -1:
        return _scan_to_terminator(code, position)

    depth = 0
    for index in range(open_index, len(code)):
        char = code[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
    return len(code)


def _scan_to_terminator(code: str, position: int) -> int:
    """Return the index just past the first ``;`` at brace depth zero."""
    depth = 0
    for index in range(position, len(code)):
        char = code[index]
        if char == "{":
            depth += 1
        elif char == "}":
            if depth == 0:
                return index
            depth -= 1
        elif char == ";" and depth == 0:
            return index + 1
    return len(code)


def process(code: Optional[str], marker: str = DEFAULT_MARKER) -> str:
    """Convenience wrapper around CodePostProcessor."""
    return CodePostProcessor(marker).process(code)
