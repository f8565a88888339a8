#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/parsers/_norg_meta.py
"""Parser for the body of ``@document.meta`` blocks.

This private module reads the structured ``key: value`` notation of norg
document metadata into nested Python values:

- a bare string runs up to the next ``[ ] { } :`` or newline and is trimmed
- ``{ ... }`` holds further ``key: value`` entries
- ``[ ... ]`` holds values separated by whitespace or newlines
- a key with nothing after its colon has the value ``""``

Whitespace between tokens is otherwise insignificant.

"""

from __future__ import annotations

import logging
from typing import Any

from norg2ast.exceptions import MetadataSyntaxError

logger = logging.getLogger(__name__)

__all__ = ["parse_object"]

# Characters that end a bare string
_STRING_STOP_CHARS = frozenset("[]{}:\n")


class _MetaReader:
    """Recursive-descent reader over the metadata text.

    Parameters
    ----------
    text : str
        Metadata source
    strict : bool
        Raise :class:`MetadataSyntaxError` on malformed input instead of
        logging a warning and skipping the malformed part

    """

    def __init__(self, text: str, strict: bool):
        self.text = text
        self.strict = strict
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def skip_inline_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in " \t\r":
            self.pos += 1

    def error(self, message: str) -> None:
        if self.strict:
            raise MetadataSyntaxError(message, position=self.pos)
        logger.warning(f"{message} at offset {self.pos} of document metadata, skipping")

    def parse_entries(self) -> dict[str, Any]:
        """Read entries until a closing brace or the end of input."""
        result: dict[str, Any] = {}
        while True:
            self.skip_whitespace()
            if self.at_end() or self.peek() == "}":
                break

            start = self.pos
            entry = self.parse_entry()
            if entry is not None:
                key, value = entry
                result[key] = value

            if self.pos == start:
                self.error(f"Unexpected character {self.peek()!r}")
                self.pos += 1
        return result

    def parse_entry(self) -> tuple[str, Any] | None:
        self.skip_whitespace()
        name = self.parse_string()
        if self.peek() != ":":
            self.error(f"Expected ':' after metadata key {name!r}")
            self.skip_entry()
            return None

        self.pos += 1
        self.skip_inline_whitespace()
        if self.peek() in ("\n", ""):
            # empty value, unless a list or object opens on the next line
            line_end = self.pos
            self.skip_whitespace()
            if self.peek() not in ("[", "{"):
                self.pos = line_end
                return name, ""
        return name, self.parse_value()

    def parse_value(self) -> Any:
        char = self.peek()
        if char == "{":
            self.pos += 1
            value = self.parse_entries()
            if self.peek() == "}":
                self.pos += 1
            else:
                self.error("Expected closing brace '}'")
            return value

        if char == "[":
            self.pos += 1
            return self.parse_list()

        return self.parse_string()

    def parse_list(self) -> list[Any]:
        items: list[Any] = []
        while True:
            self.skip_whitespace()
            if self.at_end():
                logger.debug("Unclosed metadata list ends at end of input")
                break
            if self.peek() == "]":
                self.pos += 1
                break

            start = self.pos
            value = self.parse_value()
            if self.pos == start:
                self.error(f"Unexpected character {self.peek()!r} in list")
                self.pos += 1
                continue
            items.append(value)
        return items

    def parse_string(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in _STRING_STOP_CHARS:
            self.pos += 1
        return self.text[start : self.pos].strip()

    def skip_entry(self) -> None:
        """Skip past the end of the line, stopping early at a closing bracket."""
        while self.pos < len(self.text) and self.text[self.pos] not in "}]\n":
            self.pos += 1
        if self.peek() == "\n":
            self.pos += 1


def parse_object(text: str, strict: bool = False) -> tuple[dict[str, Any], str]:
    """Parse ``key: value`` entries from ``text``.

    Parameters
    ----------
    text : str
        Body of a ``@document.meta`` block
    strict : bool, default False
        Raise on a missing colon, a missing closing brace or a stray
        character. Otherwise each is logged as a warning and the malformed
        part is skipped.

    Returns
    -------
    tuple of (dict, str)
        The parsed entries and the unparsed remainder of ``text``. Parsing
        stops early only at an unmatched ``}``.

    Raises
    ------
    MetadataSyntaxError
        On malformed input when ``strict`` is True

    Examples
    --------
    >>> parse_object("title: Look spaces\\nauthor: brain")
    ({'title': 'Look spaces', 'author': 'brain'}, '')
    >>> parse_object("tags: [\\n  a\\n  b\\n]")
    ({'tags': ['a', 'b']}, '')

    """
    reader = _MetaReader(text, strict)
    result = reader.parse_entries()
    return result, text[reader.pos :]
