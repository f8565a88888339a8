#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the norg2ast library.

This module centralizes the node-kind tables of the Neorg grammar, the
default values of the option classes and the dependency specifications used
by the ``@requires_dependencies`` decorator.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Grammar Tables - node kinds and field names of the norg grammar
3. Option Defaults - default values for the option dataclasses
4. Dependency Specifications - optional packages used for parsing
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# =============================================================================
# Grammar Tables
# =============================================================================

# Grammar-level nesting bound for headings, lists and quotes
MAX_NESTING_LEVEL = 6

# Field names the walker addresses by id; resolved once per tree
FIELD_NAMES: tuple[str, ...] = ("title", "content", "state", "token", "text")

HEADING_KINDS: dict[str, int] = {f"heading{level}": level for level in range(1, MAX_NESTING_LEVEL + 1)}
QUOTE_KINDS: dict[str, int] = {f"quote{level}": level - 1 for level in range(1, MAX_NESTING_LEVEL + 1)}
UNORDERED_LIST_KINDS: dict[str, int] = {
    f"unordered_list{level}": level - 1 for level in range(1, MAX_NESTING_LEVEL + 1)
}
ORDERED_LIST_KINDS: dict[str, int] = {f"ordered_list{level}": level - 1 for level in range(1, MAX_NESTING_LEVEL + 1)}
HEADING_LINK_TARGET_KINDS: dict[str, int] = {
    f"link_target_heading{level}": level for level in range(1, MAX_NESTING_LEVEL + 1)
}

# Block kinds that carry no content of their own
IGNORED_BLOCK_KINDS = frozenset(
    {
        "_paragraph_break",
        "weak_paragraph_delimiter",
        "strong_paragraph_delimiter",
        "horizontal_line",
    }
)

# Opening and closing delimiters of attached modifiers
MODIFIER_DELIMITER_KINDS = frozenset({"_open", "_close", "free_form_open", "free_form_close"})
MODIFIER_OPEN_KINDS = frozenset({"_open", "free_form_open"})
MODIFIER_CLOSE_KINDS = frozenset({"_close", "free_form_close"})

# Decorations of detached modifier extensions
EXTENSION_DELIMITER_KINDS = frozenset({"_begin", "_end", "_delimiter"})

TODO_ITEM_PREFIX = "todo_item_"

# Ranged tag name whose content is kept verbatim as norg source
EXAMPLE_TAG_NAME = "example"

# =============================================================================
# Option Defaults
# =============================================================================

DEFAULT_TODO_UNDONE = "⬜"
DEFAULT_TODO_DONE = "✅"
DEFAULT_TODO_PENDING = "⏳"
DEFAULT_TODO_ON_HOLD = "\U0001f6d1"
DEFAULT_TODO_CANCELLED = "❌"
DEFAULT_TODO_URGENT = "❗"
DEFAULT_TODO_RECURRING = "\U0001f501"
DEFAULT_TODO_UNCERTAIN = "❓"

DEFAULT_STRICT = False
DEFAULT_EXAMPLE_LANGUAGE = "norg"
DEFAULT_EXTRACT_METADATA = True

DEFAULT_JSON_INDENT = 2

# Separator appended between a repeated identifier base and its counter
IDENTIFIER_COUNTER_SEPARATOR = "~"
IDENTIFIER_REPLACED_CHARS = frozenset({" ", "\t", "\n", "~"})
IDENTIFIER_REPLACEMENT = "-"

# =============================================================================
# Dependency Specifications for @requires_dependencies decorator
# =============================================================================
# Each spec is a list of tuples: (pip_package, import_name, version_constraint)

DEPS_NORG = [("tree-sitter", "tree_sitter", ">=0.22"), ("tree-sitter-norg", "tree_sitter_norg", "")]
