#  Copyright (c) 2025 Tom Villani, Ph.D.

# norg2ast/options/norg.py
"""Configuration options for Neorg parsing.

This module defines options for converting norg syntax trees into the AST.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from norg2ast.constants import (
    DEFAULT_EXAMPLE_LANGUAGE,
    DEFAULT_STRICT,
    DEFAULT_TODO_CANCELLED,
    DEFAULT_TODO_DONE,
    DEFAULT_TODO_ON_HOLD,
    DEFAULT_TODO_PENDING,
    DEFAULT_TODO_RECURRING,
    DEFAULT_TODO_UNCERTAIN,
    DEFAULT_TODO_UNDONE,
    DEFAULT_TODO_URGENT,
)
from norg2ast.options.base import BaseParserOptions, CloneFrozenMixin


@dataclass(frozen=True)
class TodoSymbols(CloneFrozenMixin):
    """Symbols emitted for the TODO status extensions of list items and headings.

    Each field is named after the status it renders, so the grammar kind
    ``todo_item_<status>`` maps directly onto a field via :meth:`for_status`.
    """

    undone: str = field(default=DEFAULT_TODO_UNDONE, metadata={"help": "Symbol for ( )", "importance": "advanced"})
    done: str = field(default=DEFAULT_TODO_DONE, metadata={"help": "Symbol for (x)", "importance": "advanced"})
    pending: str = field(default=DEFAULT_TODO_PENDING, metadata={"help": "Symbol for (-)", "importance": "advanced"})
    on_hold: str = field(default=DEFAULT_TODO_ON_HOLD, metadata={"help": "Symbol for (=)", "importance": "advanced"})
    cancelled: str = field(
        default=DEFAULT_TODO_CANCELLED, metadata={"help": "Symbol for (_)", "importance": "advanced"}
    )
    urgent: str = field(default=DEFAULT_TODO_URGENT, metadata={"help": "Symbol for (!)", "importance": "advanced"})
    recurring: str = field(
        default=DEFAULT_TODO_RECURRING, metadata={"help": "Symbol for (+)", "importance": "advanced"}
    )
    uncertain: str = field(
        default=DEFAULT_TODO_UNCERTAIN, metadata={"help": "Symbol for (?)", "importance": "advanced"}
    )

    def for_status(self, status: str) -> str | None:
        """Return the symbol for a status name, or None if the status is unknown."""
        if status not in self.__dataclass_fields__:
            return None
        return getattr(self, status)


@dataclass(frozen=True)
class NorgParserOptions(BaseParserOptions):
    """Configuration options for Norg-to-AST parsing.

    Parameters
    ----------
    todo_symbols : TodoSymbols
        Symbols inserted for TODO status extensions.
    strict : bool, default False
        Raise on malformed table cell locations and metadata instead of
        logging a warning and skipping the construct.
    code_language_for_examples : str, default "norg"
        Language recorded on code blocks produced by ``|example`` tags.

    Examples
    --------
    Basic usage:
        >>> options = NorgParserOptions()
        >>> parser = NorgParser(options)

    Fail fast on malformed input:
        >>> options = NorgParserOptions(strict=True)

    """

    todo_symbols: TodoSymbols = field(
        default_factory=TodoSymbols,
        metadata={"help": "Symbols used for TODO status markers", "importance": "advanced"},
    )
    strict: bool = field(
        default=DEFAULT_STRICT,
        metadata={
            "help": "Raise on malformed table locations and metadata instead of skipping them",
            "importance": "core",
        },
    )
    code_language_for_examples: str = field(
        default=DEFAULT_EXAMPLE_LANGUAGE,
        metadata={"help": "Language of code blocks produced by example tags", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If ``todo_symbols`` is not a TodoSymbols instance.

        """
        if not isinstance(self.todo_symbols, TodoSymbols):
            raise ValueError(f"todo_symbols must be a TodoSymbols instance, got {type(self.todo_symbols).__name__}")
