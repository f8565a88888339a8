#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Option dataclasses for norg2ast parsers."""

from norg2ast.options.base import BaseParserOptions, CloneFrozenMixin
from norg2ast.options.norg import NorgParserOptions, TodoSymbols

__all__ = ["BaseParserOptions", "CloneFrozenMixin", "NorgParserOptions", "TodoSymbols"]
