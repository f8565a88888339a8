#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/api.py
"""Convenience functions for converting norg documents to the AST."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Optional, Union

from norg2ast.ast import Document
from norg2ast.exceptions import ValidationError
from norg2ast.options import NorgParserOptions
from norg2ast.parsers.norg import NorgParser

logger = logging.getLogger(__name__)

__all__ = ["to_ast", "tree_to_ast"]


def _prepare_options(parser_options: Optional[NorgParserOptions], kwargs: dict[str, Any]) -> NorgParserOptions:
    options = parser_options or NorgParserOptions()
    if not kwargs:
        return options
    try:
        return options.create_updated(**kwargs)
    except TypeError as e:
        raise ValidationError(
            f"Invalid parser option(s): {', '.join(sorted(kwargs))}",
            parameter_name="kwargs",
            parameter_value=kwargs,
            original_error=e,
        ) from e


def to_ast(
    source: Union[str, Path, IO[bytes], IO[str], bytes],
    *,
    parser_options: Optional[NorgParserOptions] = None,
    **kwargs: Any,
) -> Document:
    """Convert a norg document to an AST Document.

    Parameters
    ----------
    source : str, Path, IO, or bytes
        File path, file-like object, raw bytes, or the norg text itself
    parser_options : NorgParserOptions, optional
        Pre-configured parser options
    kwargs : Any
        Individual parser options that override settings in parser_options

    Returns
    -------
    Document
        AST Document node representing the document structure

    Raises
    ------
    DependencyError
        If tree-sitter or the norg grammar is not installed
    ParsingError
        If conversion fails
    ValidationError
        If an unknown option is passed

    Examples
    --------
    >>> from norg2ast import to_ast
    >>> doc = to_ast("notes.norg", strict=True)

    """
    options = _prepare_options(parser_options, kwargs)
    return NorgParser(options).parse(source)


def tree_to_ast(
    tree: Any,
    source: bytes | None = None,
    *,
    parser_options: Optional[NorgParserOptions] = None,
    **kwargs: Any,
) -> Document:
    """Convert an existing norg syntax tree to an AST Document.

    Parameters
    ----------
    tree : Tree
        Syntax tree exposing the py-tree-sitter API, such as a
        :class:`norg2ast.cst.SyntaxTree`
    source : bytes, optional
        UTF-8 source of the tree; defaults to ``tree.text``
    parser_options : NorgParserOptions, optional
        Pre-configured parser options
    kwargs : Any
        Individual parser options that override settings in parser_options

    Returns
    -------
    Document
        AST Document node

    """
    options = _prepare_options(parser_options, kwargs)
    return NorgParser(options).convert_tree(tree, source)
