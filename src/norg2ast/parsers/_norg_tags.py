#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/parsers/_norg_tags.py
"""Ranged and verbatim tags for the norg walker.

Supported tags:

- ``|example`` ranged tags become code blocks holding the raw norg source
- ``@code [language]`` becomes a code block
- ``@embed image`` becomes a plain block holding an image
- ``@table`` becomes a table of ``|`` separated cells
- ``@document.meta`` is parsed into the document metadata
- ``@math`` becomes a display math block
- ``@comment`` is dropped

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from norg2ast.constants import EXAMPLE_TAG_NAME
from norg2ast.exceptions import MetadataSyntaxError
from norg2ast.ir.nodes import CodeBlockIR, Image, MathBlockIR, Plain, Span
from norg2ast.parsers._norg_meta import parse_object
from norg2ast.parsers._norg_tables import parse_pipe_table

if TYPE_CHECKING:
    from norg2ast.parsers.norg import NorgWalker

logger = logging.getLogger(__name__)

__all__ = ["code_content", "handle_ranged_tag", "handle_verbatim_tag"]

_RANGED_TAG_SKIPPED_KINDS = frozenset({"_prefix", "_space", "_line_break", "ranged_tag_end"})
_VERBATIM_TAG_SKIPPED_KINDS = frozenset({"_prefix", "_space", "_line_break", "ranged_verbatim_tag_end"})


def code_content(text: str, start_column: int) -> str:
    """Dedent the content of a verbatim tag.

    The first line of ``text`` starts at ``start_column`` in the source, so
    its own indentation is not part of ``text``. Every line loses the
    smallest indentation found among the non-blank lines (the first line's
    start column included), and the first line is indented by whatever
    remains of its start column.

    Parameters
    ----------
    text : str
        Source text of the content node
    start_column : int
        Column the content node starts at

    Returns
    -------
    str
        Dedented content

    Examples
    --------
    >>> code_content("def f():\\n      return 1", 4)
    'def f():\\n  return 1'

    """
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    if lines and not lines[-1]:
        lines.pop()
    if not lines:
        return ""

    min_indent = start_column
    for line in lines[1:]:
        stripped = line.lstrip()
        if stripped:
            min_indent = min(min_indent, len(line) - len(stripped))

    first = " " * (start_column - min_indent) + lines[0]
    rest = [line[min(min_indent, len(line)) :] for line in lines[1:]]
    return "\n".join([first, *rest])


def _tag_parameters(walker: NorgWalker) -> list[str]:
    parameters: list[str] = []
    walker.visit_children(lambda: parameters.append(walker.node_text(walker.cursor.node)))
    return parameters


def _expect_parameters(tag: str, parameters: list[str], expected: int) -> None:
    if len(parameters) > expected:
        logger.error(f"{tag} block expected {expected} parameter(s), received {len(parameters)}")
        logger.error(f"Extra parameters: {parameters[expected:]}")


def _content_text(walker: NorgWalker) -> str:
    node = walker.cursor.node
    return code_content(walker.node_text(node), node.start_point[1])


def _handle_example_block(walker: NorgWalker, parameters: list[str], span: Span) -> None:
    logger.debug("Parsing example block")
    _expect_parameters("Example", parameters, 0)
    walker.document.add_block(CodeBlockIR(walker.options.code_language_for_examples, _content_text(walker), span=span))


def _handle_code_block(walker: NorgWalker, parameters: list[str], span: Span) -> None:
    logger.debug("Parsing code block")
    _expect_parameters("Code", parameters, 1)
    language = parameters[0] if parameters else None
    walker.document.add_block(CodeBlockIR(language, _content_text(walker), parameters[1:], span=span))


def _handle_embed_block(walker: NorgWalker, parameters: list[str], span: Span) -> None:
    logger.debug("Parsing embed block")
    if not parameters:
        logger.error("Embed block expected 1 parameter, received 0")
        return
    _expect_parameters("Embed", parameters, 1)

    embed_type = parameters[0]
    if embed_type != "image":
        logger.error(f"Unknown embed type: {embed_type!r}")
        return

    url = walker.node_text(walker.cursor.node).strip()
    walker.document.add_block(Plain([Image(url)], span=span))


def _handle_table_block(walker: NorgWalker, parameters: list[str], span: Span) -> None:
    logger.debug("Parsing table block")
    _expect_parameters("Table", parameters, 0)
    table = parse_pipe_table(walker.node_text(walker.cursor.node))
    table.span = span
    walker.document.add_block(table)


def _handle_math_block(walker: NorgWalker, parameters: list[str], span: Span) -> None:
    logger.debug("Parsing math block")
    _expect_parameters("Math", parameters, 0)
    walker.document.add_block(MathBlockIR(walker.node_text(walker.cursor.node), span=span))


def _handle_document_meta_block(walker: NorgWalker, parameters: list[str], span: Span) -> None:
    if not walker.options.extract_metadata:
        logger.debug("Skipping document metadata")
        return

    logger.debug("Parsing document metadata")
    if parameters:
        logger.warning(f"Document metadata takes no parameters, ignoring: {parameters}")

    text = walker.node_text(walker.cursor.node)
    strict = walker.options.strict
    metadata, rest = parse_object(text, strict=strict)
    if rest.strip():
        if strict:
            raise MetadataSyntaxError("Unmatched closing brace", position=len(text) - len(rest))
        logger.warning(f"Ignoring unparsed document metadata: {rest.strip()!r}")
    walker.document.extend_metadata(metadata)


def _handle_comment_block(walker: NorgWalker, parameters: list[str], span: Span) -> None:
    logger.debug("Skipping comment block")


_VERBATIM_HANDLERS: dict[str, Callable[[Any, list[str], Span], None]] = {
    "code": _handle_code_block,
    "embed": _handle_embed_block,
    "table": _handle_table_block,
    "document.meta": _handle_document_meta_block,
    "math": _handle_math_block,
    "comment": _handle_comment_block,
}


def handle_ranged_tag(walker: NorgWalker) -> None:
    logger.debug("Parsing ranged tag")
    span = Span.of(walker.cursor.node)
    name = ""
    parameters: list[str] = []

    def visit() -> None:
        nonlocal name, parameters
        node = walker.cursor.node
        kind = node.type
        if kind in _RANGED_TAG_SKIPPED_KINDS:
            return
        if kind == "tag_name":
            name = walker.node_text(node)
        elif kind == "tag_parameters":
            parameters = _tag_parameters(walker)
        elif kind == "ranged_tag_content":
            if name == EXAMPLE_TAG_NAME:
                _handle_example_block(walker, parameters, span)
            else:
                logger.error(f"Unknown ranged tag name {name!r}")
        else:
            logger.error(f"(ranged_tag) unknown node: {kind!r}")

    walker.visit_children(visit)


def handle_verbatim_tag(walker: NorgWalker) -> None:
    logger.debug("Parsing verbatim tag")
    span = Span.of(walker.cursor.node)
    name = ""
    parameters: list[str] = []

    def visit() -> None:
        nonlocal name, parameters
        node = walker.cursor.node
        kind = node.type
        if kind in _VERBATIM_TAG_SKIPPED_KINDS:
            return
        if kind == "tag_name":
            name = walker.node_text(node)
        elif kind == "tag_parameters":
            parameters = _tag_parameters(walker)
        elif kind == "ranged_verbatim_tag_content":
            handler = _VERBATIM_HANDLERS.get(name)
            if handler is None:
                logger.error(f"Unknown verbatim tag name {name!r}")
            else:
                handler(walker, parameters, span)
        else:
            logger.error(f"(verbatim) unknown node: {kind!r}")

    walker.visit_children(visit)
