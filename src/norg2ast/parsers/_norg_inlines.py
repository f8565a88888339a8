#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/parsers/_norg_inlines.py
"""Inline content handling for the norg walker.

Paragraph segments, heading titles and definition terms are converted into
IR inlines here. Links to headings and anchor references are kept
unresolved (:class:`~norg2ast.ir.nodes.HeadingTarget`,
:class:`~norg2ast.ir.nodes.Anchor`) and resolved once the whole document
has been walked.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from norg2ast.constants import (
    HEADING_LINK_TARGET_KINDS,
    MODIFIER_CLOSE_KINDS,
    MODIFIER_DELIMITER_KINDS,
    MODIFIER_OPEN_KINDS,
)
from norg2ast.ir.nodes import (
    Anchor,
    Code,
    DirectTarget,
    DocumentLinkKind,
    Emphasis,
    FileTarget,
    HeadingTarget,
    Inline,
    Link,
    LinkTarget,
    Math,
    NoTarget,
    Space,
    Str,
    Strikeout,
    Strong,
    Subscript,
    Superscript,
    Underline,
)

if TYPE_CHECKING:
    from norg2ast.parsers.norg import NorgWalker

logger = logging.getLogger(__name__)

__all__ = ["handle_segment", "link_text"]

_WRAPPER_KINDS: dict[str, type] = {
    "bold": Strong,
    "italic": Emphasis,
    "underline": Underline,
    "strikethrough": Strikeout,
    "superscript": Superscript,
    "subscript": Subscript,
}


def link_text(text: str) -> str:
    """Normalize the text a heading is referenced by.

    Runs of whitespace (line breaks included) collapse to a single space.

    >>> link_text("  Getting\\n  started ")
    'Getting started'
    """
    return " ".join(text.split())


def handle_segment(walker: NorgWalker, inlines: list[Inline]) -> None:
    """Append the inlines of the node under the cursor to ``inlines``."""
    node = walker.cursor.node
    kind = node.type
    logger.debug(f"Parsing segment {kind!r}")

    if kind == "paragraph_segment":
        walker.visit_children(lambda: handle_segment(walker, inlines))
    elif kind == "_word":
        inlines.append(Str(walker.node_text(node)))
    elif kind in ("_space", "_line_break"):
        inlines.append(Space())
    elif kind == "_trailing_modifier":
        modifier = walker.node_text(node)
        if modifier != "~":
            logger.error(f"Unknown trailing modifier {modifier!r}")
    elif kind == "escape_sequence":
        _handle_escape_sequence(walker, inlines)
    elif kind in _WRAPPER_KINDS:
        inlines.append(_WRAPPER_KINDS[kind](_modifier_content(walker)))
    elif kind == "verbatim":
        inlines.append(Code(_delimited_text(walker)))
    elif kind == "inline_math":
        inlines.append(Math(_delimited_text(walker)))
    elif kind == "link":
        inlines.append(_handle_link(walker))
    elif kind == "anchor_declaration":
        inlines.append(_handle_anchor_declaration(walker))
    elif kind == "anchor_definition":
        inlines.append(_handle_anchor_definition(walker))
    else:
        logger.error(f"Unknown segment: {kind!r}")


def _handle_escape_sequence(walker: NorgWalker, inlines: list[Inline]) -> None:
    def visit() -> None:
        if walker.cursor.field_id == walker.field_ids.token:
            inlines.append(Str(walker.node_text(walker.cursor.node)))

    walker.visit_children(visit)


def _modifier_content(walker: NorgWalker) -> list[Inline]:
    inlines: list[Inline] = []

    def visit() -> None:
        if walker.cursor.node.type not in MODIFIER_DELIMITER_KINDS:
            handle_segment(walker, inlines)

    walker.visit_children(visit)
    return inlines


def _delimited_text(walker: NorgWalker) -> str:
    """Return the raw source between the opening and closing delimiters."""
    node = walker.cursor.node
    start, end = node.start_byte, node.end_byte

    def visit() -> None:
        nonlocal start, end
        child = walker.cursor.node
        if child.type in MODIFIER_OPEN_KINDS:
            start = max(start, child.end_byte)
        elif child.type in MODIFIER_CLOSE_KINDS:
            end = min(end, child.start_byte)
        else:
            logger.debug(f"Node {child.type!r} inside verbatim")

    walker.visit_children(visit)
    return walker.slice_text(start, end)


def _link_target(walker: NorgWalker, location: Any) -> LinkTarget:
    text_node = location.child_by_field_name("text")
    text = walker.node_text(text_node) if text_node is not None else ""
    type_node = location.child_by_field_name("type")

    if type_node is None:
        logger.error("Link with no type")
        return DirectTarget(text) if text else NoTarget()

    kind = type_node.type
    if kind == "link_target_url":
        return DirectTarget(text)
    if kind == "link_target_external_file":
        return FileTarget(text)
    if kind in HEADING_LINK_TARGET_KINDS:
        return HeadingTarget(DocumentLinkKind(HEADING_LINK_TARGET_KINDS[kind]), link_text(text))

    logger.error(f"Unknown link type: {kind!r}")
    return DirectTarget(text) if text else NoTarget()


def _link_description(walker: NorgWalker) -> tuple[list[Inline], str]:
    """Return the inlines and plain text of the ``link_description`` under the cursor."""
    inlines: list[Inline] = []
    parts: list[str] = []

    def visit() -> None:
        if walker.cursor.field_id != walker.field_ids.text:
            return
        parts.append(walker.node_text(walker.cursor.node))
        walker.visit_children(lambda: handle_segment(walker, inlines))

    walker.visit_children(visit)
    return inlines, link_text(" ".join(parts))


def _link_parts(walker: NorgWalker) -> tuple[list[Inline] | None, str, LinkTarget | None]:
    """Collect the description and location of a link-like node."""
    content: list[Inline] | None = None
    name = ""
    target: LinkTarget | None = None
    target_text = ""

    def visit() -> None:
        nonlocal content, name, target, target_text
        child = walker.cursor.node
        if child.type == "link_description":
            content, name = _link_description(walker)
        elif child.type == "link_location":
            target = _link_target(walker, child)
            text_node = child.child_by_field_name("text")
            if text_node is not None:
                target_text = walker.node_text(text_node)
        else:
            logger.error(f"Unknown link child: {child.type!r}")

    walker.visit_children(visit)

    if content is None and target is not None:
        content = [Str(target_text)]
    return content, name, target


def _handle_link(walker: NorgWalker) -> Link:
    content, _, target = _link_parts(walker)
    return Link(content or [], target if target is not None else NoTarget())


def _handle_anchor_declaration(walker: NorgWalker) -> Anchor:
    content, name, _ = _link_parts(walker)
    return Anchor(content or [], name)


def _handle_anchor_definition(walker: NorgWalker) -> Link:
    content, name, target = _link_parts(walker)
    if target is None:
        logger.error(f"Anchor definition {name!r} without a location")
        target = NoTarget()
    walker.document.register_anchor(name, target)
    return Link(content or [], target)
