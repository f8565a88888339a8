#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/ir/emit.py
"""Emission of the finished IR as an AST document.

This is the second phase of a conversion. It runs once the walk is complete,
so ``Anchor`` and ``HeadingTarget`` references are resolved against
registries that already hold every anchor and heading of the document,
including those defined after the reference. Unresolved references never
fail the conversion: they produce an empty URL and a warning.

Blocks built from a syntax node get a :class:`~norg2ast.ast.nodes.SourceLocation`
holding the node's start and end points and its byte range.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from norg2ast.ast import nodes as ast
from norg2ast.ir import nodes as ir

if TYPE_CHECKING:
    from norg2ast.ir.builder import DocumentContext

logger = logging.getLogger(__name__)


def resolve_target(target: ir.LinkTarget, context: DocumentContext) -> str:
    """Return the URL of a link target.

    Heading targets resolve to ``#<identifier>``; a heading that is not
    registered resolves to ``""``.
    """
    if isinstance(target, ir.DirectTarget):
        return target.url
    if isinstance(target, ir.FileTarget):
        return target.path
    if isinstance(target, ir.HeadingTarget):
        identifier = context.get_document_link(target.text, target.kind)
        if identifier is None:
            logger.warning(f"Missing document link for {target.text!r} (heading level {target.kind.level})")
            return ""
        return f"#{identifier}"
    return ""


def resolve_anchor(name: str, context: DocumentContext) -> str:
    """Return the URL of the anchor ``name``, or ``""`` if it was never defined."""
    target = context.get_anchor(name)
    if target is None:
        logger.warning(f"Missing anchor definition for {name!r}")
        return ""
    return resolve_target(target, context)


def source_location(span: ir.Span | None) -> ast.SourceLocation | None:
    if span is None:
        return None
    return ast.SourceLocation(
        line=span.start_point[0],
        column=span.start_point[1],
        end_line=span.end_point[0],
        end_column=span.end_point[1],
        start_byte=span.start_byte,
        end_byte=span.end_byte,
    )


def _append_text(result: list[ast.Node], text: str) -> None:
    if result and isinstance(result[-1], ast.Text):
        result[-1].content += text
    else:
        result.append(ast.Text(content=text))


def emit_inlines(inlines: list[ir.Inline], context: DocumentContext) -> list[ast.Node]:
    """Convert IR inlines to AST inlines, merging adjacent text runs."""
    result: list[ast.Node] = []
    for inline in inlines:
        if isinstance(inline, ir.Space):
            _append_text(result, " ")
        elif isinstance(inline, ir.Str):
            _append_text(result, inline.text)
        else:
            result.append(_emit_inline(inline, context))
    return result


_WRAPPER_TYPES: dict[type, type] = {
    ir.Emphasis: ast.Emphasis,
    ir.Strong: ast.Strong,
    ir.Underline: ast.Underline,
    ir.Strikeout: ast.Strikethrough,
    ir.Subscript: ast.Subscript,
    ir.Superscript: ast.Superscript,
}


def _emit_inline(inline: ir.Inline, context: DocumentContext) -> ast.Node:
    wrapper = _WRAPPER_TYPES.get(type(inline))
    if wrapper is not None:
        return wrapper(content=emit_inlines(inline.content, context))  # type: ignore[union-attr]
    if isinstance(inline, ir.Code):
        return ast.Code(content=inline.text)
    if isinstance(inline, ir.Math):
        return ast.MathInline(content=inline.text)
    if isinstance(inline, ir.Link):
        return ast.Link(url=resolve_target(inline.target, context), content=emit_inlines(inline.content, context))
    if isinstance(inline, ir.Anchor):
        return ast.Link(url=resolve_anchor(inline.name, context), content=emit_inlines(inline.content, context))
    if isinstance(inline, ir.Image):
        return ast.Image(url=inline.url)
    raise TypeError(f"Unknown inline type: {type(inline).__name__}")


def _emit_paragraph(block: ir.ParagraphBlock, context: DocumentContext) -> ast.Paragraph:
    inlines: list[ir.Inline] = []
    for index, segment in enumerate(block.segments):
        if index:
            inlines.append(ir.Space())
        inlines.extend(segment)
    return ast.Paragraph(content=emit_inlines(inlines, context))


def _emit_row(row: ir.Row, context: DocumentContext, is_header: bool = False) -> ast.TableRow:
    return ast.TableRow(
        cells=[
            ast.TableCell(content=emit_blocks(cell.blocks, context), source_location=source_location(cell.span))
            for cell in row
        ],
        is_header=is_header,
    )


def _emit_table(block: ir.TableBlock, context: DocumentContext) -> ast.Table:
    return ast.Table(
        header=_emit_row(block.header, context, is_header=True) if block.header else None,
        rows=[_emit_row(row, context) for row in block.rows],
        alignments=[None] * block.num_cols,
    )


def _emit_list(block: ir.BulletList | ir.OrderedList, context: DocumentContext) -> ast.List:
    return ast.List(
        ordered=isinstance(block, ir.OrderedList),
        items=[
            ast.ListItem(children=emit_blocks(entry.blocks, context), source_location=source_location(entry.span))
            for entry in block.entries
        ],
    )


def _emit_definition_list(block: ir.DefinitionListBlock, context: DocumentContext) -> ast.DefinitionList:
    return ast.DefinitionList(
        items=[
            (
                ast.DefinitionTerm(content=emit_inlines(term, context)),
                [ast.DefinitionDescription(content=emit_blocks(blocks, context))],
            )
            for term, blocks in block.entries
        ]
    )


def _emit_code_block(block: ir.CodeBlockIR, context: DocumentContext) -> ast.CodeBlock:
    metadata = {"parameters": list(block.parameters)} if block.parameters else {}
    return ast.CodeBlock(content=block.text, language=block.language, metadata=metadata)


_BLOCK_DISPATCH: dict[type, Callable[[Any, DocumentContext], ast.Node]] = {
    ir.NullBlock: lambda b, c: ast.Null(),
    ir.Plain: lambda b, c: ast.Paragraph(content=emit_inlines(b.content, c), metadata={"plain": True}),
    ir.ParagraphBlock: _emit_paragraph,
    ir.HeadingBlock: lambda b, c: ast.Heading(
        level=b.level, content=emit_inlines(b.content, c), identifier=b.identifier
    ),
    ir.QuoteBlock: lambda b, c: ast.BlockQuote(children=emit_blocks(b.blocks, c)),
    ir.MathBlockIR: lambda b, c: ast.MathBlock(content=b.text),
    ir.CodeBlockIR: _emit_code_block,
    ir.TableBlock: _emit_table,
    ir.BulletList: _emit_list,
    ir.OrderedList: _emit_list,
    ir.DefinitionListBlock: _emit_definition_list,
}


def emit_block(block: ir.Block, context: DocumentContext) -> ast.Node:
    """Convert one IR block to its AST node.

    Raises
    ------
    TypeError
        If ``block`` is not an IR block
    """
    emitter = _BLOCK_DISPATCH.get(type(block))
    if emitter is None:
        raise TypeError(f"Unknown block type: {type(block).__name__}")
    node = emitter(block, context)
    node.source_location = source_location(block.span)
    return node


def emit_blocks(blocks: list[ir.Block], context: DocumentContext) -> list[ast.Node]:
    return [emit_block(block, context) for block in blocks]


def emit_document(blocks: list[ir.Block], metadata: dict[str, Any], context: DocumentContext) -> ast.Document:
    """Emit a complete document.

    Parameters
    ----------
    blocks : list of Block
        Top-level IR blocks, in document order
    metadata : dict
        Document metadata, copied into ``Document.metadata``
    context : DocumentContext
        Registries filled during the walk

    Returns
    -------
    Document
        The emitted AST

    """
    return ast.Document(children=emit_blocks(blocks, context), metadata=dict(metadata))
