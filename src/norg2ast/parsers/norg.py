#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/parsers/norg.py
"""Neorg to AST converter.

This module converts norg documents into the norg2ast AST. Source text is
parsed with tree-sitter and the norg grammar; the resulting concrete syntax
tree is then walked once, depth first, by :class:`NorgWalker`. Each node
kind is dispatched to exactly one handler, which pushes IR blocks and
inlines into a :class:`~norg2ast.ir.builder.DocumentBuilder`. Once the walk
is complete the builder emits the AST, resolving anchors and heading links
against everything registered during the walk.

Any tree exposing the py-tree-sitter cursor API can be converted with
:meth:`NorgParser.convert_tree`, including the pure-Python trees of
:mod:`norg2ast.cst`.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Callable, Optional, Union

from norg2ast.ast import Document
from norg2ast.constants import DEPS_NORG, FIELD_NAMES, HEADING_KINDS, IGNORED_BLOCK_KINDS
from norg2ast.exceptions import ParsingError
from norg2ast.ir.builder import DocumentBuilder
from norg2ast.ir.nodes import Block, DefinitionListBlock, DocumentLinkKind, HeadingBlock, Inline, ParagraphBlock, Span
from norg2ast.options.norg import NorgParserOptions
from norg2ast.parsers._norg_extensions import handle_detached_ext
from norg2ast.parsers._norg_inlines import handle_segment, link_text
from norg2ast.parsers._norg_lists import handle_lists
from norg2ast.parsers._norg_quotes import handle_quote
from norg2ast.parsers._norg_tables import handle_table
from norg2ast.parsers._norg_tags import handle_ranged_tag, handle_verbatim_tag
from norg2ast.parsers.base import BaseParser
from norg2ast.utils.decorators import requires_dependencies
from norg2ast.utils.identifiers import IdentifierRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldIds:
    """Ids of the grammar fields the walker tests the cursor against."""

    title: int
    content: int
    state: int
    token: int
    text: int

    @classmethod
    def resolve(cls, tree: Any) -> FieldIds:
        """Look up the field ids in the tree's language.

        Raises
        ------
        ParsingError
            If the grammar does not define one of the fields

        """
        language = tree.language
        ids: dict[str, int] = {}
        missing = []
        for name in FIELD_NAMES:
            field_id = language.field_id_for_name(name)
            if field_id is None:
                missing.append(name)
            else:
                ids[name] = field_id

        if missing:
            raise ParsingError(
                f"Grammar does not define the field(s): {', '.join(missing)}",
                parsing_stage="field_ids",
            )
        return cls(**ids)


class NorgWalker:
    """Depth-first walk of one norg syntax tree.

    Every handler starts and ends with the cursor on the node it was called
    for.

    Parameters
    ----------
    tree : Tree
        tree-sitter compatible syntax tree
    source : bytes
        UTF-8 source the tree's byte offsets refer to
    options : NorgParserOptions
        Parsing options
    identifiers : IdentifierRegistry
        Registry heading identifiers are drawn from
    document : DocumentBuilder, optional
        Sink for the IR; a fresh builder is created when omitted

    """

    def __init__(
        self,
        tree: Any,
        source: bytes,
        options: NorgParserOptions,
        identifiers: IdentifierRegistry,
        document: Optional[DocumentBuilder] = None,
    ):
        self.field_ids = FieldIds.resolve(tree)
        self.cursor = tree.walk()
        self.source = source
        self.options = options
        self.identifiers = identifiers
        self.document = document if document is not None else DocumentBuilder()

    def walk(self) -> Document:
        """Walk the tree from the cursor's node and return the emitted document."""
        self.handle_node()
        return self.document.build()

    def slice_text(self, start: int, end: int) -> str:
        return self.source[start:end].decode("utf-8", errors="replace")

    def node_text(self, node: Any) -> str:
        """Source text covered by ``node``."""
        return self.slice_text(node.start_byte, node.end_byte)

    def visit_children(self, visitor: Callable[[], None]) -> bool:
        """Call ``visitor`` with the cursor on each child of the current node.

        Returns
        -------
        bool
            False if the node has no children

        """
        if not self.cursor.goto_first_child():
            return False

        while True:
            visitor()
            if not self.cursor.goto_next_sibling():
                break

        self.cursor.goto_parent()
        return True

    def handle_node(self) -> None:
        """Dispatch the node under the cursor to its handler."""
        kind = self.cursor.node.type
        logger.debug(f"Found node {kind!r}")

        if kind == "document":
            logger.debug("Parsing document")
            self.visit_children(self.handle_node)
        elif kind in HEADING_KINDS:
            self.handle_heading(HEADING_KINDS[kind])
        elif kind in IGNORED_BLOCK_KINDS:
            pass
        elif kind in _BLOCK_HANDLERS:
            _BLOCK_HANDLERS[kind](self)
        else:
            logger.error(f"Unknown node: {kind!r}")

    def handle_heading(self, level: int) -> None:
        logger.debug(f"Parsing heading (level: {level})")
        span = Span.of(self.cursor.node)

        def visit() -> None:
            field_id = self.cursor.field_id
            if field_id == self.field_ids.content:
                self.handle_node()
            elif field_id == self.field_ids.title:
                node = self.cursor.node
                inlines = self.document.take_inline_collector()
                handle_segment(self, inlines)

                title = self.node_text(node)
                identifier = self.identifiers.generate(title)
                self.document.register_document_link(link_text(title), DocumentLinkKind(level), identifier)
                self.document.add_block(HeadingBlock(level, identifier, inlines, span=span))
            elif field_id == self.field_ids.state:
                self.handle_detached_ext()

        self.visit_children(visit)

    def handle_paragraph(self) -> None:
        """Add the paragraph under the cursor, one segment per source line.

        Inlines waiting in the builder's collector open the first segment.
        """
        logger.debug("Parsing paragraph")
        span = Span.of(self.cursor.node)
        segments: list[list[Inline]] = []
        segment = self.document.take_inline_collector()

        def visit() -> None:
            nonlocal segment
            handle_segment(self, segment)
            if segment:
                segments.append(segment)
                segment = []

        self.visit_children(visit)

        if segment:
            segments.append(segment)
        if segments:
            self.document.add_block(ParagraphBlock(segments, span=span))

    def handle_detached_ext(self) -> None:
        handle_detached_ext(self)

    def handle_definition_list(self) -> None:
        logger.debug("Parsing definition list")
        self.visit_children(self._handle_definition)

    def _handle_definition(self) -> None:
        logger.debug("Parsing definition")
        span = Span.of(self.cursor.node)
        document = self.document
        entries: list[tuple[list[Inline], list[Block]]] = []
        term: list[Inline] = []

        document.push_scope()

        def visit() -> None:
            nonlocal term
            field_id = self.cursor.field_id
            if field_id == self.field_ids.content:
                self.handle_node()
            elif field_id == self.field_ids.title:
                status = document.take_inline_collector()
                if term:
                    entries.append((term, document.pop_scope()))
                    document.push_scope()
                term = status
                handle_segment(self, term)
            elif field_id == self.field_ids.state:
                self.handle_detached_ext()

        self.visit_children(visit)

        last_blocks = document.pop_scope()
        if term:
            entries.append((term, last_blocks))

        if entries:
            document.add_block(DefinitionListBlock(entries, span=span))


_BLOCK_HANDLERS: dict[str, Callable[[NorgWalker], None]] = {
    "quote": handle_quote,
    "paragraph": NorgWalker.handle_paragraph,
    "ranged_tag": handle_ranged_tag,
    "ranged_verbatim_tag": handle_verbatim_tag,
    "generic_list": handle_lists,
    "table": handle_table,
    "definition_list": NorgWalker.handle_definition_list,
}


class NorgParser(BaseParser):
    """Convert norg documents to AST representation.

    One parser instance keeps a single heading identifier registry for its
    whole lifetime, so documents parsed one after another with the same
    instance never share an identifier. Instances are not thread-safe.

    Parameters
    ----------
    options : NorgParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = NorgParser()
        >>> doc = parser.parse("* Heading\\n\\nSome *bold* text.")

    Failing on malformed metadata and table cells:

        >>> parser = NorgParser(NorgParserOptions(strict=True))
        >>> doc = parser.parse(Path("notes.norg"))

    Converting an already built syntax tree:

        >>> from norg2ast.cst import build_tree, node, token
        >>> tree = build_tree(node("document", node("paragraph", node("paragraph_segment", token("_word", "Hi")))))
        >>> NorgParser().convert_tree(tree).children[0].content[0].content
        'Hi'

    """

    def __init__(self, options: NorgParserOptions | None = None):
        """Initialize the norg parser with options."""
        BaseParser._validate_options_type(options, NorgParserOptions, "norg")
        options = options or NorgParserOptions()
        super().__init__(options)
        self.options: NorgParserOptions = options
        self.identifiers = IdentifierRegistry()

    @requires_dependencies("norg", DEPS_NORG)
    def parse(self, input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> Document:
        """Parse norg input into an AST Document.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            Norg input to parse. Can be:
            - File path (str or Path)
            - File-like object in text or binary mode
            - Raw norg bytes
            - Norg string

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        DependencyError
            If tree-sitter or the norg grammar is not installed
        ParsingError
            If the source cannot be parsed, or on malformed input in
            strict mode
        FileError
            If the input file cannot be read

        """
        content = self._load_text_content(input_data)
        source = content.encode("utf-8")

        import tree_sitter
        import tree_sitter_norg

        try:
            language = tree_sitter.Language(tree_sitter_norg.language())
            tree = tree_sitter.Parser(language).parse(source)
        except Exception as e:
            raise ParsingError(f"Failed to parse norg source: {e}", parsing_stage="cst", original_error=e) from e

        return self.convert_tree(tree, source)

    def convert_tree(self, tree: Any, source: bytes | None = None) -> Document:
        """Convert a syntax tree into an AST Document.

        Parameters
        ----------
        tree : Tree
            Syntax tree exposing the py-tree-sitter API (``language``,
            ``walk()``), rooted at a ``document`` node
        source : bytes, optional
            UTF-8 source of the tree. Defaults to ``tree.text``.

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        ParsingError
            If the tree's grammar lacks a required field, or on malformed
            input in strict mode

        """
        if source is None:
            source = tree.text
            if source is None:
                raise ParsingError("Syntax tree carries no source text", parsing_stage="cst")

        walker = NorgWalker(tree, source, self.options, self.identifiers)
        document = walker.walk()
        logger.debug(f"Converted document with {len(document.children)} blocks")
        return document

    def extract_metadata(self, document: Any) -> dict[str, Any]:
        """Return the metadata gathered from ``@document.meta`` blocks.

        Parameters
        ----------
        document : Document
            A document produced by this parser

        Returns
        -------
        dict
            Copy of the document's metadata

        """
        return dict(getattr(document, "metadata", None) or {})
