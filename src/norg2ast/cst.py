#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/cst.py
"""Pure-Python concrete syntax trees with a tree-sitter compatible interface.

The walker in :mod:`norg2ast.parsers.norg` only relies on the small subset
of the py-tree-sitter API listed below, so any object providing it can be
converted:

- ``Tree``: ``root_node``, ``language.field_id_for_name(name)``, ``walk()``
- ``Node``: ``type``, ``start_byte``, ``end_byte``, ``start_point``,
  ``children``, ``child_count``, ``child_by_field_name(name)``
- ``TreeCursor``: ``node``, ``field_id``, ``field_name``,
  ``goto_first_child()``, ``goto_next_sibling()``, ``goto_parent()``

This module provides that subset for trees built in Python, e.g. by another
front end or by hand in test fixtures. :func:`build_tree` assembles a tree
from nested :func:`node`/:func:`token` specifications and derives the source
text, byte ranges and points from the token texts.

Examples
--------
>>> tree = build_tree(
...     node("document",
...          node("paragraph",
...               node("paragraph_segment", token("_word", "Hello"), token("_space", " "),
...                    token("_word", "world"))))
... )
>>> tree.text
b'Hello world'
>>> tree.root_node.children[0].children[0].child_count
3

"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import Iterable, Iterator, Optional, Union

from norg2ast.constants import FIELD_NAMES

# Fields used by the norg grammar beyond the ones addressed by id
EXTRA_FIELD_NAMES: tuple[str, ...] = ("type",)


class SyntaxLanguage:
    """Field-name registry of a grammar.

    Field ids start at 1, matching tree-sitter, so ``0``/``None`` can mean
    "no field".

    Parameters
    ----------
    field_names : iterable of str
        Names of the fields defined by the grammar

    """

    def __init__(self, field_names: Iterable[str]):
        self._ids: dict[str, int] = {}
        for name in field_names:
            if name not in self._ids:
                self._ids[name] = len(self._ids) + 1
        self._names = {field_id: name for name, field_id in self._ids.items()}

    @property
    def field_count(self) -> int:
        return len(self._ids)

    def field_id_for_name(self, name: str) -> Optional[int]:
        return self._ids.get(name)

    def field_name_for_id(self, field_id: int) -> Optional[str]:
        return self._names.get(field_id)


class SyntaxNode:
    """A node of a :class:`SyntaxTree`.

    Parameters
    ----------
    type : str
        Node kind
    start_byte, end_byte : int
        Byte range of the node in the UTF-8 encoded source
    start_point, end_point : tuple of (int, int)
        ``(row, column)`` of the range boundaries, column counted in bytes
    children : list of SyntaxNode, optional
        Child nodes in source order
    field_name : str, optional
        Name of the field under which the node is attached to its parent

    """

    def __init__(
        self,
        type: str,
        start_byte: int,
        end_byte: int,
        start_point: tuple[int, int] = (0, 0),
        end_point: tuple[int, int] = (0, 0),
        children: Optional[list[SyntaxNode]] = None,
        field_name: Optional[str] = None,
    ):
        self.type = type
        self.start_byte = start_byte
        self.end_byte = end_byte
        self.start_point = start_point
        self.end_point = end_point
        self.children: list[SyntaxNode] = children or []
        self.field_name = field_name
        self.parent: Optional[SyntaxNode] = None
        self._source: bytes = b""
        for child in self.children:
            child.parent = self

    @property
    def child_count(self) -> int:
        return len(self.children)

    @property
    def text(self) -> bytes:
        """Source bytes covered by this node."""
        return self._source[self.start_byte : self.end_byte]

    def child_by_field_name(self, name: str) -> Optional[SyntaxNode]:
        """Return the first child attached under field ``name``."""
        for child in self.children:
            if child.field_name == name:
                return child
        return None

    def children_by_field_name(self, name: str) -> list[SyntaxNode]:
        """Return every child attached under field ``name``."""
        return [child for child in self.children if child.field_name == name]

    def walk(self) -> TreeCursor:
        return TreeCursor(self)

    def iter_descendants(self) -> Iterator[SyntaxNode]:
        """Yield this node and all of its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter_descendants()

    def sexp(self) -> str:
        """Render the subtree as an s-expression, mostly for debugging."""
        prefix = f"{self.field_name}: " if self.field_name else ""
        if not self.children:
            return f"{prefix}({self.type})"
        inner = " ".join(child.sexp() for child in self.children)
        return f"{prefix}({self.type} {inner})"

    def __repr__(self) -> str:
        return f"SyntaxNode(type={self.type!r}, start_byte={self.start_byte}, end_byte={self.end_byte})"


class TreeCursor:
    """Cursor over a :class:`SyntaxNode` subtree.

    The cursor cannot move above the node it was created on.
    """

    def __init__(self, root: SyntaxNode, language: Optional[SyntaxLanguage] = None):
        self._root = root
        self._language = language
        # (node, index of node among its parent's children)
        self._stack: list[tuple[SyntaxNode, int]] = [(root, 0)]

    @property
    def node(self) -> SyntaxNode:
        return self._stack[-1][0]

    @property
    def field_name(self) -> Optional[str]:
        if len(self._stack) == 1:
            return None
        return self.node.field_name

    @property
    def field_id(self) -> int:
        name = self.field_name
        if name is None or self._language is None:
            return 0
        return self._language.field_id_for_name(name) or 0

    @property
    def depth(self) -> int:
        return len(self._stack) - 1

    def goto_first_child(self) -> bool:
        current = self.node
        if not current.children:
            return False
        self._stack.append((current.children[0], 0))
        return True

    def goto_next_sibling(self) -> bool:
        if len(self._stack) == 1:
            return False
        _, index = self._stack[-1]
        parent = self._stack[-2][0]
        if index + 1 >= len(parent.children):
            return False
        self._stack[-1] = (parent.children[index + 1], index + 1)
        return True

    def goto_parent(self) -> bool:
        if len(self._stack) == 1:
            return False
        self._stack.pop()
        return True

    def reset(self, node: SyntaxNode) -> None:
        self._root = node
        self._stack = [(node, 0)]


class SyntaxTree:
    """A syntax tree together with its source and grammar fields.

    Parameters
    ----------
    root_node : SyntaxNode
        Root of the tree, normally of kind ``document``
    source : bytes
        UTF-8 encoded source the byte ranges refer to
    language : SyntaxLanguage, optional
        Field registry; defaults to the norg field names

    """

    def __init__(self, root_node: SyntaxNode, source: bytes, language: Optional[SyntaxLanguage] = None):
        self.root_node = root_node
        self.text = source
        self.language = language or SyntaxLanguage(FIELD_NAMES + EXTRA_FIELD_NAMES)
        for descendant in root_node.iter_descendants():
            descendant._source = source

    def walk(self) -> TreeCursor:
        return TreeCursor(self.root_node, self.language)


@dataclass
class NodeSpec:
    """Specification of an inner node for :func:`build_tree`."""

    kind: str
    children: list[Spec] = dataclass_field(default_factory=list)
    field: Optional[str] = None


@dataclass
class TokenSpec:
    """Specification of a leaf node covering ``text``."""

    kind: str
    text: str
    field: Optional[str] = None


Spec = Union[NodeSpec, TokenSpec, str]


def node(kind: str, *children: Spec, field: Optional[str] = None) -> NodeSpec:
    """Describe an inner node.

    Plain strings among ``children`` are source text not covered by any
    child node (whitespace between tokens, for example).
    """
    return NodeSpec(kind, list(children), field)


def token(kind: str, text: str, field: Optional[str] = None) -> TokenSpec:
    """Describe a leaf node covering ``text``."""
    return TokenSpec(kind, text, field)


class _TreeAssembler:
    def __init__(self) -> None:
        self.chunks: list[bytes] = []
        self.offset = 0
        self.row = 0
        self.column = 0
        self.field_names: list[str] = []

    def point(self) -> tuple[int, int]:
        return (self.row, self.column)

    def advance(self, text: str) -> None:
        data = text.encode("utf-8")
        self.chunks.append(data)
        self.offset += len(data)
        last_newline = data.rfind(b"\n")
        if last_newline == -1:
            self.column += len(data)
        else:
            self.row += data.count(b"\n")
            self.column = len(data) - last_newline - 1

    def note_field(self, name: Optional[str]) -> None:
        if name and name not in self.field_names:
            self.field_names.append(name)

    def assemble(self, spec: Union[NodeSpec, TokenSpec]) -> SyntaxNode:
        self.note_field(spec.field)
        start_byte, start_point = self.offset, self.point()

        if isinstance(spec, TokenSpec):
            self.advance(spec.text)
            return SyntaxNode(spec.kind, start_byte, self.offset, start_point, self.point(), field_name=spec.field)

        children = []
        for child in spec.children:
            if isinstance(child, str):
                self.advance(child)
            else:
                children.append(self.assemble(child))
        return SyntaxNode(spec.kind, start_byte, self.offset, start_point, self.point(), children, spec.field)


def build_tree(spec: Union[NodeSpec, TokenSpec], language: Optional[SyntaxLanguage] = None) -> SyntaxTree:
    """Build a :class:`SyntaxTree` from a node specification.

    The source text is the concatenation of all token texts and plain string
    children in document order.

    Parameters
    ----------
    spec : NodeSpec or TokenSpec
        Root specification
    language : SyntaxLanguage, optional
        Field registry. Defaults to the norg field names plus every field
        name used in ``spec``.

    Returns
    -------
    SyntaxTree
        The assembled tree

    """
    assembler = _TreeAssembler()
    root = assembler.assemble(spec)
    if language is None:
        language = SyntaxLanguage(FIELD_NAMES + EXTRA_FIELD_NAMES + tuple(assembler.field_names))
    return SyntaxTree(root, b"".join(assembler.chunks), language)
