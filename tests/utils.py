"""Test utilities for the norg2ast test suite.

This module provides builders for norg syntax tree fixtures. They assemble
trees with :func:`norg2ast.cst.build_tree`, using the node kinds and field
names of the tree-sitter norg grammar, so the walker can be exercised
without the native grammar installed.
"""

from typing import Optional

from norg2ast.ast import Document
from norg2ast.cst import NodeSpec, Spec, SyntaxTree, build_tree, node, token
from norg2ast.options import NorgParserOptions
from norg2ast.parsers.norg import NorgParser


def words(text: str) -> list[Spec]:
    """Split ``text`` into ``_word`` and ``_space`` tokens."""
    specs: list[Spec] = []
    for index, word in enumerate(text.split(" ")):
        if index:
            specs.append(token("_space", " "))
        if word:
            specs.append(token("_word", word))
    return specs


def segment(*parts: "Spec | str", field: Optional[str] = None) -> NodeSpec:
    """Create a paragraph segment; string parts are split into words."""
    children: list[Spec] = []
    for part in parts:
        if isinstance(part, str):
            children.extend(words(part))
        else:
            children.append(part)
    return node("paragraph_segment", *children, field=field)


def paragraph(*lines: "Spec | str", field: Optional[str] = None) -> NodeSpec:
    """Create a paragraph with one segment per line.

    A line is either a string or a prepared segment node.
    """
    children: list[Spec] = []
    for line in lines:
        children.append(line if isinstance(line, NodeSpec) else segment(line))
        children.append("\n")
    return node("paragraph", *children, field=field)


def modifier(kind: str, *parts: "Spec | str", delimiter: str = "*") -> NodeSpec:
    """Create an attached modifier such as ``bold`` or ``verbatim``."""
    children: list[Spec] = [token("_open", delimiter)]
    for part in parts:
        children.extend(words(part) if isinstance(part, str) else [part])
    children.append(token("_close", delimiter))
    return node(kind, *children)


def todo(status: str) -> NodeSpec:
    """Create a detached modifier extension holding one TODO status."""
    return node(
        "detached_modifier_extension",
        token("_begin", "("),
        token(f"todo_item_{status}", "x"),
        token("_end", ")"),
        " ",
        field="state",
    )


def heading(level: int, title: "str | NodeSpec", *content: Spec, state: Optional[NodeSpec] = None) -> NodeSpec:
    """Create a heading; ``content`` nodes are attached under the ``content`` field."""
    title_spec = segment(title, field="title") if isinstance(title, str) else title
    children: list[Spec] = [token(f"heading{level}_prefix", "*" * level), " "]
    if state is not None:
        children.append(state)
    children.extend([title_spec, "\n"])
    for child in content:
        if isinstance(child, NodeSpec) and child.field is None:
            child.field = "content"
        children.append(child)
    return node(f"heading{level}", *children)


def list_item(level: int, text: Optional[str], *children: Spec, ordered: bool = False) -> NodeSpec:
    """Create an ``unordered_list<level>`` or ``ordered_list<level>`` item."""
    kind = f"{'ordered' if ordered else 'unordered'}_list{level}"
    marker = ("~" if ordered else "-") * level
    specs: list[Spec] = [token(f"{kind}_prefix", marker), " "]
    if text is not None:
        specs.append(paragraph(text))
    specs.extend(children)
    return node(kind, *specs)


def generic_list(*items: Spec) -> NodeSpec:
    return node("generic_list", *items)


def quote(level: int, text: Optional[str], *children: Spec) -> NodeSpec:
    """Create a ``quote<level>`` node with an optional paragraph."""
    specs: list[Spec] = [token(f"quote{level}_prefix", ">" * level), " "]
    if text is not None:
        specs.append(paragraph(text))
    specs.extend(children)
    return node(f"quote{level}", *specs)


def table_cell(location: str, text: str) -> NodeSpec:
    """Create a single table cell at ``location`` holding one paragraph."""
    return node(
        "single_table_cell",
        token("single_table_cell_prefix", ":"),
        " ",
        token("_location", location, field="title"),
        " ",
        token("_intersecting_modifier", ":"),
        " ",
        paragraph(text, field="content"),
    )


def definition(term: str, *bodies: str) -> NodeSpec:
    """Create a single definition with one paragraph per body."""
    children: list[Spec] = [token("single_definition_prefix", "$"), " ", segment(term, field="title"), "\n"]
    children.extend(paragraph(body, field="content") for body in bodies)
    return node("single_definition", *children)


def link_location(target_kind: str, text: str, marker: str = "") -> NodeSpec:
    """Create a link location, e.g. ``link_target_url`` or ``link_target_heading1``."""
    children: list[Spec] = ["{", token(target_kind, marker, field="type")]
    if marker:
        children.append(" ")
    children.extend([token("link_destination", text, field="text"), "}"])
    return node("link_location", *children)


def link_description(text: str) -> NodeSpec:
    return node("link_description", "[", segment(text, field="text"), "]")


def link(location: NodeSpec, description: Optional[str] = None) -> NodeSpec:
    children: list[Spec] = [location]
    if description is not None:
        children.append(link_description(description))
    return node("link", *children)


def verbatim_tag(name: str, content: str, *parameters: str) -> NodeSpec:
    """Create a ``@name`` ranged verbatim tag; ``content`` should end with a newline."""
    children: list[Spec] = [token("_prefix", "@"), token("tag_name", name)]
    if parameters:
        params: list[Spec] = []
        for index, parameter in enumerate(parameters):
            if index:
                params.append(" ")
            params.append(token("tag_param", parameter))
        children.extend([" ", node("tag_parameters", *params)])
    children.extend(["\n", token("ranged_verbatim_tag_content", content), token("ranged_verbatim_tag_end", "@end")])
    return node("ranged_verbatim_tag", *children)


def ranged_tag(name: str, content: str) -> NodeSpec:
    """Create a ``|name`` ranged tag."""
    return node(
        "ranged_tag",
        token("_prefix", "|"),
        token("tag_name", name),
        "\n",
        token("ranged_tag_content", content),
        token("ranged_tag_end", "|end"),
    )


def document(*children: Spec) -> SyntaxTree:
    """Build a tree rooted at a ``document`` node."""
    return build_tree(node("document", *children))


def convert(tree: SyntaxTree, parser: Optional[NorgParser] = None, **options) -> Document:
    """Convert ``tree`` with a fresh parser unless one is given."""
    if parser is None:
        parser = NorgParser(NorgParserOptions(**options))
    return parser.convert_tree(tree)


__all__ = [
    "convert",
    "definition",
    "document",
    "generic_list",
    "heading",
    "link",
    "link_description",
    "link_location",
    "list_item",
    "modifier",
    "paragraph",
    "quote",
    "ranged_tag",
    "segment",
    "table_cell",
    "todo",
    "verbatim_tag",
    "words",
]
