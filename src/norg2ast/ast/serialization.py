#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/ast/serialization.py
"""JSON serialization and deserialization for AST nodes.

Every node is serialized as a JSON object with a ``node_type`` key naming the
node class, followed by the node's dataclass fields. ``source_location`` is
omitted when it is not set. Definition list items are serialized as
``{"term": ..., "descriptions": [...]}`` objects.

Examples
--------
Serialize an AST to JSON:

    >>> from norg2ast.ast import Document, Heading, Text
    >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")], identifier="Title")])
    >>> json_str = ast_to_json(doc, indent=2)

Deserialize it again:

    >>> json_to_ast(json_str).children[0].identifier
    'Title'

"""

from __future__ import annotations

import json
import logging
from dataclasses import fields
from typing import Any, cast

from norg2ast.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    MathBlock,
    MathInline,
    Node,
    Null,
    Paragraph,
    SourceLocation,
    Strikethrough,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableRow,
    Text,
    Underline,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_NODE_CLASSES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        SourceLocation,
        Document,
        Heading,
        Paragraph,
        CodeBlock,
        BlockQuote,
        Null,
        List,
        ListItem,
        Table,
        TableRow,
        TableCell,
        DefinitionList,
        DefinitionTerm,
        DefinitionDescription,
        MathBlock,
        Text,
        Emphasis,
        Strong,
        Strikethrough,
        Underline,
        Superscript,
        Subscript,
        Code,
        Link,
        Image,
        MathInline,
    )
}

# Fields holding free-form data that must never be interpreted as nodes
_OPAQUE_FIELDS = frozenset({"metadata"})


def _serialize_value(value: Any) -> Any:
    if isinstance(value, (Node, SourceLocation)):
        return ast_to_dict(value)
    if isinstance(value, (list, tuple)):
        return [_serialize_value(item) for item in value]
    return value


def _serialize_definition_items(node: DefinitionList) -> list[dict[str, Any]]:
    return [
        {"term": ast_to_dict(term), "descriptions": [ast_to_dict(description) for description in descriptions]}
        for term, descriptions in node.items
    ]


def ast_to_dict(node: Node | SourceLocation) -> dict[str, Any]:
    """Convert an AST node to a dictionary representation.

    Parameters
    ----------
    node : Node or SourceLocation
        The AST node to convert

    Returns
    -------
    dict
        Dictionary representation of the node

    Raises
    ------
    ValueError
        If the node class is not part of the AST

    Examples
    --------
    >>> ast_to_dict(Text(content="Hello"))
    {'node_type': 'Text', 'content': 'Hello', 'metadata': {}}

    """
    node_type = type(node).__name__
    if _NODE_CLASSES.get(node_type) is not type(node):
        raise ValueError(f"Unknown node type for serialization: {node_type}")

    result: dict[str, Any] = {"node_type": node_type}
    for node_field in fields(node):
        value = getattr(node, node_field.name)
        if node_field.name == "source_location" and value is None:
            continue
        if isinstance(node, DefinitionList) and node_field.name == "items":
            result["items"] = _serialize_definition_items(node)
        elif node_field.name in _OPAQUE_FIELDS:
            result[node_field.name] = value
        else:
            result[node_field.name] = _serialize_value(value)
    return result


def _deserialize_value(value: Any, strict_mode: bool) -> Any:
    if isinstance(value, dict) and "node_type" in value:
        return dict_to_ast(value, strict_mode=strict_mode)
    if isinstance(value, list):
        return [_deserialize_value(item, strict_mode) for item in value]
    return value


def _deserialize_definition_items(
    items: list[dict[str, Any]], strict_mode: bool
) -> list[tuple[DefinitionTerm, list[DefinitionDescription]]]:
    return [
        (
            cast(DefinitionTerm, dict_to_ast(item["term"], strict_mode=strict_mode)),
            [
                cast(DefinitionDescription, dict_to_ast(description, strict_mode=strict_mode))
                for description in item.get("descriptions", [])
            ],
        )
        for item in items
    ]


def dict_to_ast(data: dict[str, Any], strict_mode: bool = True) -> Node | SourceLocation:
    """Convert a dictionary representation back to an AST node.

    Parameters
    ----------
    data : dict
        Dictionary representation of a node
    strict_mode : bool, default True
        If True, raise ValueError on unknown node types and fields.
        If False, log a warning and replace unknown nodes with an empty
        ``Text`` node and drop unknown fields.

    Returns
    -------
    Node or SourceLocation
        Reconstructed AST node

    Raises
    ------
    ValueError
        If the dictionary contains an unknown node type or field and
        ``strict_mode`` is True

    """
    node_type = data.get("node_type")
    node_class = _NODE_CLASSES.get(node_type) if isinstance(node_type, str) else None
    if node_class is None:
        if strict_mode:
            raise ValueError(f"Unknown node type: {node_type!r}")
        logger.warning(f"Unknown node type {node_type!r}, skipping")
        return Text(content="")

    known = {node_field.name for node_field in fields(node_class)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key == "node_type":
            continue
        if key not in known:
            if strict_mode:
                raise ValueError(f"Unknown field {key!r} for node type {node_type}")
            logger.warning(f"Unknown field {key!r} for node type {node_type}, skipping")
            continue
        if node_class is DefinitionList and key == "items":
            kwargs[key] = _deserialize_definition_items(value, strict_mode)
        elif key in _OPAQUE_FIELDS:
            kwargs[key] = value
        else:
            kwargs[key] = _deserialize_value(value, strict_mode)
    return node_class(**kwargs)


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize an AST node to a JSON string with schema versioning.

    Parameters
    ----------
    node : Node
        The AST node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string, ``{"schema_version": 1, "node_type": ..., ...}``.
        Unicode characters are kept unescaped.

    """
    versioned_dict = {"schema_version": SCHEMA_VERSION, **ast_to_dict(node)}
    return json.dumps(versioned_dict, indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str, validate_schema: bool = True, strict_mode: bool = True) -> Node:
    """Deserialize a JSON string to an AST node.

    Parameters
    ----------
    json_str : str
        JSON string representation
    validate_schema : bool, default True
        Raise on a schema version other than the supported one. A missing
        version is treated as version 1.
    strict_mode : bool, default True
        Raise on unknown node types and fields instead of skipping them

    Returns
    -------
    Node
        Reconstructed AST node

    Raises
    ------
    ValueError
        If the schema version is unsupported or the content is invalid
    json.JSONDecodeError
        If the JSON string is malformed

    """
    data = json.loads(json_str)
    schema_version = data.pop("schema_version", SCHEMA_VERSION)

    if schema_version != SCHEMA_VERSION:
        if validate_schema:
            raise ValueError(
                f"Unsupported schema version: {schema_version}. "
                f"This version of norg2ast supports schema version {SCHEMA_VERSION} only."
            )
        logger.warning(f"Schema version {schema_version} differs from supported version {SCHEMA_VERSION}")

    return cast(Node, dict_to_ast(data, strict_mode=strict_mode))


__all__ = [
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
]
