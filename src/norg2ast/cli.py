#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/cli.py
"""Command-line interface for norg2ast.

This module converts norg files into AST JSON. Several inputs are parsed
with one parser, so their heading identifiers never collide, and collated
into a single document.

Examples
--------
Convert a file::

    $ norg2ast notes.norg

Write the result to a file::

    $ norg2ast notes.norg --out notes.json

Read from stdin and fail on malformed metadata or table cells::

    $ cat notes.norg | norg2ast - --strict

Collate several files into one document::

    $ norg2ast journal/*.norg --out journal.json

Pretty-print with syntax highlighting::

    $ norg2ast notes.norg --rich

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Union

from norg2ast import __version__
from norg2ast.ast import Document, OutlineCollector, ast_to_json
from norg2ast.constants import DEFAULT_JSON_INDENT
from norg2ast.exceptions import DependencyError, FileError, Norg2AstError, ParsingError, ValidationError
from norg2ast.logging_utils import configure_logging
from norg2ast.options import NorgParserOptions
from norg2ast.parsers.norg import NorgParser

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6

__all__ = ["main", "create_parser", "collate_documents", "format_outline", "get_exit_code_for_exception"]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser of the ``norg2ast`` command."""
    parser = argparse.ArgumentParser(
        prog="norg2ast",
        description="Convert Neorg (.norg) documents to AST JSON.",
    )
    parser.add_argument("input", nargs="+", help="Input .norg file(s); use '-' to read from stdin")
    parser.add_argument("--out", "-o", type=Path, metavar="FILE", help="Write JSON to FILE instead of stdout")
    parser.add_argument(
        "--indent",
        type=int,
        default=DEFAULT_JSON_INDENT,
        metavar="N",
        help=f"JSON indentation; negative for compact output (default: {DEFAULT_JSON_INDENT})",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed table cell locations and document metadata instead of skipping them",
    )
    parser.add_argument("--no-metadata", action="store_true", help="Ignore @document.meta blocks")
    parser.add_argument(
        "--example-language",
        metavar="LANG",
        help="Language recorded on code blocks produced by |example tags (default: norg)",
    )
    parser.add_argument("--rich", action="store_true", help="Pretty-print the JSON with syntax highlighting")
    parser.add_argument(
        "--outline",
        action="store_true",
        help="Print the heading outline (text and identifier) instead of JSON",
    )

    log_group = parser.add_argument_group("Logging options")
    log_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    log_group.add_argument("--verbose", "-v", action="store_true", help="Shortcut for --log-level DEBUG")
    log_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps")
    log_group.add_argument("--log-file", metavar="FILE", help="Also write log messages to FILE")

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    # --trace takes precedence over --verbose, which overrides the default --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    return EXIT_ERROR


def _build_options(parsed_args: argparse.Namespace) -> NorgParserOptions:
    options = NorgParserOptions(strict=parsed_args.strict, extract_metadata=not parsed_args.no_metadata)
    if parsed_args.example_language:
        options = options.create_updated(code_language_for_examples=parsed_args.example_language)
    return options


def _read_input(name: str) -> Union[Path, bytes]:
    if name == "-":
        return sys.stdin.buffer.read()
    path = Path(name)
    if not path.is_file():
        raise FileError(f"Input file not found: {name}", file_path=name)
    return path


def collate_documents(documents: list[Document]) -> Document:
    """Combine documents into one; later metadata keys override earlier ones."""
    if len(documents) == 1:
        return documents[0]

    children: list[Any] = []
    metadata: dict[str, Any] = {}
    for document in documents:
        children.extend(document.children)
        metadata.update(document.metadata)
    return Document(children=children, metadata=metadata)


def format_outline(document: Document) -> str:
    """Render the headings of ``document`` as an indented outline.

    Examples
    --------
    >>> from norg2ast.ast import Heading, Text
    >>> print(format_outline(Document(children=[Heading(level=2, content=[Text("Usage")], identifier="Usage")])))
      Usage (#Usage)

    """
    collector = OutlineCollector()
    document.accept(collector)
    return "\n".join(
        f"{'  ' * (level - 1)}{text} (#{identifier})" for level, identifier, text in collector.headings
    )


def _write_output(text: str, parsed_args: argparse.Namespace) -> None:
    if parsed_args.out is not None:
        try:
            parsed_args.out.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            raise FileError(f"Could not write {parsed_args.out}: {e}", file_path=str(parsed_args.out)) from e
        logger.info(f"Wrote {parsed_args.out}")
        return

    if parsed_args.rich:
        from rich.console import Console
        from rich.syntax import Syntax

        Console().print(Syntax(text, "json", theme="monokai", word_wrap=True))
        return

    print(text)


def main(args: list[str] | None = None) -> int:
    """Execute the ``norg2ast`` command.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments; ``sys.argv[1:]`` when omitted

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    if parsed_args.input.count("-") > 1:
        print("Error: stdin ('-') can only be read once", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        norg_parser = NorgParser(_build_options(parsed_args))
        documents = []
        for name in parsed_args.input:
            logger.debug(f"Converting {name}")
            documents.append(norg_parser.parse(_read_input(name)))

        collated = collate_documents(documents)
        if parsed_args.outline:
            print(format_outline(collated))
        else:
            indent = parsed_args.indent if parsed_args.indent >= 0 else None
            _write_output(ast_to_json(collated, indent=indent), parsed_args)
    except Norg2AstError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except ImportError as e:
        print(f"Error: missing dependency: {e}", file=sys.stderr)
        return EXIT_DEPENDENCY_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
