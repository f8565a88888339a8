#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/parsers/base.py
"""Base classes for document parsers.

This module defines the abstract base class parsers inherit from. It provides
option validation and loading of text sources from the supported input types.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Union

from norg2ast.ast import Document
from norg2ast.exceptions import FileError, InvalidOptionsError, ValidationError
from norg2ast.options.base import BaseParserOptions
from norg2ast.utils.encoding import decode_source

logger = logging.getLogger(__name__)

# Longest string still considered a candidate file path
_MAX_PATH_LENGTH = 260

InputData = Union[str, Path, IO[bytes], IO[str], bytes]


class BaseParser(ABC):
    """Abstract base class for document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Notes
    -----
    The parse() method should handle all supported input types:
    - str or Path: File path to read, or (for str) the document text itself
    - IO[bytes] or IO[str]: File-like object
    - bytes: Raw document bytes

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: InputData) -> Document:
        """Parse the input document into an AST.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            The input document to parse

        Returns
        -------
        Document
            AST Document node representing the parsed document structure

        Raises
        ------
        ParsingError
            If parsing fails
        DependencyError
            If required dependencies are not installed
        FileError
            If the input file cannot be read

        """
        raise NotImplementedError

    @abstractmethod
    def extract_metadata(self, document: Any) -> dict[str, Any]:
        """Extract metadata from a loaded source document.

        Parameters
        ----------
        document : Any
            The loaded document object (format-specific type)

        Returns
        -------
        dict
            Extracted metadata; empty if the document has none

        """
        raise NotImplementedError

    @staticmethod
    def _load_text_content(input_data: InputData) -> str:
        """Load text from the supported input types with encoding detection.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            Input data to load. A ``str`` naming an existing file is read
            from disk; any other ``str`` is taken as the content itself.

        Returns
        -------
        str
            Document text

        Raises
        ------
        FileError
            If a named file cannot be read
        ValidationError
            If the input type is not supported

        """
        if isinstance(input_data, bytes):
            return decode_source(input_data)
        if isinstance(input_data, Path):
            return decode_source(_read_file(input_data))
        if isinstance(input_data, str):
            if len(input_data) <= _MAX_PATH_LENGTH and "\n" not in input_data:
                try:
                    path = Path(input_data)
                    is_file = path.is_file()
                except OSError:
                    is_file = False
                if is_file:
                    return decode_source(_read_file(path))
            return input_data
        if hasattr(input_data, "read"):
            data = input_data.read()
            if isinstance(data, bytes):
                return decode_source(data)
            return data
        raise ValidationError(
            f"Unsupported input type: {type(input_data).__name__}",
            parameter_name="input_data",
            parameter_value=input_data,
        )


def _read_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileError(f"Could not read {path}: {e}", file_path=str(path), original_error=e) from e
