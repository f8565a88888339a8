#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the norg2ast library.

This module defines specialized exception classes for the error conditions
that can occur while turning a Neorg syntax tree into a document AST.

Exception Hierarchy
-------------------
- Norg2AstError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser)

  - FileError (file access and I/O)

  - ParsingError (input document parsing failures)
    - InvalidLocationError (malformed table cell coordinates)
    - MetadataSyntaxError (malformed ``@document.meta`` content)

  - ScopeError (document builder misuse, always a bug)

  - DependencyError (missing/incompatible packages)

"""

from typing import Any


class Norg2AstError(Exception):
    """Base exception class for all norg2ast-specific errors.

    Catching this will catch all library-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Norg2AstError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when incorrect options class is provided to a parser.

    Parameters
    ----------
    converter_name : str
        Name of the parser that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'. "
                f"Please provide the correct options type for the parser."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(Norg2AstError):
    """Exception raised when an input file cannot be read.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path of the file that could not be accessed
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class ParsingError(Norg2AstError):
    """Exception raised when document parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    Attributes
    ----------
    parsing_stage : str or None
        Where in the parsing process the error occurred

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class InvalidLocationError(ParsingError):
    """Exception raised for a malformed spreadsheet-style cell location.

    Parameters
    ----------
    location : str
        The location text that failed to parse (e.g. ``"1C"``)
    message : str, optional
        Custom error message

    """

    def __init__(self, location: str, message: str | None = None):
        """Initialize the invalid location error."""
        if message is None:
            message = f"Invalid table cell location: {location!r}"
        super().__init__(message, parsing_stage="table")
        self.location = location


class MetadataSyntaxError(ParsingError):
    """Exception raised for malformed ``@document.meta`` content.

    Parameters
    ----------
    message : str
        Description of the syntax problem
    position : int
        Offset into the metadata text where the problem was found

    """

    def __init__(self, message: str, position: int = 0):
        """Initialize the metadata syntax error."""
        super().__init__(f"{message} (at offset {position})", parsing_stage="metadata")
        self.position = position


class ScopeError(Norg2AstError):
    """Exception raised when the document builder's scope stack is misused.

    This always indicates a bug in a node handler, never a problem with the
    input document, and is therefore never caught inside the library.
    """


class DependencyError(Norg2AstError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    converter_name : str
        Name of the converter requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The import error raised while probing the packages

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{converter_name.upper()} parsing requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{converter_name.upper()} parsing has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            if install_command:
                message += f"\nInstall with: {install_command}"
            else:
                all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
                if all_packages:
                    packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                    message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
