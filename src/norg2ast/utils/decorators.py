#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/utils/decorators.py
"""Utility decorators for norg2ast parsers.

The parsing front end relies on optional native packages (the tree-sitter
runtime and the norg grammar). The decorator in this module checks for them
right before a method runs, so the rest of the library (conversion of
already built syntax trees, serialization, the option classes) stays
importable without them.

"""

from __future__ import annotations

import importlib
from functools import wraps
from typing import Any, Callable, List, Tuple

from norg2ast.exceptions import DependencyError
from norg2ast.utils.packages import check_version_requirement


def requires_dependencies(converter_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before method execution.

    Parameters
    ----------
    converter_name : str
        Name of the converter (e.g., "norg"). This appears in error messages
        to help users identify which front end needs dependencies.
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples where:
        - install_name: Package name for pip install (e.g., "tree-sitter")
        - import_name: Module name for import statement (e.g., "tree_sitter")
        - version_spec: Version requirement (e.g., ">=0.22" or "" for any version)

    Returns
    -------
    Callable
        Decorated method that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing or has an incompatible version.

    Examples
    --------
        >>> @requires_dependencies("norg", [("tree-sitter", "tree_sitter", ">=0.22")])
        ... def parse(self, input_data):
        ...     import tree_sitter
        ...     # parsing logic here

    Notes
    -----
    All missing packages and version mismatches are collected before the
    error is raised, and the first ImportError is chained for debugging.

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            version_mismatches = []
            original_error = None

            for install_name, import_name, version_spec in packages:
                try:
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e
                    continue

                if version_spec:
                    meets_requirement, installed_version = check_version_requirement(install_name, version_spec)
                    if not meets_requirement:
                        version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

            if missing or version_mismatches:
                raise DependencyError(
                    converter_name=converter_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    original_import_error=original_error,
                ) from original_error

            return method(*args, **kwargs)

        return wrapper

    return decorator
