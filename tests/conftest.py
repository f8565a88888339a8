"""Pytest configuration and shared fixtures for the norg2ast test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging

import pytest

from norg2ast.options import NorgParserOptions
from norg2ast.parsers.norg import NorgParser


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "norg_grammar: Tests that need tree-sitter and the norg grammar installed")


@pytest.fixture
def parser() -> NorgParser:
    """Provide a norg parser with default options.

    Returns
    -------
    NorgParser
        Fresh parser; its identifier registry is shared by every
        conversion of the test.

    """
    return NorgParser()


@pytest.fixture
def strict_parser() -> NorgParser:
    """Provide a norg parser that raises on malformed input."""
    return NorgParser(NorgParserOptions(strict=True))


@pytest.fixture
def norg_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture log records of the norg2ast loggers from DEBUG up."""
    caplog.set_level(logging.DEBUG, logger="norg2ast")
    return caplog


@pytest.fixture
def sample_norg() -> str:
    """Provide a small norg document covering the common constructs.

    Returns
    -------
    str
        Norg source with metadata, headings, lists, a quote, a code block
        and a link to a heading.

    """
    return """@document.meta
title: Sample Document
authors: [
  alice
  bob
]
@end

* Introduction
  This is *bold* and /italic/ text.

  - First item
  -- Nested item
  - Second item

  > A quoted line

** Code
   @code python
   print("hello")
   @end

   See {* Introduction}[the introduction].
"""
