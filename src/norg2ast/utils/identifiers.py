#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/utils/identifiers.py
"""Unique heading identifiers.

Heading titles become identifiers by replacing whitespace and the ``~``
counter separator with ``-``. A base that was already issued gets a counter
suffix: the first repeat of ``base`` is ``base~0``, the next ``base~1``.

The registry is meant to outlive a single conversion, so several sources
collated into one output never produce colliding identifiers.
"""

from __future__ import annotations

import logging

from norg2ast.constants import IDENTIFIER_COUNTER_SEPARATOR, IDENTIFIER_REPLACED_CHARS, IDENTIFIER_REPLACEMENT

logger = logging.getLogger(__name__)


def normalize_identifier(text: str) -> str:
    """Replace whitespace and ``~`` characters with ``-``.

    Examples
    --------
    >>> normalize_identifier("Getting started")
    'Getting-started'

    """
    return "".join(IDENTIFIER_REPLACEMENT if ch in IDENTIFIER_REPLACED_CHARS else ch for ch in text)


class IdentifierRegistry:
    """Issue unique identifiers for a conversion session.

    Examples
    --------
    >>> registry = IdentifierRegistry()
    >>> registry.generate("Intro"), registry.generate("Intro"), registry.generate("Intro")
    ('Intro', 'Intro~0', 'Intro~1')

    """

    def __init__(self) -> None:
        self._counters: dict[str, int] = {}

    def generate(self, text: str) -> str:
        """Return a unique identifier derived from ``text``."""
        base = normalize_identifier(text)
        counter = self._counters.get(base)
        if counter is None:
            self._counters[base] = 0
            return base

        self._counters[base] = counter + 1
        identifier = f"{base}{IDENTIFIER_COUNTER_SEPARATOR}{counter}"
        logger.debug(f"Identifier {base!r} already issued, using {identifier!r}")
        return identifier

    def reset(self) -> None:
        """Forget every issued identifier."""
        self._counters.clear()

    def __contains__(self, base: str) -> bool:
        return base in self._counters

    def __len__(self) -> int:
        return len(self._counters)
