#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared helpers for norg2ast: dependency checks, decoding and identifiers."""
