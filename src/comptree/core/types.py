"""
Core type definitions for the CompTree manifest engine.

This module contains fundamental type aliases and constants used throughout
the package for type safety and consistency.
"""

from typing import Any, Literal

ComponentId = str

# Deepest permitted level; roots sit at depth 0, so five levels in total
MAX_DEPTH = 4

# Highest schema level whose property variants this engine understands
SUPPORTED_SCHEMA_LEVEL = 1

ComponentAuthor = Literal["user", "ai"]

PropertyValue = str | int | float | bool | list | dict | None

WireDict = dict[str, Any]
