"""Core type definitions."""

from typing import NewType

# Raw URL path as received on the wire (e.g., "/docs/a%20b.txt")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)
