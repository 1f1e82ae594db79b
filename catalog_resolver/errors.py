"""
Exceptions raised by catalog_resolver.

Unresolved identifiers are never errors: lookups return None or an empty
list. These exceptions cover malformed input handed to the package.
"""

from __future__ import annotations


class CatalogResolverError(Exception):
    """Base class for all catalog_resolver errors."""

    pass


class CatalogLoadError(CatalogResolverError):
    """Raised when a catalog cannot be loaded from disk.

    This can happen when:
    - A definition file is not valid JSON
    - A source manifest is missing required keys
    - A catalog directory does not exist
    """

    pass


class UnknownDefinitionKindError(CatalogResolverError, ValueError):
    """Raised when a definition kind name is not recognised."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown definition kind: {kind!r}")
