"""
The standard catalog: an immutable library of pre-published definitions.

Besides the regular library it keeps a small predefined collection that the
resolver consults before any other catalog.
"""

from __future__ import annotations

from typing import Any

from ..metadata import DefinitionKind, Metadata
from .base import CatalogOrigin, JsonDefinitionCatalog


class PredefinedIndex(JsonDefinitionCatalog):
    """The small set of well-known definitions consulted before any other catalog."""

    origin = CatalogOrigin.STANDARD


class StandardCatalog(JsonDefinitionCatalog):
    """Pre-published definitions plus the predefined fast-path index."""

    origin = CatalogOrigin.STANDARD

    def __init__(
        self,
        definitions: list[dict[str, Any]] | None = None,
        predefined: list[dict[str, Any]] | None = None,
    ):
        super().__init__(definitions)
        self._predefined = PredefinedIndex(predefined)

    def add_predefined(self, definition: dict[str, Any]) -> None:
        """Add a definition to the predefined index."""
        self._predefined.add(definition)

    @property
    def predefined_count(self) -> int:
        return len(self._predefined)

    def lookup_predefined_definition(self, identifier: str, *kinds: DefinitionKind) -> dict[str, Any] | None:
        return self._predefined.lookup_definition(identifier, *kinds)

    def lookup_predefined_metadata(self, identifier: str, *kinds: DefinitionKind) -> Metadata | None:
        return self._predefined.lookup_metadata(identifier, *kinds)

    def lookup_all_predefined_metadata(self, identifier: str, *kinds: DefinitionKind) -> list[Metadata]:
        return self._predefined.lookup_all_metadata(identifier, *kinds)
