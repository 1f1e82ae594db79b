"""
Base classes for catalogs.

A catalog is any provider of definition and metadata lookups. The resolver
holds its catalogs as an ordered list of this interface and only looks at the
origin tag of a match, never at the concrete catalog class.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..metadata import DefinitionKind, Metadata, classify_definition, kind_allowed, matches_identifier


class CatalogOrigin(str, Enum):
    """Which catalog a match came from."""

    PACKAGE = "package"
    SOURCE = "source"
    STANDARD = "standard"


@dataclass(frozen=True)
class CatalogMatch:
    """A metadata record tagged with the origin of the catalog that produced it."""

    origin: CatalogOrigin
    metadata: Metadata

    @property
    def needs_type_derivation(self) -> bool:
        """Source catalogs cannot see the standard library, so their sd_type is never known."""
        return self.origin is CatalogOrigin.SOURCE


class Catalog(ABC):
    """Abstract base class for definition catalogs.

    Identifiers may be a name, an id or a canonical URL. Every lookup accepts
    a variadic kind filter; an empty filter matches every kind.
    """

    origin: CatalogOrigin

    @abstractmethod
    def lookup_definition(self, identifier: str, *kinds: DefinitionKind) -> Any | None:
        """
        Find the raw definition for an identifier.

        Args:
            identifier: Name, id or URL
            *kinds: Allowed definition kinds

        Returns:
            The first matching definition, or None
        """

    @abstractmethod
    def lookup_metadata(self, identifier: str, *kinds: DefinitionKind) -> Metadata | None:
        """Find metadata for the first definition matching an identifier."""

    @abstractmethod
    def lookup_all_metadata(self, identifier: str, *kinds: DefinitionKind) -> list[Metadata]:
        """Find metadata for every definition matching an identifier."""

    def match(self, identifier: str, *kinds: DefinitionKind) -> CatalogMatch | None:
        """Look up metadata and tag it with this catalog's origin."""
        metadata = self.lookup_metadata(identifier, *kinds)
        if metadata is None:
            return None
        return CatalogMatch(self.origin, metadata)

    def match_all(self, identifier: str, *kinds: DefinitionKind) -> list[CatalogMatch]:
        """Look up every metadata record and tag each with this catalog's origin."""
        return [CatalogMatch(self.origin, md) for md in self.lookup_all_metadata(identifier, *kinds)]


class JsonDefinitionCatalog(Catalog):
    """A catalog backed by an ordered list of raw JSON definitions."""

    def __init__(self, definitions: list[dict[str, Any]] | None = None):
        self._definitions: list[dict[str, Any]] = []
        for definition in definitions or []:
            self.add(definition)

    def add(self, definition: dict[str, Any]) -> None:
        """Add a definition. Earlier definitions win identifier clashes."""
        self._definitions.append(definition)

    def __len__(self) -> int:
        return len(self._definitions)

    def lookup_definition(self, identifier: str, *kinds: DefinitionKind) -> dict[str, Any] | None:
        return _first(_find_all(self._definitions, identifier, kinds))

    def lookup_metadata(self, identifier: str, *kinds: DefinitionKind) -> Metadata | None:
        definition = self.lookup_definition(identifier, *kinds)
        return Metadata.from_definition(definition) if definition is not None else None

    def lookup_all_metadata(self, identifier: str, *kinds: DefinitionKind) -> list[Metadata]:
        return [Metadata.from_definition(d) for d in _find_all(self._definitions, identifier, kinds)]


def _find_all(definitions: list[dict[str, Any]], identifier: str, kinds: tuple[DefinitionKind, ...]) -> list[dict[str, Any]]:
    return [
        d
        for d in definitions
        if matches_identifier(identifier, d.get("name"), d.get("id"), d.get("url"))
        and kind_allowed(classify_definition(d), kinds)
    ]


def _first(items: list[Any]) -> Any | None:
    return items[0] if items else None
