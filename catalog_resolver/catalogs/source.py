"""
The source catalog: definitions still expressed in author-written source form.

The source catalog owns the alias table. It cannot compute a definition's
structural type because it has no view of the standard library, so the
metadata it produces never carries ``sd_type``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import CatalogConfig
from ..diagnostics import SourceInfo
from ..metadata import STRUCTURE_KINDS, DefinitionKind, Metadata, kind_allowed, matches_identifier
from .base import Catalog, CatalogOrigin

logger = logging.getLogger(__name__)


@dataclass
class SourceArtifact:
    """A definition as the author wrote it."""

    kind: DefinitionKind
    name: str
    id: str | None = None
    parent: str | None = None  # Profiles, extensions, logical models, resources
    instance_of: str | None = None  # Instances only
    usage: str | None = None  # Instances only, e.g. "Example" or "Inline"
    source_info: SourceInfo | None = None

    def __post_init__(self):
        if self.id is None:
            self.id = self.name


class SourceCatalog(Catalog):
    """Source-form definitions and their aliases."""

    origin = CatalogOrigin.SOURCE

    def __init__(
        self,
        config: CatalogConfig | None = None,
        artifacts: list[SourceArtifact] | None = None,
        aliases: dict[str, str] | None = None,
    ):
        self.config = config or CatalogConfig()
        self.artifacts: list[SourceArtifact] = list(artifacts or [])
        self.aliases: dict[str, str] = dict(aliases or {})

    def add(self, artifact: SourceArtifact) -> None:
        self.artifacts.append(artifact)

    def add_alias(self, alias: str, target: str) -> None:
        if alias in self.aliases and self.aliases[alias] != target:
            logger.warning("Alias %s redefined from %s to %s", alias, self.aliases[alias], target)
        self.aliases[alias] = target

    def resolve_alias(self, identifier: str) -> str:
        """Return the alias target, or the identifier itself when it is not an alias."""
        return self.aliases.get(identifier, identifier)

    def lookup_all_definitions(self, identifier: str, *kinds: DefinitionKind) -> list[SourceArtifact]:
        """Find every source artifact matching an identifier."""
        return [
            artifact
            for artifact in self.artifacts
            if matches_identifier(identifier, artifact.name, artifact.id, self._url_for(artifact))
            and kind_allowed(artifact.kind, kinds)
        ]

    def lookup_definition(self, identifier: str, *kinds: DefinitionKind) -> SourceArtifact | None:
        matches = self.lookup_all_definitions(identifier, *kinds)
        return matches[0] if matches else None

    def lookup_metadata(self, identifier: str, *kinds: DefinitionKind) -> Metadata | None:
        artifact = self.lookup_definition(identifier, *kinds)
        return self._metadata_for(artifact) if artifact is not None else None

    def lookup_all_metadata(self, identifier: str, *kinds: DefinitionKind) -> list[Metadata]:
        return [self._metadata_for(a) for a in self.lookup_all_definitions(identifier, *kinds)]

    def _url_for(self, artifact: SourceArtifact) -> str | None:
        """Canonical URL the artifact will be published under; instances have none yet."""
        if not self.config.canonical:
            return None
        if artifact.kind in STRUCTURE_KINDS:
            return f"{self.config.canonical}/StructureDefinition/{artifact.id}"
        if artifact.kind in (DefinitionKind.VALUE_SET, DefinitionKind.CODE_SYSTEM):
            return f"{self.config.canonical}/{artifact.kind.value}/{artifact.id}"
        return None

    def _metadata_for(self, artifact: SourceArtifact) -> Metadata:
        if artifact.kind in STRUCTURE_KINDS:
            return Metadata(
                id=artifact.id,
                name=artifact.name,
                url=self._url_for(artifact),
                parent=artifact.parent,
                resource_type="StructureDefinition",
                version=self.config.version or None,
            )
        if artifact.kind is DefinitionKind.INSTANCE:
            return Metadata(
                id=artifact.id,
                name=artifact.name,
                instance_usage=artifact.usage,
                version=self.config.version or None,
            )
        return Metadata(
            id=artifact.id,
            name=artifact.name,
            url=self._url_for(artifact),
            resource_type=artifact.kind.value,
            version=self.config.version or None,
        )
