"""
Resolver composing the output package, the source catalog and the standard catalog.

Lookups search the package first, then the source catalog, then the standard
catalog, so local definitions win naming clashes. The standard catalog's
predefined index is consulted before all of them.

The resolver also fills in what a single catalog cannot know. The source
catalog has no view of the standard library, so it cannot tell the structural
type of its definitions; the resolver walks the parent chain across every
catalog to find it, backfills the resource type of source instances, and
synthesizes canonical URLs for records that lack one.
"""

from __future__ import annotations

import logging
from typing import Any

from .catalogs import Catalog, CatalogMatch, CatalogOrigin, OutputPackage, SourceCatalog, StandardCatalog
from .metadata import STRUCTURE_KINDS, DefinitionKind, Metadata

logger = logging.getLogger(__name__)


class Resolver:
    """Resolves identifiers against the package, source and standard catalogs."""

    def __init__(
        self,
        source: SourceCatalog | None = None,
        standard: StandardCatalog | None = None,
        package: OutputPackage | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            source: Definitions still in source form (owns the alias table)
            standard: The standard library of pre-published definitions
            package: Definitions produced so far in the current run
        """
        self.source = source
        self.standard = standard
        self.package = package
        # Priority order for every search
        self._catalogs: list[Catalog] = [c for c in (package, source, standard) if c is not None]
        self._default_version = self._find_default_version()

    @property
    def default_version(self) -> str | None:
        """Structural version of the run, preferring the standard library's."""
        return self._default_version

    def _find_default_version(self) -> str | None:
        if self.standard is not None:
            definition = self.standard.lookup_definition("StructureDefinition")
            if definition is not None and definition.get("fhirVersion"):
                return definition["fhirVersion"]
        if self.source is not None and self.source.config.fhir_version:
            return self.source.config.fhir_version[0]
        return None

    @property
    def canonical(self) -> str:
        """Canonical URL base synthesized URLs are built on."""
        if self.package is not None and self.package.config.canonical:
            return self.package.config.canonical
        if self.source is not None:
            return self.source.config.canonical
        return ""

    def resolve_alias(self, identifier: str) -> str:
        if self.source is None:
            return identifier
        return self.source.resolve_alias(identifier)

    def lookup_definition(self, identifier: str, *kinds: DefinitionKind) -> Any | None:
        """
        Find the raw definition for a name, id or URL.

        A definition that exists only in the source catalog has not been
        exported yet, so None is returned for it rather than a same-named
        standard definition. This keeps lookup_definition consistent with
        lookup_metadata, which would find the source definition.

        Args:
            identifier: Name, id, URL or alias
            *kinds: Allowed definition kinds

        Returns:
            The raw definition, or None
        """
        identifier = self.resolve_alias(identifier)

        if self.standard is not None:
            result = self.standard.lookup_predefined_definition(identifier, *kinds)
            if result is not None:
                return result

        if self.package is not None:
            result = self.package.lookup_definition(identifier, *kinds)
            if result is not None:
                return result

        if self.source is not None and self.source.lookup_definition(identifier, *kinds) is not None:
            logger.debug("%s is defined in source but not exported yet", identifier)
            return None

        if self.standard is not None:
            return self.standard.lookup_definition(identifier, *kinds)
        return None

    def lookup_metadata(self, identifier: str, *kinds: DefinitionKind) -> Metadata | None:
        """
        Find metadata for a name, id or URL without forcing an export.

        Args:
            identifier: Name, id, URL or alias
            *kinds: Allowed definition kinds

        Returns:
            The first matching record, completed by the resolver, or None
        """
        identifier = self.resolve_alias(identifier)

        if self.standard is not None:
            result = self.standard.lookup_predefined_metadata(identifier, *kinds)
            if result is not None:
                return result

        match = self._first_match(identifier, kinds)
        if match is None:
            logger.debug("No metadata found for %s", identifier)
            return None
        return self._complete(match, identifier, kinds)

    def lookup_all_metadata(self, identifier: str, *kinds: DefinitionKind) -> list[Metadata]:
        """
        Find metadata for every definition matching a name, id or URL.

        Predefined matches come first, then package, source and standard
        matches. Structurally equal records are returned once.
        """
        identifier = self.resolve_alias(identifier)

        results: list[Metadata] = []
        if self.standard is not None:
            results.extend(self.standard.lookup_all_predefined_metadata(identifier, *kinds))

        for catalog in self._catalogs:
            for match in catalog.match_all(identifier, *kinds):
                results.append(self._complete(match, identifier, kinds))

        # Predefined definitions are usually in the full library too
        return _unique(results)

    def _first_match(self, identifier: str, kinds: tuple[DefinitionKind, ...]) -> CatalogMatch | None:
        for catalog in self._catalogs:
            match = catalog.match(identifier, *kinds)
            if match is not None:
                return match
        return None

    def _complete(self, match: CatalogMatch, identifier: str, kinds: tuple[DefinitionKind, ...]) -> Metadata:
        """Build the record returned to callers from a catalog match."""
        metadata = match.metadata
        if match.needs_type_derivation:
            changes: dict[str, Any] = {"sd_type": self._derive_sd_type(metadata, kinds)}
            if metadata.resource_type is None:
                changes["resource_type"] = self._instance_resource_type(metadata, identifier, kinds)
            metadata = metadata.with_changes(**changes)
        return self._with_url(metadata)

    def _with_url(self, metadata: Metadata) -> Metadata:
        """Synthesize the canonical URL of a non-inline record that has none."""
        if metadata.url or metadata.is_inline:
            return metadata
        if not self.canonical or metadata.resource_type is None or metadata.id is None:
            return metadata
        return metadata.with_changes(url=f"{self.canonical}/{metadata.resource_type}/{metadata.id}")

    def _instance_resource_type(self, metadata: Metadata, identifier: str, kinds: tuple[DefinitionKind, ...]) -> str | None:
        """Resource type of a source instance, taken from the type it is an instance of."""
        artifact = next(
            (
                a
                for a in self.source.lookup_all_definitions(identifier, *kinds)
                if a.id == metadata.id and a.name == metadata.name
            ),
            None,
        )
        if artifact is None or artifact.kind is not DefinitionKind.INSTANCE or not artifact.instance_of:
            return None
        # Instances are never instances of instances
        target = self.lookup_metadata(artifact.instance_of, *STRUCTURE_KINDS)
        return target.sd_type if target is not None else None

    def _derive_sd_type(self, metadata: Metadata, kinds: tuple[DefinitionKind, ...]) -> str | None:
        """Follow parent references until a definition with a known sd_type is reached."""
        history = [metadata]
        sd_type, parent = metadata.sd_type, metadata.parent
        while sd_type is None and parent is not None:
            parent = self.resolve_alias(parent)
            match = self._first_match(parent, kinds)
            if match is None:
                return None
            if any(_same_definition(seen, match.metadata) for seen in history):
                self._report_cycle(history, match, parent)
                return None
            history.append(match.metadata)
            sd_type, parent = match.metadata.sd_type, match.metadata.parent
        return sd_type

    def _report_cycle(self, history: list[Metadata], match: CatalogMatch, parent: str) -> None:
        offending = match.metadata
        chain = " < ".join(str(md.name) for md in [*history, offending])
        message = f"Circular dependency detected on parent relationships: {chain}"

        standard_meta = self._standard_lookalike(offending)
        if standard_meta is not None:
            message += (
                f"\n  If the parent {offending.name} is intended to refer to the standard definition,"
                f" use its URL: {standard_meta.url}"
            )

        source_info = None
        if match.origin is CatalogOrigin.SOURCE:
            artifact = self.source.lookup_definition(parent)
            source_info = artifact.source_info if artifact is not None else None
        logger.error(message, extra={"source_info": source_info})

    def _standard_lookalike(self, metadata: Metadata) -> Metadata | None:
        """A standard definition named or identified like the given record."""
        if self.standard is None:
            return None
        for identifier in (metadata.name, metadata.id):
            if identifier is not None:
                result = self.standard.lookup_metadata(identifier)
                if result is not None:
                    return result
        return None


def _same_definition(a: Metadata, b: Metadata) -> bool:
    """Definitions are identified by URL; only records that both lack one fall back to id and name."""
    if a.url is not None or b.url is not None:
        return a.url == b.url
    return a.id == b.id and a.name == b.name


def _unique(metadatas: list[Metadata]) -> list[Metadata]:
    unique: list[Metadata] = []
    for metadata in metadatas:
        if metadata not in unique:
            unique.append(metadata)
    return unique
