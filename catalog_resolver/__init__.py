"""Catalog Resolver

Resolves a name, id or canonical URL against the catalogs of a compiler run:
the output package, the author-written source definitions and the standard
library of pre-published definitions. Returns the raw definition or its
normalized metadata, with the structural type derived across catalogs.
"""

__version__ = "1.0.0"

from .catalogs import (
    Catalog,
    CatalogMatch,
    CatalogOrigin,
    OutputPackage,
    SourceArtifact,
    SourceCatalog,
    StandardCatalog,
)
from .config import CatalogConfig
from .diagnostics import DiagnosticCounter, SourceInfo
from .errors import CatalogLoadError, CatalogResolverError, UnknownDefinitionKindError
from .metadata import DefinitionKind, Metadata
from .resolver import Resolver

__all__ = [
    "Resolver",
    "Catalog",
    "CatalogMatch",
    "CatalogOrigin",
    "OutputPackage",
    "SourceArtifact",
    "SourceCatalog",
    "StandardCatalog",
    "CatalogConfig",
    "DefinitionKind",
    "Metadata",
    "SourceInfo",
    "DiagnosticCounter",
    "CatalogResolverError",
    "CatalogLoadError",
    "UnknownDefinitionKindError",
]
