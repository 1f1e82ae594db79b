"""
Catalogs the resolver composes.

- OutputPackage: definitions produced during the current run
- SourceCatalog: definitions still in author-written source form
- StandardCatalog: the immutable library of pre-published definitions
"""

from __future__ import annotations

from .base import Catalog, CatalogMatch, CatalogOrigin, JsonDefinitionCatalog
from .package import OutputPackage
from .source import SourceArtifact, SourceCatalog
from .standard import StandardCatalog

__all__ = [
    "Catalog",
    "CatalogMatch",
    "CatalogOrigin",
    "JsonDefinitionCatalog",
    "OutputPackage",
    "SourceArtifact",
    "SourceCatalog",
    "StandardCatalog",
]
