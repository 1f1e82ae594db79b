"""
The output package: definitions produced by the compiler during the current run.
"""

from __future__ import annotations

from typing import Any

from ..config import CatalogConfig
from .base import CatalogOrigin, JsonDefinitionCatalog


class OutputPackage(JsonDefinitionCatalog):
    """Definitions exported so far, with the package configuration."""

    origin = CatalogOrigin.PACKAGE

    def __init__(self, config: CatalogConfig | None = None, definitions: list[dict[str, Any]] | None = None):
        super().__init__(definitions)
        self.config = config or CatalogConfig()
