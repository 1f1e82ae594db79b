"""
Load catalogs from disk.

Standard and package catalogs are directories of JSON definitions (Bundles
are expanded into their entries). The source catalog is read from a JSON
project manifest::

    {
      "config": {"canonical": "http://example.org", "fhirVersion": ["4.0.1"]},
      "aliases": {"$sct": "http://snomed.info/sct"},
      "definitions": [
        {"kind": "Profile", "name": "MyPatient", "parent": "Patient", "file": "profiles.fsh", "line": 3},
        {"kind": "Instance", "name": "Bob", "instanceOf": "MyPatient", "usage": "Example"}
      ]
    }
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from .catalogs import OutputPackage, SourceArtifact, SourceCatalog, StandardCatalog
from .config import CatalogConfig
from .diagnostics import SourceInfo
from .errors import CatalogLoadError, UnknownDefinitionKindError
from .metadata import DefinitionKind

logger = logging.getLogger(__name__)


def read_json(path: str | Path) -> Any:
    """Read a JSON file, raising CatalogLoadError on failure."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise CatalogLoadError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Invalid JSON in {path}: {e}") from e


def iter_definitions(directory: str | Path) -> Iterator[dict[str, Any]]:
    """Yield every definition in a directory of JSON files, in file name order."""
    directory = Path(directory)
    if not directory.is_dir():
        raise CatalogLoadError(f"Not a directory: {directory}")

    for path in sorted(directory.glob("*.json")):
        content = read_json(path)
        if not isinstance(content, dict) or "resourceType" not in content:
            logger.debug("Skipping %s: not a definition", path)
            continue
        if content["resourceType"] == "Bundle":
            for entry in content.get("entry", []):
                resource = entry.get("resource")
                if isinstance(resource, dict):
                    yield resource
        else:
            yield content


def load_standard_catalog(directories: Iterable[str | Path], predefined_directories: Iterable[str | Path] = ()) -> StandardCatalog:
    """Build a StandardCatalog from definition directories."""
    catalog = StandardCatalog()
    for directory in directories:
        for definition in iter_definitions(directory):
            catalog.add(definition)
    for directory in predefined_directories:
        for definition in iter_definitions(directory):
            catalog.add_predefined(definition)
    logger.debug("Loaded %d standard and %d predefined definitions", len(catalog), catalog.predefined_count)
    return catalog


def load_output_package(directory: str | Path, config: CatalogConfig | None = None) -> OutputPackage:
    """Build an OutputPackage from a directory of exported definitions."""
    return OutputPackage(config, list(iter_definitions(directory)))


def load_source_catalog(path: str | Path) -> SourceCatalog:
    """Build a SourceCatalog from a project manifest."""
    manifest = read_json(path)
    if not isinstance(manifest, dict):
        raise CatalogLoadError(f"{path}: manifest must be a JSON object")

    catalog = SourceCatalog(CatalogConfig.from_dict(manifest.get("config", {})))
    for alias, target in manifest.get("aliases", {}).items():
        catalog.add_alias(alias, target)
    for index, entry in enumerate(manifest.get("definitions", [])):
        catalog.add(_artifact_from_dict(entry, f"{path}: definitions[{index}]"))
    return catalog


def _artifact_from_dict(entry: dict[str, Any], where: str) -> SourceArtifact:
    if "kind" not in entry or "name" not in entry:
        raise CatalogLoadError(f"{where}: 'kind' and 'name' are required")
    try:
        kind = DefinitionKind.parse(entry["kind"])
    except UnknownDefinitionKindError as e:
        raise CatalogLoadError(f"{where}: {e}") from e

    source_info = None
    if "file" in entry:
        source_info = SourceInfo(entry["file"], entry.get("line"), entry.get("endLine"))

    return SourceArtifact(
        kind=kind,
        name=entry["name"],
        id=entry.get("id"),
        parent=entry.get("parent"),
        instance_of=entry.get("instanceOf"),
        usage=entry.get("usage"),
        source_info=source_info,
    )
