"""
Configuration shared by the source catalog and the output package.

Mirrors the project configuration a compiler run is started with: the
canonical URL base new definitions are published under and the structural
versions the run targets.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Keys accepted in camelCase form (as written in project files)
_KEY_ALIASES = {
    "fhirVersion": "fhir_version",
}


@dataclass
class CatalogConfig:
    """Configuration options for a catalog."""

    # Canonical URL base, e.g. "http://example.org"
    canonical: str = ""

    # Structural versions targeted by the run (first entry is preferred)
    fhir_version: list[str] = field(default_factory=list)

    # Package identity
    name: str = ""
    version: str = ""

    @staticmethod
    def from_dict(d: dict) -> CatalogConfig:
        """Create a config from a dictionary."""
        config = CatalogConfig()
        for k, v in d.items():
            k = _KEY_ALIASES.get(k, k)
            if k == "fhir_version" and isinstance(v, str):
                v = [v]
            if hasattr(config, k):
                setattr(config, k, v)
        # Canonical URLs are joined with "/", never end with one
        config.canonical = config.canonical.rstrip("/")
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "canonical": self.canonical,
            "fhir_version": self.fhir_version,
            "name": self.name,
            "version": self.version,
        }
