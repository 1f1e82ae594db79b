#!/usr/bin/env python3

from pathlib import Path

import pytest

from catalog_resolver.diagnostics import SourceInfo
from catalog_resolver.errors import CatalogLoadError
from catalog_resolver.loader import (
    iter_definitions,
    load_output_package,
    load_source_catalog,
    load_standard_catalog,
    read_json,
)
from catalog_resolver.metadata import DefinitionKind

TEST_DATA = Path(__file__).parent / "test_data"

class TestLoader:
    """Test cases for loading catalogs from disk"""

    def test_bundles_are_expanded(self):
        definitions = list(iter_definitions(TEST_DATA / "standard"))
        resource_types = sorted(d["resourceType"] for d in definitions)
        assert resource_types == ["CodeSystem", "StructureDefinition", "StructureDefinition", "ValueSet"]

    def test_load_standard_catalog(self):
        catalog = load_standard_catalog([TEST_DATA / "standard"], [TEST_DATA / "predefined"])
        assert len(catalog) == 4
        assert catalog.predefined_count == 1
        assert catalog.lookup_metadata("AdministrativeGender", DefinitionKind.CODE_SYSTEM).url == (
            "http://hl7.org/fhir/administrative-gender"
        )

    def test_load_output_package(self):
        package = load_output_package(TEST_DATA / "package")
        assert package.lookup_metadata("ExportedProfile").sd_type == "Patient"

    def test_load_source_catalog(self):
        catalog = load_source_catalog(TEST_DATA / "project.json")
        assert catalog.config.canonical == "http://example.org"
        assert catalog.config.fhir_version == ["4.0.1"]
        assert catalog.resolve_alias("$gender") == "http://hl7.org/fhir/ValueSet/administrative-gender"

        artifact = catalog.lookup_definition("my-patient")
        assert artifact.kind is DefinitionKind.PROFILE
        assert artifact.source_info == SourceInfo("input/fsh/profiles.fsh", 1, 5)
        assert str(artifact.source_info) == "input/fsh/profiles.fsh:1-5"

        instance = catalog.lookup_definition("PatientExample")
        assert instance.id == "123"
        assert instance.instance_of == "my-patient"

    def test_unknown_kind(self):
        with pytest.raises(CatalogLoadError, match="Widget"):
            load_source_catalog(TEST_DATA / "bad_project.json")

    def test_invalid_json(self):
        with pytest.raises(CatalogLoadError, match="Invalid JSON"):
            read_json(TEST_DATA / "broken.json")

    def test_missing_directory(self):
        with pytest.raises(CatalogLoadError, match="Not a directory"):
            list(iter_definitions(TEST_DATA / "missing"))

    def test_missing_name(self, tmp_path):
        manifest = tmp_path / "project.json"
        manifest.write_text('{"definitions": [{"kind": "Profile"}]}')
        with pytest.raises(CatalogLoadError, match="required"):
            load_source_catalog(manifest)

    def test_extra_keys_are_ignored(self, tmp_path):
        manifest = tmp_path / "project.json"
        manifest.write_text('{"definitions": [{"kind": "Profile", "name": "MyPatient", "title": "My Patient", "parent": "Patient"}]}')
        artifact = load_source_catalog(manifest).lookup_definition("MyPatient")
        assert artifact.parent == "Patient"
        assert not hasattr(artifact, "title")


if __name__ == "__main__":
    pytest.main([__file__])
