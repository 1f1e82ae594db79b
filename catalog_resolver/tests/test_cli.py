#!/usr/bin/env python3

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from catalog_resolver.cli import catalog_resolver, render_metadata
from catalog_resolver.metadata import Metadata

TEST_DATA = Path(__file__).parent / "test_data"
STANDARD = ["--standard", str(TEST_DATA / "standard")]
PREDEFINED = ["--predefined", str(TEST_DATA / "predefined")]
SOURCE = ["--source", str(TEST_DATA / "project.json")]
PACKAGE = ["--package", str(TEST_DATA / "package")]


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("catalog_resolver")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def run(*args):
    return CliRunner().invoke(catalog_resolver, list(args))


def report_lines(output):
    return [line.split() for line in output.splitlines()]


class TestRenderMetadata:
    """Test cases for the metadata report"""

    def test_unset_fields_are_omitted(self):
        text = render_metadata([Metadata(id="a", name="A", sd_type="Patient")])
        assert report_lines(text) == [["A"], ["id", "a"], ["sdType", "Patient"]]

    def test_records_are_separated(self):
        text = render_metadata([Metadata(id="a"), Metadata(id="b")])
        assert text.splitlines() == ["a", "  id             a", "", "b", "  id             b"]


class TestCli:
    """Test cases for the catalog_resolver command"""

    def test_source_profile_metadata(self):
        result = run("MyPatient", *STANDARD, *SOURCE)
        assert result.exit_code == 0
        lines = report_lines(result.output)
        assert ["sdType", "Patient"] in lines
        assert ["url", "http://example.org/StructureDefinition/my-patient"] in lines

    def test_instance_url_is_synthesized(self):
        result = run("PatientExample", *STANDARD, *SOURCE)
        assert result.exit_code == 0
        lines = report_lines(result.output)
        assert ["resourceType", "Patient"] in lines
        assert ["url", "http://example.org/Patient/123"] in lines

    def test_raw_definition(self):
        result = run("Patient", "--raw", *STANDARD)
        assert result.exit_code == 0
        assert json.loads(result.output)["url"] == "http://hl7.org/fhir/StructureDefinition/Patient"

    def test_raw_source_definition_is_not_found(self):
        result = run("MyPatient", "--raw", *STANDARD, *SOURCE)
        assert result.exit_code == 1
        assert "MyPatient: not found" in result.output

    def test_package_definition(self):
        result = run("ExportedProfile", *STANDARD, *SOURCE, *PACKAGE)
        assert result.exit_code == 0
        assert ["sdType", "Patient"] in report_lines(result.output)

    def test_all_matches_are_deduplicated(self):
        result = run("AdministrativeGender", "--all", *STANDARD, *PREDEFINED)
        assert result.exit_code == 0
        urls = [line[1] for line in report_lines(result.output) if line and line[0] == "url"]
        assert urls == ["http://hl7.org/fhir/ValueSet/administrative-gender", "http://hl7.org/fhir/administrative-gender"]

    def test_kind_filter(self):
        result = run("AdministrativeGender", "--kind", "CodeSystem", *STANDARD)
        assert result.exit_code == 0
        assert "http://hl7.org/fhir/administrative-gender" in result.output
        assert "ValueSet/administrative-gender" not in result.output

    def test_alias(self):
        result = run("$gender", *STANDARD, *SOURCE)
        assert result.exit_code == 0
        assert ["resourceType", "ValueSet"] in report_lines(result.output)

    def test_unknown_kind(self):
        result = run("Patient", "--kind", "Widget", *STANDARD)
        assert result.exit_code == 2
        assert "Unknown definition kind" in result.output

    def test_cycle_fails_the_run(self):
        result = run("LoopA", *STANDARD, *SOURCE)
        assert result.exit_code == 1
        assert "Circular dependency detected on parent relationships: LoopA < LoopB < LoopA" in result.output
        assert "File: input/fsh/loops.fsh:1" in result.output

    def test_not_found(self):
        result = run("Nope", *STANDARD)
        assert result.exit_code == 1
        assert "Nope: not found" in result.output

    def test_bad_manifest(self):
        result = run("Thing", *STANDARD, "--source", str(TEST_DATA / "bad_project.json"))
        assert result.exit_code == 1
        assert "Widget" in result.output


if __name__ == "__main__":
    pytest.main([__file__])
