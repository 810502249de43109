"""Unit tests for text reports and the JSON exporter."""

import json
from dataclasses import replace

import pytest

from casework.application import CatalogEntry, LibraryValidationOutput
from casework.domain.entities import Project, ProjectItem
from casework.domain.services import (
    FormulaIssue,
    FormulaValidationResult,
    ModuleCalculator,
    ProjectAggregator,
)
from casework.infrastructure import (
    CatalogFormatter,
    JsonExporter,
    ModuleReportFormatter,
    PartListFormatter,
    ProjectReportFormatter,
    ValidationReportFormatter,
)


@pytest.fixture
def calculation(base_template):
    return ModuleCalculator().calculate(base_template)


@pytest.fixture
def project_calculation(library):
    project = Project("Kitchen", (ProjectItem("base_600", quantity=2), ProjectItem("ghost")))
    return ProjectAggregator().calculate(project, library)


class TestTextReports:
    def test_module_report_sections(self, calculation) -> None:
        report = ModuleReportFormatter().format(calculation)

        assert report.startswith("N1D Base cabinet, 1 door (base_600)")
        assert "Sizes: 600 x 890 x 560 mm" in report
        for section in ("PARTS", "MATERIALS", "HARDWARE", "FASTENERS", "OPERATIONS", "COSTS"):
            assert section in report
        assert "54.82" in report

    def test_empty_part_list(self) -> None:
        assert PartListFormatter().format(()) == "No parts."

    def test_project_report_lists_warnings(self, project_calculation) -> None:
        report = ProjectReportFormatter().format(project_calculation)
        assert report.startswith("PROJECT: Kitchen")
        assert "x2" in report
        assert "WARNINGS" in report
        assert "ghost" in report

    def test_catalog(self) -> None:
        entries = [
            CatalogEntry("m1", "N1D", "Base", total=120.5),
            CatalogEntry("m2", "BRK", "Broken", error="Unknown variable 'foo'"),
        ]
        report = CatalogFormatter().format(entries)
        assert "120.50" in report
        assert "ERROR" in report
        assert "Unknown variable 'foo'" in report


class TestValidationReportFormatter:
    def test_all_valid(self) -> None:
        output = LibraryValidationOutput({"m1": FormulaValidationResult()})
        assert ValidationReportFormatter().format(output) == "All formulas valid (1 modules checked)."

    def test_errors(self) -> None:
        issue = FormulaIssue("details[0].length", "width - foo", "Unknown variable: foo")
        output = LibraryValidationOutput({"m1": FormulaValidationResult((issue,))})
        assert ValidationReportFormatter().format(output).splitlines() == [
            "1 formula error(s):",
            "  m1: details[0].length: Unknown variable: foo",
        ]


class TestJsonExporter:
    def test_module_export(self, calculation) -> None:
        data = json.loads(JsonExporter().export_module(calculation))

        assert data["module_id"] == "base_600"
        assert data["sizes"] == {"width": 600, "height": 890, "depth": 560}
        assert [d["name"] for d in data["details"]] == ["sidewall", "bottom", "Shelf", "back"]
        assert data["facades"][0]["type"] == "door"
        assert data["hardware"][0] == {
            "article": "HNG",
            "name": "Hinge",
            "unit": "pcs",
            "quantity": 2,
            "price_per_unit": 3.0,
            "cost": 6.0,
        }
        assert data["costs"]["total"] == pytest.approx(54.82)

    def test_project_export(self, project_calculation) -> None:
        data = JsonExporter().project_to_dict(project_calculation)

        assert data["name"] == "Kitchen"
        assert data["instances"][0]["quantity"] == 2
        assert data["warnings"] == [
            {"message": "Module template not found: ghost", "module_id": "ghost"}
        ]
        assert {h["article"] for h in data["hardware"]} == {"HNG", "HDL", "DMP"}

    def test_non_ascii_names_kept(self, base_template) -> None:
        renamed = replace(base_template, name="Тумба")
        output = JsonExporter().export_module(ModuleCalculator().calculate(renamed))
        assert "Тумба" in output
