"""Integration tests for the casework CLI.

This module runs the `module`, `project`, `catalog`, `validate` and
`templates` commands end-to-end using the Typer CliRunner against the
bundled sample files.
"""

import json
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from casework.cli.main import app

runner = CliRunner()


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def broken_library_file(tmp_path: Path) -> Path:
    return _write(
        tmp_path / "broken.json",
        {
            "modules": [
                {
                    "id": "bad",
                    "code": "BAD",
                    "name": "Broken module",
                    "details": [{"name": "Plinth", "length": "width - foo", "width": 100}],
                }
            ]
        },
    )


class TestModuleCommand:
    """Test suite for the 'module' command."""

    def test_text_report(self, library_file: Path) -> None:
        result = runner.invoke(app, ["module", str(library_file), "module_001"])

        assert result.exit_code == 0
        assert "N1D Base cabinet, 1 door (module_001)" in result.output
        assert "Sizes: 600 x 890 x 560 mm" in result.output
        assert "COSTS" in result.output

    def test_json_output(self, library_file: Path) -> None:
        result = runner.invoke(app, ["module", str(library_file), "module_001", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["module_id"] == "module_001"
        assert [h["article"] for h in data["hardware"]] == ["HNG-110", "HDL-128", "SUP-5", "LEG-100"]
        assert data["hardware"][0]["quantity"] == 2
        assert data["costs"]["materials"] == 0

    def test_lookup_by_code(self, library_file: Path) -> None:
        result = runner.invoke(app, ["module", str(library_file), "n3y", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["module_id"] == "module_002"

    def test_size_override(self, library_file: Path) -> None:
        result = runner.invoke(
            app, ["module", str(library_file), "module_001", "--width", "450", "-f", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["sizes"] == {"width": 450, "height": 890, "depth": 560}
        bottom = next(d for d in data["details"] if d["name"] == "Bottom")
        assert bottom["length"] == 412

    def test_exclude_optional(self, library_file: Path) -> None:
        result = runner.invoke(
            app, ["module", str(library_file), "module_003", "--exclude-optional", "-f", "json"]
        )

        assert result.exit_code == 0
        articles = [h["article"] for h in json.loads(result.stdout)["hardware"]]
        assert "DMP-LIFT" not in articles

    def test_prices_fill_material_cost(self, library_file: Path, prices_file: Path) -> None:
        result = runner.invoke(
            app,
            ["module", str(library_file), "module_001", "--prices", str(prices_file), "-f", "json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["costs"]["materials"] > 0
        hinge = data["hardware"][0]
        assert hinge["price_per_unit"] == 3.4

    def test_write_to_file(self, library_file: Path, tmp_path: Path) -> None:
        output = tmp_path / "report.json"
        result = runner.invoke(
            app, ["module", str(library_file), "module_001", "-f", "json", "-o", str(output)]
        )

        assert result.exit_code == 0
        assert f"Written: {output}" in result.output
        assert json.loads(output.read_text(encoding="utf-8"))["code"] == "N1D"

    def test_unknown_module(self, library_file: Path) -> None:
        result = runner.invoke(app, ["module", str(library_file), "module_999"])

        assert result.exit_code == 1
        assert "Module not found: module_999" in result.output

    def test_unknown_format(self, library_file: Path) -> None:
        result = runner.invoke(app, ["module", str(library_file), "module_001", "-f", "xml"])

        assert result.exit_code == 1
        assert "Unknown format" in result.output

    def test_non_positive_size(self, library_file: Path) -> None:
        result = runner.invoke(app, ["module", str(library_file), "module_001", "--depth", "0"])

        assert result.exit_code == 1
        assert "Depth must be positive" in result.output

    def test_formula_error(self, broken_library_file: Path) -> None:
        result = runner.invoke(app, ["module", str(broken_library_file), "bad"])

        assert result.exit_code == 1
        assert "Plinth" in result.output
        assert "foo" in result.output

    def test_missing_library(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["module", str(tmp_path / "nope.json"), "module_001"])

        assert result.exit_code == 1
        assert "File not found" in result.output


class TestProjectCommand:
    """Test suite for the 'project' command."""

    def test_text_report(self, project_file: Path, library_file: Path) -> None:
        result = runner.invoke(app, ["project", str(project_file), "--library", str(library_file)])

        assert result.exit_code == 0
        assert "PROJECT: Sample kitchen" in result.output
        assert "WARNINGS" not in result.output

    def test_json_output(self, project_file: Path, library_file: Path, prices_file: Path) -> None:
        result = runner.invoke(
            app,
            [
                "project", str(project_file),
                "-l", str(library_file),
                "-p", str(prices_file),
                "-f", "json",
            ],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["name"] == "Sample kitchen"
        assert len(data["instances"]) == 4
        assert data["instances"][1]["sizes"]["width"] == 450
        assert data["warnings"] == []
        hinges = next(h for h in data["hardware"] if h["article"] == "HNG-110")
        # 2 per base cabinet (3 placements), 4 per wall cabinet (3 placements)
        assert hinges["quantity"] == 18
        assert data["costs"]["materials"] > 0

    def test_missing_module_warns(self, tmp_path: Path, library_file: Path) -> None:
        project_file = _write(
            tmp_path / "project.json",
            {"name": "Partial", "modules": [{"moduleId": "module_001"}, {"moduleId": "ghost"}]},
        )
        result = runner.invoke(app, ["project", str(project_file), "-l", str(library_file)])

        assert result.exit_code == 0
        assert "Warning: Module template not found: ghost" in result.output

    def test_invalid_project(self, tmp_path: Path, library_file: Path) -> None:
        project_file = _write(tmp_path / "project.json", {"modules": [{"quantity": 1}]})
        result = runner.invoke(app, ["project", str(project_file), "-l", str(library_file)])

        assert result.exit_code == 1
        assert "modules[0].moduleId" in result.output


class TestCatalogCommand:
    def test_lists_every_module(self, library_file: Path) -> None:
        result = runner.invoke(app, ["catalog", str(library_file)])

        assert result.exit_code == 0
        for code in ("N1D", "N3Y", "V2D"):
            assert code in result.output

    def test_failed_module_sets_exit_code(self, broken_library_file: Path) -> None:
        result = runner.invoke(app, ["catalog", str(broken_library_file), "--workers", "1"])

        assert result.exit_code == 1
        assert "ERROR" in result.output


class TestValidateCommand:
    """Test suite for the 'validate' command."""

    def test_valid_library(self, library_file: Path) -> None:
        result = runner.invoke(app, ["validate", str(library_file)])

        assert result.exit_code == 0
        assert "All formulas valid (3 modules checked)." in result.output

    def test_unknown_variable(self, broken_library_file: Path) -> None:
        result = runner.invoke(app, ["validate", str(broken_library_file)])

        assert result.exit_code == 1
        assert "bad: details[0].length: Unknown variable: foo" in result.output

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{ not json", encoding="utf-8")
        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output

    def test_schema_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "lib.json", {"modules": [{"id": "m1", "name": "No code"}]})
        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "modules[0].code" in result.output


class TestTemplatesCommands:
    """Test suite for the 'templates' command group."""

    def test_list(self) -> None:
        result = runner.invoke(app, ["templates", "list"])

        assert result.exit_code == 0
        assert "Available templates:" in result.output
        assert "kitchen-basic" in result.output
        assert "casework templates init" in result.output

    def test_init_default_name(self, tmp_path: Path) -> None:
        original_cwd = os.getcwd()
        try:
            os.chdir(tmp_path)
            result = runner.invoke(app, ["templates", "init", "price-list"])

            assert result.exit_code == 0
            assert "Created: price-list.json" in result.output
            assert (tmp_path / "price-list.json").exists()
        finally:
            os.chdir(original_cwd)

    def test_init_refuses_overwrite(self, tmp_path: Path) -> None:
        output = tmp_path / "kitchen.json"
        output.write_text("{}", encoding="utf-8")
        result = runner.invoke(app, ["templates", "init", "kitchen-basic", "-o", str(output)])

        assert result.exit_code == 1
        assert "File already exists" in result.output

        result = runner.invoke(app, ["templates", "init", "kitchen-basic", "-o", str(output), "--force"])
        assert result.exit_code == 0

    def test_init_unknown_template(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["templates", "init", "garage", "-o", str(tmp_path / "x.json")])

        assert result.exit_code == 1
        assert "Template not found: garage" in result.output

    def test_list_by_kind(self) -> None:
        result = runner.invoke(app, ["templates", "list", "--kind", "prices"])

        assert result.exit_code == 0
        assert "price-list" in result.output
        assert "kitchen-basic" not in result.output

    def test_list_unknown_kind(self) -> None:
        result = runner.invoke(app, ["templates", "list", "--kind", "drawings"])

        assert result.exit_code == 1
        assert "No templates of kind 'drawings'" in result.output

    def test_starter_files_calculate(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["templates", "starter", str(tmp_path)])

        assert result.exit_code == 0
        assert result.output.count("Created:") == 3

        result = runner.invoke(
            app,
            [
                "project", str(tmp_path / "project.json"),
                "--library", str(tmp_path / "library.json"),
                "--prices", str(tmp_path / "prices.json"),
            ],
        )
        assert result.exit_code == 0

    def test_starter_refuses_overwrite(self, tmp_path: Path) -> None:
        (tmp_path / "library.json").write_text("{}", encoding="utf-8")

        result = runner.invoke(app, ["templates", "starter", str(tmp_path)])

        assert result.exit_code == 1
        assert "File already exists" in result.output
        assert not (tmp_path / "project.json").exists()
