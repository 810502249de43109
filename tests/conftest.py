"""Pytest configuration and shared fixtures for estimator tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from casework.application.templates import TemplateManager
from casework.domain.entities import (
    FacadeSpec,
    FastenerSpec,
    HardwareSpec,
    ModuleTemplate,
    OperationSpec,
    PartSpec,
)
from casework.domain.value_objects import (
    EdgingSides,
    FixedQuantity,
    FormulaDimension,
    FormulaQuantity,
    HardwareCategory,
    MaterialType,
    ModuleSizes,
)
from casework.infrastructure import InMemoryTemplateLibrary


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Module templates
# =============================================================================


def sidewall_part() -> PartSpec:
    return PartSpec(
        name="sidewall",
        length=FormulaDimension("height"),
        width=FormulaDimension("depth"),
        quantity=2,
        edging=EdgingSides(top=True, bottom=True, left=True, right=False),
    )


@pytest.fixture
def sidewall_template() -> ModuleTemplate:
    """600x890x560 module, 19 mm corpus, with only the two side panels."""
    return ModuleTemplate(
        id="sidewall_only",
        code="SW",
        name="Side panels",
        default_sizes=ModuleSizes(600, 890, 560),
        details=(sidewall_part(),),
    )


@pytest.fixture
def base_template() -> ModuleTemplate:
    """A one-door base cabinet exercising every part of the pipeline.

    At the default 600x890x560 sizes it resolves to:
    sidewall 890x560 (x2), bottom 562x560, shelf 562x540, back 885x595 (HDF),
    door 597x855 (MDF).
    """
    return ModuleTemplate(
        id="base_600",
        code="N1D",
        name="Base cabinet, 1 door",
        default_sizes=ModuleSizes(600, 890, 560),
        details=(
            sidewall_part(),
            PartSpec(
                name="bottom",
                length=FormulaDimension("width - (thickness * 2)"),
                width=FormulaDimension("depth"),
                edging=EdgingSides(top=True),
            ),
            PartSpec(
                name="Shelf",
                length=FormulaDimension("width - (thickness * 2)"),
                width=FormulaDimension("depth - 20"),
                edging=EdgingSides(top=True),
            ),
            PartSpec(
                name="back",
                length=FormulaDimension("height - 5"),
                width=FormulaDimension("width - 5"),
                material=MaterialType.HDF,
            ),
        ),
        facades=(
            FacadeSpec(
                name="door",
                width=FormulaDimension("width - 3"),
                height=FormulaDimension("height - 35"),
            ),
        ),
        hardware=(
            HardwareSpec(
                name="Hinge",
                article="HNG",
                quantity=FormulaQuantity("facades.door.count * 2"),
                category=HardwareCategory.HINGE,
                price_per_unit=3.0,
            ),
            HardwareSpec(
                name="Handle",
                article="HDL",
                quantity=FixedQuantity(1),
                category=HardwareCategory.HANDLE,
                price_per_unit=5.0,
            ),
            HardwareSpec(
                name="Damper",
                article="DMP",
                quantity=FixedQuantity(1),
                price_per_unit=10.0,
                optional=True,
            ),
        ),
        fasteners=(FastenerSpec(name="Confirmat", article="CNF", quantity=16, price_per_unit=0.05),),
        operations=(
            OperationSpec(id="cutting", unit="cut", price_per_unit=0.5),
            OperationSpec(id="edging", unit="m", price_per_unit=1.0),
            OperationSpec(id="assembly", price_per_unit=15.0),
        ),
    )


@pytest.fixture
def library(base_template: ModuleTemplate, sidewall_template: ModuleTemplate) -> InMemoryTemplateLibrary:
    return InMemoryTemplateLibrary([base_template, sidewall_template])


# =============================================================================
# Bundled JSON files
# =============================================================================


@pytest.fixture
def kitchen_library_data() -> dict:
    return json.loads(TemplateManager().get_template("kitchen-basic"))


@pytest.fixture
def library_file(tmp_path: Path) -> Path:
    path = tmp_path / "library.json"
    TemplateManager().init_template("kitchen-basic", path)
    return path


@pytest.fixture
def project_file(tmp_path: Path) -> Path:
    path = tmp_path / "project.json"
    TemplateManager().init_template("kitchen-project", path)
    return path


@pytest.fixture
def prices_file(tmp_path: Path) -> Path:
    path = tmp_path / "prices.json"
    TemplateManager().init_template("price-list", path)
    return path
