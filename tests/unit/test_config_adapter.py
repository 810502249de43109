"""Unit tests for configuration adapter functions.

These tests verify:
- module_to_template converts numbers and formulas to dimension variants
- Hardware formulas win over literal quantities
- config_to_sheet_stock merges file entries over the defaults
- Projects and price lists convert to their domain forms
"""

from casework.application.config import (
    config_to_library,
    config_to_price_mapping,
    config_to_project,
    config_to_sheet_stock,
    config_to_templates,
    load_library_from_dict,
    load_module_from_dict,
    load_prices_from_dict,
    load_project_from_dict,
    module_to_template,
)
from casework.domain.services import DEFAULT_SHEET_STOCK, ModuleCalculator
from casework.domain.value_objects import (
    EdgingSides,
    FixedDimension,
    FixedQuantity,
    FormulaDimension,
    FormulaQuantity,
    MaterialType,
    ModuleSizes,
    SheetStock,
)


class TestModuleToTemplate:
    """Tests for module_to_template."""

    def test_dimensions(self) -> None:
        """Numbers and numeric strings become fixed, other strings formulas."""
        module = load_module_from_dict(
            {
                "id": "m1",
                "code": "C",
                "name": "Module",
                "details": [
                    {"name": "Rail", "length": "width - 38", "width": "100"},
                    {"name": "Side", "length": 890, "width": "depth",
                     "edging": {"top": 1, "bottom": 0, "left": 0, "right": 0}},
                ],
            }
        )
        template = module_to_template(module)

        rail, side = template.details
        assert rail.length == FormulaDimension("width - 38")
        assert rail.width == FixedDimension(100)
        assert side.length == FixedDimension(890)
        assert side.edging == EdgingSides(top=True)

    def test_hardware_quantities(self) -> None:
        """A formula takes precedence over the literal quantity."""
        module = load_module_from_dict(
            {
                "id": "m1",
                "code": "C",
                "name": "Module",
                "hardware": [
                    {"name": "Hinge", "article": "H", "quantity": 3, "formula": "facades.count * 2"},
                    {"name": "Leg", "article": "L", "quantity": 4},
                    {"name": "Support", "article": "S", "quantity": "shelves.count * 4"},
                ],
            }
        )
        hinge, leg, support = module_to_template(module).hardware

        assert hinge.quantity == FormulaQuantity("facades.count * 2")
        assert leg.quantity == FixedQuantity(4)
        assert support.quantity == FormulaQuantity("shelves.count * 4")

    def test_corpus_and_sizes(self) -> None:
        module = load_module_from_dict(
            {
                "id": "m1",
                "code": "C",
                "name": "Module",
                "defaultSizes": {"width": 800, "height": 720, "depth": 300},
                "corpus": {"thickness": 16, "backWall": {"material": "LDSP", "thickness": 8}},
            }
        )
        template = module_to_template(module)

        assert template.default_sizes == ModuleSizes(800, 720, 300)
        assert template.corpus.thickness == 16
        assert template.corpus.back_wall.material == MaterialType.LDSP

    def test_bundled_library_calculates(self, kitchen_library_data: dict) -> None:
        """Every bundled module converts and calculates at default sizes."""
        templates = config_to_templates(load_library_from_dict(kitchen_library_data))
        calculator = ModuleCalculator()

        for template in templates:
            calculation = calculator.calculate(template)
            assert calculation.costs.total > 0

    def test_library_preserves_order(self, kitchen_library_data: dict) -> None:
        library = config_to_library(load_library_from_dict(kitchen_library_data))
        assert [t.id for t in library.all()] == ["module_001", "module_002", "module_003"]
        assert library.find_by_code("N3Y").id == "module_002"


class TestSheetStock:
    def test_defaults_without_entries(self) -> None:
        config = load_library_from_dict({"modules": []})
        assert config_to_sheet_stock(config) == dict(DEFAULT_SHEET_STOCK)

    def test_entry_overrides_default(self) -> None:
        config = load_library_from_dict(
            {"sheet_stock": [{"material": "LDSP", "length": 2800, "width": 2070}], "modules": []}
        )
        stock = config_to_sheet_stock(config)
        assert stock[MaterialType.LDSP] == SheetStock(2800, 2070)
        assert stock[MaterialType.HDF] == DEFAULT_SHEET_STOCK[MaterialType.HDF]


class TestProjectAndPrices:
    def test_config_to_project(self) -> None:
        config = load_project_from_dict(
            {
                "name": "Kitchen",
                "modules": [
                    {"moduleId": "m1", "quantity": 2},
                    {"moduleId": "m2", "sizes": {"width": 450, "height": 890, "depth": 560}},
                ],
            }
        )
        project = config_to_project(config)

        assert project.name == "Kitchen"
        assert project.items[0].module_id == "m1"
        assert project.items[0].sizes is None
        assert project.items[0].quantity == 2
        assert project.items[1].sizes == ModuleSizes(450, 890, 560)

    def test_config_to_price_mapping(self) -> None:
        config = load_prices_from_dict({"prices": [{"article": "LDSP", "price": 48}]})
        assert config_to_price_mapping(config) == {"LDSP": 48}
