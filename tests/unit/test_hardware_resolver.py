"""Unit tests for hardware quantity resolution and aggregate counts."""

import pytest

from casework.domain.entities import (
    FacadeSpec,
    FastenerSpec,
    HardwareSpec,
    ModuleTemplate,
    PartSpec,
)
from casework.domain.errors import HardwareQuantityError, UnknownVariableError
from casework.domain.services import (
    HardwareResolver,
    PartCalculator,
    ShelfMatcher,
    aggregate_variables,
    base_environment,
)
from casework.domain.value_objects import (
    FacadeType,
    FixedDimension,
    FixedQuantity,
    FormulaQuantity,
)


def _calculated(template: ModuleTemplate):
    env = base_environment(template.default_sizes, template.corpus)
    calculator = PartCalculator()
    return (
        env,
        calculator.calculate_details(template.details, env),
        calculator.calculate_facades(template.facades, env),
    )


class TestShelfMatcher:
    """Shelf recognition by explicit flag or by name."""

    @pytest.mark.parametrize("name", ["Shelf", "top shelf", "SHELF 2", "Полка", "полка нижняя"])
    def test_name_match(self, name: str) -> None:
        part = PartSpec(name, FixedDimension(1), FixedDimension(1))
        assert ShelfMatcher().is_shelf(part)

    def test_non_shelf(self) -> None:
        part = PartSpec("sidewall", FixedDimension(1), FixedDimension(1))
        assert not ShelfMatcher().is_shelf(part)

    def test_explicit_flag_wins(self) -> None:
        named = PartSpec("Shelf", FixedDimension(1), FixedDimension(1), is_shelf=False)
        flagged = PartSpec("divider", FixedDimension(1), FixedDimension(1), is_shelf=True)
        assert not ShelfMatcher().is_shelf(named)
        assert ShelfMatcher().is_shelf(flagged)

    def test_custom_keywords(self) -> None:
        part = PartSpec("Boden", FixedDimension(1), FixedDimension(1))
        assert ShelfMatcher(keywords=("boden",)).is_shelf(part)


class TestAggregateVariables:
    def test_counts_entries(self, base_template: ModuleTemplate) -> None:
        # the sidewall entry has quantity 2 but counts once
        _, details, facades = _calculated(base_template)
        counts = aggregate_variables(details, facades)
        assert counts == {
            "facades.count": 1,
            "facades.door.count": 1,
            "facades.drawer.count": 0,
            "details.count": 4,
            "shelves.count": 1,
        }

    def test_quantity_does_not_multiply_counts(self) -> None:
        template = ModuleTemplate(
            id="d",
            code="D",
            name="Drawers",
            details=(PartSpec("shelf", FixedDimension(400), FixedDimension(300), quantity=3),),
            facades=(
                FacadeSpec("front", FixedDimension(400), FixedDimension(200), quantity=3,
                           facade_type=FacadeType.DRAWER),
                FacadeSpec("door", FixedDimension(400), FixedDimension(600), quantity=2),
            ),
        )
        _, details, facades = _calculated(template)
        counts = aggregate_variables(details, facades)
        assert counts == {
            "facades.count": 2,
            "facades.door.count": 1,
            "facades.drawer.count": 1,
            "details.count": 1,
            "shelves.count": 1,
        }

    def test_hinges_follow_door_entries(self) -> None:
        template = ModuleTemplate(
            id="w",
            code="W",
            name="Wall",
            details=(PartSpec("side", FixedDimension(700), FixedDimension(300), quantity=2),),
            facades=(FacadeSpec("door", FixedDimension(400), FixedDimension(700), quantity=2),),
        )
        env, details, facades = _calculated(template)
        specs = [
            HardwareSpec("Hinge", "H1", FormulaQuantity("facades.door.count * 2")),
            HardwareSpec("Dowel", "D1", FormulaQuantity("details.count")),
        ]
        resolved = HardwareResolver().resolve_all(specs, env, details, facades)
        assert {h.article: h.quantity for h in resolved} == {"H1": 2, "D1": 1}


class TestHardwareResolver:
    def test_formula_quantity(self, base_template: ModuleTemplate) -> None:
        env, details, facades = _calculated(base_template)
        hardware = HardwareResolver().resolve_all(base_template.hardware, env, details, facades)
        by_article = {h.article: h for h in hardware}

        assert by_article["HNG"].quantity == 2
        assert by_article["HNG"].cost == pytest.approx(6.0)
        assert by_article["HDL"].quantity == 1
        assert by_article["HDL"].cost == pytest.approx(5.0)

    def test_base_variables_are_available(self, base_template: ModuleTemplate) -> None:
        env, details, facades = _calculated(base_template)
        resolver = HardwareResolver()
        hardware_env = resolver.hardware_environment(env, details, facades)
        spec = HardwareSpec("Rail", "RL", quantity=FormulaQuantity("width / 100"))
        assert resolver.resolve(spec, hardware_env).quantity == 6

    def test_negative_quantity_raises(self, base_template: ModuleTemplate) -> None:
        env, details, facades = _calculated(base_template)
        resolver = HardwareResolver()
        spec = HardwareSpec("Bad", "BAD", quantity=FormulaQuantity("details.count - 10"))
        with pytest.raises(HardwareQuantityError) as exc_info:
            resolver.resolve(spec, resolver.hardware_environment(env, details, facades))
        assert exc_info.value.article == "BAD"

    def test_unknown_variable_propagates(self, base_template: ModuleTemplate) -> None:
        env, details, facades = _calculated(base_template)
        spec = HardwareSpec("Hinge", "HNG", quantity=FormulaQuantity("doors * 2"))
        with pytest.raises(UnknownVariableError):
            HardwareResolver().resolve_all([spec], env, details, facades)

    def test_fixed_quantity_zero(self, base_template: ModuleTemplate) -> None:
        env, details, facades = _calculated(base_template)
        spec = HardwareSpec("Spare", "SP", quantity=FixedQuantity(0), price_per_unit=9)
        result = HardwareResolver().resolve_all([spec], env, details, facades)[0]
        assert result.quantity == 0
        assert result.cost == 0

    def test_fasteners(self) -> None:
        fasteners = HardwareResolver().resolve_fasteners(
            [FastenerSpec("Confirmat", "CNF", quantity=16, price_per_unit=0.05)]
        )
        assert fasteners[0].quantity == 16
        assert fasteners[0].cost == pytest.approx(0.8)
