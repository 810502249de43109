"""Material aggregation service."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from ..value_objects import MaterialType, SheetStock

if TYPE_CHECKING:
    from .part_calculator import CalculatedFacade, CalculatedPart

__all__ = [
    "DEFAULT_SHEET_STOCK",
    "DEFAULT_WASTE_FACTOR",
    "EdgingTotal",
    "MaterialAggregator",
    "MaterialBucket",
    "MaterialTotals",
    "sheets_required",
]

DEFAULT_WASTE_FACTOR = 0.10

DEFAULT_SHEET_STOCK: dict[MaterialType, SheetStock] = {
    MaterialType.LDSP: SheetStock(2750, 1830),  # 5.0325 m²
    MaterialType.HDF: SheetStock(2750, 1700),  # 4.675 m²
}


def sheets_required(area: float, sheet_area: float, waste_factor: float = DEFAULT_WASTE_FACTOR) -> int:
    """Smallest whole number of sheets covering ``area`` plus waste."""
    if sheet_area <= 0:
        raise ValueError("Sheet area must be positive")
    return math.ceil(area / sheet_area * (1 + waste_factor))


@dataclass(frozen=True)
class MaterialBucket:
    """Board area needed of one material.

    Attributes:
        material: Board material.
        area: Net area of all parts in m².
        sheet: Sheet stock the material is bought in, None if sold by area.
        waste_factor: Allowance added before rounding up to sheets.
        sheets: Sheets to buy, None without sheet stock.
        price: Cost filled in by the caller's pricing; 0 until priced.
    """

    material: MaterialType
    area: float
    sheet: SheetStock | None
    waste_factor: float
    sheets: int | None
    price: float = 0.0

    @property
    def sheet_area(self) -> float | None:
        return self.sheet.area if self.sheet is not None else None

    @property
    def description(self) -> str:
        """Human-readable description of material needs."""
        if self.sheet is None or self.sheets is None:
            return f"{self.material.value}: {self.area:.3f} m²"
        return (
            f"{self.material.value}: {self.area:.3f} m² "
            f"({self.sheets} sheets of {self.sheet.label}, "
            f"assuming {self.waste_factor:.0%} waste)"
        )


@dataclass(frozen=True)
class EdgingTotal:
    """Edge banding of one type, in metres."""

    edging_type: str
    length: float
    price: float = 0.0


@dataclass(frozen=True)
class MaterialTotals:
    """Materials of one calculated module."""

    buckets: dict[MaterialType, MaterialBucket]
    edging: dict[str, EdgingTotal]

    @property
    def edging_length(self) -> float:
        """Total edge banding of every type, in metres."""
        return sum(total.length for total in self.edging.values())

    @property
    def price(self) -> float:
        """Sum of the populated bucket and edging prices."""
        return sum(b.price for b in self.buckets.values()) + sum(
            e.price for e in self.edging.values()
        )

    def bucket(self, material: MaterialType) -> MaterialBucket | None:
        return self.buckets.get(material)

    def with_prices(
        self,
        bucket_prices: Mapping[MaterialType, float],
        edging_prices: Mapping[str, float],
    ) -> MaterialTotals:
        """Return a copy with the given prices filled in."""
        return MaterialTotals(
            buckets={
                m: replace(b, price=bucket_prices.get(m, b.price))
                for m, b in self.buckets.items()
            },
            edging={
                t: replace(e, price=edging_prices.get(t, e.price))
                for t, e in self.edging.items()
            },
        )


class MaterialAggregator:
    """Aggregates part areas per material and edge banding per type."""

    def __init__(
        self,
        sheet_stock: Mapping[MaterialType, SheetStock] | None = None,
        waste_factor: float = DEFAULT_WASTE_FACTOR,
    ) -> None:
        """Initialize with sheet stock per material and waste factor (default 10%)."""
        if waste_factor < 0:
            raise ValueError("Waste factor cannot be negative")
        self.sheet_stock = dict(DEFAULT_SHEET_STOCK if sheet_stock is None else sheet_stock)
        self.waste_factor = waste_factor

    def aggregate(
        self,
        details: Sequence[CalculatedPart],
        facades: Sequence[CalculatedFacade],
    ) -> MaterialTotals:
        """Sum areas by material and edging by type for one module."""
        areas: dict[MaterialType, float] = {}
        for detail in details:
            areas[detail.spec.material] = areas.get(detail.spec.material, 0.0) + detail.area_total
        for facade in facades:
            areas[facade.spec.material] = areas.get(facade.spec.material, 0.0) + facade.area_total

        edging_mm: dict[str, float] = {}
        for detail in details:
            if detail.edging_total > 0:
                key = detail.spec.edging_type
                edging_mm[key] = edging_mm.get(key, 0.0) + detail.edging_total
        for facade in facades:
            if facade.perimeter_total > 0:
                key = facade.spec.edging_type
                edging_mm[key] = edging_mm.get(key, 0.0) + facade.perimeter_total

        return MaterialTotals(
            buckets={material: self._bucket(material, area) for material, area in areas.items()},
            edging={
                edging_type: EdgingTotal(edging_type=edging_type, length=length / 1000)
                for edging_type, length in edging_mm.items()
            },
        )

    def _bucket(self, material: MaterialType, area: float) -> MaterialBucket:
        sheet = self.sheet_stock.get(material)
        return MaterialBucket(
            material=material,
            area=area,
            sheet=sheet,
            waste_factor=self.waste_factor,
            sheets=sheets_required(area, sheet.area, self.waste_factor) if sheet else None,
        )
