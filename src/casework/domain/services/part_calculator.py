"""Per-part area, edge-banding and cut calculations."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .dimension_resolver import DimensionResolver

if TYPE_CHECKING:
    from ..entities import FacadeSpec, PartSpec
    from ..value_objects import EdgingSides
    from .expression import Environment

__all__ = [
    "CUTS_PER_PART",
    "CalculatedFacade",
    "CalculatedPart",
    "PartCalculator",
    "edging_length",
]

# Every part is treated as a rectangle: four saw cuts each.
CUTS_PER_PART = 4


def edging_length(edging: EdgingSides, length: float, width: float) -> float:
    """Edge-banding length in mm for one piece.

    Top and bottom edges run along the width, left and right along the length.
    """
    total = 0.0
    if edging.top:
        total += width
    if edging.bottom:
        total += width
    if edging.left:
        total += length
    if edging.right:
        total += length
    return total


@dataclass(frozen=True)
class CalculatedPart:
    """A detail with its resolved dimensions and derived quantities.

    Attributes:
        spec: The template part.
        length: Resolved length in mm.
        width: Resolved width in mm.
        area_one: Area of one piece in m².
        area_total: area_one * quantity.
        edging_one: Edge banding of one piece in mm.
        edging_total: edging_one * quantity.
        cuts: Saw cuts for all pieces.
    """

    spec: PartSpec
    length: float
    width: float
    area_one: float
    area_total: float
    edging_one: float
    edging_total: float
    cuts: int

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def quantity(self) -> int:
        return self.spec.quantity


@dataclass(frozen=True)
class CalculatedFacade:
    """A facade with its resolved dimensions and derived quantities.

    Facades are banded all round, so the perimeter is their edging basis.
    """

    spec: FacadeSpec
    width: float
    height: float
    area_one: float
    area_total: float
    perimeter_one: float
    perimeter_total: float
    cuts: int

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def quantity(self) -> int:
        return self.spec.quantity


class PartCalculator:
    """Derives areas, edge lengths and cut counts for details and facades."""

    def __init__(self, resolver: DimensionResolver | None = None) -> None:
        self.resolver = resolver or DimensionResolver()

    def calculate_part(self, part: PartSpec, env: Environment) -> CalculatedPart:
        length, width = self.resolver.resolve(part, env)
        area_one = length * width / 1_000_000
        edging_one = edging_length(part.edging, length, width)
        return CalculatedPart(
            spec=part,
            length=length,
            width=width,
            area_one=area_one,
            area_total=area_one * part.quantity,
            edging_one=edging_one,
            edging_total=edging_one * part.quantity,
            cuts=CUTS_PER_PART * part.quantity,
        )

    def calculate_facade(self, facade: FacadeSpec, env: Environment) -> CalculatedFacade:
        width, height = self.resolver.resolve_facade(facade, env)
        area_one = width * height / 1_000_000
        perimeter_one = 2 * (width + height)
        return CalculatedFacade(
            spec=facade,
            width=width,
            height=height,
            area_one=area_one,
            area_total=area_one * facade.quantity,
            perimeter_one=perimeter_one,
            perimeter_total=perimeter_one * facade.quantity,
            cuts=CUTS_PER_PART * facade.quantity,
        )

    def calculate_details(
        self, parts: Iterable[PartSpec], env: Environment
    ) -> list[CalculatedPart]:
        return [self.calculate_part(part, env) for part in parts]

    def calculate_facades(
        self, facades: Iterable[FacadeSpec], env: Environment
    ) -> list[CalculatedFacade]:
        return [self.calculate_facade(facade, env) for facade in facades]
