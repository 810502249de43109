"""Output formatters and exporters for module and project calculations."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from casework.application.dtos import CatalogEntry, LibraryValidationOutput
    from casework.domain.services import (
        ArticleTotal,
        CalculatedFacade,
        CalculatedHardware,
        CalculatedPart,
        MaterialTotals,
        ModuleCalculation,
        ModuleCosts,
        ProjectCalculation,
    )


class PartListFormatter:
    """Formats the calculated details and facades of a module as a table."""

    def format(
        self,
        details: tuple[CalculatedPart, ...],
        facades: tuple[CalculatedFacade, ...] = (),
    ) -> str:
        if not details and not facades:
            return "No parts."

        lines = [
            "PARTS",
            "=" * 78,
            f"{'Part':<24} {'Material':<9} {'Length':>8} {'Width':>8} {'Qty':>4} "
            f"{'Area m²':>9} {'Edge mm':>10}",
            "-" * 78,
        ]
        for part in details:
            lines.append(
                f"{part.name:<24} {part.spec.material.value:<9} {part.length:>8.1f} "
                f"{part.width:>8.1f} {part.quantity:>4} {part.area_total:>9.3f} "
                f"{part.edging_total:>10.1f}"
            )
        for facade in facades:
            lines.append(
                f"{facade.spec.name:<24} {facade.spec.material.value:<9} "
                f"{facade.height:>8.1f} {facade.width:>8.1f} {facade.spec.quantity:>4} "
                f"{facade.area_total:>9.3f} {facade.perimeter_total:>10.1f}"
            )
        total_area = sum(p.area_total for p in details) + sum(f.area_total for f in facades)
        lines.append("-" * 78)
        lines.append(f"{'TOTAL':<24} {'':<9} {'':>8} {'':>8} {'':>4} {total_area:>9.3f}")
        return "\n".join(lines)


class MaterialReportFormatter:
    """Formats board and edge banding needs."""

    def format(self, materials: MaterialTotals) -> str:
        lines = [
            "MATERIALS",
            "=" * 60,
        ]
        for bucket in materials.buckets.values():
            line = f"  {bucket.description}"
            if bucket.price:
                line += f"  {bucket.price:.2f}"
            lines.append(line)
        if materials.edging:
            lines.append("")
            lines.append("EDGE BANDING")
            for edging in materials.edging.values():
                line = f"  {edging.edging_type}: {edging.length:.2f} m"
                if edging.price:
                    line += f"  {edging.price:.2f}"
                lines.append(line)
        return "\n".join(lines)


class HardwareReportFormatter:
    """Formats resolved hardware with quantities and costs."""

    def format(self, hardware: tuple[CalculatedHardware, ...], title: str = "HARDWARE") -> str:
        lines = [
            title,
            "=" * 60,
        ]
        if not hardware:
            lines.append("No hardware required.")
            return "\n".join(lines)

        lines.append(f"{'Item':<28} {'Article':<12} {'Qty':>7} {'Cost':>9}")
        lines.append("-" * 60)
        for item in hardware:
            lines.append(
                f"{item.name:<28} {item.article:<12} {item.quantity:>7g} {item.cost:>9.2f}"
            )
        return "\n".join(lines)


class ModuleReportFormatter:
    """Formats a full module calculation as a plain-text report."""

    def __init__(self) -> None:
        self._parts = PartListFormatter()
        self._materials = MaterialReportFormatter()
        self._hardware = HardwareReportFormatter()

    def format(self, calculation: ModuleCalculation) -> str:
        template = calculation.template
        sizes = calculation.sizes
        sections = [
            f"{template.code} {template.name} ({template.id})\n"
            f"Sizes: {sizes.width:g} x {sizes.height:g} x {sizes.depth:g} mm",
            self._parts.format(calculation.details, calculation.facades),
            self._materials.format(calculation.materials),
            self._hardware.format(calculation.hardware),
        ]
        if calculation.fasteners:
            lines = ["FASTENERS", "=" * 60]
            for fastener in calculation.fasteners:
                lines.append(
                    f"  {fastener.name:<30} {fastener.quantity:>7g} {fastener.cost:>9.2f}"
                )
            sections.append("\n".join(lines))
        if calculation.operations:
            lines = ["OPERATIONS", "=" * 60]
            for operation in calculation.operations:
                lines.append(
                    f"  {operation.id:<18} {operation.quantity:>10.2f} {operation.spec.unit:<5} "
                    f"{operation.cost:>9.2f}"
                )
            sections.append("\n".join(lines))
        sections.append(_format_costs(calculation.costs))
        return "\n\n".join(sections)


def _format_costs(costs: ModuleCosts) -> str:
    return "\n".join(
        [
            "COSTS",
            "=" * 60,
            f"  {'Materials':<20} {costs.materials:>12.2f}",
            f"  {'Hardware':<20} {costs.hardware:>12.2f}",
            f"  {'Fasteners':<20} {costs.fasteners:>12.2f}",
            f"  {'Operations':<20} {costs.operations:>12.2f}",
            "-" * 60,
            f"  {'TOTAL':<20} {costs.total:>12.2f}",
        ]
    )


class ProjectReportFormatter:
    """Formats a project calculation: instances, merged totals and warnings."""

    def format(self, project: ProjectCalculation) -> str:
        lines = [
            f"PROJECT: {project.name}",
            "=" * 60,
        ]
        for instance in project.instances:
            sizes = instance.sizes
            lines.append(
                f"  {instance.template.code:<8} {instance.template.name:<30} "
                f"{sizes.width:g}x{sizes.height:g}x{sizes.depth:g} x{instance.quantity}"
            )
        totals = project.totals

        lines.extend(["", "MATERIALS", "-" * 60])
        for material in totals.materials.values():
            sheets = f"{material.sheets} sheets" if material.sheets is not None else ""
            lines.append(
                f"  {material.material.value:<10} {material.area:>9.3f} m² {sheets:<12} "
                f"{material.price:>9.2f}"
            )
        for edging in totals.edging.values():
            lines.append(f"  {edging.edging_type:<10} {edging.length:>9.2f} m  {edging.price:>21.2f}")

        if totals.hardware:
            lines.extend(["", "HARDWARE", "-" * 60])
            for article in totals.hardware.values():
                lines.append(
                    f"  {article.name:<28} {article.article:<12} {article.quantity:>7g} "
                    f"{article.cost:>9.2f}"
                )
        if totals.fasteners:
            lines.extend(["", "FASTENERS", "-" * 60])
            for article in totals.fasteners.values():
                lines.append(
                    f"  {article.name:<28} {article.article:<12} {article.quantity:>7g} "
                    f"{article.cost:>9.2f}"
                )
        if totals.operations:
            lines.extend(["", "OPERATIONS", "-" * 60])
            for operation in totals.operations.values():
                lines.append(
                    f"  {operation.id:<18} {operation.quantity:>10.2f} {operation.unit:<5} "
                    f"{operation.cost:>9.2f}"
                )

        lines.extend(["", _format_costs(totals.costs)])
        if project.warnings:
            lines.extend(["", "WARNINGS"])
            for warning in project.warnings:
                lines.append(f"  ! {warning.message}")
        return "\n".join(lines)


class CatalogFormatter:
    """Formats catalog entries as a price table."""

    def format(self, entries: list[CatalogEntry]) -> str:
        lines = [
            "CATALOG",
            "=" * 60,
            f"{'Code':<8} {'Name':<34} {'Total':>12}",
            "-" * 60,
        ]
        for entry in entries:
            total = f"{entry.total:>12.2f}" if entry.ok else f"{'ERROR':>12}"
            lines.append(f"{entry.code:<8} {entry.name:<34} {total}")
            if not entry.ok:
                lines.append(f"    {entry.error}")
        return "\n".join(lines)


class ValidationReportFormatter:
    """Formats library formula validation results."""

    def format(self, output: LibraryValidationOutput) -> str:
        if output.is_valid:
            return f"All formulas valid ({len(output.results)} modules checked)."
        lines = [f"{output.error_count} formula error(s):"]
        for module_id, result in output.results.items():
            for issue in result.errors:
                lines.append(f"  {module_id}: {issue.path}: {issue.message}")
        return "\n".join(lines)


class JsonExporter:
    """Exports calculations as JSON-compatible dicts and strings."""

    def module_to_dict(self, calculation: ModuleCalculation) -> dict[str, Any]:
        template = calculation.template
        return {
            "module_id": template.id,
            "code": template.code,
            "name": template.name,
            "category": template.category.value,
            "sizes": {
                "width": calculation.sizes.width,
                "height": calculation.sizes.height,
                "depth": calculation.sizes.depth,
            },
            "details": [
                {
                    "name": part.name,
                    "material": part.spec.material.value,
                    "length": part.length,
                    "width": part.width,
                    "quantity": part.quantity,
                    "area_one": part.area_one,
                    "area_total": part.area_total,
                    "edging_one": part.edging_one,
                    "edging_total": part.edging_total,
                    "cuts": part.cuts,
                }
                for part in calculation.details
            ],
            "facades": [
                {
                    "name": facade.spec.name,
                    "type": facade.spec.facade_type.value,
                    "material": facade.spec.material.value,
                    "width": facade.width,
                    "height": facade.height,
                    "quantity": facade.spec.quantity,
                    "area_total": facade.area_total,
                    "perimeter_total": facade.perimeter_total,
                }
                for facade in calculation.facades
            ],
            "hardware": [
                {
                    "article": item.article,
                    "name": item.name,
                    "unit": item.spec.unit,
                    "quantity": item.quantity,
                    "price_per_unit": item.price_per_unit,
                    "cost": item.cost,
                }
                for item in calculation.hardware
            ],
            "fasteners": [
                {
                    "article": item.article,
                    "name": item.name,
                    "unit": item.spec.unit,
                    "quantity": item.quantity,
                    "price_per_unit": item.price_per_unit,
                    "cost": item.cost,
                }
                for item in calculation.fasteners
            ],
            "materials": [
                {
                    "material": bucket.material.value,
                    "area": bucket.area,
                    "sheets": bucket.sheets,
                    "price": bucket.price,
                }
                for bucket in calculation.materials.buckets.values()
            ],
            "edging": [
                {"edging_type": e.edging_type, "length": e.length, "price": e.price}
                for e in calculation.materials.edging.values()
            ],
            "operations": [
                {
                    "id": op.id,
                    "unit": op.spec.unit,
                    "quantity": op.quantity,
                    "price_per_unit": op.price_per_unit,
                    "cost": op.cost,
                }
                for op in calculation.operations
            ],
            "costs": _costs_to_dict(calculation.costs),
        }

    def project_to_dict(self, project: ProjectCalculation) -> dict[str, Any]:
        totals = project.totals
        return {
            "name": project.name,
            "instances": [
                {
                    "module_id": instance.module_id,
                    "quantity": instance.quantity,
                    "sizes": {
                        "width": instance.sizes.width,
                        "height": instance.sizes.height,
                        "depth": instance.sizes.depth,
                    },
                    "total": instance.calculation.costs.total,
                }
                for instance in project.instances
            ],
            "materials": [
                {"material": m.material.value, "area": m.area, "sheets": m.sheets, "price": m.price}
                for m in totals.materials.values()
            ],
            "edging": [
                {"edging_type": e.edging_type, "length": e.length, "price": e.price}
                for e in totals.edging.values()
            ],
            "hardware": [_article_to_dict(a) for a in totals.hardware.values()],
            "fasteners": [_article_to_dict(a) for a in totals.fasteners.values()],
            "operations": [
                {"id": op.id, "unit": op.unit, "quantity": op.quantity, "cost": op.cost}
                for op in totals.operations.values()
            ],
            "costs": _costs_to_dict(totals.costs),
            "warnings": [
                {"message": w.message, "module_id": w.module_id} for w in project.warnings
            ],
        }

    def export_module(self, calculation: ModuleCalculation) -> str:
        return json.dumps(self.module_to_dict(calculation), indent=2, ensure_ascii=False)

    def export_project(self, project: ProjectCalculation) -> str:
        return json.dumps(self.project_to_dict(project), indent=2, ensure_ascii=False)


def _article_to_dict(article: ArticleTotal) -> dict[str, Any]:
    return {
        "article": article.article,
        "name": article.name,
        "unit": article.unit,
        "quantity": article.quantity,
        "cost": article.cost,
    }


def _costs_to_dict(costs: ModuleCosts) -> dict[str, float]:
    return {
        "materials": costs.materials,
        "hardware": costs.hardware,
        "fasteners": costs.fasteners,
        "operations": costs.operations,
        "total": costs.total,
    }
