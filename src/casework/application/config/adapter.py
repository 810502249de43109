"""Adapter converting validated configuration schemas to domain objects.

The Pydantic schemas mirror the JSON files; the calculation engine works on
frozen domain dataclasses. These functions are the only place the two meet.

Example:
    >>> config = load_library(Path("kitchen.json"))
    >>> library = config_to_library(config)
    >>> calculation = ModuleCalculator().calculate(library.get("module_001"))
"""

from casework.application.config.schema import (
    CorpusSchema,
    FacadeSchema,
    FastenerSchema,
    HardwareSchema,
    LibraryConfiguration,
    ModuleSchema,
    OperationSchema,
    PartSchema,
    PriceListConfiguration,
    ProjectConfiguration,
    SizesSchema,
)
from casework.domain.entities import (
    FacadeSpec,
    FastenerSpec,
    HardwareSpec,
    ModuleTemplate,
    OperationSpec,
    PartSpec,
    Project,
    ProjectItem,
)
from casework.domain.services import DEFAULT_SHEET_STOCK
from casework.domain.value_objects import (
    BackWallSpec,
    CorpusSpec,
    EdgingSides,
    MaterialType,
    ModuleSizes,
    SheetStock,
    dimension_from_raw,
    quantity_from_raw,
)
from casework.infrastructure.library import InMemoryTemplateLibrary


def sizes_to_domain(sizes: SizesSchema) -> ModuleSizes:
    return ModuleSizes(width=sizes.width, height=sizes.height, depth=sizes.depth)


def _corpus(corpus: CorpusSchema) -> CorpusSpec:
    return CorpusSpec(
        material=corpus.material,
        thickness=corpus.thickness,
        back_wall=BackWallSpec(
            material=corpus.back_wall.material,
            thickness=corpus.back_wall.thickness,
        ),
    )


def _part(part: PartSchema) -> PartSpec:
    return PartSpec(
        name=part.name,
        length=dimension_from_raw(part.length),
        width=dimension_from_raw(part.width),
        quantity=part.quantity,
        material=part.material,
        edging=EdgingSides(
            top=part.edging.top,
            bottom=part.edging.bottom,
            left=part.edging.left,
            right=part.edging.right,
        ),
        edging_type=part.edging_type,
        optional=part.optional,
        is_shelf=part.is_shelf,
    )


def _facade(facade: FacadeSchema) -> FacadeSpec:
    return FacadeSpec(
        name=facade.name,
        width=dimension_from_raw(facade.width),
        height=dimension_from_raw(facade.height),
        quantity=facade.quantity,
        material=facade.material,
        edging_type=facade.edging_type,
        facade_type=facade.facade_type,
        optional=facade.optional,
    )


def _hardware(item: HardwareSchema) -> HardwareSpec:
    return HardwareSpec(
        name=item.name,
        article=item.article,
        quantity=quantity_from_raw(item.quantity, item.formula),
        unit=item.unit,
        category=item.category,
        price_per_unit=item.price_per_unit,
        optional=item.optional,
    )


def _fastener(item: FastenerSchema) -> FastenerSpec:
    return FastenerSpec(
        name=item.name,
        article=item.article,
        quantity=item.quantity,
        unit=item.unit,
        price_per_unit=item.price_per_unit,
    )


def _operation(item: OperationSchema) -> OperationSpec:
    return OperationSpec(
        id=item.id,
        name=item.name,
        unit=item.unit,
        price_per_unit=item.price_per_unit,
        quantity=item.quantity,
    )


def module_to_template(module: ModuleSchema) -> ModuleTemplate:
    """Convert one module schema to a ModuleTemplate.

    Raises:
        ValueError: If a dimension or quantity cannot be interpreted.
    """
    return ModuleTemplate(
        id=module.id,
        code=module.code,
        name=module.name,
        category=module.category,
        default_sizes=sizes_to_domain(module.default_sizes),
        corpus=_corpus(module.corpus),
        details=tuple(_part(p) for p in module.details),
        facades=tuple(_facade(f) for f in module.facades),
        hardware=tuple(_hardware(h) for h in module.hardware),
        fasteners=tuple(_fastener(f) for f in module.fasteners),
        operations=tuple(_operation(o) for o in module.operations),
        notes=module.notes,
    )


def config_to_templates(config: LibraryConfiguration) -> list[ModuleTemplate]:
    """Convert every module of a library configuration, in file order."""
    return [module_to_template(module) for module in config.modules]


def config_to_library(config: LibraryConfiguration) -> InMemoryTemplateLibrary:
    return InMemoryTemplateLibrary(config_to_templates(config))


def config_to_sheet_stock(config: LibraryConfiguration) -> dict[MaterialType, SheetStock]:
    """Sheet stock per material.

    Entries in the file replace the defaults for their material; materials
    the file does not mention keep the default stock.
    """
    stock = dict(DEFAULT_SHEET_STOCK)
    for entry in config.sheet_stock or []:
        stock[entry.material] = SheetStock(length=entry.length, width=entry.width)
    return stock


def config_to_project(config: ProjectConfiguration) -> Project:
    return Project(
        name=config.name,
        items=tuple(
            ProjectItem(
                module_id=item.module_id,
                sizes=sizes_to_domain(item.sizes) if item.sizes else None,
                quantity=item.quantity,
            )
            for item in config.modules
        ),
    )


def config_to_price_mapping(config: PriceListConfiguration) -> dict[str, float]:
    return config.as_mapping()
