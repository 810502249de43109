"""Service protocols for the engine's external collaborators.

The engine reads module templates from a library and prices from a price
list but owns neither. These protocols describe what it expects of them so
any storage (JSON files, a database, an in-memory dict) can be plugged in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from casework.domain.entities import ModuleTemplate
    from casework.domain.services.module_calculator import ModuleCalculation
    from casework.domain.value_objects import ModuleSizes


@runtime_checkable
class PriceProviderProtocol(Protocol):
    """Read-only price lookup by article.

    Example:
        ```python
        class FixedPrices:
            def price_for(self, article: str) -> float | None:
                return {"BLUM-71T3550": 4.5}.get(article)
        ```
    """

    def price_for(self, article: str) -> float | None:
        """Return the unit price of ``article`` or None when it is not listed."""
        ...


@runtime_checkable
class TemplateLibraryProtocol(Protocol):
    """Source of module templates."""

    def get(self, module_id: str) -> ModuleTemplate | None:
        """Return the template with ``module_id`` or None."""
        ...

    def all(self) -> list[ModuleTemplate]:
        """Return every template in library order."""
        ...


class ModuleCalculatorProtocol(Protocol):
    """Anything that can calculate a module template at given sizes."""

    def calculate(
        self,
        template: ModuleTemplate,
        sizes: ModuleSizes | None = None,
        include_optional: bool = True,
    ) -> ModuleCalculation:
        ...
