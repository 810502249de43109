"""In-memory implementations of the template library and price list."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from casework.domain.entities import ModuleTemplate

__all__ = ["DictPriceList", "InMemoryTemplateLibrary"]


class InMemoryTemplateLibrary:
    """Module templates held in a dict keyed by template id."""

    def __init__(self, templates: Iterable[ModuleTemplate] = ()) -> None:
        self._templates: dict[str, ModuleTemplate] = {}
        for template in templates:
            if template.id in self._templates:
                raise ValueError(f"Duplicate module id: {template.id}")
            self._templates[template.id] = template

    def get(self, module_id: str) -> ModuleTemplate | None:
        return self._templates.get(module_id)

    def all(self) -> list[ModuleTemplate]:
        return list(self._templates.values())

    def find_by_code(self, code: str) -> ModuleTemplate | None:
        """Look a template up by its short code (case-insensitive)."""
        wanted = code.casefold()
        for template in self._templates.values():
            if template.code.casefold() == wanted:
                return template
        return None

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._templates


class DictPriceList:
    """Prices per article from a plain mapping."""

    def __init__(self, prices: Mapping[str, float] | None = None) -> None:
        self._prices = dict(prices or {})

    def price_for(self, article: str) -> float | None:
        return self._prices.get(article)

    def __len__(self) -> int:
        return len(self._prices)
