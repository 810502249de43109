"""Bundled sample files: a module library, a project and a price list.

The files live in the ``data`` package and are read with importlib.resources.
Each one has a kind, so callers can pick "the library" or "the price list"
without knowing its name, and a starter set (one file of every kind) can be
copied into a directory in one go.
"""

import json
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from casework.application.config.loader import load_library_from_dict
from casework.application.config.schema import LibraryConfiguration

LIBRARY = "library"
PROJECT = "project"
PRICES = "prices"

TEMPLATE_KINDS: tuple[str, ...] = (LIBRARY, PROJECT, PRICES)


class TemplateNotFoundError(Exception):
    """Raised when a requested template does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template not found: {name}")


@dataclass(frozen=True)
class TemplateInfo:
    """A bundled template file.

    Attributes:
        name: Template name, also the data file's stem.
        kind: One of TEMPLATE_KINDS.
        description: One-line summary for listings.
    """

    name: str
    kind: str
    description: str

    @property
    def filename(self) -> str:
        return f"{self.name}.json"


TEMPLATES: tuple[TemplateInfo, ...] = (
    TemplateInfo("kitchen-basic", LIBRARY, "Module library with base, drawer and wall cabinets"),
    TemplateInfo("kitchen-project", PROJECT, "Sample project placing modules of kitchen-basic"),
    TemplateInfo("price-list", PRICES, "Sample price list for the kitchen-basic articles"),
)

# File names written by TemplateManager.init_starter, per kind.
STARTER_FILENAMES: dict[str, str] = {
    LIBRARY: "library.json",
    PROJECT: "project.json",
    PRICES: "prices.json",
}


class TemplateManager:
    """Access to the bundled template files.

    Example:
        manager = TemplateManager()
        for info in manager.list_templates(kind="library"):
            print(info.name, info.description)

        manager.init_starter(Path("my-kitchen"))
    """

    DATA_PACKAGE = "casework.application.templates.data"

    def __init__(self, templates: tuple[TemplateInfo, ...] = TEMPLATES) -> None:
        self._templates = {info.name: info for info in templates}

    def list_templates(self, kind: str | None = None) -> list[TemplateInfo]:
        """Bundled templates in declaration order, optionally of one kind."""
        return [info for info in self._templates.values() if kind is None or info.kind == kind]

    def info(self, name: str) -> TemplateInfo:
        try:
            return self._templates[name]
        except KeyError:
            raise TemplateNotFoundError(name) from None

    def template_exists(self, name: str) -> bool:
        return name in self._templates

    def get_template(self, name: str) -> str:
        """Raw JSON text of a template.

        Raises:
            TemplateNotFoundError: If the template does not exist.
        """
        info = self.info(name)
        try:
            return resources.files(self.DATA_PACKAGE).joinpath(info.filename).read_text(
                encoding="utf-8"
            )
        except FileNotFoundError as e:
            raise TemplateNotFoundError(name) from e

    def load_library(self, name: str) -> LibraryConfiguration:
        """Parse and validate a bundled module library.

        Raises:
            TemplateNotFoundError: If the template does not exist.
            ConfigError: If the bundled file is not a valid library.
        """
        return load_library_from_dict(json.loads(self.get_template(name)))

    def init_template(self, name: str, output_path: Path, overwrite: bool = False) -> Path:
        """Write a template to ``output_path`` and return the path.

        Raises:
            TemplateNotFoundError: If the template does not exist.
            FileExistsError: If the output file exists and overwrite is False.
        """
        content = self.get_template(name)
        if output_path.exists() and not overwrite:
            raise FileExistsError(f"File already exists: {output_path}")
        output_path.write_text(content, encoding="utf-8")
        return output_path

    def init_starter(self, directory: Path, overwrite: bool = False) -> list[Path]:
        """Write the first template of every kind into ``directory``.

        Nothing is written when any target exists and overwrite is False.

        Raises:
            FileExistsError: If a target file exists and overwrite is False.
        """
        plan: list[tuple[TemplateInfo, Path]] = []
        for kind in TEMPLATE_KINDS:
            candidates = self.list_templates(kind)
            if candidates:
                plan.append((candidates[0], directory / STARTER_FILENAMES[kind]))

        if not overwrite:
            for _, target in plan:
                if target.exists():
                    raise FileExistsError(f"File already exists: {target}")

        directory.mkdir(parents=True, exist_ok=True)
        return [self.init_template(info.name, target, overwrite=True) for info, target in plan]
