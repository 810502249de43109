"""Loading of module libraries, projects and price lists from JSON.

Every failure (missing file, unreadable file, malformed JSON, schema
violation) is raised as ConfigError. Its ``error_type`` tells callers which
of these happened, and ``details`` carries one dict per problem so the CLI
and the REST API can report each offending field by its JSON path.
"""

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from casework.application.config.schema import (
    LibraryConfiguration,
    ModuleSchema,
    PriceListConfiguration,
    ProjectConfiguration,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a Pydantic error location as a JSON path.

    Examples:
        >>> _format_json_path(("modules", 0, "details", 2, "length"))
        'modules[0].details[2].length'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path


class ConfigError(Exception):
    """A configuration file or payload could not be used.

    Attributes:
        message: Human readable summary, also the exception text.
        error_type: file_not_found, permission_denied, file_read_error,
            json_parse or validation.
        path: Source file, None for in-memory data.
        details: Per-problem dicts. Validation details carry path, message,
            value and error_type; JSON details carry line, column, message.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_validation(cls, error: PydanticValidationError, path: Path | None = None) -> "ConfigError":
        details = [
            {
                "path": _format_json_path(item["loc"]),
                "message": item["msg"],
                "value": item.get("input"),
                "error_type": item["type"],
            }
            for item in error.errors()
        ]
        source = f" in {path}" if path else ""
        lines = [f"Invalid configuration{source}:"]
        for detail in details:
            value = detail["value"]
            shown = "" if value is None or isinstance(value, (dict, list)) else f" (got {value!r})"
            lines.append(f"  - {detail['path']}: {detail['message']}{shown}")
        return cls("\n".join(lines), "validation", path, details)

    @classmethod
    def from_json(cls, error: json.JSONDecodeError, path: Path) -> "ConfigError":
        return cls(
            f"{path} is not valid JSON: {error.msg} at line {error.lineno}, column {error.colno}",
            "json_parse",
            path,
            [{"line": error.lineno, "column": error.colno, "message": error.msg}],
        )


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"No such file: {path}", "file_not_found", path) from None
    except PermissionError:
        raise ConfigError(f"Not allowed to read {path}", "permission_denied", path) from None
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}", "file_read_error", path) from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError.from_json(e, path) from None


def _validate(model: type[ModelT], data: Any, path: Path | None = None) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError.from_validation(e, path) from None


def _wrap_list(data: Any, key: str) -> Any:
    # Libraries and price lists may be written as a bare JSON array.
    return {key: data} if isinstance(data, list) else data


def load_library(path: Path) -> LibraryConfiguration:
    """Load a module library file.

    The file holds either a library object with ``modules`` or a bare array
    of module objects.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    return _validate(LibraryConfiguration, _wrap_list(_read_json(path), "modules"), path)


def load_library_from_dict(data: dict[str, Any] | list[Any]) -> LibraryConfiguration:
    return _validate(LibraryConfiguration, _wrap_list(data, "modules"))


def load_project(path: Path) -> ProjectConfiguration:
    return _validate(ProjectConfiguration, _read_json(path), path)


def load_project_from_dict(data: dict[str, Any]) -> ProjectConfiguration:
    return _validate(ProjectConfiguration, data)


def load_prices(path: Path) -> PriceListConfiguration:
    """Load a price list file, either ``{"prices": [...]}`` or a bare array."""
    return _validate(PriceListConfiguration, _wrap_list(_read_json(path), "prices"), path)


def load_prices_from_dict(data: dict[str, Any] | list[Any]) -> PriceListConfiguration:
    return _validate(PriceListConfiguration, _wrap_list(data, "prices"))


def load_module_from_dict(data: dict[str, Any]) -> ModuleSchema:
    """Validate a single module object, such as one posted to the REST API."""
    return _validate(ModuleSchema, data)
