"""Read the dependency keys out of a project configuration file."""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from morphir_deps.errors import DependencyValidationError, DocumentDecodeError
from morphir_deps.models.dependencies import DependencyConfig

logger = logging.getLogger(__name__)

PROJECT_FILE_NAME = "morphir.json"


def _load_raw(path: Path) -> dict[str, Any]:
    """Load JSON or TOML file, return empty dict if not found."""
    if not path.exists():
        logger.info("Project file %s not found, using empty dependency config", path)
        return {}
    if path.suffix == ".toml":
        with path.open("rb") as file:
            try:
                return tomllib.load(file)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Project file {path} is not valid TOML: {exc}"
                raise DocumentDecodeError(msg, str(path), exc) from exc
    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except json.JSONDecodeError as exc:
        msg = f"Project file {path} is not valid JSON: {exc}"
        raise DocumentDecodeError(msg, str(path), exc) from exc
    if not isinstance(data, dict):
        msg = f"Project file {path} must contain an object"
        raise DependencyValidationError(msg, data)
    return data


def parse_dependency_config(data: dict[str, Any]) -> DependencyConfig:
    """Validate the ``dependencies``/``localDependencies``/``includes`` keys."""
    try:
        return DependencyConfig.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid dependency configuration: {exc}"
        raise DependencyValidationError(msg, data) from exc


def load_dependency_config(path: str | Path) -> DependencyConfig:
    """Load the dependency configuration from a project file or directory."""
    config_path = Path(path)
    if config_path.is_dir():
        config_path = config_path / PROJECT_FILE_NAME
    return parse_dependency_config(_load_raw(config_path))
