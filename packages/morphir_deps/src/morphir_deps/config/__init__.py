from morphir_deps.config.loader import (
    PROJECT_FILE_NAME,
    load_dependency_config,
    parse_dependency_config,
)
from morphir_deps.config.settings import Settings, load_settings

__all__ = [
    "PROJECT_FILE_NAME",
    "Settings",
    "load_dependency_config",
    "load_settings",
    "parse_dependency_config",
]
