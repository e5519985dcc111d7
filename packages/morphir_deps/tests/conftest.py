from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

_SETTINGS_ENV = (
    "MORPHIR_DEPS_GITHUB_BASE_URL",
    "MORPHIR_DEPS_GITHUB_DEFAULT_REF",
    "MORPHIR_DEPS_GITHUB_DEFAULT_PATH",
    "MORPHIR_DEPS_FETCH_TIMEOUT",
    "MORPHIR_DEPS_STRICT",
)


@pytest.fixture(autouse=True)
def _clear_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
