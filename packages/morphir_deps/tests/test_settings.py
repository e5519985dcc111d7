import pytest
from morphir_deps.config import load_settings


def test_load_settings_defaults() -> None:
    settings = load_settings()
    assert settings.github_base_url == "https://raw.githubusercontent.com"
    assert settings.github_default_ref == "main"
    assert settings.github_default_path == "morphir-ir.json"
    assert settings.fetch_timeout == 30.0
    assert settings.strict_dependencies is False


def test_load_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MORPHIR_DEPS_GITHUB_BASE_URL", "https://ghe.example.com/raw/")
    monkeypatch.setenv("MORPHIR_DEPS_FETCH_TIMEOUT", "2.5")
    monkeypatch.setenv("MORPHIR_DEPS_STRICT", "TRUE")
    settings = load_settings()
    assert settings.github_base_url == "https://ghe.example.com/raw"
    assert settings.fetch_timeout == 2.5
    assert settings.strict_dependencies is True


@pytest.mark.parametrize("value", ["soon", "0", "-1"])
def test_invalid_timeout_is_rejected(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("MORPHIR_DEPS_FETCH_TIMEOUT", value)
    with pytest.raises(ValueError, match="MORPHIR_DEPS_FETCH_TIMEOUT"):
        load_settings()
