import pytest
from morphir_deps.classification.validators import (
    parse_github_shorthand,
    validate_absolute_url,
    validate_data_url,
    validate_file_url,
    validate_github_config,
    validate_http_url,
)
from morphir_deps.errors import DependencyValidationError
from morphir_deps.models import GithubReference


def test_validate_file_url_parses_components() -> None:
    url = validate_file_url("  file:///tmp/deps/a%20b.json ")
    assert url.scheme == "file"
    assert url.host == ""
    assert url.path == "/tmp/deps/a%20b.json"
    assert str(url.to_path()) == "/tmp/deps/a b.json"


@pytest.mark.parametrize("value", ["https://example.com/a.json", "./a.json", "", "data:,x"])
def test_validate_file_url_rejects_other_shapes(value: str) -> None:
    with pytest.raises(DependencyValidationError, match="Not a valid file url"):
        validate_file_url(value)


def test_validate_data_url_error_message() -> None:
    with pytest.raises(DependencyValidationError, match="Not a valid data url") as excinfo:
        validate_data_url("application/json,{}")
    assert excinfo.value.value == "application/json,{}"


def test_validate_absolute_url() -> None:
    assert validate_absolute_url("ftp://example.com/x").startswith("ftp://example.com")
    with pytest.raises(DependencyValidationError):
        validate_absolute_url("relative/path.json")


def test_validate_http_url_requires_http_scheme() -> None:
    assert validate_http_url("https://example.com/ir.json") == "https://example.com/ir.json"
    with pytest.raises(DependencyValidationError, match="Not a valid http url"):
        validate_http_url("file:///tmp/ir.json")


def test_validate_github_config_structured() -> None:
    config = validate_github_config(
        {"owner": "finos", "repo": "morphir-examples", "baseUrl": "https://ghe.example.com"}
    )
    assert isinstance(config, GithubReference)
    assert config.owner == "finos"
    assert config.base_url == "https://ghe.example.com"


def test_validate_github_config_shorthand_is_kept_opaque() -> None:
    assert validate_github_config(" finos/morphir ") == "finos/morphir"


@pytest.mark.parametrize("value", [{"owner": "finos"}, {"owner": "", "repo": "x"}, "  ", 42])
def test_validate_github_config_rejects_bad_shapes(value: object) -> None:
    with pytest.raises(DependencyValidationError):
        validate_github_config(value)


def test_parse_github_shorthand_full_form() -> None:
    reference = parse_github_shorthand("github:finos/morphir-examples/apps/ir.json@v1.2")
    assert reference.owner == "finos"
    assert reference.repo == "morphir-examples"
    assert reference.path == "apps/ir.json"
    assert reference.ref == "v1.2"


def test_parse_github_shorthand_minimal_form() -> None:
    reference = parse_github_shorthand("finos/morphir.git")
    assert reference.repo == "morphir"
    assert reference.ref is None
    assert reference.path is None


@pytest.mark.parametrize("value", ["finos", "github:", "finos/morphir@"])
def test_parse_github_shorthand_rejects_incomplete(value: str) -> None:
    with pytest.raises(DependencyValidationError, match="Not a valid github reference"):
        parse_github_shorthand(value)
