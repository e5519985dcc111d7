import logging

import pytest
from morphir_deps.classification import classify_permissive
from morphir_deps.loading import load_local
from morphir_deps.models import Provenance
from morphir_deps.telemetry import (
    ProvenanceLogFilter,
    dependency_context,
    get_current_dependency,
    install_provenance_log_filter,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord("morphir_deps", logging.INFO, __file__, 1, "msg", None, None)


def test_filter_defaults_outside_context() -> None:
    record = _record()
    assert ProvenanceLogFilter().filter(record) is True
    assert record.provenance == "-"
    assert record.dependency == "-"


def test_filter_uses_current_dependency() -> None:
    with dependency_context("includes", "./a.json"):
        assert get_current_dependency() == ("includes", "./a.json")
        record = _record()
        ProvenanceLogFilter().filter(record)
    assert record.provenance == "includes"
    assert record.dependency == "./a.json"
    assert get_current_dependency() is None


def test_install_is_idempotent() -> None:
    handler = logging.NullHandler()
    install_provenance_log_filter([handler])
    install_provenance_log_filter([handler])
    assert sum(isinstance(flt, ProvenanceLogFilter) for flt in handler.filters) == 1


@pytest.mark.asyncio
async def test_load_records_carry_provenance(caplog: pytest.LogCaptureFixture, write_json) -> None:
    path = write_json("logged.json", {})
    install_provenance_log_filter([caplog.handler])
    with caplog.at_level(logging.INFO, logger="morphir_deps"):
        await load_local([classify_permissive(str(path), Provenance.INCLUDES)])

    records = [record for record in caplog.records if "Handling path" in record.getMessage()]
    assert records
    assert records[0].provenance == "includes"
    assert records[0].dependency == str(path)
