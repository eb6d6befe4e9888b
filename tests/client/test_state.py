"""Tests for the persisted state snapshot."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from splice.client.directive import Directive
from splice.client.source import Series
from splice.client.state import (
    STATE_HEADER,
    SeriesRecord,
    SourceRecord,
    State,
    from_record,
    load_state,
    to_record,
    write_state,
)
from splice.core.errors import ConfigError, ErrorCode
from splice.core.paths import digest

_DIGEST = digest(["x"])


def _record(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "directive": "\t... srv a",
        "start": 3,
        "length": 1,
        "symbols": ["a"],
        "digest": _DIGEST,
    }
    data.update(overrides)
    return data


class TestRecords:
    def test_series_record_round_trip(self) -> None:
        series = Series(
            directive=Directive.parse("\t... srv a"),  # type: ignore[arg-type]
            start=3,
            length=1,
            symbols=("z", "a"),
            digest=_DIGEST,
        )

        assert from_record(to_record(series)) == series

    def test_unknown_series_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SeriesRecord.model_validate(_record(indent="\t"))

    def test_negative_start_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SeriesRecord.model_validate(_record(start=-1))

    def test_record_with_non_directive_line_rejected(self) -> None:
        record = SeriesRecord.model_validate(_record(directive="not a directive"))

        with pytest.raises(ConfigError) as exc_info:
            from_record(record)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE


class TestLoadWrite:
    def test_missing_file_is_empty_state(self, tmp_path: Path) -> None:
        assert load_state(tmp_path / "state.yaml") == State()

    def test_write_then_load(self, tmp_path: Path) -> None:
        # Given
        path = tmp_path / "state.yaml"
        state = State(
            sources=[
                SourceRecord(source="docs/a.md", series=[SeriesRecord.model_validate(_record())])
            ]
        )

        # When
        write_state(path, state)
        loaded = load_state(path)

        # Then
        assert path.read_text().startswith(STATE_HEADER)
        assert loaded == state
        assert len(loaded) == 1

    def test_unknown_top_level_field_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "state.yaml"
        path.write_text("version: 1\nsources: []\nextra: true\n")

        with pytest.raises(ConfigError) as exc_info:
            load_state(path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"] == "extra"

    def test_unsupported_version_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "state.yaml"
        path.write_text("version: 99\n")

        with pytest.raises(ConfigError) as exc_info:
            load_state(path)

        assert exc_info.value.details["field"] == "version"

    def test_invalid_yaml_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "state.yaml"
        path.write_text("sources: [\n")

        with pytest.raises(ConfigError) as exc_info:
            load_state(path)

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR
