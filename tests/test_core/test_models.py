"""Tests for shared models and JSON document helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from tunneldoc.core.documents import dump_json_object, load_json_object
from tunneldoc.core.errors import ConfigParseError
from tunneldoc.core.models import (
    ChangeLogEntry,
    CorsOutcome,
    CorsSection,
    FileRepairOutcome,
    ProbeResult,
    ProbeTarget,
    RepairLog,
    RepairStatus,
)


class TestModels:
    def test_probe_target_url(self):
        assert ProbeTarget("localhost", 8081).url == "http://localhost:8081"

    def test_probe_result_is_immutable(self):
        result = ProbeResult(target=ProbeTarget("localhost", 8081), reachable=False)
        with pytest.raises(AttributeError):
            result.reachable = True  # type: ignore[misc]

    def test_cors_header_lookup_is_case_insensitive(self):
        result = ProbeResult(
            target=ProbeTarget("localhost", 8081),
            reachable=True,
            response_headers={"access-control-allow-origin": "*"},
        )
        assert result.cors_header == "*"

    def test_cors_section_counts(self):
        section = CorsSection(server_url="http://localhost:8081", outcomes=[
            CorsOutcome(origin="a", allowed=True),
            CorsOutcome(origin="b", allowed=False),
        ])
        assert section.success_count == 1
        assert section.skipped is False
        assert CorsSection(skipped_reason="no server").skipped is True

    def test_repair_log_record(self):
        path = Path("app.json")
        log = RepairLog()
        log.record(FileRepairOutcome(
            path=path,
            status=RepairStatus.UPDATED,
            changes=[ChangeLogEntry(file=path, description="x")],
        ))
        log.record(FileRepairOutcome(path=Path("package.json"), status=RepairStatus.ERROR, error="bad"))

        assert len(log.entries) == 1
        assert [e.path.name for e in log.errors] == ["package.json"]


class TestDocuments:
    def test_load_with_bom(self, tmp_path: Path):
        path = tmp_path / "app.json"
        path.write_bytes(b'\xef\xbb\xbf{"a": 1}')
        assert load_json_object(path) == {"a": 1}

    def test_load_rejects_non_object(self, tmp_path: Path):
        path = tmp_path / "app.json"
        path.write_text('"just a string"')
        with pytest.raises(ConfigParseError, match="top level must be an object"):
            load_json_object(path)

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_load_rejects_non_standard_constants(self, tmp_path: Path, constant: str):
        path = tmp_path / "app.json"
        path.write_text(f'{{"port": {constant}}}')
        with pytest.raises(ConfigParseError, match="is not valid JSON"):
            load_json_object(path)

    def test_load_rejects_runaway_nesting(self, tmp_path: Path):
        path = tmp_path / "app.json"
        path.write_text("[" * 200000)
        with pytest.raises(ConfigParseError, match="nested too deeply"):
            load_json_object(path)

    def test_missing_file_raises_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json_object(tmp_path / "app.json")

    def test_dump_keeps_order_and_unicode(self):
        assert dump_json_object({"b": 1, "a": "é"}) == '{\n  "b": 1,\n  "a": "é"\n}\n'
