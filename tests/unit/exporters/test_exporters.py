# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for the console and JSON result exporters."""

import orjson
import pytest
from rich.console import Console

from diskbench.common.enums import RunStatus
from diskbench.exporters.console_exporter import ConsoleExporter
from diskbench.exporters.exporter_config import ExporterConfig
from diskbench.exporters.json_exporter import JsonExporter
from diskbench.orchestrator.models import IOMetrics


@pytest.fixture
def console():
    return Console(record=True, width=120, color_system=None)


class TestConsoleExporter:
    """Tests for ConsoleExporter."""

    def test_prints_metrics_table(self, console, make_result):
        result = make_result(
            IOMetrics(read_speed_mbs=123.456, write_iops=789.0, read_latency_ms=0.5)
        )

        ConsoleExporter(ExporterConfig(result=result)).export(console)

        text = console.export_text()
        assert "Random Mixed" in text
        assert "123.46" in text
        assert "789" in text
        assert "0.500" in text
        assert "completed" in text

    def test_prints_error_for_failed_result(self, console, make_result):
        result = make_result(
            status=RunStatus.FAILED, error_message="Unable to start fio process: fio"
        )

        ConsoleExporter(ExporterConfig(result=result)).export(console)

        text = console.export_text()
        assert "failed" in text
        assert "Error: Unable to start fio process: fio" in text


class TestJsonExporter:
    """Tests for JsonExporter."""

    def test_writes_result_with_config(self, tmp_path, make_result):
        output = tmp_path / "out" / "result.json"
        result = make_result(IOMetrics(read_speed_mbs=1.5))

        path = JsonExporter(ExporterConfig(result=result, output_path=output)).export()

        data = orjson.loads(path.read_bytes())
        assert path == output
        assert data["status"] == "completed"
        assert data["metrics"]["read_speed_mbs"] == 1.5
        assert data["config"]["test_type"] == "random_mixed"

    def test_requires_output_path(self, make_result):
        with pytest.raises(ValueError, match="output path"):
            JsonExporter(ExporterConfig(result=make_result()))
