# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from diskbench.common.enums import RunStatus
from diskbench.exporters.exporter_config import ExporterConfig

if TYPE_CHECKING:
    from rich.console import Console


_STATUS_STYLES = {
    RunStatus.RUNNING: "yellow",
    RunStatus.COMPLETED: "green",
    RunStatus.FAILED: "bold red",
}


class ConsoleExporter:
    """Prints a finished benchmark result as a rich table.

    Read and write columns are always shown; a direction the workload did not
    exercise reads as zero.
    """

    def __init__(self, exporter_config: ExporterConfig) -> None:
        self._result = exporter_config.result

    def get_renderable(self) -> Table:
        result = self._result
        table = Table(
            title=f"{result.test_type.label} - {result.test_path}",
            caption=result.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
        )
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Read", justify="right")
        table.add_column("Write", justify="right")

        metrics = result.metrics
        table.add_row(
            "Throughput (MB/s)",
            f"{metrics.read_speed_mbs:.2f}",
            f"{metrics.write_speed_mbs:.2f}",
        )
        table.add_row(
            "IOPS", f"{metrics.read_iops:.0f}", f"{metrics.write_iops:.0f}"
        )
        table.add_row(
            "Latency (ms)",
            f"{metrics.read_latency_ms:.3f}",
            f"{metrics.write_latency_ms:.3f}",
        )
        return table

    def export(self, console: Console) -> None:
        result = self._result
        console.print(self.get_renderable())
        console.print(
            Text.assemble(
                "Status: ",
                (result.status.value, _STATUS_STYLES[result.status]),
                f"  threads={result.thread_count} queue_depth={result.queue_depth} "
                f"block_size={result.block_size_kb}KB",
            )
        )
        if result.fio_version:
            console.print(f"fio version: {result.fio_version}")
        if result.error_message:
            console.print(Text(f"Error: {result.error_message}", style="red"))
