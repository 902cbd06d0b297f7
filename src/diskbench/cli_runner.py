# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
import time
from pathlib import Path

from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from diskbench.common.config import BenchmarkConfig
from diskbench.common.enums import PathValidation
from diskbench.common.environment import Environment
from diskbench.common.logging import setup_rich_logging
from diskbench.common.paths import validate_test_path
from diskbench.exporters.console_exporter import ConsoleExporter
from diskbench.exporters.exporter_config import ExporterConfig
from diskbench.exporters.json_exporter import JsonExporter
from diskbench.fio.command import generate_command_preview
from diskbench.fio.version import get_fio_version
from diskbench.history.store import HistoryStore
from diskbench.orchestrator.background import BenchmarkRunner
from diskbench.orchestrator.models import FrozenBenchmarkResult
from diskbench.orchestrator.orchestrator import BenchmarkOrchestrator
from diskbench.orchestrator.protocols import CallbackListener

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_PATH = 2

_POLL_INTERVAL_SECONDS = 0.2


def _history_store(history: HistoryStore | None) -> HistoryStore:
    return history if history is not None else HistoryStore(Environment.HISTORY_FILE)


def configure_logging() -> None:
    setup_rich_logging(Environment.LOG_LEVEL.upper(), log_dir=Environment.LOG_DIR)


def _remaining_text(config: BenchmarkConfig, started: float) -> str:
    if not config.time_based:
        return ""
    remaining = max(0, config.duration_seconds - int(time.monotonic() - started))
    return f"{remaining}s remaining"


def _wait_with_countdown(
    runner: BenchmarkRunner,
    config: BenchmarkConfig,
    console: Console,
    status: dict[str, str],
) -> FrozenBenchmarkResult | None:
    run = runner.start(config)
    started = time.monotonic()
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        TextColumn("{task.fields[remaining]}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(status["message"], remaining="")
        try:
            while not run.done():
                progress.update(
                    task,
                    description=status["message"],
                    remaining=_remaining_text(config, started),
                )
                time.sleep(_POLL_INTERVAL_SECONDS)
        except KeyboardInterrupt:
            run.cancel()
            console.print(
                "[yellow]Cancelled. Waiting for the in-flight I/O to finish...[/yellow]"
            )
    return run.wait_result()


def run_benchmark(
    config: BenchmarkConfig,
    export: Path | None = None,
    save_history: bool = True,
    console: Console | None = None,
    history: HistoryStore | None = None,
) -> int:
    """Run a benchmark with live progress and print the result.

    Returns:
        Process exit code: 0 on success, 1 when the run failed or was
        cancelled, 2 when the test path is invalid
    """
    console = console or Console()

    validation = validate_test_path(config.test_path)
    if validation != PathValidation.OK:
        logger.error(f"Invalid test path {config.test_path}: {validation.message}")
        console.print(f"[red]{validation.message}: {config.test_path}[/red]")
        return EXIT_INVALID_PATH

    status = {"message": "Starting benchmark..."}

    def on_progress(message: str) -> None:
        status["message"] = message

    orchestrator = BenchmarkOrchestrator(
        listener=CallbackListener(on_progress=on_progress)
    )
    with BenchmarkRunner(orchestrator) as runner:
        result = _wait_with_countdown(runner, config, console, status)

    if result is None:
        console.print("[yellow]Benchmark cancelled, result discarded[/yellow]")
        return EXIT_FAILED

    exporter_config = ExporterConfig(result=result, output_path=export)
    ConsoleExporter(exporter_config).export(console)

    if save_history:
        _history_store(history).append(result)

    if export is not None:
        try:
            path = JsonExporter(exporter_config).export()
            console.print(f"Result written to {path}")
        except OSError as e:
            logger.error(f"Failed to export result to {export}: {e}")
            return EXIT_FAILED

    return EXIT_OK if result.succeeded else EXIT_FAILED


def print_preview(config: BenchmarkConfig, console: Console | None = None) -> None:
    (console or Console()).print(generate_command_preview(config), markup=False)


def print_versions(fio_path: str, console: Console | None = None) -> None:
    from diskbench import __version__

    console = console or Console()
    console.print(f"diskbench {__version__}")
    console.print(f"fio: {get_fio_version(fio_path)}")


def validate_path(path: str, console: Console | None = None) -> int:
    console = console or Console()
    validation = validate_test_path(path)
    if validation == PathValidation.OK:
        console.print(f"[green]{validation.message}: {path}[/green]")
        return EXIT_OK
    console.print(f"[red]{validation.message}: {path}[/red]")
    return EXIT_INVALID_PATH


def list_history(
    limit: int | None = None,
    console: Console | None = None,
    history: HistoryStore | None = None,
) -> None:
    from rich.table import Table

    console = console or Console()
    results = _history_store(history).list(limit=limit)
    if not results:
        console.print("No benchmark history")
        return

    table = Table(title="Benchmark history")
    for column in ("Time", "Type", "Path", "Status", "Read MB/s", "Write MB/s"):
        table.add_column(column)
    for result in results:
        table.add_row(
            result.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            result.test_type.label,
            result.test_path,
            result.status.value,
            f"{result.metrics.read_speed_mbs:.2f}",
            f"{result.metrics.write_speed_mbs:.2f}",
        )
    console.print(table)


def clear_history(
    console: Console | None = None, history: HistoryStore | None = None
) -> None:
    _history_store(history).clear()
    (console or Console()).print("Benchmark history cleared")
