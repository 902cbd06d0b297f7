# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Execution backends for a benchmark run."""

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Callable

from diskbench.common.config import BenchmarkConfigSnapshot
from diskbench.common.exceptions import ToolExecutionError
from diskbench.custom.engine import CustomIOEngine
from diskbench.fio.command import build_fio_args, build_fio_command, fio_scratch_path
from diskbench.fio.parser import parse_fio_output
from diskbench.fio.process import ProcessRunner
from diskbench.fio.version import resolve_tool_path
from diskbench.orchestrator.models import BenchmarkResult

logger = logging.getLogger(__name__)

__all__ = [
    "CustomIOBackend",
    "ExecutionBackend",
    "FioBackend",
]

ProgressCallback = Callable[[str], None]


class ExecutionBackend(ABC):
    """Base class for the ways a benchmark can be executed.

    A backend fills in the metrics of a RUNNING result. It signals failure by
    raising; the orchestrator turns any exception into a FAILED result.
    """

    @abstractmethod
    def execute(
        self,
        config: BenchmarkConfigSnapshot,
        result: BenchmarkResult,
        progress: ProgressCallback,
    ) -> None:
        """Run the benchmark described by config and record metrics on result.

        Args:
            config: Frozen config for this run
            result: Result to populate
            progress: Callback for free text progress messages
        """


class FioBackend(ExecutionBackend):
    """Runs the external fio executable and parses its output.

    A non-zero exit code with output on stderr fails the run with stderr as
    the message. Anything else is parsed; unparsable output yields zero
    metrics but still completes the run.
    """

    def __init__(self, runner: ProcessRunner) -> None:
        self.runner = runner

    def execute(
        self,
        config: BenchmarkConfigSnapshot,
        result: BenchmarkResult,
        progress: ProgressCallback,
    ) -> None:
        logger.info(
            f"Starting fio test - file size: {config.file_size_mb}MB, block size: "
            f"{config.block_size_kb}KB, io engine: {config.io_engine}, "
            f"threads: {config.thread_count}, queue depth: {config.queue_depth}"
        )
        executable = resolve_tool_path(config.fio_path)
        command = build_fio_command(config)
        logger.debug(f"Executing fio command: {command}")
        progress(f"Running fio test: {command}")

        try:
            output = self.runner.run(
                executable,
                build_fio_args(config),
                artifact_label=config.test_type.label,
            )
        finally:
            self._remove_scratch_file(fio_scratch_path(config))

        if output.exit_code != 0 and output.stderr.strip():
            logger.error(
                f"fio failed with exit code {output.exit_code}: {output.stderr.strip()}"
            )
            raise ToolExecutionError(output.exit_code, output.stderr)

        progress("Parsing fio output...")
        result.metrics = parse_fio_output(output.stdout)
        logger.info(
            f"fio test complete - read: {result.metrics.read_speed_mbs:.2f} MB/s, "
            f"write: {result.metrics.write_speed_mbs:.2f} MB/s, "
            f"read IOPS: {result.metrics.read_iops:.0f}, "
            f"write IOPS: {result.metrics.write_iops:.0f}"
        )

    @staticmethod
    def _remove_scratch_file(path: str) -> None:
        if not os.path.exists(path):
            return
        try:
            os.remove(path)
            logger.debug(f"Removed fio scratch file {path}")
        except OSError as e:
            logger.warning(f"Failed to remove fio scratch file {path}: {e}")


class CustomIOBackend(ExecutionBackend):
    """Runs the built-in read/write timing loop."""

    def __init__(
        self,
        engine_factory: Callable[..., CustomIOEngine] = CustomIOEngine,
    ) -> None:
        self.engine_factory = engine_factory

    def execute(
        self,
        config: BenchmarkConfigSnapshot,
        result: BenchmarkResult,
        progress: ProgressCallback,
    ) -> None:
        engine = self.engine_factory(config, progress=progress)
        result.metrics = engine.run()
        logger.info(
            f"Built-in test complete - read: {result.metrics.read_speed_mbs:.2f} MB/s, "
            f"write: {result.metrics.write_speed_mbs:.2f} MB/s"
        )
