# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Top level coordinator for a single disk benchmark run."""

import asyncio
import logging
from pathlib import Path

from diskbench.common.config import BenchmarkConfig, BenchmarkConfigSnapshot
from diskbench.common.enums import PathValidation
from diskbench.common.environment import Environment
from diskbench.common.exceptions import PathValidationError
from diskbench.common.paths import validate_test_path
from diskbench.fio.command import generate_command_preview
from diskbench.fio.process import ArtifactSink, ProcessRunner
from diskbench.fio.version import get_fio_version
from diskbench.orchestrator.backends import (
    CustomIOBackend,
    ExecutionBackend,
    FioBackend,
)
from diskbench.orchestrator.models import BenchmarkResult, FrozenBenchmarkResult
from diskbench.orchestrator.protocols import BenchmarkListenerProtocol, NullListener

logger = logging.getLogger(__name__)

__all__ = [
    "BenchmarkOrchestrator",
]


class BenchmarkOrchestrator:
    """Runs one benchmark from a config and returns its result.

    The orchestrator:
    - snapshots the config so later edits by the caller have no effect
    - validates the snapshot's test path
    - probes the fio version (fio runs only, best effort)
    - builds the command string, which is recorded even for built-in runs
    - dispatches to the fio or built-in backend
    - freezes and returns the result, notifying the listener on the way

    :meth:`run` never raises. Any failure is captured as a FAILED result with
    an error message. One run at a time per instance; callers serialize runs.
    """

    def __init__(
        self,
        listener: BenchmarkListenerProtocol | None = None,
        runner: ProcessRunner | None = None,
        log_dir: Path | None = None,
        fio_backend: ExecutionBackend | None = None,
        custom_backend: ExecutionBackend | None = None,
    ) -> None:
        """Initialize BenchmarkOrchestrator.

        Args:
            listener: Receives progress and completion notifications
            runner: Process runner for fio; one writing artifacts to log_dir is
                created when omitted
            log_dir: Directory for raw fio output artifacts, defaults to the
                DISKBENCH_LOG_DIR setting
            fio_backend: Backend used when the config enables fio
            custom_backend: Backend used when fio is disabled
        """
        self.listener = listener or NullListener()
        self.runner = runner or ProcessRunner(
            artifact_sink=ArtifactSink(log_dir or Environment.LOG_DIR)
        )
        self.fio_backend = fio_backend or FioBackend(self.runner)
        self.custom_backend = custom_backend or CustomIOBackend()

    def run(self, config: BenchmarkConfig) -> FrozenBenchmarkResult:
        """Execute a benchmark run.

        Args:
            config: Benchmark configuration. Only read until the snapshot is taken.

        Returns:
            The finished, immutable result with status COMPLETED or FAILED
        """
        snapshot = config.snapshot(fio_version="")
        logger.info(
            f"Starting benchmark - type: {snapshot.test_type.label}, "
            f"path: {snapshot.test_path}, fio: {snapshot.use_fio}"
        )

        validation = validate_test_path(snapshot.test_path)

        if snapshot.use_fio and validation == PathValidation.OK:
            self._notify_progress("Detecting fio version...")
            fio_version = get_fio_version(snapshot.fio_path, runner=self.runner)
            logger.info(f"Detected fio version: {fio_version}")
            snapshot = snapshot.model_copy(update={"fio_version": fio_version})

        result = BenchmarkResult.start(snapshot, generate_command_preview(snapshot))

        try:
            if validation != PathValidation.OK:
                raise PathValidationError(
                    f"{validation.message}: {snapshot.test_path}"
                )

            backend = self._select_backend(snapshot)
            self._notify_progress("Preparing benchmark...")
            backend.execute(snapshot, result, self._notify_progress)
        except Exception as e:
            logger.exception(f"Benchmark failed: {e}")
            result.mark_failed(str(e))

        finished = result.freeze()
        if finished.succeeded:
            self._notify_progress("Benchmark complete")
        else:
            self._notify_progress(f"Benchmark failed: {finished.error_message}")
        self._notify_completed(finished)
        return finished

    async def run_async(self, config: BenchmarkConfig) -> FrozenBenchmarkResult:
        """Run the benchmark on a worker thread without blocking the event loop.

        The config is snapshotted before control leaves the caller.
        """
        return await asyncio.to_thread(self.run, config.snapshot())

    def _select_backend(self, config: BenchmarkConfigSnapshot) -> ExecutionBackend:
        if config.use_fio:
            logger.debug("Using fio backend")
            return self.fio_backend
        logger.debug("Using built-in backend")
        return self.custom_backend

    def _notify_progress(self, message: str) -> None:
        try:
            self.listener.on_progress(message)
        except Exception:
            logger.exception("Progress listener raised")

    def _notify_completed(self, result: FrozenBenchmarkResult) -> None:
        try:
            self.listener.on_completed(result)
        except Exception:
            logger.exception("Completion listener raised")
