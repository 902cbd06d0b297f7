# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Background execution of benchmark runs.

Runs happen on a single worker thread so the caller's thread stays free for
progress display and cancellation. Cancellation is cooperative: it never
interrupts the fio process or an in-flight read/write call, it only marks the
run so the caller discards the result when it arrives.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor

from diskbench.common.config import BenchmarkConfig
from diskbench.orchestrator.models import FrozenBenchmarkResult
from diskbench.orchestrator.orchestrator import BenchmarkOrchestrator

logger = logging.getLogger(__name__)

__all__ = [
    "BenchmarkRun",
    "BenchmarkRunner",
]


class BenchmarkRun:
    """Handle on a benchmark executing in the background."""

    def __init__(self, future: Future[FrozenBenchmarkResult]) -> None:
        self._future = future
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Request cancellation. The run itself keeps going until it finishes."""
        if not self._cancelled.is_set():
            logger.info("Benchmark cancellation requested")
        self._cancelled.set()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> FrozenBenchmarkResult:
        """Block until the run finishes and return its result, cancelled or not."""
        return self._future.result(timeout=timeout)

    def wait_result(self, timeout: float | None = None) -> FrozenBenchmarkResult | None:
        """Block until the run finishes. Returns None if the run was cancelled."""
        result = self._future.result(timeout=timeout)
        if self.cancelled:
            logger.info("Discarding result of cancelled benchmark")
            return None
        return result


class BenchmarkRunner:
    """Starts benchmark runs off the caller's thread, one at a time.

    Args:
        orchestrator: Orchestrator used for every run
    """

    def __init__(self, orchestrator: BenchmarkOrchestrator | None = None) -> None:
        self.orchestrator = orchestrator or BenchmarkOrchestrator()
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="diskbench-run"
        )
        self._lock = threading.Lock()
        self._active: BenchmarkRun | None = None

    @property
    def busy(self) -> bool:
        return self._active is not None and not self._active.done()

    def start(self, config: BenchmarkConfig) -> BenchmarkRun:
        """Start a run in the background.

        The config is snapshotted before this returns, so the caller may keep
        editing it.

        Raises:
            RuntimeError: If a run is already in progress
        """
        snapshot = config.snapshot()
        with self._lock:
            if self.busy:
                raise RuntimeError("A benchmark is already running")
            run = BenchmarkRun(self._executor.submit(self.orchestrator.run, snapshot))
            self._active = run
        return run

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "BenchmarkRunner":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
