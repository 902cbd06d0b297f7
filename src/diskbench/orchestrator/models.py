# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for benchmark results."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from diskbench.common.config import BenchmarkConfigSnapshot
from diskbench.common.enums import RunStatus, TestType


class IOMetrics(BaseModel):
    """Throughput, IOPS and latency for the read and write directions.

    Attributes:
        read_speed_mbs: Read throughput in MB/s
        write_speed_mbs: Write throughput in MB/s
        read_iops: Read operations per second
        write_iops: Write operations per second
        read_latency_ms: Average read latency in milliseconds
        write_latency_ms: Average write latency in milliseconds
    """

    model_config = ConfigDict(frozen=True)

    read_speed_mbs: float = 0.0
    write_speed_mbs: float = 0.0
    read_iops: float = 0.0
    write_iops: float = 0.0
    read_latency_ms: float = 0.0
    write_latency_ms: float = 0.0


class BenchmarkResult(BaseModel):
    """Outcome of a single benchmark run.

    Created with status RUNNING when the run starts and populated as the run
    progresses. Once the orchestrator finishes it calls :meth:`freeze`, which
    returns an immutable copy handed to listeners and callers.

    Attributes:
        timestamp: When the run started
        test_path: Directory the run was executed in
        test_type: Workload pattern
        metrics: Derived throughput/IOPS/latency
        config: Config snapshot the run used
        status: RUNNING, COMPLETED or FAILED
        error_message: Failure reason, empty unless FAILED
        command: fio command line, or a descriptive preview for built-in runs
        fio_version: Version reported by the fio probe, empty for built-in runs
        thread_count: Echo of the configured thread count
        queue_depth: Echo of the configured queue depth
        block_size_kb: Echo of the configured block size
    """

    model_config = ConfigDict(validate_assignment=True)

    timestamp: datetime = Field(default_factory=datetime.now)
    test_path: str
    test_type: TestType
    metrics: IOMetrics = Field(default_factory=IOMetrics)
    config: BenchmarkConfigSnapshot
    status: RunStatus = RunStatus.RUNNING
    error_message: str = ""
    command: str = ""
    fio_version: str = ""
    thread_count: int
    queue_depth: int
    block_size_kb: int

    @classmethod
    def start(
        cls, config: BenchmarkConfigSnapshot, command: str = ""
    ) -> "BenchmarkResult":
        """Create a RUNNING result for a config snapshot."""
        return cls(
            test_path=config.test_path,
            test_type=config.test_type,
            config=config,
            command=command,
            fio_version=config.fio_version,
            thread_count=config.thread_count,
            queue_depth=config.queue_depth,
            block_size_kb=config.block_size_kb,
        )

    @property
    def succeeded(self) -> bool:
        return self.status == RunStatus.COMPLETED

    def mark_failed(self, message: str) -> None:
        self.status = RunStatus.FAILED
        self.error_message = message

    def freeze(self) -> "FrozenBenchmarkResult":
        """Return the immutable form of this result.

        A result still RUNNING at this point is considered COMPLETED.
        """
        data = self.model_dump()
        if data["status"] == RunStatus.RUNNING:
            data["status"] = RunStatus.COMPLETED
        return FrozenBenchmarkResult.model_validate(data)


class FrozenBenchmarkResult(BenchmarkResult):
    """A finished benchmark result. Any attempt to modify it raises."""

    model_config = ConfigDict(frozen=True)
