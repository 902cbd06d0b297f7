# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Built-in read/write timing loop used when fio is disabled.

The engine works on a single scratch file in the test path, sized to the
configured file size. Each phase runs until the configured duration has elapsed
or a file size worth of bytes has been transferred, whichever comes first.

Latency is derived from throughput (elapsed time divided by operation count),
not measured per operation.
"""

import logging
import os
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from diskbench.common.config import BenchmarkConfig
from diskbench.common.constants import BYTES_PER_MIB, MILLIS_PER_SECOND
from diskbench.common.environment import Environment
from diskbench.common.exceptions import ScratchFileError
from diskbench.orchestrator.models import IOMetrics

logger = logging.getLogger(__name__)

__all__ = [
    "CustomIOEngine",
    "PhaseMetrics",
    "compute_phase_metrics",
]


@dataclass(frozen=True, slots=True)
class PhaseMetrics:
    """Throughput of a single read or write phase."""

    speed_mbs: float = 0.0
    iops: float = 0.0
    latency_ms: float = 0.0
    total_bytes: int = 0
    operations: int = 0
    elapsed_seconds: float = 0.0


def compute_phase_metrics(
    total_bytes: int, operations: int, elapsed_seconds: float
) -> PhaseMetrics:
    """Derive MB/s, IOPS and average latency from a phase's totals.

    All three metrics are 0 when no time elapsed or no operation completed.
    """
    if elapsed_seconds <= 0 or operations == 0:
        return PhaseMetrics(
            total_bytes=total_bytes,
            operations=operations,
            elapsed_seconds=elapsed_seconds,
        )

    return PhaseMetrics(
        speed_mbs=total_bytes / BYTES_PER_MIB / elapsed_seconds,
        iops=operations / elapsed_seconds,
        latency_ms=elapsed_seconds / operations * MILLIS_PER_SECOND,
        total_bytes=total_bytes,
        operations=operations,
        elapsed_seconds=elapsed_seconds,
    )


class CustomIOEngine:
    """Sequential/random read and write timing loop against a scratch file.

    Args:
        config: Config snapshot for the run
        progress: Called with a short message when a phase starts
        clock: Monotonic clock in seconds, replaceable in tests
        rng: Random source for offsets, replaceable in tests
    """

    def __init__(
        self,
        config: BenchmarkConfig,
        progress: Callable[[str], None] | None = None,
        clock: Callable[[], float] = time.perf_counter,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self._progress = progress or (lambda message: None)
        self._clock = clock
        self._rng = rng or random.Random()
        self.scratch_file = Path(config.test_path) / Environment.SCRATCH_FILE_NAME

    @property
    def file_size(self) -> int:
        return self.config.file_size_bytes

    @property
    def block_size(self) -> int:
        return self.config.block_size_bytes

    def run(self) -> IOMetrics:
        """Run the phases the test type calls for and return the combined metrics.

        The scratch file is always removed afterwards.

        Raises:
            ScratchFileError: If the scratch file cannot be created, written or read
        """
        test_type = self.config.test_type
        logger.info(
            f"Starting built-in test - file size: {self.config.file_size_mb}MB, "
            f"block size: {self.config.block_size_kb}KB, type: {test_type.label}"
        )

        write = PhaseMetrics()
        read = PhaseMetrics()
        try:
            if not test_type.writes:
                # Read-only workloads need existing data; setup is not timed
                self._progress("Preparing test file...")
                self._create_zero_filled_file()

            if test_type.writes:
                self._progress("Running write test...")
                write = self._write_phase()
                logger.info(
                    f"Write test complete - speed: {write.speed_mbs:.2f} MB/s, "
                    f"IOPS: {write.iops:.0f}, latency: {write.latency_ms:.2f} ms"
                )

            if test_type.reads:
                self._progress("Running read test...")
                read = self._read_phase()
                logger.info(
                    f"Read test complete - speed: {read.speed_mbs:.2f} MB/s, "
                    f"IOPS: {read.iops:.0f}, latency: {read.latency_ms:.2f} ms"
                )
        except OSError as e:
            raise ScratchFileError(
                f"Scratch file I/O failed on {self.scratch_file}: {e}"
            ) from e
        finally:
            self._remove_scratch_file()

        return IOMetrics(
            read_speed_mbs=read.speed_mbs,
            write_speed_mbs=write.speed_mbs,
            read_iops=read.iops,
            write_iops=write.iops,
            read_latency_ms=read.latency_ms,
            write_latency_ms=write.latency_ms,
        )

    def _create_zero_filled_file(self) -> None:
        zeros = bytes(self.block_size)
        remaining = self.file_size
        with open(self.scratch_file, "wb") as f:
            while remaining > 0:
                chunk = min(remaining, self.block_size)
                f.write(zeros[:chunk])
                remaining -= chunk

    def _write_phase(self) -> PhaseMetrics:
        block_size = self.block_size
        file_size = self.file_size
        buffer = os.urandom(block_size)
        is_random = self.config.test_type.is_random

        total_bytes = 0
        operations = 0
        length = 0

        with open(self.scratch_file, "wb", buffering=0) as f:
            start = self._clock()
            deadline = start + self.config.duration_seconds
            while self._clock() < deadline and total_bytes < file_size:
                if is_random:
                    offset = self._rng.randrange(0, min(file_size, length + block_size))
                    f.seek(offset)
                else:
                    offset = f.tell()
                written = f.write(buffer) or 0
                length = max(length, offset + written)
                total_bytes += written
                operations += 1
            elapsed = self._clock() - start

        return compute_phase_metrics(total_bytes, operations, elapsed)

    def _read_phase(self) -> PhaseMetrics:
        if not self.scratch_file.exists():
            self._create_zero_filled_file()

        block_size = self.block_size
        file_size = self.file_size
        buffer = bytearray(block_size)
        is_random = self.config.test_type.is_random

        total_bytes = 0
        operations = 0

        with open(self.scratch_file, "rb", buffering=0) as f:
            length = os.fstat(f.fileno()).st_size
            max_offset = max(0, length - block_size)
            start = self._clock()
            deadline = start + self.config.duration_seconds
            while self._clock() < deadline and total_bytes < file_size:
                if is_random:
                    f.seek(self._rng.randrange(0, max_offset) if max_offset > 0 else 0)
                bytes_read = f.readinto(buffer)
                if not bytes_read:
                    break
                total_bytes += bytes_read
                operations += 1
            elapsed = self._clock() - start

        return compute_phase_metrics(total_bytes, operations, elapsed)

    def _remove_scratch_file(self) -> None:
        try:
            self.scratch_file.unlink(missing_ok=True)
            logger.debug(f"Removed scratch file {self.scratch_file}")
        except OSError as e:
            logger.warning(f"Failed to remove scratch file {self.scratch_file}: {e}")
