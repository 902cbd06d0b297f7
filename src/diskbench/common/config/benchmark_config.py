# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import os
from typing import Annotated, Any

from cyclopts import Parameter
from pydantic import BaseModel, ConfigDict, Field, field_validator

from diskbench.common.config.config_defaults import (
    BLOCK_SIZE_CHOICES_KB,
    IO_ENGINE_CHOICES,
    BenchmarkDefaults,
)
from diskbench.common.config.groups import Groups
from diskbench.common.constants import (
    DURATION_SECONDS_MAX,
    DURATION_SECONDS_MIN,
    QUEUE_DEPTH_MAX,
    QUEUE_DEPTH_MIN,
    THREAD_COUNT_MAX,
    THREAD_COUNT_MIN,
)
from diskbench.common.enums import TestType


def clamp(value: int, minimum: int, maximum: int) -> int:
    """Clamp an integer into [minimum, maximum]."""
    return max(minimum, min(maximum, value))


def _clamp_before(v: Any, minimum: int, maximum: int) -> Any:
    # Leave non-numeric input for pydantic to reject with a proper error
    try:
        number = int(v)
    except OverflowError:
        return maximum if v > 0 else minimum
    except (TypeError, ValueError):
        return v
    return clamp(number, minimum, maximum)


class BenchmarkConfig(BaseModel):
    """Parameters of a single disk benchmark run.

    The bounded fields (thread count, queue depth, duration) are clamped into
    range on construction and on every assignment, so a config can never hold
    an out-of-range value. Clamping is idempotent.

    The caller owns and may freely mutate this object. The orchestrator works
    from a frozen :class:`BenchmarkConfigSnapshot` taken when a run starts.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    test_path: Annotated[
        str,
        Field(
            description="Directory the benchmark scratch file is created in.",
        ),
        Parameter(
            name=("--path", "-p"),
            group=Groups.TEST_PARAMETERS,
        ),
    ] = Field(default_factory=os.getcwd)

    file_size_mb: Annotated[
        int,
        Field(
            description="Size of the scratch file in MB.",
        ),
        Parameter(
            name=("--file-size", "-s"),
            group=Groups.TEST_PARAMETERS,
        ),
    ] = BenchmarkDefaults.FILE_SIZE_MB

    block_size_kb: Annotated[
        int,
        Field(
            description="I/O block size in KB. Typical values: "
            f"{', '.join(str(kb) for kb in BLOCK_SIZE_CHOICES_KB)}.",
        ),
        Parameter(
            name=("--block-size", "-b"),
            group=Groups.TEST_PARAMETERS,
        ),
    ] = BenchmarkDefaults.BLOCK_SIZE_KB

    test_type: Annotated[
        TestType,
        Field(
            description="Workload pattern: sequential or random, read, write or mixed.",
        ),
        Parameter(
            name=("--test-type", "-T"),
            group=Groups.TEST_PARAMETERS,
        ),
    ] = BenchmarkDefaults.TEST_TYPE

    thread_count: Annotated[
        int,
        Field(
            description=f"Number of parallel jobs ({THREAD_COUNT_MIN}-{THREAD_COUNT_MAX}). "
            "Out of range values are clamped.",
        ),
        Parameter(
            name=("--threads", "-j"),
            group=Groups.TEST_PARAMETERS,
        ),
    ] = BenchmarkDefaults.THREAD_COUNT

    queue_depth: Annotated[
        int,
        Field(
            description=f"I/O requests kept in flight per job ({QUEUE_DEPTH_MIN}-{QUEUE_DEPTH_MAX}). "
            "Out of range values are clamped.",
        ),
        Parameter(
            name=("--queue-depth", "-q"),
            group=Groups.TEST_PARAMETERS,
        ),
    ] = BenchmarkDefaults.QUEUE_DEPTH

    duration_seconds: Annotated[
        int,
        Field(
            description=f"Test duration in seconds ({DURATION_SECONDS_MIN}-{DURATION_SECONDS_MAX}). "
            "Out of range values are clamped.",
        ),
        Parameter(
            name=("--duration", "-d"),
            group=Groups.TEST_PARAMETERS,
        ),
    ] = BenchmarkDefaults.DURATION_SECONDS

    use_fio: Annotated[
        bool,
        Field(
            description="Run the external fio tool. When disabled, the built-in "
            "read/write timing loop is used instead.",
        ),
        Parameter(
            name=("--fio",),
            negative=("--builtin",),
            group=Groups.FIO,
        ),
    ] = BenchmarkDefaults.USE_FIO

    fio_path: Annotated[
        str,
        Field(
            description="Path to the fio executable, or a bare name looked up on PATH.",
        ),
        Parameter(
            name=("--fio-path",),
            group=Groups.FIO,
        ),
    ] = BenchmarkDefaults.FIO_PATH

    use_direct_io: Annotated[
        bool,
        Field(
            description="Bypass the OS page cache (fio --direct=1).",
        ),
        Parameter(
            name=("--direct",),
            group=Groups.FIO,
        ),
    ] = BenchmarkDefaults.USE_DIRECT_IO

    time_based: Annotated[
        bool,
        Field(
            description="Run for the full duration even after the file size has been covered "
            "(fio --runtime/--time_based).",
        ),
        Parameter(
            name=("--time-based",),
            group=Groups.FIO,
        ),
    ] = BenchmarkDefaults.TIME_BASED

    io_engine: Annotated[
        str,
        Field(
            description=f"fio I/O engine, e.g. {', '.join(IO_ENGINE_CHOICES)}.",
        ),
        Parameter(
            name=("--io-engine",),
            group=Groups.FIO,
        ),
    ] = BenchmarkDefaults.IO_ENGINE

    use_thread: Annotated[
        bool,
        Field(
            description="Use threads instead of processes for fio jobs (fio --thread).",
        ),
        Parameter(
            name=("--thread",),
            group=Groups.FIO,
        ),
    ] = BenchmarkDefaults.USE_THREAD

    fio_version: Annotated[
        str,
        Field(
            description="fio version detected when the run started. Filled in on snapshots.",
        ),
        Parameter(parse=False),
    ] = ""

    @field_validator("thread_count", mode="before")
    @classmethod
    def clamp_thread_count(cls, v: Any) -> Any:
        return _clamp_before(v, THREAD_COUNT_MIN, THREAD_COUNT_MAX)

    @field_validator("queue_depth", mode="before")
    @classmethod
    def clamp_queue_depth(cls, v: Any) -> Any:
        return _clamp_before(v, QUEUE_DEPTH_MIN, QUEUE_DEPTH_MAX)

    @field_validator("duration_seconds", mode="before")
    @classmethod
    def clamp_duration_seconds(cls, v: Any) -> Any:
        return _clamp_before(v, DURATION_SECONDS_MIN, DURATION_SECONDS_MAX)

    @field_validator("file_size_mb", "block_size_kb", mode="before")
    @classmethod
    def clamp_sizes(cls, v: Any) -> Any:
        # Sizes have no upper bound, so +inf is left for pydantic to reject
        try:
            return max(1, int(v))
        except OverflowError:
            return 1 if v < 0 else v
        except (TypeError, ValueError):
            return v

    @property
    def file_size_bytes(self) -> int:
        return self.file_size_mb * 1024 * 1024

    @property
    def block_size_bytes(self) -> int:
        return self.block_size_kb * 1024

    def snapshot(self, fio_version: str | None = None) -> "BenchmarkConfigSnapshot":
        """Take a deep, immutable copy of this config.

        Args:
            fio_version: Detected tool version to record on the snapshot. Keeps the
                current value when None.
        """
        data = self.model_dump()
        if fio_version is not None:
            data["fio_version"] = fio_version
        return BenchmarkConfigSnapshot.model_validate(data)


class BenchmarkConfigSnapshot(BenchmarkConfig):
    """Frozen copy of a :class:`BenchmarkConfig` fixed for the duration of a run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def thaw(self) -> BenchmarkConfig:
        """Return an editable copy, e.g. to re-run a historical configuration."""
        return BenchmarkConfig.model_validate(self.model_dump())
