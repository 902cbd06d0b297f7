# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for DiskBench tests."""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from diskbench.common.config import BenchmarkConfig
from diskbench.common.enums import TestType
from diskbench.common.environment import Environment
from diskbench.orchestrator.models import (
    BenchmarkResult,
    FrozenBenchmarkResult,
    IOMetrics,
)


@pytest.fixture(autouse=True, scope="session")
def isolated_environment(tmp_path_factory: pytest.TempPathFactory) -> Iterator[None]:
    """Keep logs, artifacts and history out of the working directory."""
    base = tmp_path_factory.mktemp("diskbench-env")
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr(Environment, "LOG_DIR", base / "logs")
        mp.setattr(Environment, "HISTORY_FILE", base / "history.json")
        yield


@pytest.fixture
def test_dir(tmp_path: Path) -> Path:
    """A writable directory to run benchmarks in."""
    directory = tmp_path / "bench"
    directory.mkdir()
    return directory


@pytest.fixture
def fio_config(test_dir: Path) -> BenchmarkConfig:
    """A small fio config on a POSIX path."""
    return BenchmarkConfig(
        test_path=str(test_dir),
        file_size_mb=16,
        block_size_kb=4,
        test_type=TestType.RANDOM_READ,
        thread_count=2,
        queue_depth=8,
        duration_seconds=5,
        use_fio=True,
        fio_path="fio",
        io_engine="libaio",
    )


@pytest.fixture
def builtin_config(test_dir: Path) -> BenchmarkConfig:
    """A tiny built-in engine config that finishes in well under a second."""
    return BenchmarkConfig(
        test_path=str(test_dir),
        file_size_mb=1,
        block_size_kb=64,
        test_type=TestType.RANDOM_MIXED,
        thread_count=1,
        queue_depth=1,
        duration_seconds=5,
        use_fio=False,
    )


@pytest.fixture
def make_result(
    builtin_config: BenchmarkConfig,
) -> Callable[..., FrozenBenchmarkResult]:
    """Factory for finished results with chosen metrics and overrides."""

    def _make(metrics: IOMetrics | None = None, **overrides) -> FrozenBenchmarkResult:
        result = BenchmarkResult.start(builtin_config.snapshot(), command="preview")
        if metrics is not None:
            result.metrics = metrics
        for name, value in overrides.items():
            setattr(result, name, value)
        return result.freeze()

    return _make
