# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for background benchmark execution."""

import threading
from unittest.mock import MagicMock

import pytest

from diskbench.common.config import BenchmarkConfigSnapshot
from diskbench.common.enums import RunStatus
from diskbench.orchestrator.background import BenchmarkRunner
from diskbench.orchestrator.models import BenchmarkResult
from diskbench.orchestrator.orchestrator import BenchmarkOrchestrator


@pytest.fixture
def gate():
    """Event that holds a fake run until the test releases it."""
    return threading.Event()


@pytest.fixture
def blocking_orchestrator(gate):
    orchestrator = MagicMock(spec=BenchmarkOrchestrator)

    def run(config):
        gate.wait(timeout=10)
        return BenchmarkResult.start(config).freeze()

    orchestrator.run.side_effect = run
    return orchestrator


class TestBenchmarkRunner:
    """Tests for BenchmarkRunner and BenchmarkRun."""

    def test_real_run_in_background(self, builtin_config):
        with BenchmarkRunner() as runner:
            run = runner.start(builtin_config)
            result = run.result(timeout=30)

        assert result.status == RunStatus.COMPLETED
        assert run.done()
        assert run.wait_result() is result

    def test_config_snapshotted_before_start_returns(
        self, builtin_config, blocking_orchestrator, gate
    ):
        with BenchmarkRunner(blocking_orchestrator) as runner:
            run = runner.start(builtin_config)
            builtin_config.queue_depth = 200
            gate.set()
            result = run.result(timeout=10)

        passed = blocking_orchestrator.run.call_args.args[0]
        assert isinstance(passed, BenchmarkConfigSnapshot)
        assert passed.queue_depth == 1
        assert result.queue_depth == 1

    def test_second_start_while_busy_is_refused(
        self, builtin_config, blocking_orchestrator, gate
    ):
        with BenchmarkRunner(blocking_orchestrator) as runner:
            run = runner.start(builtin_config)
            assert runner.busy

            with pytest.raises(RuntimeError, match="already running"):
                runner.start(builtin_config)

            gate.set()
            run.result(timeout=10)
            assert not runner.busy
            runner.start(builtin_config).result(timeout=10)

    def test_cancel_is_cooperative(
        self, builtin_config, blocking_orchestrator, gate
    ):
        with BenchmarkRunner(blocking_orchestrator) as runner:
            run = runner.start(builtin_config)
            run.cancel()

            assert run.cancelled
            assert not run.done()

            gate.set()
            assert run.wait_result(timeout=10) is None
            # The run still finished normally; only the caller discards it
            assert run.result().status == RunStatus.COMPLETED
