# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Exceptions raised inside DiskBench.

None of these escape `BenchmarkOrchestrator.run`; they are converted into a
failed result at the orchestrator boundary.
"""


class DiskBenchError(Exception):
    """Base class for all DiskBench errors."""


class ToolInvocationError(DiskBenchError):
    """The external benchmark executable could not be started."""

    def __init__(self, tool_path: str, reason: str = "") -> None:
        message = f"Unable to start fio process: {tool_path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.tool_path = tool_path


class ToolExecutionError(DiskBenchError):
    """The external benchmark executable exited with a non-zero code."""

    def __init__(self, exit_code: int, stderr: str) -> None:
        super().__init__(stderr)
        self.exit_code = exit_code
        self.stderr = stderr


class ScratchFileError(DiskBenchError):
    """Creating, writing or reading the custom engine scratch file failed."""


class PathValidationError(DiskBenchError):
    """The requested test path cannot host a benchmark run."""
