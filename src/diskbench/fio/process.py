# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Subprocess execution for the external fio tool."""

import logging
import os
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from diskbench.common.constants import ARTIFACT_TIMESTAMP_FORMAT
from diskbench.common.exceptions import ToolInvocationError

logger = logging.getLogger(__name__)

__all__ = [
    "ArtifactSink",
    "ProcessOutput",
    "ProcessRunner",
]

_KILL_DRAIN_TIMEOUT_SECONDS = 1.0


@dataclass(frozen=True, slots=True)
class ProcessOutput:
    """Captured result of a finished subprocess."""

    exit_code: int
    stdout: str
    stderr: str


def _command_env() -> dict[str, str]:
    # Force the C locale so numbers and units come out in a parseable form
    env = os.environ.copy()
    env["LC_ALL"] = "C"
    env["LANGUAGE"] = "C"
    return env


class ArtifactSink:
    """Best-effort writer for raw fio output.

    Each full run produces up to two files in the log directory,
    ``fio_output_<label>_<timestamp>.txt`` and ``fio_error_<label>_<timestamp>.txt``,
    one per non-empty stream. Failures are logged and never raised.
    """

    def __init__(self, log_dir: Path) -> None:
        self.log_dir = Path(log_dir)

    def write(self, label: str, stdout: str, stderr: str) -> list[Path]:
        """Persist the captured streams and return the files written."""
        written: list[Path] = []
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            safe_label = label.replace(" ", "_")
            timestamp = datetime.now().strftime(ARTIFACT_TIMESTAMP_FORMAT)

            for prefix, text in (("fio_output", stdout), ("fio_error", stderr)):
                if not text:
                    continue
                path = self.log_dir / f"{prefix}_{safe_label}_{timestamp}.txt"
                path.write_text(text, encoding="utf-8")
                logger.debug(f"Saved {prefix} to {path}")
                written.append(path)
        except Exception as e:
            logger.warning(f"Failed to save fio output files: {e!r}")
        return written


class ProcessRunner:
    """Spawns an executable and captures its output.

    Two modes are supported:
    - :meth:`probe` merges stdout and stderr and waits a bounded time, returning
      whatever was captured even when the process has to be killed.
    - :meth:`run` keeps the streams separate and waits for the process to exit
      without a timeout; the benchmark's own runtime governs how long that takes.
    """

    def __init__(self, artifact_sink: ArtifactSink | None = None) -> None:
        self.artifact_sink = artifact_sink

    def probe(
        self, executable: str, args: Sequence[str], timeout: float
    ) -> str:
        """Run a short command such as ``--version`` and return its merged output.

        Raises:
            ToolInvocationError: If the executable cannot be started
        """
        command = [executable, *args]
        workdir = Path(executable).parent if Path(executable).is_absolute() else None
        try:
            process = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                text=True,
                errors="replace",
                cwd=workdir,
                env=_command_env(),
            )
        except OSError as e:
            raise ToolInvocationError(executable, str(e)) from e

        try:
            output, _ = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning(
                f"{executable} did not exit within {timeout}s, using partial output"
            )
            process.kill()
            try:
                output, _ = process.communicate(timeout=_KILL_DRAIN_TIMEOUT_SECONDS)
            except subprocess.TimeoutExpired:
                # A child that inherited the pipe can keep it open after the kill
                logger.warning(f"{executable} output pipe still open after kill")
                output = ""
        return output or ""

    def run(
        self,
        executable: str,
        args: Sequence[str],
        artifact_label: str | None = None,
    ) -> ProcessOutput:
        """Run the executable to completion.

        Args:
            executable: Path of the program to start
            args: Argument vector, without the program itself
            artifact_label: When set and a sink is configured, the raw streams are
                saved under this label

        Raises:
            ToolInvocationError: If the executable cannot be started
        """
        command = [executable, *args]
        try:
            completed = subprocess.run(
                command,
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                text=True,
                errors="replace",
                env=_command_env(),
            )
        except OSError as e:
            raise ToolInvocationError(executable, str(e)) from e

        logger.debug(f"{executable} exited with code {completed.returncode}")
        output = ProcessOutput(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

        if self.artifact_sink is not None and artifact_label:
            self.artifact_sink.write(artifact_label, output.stdout, output.stderr)

        return output
