# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Process environment settings.

All values can be overridden with `DISKBENCH_<NAME>` environment variables,
e.g. `DISKBENCH_LOG_DIR=/var/log/diskbench`.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_history_file() -> Path:
    return Path.home() / ".local" / "share" / "diskbench" / "history.json"


class _Environment(BaseSettings):
    """Runtime settings that are not part of a benchmark configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DISKBENCH_",
        extra="ignore",
    )

    LOG_DIR: Path = Field(
        default=Path("logs"),
        description="Directory for log files and raw fio output artifacts",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Console and file log level",
    )
    HISTORY_FILE: Path = Field(
        default_factory=_default_history_file,
        description="JSON file holding the benchmark history",
    )
    VERSION_PROBE_TIMEOUT: float = Field(
        default=5.0,
        gt=0,
        description="Maximum seconds to wait for 'fio --version'",
    )
    SCRATCH_FILE_NAME: str = Field(
        default="benchmark_test.tmp",
        description="Scratch file created in the test path by the built-in engine",
    )
    FIO_SCRATCH_FILE_NAME: str = Field(
        default="fio_test.tmp",
        description="Scratch file passed to fio as --filename",
    )


Environment = _Environment()
