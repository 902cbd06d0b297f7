# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""fio command line synthesis.

The argument order produced by :func:`build_fio_args` is fixed: callers and the
stored command strings rely on ``--output-format=json`` being the last flag.
"""

import ntpath
import os

from diskbench.common.config import BenchmarkConfig
from diskbench.common.constants import FIO_JOB_NAME, FIO_MIXED_READ_PERCENT
from diskbench.common.enums import TestType
from diskbench.common.environment import Environment

__all__ = [
    "build_fio_args",
    "build_fio_command",
    "convert_path_for_fio",
    "fio_scratch_path",
    "generate_command_preview",
    "rw_mode_for",
]

_RW_MODES: dict[TestType, str] = {
    TestType.SEQUENTIAL_READ: "read",
    TestType.SEQUENTIAL_WRITE: "write",
    TestType.RANDOM_READ: "randread",
    TestType.RANDOM_WRITE: "randwrite",
    TestType.MIXED: "readwrite",
    TestType.RANDOM_MIXED: "randrw",
}


def rw_mode_for(test_type: TestType) -> str:
    """Map a test type to fio's --rw value."""
    return _RW_MODES[TestType(test_type)]


def _is_drive_rooted(path: str) -> bool:
    return len(path) >= 2 and path[0].isalpha() and path[1] == ":"


def convert_path_for_fio(path: str) -> str:
    """Escape a drive-letter path the way fio expects on Windows.

    ``C:\\data\\f.tmp`` becomes ``c\\:data\\f.tmp``: the drive letter is
    lower-cased, the colon is escaped and the separator after it dropped. The
    rest of the path is kept as is. Paths without a drive letter are returned
    unchanged.
    """
    if not path or not _is_drive_rooted(path):
        return path

    drive = path[0].lower()
    remainder = path[2:]
    if remainder[:1] in ("\\", "/"):
        remainder = remainder[1:]
    return f"{drive}\\:{remainder}"


def fio_scratch_path(config: BenchmarkConfig) -> str:
    """Native path of the file fio reads and writes."""
    join = ntpath.join if _is_drive_rooted(config.test_path) else os.path.join
    return join(config.test_path, Environment.FIO_SCRATCH_FILE_NAME)


def build_fio_args(config: BenchmarkConfig) -> list[str]:
    """Build the ordered fio argument vector for a config."""
    args = [
        f"--name={FIO_JOB_NAME}",
        f"--filename={convert_path_for_fio(fio_scratch_path(config))}",
        f"--bs={config.block_size_kb}K",
        f"--rw={rw_mode_for(config.test_type)}",
        f"--iodepth={config.queue_depth}",
        f"--numjobs={config.thread_count}",
        f"--ioengine={config.io_engine}",
        "--group_reporting",
        f"--size={config.file_size_mb}M",
    ]

    if config.time_based:
        args.append(f"--runtime={config.duration_seconds}")
        args.append("--time_based")

    if config.use_direct_io:
        args.append("--direct=1")

    if config.use_thread:
        args.append("--thread")

    if config.test_type.is_mixed:
        args.append(f"--rwmixread={FIO_MIXED_READ_PERCENT}")

    args.append("--output-format=json")
    return args


def build_fio_command(config: BenchmarkConfig) -> str:
    """Render the full fio command line for display and the result record."""
    return f"{config.fio_path} {' '.join(build_fio_args(config))}"


def generate_command_preview(config: BenchmarkConfig) -> str:
    """Describe what a run of this config will execute.

    For fio runs this is the exact command line. For the built-in engine it is
    a human readable summary that is never parsed.
    """
    if config.use_fio:
        return build_fio_command(config)

    return (
        f"Built-in test: {config.test_type.label}\n"
        f"  Path: {config.test_path}\n"
        f"  File size: {config.file_size_mb} MB\n"
        f"  Block size: {config.block_size_kb} KB\n"
        f"  Threads: {config.thread_count}\n"
        f"  Queue depth: {config.queue_depth}\n"
        f"  Duration: {config.duration_seconds} s"
    )
