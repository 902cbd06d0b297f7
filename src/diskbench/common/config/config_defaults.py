# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import sys
from dataclasses import dataclass

from diskbench.common.enums import TestType

_IS_WINDOWS = sys.platform == "win32"


@dataclass(frozen=True)
class BenchmarkDefaults:
    FILE_SIZE_MB = 1024
    BLOCK_SIZE_KB = 512
    TEST_TYPE = TestType.RANDOM_MIXED
    THREAD_COUNT = 16
    QUEUE_DEPTH = 16
    DURATION_SECONDS = 30
    USE_FIO = True
    FIO_PATH = "fio.exe" if _IS_WINDOWS else "fio"
    USE_DIRECT_IO = True
    TIME_BASED = True
    IO_ENGINE = "windowsaio" if _IS_WINDOWS else "libaio"
    USE_THREAD = True


BLOCK_SIZE_CHOICES_KB = (4, 8, 16, 32, 64, 128, 256, 512, 1024, 2048, 4096)

IO_ENGINE_CHOICES = (
    "windowsaio",
    "libaio",
    "io_uring",
    "psync",
    "sync",
    "posixaio",
    "mmap",
)
