# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from diskbench.common.config.benchmark_config import (
    BenchmarkConfig,
    BenchmarkConfigSnapshot,
    clamp,
)
from diskbench.common.config.config_defaults import (
    BLOCK_SIZE_CHOICES_KB,
    IO_ENGINE_CHOICES,
    BenchmarkDefaults,
)
from diskbench.common.config.groups import Groups

__all__ = [
    "BLOCK_SIZE_CHOICES_KB",
    "IO_ENGINE_CHOICES",
    "BenchmarkConfig",
    "BenchmarkConfigSnapshot",
    "BenchmarkDefaults",
    "Groups",
    "clamp",
]
