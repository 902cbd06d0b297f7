# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""DiskBench - Disk I/O Benchmarking Tool."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("diskbench")
except PackageNotFoundError:
    __version__ = "unknown"
