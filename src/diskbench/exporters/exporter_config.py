# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Configuration for result exporters."""

from dataclasses import dataclass
from pathlib import Path

from diskbench.orchestrator.models import FrozenBenchmarkResult


@dataclass(slots=True)
class ExporterConfig:
    """Configuration for result exporters.

    Attributes:
        result: Finished benchmark result to export
        output_path: File the export is written to, unused by console exporters
    """

    result: FrozenBenchmarkResult
    output_path: Path | None = None
