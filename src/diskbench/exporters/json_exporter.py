# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""JSON exporter for a single benchmark result."""

import logging
from pathlib import Path

import orjson

from diskbench.exporters.exporter_config import ExporterConfig

logger = logging.getLogger(__name__)


class JsonExporter:
    """Writes a finished result, config snapshot included, as indented JSON."""

    def __init__(self, exporter_config: ExporterConfig) -> None:
        if exporter_config.output_path is None:
            raise ValueError("JSON export requires an output path")
        self._result = exporter_config.result
        self._output_path = Path(exporter_config.output_path)

    def _generate_content(self) -> bytes:
        return orjson.dumps(
            self._result.model_dump(mode="json"), option=orjson.OPT_INDENT_2
        )

    def export(self) -> Path:
        """Write the export file, creating parent directories as needed.

        Raises:
            OSError: If the file cannot be written
        """
        self._output_path.parent.mkdir(parents=True, exist_ok=True)
        self._output_path.write_bytes(self._generate_content())
        logger.info(f"Exported result to {self._output_path}")
        return self._output_path
