# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Persistent history of finished benchmark results."""

import logging
from pathlib import Path

import orjson
from pydantic import ValidationError

from diskbench.orchestrator.models import FrozenBenchmarkResult

logger = logging.getLogger(__name__)

__all__ = [
    "HistoryStore",
]


class HistoryStore:
    """Benchmark results kept in a single JSON file.

    The file holds a JSON array of serialized results. It is loaded lazily on
    first access and rewritten after every change. A missing or unreadable
    file is treated as an empty history; a failed save is logged and the
    in-memory history is kept.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._results: list[FrozenBenchmarkResult] | None = None

    def _load(self) -> list[FrozenBenchmarkResult]:
        if self._results is not None:
            return self._results

        self._results = []
        if not self.path.exists():
            return self._results

        try:
            entries = orjson.loads(self.path.read_bytes())
            if not isinstance(entries, list):
                raise ValueError("history file does not contain a list")
            self._results = [
                FrozenBenchmarkResult.model_validate(entry) for entry in entries
            ]
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Failed to load history from {self.path}: {e!r}")
            self._results = []

        logger.debug(f"Loaded {len(self._results)} history entries")
        return self._results

    def _save(self) -> None:
        data = [result.model_dump(mode="json") for result in self._load()]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))
        except OSError as e:
            logger.warning(f"Failed to save history to {self.path}: {e!r}")

    def append(self, result: FrozenBenchmarkResult) -> None:
        """Add a finished result and save immediately."""
        self._load().append(result)
        self._save()

    def list(self, limit: int | None = None) -> list[FrozenBenchmarkResult]:
        """Return stored results, newest first.

        Raises:
            ValueError: If limit is given and is not positive
        """
        if limit is not None and limit < 1:
            raise ValueError(f"History limit must be at least 1, got {limit}")
        results = sorted(self._load(), key=lambda r: r.timestamp, reverse=True)
        return results[:limit] if limit is not None else results

    def clear(self) -> None:
        """Remove every stored result and save the empty history."""
        self._results = []
        self._save()
        logger.info(f"Cleared benchmark history in {self.path}")

    def __len__(self) -> int:
        return len(self._load())
