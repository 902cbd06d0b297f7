# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from diskbench.orchestrator.models import FrozenBenchmarkResult


@runtime_checkable
class BenchmarkListenerProtocol(Protocol):
    """Receives notifications from a running benchmark.

    Notifications are delivered on the thread executing the run. Marshaling
    them onto a UI thread is the listener's job.
    """

    def on_progress(self, message: str) -> None: ...

    def on_completed(self, result: FrozenBenchmarkResult) -> None: ...


class NullListener:
    """Listener that ignores every notification."""

    def on_progress(self, message: str) -> None:
        pass

    def on_completed(self, result: FrozenBenchmarkResult) -> None:
        pass


class CallbackListener:
    """Adapts plain callables to :class:`BenchmarkListenerProtocol`."""

    def __init__(
        self,
        on_progress: Callable[[str], None] | None = None,
        on_completed: Callable[[FrozenBenchmarkResult], None] | None = None,
    ) -> None:
        self._on_progress = on_progress
        self._on_completed = on_completed

    def on_progress(self, message: str) -> None:
        if self._on_progress is not None:
            self._on_progress(message)

    def on_completed(self, result: FrozenBenchmarkResult) -> None:
        if self._on_completed is not None:
            self._on_completed(result)
