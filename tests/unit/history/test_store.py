# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for HistoryStore."""

from datetime import datetime, timedelta

import orjson
import pytest

from diskbench.common.enums import RunStatus
from diskbench.history.store import HistoryStore
from diskbench.orchestrator.models import IOMetrics


class TestHistoryStore:
    """Tests for append, list and clear."""

    def test_missing_file_is_empty(self, tmp_path):
        store = HistoryStore(tmp_path / "history.json")

        assert store.list() == []
        assert len(store) == 0

    def test_append_persists_immediately(self, tmp_path, make_result):
        path = tmp_path / "nested" / "history.json"
        result = make_result(IOMetrics(read_speed_mbs=42.0))

        HistoryStore(path).append(result)

        entries = orjson.loads(path.read_bytes())
        assert len(entries) == 1
        assert HistoryStore(path).list() == [result]

    def test_list_is_newest_first(self, tmp_path, make_result):
        now = datetime(2024, 5, 1, 12, 0, 0)
        store = HistoryStore(tmp_path / "history.json")
        for offset in (2, 0, 1):
            store.append(make_result(timestamp=now + timedelta(minutes=offset)))

        listed = HistoryStore(store.path).list()

        assert [r.timestamp for r in listed] == [
            now + timedelta(minutes=2),
            now + timedelta(minutes=1),
            now,
        ]
        assert len(HistoryStore(store.path).list(limit=2)) == 2

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_rejected(self, tmp_path, make_result, limit):
        store = HistoryStore(tmp_path / "history.json")
        store.append(make_result())

        with pytest.raises(ValueError, match="at least 1"):
            store.list(limit=limit)
        assert len(store.list()) == 1

    def test_clear(self, tmp_path, make_result):
        store = HistoryStore(tmp_path / "history.json")
        store.append(make_result())
        store.append(make_result(status=RunStatus.FAILED, error_message="boom"))

        store.clear()

        assert store.list() == []
        assert orjson.loads(store.path.read_bytes()) == []

    def test_corrupt_file_treated_as_empty(self, tmp_path, caplog):
        path = tmp_path / "history.json"
        path.write_text("{not json")

        assert HistoryStore(path).list() == []
        assert "Failed to load history" in caplog.text

    def test_wrong_shape_treated_as_empty(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_bytes(orjson.dumps({"results": []}))

        assert HistoryStore(path).list() == []

    def test_save_failure_is_logged(self, tmp_path, make_result, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        store = HistoryStore(blocker / "history.json")

        store.append(make_result())

        assert len(store) == 1
        assert "Failed to save history" in caplog.text
