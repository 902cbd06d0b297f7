# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for ProcessRunner and ArtifactSink."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from diskbench.common.exceptions import ToolInvocationError
from diskbench.fio.process import ArtifactSink, ProcessOutput, ProcessRunner


class TestArtifactSink:
    """Tests for raw output persistence."""

    def test_writes_one_file_per_non_empty_stream(self, tmp_path):
        sink = ArtifactSink(tmp_path / "logs")

        written = sink.write("Random Mixed", "stdout text", "stderr text")

        names = sorted(path.name for path in written)
        assert len(names) == 2
        assert names[0].startswith("fio_error_Random_Mixed_")
        assert names[1].startswith("fio_output_Random_Mixed_")
        assert all(name.endswith(".txt") for name in names)
        assert {path.read_text() for path in written} == {"stdout text", "stderr text"}

    def test_skips_empty_streams(self, tmp_path):
        written = ArtifactSink(tmp_path).write("Sequential Read", "out", "")

        assert len(written) == 1
        assert written[0].name.startswith("fio_output_Sequential_Read_")

    def test_failure_is_logged_not_raised(self, tmp_path, caplog):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")

        written = ArtifactSink(blocker / "logs").write("Mixed", "out", "err")

        assert written == []
        assert "Failed to save fio output files" in caplog.text


class TestProcessRunnerRun:
    """Tests for full runs."""

    @patch("diskbench.fio.process.subprocess.run")
    def test_returns_separate_streams(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="{}", stderr="warning"
        )

        output = ProcessRunner().run("/usr/bin/fio", ["--name=x"])

        assert output == ProcessOutput(exit_code=0, stdout="{}", stderr="warning")
        command = mock_run.call_args.args[0]
        assert command == ["/usr/bin/fio", "--name=x"]
        kwargs = mock_run.call_args.kwargs
        assert kwargs["stdout"] == subprocess.PIPE
        assert kwargs["stderr"] == subprocess.PIPE
        assert "timeout" not in kwargs
        assert kwargs["env"]["LC_ALL"] == "C"

    @patch("diskbench.fio.process.subprocess.run")
    def test_writes_artifacts_when_labelled(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=1, stdout="out", stderr="err"
        )
        sink = MagicMock(spec=ArtifactSink)

        ProcessRunner(artifact_sink=sink).run("fio", [], artifact_label="Random Read")

        sink.write.assert_called_once_with("Random Read", "out", "err")

    @patch("diskbench.fio.process.subprocess.run")
    def test_no_artifacts_without_label(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="out", stderr=""
        )
        sink = MagicMock(spec=ArtifactSink)

        ProcessRunner(artifact_sink=sink).run("fio", [])

        sink.write.assert_not_called()

    def test_missing_executable_raises_invocation_error(self, tmp_path):
        missing = str(tmp_path / "no-such-fio")

        with pytest.raises(ToolInvocationError, match="Unable to start fio process"):
            ProcessRunner().run(missing, ["--version"])


class TestProcessRunnerProbe:
    """Tests for short probes such as --version."""

    @patch("diskbench.fio.process.subprocess.Popen")
    def test_merges_streams(self, mock_popen):
        process = mock_popen.return_value
        process.communicate.return_value = ("fio-3.35\n", None)

        output = ProcessRunner().probe("/opt/fio/fio", ["--version"], timeout=5)

        assert output == "fio-3.35\n"
        kwargs = mock_popen.call_args.kwargs
        assert kwargs["stderr"] == subprocess.STDOUT
        assert str(kwargs["cwd"]) == "/opt/fio"
        process.communicate.assert_called_once_with(timeout=5)

    @patch("diskbench.fio.process.subprocess.Popen")
    def test_timeout_kills_and_returns_partial_output(self, mock_popen):
        process = mock_popen.return_value
        process.communicate.side_effect = [
            subprocess.TimeoutExpired(cmd="fio", timeout=5),
            ("partial", None),
        ]

        output = ProcessRunner().probe("fio", ["--version"], timeout=5)

        assert output == "partial"
        process.kill.assert_called_once()
        assert process.communicate.call_args_list[1].kwargs["timeout"] > 0

    @patch("diskbench.fio.process.subprocess.Popen")
    def test_pipe_held_open_after_kill_returns_empty(self, mock_popen):
        process = mock_popen.return_value
        process.communicate.side_effect = [
            subprocess.TimeoutExpired(cmd="fio", timeout=5),
            subprocess.TimeoutExpired(cmd="fio", timeout=1),
        ]

        output = ProcessRunner().probe("fio", ["--version"], timeout=5)

        assert output == ""
        process.kill.assert_called_once()
        assert process.communicate.call_count == 2

    @patch("diskbench.fio.process.subprocess.Popen", side_effect=OSError("denied"))
    def test_start_failure_raises_invocation_error(self, _mock_popen):
        with pytest.raises(ToolInvocationError, match="denied"):
            ProcessRunner().probe("fio", ["--version"], timeout=5)
