# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for fio command synthesis and path translation."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from diskbench.common.config import BenchmarkConfig
from diskbench.common.enums import TestType
from diskbench.fio.command import (
    build_fio_args,
    build_fio_command,
    convert_path_for_fio,
    fio_scratch_path,
    generate_command_preview,
    rw_mode_for,
)

FIXED_PREFIX = [
    "--name",
    "--filename",
    "--bs",
    "--rw",
    "--iodepth",
    "--numjobs",
    "--ioengine",
    "--group_reporting",
    "--size",
]


def flag_names(args: list[str]) -> list[str]:
    return [arg.split("=", 1)[0] for arg in args]


class TestRwMode:
    """Tests for the test type to --rw mapping."""

    @pytest.mark.parametrize(
        "test_type,expected",
        [
            (TestType.SEQUENTIAL_READ, "read"),
            (TestType.SEQUENTIAL_WRITE, "write"),
            (TestType.RANDOM_READ, "randread"),
            (TestType.RANDOM_WRITE, "randwrite"),
            (TestType.MIXED, "readwrite"),
            (TestType.RANDOM_MIXED, "randrw"),
        ],
    )
    def test_mapping(self, test_type, expected):
        assert rw_mode_for(test_type) == expected

    def test_mapping_is_total(self):
        assert len({rw_mode_for(t) for t in TestType}) == len(TestType)


class TestConvertPathForFio:
    """Tests for drive letter escaping."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("C:\\data\\f.tmp", "c\\:data\\f.tmp"),
            ("D:\\fio_test.tmp", "d\\:fio_test.tmp"),
            ("e:/mnt/f.tmp", "e\\:mnt/f.tmp"),
            ("/mnt/data/f.tmp", "/mnt/data/f.tmp"),
            ("relative/f.tmp", "relative/f.tmp"),
            ("", ""),
        ],
    )
    def test_convert(self, path, expected):
        assert convert_path_for_fio(path) == expected


class TestBuildFioArgs:
    """Tests for the fio argument vector."""

    def test_full_vector(self):
        config = BenchmarkConfig(
            test_path="/mnt/data",
            file_size_mb=1024,
            block_size_kb=512,
            test_type=TestType.RANDOM_MIXED,
            thread_count=16,
            queue_depth=16,
            duration_seconds=30,
            io_engine="libaio",
            time_based=True,
            use_direct_io=True,
            use_thread=True,
        )

        assert build_fio_args(config) == [
            "--name=disk_benchmark",
            "--filename=/mnt/data/fio_test.tmp",
            "--bs=512K",
            "--rw=randrw",
            "--iodepth=16",
            "--numjobs=16",
            "--ioengine=libaio",
            "--group_reporting",
            "--size=1024M",
            "--runtime=30",
            "--time_based",
            "--direct=1",
            "--thread",
            "--rwmixread=50",
            "--output-format=json",
        ]

    def test_minimal_vector(self):
        config = BenchmarkConfig(
            test_path="/mnt/data",
            test_type=TestType.SEQUENTIAL_READ,
            time_based=False,
            use_direct_io=False,
            use_thread=False,
        )

        args = build_fio_args(config)
        assert flag_names(args) == [*FIXED_PREFIX, "--output-format"]

    def test_windows_drive_path_is_escaped(self):
        config = BenchmarkConfig(test_path="C:\\data", io_engine="windowsaio")

        assert fio_scratch_path(config) == "C:\\data\\fio_test.tmp"
        assert "--filename=c\\:data\\fio_test.tmp" in build_fio_args(config)

    @given(
        test_type=st.sampled_from(list(TestType)),
        time_based=st.booleans(),
        direct=st.booleans(),
        thread=st.booleans(),
        threads=st.integers(1, 128),
        depth=st.integers(1, 256),
    )
    def test_order_is_fixed(self, test_type, time_based, direct, thread, threads, depth):
        config = BenchmarkConfig(
            test_path="/mnt/data",
            test_type=test_type,
            time_based=time_based,
            use_direct_io=direct,
            use_thread=thread,
            thread_count=threads,
            queue_depth=depth,
        )
        names = flag_names(build_fio_args(config))

        expected = list(FIXED_PREFIX)
        if time_based:
            expected += ["--runtime", "--time_based"]
        if direct:
            expected.append("--direct")
        if thread:
            expected.append("--thread")
        if test_type.is_mixed:
            expected.append("--rwmixread")
        expected.append("--output-format")

        assert names == expected
        assert names[-1] == "--output-format"


class TestCommandText:
    """Tests for the rendered command and preview."""

    def test_command_starts_with_tool_path(self):
        config = BenchmarkConfig(test_path="/mnt/data", fio_path="/usr/bin/fio")
        command = build_fio_command(config)

        assert command.startswith("/usr/bin/fio --name=disk_benchmark ")
        assert command.endswith("--output-format=json")

    def test_preview_for_fio_is_command(self):
        config = BenchmarkConfig(test_path="/mnt/data")
        assert generate_command_preview(config) == build_fio_command(config)

    def test_preview_for_builtin_is_descriptive(self):
        config = BenchmarkConfig(
            test_path="/mnt/data",
            use_fio=False,
            test_type=TestType.SEQUENTIAL_WRITE,
            file_size_mb=64,
            block_size_kb=128,
        )
        preview = generate_command_preview(config)

        assert preview.splitlines()[0] == "Built-in test: Sequential Write"
        assert "  File size: 64 MB" in preview
        assert "  Block size: 128 KB" in preview
        assert "--" not in preview
