# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Enumerations shared across DiskBench."""

from enum import Enum


class TestType(str, Enum):
    """I/O workload pattern for a benchmark run."""

    __test__ = False

    SEQUENTIAL_READ = "sequential_read"
    SEQUENTIAL_WRITE = "sequential_write"
    RANDOM_READ = "random_read"
    RANDOM_WRITE = "random_write"
    MIXED = "mixed"
    RANDOM_MIXED = "random_mixed"

    @property
    def label(self) -> str:
        """Human readable name, used in previews and artifact file names."""
        return _TEST_TYPE_LABELS[self]

    @property
    def is_random(self) -> bool:
        return self in (
            TestType.RANDOM_READ,
            TestType.RANDOM_WRITE,
            TestType.RANDOM_MIXED,
        )

    @property
    def is_mixed(self) -> bool:
        return self in (TestType.MIXED, TestType.RANDOM_MIXED)

    @property
    def reads(self) -> bool:
        """Whether this workload has a read phase."""
        return self not in (TestType.SEQUENTIAL_WRITE, TestType.RANDOM_WRITE)

    @property
    def writes(self) -> bool:
        """Whether this workload has a write phase."""
        return self not in (TestType.SEQUENTIAL_READ, TestType.RANDOM_READ)


_TEST_TYPE_LABELS = {
    TestType.SEQUENTIAL_READ: "Sequential Read",
    TestType.SEQUENTIAL_WRITE: "Sequential Write",
    TestType.RANDOM_READ: "Random Read",
    TestType.RANDOM_WRITE: "Random Write",
    TestType.MIXED: "Mixed",
    TestType.RANDOM_MIXED: "Random Mixed",
}


class RunStatus(str, Enum):
    """Lifecycle status of a benchmark result."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class PathValidation(str, Enum):
    """Outcome of validating a benchmark test directory."""

    OK = "ok"
    DOES_NOT_EXIST = "does_not_exist"
    NOT_A_DIRECTORY = "not_a_directory"
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"

    @property
    def message(self) -> str:
        return _PATH_VALIDATION_MESSAGES[self]


_PATH_VALIDATION_MESSAGES = {
    PathValidation.OK: "Path is valid",
    PathValidation.DOES_NOT_EXIST: "Path does not exist",
    PathValidation.NOT_A_DIRECTORY: "Path is not a directory",
    PathValidation.INSUFFICIENT_PERMISSIONS: "Insufficient permissions to read and write in path",
}
