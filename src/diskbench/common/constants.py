# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

BYTES_PER_KIB = 1024
BYTES_PER_MIB = 1024 * 1024
KIB_PER_MIB = 1024

NANOS_PER_MILLIS = 1_000_000
MICROS_PER_MILLIS = 1_000
MILLIS_PER_SECOND = 1_000

THREAD_COUNT_MIN = 1
THREAD_COUNT_MAX = 128
QUEUE_DEPTH_MIN = 1
QUEUE_DEPTH_MAX = 256
DURATION_SECONDS_MIN = 1
DURATION_SECONDS_MAX = 3600

FIO_JOB_NAME = "disk_benchmark"
FIO_MIXED_READ_PERCENT = 50

UNKNOWN_VERSION = "unknown"
VERSION_NOT_CONFIGURED = "not configured"
VERSION_NOT_FOUND = "not found"

ARTIFACT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
