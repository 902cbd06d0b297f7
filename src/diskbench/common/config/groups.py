# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from cyclopts import Group


class Groups:
    """CLI help groups for benchmark configuration options."""

    TEST_PARAMETERS = Group.create_ordered("Test Parameters")
    FIO = Group.create_ordered("FIO")
    OUTPUT = Group.create_ordered("Output")
