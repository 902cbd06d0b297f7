# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Validation of the directory a benchmark runs in."""

import logging
import os
from pathlib import Path

from diskbench.common.enums import PathValidation

logger = logging.getLogger(__name__)


def validate_test_path(path: str | os.PathLike[str]) -> PathValidation:
    """Check that `path` is an existing directory we can read and write.

    Advisory while a config is being edited; the CLI enforces it only when a
    run is actually started.
    """
    if not str(path).strip():
        return PathValidation.DOES_NOT_EXIST

    test_path = Path(path)
    if not test_path.exists():
        return PathValidation.DOES_NOT_EXIST
    if not test_path.is_dir():
        return PathValidation.NOT_A_DIRECTORY
    if not os.access(test_path, os.R_OK | os.W_OK | os.X_OK):
        logger.debug(f"Missing read/write access to {test_path}")
        return PathValidation.INSUFFICIENT_PERMISSIONS
    return PathValidation.OK
