# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Detection of the installed fio version."""

import logging
import os
import re
import shutil

from diskbench.common.constants import (
    UNKNOWN_VERSION,
    VERSION_NOT_CONFIGURED,
    VERSION_NOT_FOUND,
)
from diskbench.common.environment import Environment
from diskbench.fio.process import ProcessRunner

logger = logging.getLogger(__name__)

__all__ = [
    "get_fio_version",
    "parse_version_output",
    "resolve_tool_path",
]

_DASH_VERSION = re.compile(r"fio[-\s]+([\d.]+)", re.IGNORECASE)
_WORD_VERSION = re.compile(r"fio\s+version\s+([\d.]+)", re.IGNORECASE)
_BARE_VERSION = re.compile(r"(\d+\.\d+(?:\.\d+)?)")


def resolve_tool_path(tool_path: str) -> str:
    """Resolve a configured tool path to an absolute file path.

    Existing files are returned as absolute paths. A bare name such as ``fio``
    is looked up on PATH. Anything that cannot be found is returned unchanged.
    """
    if not tool_path:
        return ""
    if os.path.isfile(tool_path):
        return os.path.abspath(tool_path)
    if not os.path.isabs(tool_path):
        found = shutil.which(tool_path)
        if found:
            return os.path.abspath(found)
    return tool_path


def parse_version_output(output: str) -> str | None:
    """Extract a version from ``fio --version`` output.

    Recognizes ``fio-3.35``, ``fio version 3.35`` and a bare ``3.35[.1]`` on a
    line mentioning fio. A line containing both "fio" and "version" that none
    of those match is returned verbatim. Returns None when nothing matches.
    """
    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        if match := _DASH_VERSION.search(line):
            return f"fio-{match.group(1)}"
        if match := _WORD_VERSION.search(line):
            return f"fio-{match.group(1)}"

        lowered = line.lower()
        if "fio" in lowered:
            if match := _BARE_VERSION.search(line):
                return f"fio-{match.group(1)}"
            if "version" in lowered:
                return line
    return None


def get_fio_version(
    fio_path: str,
    runner: ProcessRunner | None = None,
    timeout: float | None = None,
) -> str:
    """Best-effort probe of the fio version.

    Never raises. Returns "not configured" for an empty path, "not found" when
    the executable does not exist and "unknown" when the probe fails or its
    output has no recognizable version.
    """
    if not fio_path:
        logger.debug("fio path is empty")
        return VERSION_NOT_CONFIGURED

    actual_path = resolve_tool_path(fio_path)
    if not actual_path or not os.path.isfile(actual_path):
        logger.debug(f"fio executable not found: {actual_path}")
        return VERSION_NOT_FOUND

    runner = runner or ProcessRunner()
    timeout = timeout if timeout is not None else Environment.VERSION_PROBE_TIMEOUT
    try:
        output = runner.probe(actual_path, ["--version"], timeout=timeout)
    except Exception as e:
        logger.warning(f"Failed to get fio version: {e!r}")
        return UNKNOWN_VERSION

    logger.debug(f"fio --version output: {output!r}")
    return parse_version_output(output) or UNKNOWN_VERSION
