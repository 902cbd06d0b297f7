# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Command line interface for DiskBench."""

import sys
from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter, validators

from diskbench import __version__
from diskbench.common.config import BenchmarkConfig, BenchmarkDefaults, Groups

app = App(
    name="diskbench",
    help="Disk I/O benchmarking with fio or a built-in engine",
    version=__version__,
)
history_app = App(name="history", help="Show or clear past benchmark results")
app.command(history_app)

ConfigParameter = Annotated[BenchmarkConfig | None, Parameter(name="*")]


@app.command(name="run")
def run(
    config: ConfigParameter = None,
    *,
    export: Annotated[
        Path | None,
        Parameter(
            name=("--export", "-o"),
            group=Groups.OUTPUT,
            help="Write the result as JSON to this file.",
        ),
    ] = None,
    save_history: Annotated[
        bool,
        Parameter(
            name=("--history",),
            group=Groups.OUTPUT,
            help="Record the result in the benchmark history.",
        ),
    ] = True,
) -> None:
    """Run a disk benchmark and print the result.

    Exits with code 2 when the test path is invalid and 1 when the run fails.
    """
    from diskbench import cli_runner

    if config is None:
        config = BenchmarkConfig()
    cli_runner.configure_logging()
    code = cli_runner.run_benchmark(config, export=export, save_history=save_history)
    if code != cli_runner.EXIT_OK:
        sys.exit(code)


@app.command(name="preview")
def preview(config: ConfigParameter = None) -> None:
    """Print the fio command line, or the built-in test summary, without running it."""
    from diskbench import cli_runner

    cli_runner.print_preview(config if config is not None else BenchmarkConfig())


@app.command(name="version")
def version(
    fio_path: Annotated[
        str, Parameter(name=("--fio-path",), help="fio executable to probe.")
    ] = BenchmarkDefaults.FIO_PATH,
) -> None:
    """Print the DiskBench version and the detected fio version."""
    from diskbench import cli_runner

    cli_runner.print_versions(fio_path)


@app.command(name="validate")
def validate(path: str) -> None:
    """Check that PATH is an existing directory that can be read and written.

    Args:
        path: Directory to check
    """
    from diskbench import cli_runner

    code = cli_runner.validate_path(path)
    if code != cli_runner.EXIT_OK:
        sys.exit(code)


@history_app.command(name="list")
def history_list(
    limit: Annotated[
        int | None,
        Parameter(
            name=("--limit", "-n"),
            help="Show at most this many entries.",
            validator=validators.Number(gte=1),
        ),
    ] = None,
) -> None:
    """List past results, newest first."""
    from diskbench import cli_runner

    cli_runner.list_history(limit=limit)


@history_app.command(name="clear")
def history_clear() -> None:
    """Delete all stored results."""
    from diskbench import cli_runner

    cli_runner.clear_history()


def main() -> None:
    app()
