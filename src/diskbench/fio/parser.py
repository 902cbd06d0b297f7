# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Parsing of fio output into throughput, IOPS and latency.

Parsing is done by an ordered list of strategies. Each strategy either
recognizes the output and returns the fields it found, or returns None to hand
over to the next one. The default order is:

1. :class:`JsonOutputStrategy` - the JSON document produced by
   ``--output-format=json``, aggregated over all jobs.
2. :class:`TextOutputStrategy` - line based scan of fio's human readable output.

No strategy raises. Fields that no strategy found are reported as 0.
"""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import orjson

from diskbench.common.constants import (
    BYTES_PER_MIB,
    KIB_PER_MIB,
    MICROS_PER_MILLIS,
    MILLIS_PER_SECOND,
    NANOS_PER_MILLIS,
)
from diskbench.orchestrator.models import IOMetrics

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_STRATEGIES",
    "DirectionMetrics",
    "JsonOutputStrategy",
    "OutputParseStrategy",
    "ParsedOutput",
    "TextOutputStrategy",
    "convert_to_mbps",
    "convert_to_ms",
    "parse_fio_output",
]

_BANDWIDTH_FACTORS: dict[str, float] = {
    "B/S": 1 / BYTES_PER_MIB,
    "KB/S": 1 / KIB_PER_MIB,
    "KIB/S": 1 / KIB_PER_MIB,
    "MB/S": 1.0,
    "MIB/S": 1.0,
    "GB/S": 1024.0,
    "GIB/S": 1024.0,
    "TB/S": 1024.0 * 1024.0,
    "TIB/S": 1024.0 * 1024.0,
}

_LATENCY_FACTORS: dict[str, float] = {
    "ns": 1 / NANOS_PER_MILLIS,
    "nsec": 1 / NANOS_PER_MILLIS,
    "us": 1 / MICROS_PER_MILLIS,
    "usec": 1 / MICROS_PER_MILLIS,
    "ms": 1.0,
    "msec": 1.0,
    "s": float(MILLIS_PER_SECOND),
    "sec": float(MILLIS_PER_SECOND),
}


def convert_to_mbps(value: float, unit: str) -> float:
    """Normalize a bandwidth value to MB/s. Unknown units are treated as B/s."""
    factor = _BANDWIDTH_FACTORS.get(unit.upper(), _BANDWIDTH_FACTORS["B/S"])
    return value * factor


def convert_to_ms(value: float, unit: str) -> float:
    """Normalize a latency value to milliseconds. Unknown units are taken as ms."""
    return value * _LATENCY_FACTORS.get(unit.lower(), 1.0)


@dataclass
class DirectionMetrics:
    """Metrics found for one I/O direction. None means the field was not reported."""

    speed_mbs: float | None = None
    iops: float | None = None
    latency_ms: float | None = None


@dataclass
class ParsedOutput:
    """Fields recovered by a parse strategy."""

    read: DirectionMetrics
    write: DirectionMetrics

    def to_metrics(self) -> IOMetrics:
        return IOMetrics(
            read_speed_mbs=self.read.speed_mbs or 0.0,
            write_speed_mbs=self.write.speed_mbs or 0.0,
            read_iops=self.read.iops or 0.0,
            write_iops=self.write.iops or 0.0,
            read_latency_ms=self.read.latency_ms or 0.0,
            write_latency_ms=self.write.latency_ms or 0.0,
        )


class OutputParseStrategy(ABC):
    """A single way of reading fio output."""

    name: str = ""

    @abstractmethod
    def parse(self, output: str) -> ParsedOutput | None:
        """Parse fio output.

        Returns:
            The recovered fields, or None if this strategy does not apply and the
            next one should be tried. Must not raise.
        """


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class JsonOutputStrategy(OutputParseStrategy):
    """Reads the ``jobs`` list of fio's JSON output.

    The JSON object is taken from the first ``{`` to the last ``}`` so that
    warnings printed around it do not matter. Per job and direction:

    - ``bw`` is KB/s and converted to MB/s
    - ``iops`` is used as is
    - latency is taken from ``lat_ns.mean``, ``lat_ns.avg``, ``lat.mean`` or
      ``lat.avg`` in that order; the ``lat`` values are milliseconds

    Bandwidth and IOPS are summed over jobs, latency is averaged over the jobs
    that reported one.
    """

    name = "json"

    def parse(self, output: str) -> ParsedOutput | None:
        try:
            return self._parse(output)
        except Exception as e:
            logger.warning(f"JSON parsing failed, falling back to text parsing: {e!r}")
            return None

    def _parse(self, output: str) -> ParsedOutput | None:
        start = output.find("{")
        end = output.rfind("}")
        if start < 0 or end <= start:
            logger.debug("No JSON object found in fio output")
            return None

        document = orjson.loads(output[start : end + 1])
        jobs = document.get("jobs") if isinstance(document, dict) else None
        if not isinstance(jobs, list) or not jobs:
            logger.debug("fio JSON output has no jobs")
            return None

        return ParsedOutput(
            read=self._aggregate(jobs, "read"),
            write=self._aggregate(jobs, "write"),
        )

    def _aggregate(self, jobs: list[Any], direction: str) -> DirectionMetrics:
        total_bw_mbs = 0.0
        total_iops = 0.0
        latencies: list[float] = []
        reporting_jobs = 0

        for job in jobs:
            if not isinstance(job, dict):
                continue
            section = job.get(direction)
            if not isinstance(section, dict):
                logger.debug(f"Job {job.get('jobname', '?')} has no {direction} section")
                continue

            reporting_jobs += 1
            bw_kbs = _as_float(section.get("bw")) or 0.0
            iops = _as_float(section.get("iops")) or 0.0
            total_bw_mbs += bw_kbs / KIB_PER_MIB
            total_iops += iops

            latency_ns = self._latency_ns(section)
            if latency_ns is not None:
                latencies.append(latency_ns / NANOS_PER_MILLIS)

            logger.debug(
                f"{direction} job stats - bw: {bw_kbs} KB/s, iops: {iops}, lat_ns: {latency_ns}"
            )

        if reporting_jobs == 0:
            return DirectionMetrics()

        return DirectionMetrics(
            speed_mbs=total_bw_mbs,
            iops=total_iops,
            latency_ms=sum(latencies) / len(latencies) if latencies else None,
        )

    @staticmethod
    def _latency_ns(section: dict[str, Any]) -> float | None:
        lat_ns = section.get("lat_ns")
        if isinstance(lat_ns, dict):
            for key in ("mean", "avg"):
                value = _as_float(lat_ns.get(key))
                if value is not None:
                    return value

        lat_ms = section.get("lat")
        if isinstance(lat_ms, dict):
            for key in ("mean", "avg"):
                value = _as_float(lat_ms.get(key))
                if value is not None:
                    return value * NANOS_PER_MILLIS
        return None


class TextOutputStrategy(OutputParseStrategy):
    """Line based scan of fio's text output.

    A line containing ``READ:``/``read:`` or ``WRITE:``/``write:`` selects the
    direction that its ``bw=``, ``iops=`` and latency ``avg=`` values feed.
    Latency lines that follow a direction line (``lat (usec): ... avg=...``)
    are attributed to that direction. Later matches override earlier ones.
    """

    name = "text"

    _BW = re.compile(r"bw=\s*([\d.]+)\s*([A-Za-z]+/s)", re.IGNORECASE)
    _IOPS = re.compile(r"iops=\s*([\d.]+)([kKmM]?)\b", re.IGNORECASE)
    _LAT_UNIT_FIRST = re.compile(r"\blat\s*\((\w+)\)\s*:.*?avg=\s*([\d.]+)")
    _LAT_UNIT_AFTER = re.compile(r"\blat\b.*?avg=\s*([\d.]+)\s*([A-Za-z]+)?")

    def parse(self, output: str) -> ParsedOutput | None:
        parsed = ParsedOutput(read=DirectionMetrics(), write=DirectionMetrics())
        current: DirectionMetrics | None = None

        for line in output.splitlines():
            if not line.strip():
                continue
            is_read = "READ:" in line or "read:" in line
            is_write = "WRITE:" in line or "write:" in line
            try:
                if is_read:
                    current = parsed.read
                    self._parse_line(line, current)
                if is_write:
                    current = parsed.write
                    self._parse_line(line, current)
                if not (is_read or is_write) and current is not None:
                    # Latency detail lines follow the direction line they belong to
                    if current.latency_ms is None:
                        current.latency_ms = self._latency(line)
            except ValueError as e:
                logger.debug(f"Skipping unparsable line {line!r}: {e}")
        return parsed

    def _parse_line(self, line: str, target: DirectionMetrics) -> None:
        if match := self._BW.search(line):
            target.speed_mbs = convert_to_mbps(float(match.group(1)), match.group(2))

        if match := self._IOPS.search(line):
            multiplier = {"k": 1e3, "m": 1e6}.get(match.group(2).lower(), 1.0)
            target.iops = float(match.group(1)) * multiplier

        latency = self._latency(line)
        if latency is not None:
            target.latency_ms = latency

    def _latency(self, line: str) -> float | None:
        if match := self._LAT_UNIT_FIRST.search(line):
            return convert_to_ms(float(match.group(2)), match.group(1))
        if match := self._LAT_UNIT_AFTER.search(line):
            return convert_to_ms(float(match.group(1)), match.group(2) or "ms")
        return None


DEFAULT_STRATEGIES: tuple[OutputParseStrategy, ...] = (
    JsonOutputStrategy(),
    TextOutputStrategy(),
)


def parse_fio_output(
    output: str,
    strategies: Sequence[OutputParseStrategy] = DEFAULT_STRATEGIES,
) -> IOMetrics:
    """Parse fio output with the first strategy that recognizes it.

    Never raises: unrecognized output yields all-zero metrics.
    """
    for strategy in strategies:
        parsed = strategy.parse(output or "")
        if parsed is not None:
            logger.debug(f"fio output parsed with {strategy.name} strategy")
            return parsed.to_metrics()

    logger.warning("No strategy could parse fio output, reporting zero metrics")
    return IOMetrics()
