# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.01.13
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# rsync-analyzer/src/rsync_analyzer/metrics.py

"""Derived metrics and text rendering for analysis results."""

from collections import Counter
from typing import Final, Iterable

from .types import AnalysisResult, ChangeType, ItemizedChange, Statistics


DECIMAL_UNITS: Final = ("KB", "MB", "GB", "TB", "PB", "EB")
BINARY_UNITS: Final = ("KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


def format_bytes(num_bytes: int, binary: bool = False) -> str:
    """Human-readable size, file-manager style.

    Decimal (1000-based) units by default, 1024-based IEC units when
    ``binary`` is set. KB is shown without decimals, MB with one, larger
    units with two.
    """
    sign = "-" if num_bytes < 0 else ""
    magnitude = abs(num_bytes)
    base = 1024 if binary else 1000
    units = BINARY_UNITS if binary else DECIMAL_UNITS

    if magnitude < base:
        noun = "byte" if magnitude == 1 else "bytes"
        return f"{sign}{magnitude} {noun}"

    value = float(magnitude)
    index = -1
    while value >= base and index < len(units) - 1:
        value /= base
        index += 1
    decimals = min(index, 2)
    return f"{sign}{value:,.{decimals}f} {units[index]}"


def efficiency_percentage(statistics: Statistics) -> float:
    """Transferred size as a percentage of total size; 0 for an empty tree."""
    return statistics.efficiency_percentage


def changes_by_type(result: AnalysisResult) -> dict[ChangeType, int]:
    return dict(Counter(c.change_type for c in result.itemized_changes))


def filter_changes(
    changes: Iterable[ItemizedChange],
    search_text: str = "",
    change_types: Iterable[ChangeType] | None = None,
) -> list[ItemizedChange]:
    """Narrow changes by case-insensitive path substring and by type.

    An empty search text or an empty/None type set leaves that filter off.
    """
    needle = search_text.casefold()
    wanted = set(change_types or ())
    return [
        c for c in changes
        if (not needle or needle in c.path.casefold())
        and (not wanted or c.change_type in wanted)
    ]


def describe_statistics(statistics: Statistics, binary: bool = False) -> str:
    """Multi-line dump of every statistics field."""
    def size(n: int) -> str:
        return format_bytes(n, binary=binary)

    lines = [
        "Statistics:",
        f"  Total files: {statistics.total_files}",
        f"  Created: {statistics.files_created}",
        f"  Deleted: {statistics.files_deleted}",
        f"  Transferred: {statistics.regular_files_transferred}",
        "",
        "Data Transfer:",
        f"  Total size: {size(statistics.total_file_size)}",
        f"  Transferred: {size(statistics.total_transferred_size)}",
        f"  Efficiency: {statistics.efficiency_percentage:.2f}%",
        f"  Speedup: {statistics.speedup:.2f}x",
        "",
        "Transfer Details:",
        f"  Literal data: {size(statistics.literal_data)}",
        f"  Matched data: {size(statistics.matched_data)}",
        f"  Sent: {size(statistics.bytes_sent)}",
        f"  Received: {size(statistics.bytes_received)}",
    ]
    if statistics.errors:
        lines.append(f"Errors: {len(statistics.errors)}")
    if statistics.warnings:
        lines.append(f"Warnings: {len(statistics.warnings)}")
    return "\n".join(lines)


def render_summary(result: AnalysisResult) -> str:
    """Short plain-text summary of a run."""
    stats = result.statistics
    lines = [
        "RSYNC ANALYSIS SUMMARY",
        "",
        "Run Type: " + ("DRY RUN (simulation)" if result.is_dry_run else "LIVE RUN"),
    ]
    if result.is_dry_run:
        lines.append("No actual changes were made")
    lines += [
        "",
        "Summary:",
        f"  Total items: {len(result.itemized_changes)}",
        f"  Files created: {stats.files_created.total}",
        f"  Files deleted: {stats.files_deleted}",
        f"  Data efficiency: {stats.efficiency_percentage:.1f}%",
        f"  Transfer speedup: {stats.speedup:.1f}x",
    ]

    by_type = changes_by_type(result)
    if by_type:
        lines += ["", "Changes by type:"]
        for change_type in ChangeType:
            if change_type in by_type:
                lines.append(f"  {change_type.label}: {by_type[change_type]}")

    if result.errors:
        lines += ["", f"Found {len(result.errors)} error(s)"]
    if result.warnings:
        lines.append(f"Found {len(result.warnings)} warning(s)")
    return "\n".join(lines)
