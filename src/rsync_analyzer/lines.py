# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.01.13
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# rsync-analyzer/src/rsync_analyzer/lines.py

"""Line classification and routing for rsync console output.

Lines before the first ``Number of files:`` line are itemize candidates
(after dropping blanks and the ``sending incremental`` banner) and are
also scanned for error/warning text. Everything from that line on belongs
to the statistics block.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Iterable


STATS_MARKER: Final = "Number of files:"
INCREMENTAL_BANNER: Final = "sending incremental"


class LineKind(Enum):
    STATS_MARKER = "stats_marker"
    STATS = "stats"
    IGNORABLE = "ignorable"
    CANDIDATE = "candidate"


@dataclass
class RoutedOutput:
    """Lines sorted into the paths the analyzer feeds them to."""
    candidates: list[str] = field(default_factory=list)
    stats_lines: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def split_lines(text: str) -> list[str]:
    """Split on any line ending (\\n, \\r\\n, \\r or a mix of them)."""
    return text.splitlines()


def classify_line(line: str, in_stats: bool) -> LineKind:
    """Classify one line given whether the statistics block has started."""
    if line.startswith(STATS_MARKER):
        return LineKind.STATS_MARKER
    if in_stats:
        return LineKind.STATS
    if not line or line.startswith(INCREMENTAL_BANNER):
        return LineKind.IGNORABLE
    return LineKind.CANDIDATE


def route_lines(lines: Iterable[str]) -> RoutedOutput:
    """Walk lines once, in order, and route each one."""
    routed = RoutedOutput()
    in_stats = False
    for line in lines:
        kind = classify_line(line, in_stats)
        if kind is LineKind.STATS_MARKER:
            in_stats = True
            routed.stats_lines.append(line)
        elif kind is LineKind.STATS:
            routed.stats_lines.append(line)
        elif kind is LineKind.CANDIDATE:
            lowered = line.lower()
            if "error" in lowered:
                routed.errors.append(line)
            if "warning" in lowered:
                routed.warnings.append(line)
            routed.candidates.append(line)
    return routed
