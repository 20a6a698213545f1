# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.01.13
# Copyright (C) 2026 HRDAG https://hrdag.org
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along
# with this program; if not, see <https://www.gnu.org/licenses/>.
#
# ------
# rsync-analyzer/src/rsync_analyzer/parser.py

"""Main rsync output analyzer."""

import hashlib
import json
import logging
import threading
from typing import Final, Iterable

from .itemize import parse_itemized_change
from .lines import route_lines, split_lines
from .stats import parse_statistics
from .types import (
    AnalysisResult,
    EmptyInputError,
    MissingStatisticsError,
)

logger = logging.getLogger(__name__)

DRY_RUN_MARKER: Final = "(DRY RUN)"


def join_records(records: Iterable[object]) -> str:
    """Join captured output records into one newline-separated string.

    A record is either a plain string or an object exposing the line as
    its ``record`` attribute.
    """
    return "\n".join(
        record if isinstance(record, str) else str(record.record)
        for record in records
    )


def content_hash(text: str) -> str:
    """Stable identity of an output text, used as the cache key."""
    return hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()


def _analyze(text: str) -> AnalysisResult:
    if not text:
        raise EmptyInputError()

    routed = route_lines(split_lines(text))
    changes = []
    for line in routed.candidates:
        change = parse_itemized_change(line)
        if change is not None:
            changes.append(change)

    errors = tuple(routed.errors)
    warnings = tuple(routed.warnings)
    statistics = parse_statistics(routed.stats_lines, errors, warnings)
    if statistics is None:
        raise MissingStatisticsError()

    logger.debug("Decoded %d itemized changes from %d candidate lines",
                 len(changes), len(routed.candidates))
    return AnalysisResult(
        itemized_changes=tuple(changes),
        statistics=statistics,
        is_dry_run=DRY_RUN_MARKER in text,
        errors=errors,
        warnings=warnings,
    )


class RsyncOutputAnalyzer:
    """Turn rsync console output into an AnalysisResult.

    Safe to share between threads. Analysis runs outside the lock; only
    cache lookups and inserts are serialized. The cache has no eviction
    and grows until clear_cache() is called.
    """

    def __init__(self):
        self._cache: dict[str, AnalysisResult] = {}
        self._lock = threading.Lock()

    def analyze_strict(self, text: str) -> AnalysisResult:
        """Analyze text, raising EmptyInputError or MissingStatisticsError."""
        return _analyze(text)

    def analyze(self, text: str) -> AnalysisResult | None:
        """Analyze text, returning None on empty input or a missing stats block."""
        try:
            return _analyze(text)
        except EmptyInputError:
            logger.debug("Empty rsync output, nothing to analyze")
            return None
        except MissingStatisticsError as e:
            logger.warning("Cannot analyze rsync output: %s", e.reason)
            return None

    def analyze_records(self, records: Iterable[object]) -> AnalysisResult | None:
        """Analyze a sequence of captured lines (strings or record objects)."""
        return self.analyze(join_records(records))

    def analyze_cached(self, text: str) -> AnalysisResult | None:
        """Like analyze(), memoized by content hash.

        Concurrent misses on the same text may both compute; the first
        stored result is kept.
        """
        key = content_hash(text)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key[:12])
            return cached

        result = self.analyze(text)
        if result is None:
            return None
        with self._lock:
            result = self._cache.setdefault(key, result)
            entries = len(self._cache)
        logger.debug("Cached analysis %s (%d entries)", key[:12], entries)
        return result

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    @property
    def cache_size(self) -> int:
        with self._lock:
            return len(self._cache)


def analyze_output(text: str) -> AnalysisResult | None:
    """Analyze rsync output once, without caching."""
    return RsyncOutputAnalyzer().analyze(text)


def get_rsync_analysis(text: str) -> str:
    """Analyze rsync output and return the result as a JSON string.

    Raises EmptyInputError or MissingStatisticsError when there is nothing
    to report.
    """
    result = RsyncOutputAnalyzer().analyze_strict(text)
    return json.dumps(result.to_dict(), indent=2)
