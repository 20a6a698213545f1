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
# rsync-analyzer/src/rsync_analyzer/__init__.py

"""Rsync console output parser and analyzer."""

from .parser import RsyncOutputAnalyzer, analyze_output, get_rsync_analysis
from .metrics import (
    changes_by_type,
    describe_statistics,
    efficiency_percentage,
    filter_changes,
    format_bytes,
    render_summary,
)
from .types import (
    AnalysisError,
    AnalysisResult,
    ChangeFlags,
    ChangeType,
    EmptyInputError,
    FileCount,
    ItemizedChange,
    MissingStatisticsError,
    ParsingFailedError,
    Statistics,
)

__version__ = "0.1.0"

__all__ = [
    "RsyncOutputAnalyzer",
    "analyze_output",
    "get_rsync_analysis",
    "changes_by_type",
    "describe_statistics",
    "efficiency_percentage",
    "filter_changes",
    "format_bytes",
    "render_summary",
    "AnalysisError",
    "AnalysisResult",
    "ChangeFlags",
    "ChangeType",
    "EmptyInputError",
    "FileCount",
    "ItemizedChange",
    "MissingStatisticsError",
    "ParsingFailedError",
    "Statistics",
]
