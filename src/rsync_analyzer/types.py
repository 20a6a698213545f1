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
# rsync-analyzer/src/rsync_analyzer/types.py

"""Type definitions for analyzed rsync output."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final


class ChangeType(Enum):
    """Kind of filesystem entry an itemized line reports on."""
    FILE = "File"
    DIRECTORY = "Directory"
    SYMLINK = "Symlink"
    DEVICE = "Device"
    SPECIAL = "Special"
    DELETION = "Deletion"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: str) -> "ChangeType":
        """Map rsync's entry-type character (the 2nd itemize char)."""
        return _ENTRY_TYPE_CODES.get(code, cls.UNKNOWN)


_ENTRY_TYPE_CODES: Final = {
    "L": ChangeType.SYMLINK,
    "d": ChangeType.DIRECTORY,
    "f": ChangeType.FILE,
    "D": ChangeType.DEVICE,
    "S": ChangeType.SPECIAL,
}

# facet name -> rsync attribute letter
FLAG_CODES: Final = (
    ("checksum", "c"),
    ("size", "s"),
    ("timestamp", "t"),
    ("permissions", "p"),
    ("owner", "o"),
    ("group", "g"),
    ("acl", "a"),
    ("xattr", "x"),
)


@dataclass(frozen=True)
class ChangeFlags:
    """Attribute facets decoded from an itemize flag field."""
    file_type: str = ""
    checksum: bool = False
    size: bool = False
    timestamp: bool = False
    permissions: bool = False
    owner: bool = False
    group: bool = False
    acl: bool = False
    xattr: bool = False
    is_deletion: bool = False

    @property
    def flag_string(self) -> str:
        """Compact re-rendering: file-type prefix plus set attribute letters."""
        return self.file_type + "".join(
            code for name, code in FLAG_CODES if getattr(self, name)
        )

    @property
    def description(self) -> str:
        names = [name for name, _ in FLAG_CODES if getattr(self, name)]
        if self.is_deletion:
            names.append("deletion")
        return ", ".join(names) if names else "none"


@dataclass(frozen=True)
class ItemizedChange:
    """One rsync action on one filesystem entry."""
    change_type: ChangeType
    path: str
    target: str | None = None
    flags: ChangeFlags = field(default_factory=ChangeFlags)

    def __str__(self) -> str:
        text = f"{self.change_type.label}: {self.path}"
        if self.target is not None:
            text += f" -> {self.target}"
        if self.flags.description != "none":
            text += f" [{self.flags.description}]"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "change_type": self.change_type.label,
            "path": self.path,
            "target": self.target,
            "flags": {
                "file_type": self.flags.file_type,
                **{name: getattr(self.flags, name) for name, _ in FLAG_CODES},
                "is_deletion": self.flags.is_deletion,
            },
        }


@dataclass(frozen=True)
class FileCount:
    """File count with its reg/dir/link breakdown, as reported (not reconciled)."""
    total: int = 0
    regular: int = 0
    directories: int = 0
    links: int = 0

    def __str__(self) -> str:
        return (f"{self.total} total (reg: {self.regular}, "
                f"dir: {self.directories}, link: {self.links})")


@dataclass(frozen=True)
class Statistics:
    """Aggregate block printed by ``rsync --stats``."""
    total_files: FileCount = field(default_factory=FileCount)
    files_created: FileCount = field(default_factory=FileCount)
    files_deleted: int = 0
    regular_files_transferred: int = 0
    total_file_size: int = 0
    total_transferred_size: int = 0
    literal_data: int = 0
    matched_data: int = 0
    bytes_sent: int = 0
    bytes_received: int = 0
    speedup: float = 0.0
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def total_files_changed(self) -> int:
        return self.files_created.total + self.files_deleted

    @property
    def efficiency_percentage(self) -> float:
        """Share of the total file size that needs transferring."""
        if self.total_file_size <= 0:
            return 0.0
        return self.total_transferred_size / self.total_file_size * 100.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_files": vars(self.total_files).copy(),
            "files_created": vars(self.files_created).copy(),
            "files_deleted": self.files_deleted,
            "regular_files_transferred": self.regular_files_transferred,
            "total_file_size": self.total_file_size,
            "total_transferred_size": self.total_transferred_size,
            "literal_data": self.literal_data,
            "matched_data": self.matched_data,
            "bytes_sent": self.bytes_sent,
            "bytes_received": self.bytes_received,
            "speedup": self.speedup,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Structured view of one rsync run's console output."""
    itemized_changes: tuple[ItemizedChange, ...]
    statistics: Statistics
    is_dry_run: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_dry_run": self.is_dry_run,
            "itemized_changes": [c.to_dict() for c in self.itemized_changes],
            "statistics": self.statistics.to_dict(),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


class AnalysisError(ValueError):
    """Base class for analyzer failures."""


class ParsingFailedError(AnalysisError):
    """Output could not be turned into an AnalysisResult."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class EmptyInputError(ParsingFailedError):
    def __init__(self, reason: str = "rsync output is empty"):
        super().__init__(reason)


class MissingStatisticsError(ParsingFailedError):
    def __init__(self, reason: str = "no 'Number of files:' line found; "
                                     "output is truncated or not from rsync --stats"):
        super().__init__(reason)
