# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.01.13
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# rsync-analyzer/src/rsync_analyzer/stats.py

"""Statistics block extractor for ``rsync --stats`` output.

Example block:

    Number of files: 16,087 (reg: 14,321, dir: 1,721, link: 45)
    Number of created files: 12 (reg: 10, dir: 2, link: 0)
    Number of deleted files: 3
    Number of regular files transferred: 10
    Total file size: 3,045,821,112 bytes
    Total transferred file size: 1,632,044 bytes
    Literal data: 1,632,044 bytes
    Matched data: 0 bytes
    ...
    Total bytes sent: 1,701,210
    Total bytes received: 2,392

    sent 1,701,210 bytes  received 2,392 bytes  1,135,734.67 bytes/sec
    total size is 3,045,821,112  speedup is 1,787.93 (DRY RUN)
"""

import re
from typing import Final, Iterable

from .types import FileCount, Statistics


INT64_MIN: Final = -(2 ** 63)
INT64_MAX: Final = 2 ** 63 - 1

_NUMBER: Final = r"(\d+(?:,\d+)*)"
_FILE_COUNT_RE: Final = re.compile(
    _NUMBER + r"\s*\(reg:\s*" + _NUMBER + r",\s*dir:\s*" + _NUMBER
    + r",\s*link:\s*" + _NUMBER + r"\)"
)
_SPEEDUP_RE: Final = re.compile(r"speedup is ([\d,]+\.?\d*)")
_INTEGER_RE: Final = re.compile(r"[+-]?[0-9]+")


def _strip_commas(text: str) -> str:
    return text.replace(",", "")


def _to_int(token: str) -> int | None:
    token = _strip_commas(token)
    if _INTEGER_RE.fullmatch(token) is None:
        return None
    return int(token)


def parse_file_count(line: str) -> FileCount:
    """Parse ``N (reg: R, dir: D, link: L)``; any other shape gives zeros."""
    match = _FILE_COUNT_RE.search(line)
    if match is None:
        return FileCount()
    total, regular, directories, links = (
        int(_strip_commas(group)) for group in match.groups()
    )
    return FileCount(total=total, regular=regular,
                     directories=directories, links=links)


def extract_number(line: str) -> int:
    """First whitespace token that is an integer once commas are removed."""
    for token in line.split():
        value = _to_int(token)
        if value is not None:
            return value
    return 0


def extract_bytes(line: str) -> int:
    """Like extract_number, but only accepts values that fit a signed 64-bit int."""
    for token in line.split():
        value = _to_int(token)
        if value is not None and INT64_MIN <= value <= INT64_MAX:
            return value
    return 0


def extract_speedup(line: str) -> float:
    match = _SPEEDUP_RE.search(line)
    if match is None:
        return 0.0
    try:
        return float(_strip_commas(match.group(1)))
    except ValueError:
        return 0.0


# prefix -> (Statistics field, extractor); checked in this order
STAT_KEYS: Final = (
    ("Number of files:", "total_files", parse_file_count),
    ("Number of created files:", "files_created", parse_file_count),
    ("Number of deleted files:", "files_deleted", extract_number),
    ("Number of regular files transferred:", "regular_files_transferred", extract_number),
    ("Total file size:", "total_file_size", extract_bytes),
    ("Total transferred file size:", "total_transferred_size", extract_bytes),
    ("Literal data:", "literal_data", extract_bytes),
    ("Matched data:", "matched_data", extract_bytes),
    ("Total bytes sent:", "bytes_sent", extract_bytes),
    ("Total bytes received:", "bytes_received", extract_bytes),
)
SPEEDUP_KEY: Final = "speedup is"


def parse_statistics(
    lines: Iterable[str],
    errors: Iterable[str] = (),
    warnings: Iterable[str] = (),
) -> Statistics | None:
    """Reduce a statistics block to a Statistics value.

    Returns None when no line starts with ``Number of files:``. Lines that
    match no known key are skipped. When a key repeats, the last line wins.
    """
    values: dict = {}
    for line in lines:
        for prefix, name, extract in STAT_KEYS:
            if line.startswith(prefix):
                values[name] = extract(line)
                break
        else:
            if SPEEDUP_KEY in line:
                values["speedup"] = extract_speedup(line)

    if "total_files" not in values:
        return None
    return Statistics(errors=tuple(errors), warnings=tuple(warnings), **values)
