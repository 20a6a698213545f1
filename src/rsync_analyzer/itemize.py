# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.01.13
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# rsync-analyzer/src/rsync_analyzer/itemize.py

"""Decoder for rsync --itemize-changes lines.

An itemized line is a flag field, one space, then the path:

    >f.st...... docs/report.txt
    .L..t...... link -> target
    *deleting   old/file.txt

Flag field layout is YXcstpoguax: Y is the update type, X the entry type,
then one position per attribute. Newer rsync pads the field to 12
characters, so both widths are tried.
"""

import re
from typing import Final

from .types import FLAG_CODES, ChangeFlags, ChangeType, ItemizedChange


FIELD_WIDTHS: Final = (11, 12)

# attribute facet -> offset in the fixed-width flag field; offset 8 is
# the reserved 'u' (use/creation time) column and is never decoded
FLAG_OFFSETS: Final = {
    "checksum": 2,
    "size": 3,
    "timestamp": 4,
    "permissions": 5,
    "owner": 6,
    "group": 7,
    "acl": 9,
    "xattr": 10,
}

ARROW: Final = " -> "

_DELETING_RE: Final = re.compile(r"^\*deleting\s+(?P<path>.*)$", re.DOTALL)
_WHITESPACE_RE: Final = re.compile(r"\s")


def parse_change_flags(flag_field: str) -> ChangeFlags:
    """Decode a fixed-width flag field by position."""
    facets = {}
    for name, code in FLAG_CODES:
        offset = FLAG_OFFSETS[name]
        facets[name] = len(flag_field) > offset and flag_field[offset] == code
    return ChangeFlags(file_type=flag_field[:2], **facets)


def _parse_loose_flags(flag_token: str) -> ChangeFlags:
    """Decode a flag token of unknown width by letter presence."""
    attrs = flag_token[2:]
    facets = {name: code in attrs for name, code in FLAG_CODES}
    return ChangeFlags(file_type=flag_token[:2], **facets)


def _entry_type(flag_text: str) -> ChangeType:
    return ChangeType.from_code(flag_text[1]) if len(flag_text) > 1 else ChangeType.UNKNOWN


def _parse_deletion(line: str) -> ItemizedChange | None:
    match = _DELETING_RE.match(line)
    if match is None:
        return None
    path = match.group("path").strip()
    if not path:
        return None
    return ItemizedChange(
        change_type=ChangeType.DELETION,
        path=path,
        target=None,
        flags=ChangeFlags(is_deletion=True),
    )


def _parse_fixed_width(line: str, width: int) -> ItemizedChange | None:
    if len(line) <= width or line[width] != " ":
        return None
    flag_field = line[:width]
    if _WHITESPACE_RE.search(flag_field):
        return None

    rest = line[width + 1:]
    target = None
    change_type = _entry_type(flag_field)
    if ARROW in rest:
        path, target = (part.strip() for part in rest.split(ARROW, 1))
        change_type = ChangeType.SYMLINK
    else:
        path = rest.strip()
    if not path:
        return None

    return ItemizedChange(
        change_type=change_type,
        path=path,
        target=target,
        flags=parse_change_flags(flag_field),
    )


def _parse_whitespace_split(line: str) -> ItemizedChange | None:
    tokens = line.split()
    if len(tokens) < 2:
        return None

    flag_token, rest = tokens[0], tokens[1:]
    target = None
    change_type = _entry_type(flag_token)
    if "->" in rest:
        arrow_at = rest.index("->")
        path = " ".join(rest[:arrow_at])
        target = " ".join(rest[arrow_at + 1:])
        change_type = ChangeType.SYMLINK
    else:
        path = " ".join(rest)

    return ItemizedChange(
        change_type=change_type,
        path=path,
        target=target,
        flags=_parse_loose_flags(flag_token),
    )


def parse_itemized_change(line: str) -> ItemizedChange | None:
    """Decode one candidate line, or return None if it is not itemize output.

    Deletions are checked first, then the 11- and 12-character fixed-width
    layouts, then a whitespace-split fallback.
    """
    change = _parse_deletion(line)
    if change is not None:
        return change
    for width in FIELD_WIDTHS:
        change = _parse_fixed_width(line, width)
        if change is not None:
            return change
    return _parse_whitespace_split(line)
