"""
BDL Hex-Dump Normalization

Hex payloads are frequently pasted straight out of a dump tool, so a body
line may carry more than the data bytes:

    00000000  aa 02 11 22 bb 01 ff     |..."...|
    ^^^^^^^^  ^^^^^^^^^^^^^^^^^^^^     ^^^^^^^^^
    offset    data                     ASCII preview

This is heuristic text cleanup, not a grammar. The rules:

1. Everything from the first `|` onward is an ASCII-preview column and is
   dropped.
2. A leading hex run is an address offset (and is dropped) when it is
   followed by `:` (xxd style), or when it is at least four digits long and
   more content follows it on the line. Two-digit leading tokens are always
   data, so `AA 02 11 22` survives intact.
3. A final line holding nothing but a hex run of eight or more digits is the
   end-of-dump offset `hexdump -C` and `od` print, and is dropped, provided
   an earlier line carried an offset column.
4. Whatever survives is joined and filtered down to hex digits.
"""

from __future__ import annotations

import re
from enum import Enum

LINE_BREAK = re.compile(r"\r?\n")

# Minimum width for an uncolonned leading hex run to count as an address.
MIN_OFFSET_DIGITS = 4

OFFSET_COLUMN = re.compile(
    r"^\s*(?:[0-9A-Fa-f]{%d,}:?|[0-9A-Fa-f]+:)[ \t]+(?=\S)" % MIN_OFFSET_DIGITS
)

# Minimum width for a bare closing line to count as the end-of-dump offset.
MIN_END_OFFSET_DIGITS = 8

END_OFFSET_LINE = re.compile(r"^\s*[0-9A-Fa-f]{%d,}\s*$" % MIN_END_OFFSET_DIGITS)
NON_HEX = re.compile(r"[^0-9A-Fa-f]")


class DumpStyle(Enum):
    """Which optional columns a hex body carries."""
    PLAIN = "plain"                  # data only
    OFFSET_ONLY = "offset"           # address column, no preview
    PREVIEW_ONLY = "preview"         # ASCII preview, no address column
    OFFSET_AND_PREVIEW = "offset+preview"


def split_lines(body: str) -> list[str]:
    return LINE_BREAK.split(body)


def strip_ascii_preview(line: str) -> str:
    """Drop a trailing `|...|` ASCII-preview column."""
    return line.split("|", 1)[0]


def strip_offset_column(line: str) -> str:
    """Drop a leading address-offset column, if the line has one."""
    return OFFSET_COLUMN.sub("", line, count=1)


def normalize_line(line: str) -> str:
    return strip_offset_column(strip_ascii_preview(line))


def drop_end_offset(lines: list[str]) -> list[str]:
    """Drop a closing end-of-dump offset line from an offset-columned dump."""
    content = [line for line in lines if line.strip()]
    if len(content) < 2 or not END_OFFSET_LINE.match(content[-1]):
        return lines
    if not any(OFFSET_COLUMN.match(strip_ascii_preview(line)) for line in content[:-1]):
        return lines
    last = max(i for i, line in enumerate(lines) if line.strip())
    return lines[:last]


def normalize_hex_dump(body: str) -> str:
    """Reduce a (possibly dump-formatted) hex body to bare hex digits."""
    lines = drop_end_offset(split_lines(body))
    joined = " ".join(normalize_line(line) for line in lines)
    return NON_HEX.sub("", joined)


def detect_style(body: str) -> DumpStyle:
    has_offset = False
    has_preview = False
    for line in split_lines(body):
        if "|" in line:
            has_preview = True
        if OFFSET_COLUMN.match(strip_ascii_preview(line)):
            has_offset = True
    if has_offset and has_preview:
        return DumpStyle.OFFSET_AND_PREVIEW
    if has_offset:
        return DumpStyle.OFFSET_ONLY
    if has_preview:
        return DumpStyle.PREVIEW_ONLY
    return DumpStyle.PLAIN
