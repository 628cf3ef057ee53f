"""
Text preprocessing utilities for resume parsing.

Handles text normalization, section detection, entry splitting and date
range extraction. Everything here is a pure function of its inputs.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from resume_pipeline.utils.logger import get_logger

logger = get_logger(__name__)


_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_INLINE_WHITESPACE = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE = re.compile(r" *\n *")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_ENTRY_SEPARATOR = re.compile(r"\n\n+")

DEFAULT_DATE_PATTERN = (
    r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\s+\d{4}|\d{4}|\d{1,2}/\d{4}"
)
DEFAULT_CURRENT_MARKER = r"present|current|now"


@dataclass(frozen=True)
class DateRange:
    """Start/end dates found in an entry, as they appear in the text."""

    start: Optional[str] = None
    end: Optional[str] = None
    current: bool = False

    @property
    def has_any(self) -> bool:
        return self.start is not None or self.end is not None


def normalize_text(text: str) -> str:
    """
    Normalize extracted document text.

    Line endings become ``\\n``, control characters other than newline and
    tab are removed, runs of inline whitespace collapse to one space, spaces
    around line breaks are dropped, three or more consecutive newlines
    collapse to a blank line, and the result is trimmed.

    Line structure is preserved because section and entry detection depend
    on it. Applying the function twice gives the same result as applying it
    once.
    """
    if not text:
        return ""

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _CONTROL_CHARS.sub("", text)
    text = _INLINE_WHITESPACE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE.sub("\n", text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()


def is_header_line(line: str) -> bool:
    """
    A non-empty line that upper-casing leaves unchanged, or that ends with a colon.

    Lines without letters, such as ``2016-2020`` or a phone number, count as
    headers and end the section above them.
    """
    stripped = line.strip()
    if not stripped:
        return False
    return stripped == stripped.upper() or stripped.endswith(":")


def find_section(text: str, aliases: Iterable[str]) -> Optional[str]:
    """
    Return the body of the first section whose header matches an alias.

    A header is a line that, lower-cased and stripped, equals or starts with
    one of the aliases. The body runs until the next header-looking line.

    Args:
        text: Normalized resume text
        aliases: Lower-case header names for the section

    Returns:
        The stripped section body, or None if no header matches or the
        body is empty.
    """
    aliases = [alias.lower() for alias in aliases]
    lines = text.split("\n")

    start = None
    for i, line in enumerate(lines):
        candidate = line.strip().lower()
        if any(candidate == alias or candidate.startswith(alias) for alias in aliases):
            start = i + 1
            break

    if start is None:
        return None

    body = []
    for line in lines[start:]:
        if is_header_line(line):
            break
        body.append(line)

    section = "\n".join(body).strip()
    return section or None


def split_into_entries(section: str, min_length: int = 20) -> list[str]:
    """Split a section on blank lines, dropping fragments of ``min_length`` chars or fewer."""
    return [
        entry
        for entry in _ENTRY_SEPARATOR.split(section)
        if len(entry.strip()) > min_length
    ]


def extract_dates(
    entry: str,
    date_pattern: str = DEFAULT_DATE_PATTERN,
    current_marker: str = DEFAULT_CURRENT_MARKER,
) -> DateRange:
    """
    Find the date range of an entry.

    The first date token is the start date. The last token is the end date
    when there is more than one token, unless the entry mentions a current
    marker ("present", "current", "now"), in which case the range is open.
    """
    current = re.search(current_marker, entry, re.IGNORECASE) is not None
    matches = [m.group(0) for m in re.finditer(date_pattern, entry, re.IGNORECASE)]

    start = matches[0] if matches else None
    end = matches[-1] if len(matches) > 1 and not current else None

    return DateRange(start=start, end=end, current=current)
