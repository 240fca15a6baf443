"""Split markdown text into heading-delimited sections.

Every heading line (``#`` through ``######``) opens a new section that
runs until the next heading of any level. Text before the first heading
becomes a single level-0 preamble section when it holds anything other
than whitespace.

Code fences, tables and inline formatting are not interpreted; a ``#``
line inside a fence still opens a section.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")


@dataclass(frozen=True)
class Section:
    """A contiguous span of a markdown document."""
    level: int
    header: str | None
    content: str
    raw: str
    start_line: int
    end_line: int

    @property
    def is_preamble(self) -> bool:
        return self.header is None


def normalize_line_endings(text: str | None) -> str | None:
    """Convert CRLF and lone CR line endings to LF."""
    if not text:
        return text
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _trim_blank_lines(lines: list[str]) -> list[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def _has_text(lines: list[str]) -> bool:
    return any(line.strip() for line in lines)


def _close(level: int, header: str | None, lines: list[str], start: int, end: int) -> Section:
    body = lines[1:] if header is not None else lines
    return Section(
        level=level,
        header=header,
        content="\n".join(_trim_blank_lines(body)),
        raw="\n".join(lines),
        start_line=start,
        end_line=end,
    )


def parse_semantic_sections(text: str | None) -> list[Section]:
    """Parse markdown text into an ordered list of sections.

    Callers are expected to normalize line endings first (see
    ``normalize_line_endings``). Anything that is not a string parses to
    an empty list.
    """
    if not isinstance(text, str) or not text:
        return []

    lines = text.split("\n")
    sections: list[Section] = []

    current_level = 0
    current_header: str | None = None
    current_lines: list[str] = []
    current_start = 0

    for i, line in enumerate(lines):
        match = _HEADING_RE.match(line)
        if not match:
            current_lines.append(line)
            continue

        # Save previous section; a blank-only preamble is dropped
        if current_header is not None or _has_text(current_lines):
            sections.append(
                _close(current_level, current_header, current_lines, current_start, i - 1)
            )

        current_level = len(match.group(1))
        current_header = match.group(2).strip()
        current_lines = [line]
        current_start = i

    # Save final section
    if current_header is not None or _has_text(current_lines):
        sections.append(
            _close(current_level, current_header, current_lines, current_start, len(lines) - 1)
        )

    return sections


def heading_count(text: str | None) -> int:
    """Count heading lines in markdown text."""
    if not isinstance(text, str):
        return 0
    return sum(1 for line in text.split("\n") if _HEADING_RE.match(line))
