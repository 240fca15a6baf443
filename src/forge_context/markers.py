"""FORGE/USER sentinel blocks.

Wraps template-owned and user-owned content in comment markers, and
carries USER block bodies across regenerations:

    <!-- USER:START --> ... <!-- USER:END -->              anonymous, by position
    <!-- USER:START:name --> ... <!-- USER:END:name -->    named
"""

from __future__ import annotations

import itertools
import re

from forge_context import FORGE_END, FORGE_START, USER_END, USER_START

_ANON_USER_RE = re.compile(re.escape(USER_START) + r"(.*?)" + re.escape(USER_END), re.DOTALL)
_NAMED_USER_RE = re.compile(
    r"<!-- USER:START:(\w+) -->(.*?)<!-- USER:END:\1 -->", re.DOTALL
)
_FORGE_BLOCK_RE = re.compile(
    re.escape(FORGE_START) + r".*?" + re.escape(FORGE_END) + r"\n?", re.DOTALL
)
_ANY_MARKER_RE = re.compile(r"<!-- (?:FORGE|USER):(?:START|END)(?::\w+)? -->")


def wrap_with_markers(user: str = "", forge: str = "") -> str:
    """Wrap forge and user content in their sentinel blocks.

    The FORGE block comes first, then a blank line and the USER block.
    Blank parts are omitted entirely.
    """
    parts: list[str] = []

    if forge and forge.strip():
        parts.extend([FORGE_START, forge.strip(), FORGE_END])

    if user and user.strip():
        parts.extend(["", USER_START, user.strip(), USER_END])

    return "\n".join(parts)


def has_markers(text: str | None) -> bool:
    """Whether text carries any FORGE or USER sentinel."""
    return bool(text) and _ANY_MARKER_RE.search(text) is not None


def extract_user_sections(text: str | None) -> dict[str, str]:
    """Collect USER block bodies.

    Anonymous blocks are keyed ``user_0``, ``user_1``, ... in document
    order; named blocks are keyed ``user_<name>``.
    """
    if not text:
        return {}

    sections: dict[str, str] = {}
    for index, match in enumerate(_ANON_USER_RE.finditer(text)):
        sections[f"user_{index}"] = match.group(1)
    for match in _NAMED_USER_RE.finditer(text):
        sections[f"user_{match.group(1)}"] = match.group(2)
    return sections


def restore_user_sections(text: str, sections: dict[str, str]) -> str:
    """Write extracted USER bodies back into the matching blocks of text.

    Blocks with no saved body are emptied.
    """
    if not sections:
        return text

    counter = itertools.count()

    def _anon(_match: re.Match) -> str:
        body = sections.get(f"user_{next(counter)}", "")
        return f"{USER_START}{body}{USER_END}"

    def _named(match: re.Match) -> str:
        name = match.group(1)
        body = sections.get(f"user_{name}", "")
        return f"<!-- USER:START:{name} -->{body}<!-- USER:END:{name} -->"

    text = _ANON_USER_RE.sub(_anon, text)
    return _NAMED_USER_RE.sub(_named, text)


def strip_forge_blocks(text: str) -> str:
    """Remove FORGE blocks, sentinels included; the template regenerates them."""
    return _FORGE_BLOCK_RE.sub("", text)


def strip_markers(text: str) -> str:
    """Drop lines that consist solely of a FORGE or USER sentinel."""
    return "\n".join(
        line for line in text.split("\n")
        if not _ANY_MARKER_RE.fullmatch(line.strip())
    )
