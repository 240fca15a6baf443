"""Classify section headers into merge categories.

A header is compared against three keyword tables. An exact
(case-insensitive) match wins outright; otherwise the best fuzzy score
across all keywords is kept, where the score is the larger of

- edit similarity: 1 - levenshtein / longer length
- containment similarity: shorter length / longer length, only when one
  string contains the other

Containment lets "Development Workflow" score well against "Workflow"
even though the edit distance between them is large.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

PRESERVE = "preserve"
REPLACE = "replace"
MERGE = "merge"
UNKNOWN = "unknown"

CATEGORIES = (PRESERVE, REPLACE, MERGE, UNKNOWN)

# Confidence above which a category drives a merge decision
CATEGORY_THRESHOLD = 0.6
# Edit similarity above which a template and an existing header are linked
HEADER_SIMILARITY_THRESHOLD = 0.5

SECTION_CATEGORIES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    PRESERVE: (
        "Project Description",
        "Project Instructions",
        "Project Overview",
        "Project Background",
        "Domain Knowledge",
        "Domain Concepts",
        "Coding Standards",
        "Code Standards",
        "Architecture",
        "Tech Stack",
        "Technology Stack",
        "Build Commands",
        "Team Conventions",
        "Migration Strategy",
        "Setup",
        "Installation",
        "Quick Start",
        "Getting Started",
    ),
    REPLACE: (
        "Workflow",
        "Development Workflow",
        "Our Workflow",
        "Workflow Process",
        "Development Process",
        "Process",
        "TDD",
        "Test-Driven Development",
        "TDD Approach",
        "Testing Approach",
        "Git Workflow",
        "Git Conventions",
        "Commit Conventions",
        "Git Strategy",
        "Forge Workflow",
        "Core Principles",
        "Development Principles",
    ),
    MERGE: (
        "Toolchain",
        "Tools",
        "MCP Servers",
        "Integrations",
        "Dependencies",
        "Libraries",
    ),
})


@dataclass(frozen=True)
class CategoryMatch:
    """Result of classifying one header."""
    category: str
    confidence: float


NO_MATCH = CategoryMatch(UNKNOWN, 0.0)


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings (two-row dynamic programming)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            cost = 0 if ca == cb else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


def edit_similarity(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - levenshtein(a, b) / longest


def containment_similarity(a: str, b: str) -> float:
    """Length ratio when one string contains the other, else 0."""
    longest = max(len(a), len(b))
    if longest == 0 or (a not in b and b not in a):
        return 0.0
    return min(len(a), len(b)) / longest


def header_similarity(header_a: str, header_b: str) -> float:
    """Case-insensitive edit similarity between two headers."""
    return edit_similarity(header_a.lower(), header_b.lower())


def _normalize(text: str) -> str:
    return text.lower().strip()


@dataclass(frozen=True)
class Taxonomy:
    """Keyword tables and thresholds used to classify headers."""
    categories: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: SECTION_CATEGORIES, hash=False
    )
    category_threshold: float = CATEGORY_THRESHOLD
    header_similarity_threshold: float = HEADER_SIMILARITY_THRESHOLD

    def __post_init__(self):
        # Tables are frozen along with the rest of the object
        frozen = MappingProxyType({k: tuple(v) for k, v in self.categories.items()})
        object.__setattr__(self, "categories", frozen)

    @classmethod
    def default(cls) -> Taxonomy:
        return _DEFAULT_TAXONOMY

    def classify(self, header: str | None) -> CategoryMatch:
        """Map a header to its best category and confidence."""
        if not isinstance(header, str):
            return NO_MATCH
        normalized = _normalize(header)
        if not normalized:
            return NO_MATCH

        best = NO_MATCH
        for category, keywords in self.categories.items():
            for keyword in keywords:
                keyword_norm = _normalize(keyword)
                if normalized == keyword_norm:
                    return CategoryMatch(category, 1.0)

                score = max(
                    edit_similarity(normalized, keyword_norm),
                    containment_similarity(normalized, keyword_norm),
                )
                # Ties keep the first keyword found
                if score > best.confidence:
                    best = CategoryMatch(category, score)

        return best

    def is_confident(self, match: CategoryMatch, category: str) -> bool:
        """True when match is category with confidence above the threshold."""
        return match.category == category and match.confidence > self.category_threshold

    def headers_linked(self, header_a: str, header_b: str) -> bool:
        """True when two headers are similar enough to refer to one section."""
        return header_similarity(header_a, header_b) > self.header_similarity_threshold


_DEFAULT_TAXONOMY = Taxonomy()


def detect_category(header: str | None, taxonomy: Taxonomy | None = None) -> CategoryMatch:
    """Classify a header against the given (or built-in) taxonomy."""
    return (taxonomy or _DEFAULT_TAXONOMY).classify(header)
