"""Load keyword taxonomies from YAML files."""

from __future__ import annotations

from pathlib import Path

import yaml

from forge_context.classifier import (
    CATEGORY_THRESHOLD,
    HEADER_SIMILARITY_THRESHOLD,
    MERGE,
    PRESERVE,
    REPLACE,
    Taxonomy,
)
from forge_context.paths import taxonomy_path


def load_taxonomy(path: Path | str) -> Taxonomy:
    """Read a taxonomy file.

    Expected layout::

        preserve: [Project Description, Architecture]
        replace: [Workflow, TDD]
        merge: [Toolchain]
        category_threshold: 0.6
        header_similarity_threshold: 0.5

    Missing category keys become empty tables; missing thresholds use the
    built-in defaults.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the document is not a mapping or a table is not a
            list of strings, or a threshold is not a number in [0, 1].
    """
    tax_path = Path(path)
    with open(tax_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"taxonomy at {tax_path} is not a YAML mapping")

    categories: dict[str, tuple[str, ...]] = {}
    for category in (PRESERVE, REPLACE, MERGE):
        keywords = data.get(category) or []
        if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
            raise ValueError(f"taxonomy at {tax_path}: '{category}' must be a list of strings")
        categories[category] = tuple(keywords)

    return Taxonomy(
        categories=categories,
        category_threshold=_threshold(data, "category_threshold", CATEGORY_THRESHOLD, tax_path),
        header_similarity_threshold=_threshold(
            data, "header_similarity_threshold", HEADER_SIMILARITY_THRESHOLD, tax_path
        ),
    )


def _threshold(data: dict, key: str, default: float, tax_path: Path) -> float:
    value = data.get(key, default)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 1:
        raise ValueError(f"taxonomy at {tax_path}: '{key}' must be a number between 0 and 1")
    return float(value)


def resolve_taxonomy(path: Path | str | None = None) -> Taxonomy:
    """Explicit path first, then FORGE_CONTEXT_TAXONOMY, then the built-in tables."""
    chosen = Path(path).expanduser() if path else taxonomy_path()
    if chosen is None:
        return Taxonomy.default()
    return load_taxonomy(chosen)
