"""Instruction file sync — merges the template into files on disk.

The sync process:
1. Resolve the target file(s) under a project root
2. Create missing files from the template
3. Skip existing files unless a merge or overwrite was requested
4. Merge, or overwrite while carrying prior USER block bodies forward

Nothing is written in dry-run mode; the reported actions are the same.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from forge_context.classifier import Taxonomy
from forge_context.markers import (
    extract_user_sections,
    restore_user_sections,
    strip_forge_blocks,
    strip_markers,
)
from forge_context.merge import semantic_merge, wrap_merged_document
from forge_context.sections import normalize_line_endings, parse_semantic_sections


def merge_context_file(
    file_path: Path | str,
    template: str,
    overwrite: bool = False,
    merge: bool = True,
    add_markers: bool = False,
    dry_run: bool = False,
    taxonomy: Taxonomy | None = None,
) -> str:
    """Bring one instruction file in line with the template.

    Returns one of ``created``, ``overwritten``, ``merged``,
    ``unchanged`` or ``skipped``.
    """
    path = Path(file_path)
    template = normalize_line_endings(template) or ""

    if not path.exists():
        if not dry_run:
            path.write_text(template.rstrip("\n") + "\n", encoding="utf-8")
        return "created"

    if not overwrite and not merge:
        return "skipped"

    content = normalize_line_endings(path.read_text(encoding="utf-8")) or ""

    if overwrite:
        # USER blocks shipped in the template get the previous bodies back
        new_content = restore_user_sections(template, extract_user_sections(content))
        action = "overwritten"
    elif add_markers and content.strip() and template.strip():
        # The FORGE block is regenerated; USER and unmarked text is merged again
        source = strip_markers(strip_forge_blocks(content))
        new_content = wrap_merged_document(
            parse_semantic_sections(source), parse_semantic_sections(template), taxonomy,
        )
        action = "merged"
    else:
        new_content = semantic_merge(content, template, taxonomy=taxonomy)
        action = "merged"

    new_content = new_content.rstrip("\n") + "\n"
    if new_content == content:
        return "unchanged"

    if not dry_run:
        path.write_text(new_content, encoding="utf-8")
    return action


def sync_context_files(
    root: Path | str,
    template: str,
    filenames: list[str] | tuple[str, ...] = ("AGENTS.md",),
    overwrite: bool = False,
    merge: bool = True,
    add_markers: bool = False,
    dry_run: bool = False,
    taxonomy: Taxonomy | None = None,
) -> dict[str, Any]:
    """Merge the template into each named instruction file under root."""
    root_path = Path(root)

    updated = []
    created = []
    skipped = []
    errors = []

    for filename in filenames:
        target = root_path / filename
        try:
            action = merge_context_file(
                target, template,
                overwrite=overwrite,
                merge=merge,
                add_markers=add_markers,
                dry_run=dry_run,
                taxonomy=taxonomy,
            )
        except (OSError, UnicodeDecodeError) as e:
            errors.append({"path": str(target), "error": str(e)})
            continue

        if action == "created":
            created.append(str(target))
        elif action in ("merged", "overwritten"):
            updated.append(str(target))
        else:
            skipped.append(str(target))

    return {
        "updated": updated,
        "created": created,
        "skipped": skipped,
        "errors": errors,
        "dry_run": dry_run,
    }
