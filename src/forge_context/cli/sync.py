"""Instruction file sync CLI commands."""

import argparse
from pathlib import Path

import yaml


def cmd_sync(args: argparse.Namespace) -> int:
    from forge_context.paths import default_target
    from forge_context.sync import sync_context_files
    from forge_context.taxonomy import resolve_taxonomy

    try:
        taxonomy = resolve_taxonomy(args.taxonomy)
        template = Path(args.template).read_text(encoding="utf-8")
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1

    result = sync_context_files(
        root=args.root,
        template=template,
        filenames=args.file or [default_target()],
        overwrite=args.overwrite,
        merge=not args.no_merge,
        add_markers=args.markers,
        dry_run=args.dry_run,
        taxonomy=taxonomy,
    )

    print("Instruction File Sync Results")
    print("─" * 40)
    print(f"  Updated: {len(result['updated'])}")
    print(f"  Created: {len(result['created'])}")
    print(f"  Skipped: {len(result['skipped'])}")
    if result["errors"]:
        print(f"  Errors:  {len(result['errors'])}")
        for e in result["errors"]:
            print(f"    - {e['path']}: {e['error']}")

    if result.get("dry_run"):
        print("\n[DRY RUN] No files were modified.")

    return 1 if result["errors"] else 0
