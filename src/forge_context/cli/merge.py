"""Merge, classify and sections CLI commands."""

import argparse
import json
from pathlib import Path

import yaml


def _load_taxonomy(args: argparse.Namespace):
    from forge_context.taxonomy import resolve_taxonomy

    return resolve_taxonomy(getattr(args, "taxonomy", None))


def _read(path: str) -> str:
    from forge_context.sections import normalize_line_endings

    return normalize_line_endings(Path(path).read_text(encoding="utf-8")) or ""


def cmd_merge(args: argparse.Namespace) -> int:
    from forge_context.merge import semantic_merge

    try:
        taxonomy = _load_taxonomy(args)
        existing = _read(args.existing) if Path(args.existing).exists() else ""
        template = _read(args.template)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1

    merged = semantic_merge(existing, template, add_markers=args.markers, taxonomy=taxonomy)

    if args.output:
        try:
            Path(args.output).write_text(merged.rstrip("\n") + "\n", encoding="utf-8")
        except OSError as e:
            print(f"ERROR: {e}")
            return 1
        print(f"Wrote {args.output}")
    else:
        print(merged)

    if args.explain and existing.strip() and template.strip():
        if args.markers:
            _print_marker_report(existing, template, taxonomy)
        else:
            _print_merge_report(existing, template, taxonomy)
    return 0


def _print_merge_report(existing: str, template: str, taxonomy) -> None:
    from forge_context.merge import plan_merge
    from forge_context.sections import parse_semantic_sections

    sections = parse_semantic_sections(existing)
    plan = plan_merge(sections, parse_semantic_sections(template), taxonomy)
    print("\nMerge Report")
    print("─" * 40)
    print(f"  Blocks emitted:    {len(plan.blocks)}")
    print(f"  Consumed sections: {len(plan.processed)}")
    for idx in sorted(plan.processed):
        print(f"    - {sections[idx].header}")
    print(f"  Dropped sections:  {len(plan.dropped)}")
    for idx in plan.dropped:
        print(f"    - {sections[idx].header}")


def _print_marker_report(existing: str, template: str, taxonomy) -> None:
    from forge_context.classifier import PRESERVE, REPLACE
    from forge_context.sections import parse_semantic_sections

    def _confident(section, category):
        return not section.is_preamble and taxonomy.is_confident(
            taxonomy.classify(section.header), category
        )

    forge = [s for s in parse_semantic_sections(template) if _confident(s, REPLACE)]
    sections = parse_semantic_sections(existing)
    user = [s for s in sections if _confident(s, PRESERVE)]
    left_out = [s for s in sections if not _confident(s, PRESERVE)]

    print("\nMarker Report")
    print("─" * 40)
    print(f"  FORGE sections:    {len(forge)}")
    for s in forge:
        print(f"    - {s.header}")
    print(f"  USER sections:     {len(user)}")
    for s in user:
        print(f"    - {s.header}")
    print(f"  Left out:          {len(left_out)}")
    for s in left_out:
        print(f"    - {'(preamble)' if s.is_preamble else s.header}")


def cmd_classify(args: argparse.Namespace) -> int:
    try:
        taxonomy = _load_taxonomy(args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1

    results = []
    for header in args.headers:
        match = taxonomy.classify(header)
        results.append({
            "header": header,
            "category": match.category,
            "confidence": round(match.confidence, 3),
            "actionable": match.confidence > taxonomy.category_threshold,
        })

    if args.json:
        print(json.dumps(results, indent=2))
        return 0

    print(f"\n  {'Header':<40} {'Category':<10} {'Confidence':>10}")
    print(f"  {'─' * 62}")
    for r in results:
        flag = "" if r["actionable"] else "  (below threshold)"
        print(f"  {r['header']:<40} {r['category']:<10} {r['confidence']:>10.3f}{flag}")
    print()
    return 0


def cmd_sections(args: argparse.Namespace) -> int:
    from forge_context.sections import parse_semantic_sections

    try:
        text = _read(args.file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"ERROR: {e}")
        return 1

    sections = parse_semantic_sections(text)

    if args.json:
        print(json.dumps([
            {
                "level": s.level,
                "header": s.header,
                "start_line": s.start_line,
                "end_line": s.end_line,
                "content": s.content,
            }
            for s in sections
        ], indent=2))
        return 0

    print(f"\n  {'Lines':<12} {'Lvl':<4} Header")
    print(f"  {'─' * 50}")
    for s in sections:
        lines = f"{s.start_line}-{s.end_line}"
        header = "(preamble)" if s.is_preamble else "  " * (s.level - 1) + s.header
        print(f"  {lines:<12} {s.level:<4} {header}")
    print(f"\n  {len(sections)} section(s)")
    return 0
