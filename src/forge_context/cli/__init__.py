"""Command line interface for forge-context.

Usage:
    forge-context merge <existing> <template> [--markers] [--output PATH] [--explain]
    forge-context classify <header>... [--json]
    forge-context sections <file> [--json]
    forge-context sync <template> [--root DIR] [--file NAME] [--overwrite] [--no-merge]
                       [--markers] [--dry-run]

Every command accepts --taxonomy <path.yaml> (or FORGE_CONTEXT_TAXONOMY)
to replace the built-in keyword tables.
"""

import argparse
import sys

from forge_context import __version__
from forge_context.cli.merge import cmd_classify, cmd_merge, cmd_sections
from forge_context.cli.sync import cmd_sync


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forge-context",
        description="Semantic merge of agent instruction files with the workflow template",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    # merge
    mrg = sub.add_parser("merge", help="Merge an instruction file with the template")
    mrg.add_argument("existing", help="Existing instruction file (may not exist yet)")
    mrg.add_argument("template", help="Template file")
    mrg.add_argument(
        "--markers", action="store_true",
        help="Wrap output in FORGE/USER marker blocks",
    )
    mrg.add_argument(
        "--output", default=None,
        help="Write to this path instead of stdout",
    )
    mrg.add_argument(
        "--explain", action="store_true",
        help="Report consumed and dropped sections",
    )
    mrg.add_argument("--taxonomy", default=None, help="Path to taxonomy YAML")

    # classify
    cls = sub.add_parser("classify", help="Classify section headers")
    cls.add_argument("headers", nargs="+", help="Header text")
    cls.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    cls.add_argument("--taxonomy", default=None, help="Path to taxonomy YAML")

    # sections
    sec = sub.add_parser("sections", help="Show the section structure of a file")
    sec.add_argument("file", help="Markdown file")
    sec.add_argument("--json", action="store_true", help="Output machine-readable JSON")

    # sync
    syn = sub.add_parser("sync", help="Merge the template into instruction files on disk")
    syn.add_argument("template", help="Template file")
    syn.add_argument("--root", default=".", help="Project root (default: cwd)")
    syn.add_argument(
        "--file", action="append", default=None,
        help="Instruction filename, repeatable (default: AGENTS.md)",
    )
    syn.add_argument(
        "--overwrite", action="store_true",
        help="Replace existing files with the template",
    )
    syn.add_argument(
        "--no-merge", action="store_true",
        help="Leave existing files untouched",
    )
    syn.add_argument(
        "--markers", action="store_true",
        help="Wrap output in FORGE/USER marker blocks",
    )
    syn.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing",
    )
    syn.add_argument("--taxonomy", default=None, help="Path to taxonomy YAML")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "merge": cmd_merge,
        "classify": cmd_classify,
        "sections": cmd_sections,
        "sync": cmd_sync,
    }
    return dispatch[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
