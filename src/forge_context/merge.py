"""Semantic merge of an existing instruction file with the workflow template.

The merge runs three passes over the parsed sections:

1. Replace: template sections classified ``replace`` are emitted
   verbatim; similar existing ``replace`` sections are consumed.
2. Merge: template sections classified ``merge`` are emitted, each
   followed by the bodies of similar existing ``merge`` sections.
3. Preserve: remaining existing sections are emitted in their original
   order, except confident ``replace`` sections, which the template
   supersedes. A preamble is moved to the very front.

Blocks are joined with a blank line.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from forge_context.classifier import MERGE, PRESERVE, REPLACE, Taxonomy
from forge_context.markers import wrap_with_markers
from forge_context.sections import Section, normalize_line_endings, parse_semantic_sections

BLOCK_SEPARATOR = "\n\n"


@dataclass
class MergePlan:
    """Ordered output blocks plus bookkeeping about existing sections.

    ``owners`` runs parallel to ``blocks``: ``"forge"`` for blocks taken
    from template replace sections, ``"user"`` for everything else.
    """
    blocks: list[str] = field(default_factory=list)
    owners: list[str] = field(default_factory=list)
    processed: set[int] = field(default_factory=set)
    dropped: list[int] = field(default_factory=list)

    def add(self, block: str, owner: str = "user", front: bool = False) -> None:
        if front:
            self.blocks.insert(0, block)
            self.owners.insert(0, owner)
        else:
            self.blocks.append(block)
            self.owners.append(owner)

    def owned_by(self, owner: str) -> list[str]:
        return [b for b, o in zip(self.blocks, self.owners) if o == owner]

    def render(self) -> str:
        return BLOCK_SEPARATOR.join(self.blocks)


def _linked_existing(
    template_section: Section,
    existing: list[Section],
    category: str,
    taxonomy: Taxonomy,
) -> list[int]:
    """Indices of existing sections of the same confident category with a similar header."""
    indices = []
    for idx, section in enumerate(existing):
        if section.is_preamble:
            continue
        if not taxonomy.is_confident(taxonomy.classify(section.header), category):
            continue
        if taxonomy.headers_linked(template_section.header, section.header):
            indices.append(idx)
    return indices


def plan_merge(
    existing: list[Section],
    template: list[Section],
    taxonomy: Taxonomy | None = None,
) -> MergePlan:
    """Compute the merged block sequence for two parsed documents."""
    tax = taxonomy or Taxonomy.default()
    plan = MergePlan()

    # 1. Template workflow sections win
    for section in template:
        if section.is_preamble:
            continue
        if tax.is_confident(tax.classify(section.header), REPLACE):
            plan.add(section.raw, owner="forge")
            plan.processed.update(_linked_existing(section, existing, REPLACE, tax))

    # 2. Tool listings: template first, then the user's entries
    for section in template:
        if section.is_preamble:
            continue
        if tax.is_confident(tax.classify(section.header), MERGE):
            plan.add(section.raw)
            for idx in _linked_existing(section, existing, MERGE, tax):
                if existing[idx].content:
                    plan.add(existing[idx].content)
                plan.processed.add(idx)

    # 3. Everything else the user wrote
    for idx, section in enumerate(existing):
        if idx in plan.processed:
            continue
        if section.is_preamble:
            if section.content.strip():
                plan.add(section.raw, front=True)
            continue
        if tax.is_confident(tax.classify(section.header), REPLACE):
            plan.dropped.append(idx)
            continue
        plan.add(section.raw)

    return plan


def build_merged_document(
    existing: list[Section],
    template: list[Section],
    taxonomy: Taxonomy | None = None,
) -> str:
    """Merge two parsed documents into markdown text."""
    return plan_merge(existing, template, taxonomy).render()


def marker_partitions(
    existing: list[Section],
    template: list[Section],
    taxonomy: Taxonomy | None = None,
) -> dict[str, str]:
    """Split parsed documents into forge-owned and user-owned text.

    forge: template sections confidently classified ``replace``.
    user: existing sections confidently classified ``preserve``.

    Merge sections, unknown sections and preambles appear in neither.
    """
    tax = taxonomy or Taxonomy.default()

    def _pick(sections: list[Section], category: str) -> str:
        return BLOCK_SEPARATOR.join(
            s.raw for s in sections
            if not s.is_preamble and tax.is_confident(tax.classify(s.header), category)
        )

    return {"user": _pick(existing, PRESERVE), "forge": _pick(template, REPLACE)}


def wrap_merged_document(
    existing: list[Section],
    template: list[Section],
    taxonomy: Taxonomy | None = None,
) -> str:
    """Wrap the plain merge in FORGE/USER blocks without losing anything.

    Template replace sections go in the FORGE block. Every other block of
    the plain merge (preamble, merge listings, unknown and low-confidence
    sections) goes in the USER block, so the two blocks together hold
    exactly what ``build_merged_document`` returns.
    """
    plan = plan_merge(existing, template, taxonomy)

    def _join(blocks: list[str]) -> str:
        return BLOCK_SEPARATOR.join(b.strip("\n") for b in blocks if b.strip())

    return wrap_with_markers(
        user=_join(plan.owned_by("user")),
        forge=_join(plan.owned_by("forge")),
    )


def semantic_merge(
    existing_content: str | None,
    template_content: str | None,
    add_markers: bool = False,
    taxonomy: Taxonomy | None = None,
) -> str:
    """Merge an existing instruction document with the template.

    Args:
        existing_content: Current file contents; may be empty or None.
        template_content: Canonical template text.
        add_markers: Return the FORGE/USER wrapped partition instead of
            the plain merge. The partition is recomputed from the parsed
            inputs and is not a re-wrapping of the plain merge output.
        taxonomy: Keyword tables and thresholds; built-in when omitted.

    Returns:
        The merged document body.
    """
    existing_content = normalize_line_endings(existing_content) if isinstance(existing_content, str) else ""
    template_content = normalize_line_endings(template_content) if isinstance(template_content, str) else ""

    if not existing_content or not existing_content.strip():
        return template_content or ""
    if not template_content or not template_content.strip():
        return existing_content

    existing = parse_semantic_sections(existing_content)
    template = parse_semantic_sections(template_content)

    if add_markers:
        return wrap_with_markers(**marker_partitions(existing, template, taxonomy))

    return build_merged_document(existing, template, taxonomy)
