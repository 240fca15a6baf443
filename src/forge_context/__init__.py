"""forge-context — semantic merge of agent instruction files.

Merges a user's existing instruction document (AGENTS.md, CLAUDE.md, ...)
with the canonical workflow template. Section roles are inferred from
header text alone:

    preserve  project-specific content the user wrote, kept verbatim
    replace   workflow/process content, the template version wins
    merge     tool and integration listings, both sides combined

Optional sentinel markers partition the output:
    <!-- FORGE:START --> ... <!-- FORGE:END -->
    <!-- USER:START --> ... <!-- USER:END -->
"""

__version__ = "0.3.0"

# Marker constants used by the wrapper, the sync layer and the CLI
FORGE_START = "<!-- FORGE:START -->"
FORGE_END = "<!-- FORGE:END -->"
USER_START = "<!-- USER:START -->"
USER_END = "<!-- USER:END -->"
