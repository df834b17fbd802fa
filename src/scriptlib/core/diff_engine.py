"""Diff engine for describing what a transformation changed.

Produces standard git-diff style output together with a DiffSummary of line
and region counts. Context lines are configurable (default from
config.edit.diff_context_lines).
"""

import difflib

from scriptlib.core.patterns import split_lines
from scriptlib.models import DiffSummary, UnifiedDiff


def _diff_lines(text: str) -> list[str]:
    # Same boundaries as the editing primitives; a \r before \n stays visible
    return [line[:-1] if line.endswith("\n") else line for line in split_lines(text)]


def compute_unified_diff(
    old_content: str,
    new_content: str,
    context_lines: int = 3,
    fromfile: str = "original",
    tofile: str = "candidate",
) -> UnifiedDiff:
    """Compute unified diff format (standard git-diff style).

    Uses difflib.unified_diff() to generate standard diff output.
    Parses the output to compute summary statistics.

    Args:
        old_content: Original content
        new_content: New content
        context_lines: Number of context lines (passed to unified_diff n parameter)
        fromfile: Label for the original side
        tofile: Label for the new side

    Returns:
        UnifiedDiff with diff content and summary
    """
    old_lines = _diff_lines(old_content)
    new_lines = _diff_lines(new_content)

    diff_lines = list(
        difflib.unified_diff(
            old_lines,
            new_lines,
            fromfile=fromfile,
            tofile=tofile,
            n=context_lines,
            lineterm="",
        )
    )

    lines_added = 0
    lines_removed = 0
    regions_changed = 0

    for line in diff_lines:
        if line.startswith("@@"):
            regions_changed += 1
        elif line.startswith("+") and not line.startswith("+++"):
            lines_added += 1
        elif line.startswith("-") and not line.startswith("---"):
            lines_removed += 1

    # Lines modified = minimum of added and removed (represents replacements)
    lines_modified = min(lines_added, lines_removed)
    lines_added -= lines_modified
    lines_removed -= lines_modified

    summary = DiffSummary(
        lines_added=lines_added,
        lines_removed=lines_removed,
        lines_modified=lines_modified,
        regions_changed=regions_changed,
    )

    return UnifiedDiff(content="\n".join(diff_lines), summary=summary)
