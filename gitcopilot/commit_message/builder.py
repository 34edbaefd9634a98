"""Turns a ChangeSet into the instruction sent to the completion service."""
from typing import Dict, List

from ..models import ChangeSet
from ..prompts import COMMIT_MESSAGE_PREAMBLE

# Diff excerpts are cut to this many characters to keep the request small.
MAX_DIFF_CHARS = 1000


def _format_section(
    title: str, paths: List[str], file_diffs: Dict[str, str], with_diffs: bool
) -> str:
    section = f"\n{title}:\n"
    for path in paths:
        section += f"- {path}\n"
        diff = file_diffs.get(path) if with_diffs else None
        if diff:
            section += f"\n```diff\n{diff[:MAX_DIFF_CHARS]}\n```\n"
    return section


def build_prompt(changes: ChangeSet) -> str:
    """Build the commit message request for ``changes``.

    The output only depends on the ChangeSet, so building twice yields the
    same string.
    """
    prompt = COMMIT_MESSAGE_PREAMBLE

    prompt += "Change statistics:\n"
    prompt += f"- Added: {len(changes.added)} files\n"
    prompt += f"- Modified: {len(changes.modified)} files\n"
    prompt += f"- Deleted: {len(changes.deleted)} files\n\n"

    prompt += "Detailed changes:\n"
    if changes.added:
        prompt += _format_section("Added files", changes.added, changes.file_diffs, True)
    if changes.modified:
        prompt += _format_section("Modified files", changes.modified, changes.file_diffs, True)
    if changes.deleted:
        prompt += _format_section("Deleted files", changes.deleted, changes.file_diffs, False)

    return prompt
