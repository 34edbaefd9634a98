"""Commit message generation package."""

from .builder import MAX_DIFF_CHARS, build_prompt
from .generator import CommitMessageGenerator

__all__ = [
    'MAX_DIFF_CHARS',
    'build_prompt',
    'CommitMessageGenerator',
]
