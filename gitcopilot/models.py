"""Shared models for git-copilot."""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class CommitType(str, Enum):
    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"

    @property
    def emoji(self) -> str:
        return COMMIT_TYPE_EMOJI[self]

    @property
    def description(self) -> str:
        return COMMIT_TYPE_DESCRIPTIONS[self]


COMMIT_TYPE_EMOJI = {
    CommitType.FEAT: "✨",
    CommitType.FIX: "🐛",
    CommitType.DOCS: "📝",
    CommitType.STYLE: "💄",
    CommitType.REFACTOR: "♻️",
    CommitType.PERF: "⚡️",
    CommitType.TEST: "✅",
    CommitType.BUILD: "👷",
    CommitType.CI: "🔧",
    CommitType.CHORE: "🔨",
}

COMMIT_TYPE_DESCRIPTIONS = {
    CommitType.FEAT: "new feature",
    CommitType.FIX: "bug fix",
    CommitType.DOCS: "documentation changes",
    CommitType.STYLE: "code style changes (no functional changes)",
    CommitType.REFACTOR: "code refactoring (no new features or bug fixes)",
    CommitType.PERF: "performance improvements",
    CommitType.TEST: "test-related changes",
    CommitType.BUILD: "changes to build system or external dependencies",
    CommitType.CI: "changes to CI configuration files and scripts",
    CommitType.CHORE: "other changes",
}


class ChangeKind(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass
class ChangeSet:
    """Changes found in the inspected range of a repository.

    The three path lists are disjoint. ``file_diffs`` holds a diff for each
    added or modified path whose lookup succeeded.
    """

    added: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    file_diffs: Dict[str, str] = field(default_factory=dict)
    raw_diff: str = ""

    @property
    def total(self) -> int:
        return len(self.added) + len(self.modified) + len(self.deleted)

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def add(self, path: str, kind: ChangeKind) -> None:
        if kind is ChangeKind.ADDED:
            self.added.append(path)
        elif kind is ChangeKind.DELETED:
            self.deleted.append(path)
        else:
            self.modified.append(path)


_HEADER_RE = re.compile(
    r"^(?:(?P<emoji>\S+)\s+)?(?P<type>[a-z]+)(?:\([^)]*\))?!?:\s*(?P<summary>.+)$"
)


class CommitMessage(BaseModel):
    """A generated commit message split into its parts."""

    text: str
    emoji: Optional[str] = None
    type: Optional[CommitType] = None
    summary: str
    details: List[str] = Field(default_factory=list)

    @property
    def header(self) -> str:
        return self.text.split("\n", 1)[0]

    @classmethod
    def parse(cls, text: str) -> "CommitMessage":
        lines = [line.rstrip() for line in text.strip().splitlines()]
        header = lines[0] if lines else ""
        details = [
            line.lstrip()[2:].strip()
            for line in lines[1:]
            if line.lstrip().startswith(("- ", "* "))
        ]

        match = _HEADER_RE.match(header)
        if match and match.group("type") in {t.value for t in CommitType}:
            return cls(
                text=text.strip(),
                emoji=match.group("emoji"),
                type=CommitType(match.group("type")),
                summary=match.group("summary").strip(),
                details=details,
            )
        return cls(text=text.strip(), summary=header, details=details)


class ChatMessage(BaseModel):
    role: str
    content: str


class CompletionRequest(BaseModel):
    model: str
    messages: List[ChatMessage]
    temperature: float
    max_tokens: int


class CompletionMessage(BaseModel):
    content: str


class CompletionChoice(BaseModel):
    message: CompletionMessage


class CompletionResponse(BaseModel):
    choices: List[CompletionChoice] = Field(min_length=1)

    @property
    def content(self) -> str:
        return self.choices[0].message.content
