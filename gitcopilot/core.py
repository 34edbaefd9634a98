"""Core functionality for git-copilot."""
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from rich.console import Console

from .commands import CommitCommand, GitCommand
from .exceptions import RepositoryQueryError
from .models import ChangeKind, ChangeSet
from .observers import GitOperationObserver

logger = logging.getLogger(__name__)


def open_repo(repo_path: str) -> Repo:
    """Open the git repository containing ``repo_path``."""
    try:
        return Repo(repo_path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise RepositoryQueryError(f"Not a git repository: {repo_path}") from e


def classify_status(index_status: str, worktree_status: str) -> Optional[ChangeKind]:
    """Classify one ``git status --porcelain`` entry.

    Returns None for untracked, ignored and unmerged entries. The order of
    the checks keeps every path in exactly one category.
    """
    pair = index_status + worktree_status
    if pair in ("??", "!!"):
        return None
    if "U" in pair or pair in ("AA", "DD"):
        return None
    if index_status == "A":
        return ChangeKind.ADDED
    if "D" in pair:
        return ChangeKind.DELETED
    if any(status in "MTRC" for status in pair.replace(" ", "")):
        return ChangeKind.MODIFIED
    return None


def classify_by_line_counts(insertions: int, deletions: int) -> ChangeKind:
    """Classify a file of a commit from its insertion and deletion counts."""
    if insertions > 0 and deletions == 0:
        return ChangeKind.ADDED
    if insertions == 0 and deletions > 0:
        return ChangeKind.DELETED
    return ChangeKind.MODIFIED


def parse_porcelain_status(output: str) -> Iterator[Tuple[str, str, str]]:
    """Yield ``(index_status, worktree_status, path)`` from ``git status --porcelain -z``."""
    entries = output.split("\0")
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue
        index_status, worktree_status, path = entry[0], entry[1], entry[3:]
        if index_status in "RC":
            # The rename/copy source follows as its own entry
            i += 1
        yield index_status, worktree_status, path


def parse_numstat(output: str) -> Iterator[Tuple[str, int, int]]:
    """Yield ``(path, insertions, deletions)`` from ``git diff --numstat -z``.

    Binary files report ``-`` for both counts and are read as zero.
    """
    for record in output.split("\0"):
        record = record.strip("\n")
        if not record:
            continue
        insertions, deletions, path = record.split("\t", 2)
        yield (
            path,
            int(insertions) if insertions.isdigit() else 0,
            int(deletions) if deletions.isdigit() else 0,
        )


class ChangeAnalyzer:
    """Collects the changes of a Git repository into a ChangeSet."""

    def __init__(self, repo_path: str):
        """Initialize the analyzer with a Git repository."""
        self.repo = open_repo(repo_path)
        self.repo_path = repo_path

    def _git(self, command: str, *args: str) -> str:
        try:
            return getattr(self.repo.git, command)(*args)
        except GitCommandError as e:
            raise RepositoryQueryError(
                f"git {command} failed: {(e.stderr or '').strip() or e}"
            ) from e

    def _collect_file_diffs(self, changes: ChangeSet, paths: Iterable[str], *diff_args: str) -> None:
        """Fetch one diff per path; failed lookups are logged and skipped."""
        for path in paths:
            try:
                changes.file_diffs[path] = self._git("diff", *diff_args, "--", path)
            except RepositoryQueryError as e:
                logger.warning("Error getting differences for file %s: %s", path, e)

    def stage_all(self) -> None:
        """Stage every working tree change, including deletions and new files."""
        self._git("add", "--all")

    def analyze_staged(self, stage_all: bool = False) -> ChangeSet:
        """Analyze the current changes of the repository.

        Args:
            stage_all: Stage all working tree changes first

        Returns:
            ChangeSet: Classified paths with their staged diffs
        """
        if stage_all:
            self.stage_all()

        changes = ChangeSet()
        status = self._git("status", "--porcelain", "-z")
        for index_status, worktree_status, path in parse_porcelain_status(status):
            kind = classify_status(index_status, worktree_status)
            if kind is None:
                continue
            changes.add(path, kind)

        changes.raw_diff = self._git("diff", "--staged")
        self._collect_file_diffs(changes, changes.added + changes.modified, "--staged")

        logger.debug(
            "Staged changes: %d added, %d modified, %d deleted",
            len(changes.added), len(changes.modified), len(changes.deleted),
        )
        return changes

    def _last_commit_range(self) -> Tuple[str, str]:
        try:
            head = self.repo.head.commit
        except ValueError as e:
            raise RepositoryQueryError("Repository has no commits yet") from e

        if not head.parents:
            raise RepositoryQueryError(
                f"Commit {head.hexsha[:7]} is the first commit of the repository "
                "and has no parent to compare against"
            )
        return head.parents[0].hexsha, head.hexsha

    def analyze_last_commit(self) -> ChangeSet:
        """Analyze the most recent commit against its first parent.

        Raises:
            RepositoryQueryError: The repository has fewer than two commits
        """
        previous, latest = self._last_commit_range()

        changes = ChangeSet()
        changes.raw_diff = self._git("diff", previous, latest)

        numstat = self._git("diff", "--numstat", "-z", "--no-renames", previous, latest)
        for path, insertions, deletions in parse_numstat(numstat):
            changes.add(path, classify_by_line_counts(insertions, deletions))

        self._collect_file_diffs(changes, changes.added + changes.modified, previous, latest)

        logger.debug(
            "Commit %s: %d added, %d modified, %d deleted",
            latest[:7], len(changes.added), len(changes.modified), len(changes.deleted),
        )
        return changes


class GitCommitter:
    """Handles git operations using the Command Pattern."""

    def __init__(self, repo_path: str, console: Optional[Console] = None, no_verify: bool = False):
        self.repo = open_repo(repo_path)
        self.console = console or Console()
        self.no_verify = no_verify
        self.observers: List[GitOperationObserver] = []

    def add_observer(self, observer: GitOperationObserver) -> None:
        """Add an observer to be notified of git operations."""
        self.observers.append(observer)

    def remove_observer(self, observer: GitOperationObserver) -> None:
        """Remove an observer from the notification list."""
        self.observers.remove(observer)

    async def execute_command(self, command: GitCommand) -> None:
        """Execute a git command with the registered observers attached."""
        for observer in self.observers:
            command.add_observer(observer)
        await command.execute()

    async def commit(self, message: str) -> str:
        """Commit the staged changes with ``message``.

        Returns:
            str: Hash of the new commit

        Raises:
            CommitError: The commit could not be created
        """
        command = CommitCommand(self.repo, message, self.console, no_verify=self.no_verify)
        await self.execute_command(command)
        return command.commit_hash
