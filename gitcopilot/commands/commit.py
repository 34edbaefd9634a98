"""Command for creating git commits."""

import logging
import os
import tempfile
from typing import Optional

from git import GitCommandError, Repo
from rich.console import Console

from ..exceptions import CommitError
from .base import GitCommand

logger = logging.getLogger(__name__)


class CommitCommand(GitCommand):
    """Command for committing the already staged changes.

    Attributes:
        message (str): The commit message
        commit_hash (Optional[str]): The hash of the created commit
    """

    def __init__(
        self,
        repo: Repo,
        message: str,
        console: Optional[Console] = None,
        no_verify: bool = False,
    ):
        """Initialize the commit command.

        Args:
            repo: The git repository to operate on
            message: The commit message
            console: Optional Rich console for output
            no_verify: Skip pre-commit hooks when creating commits
        """
        super().__init__(repo, console)
        self.message = message
        self.commit_hash: Optional[str] = None
        self.no_verify = no_verify

    async def execute(self) -> None:
        """Create the commit and notify observers.

        Raises:
            CommitError: git refused or failed to create the commit
        """
        if not self.message.strip():
            raise CommitError("Refusing to commit with an empty message")

        # Multi-line messages go through -F with a temporary file
        with tempfile.NamedTemporaryFile(
            mode="w", delete=False, suffix=".commitmsg", encoding="utf-8"
        ) as f:
            f.write(self.message)
            temp_file = f.name

        args = ["-F", temp_file]
        if self.no_verify:
            args.append("--no-verify")

        try:
            self.repo.git.commit(*args)
            self.commit_hash = self.repo.head.commit.hexsha
        except GitCommandError as e:
            logger.debug("git commit failed: %s", e)
            detail = (e.stderr or e.stdout or "").strip() or str(e)
            raise CommitError(f"Failed to create commit: {detail}") from e
        finally:
            try:
                os.unlink(temp_file)
            except OSError:
                pass

        for observer in self.observers:
            await observer.on_commit_created(self.message, self.commit_hash)
