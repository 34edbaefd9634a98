"""Base command class for git operations.

This module provides the abstract base class for git commands,
implementing the Command Pattern with observer support.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from git import Repo
from rich.console import Console

from ..observers import GitOperationObserver


class GitCommand(ABC):
    """Abstract base class for git commands.

    Attributes:
        repo (Repo): The git repository to operate on
        console (Console): Rich console for output
        observers (List[GitOperationObserver]): List of observers to notify
    """

    def __init__(self, repo: Repo, console: Optional[Console] = None):
        self.repo = repo
        self.console = console or Console()
        self.observers: List[GitOperationObserver] = []

    def add_observer(self, observer: GitOperationObserver) -> None:
        """Add an observer to be notified of command execution."""
        self.observers.append(observer)

    def remove_observer(self, observer: GitOperationObserver) -> None:
        """Remove an observer from the notification list."""
        self.observers.remove(observer)

    @abstractmethod
    async def execute(self) -> None:
        """Execute the git command.

        Raises:
            GitCopilotError: The command could not be completed
        """
        pass
