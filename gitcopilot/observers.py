"""Observer pattern for git operations."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape


def _subject(message: str) -> str:
    return message.strip().split("\n", 1)[0]


class GitOperationObserver(ABC):
    """Abstract base class for git operation observers."""

    @abstractmethod
    async def on_commit_created(self, message: str, commit_hash: str) -> None:
        """Called when a commit is created."""
        pass


class ConsoleLogObserver(GitOperationObserver):
    """Observer that logs git operations to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    async def on_commit_created(self, message: str, commit_hash: str) -> None:
        self.console.print(
            f"[green]Created commit {commit_hash[:7]}: {escape(_subject(message))}[/green]"
        )


class FileLogObserver(GitOperationObserver):
    """Observer that logs git operations to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    async def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(f"{timestamp} - {message}\n")

    async def on_commit_created(self, message: str, commit_hash: str) -> None:
        await self._log(f"Created commit {commit_hash}: {_subject(message)}")
