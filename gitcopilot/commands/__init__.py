"""Git operation commands using the Command Pattern.

Example:
    ```python
    from gitcopilot.commands import CommitCommand
    from gitcopilot.observers import FileLogObserver

    commit_cmd = CommitCommand(repo, "✨ feat: add login form")
    commit_cmd.add_observer(FileLogObserver("git.log"))
    await commit_cmd.execute()
    ```
"""

from .base import GitCommand
from .commit import CommitCommand

__all__ = [
    "GitCommand",
    "CommitCommand",
]
