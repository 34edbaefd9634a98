"""Exception classes for git-copilot.

- GitCopilotError: Base exception for all git-copilot errors
- ConfigurationError: Missing credential or invalid configuration value
- ExternalServiceError: The completion endpoint could not be used
- RepositoryQueryError: A repository query failed
- CommitError: Creating the commit failed
"""


class GitCopilotError(Exception):
    """Base exception for git-copilot errors."""

    pass


class ConfigurationError(GitCopilotError):
    """Raised when required configuration is missing or invalid."""

    pass


class ExternalServiceError(GitCopilotError):
    """Raised when the completion service call fails."""

    pass


class RepositoryQueryError(GitCopilotError):
    """Raised when querying the git repository fails."""

    pass


class CommitError(GitCopilotError):
    """Raised when the commit operation fails."""

    pass
