"""AI-assisted conventional commit messages for git repositories."""

__version__ = "0.1.0"
