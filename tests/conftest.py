import pytest
import tempfile
from pathlib import Path
from git import Repo

pytest_plugins = ('pytest_asyncio',)


def _configure_identity(repo: Repo) -> None:
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's real configuration."""
    config_dir = tmp_path / "git-copilot-config"
    monkeypatch.setenv("GIT_COPILOT_CONFIG_DIR", str(config_dir))
    for env_var in (
        "GIT_COPILOT_API_KEY",
        "GIT_COPILOT_MODEL",
        "GIT_COPILOT_API_URL",
        "GIT_COPILOT_REQUEST_TIMEOUT",
        "GIT_COPILOT_LOG_FILE",
        "DEEPSEEK_API_KEY",
    ):
        monkeypatch.delenv(env_var, raising=False)
    yield config_dir


@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository with a single commit."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)
        _configure_identity(repo)

        test_file = Path(tmp_dir) / "test.txt"
        test_file.write_text("Initial content\n")

        repo.git.add("test.txt")
        repo.git.commit("-m", "Initial commit")

        yield tmp_dir


@pytest.fixture
def empty_git_repo():
    """Create a temporary git repository without any commits."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)
        _configure_identity(repo)
        yield tmp_dir


@pytest.fixture
def temp_git_repo_with_deleted_file(temp_git_repo):
    """Repository whose second commit adds a file that tests can delete."""
    repo = Repo(temp_git_repo)
    to_delete = Path(temp_git_repo) / "to_delete.txt"
    to_delete.write_text("one\ntwo\nthree\n")
    repo.git.add("to_delete.txt")
    repo.git.commit("-m", "Add file to delete")
    return temp_git_repo
