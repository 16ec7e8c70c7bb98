import pytest
import tempfile
from pathlib import Path
from git import Repo

pytest_plugins = ('pytest_asyncio',)


def _configure_user(repo: Repo) -> None:
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")


@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository with one commit."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)
        _configure_user(repo)

        test_file = Path(tmp_dir) / "test.txt"
        test_file.write_text("Initial content")

        repo.index.add(["test.txt"])
        repo.index.commit("Initial commit")

        yield tmp_dir


@pytest.fixture
def empty_git_repo():
    """Create a temporary git repository without commits."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)
        _configure_user(repo)
        yield tmp_dir


@pytest.fixture
def temp_git_repo_with_remote(temp_git_repo):
    """Create a repository with a bare ``origin`` remote."""
    with tempfile.TemporaryDirectory() as remote_dir:
        Repo.init(remote_dir, bare=True)
        repo = Repo(temp_git_repo)
        repo.create_remote("origin", remote_dir)
        yield temp_git_repo


@pytest.fixture
def temp_git_repo_detached_head(temp_git_repo):
    """Create a repository in detached HEAD state."""
    repo = Repo(temp_git_repo)
    repo.head.reference = repo.head.commit
    yield temp_git_repo


def stage_files(repo_path, files):
    """Write ``{path: content}`` into the repository and stage it."""
    repo = Repo(repo_path)
    for name, content in files.items():
        path = Path(repo_path) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    repo.index.add(list(files))
    return repo


@pytest.fixture
def stage():
    """Fixture giving tests the ``stage_files`` helper."""
    return stage_files
