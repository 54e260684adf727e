"""Pytest fixtures for git-branch-cleanup tests"""
import tempfile
from pathlib import Path
import pytest
import git

from git_branch_cleanup.constants import SECONDS_PER_DAY
from git_branch_cleanup.models.branch import (
    AheadBehind,
    Branch,
    CleanupCandidate,
    RiskLevel,
)
from git_branch_cleanup.services.rule_store import RuleStore

OLD_DATE = "2020-01-01T12:00:00"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def rules_dir(temp_dir):
    """Directory for rule files, kept out of the user's home."""
    path = temp_dir / "rules"
    path.mkdir()
    return path


@pytest.fixture(autouse=True)
def isolated_rules_dir(temp_dir, monkeypatch):
    """Point the default rule store location at a temp directory."""
    from git_branch_cleanup.services import rule_store
    monkeypatch.setattr(rule_store, "DEFAULT_RULES_DIR", temp_dir / "default-rules")


@pytest.fixture
def mock_config():
    """Create a configuration dictionary."""
    return {
        'verbose': False,
        'debug': False,
        'stale_branch_days': 90,
        'protection_rules': [],
        'category': 'all',
        'prune_remotes': True,
        'interactive': False,
        'dry_run': False,
        'force': True,
    }


def _commit_file(repo, name, content, message, date=None):
    path = Path(repo.working_dir) / name
    path.write_text(content)
    repo.git.add(name)
    env = {'GIT_AUTHOR_DATE': date, 'GIT_COMMITTER_DATE': date} if date else None
    repo.git.commit('-m', message, env=env)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    _commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo, temp_dir):
    """Create a Git repository with one branch per cleanup category.

    - feature/merged: merged into main (merged, safe)
    - feature/wip: one fresh unmerged commit (no category)
    - stale/old: one unmerged commit from 2020 (stale, warning)
    - feature/gone: pushed, then deleted on the remote with one unmerged commit (gone, danger)
    """
    repo = git_repo

    origin_path = temp_dir / "origin.git"
    git.Repo.init(origin_path, bare=True)
    repo.create_remote('origin', str(origin_path))
    repo.git.push('-u', 'origin', 'main')

    repo.git.checkout('-b', 'feature/merged')
    _commit_file(repo, "merged.txt", "Merged content\n", "Feature to merge")
    repo.git.checkout('main')
    repo.git.merge('feature/merged', '--no-ff', '-m', 'Merge feature/merged')

    repo.git.checkout('-b', 'feature/wip')
    _commit_file(repo, "wip.txt", "Work in progress\n", "WIP")
    repo.git.checkout('main')

    repo.git.checkout('-b', 'stale/old')
    _commit_file(repo, "old.txt", "Old content\n", "Old commit", date=OLD_DATE)
    repo.git.checkout('main')

    repo.git.checkout('-b', 'feature/gone')
    _commit_file(repo, "gone.txt", "Gone content\n", "Pushed then deleted upstream")
    repo.git.push('-u', 'origin', 'feature/gone')
    repo.git.push('origin', '--delete', 'feature/gone')
    repo.git.checkout('main')

    yield repo


@pytest.fixture
def rule_store(git_repo, rules_dir):
    """RuleStore for the test repository backed by a temp directory."""
    return RuleStore(git_repo.working_dir, rules_dir=rules_dir)


@pytest.fixture
def now():
    """A fixed current time for age calculations."""
    return 1_700_000_000


@pytest.fixture
def make_branch(now):
    """Factory for Branch snapshots."""
    def _make(name, ahead=0, behind=0, days_old=1, is_head=False, upstream=None):
        return Branch(
            name=name,
            shorthand=name,
            is_head=is_head,
            upstream=upstream,
            ahead_behind=AheadBehind(ahead=ahead, behind=behind),
            last_commit_timestamp=now - days_old * SECONDS_PER_DAY,
        )
    return _make


@pytest.fixture
def make_candidate(make_branch):
    """Factory for CleanupCandidates."""
    def _make(name, risk=RiskLevel.SAFE, is_protected=False, reason="Fully merged into current branch"):
        return CleanupCandidate(
            branch=make_branch(name),
            risk=risk,
            risk_reason=reason,
            is_protected=is_protected,
            protected_reason="Protected by branch rule" if is_protected else None,
        )
    return _make
