"""Integration tests for BranchCleanup and the command line"""
import asyncio
from pathlib import Path
import pytest
from unittest.mock import patch

from git_branch_cleanup.cli.main import main
from git_branch_cleanup.config import CleanupConfig
from git_branch_cleanup.core import BranchCleanup
from git_branch_cleanup.exceptions import (
    OperationInProgressError,
    ProtectedBranchSelectionError,
    RepositoryError,
)
from git_branch_cleanup.models.branch import BranchRule, RiskLevel


def head_names(repo):
    return [h.name for h in repo.heads]


class TestBranchCleanupInit:
    """Test BranchCleanup initialization."""

    def test_init_with_valid_repo(self, git_repo, mock_config):
        cleanup = BranchCleanup(git_repo.working_dir, mock_config)
        assert cleanup.repo_path == git_repo.working_dir
        assert isinstance(cleanup.config, CleanupConfig)
        assert cleanup.config.stale_branch_days == 90

    def test_init_with_invalid_repo(self, temp_dir, mock_config):
        with pytest.raises(RepositoryError):
            BranchCleanup(str(temp_dir / "nonexistent"), mock_config)


class TestLoadCandidates:
    """Test categorizing a real repository."""

    def test_categories(self, git_repo_with_branches, mock_config, rule_store):
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        candidates = cleanup.load_candidates()

        assert [c.name for c in candidates.merged] == ['feature/merged']
        assert [c.name for c in candidates.stale] == ['stale/old']
        assert [c.name for c in candidates.gone] == ['feature/gone']
        assert candidates.gone[0].risk == RiskLevel.DANGER
        assert candidates.gone[0].risk_reason == "Remote deleted with 1 unpushed commit"

    def test_local_upstream_not_gone(self, git_repo_with_branches, mock_config, rule_store):
        """A branch tracking a local branch is not reported as having lost its upstream."""
        repo = git_repo_with_branches
        repo.git.checkout('-b', 'feature/local', '--track', 'main')
        (Path(repo.working_dir) / "local.txt").write_text("Local work\n")
        repo.git.add('local.txt')
        repo.git.commit('-m', 'Local work')
        repo.git.checkout('main')

        cleanup = BranchCleanup(repo.working_dir, mock_config, rule_store=rule_store)
        candidates = cleanup.load_candidates()

        assert [c.name for c in candidates.gone] == ['feature/gone']
        assert candidates.find('feature/local') is None

    def test_stale_branch_not_selected_by_default(self, git_repo_with_branches, mock_config, rule_store):
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        candidates = cleanup.load_candidates()

        assert candidates.find('stale/old') is not None
        assert 'stale/old' not in cleanup.default_selection(candidates)

    def test_current_branch_never_listed(self, git_repo_with_branches, mock_config, rule_store):
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        assert cleanup.load_candidates().find('main') is None

    def test_builtin_protected_branch_listed_but_protected(self, git_repo_with_branches, mock_config, rule_store):
        git_repo_with_branches.git.branch('develop')
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        candidates = cleanup.load_candidates()

        develop = candidates.find('develop')
        assert develop.is_protected is True
        assert 'develop' not in cleanup.default_selection(candidates)

    def test_stored_rules_applied(self, git_repo_with_branches, mock_config, rule_store):
        rule_store.save_rules([BranchRule(pattern='feature/*', prevent_deletion=True)])
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        candidates = cleanup.load_candidates()

        assert candidates.merged[0].is_protected is True
        assert not cleanup.default_selection(candidates)

    def test_stale_days_from_config(self, git_repo_with_branches, mock_config, rule_store):
        mock_config['stale_branch_days'] = 0
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        assert cleanup.load_candidates().stale == []


class TestProcessBranches:
    """Test the non-interactive cleanup flow."""

    def test_deletes_default_selection(self, git_repo_with_branches, mock_config, rule_store):
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        result = cleanup.process_branches()

        assert result.deleted == ['feature/merged']
        assert result.pruned == []
        assert 'feature/merged' not in head_names(git_repo_with_branches)
        assert 'feature/gone' in head_names(git_repo_with_branches)
        assert 'stale/old' in head_names(git_repo_with_branches)

    def test_dry_run(self, git_repo_with_branches, mock_config, rule_store):
        mock_config['dry_run'] = True
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        initial = head_names(git_repo_with_branches)

        assert cleanup.process_branches() is None
        assert head_names(git_repo_with_branches) == initial

    def test_explicit_selection_force_deletes_risky(self, git_repo_with_branches, mock_config, rule_store):
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        result = cleanup.process_branches(selected_names=['feature/gone'])

        assert result.deleted == ['feature/gone']
        assert 'feature/gone' not in head_names(git_repo_with_branches)

    def test_explicit_selection_of_protected_branch(self, git_repo_with_branches, mock_config, rule_store):
        git_repo_with_branches.git.branch('develop')
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)

        with pytest.raises(ProtectedBranchSelectionError):
            cleanup.process_branches(selected_names=['develop'])
        assert 'develop' in head_names(git_repo_with_branches)

    def test_unknown_selection_skipped(self, git_repo_with_branches, mock_config, rule_store):
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        assert cleanup.process_branches(selected_names=['main', 'feature/wip']) is None
        assert 'feature/wip' in head_names(git_repo_with_branches)

    def test_category_filter_limits_default_selection(self, git_repo_with_branches, mock_config, rule_store):
        mock_config['category'] = 'stale'
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        assert cleanup.process_branches() is None
        assert 'feature/merged' in head_names(git_repo_with_branches)

    @patch('git_branch_cleanup.core.branch_cleanup.console')
    def test_confirmation_declined(self, mock_console, git_repo_with_branches, mock_config, rule_store):
        mock_config['force'] = False
        mock_console.input.return_value = 'n'
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)

        assert cleanup.process_branches() is None
        mock_console.input.assert_called_once()
        assert 'feature/merged' in head_names(git_repo_with_branches)

    @patch('git_branch_cleanup.core.branch_cleanup.console')
    def test_confirmation_accepted(self, mock_console, git_repo_with_branches, mock_config, rule_store):
        mock_config['force'] = False
        mock_console.input.return_value = 'y'
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)

        result = cleanup.process_branches()
        assert result.deleted == ['feature/merged']

    def test_no_prune_when_disabled(self, git_repo_with_branches, mock_config, rule_store):
        mock_config['prune_remotes'] = False
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        assert cleanup.process_branches().pruned is None


class TestExecutePlan:
    """Test running deletion plans."""

    def test_operation_in_progress(self, git_repo_with_branches, mock_config, rule_store):
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        cleanup.operation_in_progress = True
        with pytest.raises(OperationInProgressError):
            asyncio.run(cleanup.execute_plan([]))

    def test_flag_cleared_after_run(self, git_repo_with_branches, mock_config, rule_store):
        cleanup = BranchCleanup(git_repo_with_branches.working_dir, mock_config, rule_store=rule_store)
        candidates = cleanup.load_candidates()
        result = cleanup.delete_selected(['feature/merged', 'stale/old'], candidates, prune=False)

        assert result.deleted == ['feature/merged', 'stale/old']
        assert cleanup.operation_in_progress is False


class TestCommandLine:
    """Test the CLI entry point."""

    def test_force_run_deletes_merged(self, git_repo_with_branches):
        exit_code = main(['--no-interactive', '--force', '--path', git_repo_with_branches.working_dir])
        assert exit_code == 0
        assert 'feature/merged' not in head_names(git_repo_with_branches)

    def test_dry_run(self, git_repo_with_branches):
        initial = head_names(git_repo_with_branches)
        exit_code = main(['--no-interactive', '--dry-run', '--path', git_repo_with_branches.working_dir])
        assert exit_code == 0
        assert head_names(git_repo_with_branches) == initial

    def test_protect_pattern(self, git_repo_with_branches):
        exit_code = main([
            '--no-interactive', '--force', '--path', git_repo_with_branches.working_dir,
            '--protect', 'feature/*',
        ])
        assert exit_code == 0
        assert 'feature/merged' in head_names(git_repo_with_branches)

    def test_save_rules(self, git_repo_with_branches):
        from git_branch_cleanup.services.rule_store import RuleStore

        main([
            '--no-interactive', '--dry-run', '--path', git_repo_with_branches.working_dir,
            '--protect', 'keep/*', '--save-rules',
        ])
        stored = RuleStore(git_repo_with_branches.working_dir).load_rules()
        assert stored == [BranchRule(pattern='keep/*', prevent_deletion=True)]

    def test_select(self, git_repo_with_branches):
        exit_code = main([
            '--no-interactive', '--force', '--path', git_repo_with_branches.working_dir,
            '--select', 'stale/old',
        ])
        assert exit_code == 0
        assert 'stale/old' not in head_names(git_repo_with_branches)
        assert 'feature/merged' in head_names(git_repo_with_branches)

    def test_invalid_repo(self, temp_dir):
        assert main(['--no-interactive', '--path', str(temp_dir / "missing")]) == 1

    def test_negative_stale_days(self, git_repo):
        assert main(['--no-interactive', '--path', git_repo.working_dir, '--stale-days', '-1']) == 1
