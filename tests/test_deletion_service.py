"""Tests for deletion planning and execution"""
import asyncio
from unittest.mock import Mock

import pytest

from git_branch_cleanup.exceptions import (
    BranchDeletionError,
    InvalidInputError,
    ProtectedBranchSelectionError,
)
from git_branch_cleanup.models.branch import CleanupCandidates, RiskLevel
from git_branch_cleanup.models.deletion import DeletionStep, PruneResult
from git_branch_cleanup.services.deletion_service import DeletionPlanner, execute, plan


@pytest.fixture
def candidates(make_candidate):
    return CleanupCandidates(
        merged=[make_candidate('feature/done')],
        stale=[make_candidate('feature/wip', risk=RiskLevel.WARNING, reason="Has 2 unpushed commits")],
        gone=[make_candidate('keep/me', is_protected=True)],
    )


class TestPlan:
    """Test building deletion plans."""

    def test_safe_deleted_normally_risky_forced(self, candidates):
        steps = plan(['feature/done', 'feature/wip'], candidates)
        assert steps == [
            DeletionStep(name='feature/done', force=False),
            DeletionStep(name='feature/wip', force=True),
        ]

    def test_plan_follows_selection_order(self, candidates):
        steps = plan(['feature/wip', 'feature/done'], candidates)
        assert [s.name for s in steps] == ['feature/wip', 'feature/done']

    def test_protected_selection_rejected(self, candidates):
        with pytest.raises(ProtectedBranchSelectionError):
            plan(['feature/done', 'keep/me'], candidates)

    def test_unknown_name_skipped(self, candidates):
        steps = plan(['feature/done', 'not-a-candidate'], candidates)
        assert [s.name for s in steps] == ['feature/done']

    def test_accepts_candidate_list(self, candidates):
        steps = DeletionPlanner.plan(['feature/wip'], candidates.all_candidates())
        assert steps == [DeletionStep(name='feature/wip', force=True)]

    def test_empty_selection(self, candidates):
        assert plan([], candidates) == []


class TestExecute:
    """Test sequential execution."""

    def test_deletes_in_order_then_prunes_once(self):
        calls = []
        steps = [DeletionStep('feature/done', False), DeletionStep('feature/wip', True)]

        result = asyncio.run(execute(
            steps,
            lambda name, force: calls.append(('delete', name, force)),
            lambda: calls.append(('prune',)),
            True,
        ))

        assert calls == [
            ('delete', 'feature/done', False),
            ('delete', 'feature/wip', True),
            ('prune',),
        ]
        assert result.deleted == ['feature/done', 'feature/wip']
        assert result.succeeded

    def test_no_prune_when_disabled(self):
        prune_fn = Mock()
        result = asyncio.run(execute([DeletionStep('a', False)], Mock(), prune_fn, False))
        prune_fn.assert_not_called()
        assert result.pruned is None

    def test_async_collaborators_awaited(self):
        calls = []

        async def delete_fn(name, force):
            await asyncio.sleep(0)
            calls.append(name)

        async def prune_fn():
            return PruneResult(branches_pruned=['origin/a'])

        result = asyncio.run(execute([DeletionStep('a', False), DeletionStep('b', False)], delete_fn, prune_fn, True))
        assert calls == ['a', 'b']
        assert result.pruned == ['origin/a']

    def test_stop_on_first_failure(self):
        def delete_fn(name, force):
            if name == 'b':
                raise BranchDeletionError(name, "not fully merged")

        prune_fn = Mock(return_value=PruneResult())
        steps = [DeletionStep(n, False) for n in ('a', 'b', 'c')]

        result = asyncio.run(execute(steps, delete_fn, prune_fn, True))

        assert result.deleted == ['a']
        assert result.failed.name == 'b'
        assert "not fully merged" in result.failed.message
        assert result.skipped == ['c']
        assert result.has_failure
        # Deleted branches still get their remote-tracking refs pruned
        prune_fn.assert_called_once_with()

    def test_no_prune_when_nothing_deleted(self):
        delete_fn = Mock(side_effect=RuntimeError("boom"))
        prune_fn = Mock()
        result = asyncio.run(execute([DeletionStep('a', False)], delete_fn, prune_fn, True))
        prune_fn.assert_not_called()
        assert result.deleted == []
        assert result.skipped == []

    def test_prune_failure_keeps_deletions(self):
        prune_fn = Mock(side_effect=RuntimeError("remote unreachable"))
        result = asyncio.run(execute([DeletionStep('a', False)], Mock(), prune_fn, True))
        assert result.deleted == ['a']
        assert result.prune_error == "remote unreachable"
        assert result.failed is None
        assert not result.succeeded

    def test_prune_result_shapes(self):
        for returned, expected in (
            ({'branchesPruned': ['origin/x']}, ['origin/x']),
            (['origin/y'], ['origin/y']),
            (None, []),
        ):
            result = asyncio.run(execute([DeletionStep('a', False)], Mock(), Mock(return_value=returned), True))
            assert result.pruned == expected

    def test_unexpected_prune_result_rejected(self):
        """A string is not a list of pruned refs."""
        for returned in ('origin/x', 42):
            with pytest.raises(InvalidInputError, match="prune returned"):
                asyncio.run(execute([DeletionStep('a', False)], Mock(), Mock(return_value=returned), True))

    def test_on_complete_called_once(self):
        on_complete = Mock()
        result = asyncio.run(
            execute(
                [DeletionStep('a', False)], Mock(), Mock(return_value=PruneResult()), True,
                on_complete=on_complete,
            )
        )
        on_complete.assert_called_once_with(result)
        assert result.succeeded
        assert result.pruned == []

    def test_empty_plan(self):
        delete_fn = Mock()
        prune_fn = Mock()
        result = asyncio.run(execute([], delete_fn, prune_fn, True))
        delete_fn.assert_not_called()
        prune_fn.assert_not_called()
        assert result.deleted == []
