"""Git operations service"""

import git
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from git_branch_cleanup.exceptions import (
    BranchDeletionError,
    BranchNotFoundError,
    PruneError,
    RepositoryError,
)
from git_branch_cleanup.logging_config import get_logger
from git_branch_cleanup.models.branch import AheadBehind, Branch, TrackingInfo
from git_branch_cleanup.models.deletion import PruneResult

logger = get_logger(__name__)

PRUNED_MARKER = "[pruned]"
LOCAL_REMOTE = "."  # branch.<name>.remote value for an upstream in this repository


def _error_message(error: git.exc.GitCommandError) -> str:
    """Extract git's own message from a GitCommandError."""
    message = (error.stderr or str(error)).strip()
    if message.startswith("stderr:"):
        message = message[len("stderr:"):].strip().strip("'").strip()
    return message


class Upstream(NamedTuple):
    """Configured upstream of a local branch."""
    path: str  # full ref, e.g. "refs/remotes/origin/x" or "refs/heads/main"
    remote: str
    branch: str
    exists: bool


class GitOperations:
    """Reads branch state from a repository and deletes/prunes branches.

    These are the collaborators the cleanup engine consumes; the engine itself
    never touches the repository.
    """

    def __init__(self, repo_path: str):
        """Initialize the service.

        Args:
            repo_path: Path to the git repository (string path, not repo object)

        Raises:
            RepositoryError: If the path is not a usable repository
        """
        self.repo_path = repo_path
        try:
            repo = self._get_repo()
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise RepositoryError(str(repo_path), "not a git repository") from e
        if repo.bare:
            raise RepositoryError(str(repo_path), "cannot operate on a bare repository")

    def _get_repo(self) -> git.Repo:
        """Get a fresh git.Repo instance.

        GitPython repos are lightweight - opening one does not clone anything.
        """
        return git.Repo(self.repo_path)

    @staticmethod
    def _count_left_right(repo: git.Repo, left: str, right: str) -> Tuple[int, int]:
        """Count commits only in ``left`` and only in ``right``."""
        output = repo.git.rev_list("--left-right", "--count", f"{left}...{right}")
        left_count, right_count = output.split()
        return int(left_count), int(right_count)

    @staticmethod
    def _upstream(repo: git.Repo, head: git.Head) -> Optional[Upstream]:
        """
        Resolve the configured upstream of a local branch.

        An upstream on another local branch (``git branch --track x main``)
        is configured with remote ".", for which GitPython builds a
        ``refs/remotes/./main`` ref that never exists; such upstreams are
        looked up among the local heads instead.
        """
        tracking = head.tracking_branch()
        if tracking is None:
            return None

        if tracking.remote_name == LOCAL_REMOTE:
            local = tracking.remote_head
            return Upstream(
                path=f"refs/heads/{local}",
                remote=LOCAL_REMOTE,
                branch=local,
                exists=any(h.name == local for h in repo.heads),
            )

        return Upstream(
            path=tracking.path,
            remote=tracking.remote_name,
            branch=tracking.remote_head,
            exists=tracking.is_valid(),
        )

    def get_current_branch(self) -> Optional[str]:
        """Get the checked-out branch name, or None in detached HEAD state."""
        try:
            return self._get_repo().active_branch.name
        except TypeError:
            return None

    def get_branches(self, include_remote: bool = False) -> List[Branch]:
        """
        List branches with ahead/behind counts measured against HEAD.

        ``ahead`` is the number of commits on the branch that the current
        HEAD does not contain, so 0 means the branch is fully merged into
        the current branch.

        Args:
            include_remote: Also list remote-tracking branches

        Returns:
            Branch snapshots
        """
        repo = self._get_repo()
        current = self.get_current_branch()
        branches = []

        for head in repo.heads:
            upstream = self._upstream(repo, head)

            try:
                ahead, behind = self._count_left_right(repo, head.path, "HEAD")
                ahead_behind = AheadBehind(ahead=ahead, behind=behind)
            except (git.exc.GitCommandError, ValueError) as e:
                logger.debug(f"Could not count commits for {head.name}: {e}")
                ahead_behind = None

            branches.append(
                Branch(
                    name=head.name,
                    shorthand=head.name,
                    is_head=head.name == current,
                    is_remote=False,
                    upstream=upstream.path if upstream else None,
                    target_oid=head.commit.hexsha,
                    ahead_behind=ahead_behind,
                    last_commit_timestamp=head.commit.committed_date,
                )
            )

        if include_remote:
            for remote in repo.remotes:
                for ref in remote.refs:
                    if ref.remote_head == "HEAD":
                        continue
                    branches.append(
                        Branch(
                            name=ref.name,
                            shorthand=ref.remote_head,
                            is_remote=True,
                            target_oid=ref.commit.hexsha,
                            last_commit_timestamp=ref.commit.committed_date,
                        )
                    )

        logger.debug(f"Found {len(branches)} branches")
        return branches

    def get_tracking_info(self, branch_name: str) -> TrackingInfo:
        """
        Get upstream tracking information for a local branch.

        The upstream is gone when it is configured but its ref no longer
        resolves; upstreams on local branches are checked against the heads.

        Raises:
            BranchNotFoundError: If the local branch does not exist
        """
        repo = self._get_repo()
        try:
            head = repo.heads[branch_name]
        except IndexError as e:
            raise BranchNotFoundError(branch_name) from e

        upstream = self._upstream(repo, head)
        if upstream is None:
            return TrackingInfo(local_branch=branch_name)

        ahead = behind = 0
        if upstream.exists:
            try:
                ahead, behind = self._count_left_right(repo, head.path, upstream.path)
            except (git.exc.GitCommandError, ValueError) as e:
                logger.debug(f"Could not compare {branch_name} with {upstream.path}: {e}")

        return TrackingInfo(
            local_branch=branch_name,
            upstream=upstream.path,
            ahead=ahead,
            behind=behind,
            remote=upstream.remote,
            remote_branch=upstream.branch,
            is_gone=not upstream.exists,
        )

    def get_all_tracking_info(self, branch_names: Iterable[str]) -> Dict[str, TrackingInfo]:
        """Get tracking information for several branches, skipping missing ones."""
        result = {}
        for name in branch_names:
            try:
                result[name] = self.get_tracking_info(name)
            except BranchNotFoundError:
                logger.debug(f"No local branch {name}, no tracking info")
        return result

    def delete_branch(self, branch_name: str, force: bool = False) -> None:
        """
        Delete a local branch.

        Args:
            branch_name: Branch to delete
            force: Delete even if not fully merged (``git branch -D``)

        Raises:
            BranchDeletionError: If git refuses the deletion
        """
        try:
            self._get_repo().git.branch("-D" if force else "-d", branch_name)
        except git.exc.GitCommandError as e:
            raise BranchDeletionError(branch_name, _error_message(e)) from e
        logger.info(f"Deleted branch {branch_name}{' (forced)' if force else ''}")

    def prune_remote_tracking_branches(self, remote: Optional[str] = None) -> PruneResult:
        """
        Remove remote-tracking branches whose remote branch no longer exists.

        Args:
            remote: Remote to prune; every configured remote when None

        Returns:
            PruneResult listing the pruned refs (e.g. "origin/feature/x")

        Raises:
            PruneError: If git fails to prune
        """
        repo = self._get_repo()
        remotes = [remote] if remote else [r.name for r in repo.remotes]
        pruned = []
        for name in remotes:
            try:
                output = repo.git.remote("prune", name)
            except git.exc.GitCommandError as e:
                raise PruneError(name, _error_message(e)) from e
            for line in output.splitlines():
                if PRUNED_MARKER in line:
                    pruned.append(line.split(PRUNED_MARKER, 1)[1].strip())
        logger.info(f"Pruned {len(pruned)} remote-tracking branches")
        return PruneResult(branches_pruned=pruned)
