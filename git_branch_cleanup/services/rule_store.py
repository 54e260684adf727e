"""Per-repository storage of branch protection rules."""
import json
import hashlib
from pathlib import Path
from typing import Dict, List, Optional
from datetime import datetime
from contextlib import contextmanager

from git_branch_cleanup.logging_config import get_logger
from git_branch_cleanup.models.branch import BranchRule

# Import fcntl for POSIX file locking (Unix/Linux/macOS)
try:
    import fcntl
    HAS_FCNTL = True
except ImportError:
    HAS_FCNTL = False

logger = get_logger(__name__)

DEFAULT_RULES_DIR = Path.home() / ".git-branch-cleanup" / "rules"


class RuleStore:
    """Loads and saves the protection rules of one repository."""

    def __init__(self, repo_path: str, rules_dir: Optional[Path] = None):
        """Initialize the rule store for a repository.

        Args:
            repo_path: Path to the git repository
            rules_dir: Directory holding rule files (defaults to ~/.git-branch-cleanup/rules)
        """
        self.repo_path = Path(repo_path).resolve()
        self.rules_dir = Path(rules_dir) if rules_dir else DEFAULT_RULES_DIR
        self.rules_file = self.rules_dir / f"{self._get_repo_hash()}.json"

    def _get_repo_hash(self) -> str:
        """Generate a unique hash for the repository path."""
        return hashlib.md5(str(self.repo_path).encode()).hexdigest()

    @contextmanager
    def _acquire_lock(self, file_handle, operation: str = "read"):
        """Acquire a shared (read) or exclusive (write) lock on the rules file."""
        if not HAS_FCNTL:
            logger.debug("File locking not available on this platform")
            yield
            return

        lock_type = fcntl.LOCK_EX if operation == "write" else fcntl.LOCK_SH
        fcntl.flock(file_handle.fileno(), lock_type)
        try:
            yield
        finally:
            fcntl.flock(file_handle.fileno(), fcntl.LOCK_UN)

    def _validate_rules_data(self, data: Dict) -> bool:
        """Check the stored JSON has a list of rules with patterns."""
        if not isinstance(data, dict):
            logger.warning("Rules data is not a dictionary")
            return False

        rules = data.get("rules")
        if not isinstance(rules, list):
            logger.warning("Rules file missing 'rules' list")
            return False

        for index, rule in enumerate(rules):
            if not isinstance(rule, dict):
                logger.warning(f"Rule #{index} is not a dictionary")
                return False
            pattern = rule.get("pattern")
            if not isinstance(pattern, str) or not pattern:
                logger.warning(f"Rule #{index} has no pattern")
                return False

        return True

    def load_rules(self) -> List[BranchRule]:
        """Load stored rules; a missing or invalid file yields no rules."""
        if not self.rules_file.exists():
            logger.debug("No rules file found")
            return []

        try:
            with open(self.rules_file, "r") as f:
                with self._acquire_lock(f, operation="read"):
                    data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON in rules file: {e}")
            return []
        except OSError as e:
            logger.warning(f"Failed to read rules file: {e}")
            return []

        if not self._validate_rules_data(data):
            logger.warning("Rules validation failed, ignoring rules file")
            return []

        rules = [BranchRule.from_dict(rule) for rule in data["rules"]]
        logger.debug(f"Loaded {len(rules)} protection rules")
        return rules

    def save_rules(self, rules: List[BranchRule]) -> None:
        """Save rules atomically: write a temp file, then rename over the old one."""
        self.rules_dir.mkdir(parents=True, exist_ok=True)
        data = {
            "repo_path": str(self.repo_path),
            "last_updated": datetime.now().isoformat(),
            "rules": [rule.to_dict() for rule in rules],
        }

        temp_file = self.rules_file.with_suffix(".tmp")
        try:
            with open(temp_file, "w") as f:
                with self._acquire_lock(f, operation="write"):
                    json.dump(data, f, indent=2)
                    f.flush()
            temp_file.replace(self.rules_file)
            logger.debug(f"Saved {len(rules)} protection rules")
        finally:
            if temp_file.exists():
                temp_file.unlink()

    def add_rules(self, rules: List[BranchRule]) -> List[BranchRule]:
        """Merge rules into the stored list, replacing rules with the same pattern."""
        merged = {rule.pattern: rule for rule in self.load_rules()}
        for rule in rules:
            merged[rule.pattern] = rule
        result = list(merged.values())
        self.save_rules(result)
        return result
