"""
git-branch-cleanup - Find and safely delete stale, merged and orphaned local Git branches
"""

from .__version__ import __version__
from .core import BranchCleanup
from .models.selection import Selection
from .services.categorization_service import BranchCategorizer, categorize
from .services.deletion_service import DeletionPlanner, execute, plan
from .services.protection_service import ProtectionEvaluator
from .services.risk_service import RiskAssessor
from .services.selection_service import SelectionPolicy, default_selection
from .cli.main import main

__all__ = [
    "BranchCategorizer",
    "BranchCleanup",
    "DeletionPlanner",
    "ProtectionEvaluator",
    "RiskAssessor",
    "Selection",
    "SelectionPolicy",
    "categorize",
    "default_selection",
    "execute",
    "main",
    "plan",
    "__version__",
]
