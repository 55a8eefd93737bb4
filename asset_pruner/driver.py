# asset_pruner/driver.py

import logging
import os
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .discovery import discover_version_dirs
from .errors import PruneError
from .paths import DEFAULT_TOOLCHAIN_ROOT, check_root, parent_exists, resolve_parent
from .profiles import AssetCategory, Profile
from .pruner import FAILED, NOT_PRESENT, REMOVED, Outcome, prune
from .report import CategoryResult, format_size

logger = logging.getLogger(__name__)


class RunState(Enum):
    NOT_STARTED = "not-started"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


def log_outcome(outcome: Outcome) -> None:
    name = outcome.candidate.display_name
    if outcome.status == REMOVED:
        logger.info(f"  Removed: {name} ({format_size(outcome.freed_bytes)})")
    elif outcome.status == FAILED:
        logger.warning(f"  Failed to remove {name}: {outcome.reason}")
    elif outcome.status == NOT_PRESENT:
        logger.debug(f"  Not present: {name}")


def prune_entries(
    base: Path, category: AssetCategory, version: Optional[str] = None
) -> List[Outcome]:
    """Applies the category's exclusion list under `base`, one entry at a time."""
    outcomes = []
    for entry in category.exclusions:
        outcome = prune(base, entry, category.category_id, version)
        log_outcome(outcome)
        outcomes.append(outcome)
    return outcomes


class PruneRun:
    """
    Runs every category of a profile against one project root, in profile order.

    Per-item failures and missing parents are recorded and never stop the run.
    A PruneError (unreadable root, unlistable version parent) moves the run to
    ABORTED and propagates to the caller.
    """

    def __init__(
        self, root, profile: Profile, toolchain_root: str = DEFAULT_TOOLCHAIN_ROOT
    ):
        self.root = root
        self.profile = profile
        self.toolchain_root = toolchain_root
        self.state = RunState.NOT_STARTED
        self.current_category: Optional[str] = None
        self.results: List[CategoryResult] = []

    def execute(self) -> List[CategoryResult]:
        try:
            root = check_root(self.root)
            for category in self.profile.categories:
                self.state = RunState.RUNNING
                self.current_category = category.category_id
                self.results.append(self._run_category(root, category))
        except PruneError:
            self.state = RunState.ABORTED
            raise

        self.state = RunState.COMPLETED
        self.current_category = None
        return self.results

    def _run_category(self, root: Path, category: AssetCategory) -> CategoryResult:
        parent = resolve_parent(root, category, self.toolchain_root)
        result = CategoryResult(category.category_id, category.label, parent)

        logger.info(f"Removing {category.label}...")
        if not parent_exists(parent):
            result.skipped = True
            result.skip_reason = f"{os.path.relpath(parent, root)} not found"
            logger.info(f"  Skipped: {result.skip_reason}")
            return result

        if not category.versioned:
            result.outcomes = prune_entries(parent, category)
            return result

        version_dirs = discover_version_dirs(parent)
        if not version_dirs:
            logger.info(f"  No version directories under {os.path.relpath(parent, root)}")
        for version_dir in version_dirs:
            logger.debug(f"  Version directory: {version_dir.name}")
            result.outcomes.extend(
                prune_entries(version_dir, category, version=version_dir.name)
            )
        return result


def run(
    root, profile: Profile, toolchain_root: str = DEFAULT_TOOLCHAIN_ROOT
) -> List[CategoryResult]:
    return PruneRun(root, profile, toolchain_root).execute()
