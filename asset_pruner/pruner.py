# asset_pruner/pruner.py

import logging
import os
import shutil
import stat
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Outcome statuses
REMOVED = "removed"
NOT_PRESENT = "not-present"
FAILED = "failed"


@dataclass(frozen=True)
class Candidate:
    path: Path
    category_id: str
    entry: str
    version: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.version}/{self.entry}" if self.version else self.entry


@dataclass(frozen=True)
class Outcome:
    candidate: Candidate
    status: str
    reason: Optional[str] = None
    freed_bytes: int = 0


def tree_size(path: Path) -> int:
    """Bytes held by `path` and everything beneath it. Symlinks are not followed."""
    path = Path(path)
    if path.is_symlink() or not path.is_dir():
        return path.lstat().st_size

    total = 0
    for current, _dirs, files in os.walk(path):
        for name in files:
            try:
                total += os.lstat(os.path.join(current, name)).st_size
            except OSError as e:
                # Only the size report is affected; deletion decides success.
                logger.debug(f"Could not stat {name} in {current}: {e}")
    return total


def _within(path: str, top: str) -> bool:
    return path == top or path.startswith(top.rstrip(os.sep) + os.sep)


def _make_retry_hook(top):
    """
    Builds the rmtree error hook for one candidate rooted at `top`.

    The hook grants the owner access on the failing entry and on the directory
    holding it, then retries once. Only paths at or below `top` are ever
    chmod-ed: when removing `top` itself fails, the kept parent is left alone
    and the original error propagates.
    """
    top = os.path.abspath(os.fspath(top))
    retried = set()

    def hook(func, path, exc):
        error = exc[1] if isinstance(exc, tuple) else exc
        path = os.path.abspath(os.fspath(path))
        if not os.path.lexists(path):
            # Removed by an earlier retry of an enclosing directory.
            return
        if path in retried or not _within(path, top):
            raise error
        if path == top and func in (os.rmdir, os.unlink, os.remove):
            raise error
        retried.add(path)

        targets = [path] if path == top else [os.path.dirname(path), path]
        for target in targets:
            if os.path.islink(target):
                continue
            mode = os.stat(target).st_mode
            extra = stat.S_IRWXU if stat.S_ISDIR(mode) else stat.S_IWUSR
            os.chmod(target, mode | extra)

        if func in (os.rmdir, os.unlink, os.remove):
            func(path)
        elif os.path.isdir(path) and not os.path.islink(path):
            # open/scandir/lstat failed: walk the now readable directory again.
            _rmtree(path, hook)
        else:
            os.unlink(path)

    return hook


def _rmtree(path, hook=None) -> None:
    if hook is None:
        hook = _make_retry_hook(path)
    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=hook)
    else:
        shutil.rmtree(path, onerror=hook)


def prune(
    base, entry: str, category_id: str = "", version: Optional[str] = None
) -> Outcome:
    """
    Removes `base/entry` with everything beneath it.

    Returns NOT_PRESENT when nothing exists at that path, REMOVED when it is
    gone afterwards, FAILED (with the error text) when deletion raised.
    Never raises for per-item problems.
    """
    candidate = Candidate(Path(base) / entry, category_id, entry, version)
    path = candidate.path

    if not os.path.lexists(path):
        return Outcome(candidate, NOT_PRESENT)

    try:
        size = tree_size(path)
        if path.is_dir() and not path.is_symlink():
            _rmtree(path)
        else:
            path.unlink()
    except Exception as e:
        return Outcome(candidate, FAILED, reason=str(e) or type(e).__name__)

    return Outcome(candidate, REMOVED, freed_bytes=size)
