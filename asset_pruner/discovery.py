# asset_pruner/discovery.py

import os
from pathlib import Path
from typing import Callable, List

from .errors import DiscoveryError


def list_children(parent: Path, predicate: Callable[[Path], bool]) -> List[Path]:
    """
    Single, non-recursive listing of `parent`, keeping children that satisfy
    `predicate`. Sorted by name so log output is deterministic.
    """
    try:
        names = os.listdir(parent)
    except OSError as e:
        raise DiscoveryError(f"Cannot list {parent}: {e}") from e
    children = [Path(parent) / name for name in sorted(names)]
    return [child for child in children if predicate(child)]


def _is_real_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def discover_version_dirs(parent: Path) -> List[Path]:
    """Version-stamped directories directly under `parent` (names unknown in advance)."""
    return list_children(parent, _is_real_dir)
