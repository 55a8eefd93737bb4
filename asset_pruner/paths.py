# asset_pruner/paths.py

import os
from pathlib import Path

from .errors import RootError
from .profiles import TOOLCHAIN_ROOT_PLACEHOLDER, AssetCategory

DEFAULT_TOOLCHAIN_ROOT = "Arduino"


def resolve_parent(
    root, category: AssetCategory, toolchain_root: str = DEFAULT_TOOLCHAIN_ROOT
) -> Path:
    """
    Joins the category's fixed segments onto the project root.
    e.g. ('tools', '{toolchain_root}', 'packages') -> <root>/tools/Arduino/packages
    """
    segments = [
        toolchain_root if segment == TOOLCHAIN_ROOT_PLACEHOLDER else segment
        for segment in category.parent
    ]
    return Path(root).joinpath(*segments)


def parent_exists(path: Path) -> bool:
    # A file sitting where the parent should be counts as "never installed".
    return path.is_dir()


def check_root(root) -> Path:
    """Returns the absolute project root, or raises RootError if it cannot be read."""
    root_path = Path(root).resolve()
    if not root_path.is_dir():
        raise RootError(f"Project root {root_path} does not exist or is not a directory")
    try:
        os.listdir(root_path)
    except OSError as e:
        raise RootError(f"Cannot read project root {root_path}: {e}") from e
    return root_path
