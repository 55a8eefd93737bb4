# asset_pruner/config.py

import os

from dotenv import find_dotenv, load_dotenv

from .paths import DEFAULT_TOOLCHAIN_ROOT
from .profiles import DEFAULT_PROFILE

# Read .env from the directory the tool is launched in (the project root).
load_dotenv(find_dotenv(usecwd=True))


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# --- DEFAULTS (CLI flags override these) ---
PROJECT_ROOT = os.getenv("ASSET_PRUNE_ROOT", ".")
PROFILE_NAME = os.getenv("ASSET_PRUNE_PROFILE", DEFAULT_PROFILE)
PROFILE_FILE = os.getenv("ASSET_PRUNE_PROFILE_FILE")
TOOLCHAIN_ROOT = os.getenv("ASSET_PRUNE_TOOLCHAIN_ROOT", DEFAULT_TOOLCHAIN_ROOT)
STRICT = env_flag("ASSET_PRUNE_STRICT")
