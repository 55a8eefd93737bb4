# asset_pruner/profiles.py

import json
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ProfileError

TOOLCHAIN_ROOT_PLACEHOLDER = "{toolchain_root}"
DEFAULT_PROFILE = "esp32"


def _check_plain_name(name: str, what: str) -> None:
    """Entries are matched against immediate child names only, never paths."""
    if not name or not name.strip():
        raise ValueError(f"{what} must not be empty")
    if name in (".", ".."):
        raise ValueError(f"{what} '{name}' is not allowed")
    if "/" in name or "\\" in name or "\x00" in name:
        raise ValueError(f"{what} '{name}' must be a single path component")


class AssetCategory(BaseModel):
    """
    One class of removable content and the names to remove from it.

    `parent` holds path segments relative to the project root; a segment may be
    the `{toolchain_root}` placeholder. When `versioned` is set, the parent
    contains version-stamped directories and `exclusions` applies inside each.
    """

    model_config = ConfigDict(frozen=True)

    category_id: str
    label: str
    parent: Tuple[str, ...]
    exclusions: Tuple[str, ...]
    versioned: bool = False

    @field_validator("parent")
    @classmethod
    def _check_parent(cls, value):
        if not value:
            raise ValueError("parent needs at least one path segment")
        for segment in value:
            _check_plain_name(segment, "parent segment")
        return value

    @field_validator("exclusions")
    @classmethod
    def _check_exclusions(cls, value):
        seen = set()
        for name in value:
            _check_plain_name(name, "exclusion entry")
            if name in seen:
                raise ValueError(f"duplicate exclusion entry '{name}'")
            seen.add(name)
        return value


class Profile(BaseModel):
    """A target configuration: categories are processed in the order given."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    categories: Tuple[AssetCategory, ...]

    @field_validator("name")
    @classmethod
    def _check_name(cls, value):
        if not value or not value.strip():
            raise ValueError("profile name must not be empty")
        return value

    @field_validator("categories")
    @classmethod
    def _check_categories(cls, value):
        ids = [c.category_id for c in value]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"duplicate category ids: {', '.join(duplicates)}")
        return value


# --- BUILT-IN PROFILES ---

ESP32_PROFILE = Profile(
    name="esp32",
    description="Keep only ESP32 support (Xtensa toolchain, esp32 libs and firmware).",
    categories=(
        AssetCategory(
            category_id="toolchains",
            label="non-ESP32 toolchains",
            parent=("tools", TOOLCHAIN_ROOT_PLACEHOLDER, "packages"),
            exclusions=("arduino", "esp8266", "Maixduino", "rp2040", "SparkFun"),
        ),
        AssetCategory(
            category_id="esp32-tools",
            label="RISC-V compilers and debuggers from the esp32 toolchain",
            parent=("tools", TOOLCHAIN_ROOT_PLACEHOLDER, "packages", "esp32", "tools"),
            exclusions=(
                "esp-rv32",
                "riscv32-esp-elf-gcc",
                "riscv32-esp-elf-gdb",
            ),
        ),
        AssetCategory(
            category_id="esp32-libs",
            label="per-chip variant libraries other than esp32",
            parent=(
                "tools",
                TOOLCHAIN_ROOT_PLACEHOLDER,
                "packages",
                "esp32",
                "tools",
                "esp32-arduino-libs",
            ),
            exclusions=(
                "esp32c2",
                "esp32c3",
                "esp32c5",
                "esp32c6",
                "esp32h2",
                "esp32p4",
                "esp32s2",
                "esp32s3",
            ),
            versioned=True,
        ),
        AssetCategory(
            category_id="libraries",
            label="board-specific auxiliary libraries",
            parent=("tools", TOOLCHAIN_ROOT_PLACEHOLDER, "libraries"),
            exclusions=(
                "Adafruit_CircuitPlayground",
                "Arduino_LSM6DS3",
                "MaixPy",
                "Pico_PIO_USB",
            ),
        ),
        AssetCategory(
            category_id="firmwares",
            label="non-ESP32 firmwares",
            parent=("firmwares",),
            exclusions=("arduino", "esp8266", "microbit", "k210"),
        ),
    ),
)

RP2040_PROFILE = Profile(
    name="rp2040",
    description="Keep only Raspberry Pi Pico (RP2040) support.",
    categories=(
        AssetCategory(
            category_id="toolchains",
            label="non-RP2040 toolchains",
            parent=("tools", TOOLCHAIN_ROOT_PLACEHOLDER, "packages"),
            exclusions=("arduino", "esp8266", "esp32", "Maixduino", "SparkFun"),
        ),
        AssetCategory(
            category_id="libraries",
            label="board-specific auxiliary libraries",
            parent=("tools", TOOLCHAIN_ROOT_PLACEHOLDER, "libraries"),
            exclusions=("Adafruit_CircuitPlayground", "Arduino_LSM6DS3", "MaixPy"),
        ),
        AssetCategory(
            category_id="firmwares",
            label="non-RP2040 firmwares",
            parent=("firmwares",),
            exclusions=("arduino", "esp8266", "esp32", "microbit", "k210"),
        ),
    ),
)

BUILTIN_PROFILES = (ESP32_PROFILE, RP2040_PROFILE)


def _validation_message(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts)


def load_profile_file(path: str) -> List[Profile]:
    """
    Reads profiles from a JSON file holding either one profile object or a list.
    Any problem with the file is reported as ProfileError.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ProfileError(f"Cannot read profile file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ProfileError(f"Profile file {path} is not valid JSON: {e}") from e

    items = data if isinstance(data, list) else [data]
    profiles = []
    for index, item in enumerate(items):
        try:
            profiles.append(Profile.model_validate(item))
        except ValidationError as e:
            raise ProfileError(
                f"Invalid profile #{index} in {path}: {_validation_message(e)}"
            ) from e
    return profiles


class ProfileRegistry:
    """Named profiles available for a run. Later registrations replace earlier ones."""

    def __init__(self, profiles: Optional[Iterable[Profile]] = None):
        self._profiles: Dict[str, Profile] = {}
        for profile in BUILTIN_PROFILES if profiles is None else profiles:
            self.register(profile)

    def register(self, profile: Profile) -> None:
        self._profiles[profile.name] = profile

    def load_file(self, path: str) -> List[Profile]:
        loaded = load_profile_file(path)
        for profile in loaded:
            self.register(profile)
        return loaded

    def get(self, name: str) -> Profile:
        if name not in self._profiles:
            available = ", ".join(self.names()) or "none"
            raise ProfileError(f"Unknown profile '{name}'. Available: {available}")
        return self._profiles[name]

    def names(self) -> List[str]:
        return sorted(self._profiles)

    def __iter__(self):
        return iter(self._profiles[n] for n in self.names())
