# asset_pruner/report.py

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .pruner import FAILED, NOT_PRESENT, REMOVED, Outcome

EXIT_OK = 0
EXIT_FAULT = 1
EXIT_PARTIAL = 3
EXIT_USAGE = 2


@dataclass
class CategoryResult:
    category_id: str
    label: str
    parent: Path
    outcomes: List[Outcome] = field(default_factory=list)
    skipped: bool = False
    skip_reason: Optional[str] = None


@dataclass(frozen=True)
class Summary:
    removed: int
    not_present: int
    failed: int
    skipped_categories: Tuple[str, ...]
    freed_bytes: int
    failures: Tuple[Outcome, ...] = ()


def all_outcomes(results: Iterable[CategoryResult]) -> List[Outcome]:
    return [outcome for result in results for outcome in result.outcomes]


def summarize(results: Iterable[CategoryResult]) -> Summary:
    results = list(results)
    outcomes = all_outcomes(results)
    failures = tuple(o for o in outcomes if o.status == FAILED)
    return Summary(
        removed=sum(1 for o in outcomes if o.status == REMOVED),
        not_present=sum(1 for o in outcomes if o.status == NOT_PRESENT),
        failed=len(failures),
        skipped_categories=tuple(r.category_id for r in results if r.skipped),
        freed_bytes=sum(o.freed_bytes for o in outcomes),
        failures=failures,
    )


def exit_status(summary: Summary, strict: bool = False) -> int:
    """Item failures only change the status in strict mode."""
    if strict and summary.failed:
        return EXIT_PARTIAL
    return EXIT_OK


def format_size(num_bytes: int) -> str:
    size = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024


def format_summary(summary: Summary, profile_name: str) -> List[str]:
    lines = [
        "",
        "=== Cleanup Complete ===",
        f"Removed: {summary.removed}; Not present: {summary.not_present}; "
        f"Failed: {summary.failed}",
        f"Space reclaimed: {format_size(summary.freed_bytes)}",
    ]
    if summary.skipped_categories:
        lines.append(f"Skipped categories: {', '.join(summary.skipped_categories)}")
    if summary.failures:
        lines.append("Failures:")
        for outcome in summary.failures:
            lines.append(f"   - {outcome.candidate.path}: {outcome.reason}")
    lines.append(f"The tree now only includes assets for the '{profile_name}' profile.")
    return lines
