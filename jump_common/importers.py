import math
from typing import Iterable, List, Tuple

from jump_common.core_utils import LOG_DEBUG
from jump_common.file_utils import is_existing_dir
from jump_common.frecent_paths import PathFrecency

WeightedPath = Tuple[str, float]


def parse_autojump(text: str) -> List[WeightedPath]:
    """Parse autojump's `weight<TAB>path` lines."""
    entries: List[WeightedPath] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        weight_str, sep, path = line.partition('\t')
        if not sep or not path:
            LOG_DEBUG(f"Skipping malformed autojump line {line_no}: {line!r}")
            continue
        try:
            weight = float(weight_str)
        except ValueError:
            LOG_DEBUG(f"Skipping autojump line {line_no} with bad weight: {line!r}")
            continue
        entries.append((path, weight))
    return entries


def parse_fasd(text: str) -> List[WeightedPath]:
    """Parse fasd's `path|rank|timestamp` lines."""
    entries: List[WeightedPath] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        # Paths may contain '|', rank and timestamp never do
        parts = line.rsplit('|', 2)
        if len(parts) != 3 or not parts[0]:
            LOG_DEBUG(f"Skipping malformed fasd line {line_no}: {line!r}")
            continue
        path, rank_str, _timestamp = parts
        try:
            rank = float(rank_str)
        except ValueError:
            LOG_DEBUG(f"Skipping fasd line {line_no} with bad rank: {line!r}")
            continue
        entries.append((path, rank))
    return entries


def import_weighted_paths(engine: PathFrecency, entries: Iterable[WeightedPath]) -> int:
    """
    Record one visit per existing directory, scaled by its weight relative to the
    heaviest entry, so the imported ranking survives and the top entry counts as a
    single fresh visit. Returns how many were imported.
    """
    usable: List[WeightedPath] = []
    for path, weight in entries:
        if not math.isfinite(weight) or weight <= 0:
            LOG_DEBUG(f"Skipping unusable weight {weight} for {path}")
            continue
        if not is_existing_dir(path):
            LOG_DEBUG(f"Skipping nonexistent dir: {path}")
            continue
        usable.append((path, weight))
    if not usable:
        return 0

    max_weight = max(weight for _, weight in usable)
    for path, weight in usable:
        engine.visit(path, weight / max_weight)
    return len(usable)
