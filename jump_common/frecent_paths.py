"""
frecent_paths specializes Frecency for directory paths: it checks that directories
exist before recording them, prunes entries whose directory went away, and saves
the database atomically.
"""
import math
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from jump_common.constants import DEFAULT_MAX_ENTRIES, FRECENCY_WEIGHT, MATCH_WEIGHT
from jump_common.core_utils import LOG_DEBUG
from jump_common.file_utils import is_existing_dir, remove_file, to_path_str
from jump_common.frecency import Frecency, FrecencyDatabaseError
from jump_common.matchers import Matcher, default_matchers

ScoredPath = Tuple[str, float]


class FrecencySaveError(Exception):
    """Raised when the database could not be written; the in-memory state is intact."""


class PathFrecency:
    def __init__(self, frecency: Frecency, path: Path, matchers: Optional[Sequence[Matcher]] = None):
        self.frecency = frecency
        self.path = path
        # Whether there are changes that save_to_disk still has to write
        self.dirty = False
        self.matchers: List[Matcher] = list(matchers) if matchers is not None else default_matchers()

    @classmethod
    def load(cls, path: Union[str, Path], max_entries: int = DEFAULT_MAX_ENTRIES,
             matchers: Optional[Sequence[Matcher]] = None) -> "PathFrecency":
        """Load the database at `path`, creating an empty file if there is none.

        A non-empty file that does not decode raises FrecencyDatabaseError; there is no
        recovery from a corrupt database.
        """
        path = Path(path)
        fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
        with os.fdopen(fd, 'r+b') as db_file:
            size = os.fstat(db_file.fileno()).st_size
            if size > 0:
                data = db_file.read()
                try:
                    frecency = Frecency.from_bytes(data)
                except FrecencyDatabaseError as e:
                    raise FrecencyDatabaseError(f"corrupt database {path}: {e}") from e
                LOG_DEBUG(f"Loaded {len(frecency)} entries from {path}")
            else:
                frecency = Frecency(max_entries)
                LOG_DEBUG(f"Created empty database at {path}")
        return cls(frecency, path, matchers=matchers)

    def visit(self, dir_path: str, weight: float = 1.0) -> None:
        self.frecency.visit(dir_path, weight)
        self.dirty = True

    def maybe_add_relative_to(self, base_path: Union[str, Path], relative_path: str) -> bool:
        """Insert `base_path / relative_path`, normalized, if it is an existing directory.

        An absolute `relative_path` replaces `base_path`, as with os.path.join.
        """
        candidate = Path(os.path.abspath(os.path.join(base_path, relative_path)))
        if not is_existing_dir(candidate):
            return False
        candidate_str = to_path_str(candidate)
        if candidate_str is None:
            return False
        LOG_DEBUG(f"Visited path exists: {candidate_str}")
        self.frecency.insert(candidate_str)
        self.dirty = True
        return True

    def save_to_disk(self) -> None:
        if not self.dirty:
            return

        pid = os.getpid()
        if pid == 0:
            raise FrecencySaveError("could not get pid")
        if not self.path.name:
            raise FrecencySaveError("path did not have file component")
        tmpfile_dir = self.path.parent
        if tmpfile_dir == self.path:
            raise FrecencySaveError("unable to get parent")
        # The pid keeps two processes saving the same database off each other's tempfile
        tmpfile_path = tmpfile_dir / f".{self.path.name}.{pid}"

        try:
            data = self.frecency.to_bytes()
        except (TypeError, ValueError, OverflowError) as e:
            raise FrecencySaveError("could not serialize frecency database") from e

        try:
            tmpfile = open(tmpfile_path, 'wb')
        except OSError as e:
            raise FrecencySaveError("could not create tempfile") from e
        try:
            with tmpfile:
                tmpfile.write(data)
                tmpfile.flush()
                os.fsync(tmpfile.fileno())
        except OSError as e:
            remove_file(tmpfile_path)
            raise FrecencySaveError("could not write tempfile") from e

        try:
            os.replace(tmpfile_path, self.path)
        except OSError as e:
            remove_file(tmpfile_path)
            raise FrecencySaveError(f"could not atomically rename: {e}") from e

        LOG_DEBUG(f"Saved {len(self.frecency)} entries to {self.path}")
        self.dirty = False

    def items_with_frecency(self) -> List[ScoredPath]:
        """Prune directories that no longer exist, then return (path, normalized score) ascending.

        This mutates the database; do not cache it as a read-only query.
        """
        if self.frecency.retain(self._keep_existing_dir):
            self.dirty = True
        return sort_by_score(self.frecency.normalized_frecency())

    def directory_matches(self, query: str) -> List[ScoredPath]:
        """Rank every stored directory against `query`, best match last.

        'Best directory' is a fuzzy notion; the ranking follows a few assumptions:
        1) An exact match always wins. Exact matches are rare, substring matches are expected.
        2) People think in path components ("/home/user/dev" is "home", "user", "dev"),
           so components are matched on their own.
        3) A match in a component further right weighs more: "foo" prefers
           "/home/user/project/foo" over "/home/user/foo/stuff" even when the latter
           is more frecent.
        4) Case and punctuation in the target are often missing from the query.
        5) A separator in the query asks for each side to match adjacent components,
           so "dev/tool" can find "dev/my-tool".
        6) Edit distance is the last resort and weighs little; a new query is better
           than a wild guess.
        """
        items = self.items_with_frecency()

        best_scores: Dict[str, float] = {}
        for path, frecency_score in items:
            for matcher in self.matchers:
                strength = matcher.evaluate(path, query)
                if strength is None:
                    continue
                score = strength * MATCH_WEIGHT + frecency_score * FRECENCY_WEIGHT
                if path not in best_scores or score > best_scores[path]:
                    best_scores[path] = score

        matched = sort_by_score(best_scores.items())
        if matched:
            LOG_DEBUG("Matched paths:" + "".join(f"\n{path} with score {score}" for path, score in matched))
        return matched

    def _keep_existing_dir(self, dir_path: str) -> bool:
        if is_existing_dir(dir_path):
            return True
        LOG_DEBUG(f"trimming nonexistent dir: {dir_path}")
        return False


def sort_by_score(items: Iterable[ScoredPath]) -> List[ScoredPath]:
    """Sort ascending by score. A NaN score breaks the ordering and raises ValueError."""
    items = list(items)
    for path, score in items:
        if math.isnan(score):
            raise ValueError(f"{score} for {path} could not be compared")
    return sorted(items, key=lambda item: item[1])
