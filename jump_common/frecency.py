"""
Generic frecency accounting: key -> score, bounded to a maximum number of keys.

A visit made at time `now` is worth `2 ** ((now - reference_time) / half_life)`.
Newer visits are therefore worth exponentially more than older ones and scores
never need a decay pass. Once a weight gets too large every score is rebased onto
the current time.
"""
import math
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import msgpack

from jump_common.constants import DB_FORMAT_VERSION, DEFAULT_HALF_LIFE_SECONDS, DEFAULT_MAX_ENTRIES, MAX_VISIT_WEIGHT_EXPONENT

STATE_KEYS = ("version", "max_size", "half_life", "reference_time", "frecency")


class FrecencyDatabaseError(RuntimeError):
    """Raised when a serialized frecency state cannot be decoded."""


class Frecency:
    def __init__(self, max_size: int = DEFAULT_MAX_ENTRIES, half_life: float = DEFAULT_HALF_LIFE_SECONDS,
                 clock: Callable[[], float] = time.time, reference_time: Optional[float] = None):
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        if half_life <= 0:
            raise ValueError(f"half_life must be positive, got {half_life}")
        self._clock = clock
        self.max_size = max_size
        self.half_life = float(half_life)
        self.reference_time = float(clock() if reference_time is None else reference_time)
        self.frecency: Dict[str, float] = {}

    def __len__(self) -> int:
        return len(self.frecency)

    def __contains__(self, key: str) -> bool:
        return key in self.frecency

    def keys(self) -> List[str]:
        return list(self.frecency)

    def raw_score(self, key: str) -> float:
        return self.frecency.get(key, 0.0)

    def visit(self, key: str, weight: float = 1.0) -> None:
        """Record a visit made now. `weight` scales it, e.g. for history imported from elsewhere."""
        if weight <= 0 or math.isnan(weight):
            raise ValueError(f"visit weight must be positive, got {weight}")
        self.frecency[key] = self.frecency.get(key, 0.0) + weight * self._visit_weight()
        self._trim()

    def insert(self, key: str) -> None:
        """Add `key` with one fresh visit if it is absent, leave it alone otherwise."""
        if key in self.frecency:
            return
        self.frecency[key] = self._visit_weight()
        self._trim()

    def retain(self, predicate: Callable[[str], bool]) -> bool:
        """Keep only the keys matching `predicate`. Returns True if anything was removed."""
        kept = {key: score for key, score in self.frecency.items() if predicate(key)}
        changed = len(kept) != len(self.frecency)
        self.frecency = kept
        return changed

    def normalized_frecency(self) -> List[Tuple[str, float]]:
        if not self.frecency:
            return []
        max_score = max(self.frecency.values())
        if max_score <= 0:
            return [(key, 0.0) for key in self.frecency]
        return [(key, score / max_score) for key, score in self.frecency.items()]

    def _visit_weight(self) -> float:
        now = self._clock()
        exponent = (now - self.reference_time) / self.half_life
        if exponent > MAX_VISIT_WEIGHT_EXPONENT:
            self._rebase(now, 2.0 ** exponent)
            exponent = 0.0
        return 2.0 ** exponent

    def _rebase(self, now: float, divisor: float) -> None:
        self.frecency = {key: score / divisor for key, score in self.frecency.items()}
        self.reference_time = float(now)

    def _trim(self) -> None:
        overflow = len(self.frecency) - self.max_size
        if overflow <= 0:
            return
        weakest = sorted(self.frecency.items(), key=lambda item: item[1])[:overflow]
        for key, _ in weakest:
            del self.frecency[key]

    # --- serialization ---

    def to_state(self) -> Dict[str, Any]:
        return {
            "version": DB_FORMAT_VERSION,
            "max_size": self.max_size,
            "half_life": self.half_life,
            "reference_time": self.reference_time,
            "frecency": {key: float(score) for key, score in self.frecency.items()},
        }

    @classmethod
    def from_state(cls, state: Any, clock: Callable[[], float] = time.time) -> "Frecency":
        if not isinstance(state, dict):
            raise FrecencyDatabaseError(f"expected a map at the top level, got {type(state).__name__}")
        missing = [key for key in STATE_KEYS if key not in state]
        if missing:
            raise FrecencyDatabaseError(f"missing fields: {', '.join(missing)}")
        if state["version"] != DB_FORMAT_VERSION:
            raise FrecencyDatabaseError(f"unsupported database version {state['version']!r}")

        max_size = state["max_size"]
        half_life = state["half_life"]
        reference_time = state["reference_time"]
        entries = state["frecency"]
        if not isinstance(max_size, int) or isinstance(max_size, bool) or max_size < 1:
            raise FrecencyDatabaseError(f"invalid max_size {max_size!r}")
        if not _is_number(half_life) or half_life <= 0:
            raise FrecencyDatabaseError(f"invalid half_life {half_life!r}")
        if not _is_number(reference_time):
            raise FrecencyDatabaseError(f"invalid reference_time {reference_time!r}")
        if not isinstance(entries, dict):
            raise FrecencyDatabaseError("frecency entries are not a map")

        frecency = cls(max_size=max_size, half_life=half_life, clock=clock, reference_time=reference_time)
        for key, score in entries.items():
            if not isinstance(key, str):
                raise FrecencyDatabaseError(f"invalid key {key!r}, expected a string")
            if not _is_number(score) or math.isnan(score) or score < 0:
                raise FrecencyDatabaseError(f"invalid score {score!r} for {key!r}")
            frecency.frecency[key] = float(score)
        return frecency

    def to_bytes(self) -> bytes:
        return msgpack.packb(self.to_state(), use_bin_type=True)

    @classmethod
    def from_bytes(cls, data: bytes, clock: Callable[[], float] = time.time) -> "Frecency":
        try:
            state = msgpack.unpackb(data, raw=False, strict_map_key=False)
        except (ValueError, TypeError, msgpack.exceptions.UnpackException) as e:
            raise FrecencyDatabaseError(f"could not decode frecency database: {e}") from e
        return cls.from_state(state, clock=clock)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
