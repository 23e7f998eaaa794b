"""
Match strategies for ranking stored paths against a typed query.

Every strategy exposes `evaluate(candidate, query)` returning a strength in [0, 1],
or None when it does not match. Only `ExactMatch` can reach 1.0; everything else is
capped at PARTIAL_MATCH_CEILING so that, blended 0.8/0.2 with a positive frecency,
an exact match always ranks first.
"""
import os
from dataclasses import dataclass
from typing import List, Optional, Union

from thefuzz import fuzz

from jump_common.constants import DEFAULT_FUZZY_MIN_RATIO

PARTIAL_MATCH_CEILING = 0.75
DEPTH_DECAY = 0.8
FUZZY_CEILING = 0.5


@dataclass(frozen=True)
class ExactMatch:
    def evaluate(self, candidate: str, query: str) -> Optional[float]:
        if query and candidate == query:
            return 1.0
        return None


@dataclass(frozen=True)
class SubstringMatch:
    def evaluate(self, candidate: str, query: str) -> Optional[float]:
        if not query or query not in candidate:
            return None
        return PARTIAL_MATCH_CEILING * len(query) / len(candidate)


@dataclass(frozen=True)
class FuzzyMatch:
    """Edit-distance match, only worth anything when nothing stronger matched."""
    min_ratio: int = DEFAULT_FUZZY_MIN_RATIO

    def evaluate(self, candidate: str, query: str) -> Optional[float]:
        if not query or not candidate:
            return None
        ratio = fuzz.ratio(candidate, query)
        if ratio < self.min_ratio:
            return None
        return FUZZY_CEILING * ratio / 100


@dataclass(frozen=True)
class CaseInsensitive:
    inner: "Matcher"

    def evaluate(self, candidate: str, query: str) -> Optional[float]:
        if not query:
            return None
        strength = self.inner.evaluate(candidate.casefold(), query.casefold())
        if strength is None:
            return None
        return strength * PARTIAL_MATCH_CEILING


@dataclass(frozen=True)
class PathComponent:
    """
    Match the query component-wise against runs of adjacent path components.

    "dev/tool" is matched as "dev" and "tool" against two neighbouring components,
    so "/home/me/dev/my-tool" is a candidate. The further left the run sits, the
    more its strength decays.
    """
    inner: "Matcher"
    separator: str = os.sep

    def evaluate(self, candidate: str, query: str) -> Optional[float]:
        components = split_components(candidate, self.separator)
        query_parts = split_components(query, self.separator)
        if not components or not query_parts or len(query_parts) > len(components):
            return None

        best: Optional[float] = None
        run_length = len(query_parts)
        for start in range(len(components) - run_length + 1):
            strengths = []
            for component, part in zip(components[start:start + run_length], query_parts):
                strength = self.inner.evaluate(component, part)
                if strength is None:
                    break
                strengths.append(strength)
            else:
                components_to_right = len(components) - (start + run_length)
                run_strength = (sum(strengths) / run_length) * (DEPTH_DECAY ** components_to_right) * PARTIAL_MATCH_CEILING
                if best is None or run_strength > best:
                    best = run_strength
        return best


Matcher = Union[ExactMatch, SubstringMatch, FuzzyMatch, CaseInsensitive, PathComponent]


def split_components(path: str, separator: str = os.sep) -> List[str]:
    return [component for component in path.split(separator) if component]


def default_matchers(fuzzy: bool = True, fuzzy_min_ratio: int = DEFAULT_FUZZY_MIN_RATIO) -> List[Matcher]:
    """
    The eight exact/substring strategies, strongest first, plus a ninth fuzzy one.

    The fuzzy strategy goes beyond the classic eight-strategy cascade and can change
    rankings: a typo now finds a directory instead of nothing. It only scores up to
    FUZZY_CEILING scaled twice by PARTIAL_MATCH_CEILING, so any real match outranks
    it. `fuzzy=False` (config `fuzzy_matching: false`) gives the classic cascade.
    """
    exact = ExactMatch()
    substring = SubstringMatch()
    ci_exact = CaseInsensitive(exact)
    ci_substring = CaseInsensitive(substring)
    matchers: List[Matcher] = [
        exact,
        ci_exact,
        PathComponent(exact),
        PathComponent(substring),
        PathComponent(ci_exact),
        substring,
        ci_substring,
        PathComponent(ci_substring),
    ]
    if fuzzy:
        matchers.append(PathComponent(CaseInsensitive(FuzzyMatch(min_ratio=fuzzy_min_ratio))))
    return matchers
