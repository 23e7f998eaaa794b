from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from jump_common.matchers import (  # noqa: E402
    DEPTH_DECAY,
    PARTIAL_MATCH_CEILING,
    CaseInsensitive,
    ExactMatch,
    FuzzyMatch,
    PathComponent,
    SubstringMatch,
    default_matchers,
    split_components,
)


def test_exact_match():
    assert ExactMatch().evaluate("/home/user/dev", "/home/user/dev") == 1.0
    assert ExactMatch().evaluate("/home/user/dev", "/home/user") is None


def test_substring_strength_grows_with_coverage():
    matcher = SubstringMatch()

    assert matcher.evaluate("/home/user/dev", "dev") == pytest.approx(PARTIAL_MATCH_CEILING * 3 / 14)
    assert matcher.evaluate("/dev", "dev") > matcher.evaluate("/home/user/dev", "dev")
    assert matcher.evaluate("/home/user/dev", "tmp") is None


def test_case_insensitive_matches_below_case_sensitive():
    matcher = CaseInsensitive(ExactMatch())

    assert matcher.evaluate("/Home/User/Dev", "/home/user/dev") == pytest.approx(PARTIAL_MATCH_CEILING)
    assert ExactMatch().evaluate("/Home/User/Dev", "/home/user/dev") is None


def test_path_component_prefers_rightmost_component():
    matcher = PathComponent(ExactMatch(), separator="/")

    deepest = matcher.evaluate("/home/user/project/foo", "foo")
    earlier = matcher.evaluate("/home/user/foo/stuff", "foo")

    assert deepest == pytest.approx(PARTIAL_MATCH_CEILING)
    assert earlier == pytest.approx(PARTIAL_MATCH_CEILING * DEPTH_DECAY)
    assert deepest > earlier


def test_path_component_matches_query_parts_on_adjacent_components():
    matcher = PathComponent(SubstringMatch(), separator="/")

    assert matcher.evaluate("/home/me/dev/my-tool", "dev/tool") is not None
    assert matcher.evaluate("/home/me/dev/x/my-tool", "dev/tool") is None
    assert matcher.evaluate("/dev", "home/dev/tool") is None


def test_path_component_ignores_empty_components():
    assert split_components("//home//user/", "/") == ["home", "user"]
    assert PathComponent(ExactMatch(), separator="/").evaluate("/home/user", "/") is None


def test_fuzzy_match_tolerates_typos_only():
    matcher = FuzzyMatch(min_ratio=75)

    strength = matcher.evaluate("project", "projcet")
    assert strength is not None
    assert strength < 0.5
    assert matcher.evaluate("dev", "zzz9") is None


def test_every_strategy_declines_an_empty_query():
    for matcher in default_matchers():
        assert matcher.evaluate("/home/user/dev", "") is None


def test_no_strategy_matches_an_unrelated_query():
    for matcher in default_matchers():
        assert matcher.evaluate("/home/user/dev", "zzz9") is None


def test_only_exact_match_reaches_full_strength():
    candidate = "/home/user/dev"
    for matcher in default_matchers():
        strength = matcher.evaluate(candidate, candidate)
        if isinstance(matcher, ExactMatch):
            assert strength == 1.0
        else:
            assert strength is None or strength <= PARTIAL_MATCH_CEILING


def test_default_matchers_fuzzy_is_optional():
    with_fuzzy = default_matchers(fuzzy=True)
    without_fuzzy = default_matchers(fuzzy=False)

    assert len(without_fuzzy) == 8
    assert len(with_fuzzy) == len(without_fuzzy) + 1
    assert isinstance(with_fuzzy[-1], PathComponent)
    assert isinstance(with_fuzzy[-1].inner.inner, FuzzyMatch)
