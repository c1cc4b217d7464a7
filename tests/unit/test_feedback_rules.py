"""Property-based tests for feedback satisfaction and flagging rules."""

import pytest
from hypothesis import given, settings, strategies as st

from aiqa.ops.feedback_service import (
    FLAG_SATISFACTION_THRESHOLD,
    calculate_overall_satisfaction,
    should_flag,
)

valid_rating = st.floats(min_value=1.0, max_value=5.0)


def test_documented_example():
    overall = calculate_overall_satisfaction([4.5, 4.0, 4.5, 5.0])

    assert overall == pytest.approx(4.5)
    assert not should_flag(overall)


def test_threshold_is_exclusive():
    assert not should_flag(FLAG_SATISFACTION_THRESHOLD)
    assert should_flag(2.99)


@given(ratings=st.lists(valid_rating, min_size=4, max_size=4))
@settings(max_examples=200)
def test_overall_stays_within_rating_range(ratings):
    overall = calculate_overall_satisfaction(ratings)

    assert min(ratings) - 1e-9 <= overall <= max(ratings) + 1e-9
    assert should_flag(overall) == (overall < 3.0)


@given(rating=valid_rating)
def test_uniform_ratings_score_themselves(rating):
    assert calculate_overall_satisfaction([rating] * 4) == pytest.approx(rating)
