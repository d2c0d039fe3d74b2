"""
Tests for the scalar normalizer. Exact values are pinned; rounding is
half-to-even.
"""
import pytest

from diary_insight.services.scoring import (
    NEUTRAL_RATING,
    clamp_rating,
    composite_rating,
    rating_label,
    score_from_rating,
)


class TestClampRating:
    @pytest.mark.parametrize("raw, expected", [
        (0, 1), (-4, 1), (11, 10), (99, 10), (7, 7), (6.6, 7), ("8", 8), (" 3 ", 3),
    ])
    def test_clamps_into_range(self, raw, expected):
        assert clamp_rating(raw) == expected

    @pytest.mark.parametrize("raw", [None, "abc", "", float("nan"), object()])
    def test_malformed_reads_as_neutral(self, raw):
        assert clamp_rating(raw) == NEUTRAL_RATING

    def test_infinity_clamps(self):
        assert clamp_rating(float("inf")) == 10
        assert clamp_rating(float("-inf")) == 1

    def test_huge_integers_clamp(self):
        assert clamp_rating(10**400) == 10
        assert clamp_rating(-(10**400)) == 1
        assert clamp_rating("9" * 400) == 10

    def test_result_is_plain_int(self):
        assert type(clamp_rating(True)) is int
        assert type(clamp_rating(7)) is int


class TestScoreFromRating:
    def test_pinned_values(self):
        expected = {1: 0, 2: 11, 3: 22, 4: 33, 5: 44, 6: 56, 7: 67, 8: 78, 9: 89, 10: 100}
        assert {r: score_from_rating(r) for r in range(1, 11)} == expected

    def test_monotonic(self):
        scores = [score_from_rating(r) for r in range(1, 11)]
        assert scores == sorted(scores)

    def test_out_of_range_is_clamped(self):
        assert score_from_rating(0) == 0
        assert score_from_rating(15) == 100


class TestCompositeRating:
    def test_empty_is_neutral(self):
        assert composite_rating([]) == NEUTRAL_RATING

    def test_mean_rounded(self):
        assert composite_rating([8, 6, 7, 7]) == 7

    def test_half_rounds_to_even(self):
        assert composite_rating([6, 7]) == 6
        assert composite_rating([7, 8]) == 8

    def test_inputs_clamped_first(self):
        assert composite_rating([20, 10]) == 10


class TestRatingLabel:
    @pytest.mark.parametrize("rating, label", [
        (10, "good"), (8, "good"), (7, "okay"), (5, "okay"), (4, "hard"), (1, "hard"),
    ])
    def test_thresholds(self, rating, label):
        assert rating_label(rating) == label
