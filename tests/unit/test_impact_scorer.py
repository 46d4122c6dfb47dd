"""
Unit tests for the temporal impact scorer.

Test-automator agent requirements:
- Independent tests (no shared state)
- Atomic tests (one assertion per test where possible)
- Clear naming (test_<module>_<method>_<scenario>)
"""

import pytest

from bia.engine.impact.scorer import (
    TemporalImpactScorer,
    classify_impact_level,
    validate_category_weights,
)
from bia.models.enums import ImpactLevel, TimeUnit
from tests.conftest import (
    make_category,
    make_matrix,
    make_process,
    make_snapshot,
    make_timeline_point,
)


# ============================================================================
# Construction & helpers
# ============================================================================


class TestTemporalImpactScorerInit:
    """Test TemporalImpactScorer initialization."""

    def test_default_threshold(self):
        scorer = TemporalImpactScorer()
        assert scorer.impact_threshold == 3

    @pytest.mark.parametrize("threshold", [0, 6, -1])
    def test_invalid_threshold_raises(self, threshold):
        with pytest.raises(ValueError, match="impact_threshold"):
            TemporalImpactScorer(impact_threshold=threshold)


class TestClassifyImpactLevel:
    """Test banding of weighted scores."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            (5.0, ImpactLevel.CRITICAL),
            (4.5, ImpactLevel.CRITICAL),
            (4.49, ImpactLevel.HIGH),
            (3.5, ImpactLevel.HIGH),
            (2.5, ImpactLevel.MEDIUM),
            (1.5, ImpactLevel.LOW),
            (0.5, ImpactLevel.MINIMAL),
            (0.0, ImpactLevel.NONE),
        ],
    )
    def test_bands(self, score, expected):
        assert classify_impact_level(score) == expected


class TestValidateCategoryWeights:
    """Test the weight total check."""

    def test_weights_totalling_100_are_valid(self, categories):
        assert validate_category_weights(categories) is True

    def test_weights_within_tolerance_are_valid(self):
        cats = [make_category("a", weight=33.333), make_category("b", weight=66.667)]
        assert validate_category_weights(cats) is True

    def test_weights_not_totalling_100_are_invalid(self):
        cats = [make_category("a", weight=50.0), make_category("b", weight=30.0)]
        assert validate_category_weights(cats) is False


# ============================================================================
# max_impact_per_category
# ============================================================================


class TestMaxImpactPerCategory:
    """Test worst-case severity per category."""

    def test_takes_max_over_all_points(self, categories):
        matrix = make_matrix(values={
            "t1": {"financial": 2, "legal": 4},
            "t2": {"financial": 5, "legal": 1},
        })
        result = TemporalImpactScorer().max_impact_per_category(matrix, categories)
        assert result == {"financial": 5, "legal": 4}

    def test_missing_category_defaults_to_zero(self, categories):
        matrix = make_matrix(values={"t1": {"financial": 3}})
        result = TemporalImpactScorer().max_impact_per_category(matrix, categories)
        assert result == {"financial": 3, "legal": 0}

    def test_unassessed_process_yields_zero_vector(self, categories):
        result = TemporalImpactScorer().max_impact_per_category(None, categories)
        assert result == {"financial": 0, "legal": 0}

    def test_empty_matrix_yields_zero_vector(self, categories):
        result = TemporalImpactScorer().max_impact_per_category(make_matrix(), categories)
        assert result == {"financial": 0, "legal": 0}

    def test_no_categories_yields_empty(self):
        matrix = make_matrix(values={"t1": {"financial": 3}})
        assert TemporalImpactScorer().max_impact_per_category(matrix, []) == {}


# ============================================================================
# weighted_score
# ============================================================================


class TestWeightedScore:
    """Test weighted criticality score."""

    def test_weighted_average(self, categories):
        score = TemporalImpactScorer().weighted_score({"financial": 4, "legal": 2}, categories)
        assert score == 3.2

    def test_rounded_to_two_decimals(self):
        cats = [make_category("a", weight=33.33), make_category("b", weight=66.67)]
        score = TemporalImpactScorer().weighted_score({"a": 1, "b": 2}, cats)
        assert score == 1.67

    def test_no_categories_scores_zero(self):
        assert TemporalImpactScorer().weighted_score({}, []) == 0.0

    def test_all_zero_weights_score_zero(self):
        cats = [make_category("a", weight=0.0), make_category("b", weight=0.0)]
        assert TemporalImpactScorer().weighted_score({"a": 5, "b": 5}, cats) == 0.0

    def test_invalid_weight_total_scores_zero(self):
        cats = [make_category("a", weight=50.0), make_category("b", weight=30.0)]
        assert TemporalImpactScorer().weighted_score({"a": 5, "b": 5}, cats) == 0.0

    def test_invalid_weight_total_weighted_when_not_enforced(self):
        cats = [make_category("a", weight=50.0), make_category("b", weight=30.0)]
        scorer = TemporalImpactScorer(enforce_weight_total=False)
        assert scorer.weighted_score({"a": 4, "b": 0}, cats) == 2.5


# ============================================================================
# suggest_mtpd
# ============================================================================


class TestSuggestMtpd:
    """Test earliest-breach MTPD suggestion."""

    def test_first_breach_in_time_order(self, categories, timeline_points):
        matrix = make_matrix(values={
            "t_4h": {"financial": 1},
            "t_day": {"financial": 3},
            "t_week": {"financial": 5},
        })
        mtpd = TemporalImpactScorer(impact_threshold=3).suggest_mtpd(matrix, categories, timeline_points)
        assert mtpd == 24.0

    def test_earliest_breach_wins_over_most_severe(self, categories, timeline_points):
        matrix = make_matrix(values={
            "t_4h": {"legal": 3},
            "t_day": {"legal": 1},
            "t_week": {"financial": 5},
        })
        mtpd = TemporalImpactScorer(impact_threshold=3).suggest_mtpd(matrix, categories, timeline_points)
        assert mtpd == 4.0

    def test_no_breach_returns_none(self, categories, timeline_points):
        matrix = make_matrix(values={"t_week": {"financial": 2}})
        assert TemporalImpactScorer(impact_threshold=3).suggest_mtpd(matrix, categories, timeline_points) is None

    def test_threshold_override(self, categories, timeline_points):
        matrix = make_matrix(values={"t_4h": {"financial": 2}, "t_week": {"financial": 4}})
        scorer = TemporalImpactScorer(impact_threshold=4)
        assert scorer.suggest_mtpd(matrix, categories, timeline_points, threshold=2) == 4.0

    def test_minutes_offsets_converted_to_hours(self, categories):
        points = [make_timeline_point("t30m", value=30.0, unit=TimeUnit.MINUTES)]
        matrix = make_matrix(values={"t30m": {"financial": 5}})
        assert TemporalImpactScorer().suggest_mtpd(matrix, categories, points) == 0.5

    def test_unassessed_returns_none(self, categories, timeline_points):
        assert TemporalImpactScorer().suggest_mtpd(None, categories, timeline_points) is None

    def test_invalid_threshold_override_raises(self, categories, timeline_points):
        with pytest.raises(ValueError):
            TemporalImpactScorer().suggest_mtpd(make_matrix(), categories, timeline_points, threshold=9)


# ============================================================================
# score_process / score_all
# ============================================================================


class TestScoreProcess:
    """Test the complete per-process profile."""

    def test_full_profile(self, categories, timeline_points):
        matrix = make_matrix(values={
            "t_4h": {"financial": 1, "legal": 1},
            "t_day": {"financial": 4, "legal": 2},
        })
        score = TemporalImpactScorer().score_process("p1", matrix, categories, timeline_points)

        assert score.max_impact_per_category == {"financial": 4, "legal": 2}
        assert score.weighted_score == 3.2
        assert score.suggested_mtpd == 24.0
        assert score.impact_level == ImpactLevel.MEDIUM
        assert score.highest_category == "financial"
        assert score.assessed is True

    def test_unassessed_process(self, categories, timeline_points):
        score = TemporalImpactScorer().score_process("p1", None, categories, timeline_points)

        assert score.weighted_score == 0.0
        assert score.suggested_mtpd is None
        assert score.highest_category is None
        assert score.assessed is False

    def test_serializes_with_camel_case_aliases(self, categories, timeline_points):
        matrix = make_matrix(values={"t_4h": {"financial": 5}})
        score = TemporalImpactScorer().score_process("p1", matrix, categories, timeline_points)
        dumped = score.model_dump(by_alias=True)

        assert dumped["suggestedMTPD"] == 4.0
        assert dumped["maxImpactPerCategory"] == {"financial": 5, "legal": 0}
        assert "weightedScore" in dumped


class TestScoreAll:
    """Test snapshot-wide scoring."""

    def test_scores_every_process(self, categories, timeline_points):
        snapshot = make_snapshot(
            processes=[make_process("p1"), make_process("p2")],
            categories=categories,
            timeline_points=timeline_points,
            impact_matrices={"p1": make_matrix("p1", {"t_day": {"financial": 5, "legal": 5}})},
        )
        scores = TemporalImpactScorer().score_all(snapshot)

        assert set(scores) == {"p1", "p2"}
        assert scores["p1"].weighted_score == 5.0
        assert scores["p2"].weighted_score == 0.0

    def test_empty_snapshot(self):
        assert TemporalImpactScorer().score_all(make_snapshot()) == {}
