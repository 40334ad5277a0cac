"""
Unit tests for core/review/scoring.py

Tests cover:
- Weighting (main goal = 3, regular = 1)
- Self-rating exclusion
- Unknown goal ids (weight 1, counted, never fatal)
- Final score: weighted mean, half-up rounding, sentinel
- Partial detection
- Run-level completion totals
- Idempotence and output order
"""
import pytest

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.review.goals import GoalModel
from core.review.models import (
    NO_SCORE,
    CollectedScore,
    Goal,
    RatingsDocument,
    ReviewConfig,
)
from core.review.scoring import (
    aggregate,
    collect_scores,
    completion_totals,
    final_score,
    score_person,
)


def ratings(reviewer, votes):
    return RatingsDocument.model_validate({"reviewer": reviewer, "votes": votes})


def goals(*records):
    return GoalModel([Goal.model_validate(r) for r in records])


@pytest.fixture
def tom_and_jerry():
    model = goals(
        {"id": "g1", "owner": "Tom", "isMain": True},
        {"id": "g2", "owner": "Jerry", "isMain": False},
    )
    config = ReviewConfig(founders=["Tom", "Jerry"])
    return model, config


class TestWorkedExample:
    """Two founders, one ratings document from Jerry"""

    def test_tom_and_jerry(self, tom_and_jerry):
        model, config = tom_and_jerry
        docs = [ratings("Jerry", [["g1", [["Tom", 5]]]])]

        tom, jerry = aggregate(model.get_names(config.founders), model, docs, config)

        assert tom.name == "Tom"
        assert tom.scores == [(5, 3)]
        assert tom.final_score == 5.0
        assert tom.scores_required == ["Jerry"]
        assert tom.is_partial is False
        assert tom.direct_goals_count == 1
        assert tom.direct_main_goals_count == 1

        assert jerry.name == "Jerry"
        assert jerry.scores == []
        assert jerry.final_score == -1
        assert jerry.is_rated is False
        assert jerry.is_partial is True
        assert jerry.direct_goals_count == 1
        assert jerry.direct_main_goals_count == 0


class TestCollectScores:

    def test_main_and_regular_weights(self, tom_and_jerry):
        model, _ = tom_and_jerry
        docs = [ratings("Spike", [["g1", [["Tom", 4]]], ["g2", [["Tom", 1]]]])]

        scores, unknown = collect_scores("Tom", model, docs)

        assert scores == [CollectedScore(4.0, 3), CollectedScore(1.0, 1)]
        assert unknown == 0

    def test_self_rating_excluded(self, tom_and_jerry):
        model, config = tom_and_jerry
        docs = [
            ratings("Tom", [["g1", [["Tom", 5], ["Jerry", 2]]]]),
            ratings("Jerry", [["g1", [["Tom", 3], ["Jerry", 5]]]]),
        ]

        tom, jerry = aggregate(["Tom", "Jerry"], model, docs, config)

        assert tom.scores == [(3, 3)]
        assert jerry.scores == [(2, 3)]

    def test_votes_not_mentioning_person_contribute_nothing(self, tom_and_jerry):
        model, _ = tom_and_jerry
        docs = [ratings("Spike", [["g1", [["Jerry", 5]]], ["g2", []]])]

        scores, _ = collect_scores("Tom", model, docs)
        assert scores == []

    def test_unknown_goal_weighted_as_regular(self, tom_and_jerry):
        model, config = tom_and_jerry
        docs = [ratings("Jerry", [["ghost", [["Tom", 2]]], ["g1", [["Tom", 4]]]])]

        result = score_person("Tom", model, docs, config)

        assert result.scores == [(2, 1), (4, 3)]
        assert result.unknown_goal_votes == 1
        assert result.final_score == 3.5

    def test_unknown_goal_is_logged(self, tom_and_jerry, caplog):
        model, _ = tom_and_jerry
        docs = [ratings("Jerry", [["ghost", [["Tom", 2]]]])]

        with caplog.at_level("WARNING"):
            collect_scores("Tom", model, docs)

        assert "ghost" in caplog.text

    def test_outside_reviewer_still_counts(self, tom_and_jerry):
        model, _ = tom_and_jerry
        docs = [ratings("Investor", [["g2", [["Jerry", 4]]]])]

        scores, _ = collect_scores("Jerry", model, docs)
        assert scores == [(4, 1)]

    def test_scores_keep_document_order(self, tom_and_jerry):
        model, _ = tom_and_jerry
        docs = [
            ratings("A", [["g2", [["Tom", 1]]]]),
            ratings("B", [["g1", [["Tom", 2]]], ["g2", [["Tom", 3]]]]),
        ]

        scores, _ = collect_scores("Tom", model, docs)
        assert [s.score for s in scores] == [1, 2, 3]


class TestFinalScore:

    def test_empty_is_sentinel(self):
        assert final_score([]) == NO_SCORE == -1

    def test_weighted_mean(self):
        # (4*3 + 1*1) / 4
        assert final_score([CollectedScore(4, 3), CollectedScore(1, 1)]) == 3.25

    def test_rounds_half_up(self):
        # 9 / 8 = 1.125 -> 1.13 (half-even would give 1.12)
        scores = [
            CollectedScore(1, 3),
            CollectedScore(1, 3),
            CollectedScore(1, 1),
            CollectedScore(2, 1),
        ]
        assert final_score(scores) == 1.13

    def test_rounds_to_two_places(self):
        assert final_score([CollectedScore(2, 1), CollectedScore(0, 1), CollectedScore(0, 1)]) == 0.67

    def test_decimal_scores(self):
        assert final_score([CollectedScore(4.5, 1), CollectedScore(3.5, 1)]) == 4.0

    @pytest.mark.parametrize("scores", [
        [CollectedScore(1, 3), CollectedScore(5, 1)],
        [CollectedScore(2.5, 1), CollectedScore(3.75, 3), CollectedScore(4, 1)],
        [CollectedScore(10, 3), CollectedScore(10, 3)],
        [CollectedScore(0, 1), CollectedScore(1, 1), CollectedScore(1, 1)],
    ])
    def test_within_supplied_bounds(self, scores):
        result = final_score(scores)
        assert min(s.score for s in scores) <= result <= max(s.score for s in scores)


class TestPartial:

    @pytest.fixture
    def roster(self):
        model = goals(
            {"id": "t", "owner": "Tom"},
            {"id": "j", "owner": "Jerry"},
            {"id": "s", "owner": "Spike"},
            {"id": "b", "owner": "Butch"},
        )
        return model, ReviewConfig(founders=["Tom"])

    def test_two_of_three_is_partial(self, roster):
        model, config = roster
        docs = [ratings("Jerry", [["t", [["Tom", 4]]]]), ratings("Spike", [["t", [["Tom", 4]]]])]

        tom = score_person("Tom", model, docs, config)

        assert len(tom.scores_required) == 3
        assert len(tom.scores) == 2
        assert tom.is_partial is True

    def test_three_of_three_is_complete(self, roster):
        model, config = roster
        docs = [ratings(r, [["t", [["Tom", 4]]]]) for r in ("Jerry", "Spike", "Butch")]

        tom = score_person("Tom", model, docs, config)

        assert len(tom.scores) == 3
        assert tom.is_partial is False

    def test_volume_only_not_which_raters(self, roster):
        model, config = roster
        # Jerry alone rates Tom on three goals
        docs = [ratings("Jerry", [["t", [["Tom", 4]]], ["j", [["Tom", 4]]], ["s", [["Tom", 4]]]])]

        tom = score_person("Tom", model, docs, config)
        assert tom.is_partial is False


class TestAggregate:

    def test_output_follows_input_order(self, tom_and_jerry):
        model, config = tom_and_jerry
        results = aggregate(["Jerry", "Tom"], model, [], config)
        assert [r.name for r in results] == ["Jerry", "Tom"]

    def test_idempotent(self, tom_and_jerry):
        model, config = tom_and_jerry
        docs = [
            ratings("Jerry", [["g1", [["Tom", 5]]], ["g2", [["Tom", 2]]]]),
            ratings("Tom", [["g2", [["Jerry", 3]]]]),
        ]
        names = model.get_names(config.founders)

        first = aggregate(names, model, docs, config)
        second = aggregate(names, model, docs, config)

        assert first == second

    def test_accepts_generator_of_documents(self, tom_and_jerry):
        model, config = tom_and_jerry
        docs = (d for d in [ratings("Jerry", [["g1", [["Tom", 5]]]])])

        tom, jerry = aggregate(["Tom", "Jerry"], model, docs, config)
        assert tom.scores == [(5, 3)]

    def test_completion_totals(self, tom_and_jerry):
        model, config = tom_and_jerry
        docs = [ratings("Jerry", [["g1", [["Tom", 5]]]])]

        results = aggregate(model.get_names(config.founders), model, docs, config)

        assert completion_totals(results) == (1, 2)

    def test_completion_totals_empty(self):
        assert completion_totals([]) == (0, 0)
