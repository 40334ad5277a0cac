from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Sequence, Tuple

from core.review.errors import GoalNotFound
from core.review.goals import GoalModel
from core.review.models import (
    MAIN_GOAL_WEIGHT,
    NO_SCORE,
    REGULAR_GOAL_WEIGHT,
    CollectedScore,
    PersonResult,
    RatingsDocument,
    ReviewConfig,
)


logger = logging.getLogger(__name__)

_TWO_PLACES = Decimal("0.01")


def goal_weight(goal_model: GoalModel, goal_id: str) -> int:
    """Raises GoalNotFound for ids missing from the goals document."""
    goal = goal_model.resolve_goal(goal_id)
    return MAIN_GOAL_WEIGHT if goal_model.is_main_goal(goal) else REGULAR_GOAL_WEIGHT


def collect_scores(
    name: str,
    goal_model: GoalModel,
    ratings_documents: Iterable[RatingsDocument],
) -> Tuple[List[CollectedScore], int]:
    """
    Every (score, weight) given to `name` by someone other than `name`.

    Returns the scores in document/vote order plus the number of them that
    referenced an unknown goal. Unknown goals count as regular goals.
    """
    scores: List[CollectedScore] = []
    unknown = 0

    for doc in ratings_documents:
        if doc.reviewer == name:
            continue
        for vote in doc.votes:
            entry = vote.score_for(name)
            if entry is None:
                continue
            try:
                weight = goal_weight(goal_model, vote.goal_id)
            except GoalNotFound:
                weight = REGULAR_GOAL_WEIGHT
                unknown += 1
                logger.warning(
                    "%s rated %s on unknown goal %r; counting it with weight %d",
                    doc.reviewer, name, vote.goal_id, weight,
                )
            scores.append(CollectedScore(entry.score, weight))

    return scores, unknown


def round_half_up(value: Decimal) -> float:
    return float(value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def final_score(scores: Sequence[CollectedScore]) -> float:
    """Weighted mean of the scores, 2 decimals half-up; NO_SCORE when empty."""
    divider = sum(s.weight for s in scores)
    if divider <= 0:
        return NO_SCORE
    total = sum((Decimal(str(s.score)) * s.weight for s in scores), Decimal(0))
    return round_half_up(total / divider)


def score_person(
    name: str,
    goal_model: GoalModel,
    ratings_documents: Sequence[RatingsDocument],
    config: ReviewConfig,
) -> PersonResult:
    scores, unknown = collect_scores(name, goal_model, ratings_documents)
    required = goal_model.get_ratings_required(name, config.founders)
    direct = goal_model.get_direct_goals(name)

    return PersonResult(
        name=name,
        scores=scores,
        scores_required=required,
        direct_goals_count=len(direct),
        direct_main_goals_count=sum(1 for g in direct if goal_model.is_main_goal(g)),
        is_partial=len(scores) < len(required),
        final_score=final_score(scores),
        unknown_goal_votes=unknown,
    )


def aggregate(
    names: Iterable[str],
    goal_model: GoalModel,
    ratings_documents: Iterable[RatingsDocument],
    config: ReviewConfig,
) -> List[PersonResult]:
    docs = list(ratings_documents)
    return [score_person(name, goal_model, docs, config) for name in names]


def completion_totals(results: Iterable[PersonResult]) -> Tuple[int, int]:
    """(scores filled, scores required) across all people."""
    filled = 0
    required = 0
    for r in results:
        filled += len(r.scores)
        required += len(r.scores_required)
    return filled, required
