from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from core.review.errors import MissingGoalsDocument, MultipleGoalsDocuments
from core.review.goals import GoalModel
from core.review.models import (
    Document,
    GoalsDocument,
    InvalidDocument,
    RatingsDocument,
    ReviewConfig,
    ReviewReport,
)
from core.review.scoring import aggregate, completion_totals


logger = logging.getLogger(__name__)


def split_documents(
    documents: Iterable[Document],
) -> Tuple[GoalsDocument, List[RatingsDocument], List[InvalidDocument]]:
    goals: List[GoalsDocument] = []
    ratings: List[RatingsDocument] = []
    invalid: List[InvalidDocument] = []

    for doc in documents:
        if isinstance(doc, GoalsDocument):
            goals.append(doc)
        elif isinstance(doc, RatingsDocument):
            ratings.append(doc)
        else:
            invalid.append(doc)

    if not goals:
        raise MissingGoalsDocument()
    if len(goals) > 1:
        raise MultipleGoalsDocuments([g.source or "<unnamed>" for g in goals])

    return goals[0], ratings, invalid


def build_review_report(*, documents: Iterable[Document], config: ReviewConfig) -> ReviewReport:
    goals_doc, ratings, invalid = split_documents(documents)
    goal_model = GoalModel.from_document(goals_doc)
    for goal in goal_model.get_orphans():
        logger.warning(
            "%s: goal %r has unknown parent %r; treating it as a root",
            goals_doc.source or "<goals>", goal.id, goal.parent_id,
        )

    names = goal_model.get_names(config.founders)
    results = aggregate(names, goal_model, ratings, config)
    filled, required = completion_totals(results)

    return ReviewReport(
        results=results,
        invalid_files=[d.source or "<unnamed>" for d in invalid],
        goal_count=len(goal_model),
        main_goal_count=len(goal_model.main_goals),
        scores_required_total=required,
        scores_filled_total=filled,
    )
