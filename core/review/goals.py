from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from core.review.errors import GoalNotFound
from core.review.models import Goal, GoalsDocument


class GoalModel:
    """
    Read-only view over one goals document.

    Goals keep their document order. Parent links are resolved lazily; a goal
    whose parentId points at nothing is treated as a root.
    """

    def __init__(self, goals: Iterable[Goal]):
        self._goals: List[Goal] = list(goals)
        self._by_id: Dict[str, Goal] = {}
        for goal in self._goals:
            self._by_id.setdefault(goal.id, goal)

    @classmethod
    def from_document(cls, document: GoalsDocument) -> "GoalModel":
        return cls(document.goals)

    def __len__(self) -> int:
        return len(self._goals)

    def __iter__(self) -> Iterator[Goal]:
        return iter(self._goals)

    def __contains__(self, goal_id: object) -> bool:
        return goal_id in self._by_id

    @property
    def main_goals(self) -> List[Goal]:
        return [g for g in self._goals if self.is_main_goal(g)]

    # -----------------------------
    # Classification / lookup
    # -----------------------------

    @staticmethod
    def is_main_goal(goal: Goal) -> bool:
        return bool(goal.is_main)

    def resolve_goal(self, goal_id: str) -> Goal:
        try:
            return self._by_id[goal_id]
        except KeyError:
            raise GoalNotFound(goal_id) from None

    # -----------------------------
    # Tree
    # -----------------------------

    def get_parent(self, goal: Goal) -> Optional[Goal]:
        """None for roots and for goals whose parentId points at nothing."""
        if goal.parent_id is None:
            return None
        return self._by_id.get(goal.parent_id)

    def get_orphans(self) -> List[Goal]:
        """Goals with a parentId that matches no goal; they are read as roots."""
        return [g for g in self._goals if g.parent_id is not None and self.get_parent(g) is None]

    # -----------------------------
    # People
    # -----------------------------

    def get_names(self, founders: Iterable[str]) -> List[str]:
        """Goal owners in document order, then founders; first sighting wins."""
        names: List[str] = []
        seen = set()
        owners = (g.owner for g in self._goals if g.owner is not None)
        for name in list(owners) + list(founders):
            if name not in seen:
                seen.add(name)
                names.append(name)
        return names

    def get_direct_goals(self, name: str) -> List[Goal]:
        return [g for g in self._goals if g.owner == name]

    def get_ratings_required(self, name: str, founders: Iterable[str]) -> List[str]:
        # Founders and non-founders alike are rated by the whole roster
        # except themselves; founders also rate each other.
        return [other for other in self.get_names(founders) if other != name]
