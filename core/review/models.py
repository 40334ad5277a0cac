from __future__ import annotations

from typing import Annotated, Any, List, Literal, NamedTuple, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


NO_SCORE = -1.0  # final_score sentinel for "nobody rated this person"

MAIN_GOAL_WEIGHT = 3
REGULAR_GOAL_WEIGHT = 1


# -----------------------------
# Input documents
# -----------------------------

class Goal(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    owner: Optional[str] = None
    is_main: bool = Field(default=False, alias="isMain")


def _unpack_pair(data: Any, first: str, second: str) -> Any:
    # ["Tom", 5] -> {"person": "Tom", "score": 5}
    if isinstance(data, (list, tuple)):
        if len(data) != 2:
            raise ValueError(f"expected a [{first}, {second}] pair, got {len(data)} items")
        return {first: data[0], second: data[1]}
    return data


class PersonScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    person: str
    score: float = Field(strict=True, allow_inf_nan=False)

    @model_validator(mode="before")
    @classmethod
    def from_pair(cls, data: Any) -> Any:
        return _unpack_pair(data, "person", "score")


class Vote(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    goal_id: str = Field(alias="goalId")
    scores: List[PersonScore]

    @model_validator(mode="before")
    @classmethod
    def from_pair(cls, data: Any) -> Any:
        return _unpack_pair(data, "goalId", "scores")

    def score_for(self, name: str) -> Optional[PersonScore]:
        """First entry for `name`, or None if the vote does not mention them."""
        for entry in self.scores:
            if entry.person == name:
                return entry
        return None


class GoalsDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["goals"] = "goals"
    source: Optional[str] = None
    goals: List[Goal] = Field(min_length=1)

    @field_validator("goals")
    @classmethod
    def validate_unique_ids(cls, v: List[Goal]) -> List[Goal]:
        seen = set()
        for goal in v:
            if goal.id in seen:
                raise ValueError(f"duplicate goal id {goal.id!r}")
            seen.add(goal.id)
        return v


class RatingsDocument(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: Literal["ratings"] = "ratings"
    source: Optional[str] = None
    reviewer: str = Field(validation_alias=AliasChoices("reviewer", "reviewerName"))
    votes: List[Vote]


class InvalidDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["invalid"] = "invalid"
    source: Optional[str] = None
    reason: str


Document = Annotated[
    Union[GoalsDocument, RatingsDocument, InvalidDocument],
    Field(discriminator="kind"),
]


# -----------------------------
# Configuration + results
# -----------------------------

class ReviewConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    founders: List[str] = Field(default_factory=list)


class CollectedScore(NamedTuple):
    score: float
    weight: int


class PersonResult(BaseModel):
    name: str
    scores: List[CollectedScore] = Field(default_factory=list)
    scores_required: List[str] = Field(default_factory=list)
    direct_goals_count: int = 0
    direct_main_goals_count: int = 0
    is_partial: bool = False
    final_score: float = NO_SCORE

    # collected scores whose goal id is missing from the goals document
    unknown_goal_votes: int = 0

    @property
    def is_rated(self) -> bool:
        return self.final_score != NO_SCORE


class ReviewReport(BaseModel):
    results: List[PersonResult] = Field(default_factory=list)
    invalid_files: List[str] = Field(default_factory=list)

    goal_count: int = 0
    main_goal_count: int = 0

    scores_required_total: int = 0
    scores_filled_total: int = 0

    @property
    def completion_ratio(self) -> float:
        if not self.scores_required_total:
            return 0.0
        return self.scores_filled_total / self.scores_required_total

    @property
    def unrated(self) -> List[str]:
        return [r.name for r in self.results if not r.is_rated]
