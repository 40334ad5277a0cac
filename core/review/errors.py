"""
Exception hierarchy for peer review scoring.

ReviewError (base)
├── ConfigurationError        fatal, aborts the run
│   ├── MissingFoundersConfig
│   └── MissingGoalsDocument
│       └── MultipleGoalsDocuments
├── DocumentError             recovered per file, file marked invalid
│   ├── ParseError
│   └── SchemaMismatch
└── GoalNotFound              recovered by the aggregator (weight 1)
"""

from __future__ import annotations

from typing import Optional


class ReviewError(Exception):
    """Base class for everything raised by the review core."""


class ConfigurationError(ReviewError):
    pass


class MissingFoundersConfig(ConfigurationError):
    def __init__(self, message: str = "FOUNDERS is not set (comma-separated founder names)"):
        super().__init__(message)


class MissingGoalsDocument(ConfigurationError):
    def __init__(self, message: str = "No goals document found among the input files"):
        super().__init__(message)


class MultipleGoalsDocuments(MissingGoalsDocument):
    def __init__(self, sources: list):
        self.sources = list(sources)
        super().__init__(
            "Expected exactly one goals document, got %d: %s"
            % (len(self.sources), ", ".join(self.sources))
        )


class DocumentError(ReviewError):
    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        self.reason = message
        super().__init__(f"{source}: {message}" if source else message)


class ParseError(DocumentError):
    pass


class SchemaMismatch(DocumentError):
    pass


class GoalNotFound(ReviewError, KeyError):
    def __init__(self, goal_id: str):
        self.goal_id = goal_id
        super().__init__(f"Unknown goal id: {goal_id!r}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]
