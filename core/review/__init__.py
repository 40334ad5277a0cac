# core/review/__init__.py
"""
Peer review scoring core.

This package defines:
- Goal / ratings document models and their validating parse
- GoalModel queries over one goals document
- Weighted score aggregation with partial-completion detection
- Concurrent document loading and the plain-text report
"""
