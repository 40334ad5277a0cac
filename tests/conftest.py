"""
Pytest fixtures for review tests. Writes goals/ratings JSON files into a temp dir.
"""

from __future__ import annotations

import json

import pytest


@pytest.fixture
def write_json(tmp_path):
    """Write `payload` as JSON to tmp_path/name and return the path as str."""

    def _write(name, payload):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def example_files(write_json):
    """The Tom/Jerry goals document plus one ratings document from Jerry."""
    goals = write_json("goals.json", [
        {"id": "g1", "owner": "Tom", "isMain": True},
        {"id": "g2", "owner": "Jerry", "isMain": False},
    ])
    jerry = write_json("jerry.json", {"reviewer": "Jerry", "votes": [["g1", [["Tom", 5]]]]})
    return [goals, jerry]
