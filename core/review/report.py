from __future__ import annotations

from typing import List, Sequence

from core.review.models import PersonResult, ReviewReport


HEADERS = ("Name", "Goals", "Score", "Status")


def _goals_cell(r: PersonResult) -> str:
    if r.direct_main_goals_count:
        return f"{r.direct_goals_count} ({r.direct_main_goals_count} main)"
    return str(r.direct_goals_count)


def _score_cell(r: PersonResult) -> str:
    return f"{r.final_score:.2f}" if r.is_rated else "N/A"


def _status_cell(r: PersonResult) -> str:
    notes: List[str] = []
    if r.is_partial:
        notes.append(f"partial {len(r.scores)}/{len(r.scores_required)}")
    if r.unknown_goal_votes:
        notes.append(f"unknown goals: {r.unknown_goal_votes}")
    return ", ".join(notes)


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: Sequence[str]) -> str:
        return "  ".join(c.ljust(w) for c, w in zip(cells, widths)).rstrip()

    out = [line(headers), line(["-" * w for w in widths])]
    out.extend(line(row) for row in rows)
    return "\n".join(out)


def generate_text_report(report: ReviewReport) -> str:
    blocks: List[str] = []

    if report.invalid_files:
        lines = [f"Invalid files ({len(report.invalid_files)}):"]
        lines.extend(f"  - {name}" for name in report.invalid_files)
        blocks.append("\n".join(lines))

    rows = [
        (r.name, _goals_cell(r), _score_cell(r), _status_cell(r))
        for r in report.results
    ]
    blocks.append(format_table(HEADERS, rows))

    percent = int(round(report.completion_ratio * 100))
    summary = [
        f"Total goals: {report.goal_count} ({report.main_goal_count} main)",
        f"Completion: {report.scores_filled_total}/{report.scores_required_total} ({percent}%)",
    ]
    if report.unrated:
        summary.append(f"Unrated: {', '.join(report.unrated)}")
    blocks.append("\n".join(summary))

    return "\n\n".join(blocks)
