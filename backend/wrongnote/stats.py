"""Dashboard statistics computed from a filtered set of wrong answers."""
from __future__ import annotations

import math
from typing import Dict, List, Sequence

from .schemas import (
    PROBLEM_LEVELS,
    QUESTION_TYPES,
    AnalysisStats,
    BarEntry,
    PieEntry,
    RadarEntry,
    WrongAnswerRecord,
)

RADAR_LABELS: Dict[str, str] = {
    "Concept": "개념",
    "Computation": "계산",
    "Application": "응용",
    "ProblemSolving": "문제해결",
}

BAR_LIMIT = 6
RECENT_LIMIT = 100
MIN_FULL_MARK = 10
NO_CHAPTER = "-"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def resolution_rate(resolved: int, total: int) -> int:
    if total == 0:
        return 0
    return _round_half_up(resolved / total * 100)


def chapter_counts(answers: Sequence[WrongAnswerRecord]) -> Dict[str, int]:
    # dict keeps first-seen order, which the tie-breaks below rely on
    counts: Dict[str, int] = {}
    for a in answers:
        counts[a.chapter] = counts.get(a.chapter, 0) + 1
    return counts


def worst_chapter(counts: Dict[str, int]) -> str:
    worst = NO_CHAPTER
    max_count = 0
    for chapter, count in counts.items():
        if count > max_count:
            max_count = count
            worst = chapter
    return worst


def bar_data(counts: Dict[str, int]) -> List[BarEntry]:
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [BarEntry(name=name, count=count) for name, count in ranked[:BAR_LIMIT]]


def radar_data(answers: Sequence[WrongAnswerRecord]) -> List[RadarEntry]:
    type_counts = {t: 0 for t in QUESTION_TYPES}
    for a in answers:
        if a.question_type in type_counts:
            type_counts[a.question_type] += 1
    full_mark = max(max(type_counts.values()), MIN_FULL_MARK)
    return [
        RadarEntry(subject=RADAR_LABELS[t], A=type_counts[t], full_mark=full_mark)
        for t in QUESTION_TYPES
    ]


def pie_data(answers: Sequence[WrongAnswerRecord]) -> List[PieEntry]:
    level_counts = {level: 0 for level in PROBLEM_LEVELS}
    for a in answers:
        if a.problem_level in level_counts:
            level_counts[a.problem_level] += 1
    return [PieEntry(name=level, value=count) for level, count in level_counts.items()]


def recent_wrongs(answers: Sequence[WrongAnswerRecord]) -> List[WrongAnswerRecord]:
    # sorted() is stable with reverse=True, so same-day records keep input order
    return sorted(answers, key=lambda a: a.date, reverse=True)[:RECENT_LIMIT]


def compute_stats(answers: Sequence[WrongAnswerRecord]) -> AnalysisStats:
    total = len(answers)
    resolved = sum(1 for a in answers if a.is_resolved)
    counts = chapter_counts(answers)
    return AnalysisStats(
        total_wrong=total,
        resolved=resolved,
        resolution_rate=resolution_rate(resolved, total),
        worst_chapter=worst_chapter(counts),
        radar_data=radar_data(answers),
        bar_data=bar_data(counts),
        pie_data=pie_data(answers),
        recent_wrongs=recent_wrongs(answers),
    )
