from __future__ import annotations

from typing import Iterable, List, Optional

from .schemas import ALL_CHAPTERS, FilterCriteria, WrongAnswerRecord


def apply_filters(records: Iterable[WrongAnswerRecord], criteria: Optional[FilterCriteria] = None) -> List[WrongAnswerRecord]:
    """Keep the records matching every criterion that is set, in their original order.

    ``student_id`` is a substring match, date bounds are inclusive and compared
    as ISO strings, and a chapter of ``"전체"`` means no chapter filter.
    """
    answers = list(records)
    if criteria is None:
        return answers

    if criteria.student_id:
        answers = [a for a in answers if criteria.student_id in a.student_id]
    if criteria.grade is not None:
        answers = [a for a in answers if a.grade == criteria.grade]
    if criteria.term is not None:
        answers = [a for a in answers if a.term == criteria.term]
    if criteria.start_date:
        answers = [a for a in answers if a.date >= criteria.start_date]
    if criteria.end_date:
        answers = [a for a in answers if a.date <= criteria.end_date]
    if criteria.chapter and criteria.chapter != ALL_CHAPTERS:
        answers = [a for a in answers if a.chapter == criteria.chapter]
    return answers
