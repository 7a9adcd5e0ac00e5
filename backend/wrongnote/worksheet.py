from __future__ import annotations

from typing import Sequence

from .schemas import WrongAnswerRecord, Worksheet, WorksheetPage

PROBLEMS_PER_PAGE = 4


def build_worksheet(answers: Sequence[WrongAnswerRecord], per_page: int = PROBLEMS_PER_PAGE) -> Worksheet:
    """Group unresolved answers into printable pages, keeping their order."""
    if per_page < 1:
        raise ValueError("per_page must be at least 1")
    unresolved = [a for a in answers if not a.is_resolved]
    pages = [
        WorksheetPage(number=i // per_page + 1, records=unresolved[i:i + per_page])
        for i in range(0, len(unresolved), per_page)
    ]
    return Worksheet(total=len(unresolved), pages=pages)
