from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..errors import RemoteError
from ..record_store import RecordStore, get_record_store, load_records, load_students
from ..schemas import FilterCriteria, NewWrongAnswer, WrongAnswerRecord

logger = logging.getLogger(__name__)

router = APIRouter(tags=["answers"])


def filter_criteria(
    student_id: Optional[str] = Query(default=None, alias="studentId"),
    grade: Optional[int] = Query(default=None, ge=1, le=6),
    term: Optional[int] = Query(default=None, ge=1, le=2),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    chapter: Optional[str] = Query(default=None),
) -> FilterCriteria:
    return FilterCriteria(
        student_id=student_id or None,
        grade=grade,
        term=term,
        start_date=start_date or None,
        end_date=end_date or None,
        chapter=chapter or None,
    )


@router.get("/answers", response_model=List[WrongAnswerRecord])
async def list_answers(
    criteria: FilterCriteria = Depends(filter_criteria),
    store: RecordStore = Depends(get_record_store),
):
    return await load_records(store, criteria)


@router.post("/answers", response_model=WrongAnswerRecord, status_code=201)
async def save_answer(answer: NewWrongAnswer, store: RecordStore = Depends(get_record_store)):
    try:
        return await store.save(answer)
    except RemoteError as e:
        logger.warning("saving wrong answer failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/answers/{record_id}/resolve")
async def resolve_answer(record_id: str, store: RecordStore = Depends(get_record_store)):
    try:
        await store.set_resolved(record_id)
    except RemoteError as e:
        logger.warning("resolving %s failed: %s", record_id, e, extra={"record_id": record_id})
        raise HTTPException(status_code=502, detail=str(e))
    return {"id": record_id, "isResolved": True}


@router.get("/students", response_model=List[str])
async def list_students(store: RecordStore = Depends(get_record_store)):
    return await load_students(store)
