from typing import List, Optional

from fastapi import APIRouter, HTTPException

from ..curriculum import chapters_for

router = APIRouter(prefix="/curriculum", tags=["curriculum"])


@router.get("", response_model=List[str])
def chapters(grade: Optional[int] = None, term: Optional[int] = None):
    try:
        return chapters_for(grade, term)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
