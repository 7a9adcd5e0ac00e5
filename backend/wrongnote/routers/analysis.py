from fastapi import APIRouter, Depends

from ..record_store import RecordStore, get_record_store, load_records
from ..schemas import AnalysisStats, FilterCriteria
from ..stats import compute_stats
from .answers import filter_criteria

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.get("/stats", response_model=AnalysisStats)
async def analysis_stats(
    criteria: FilterCriteria = Depends(filter_criteria),
    store: RecordStore = Depends(get_record_store),
):
    return compute_stats(await load_records(store, criteria))
