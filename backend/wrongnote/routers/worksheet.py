from fastapi import APIRouter, Depends

from ..record_store import RecordStore, get_record_store, load_records
from ..schemas import FilterCriteria, Worksheet
from ..worksheet import build_worksheet
from .answers import filter_criteria

router = APIRouter(prefix="/worksheet", tags=["worksheet"])


@router.get("", response_model=Worksheet)
async def worksheet(
    criteria: FilterCriteria = Depends(filter_criteria),
    store: RecordStore = Depends(get_record_store),
):
    """Unresolved answers matching the filters, four per printed page."""
    return build_worksheet(await load_records(store, criteria))
