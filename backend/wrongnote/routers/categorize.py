from fastapi import APIRouter, HTTPException

from ..categorize import categorize_image
from ..errors import CategorizationError
from ..schemas import CategorizationRequest, CategorizationResult

router = APIRouter(tags=["categorize"])


@router.post("/categorize", response_model=CategorizationResult)
async def categorize(req: CategorizationRequest):
    # Failure here leaves saving untouched; the form falls back to manual tags
    try:
        return await categorize_image(req.image_base64, req.mime_type)
    except CategorizationError as e:
        raise HTTPException(status_code=502, detail=f"AI categorization failed: {e}")
