import logging
from fastapi import APIRouter, HTTPException
from app.models.schemas import Definition, SummarizeRequest
from app.services.summary import summarize

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/summarize", response_model=Definition, response_model_exclude_none=True)
def summarize_definition(payload: SummarizeRequest):
    coordinate = payload.coordinate.model_dump(exclude_none=True)
    try:
        return summarize(
            coordinate,
            payload.facts,
            contributors=payload.contributors,
            policy=payload.policy,
        )
    except ValueError as e:
        logger.warning("Summarization rejected for %s: %s", coordinate, e)
        raise HTTPException(status_code=400, detail=str(e))
