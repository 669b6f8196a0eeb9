from fastapi import APIRouter, Request

from app.models.models import MatchResult
from app.models.schemas import MatchRequest
from app.services.matching import compute_match
from app.utils.config import get_scoring_settings
from app.utils.logging_config import get_logger, log_api_call

router = APIRouter()
logger = get_logger(__name__)


@router.post("/", response_model=MatchResult)
@log_api_call("match_preview")
async def preview_match(request: Request, payload: MatchRequest):
    """Score a single profile/job pair; a missing side scores 0"""
    result = compute_match(payload.profile, payload.job, settings=get_scoring_settings())
    logger.debug(f"Match preview scored {result.score}", extra={"request_id": getattr(request.state, "request_id", None)})
    return result
