"""
Entry point A: text generation and resume analysis.
"""
import logging

from fastapi import APIRouter, Request

from ..ai_services import get_ai_service
from ..errors import translate
from ..schemas import ResultOut, ResumeAIRequest
from .common import ERROR_RESPONSES, error_response, preflight_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resume-ai", tags=["resume-ai"])


@router.options("")
def resume_ai_preflight(request: Request):
    return preflight_response(request)


@router.post("", response_model=ResultOut, responses=ERROR_RESPONSES)
async def resume_ai(body: ResumeAIRequest, request: Request):
    try:
        service = get_ai_service()
        return await service.generate(body.type, body.data)
    except Exception as e:
        logger.error(f"Error in resume-ai: {e}")
        return error_response(translate(error=e), request)
