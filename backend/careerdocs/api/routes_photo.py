"""
Entry point B: headshot restyling.
"""
import logging
from typing import List

from fastapi import APIRouter, Request

from ..ai_services import get_ai_service
from ..errors import translate
from ..schemas import PhotoOut, PhotoRequest, PhotoStyle, PhotoStyleOut
from .common import ERROR_RESPONSES, error_response, preflight_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generate-photo", tags=["generate-photo"])


@router.options("")
def generate_photo_preflight(request: Request):
    return preflight_response(request)


@router.get("/styles", response_model=List[PhotoStyleOut])
def list_photo_styles():
    return [PhotoStyleOut(id=s.value, description=s.description) for s in PhotoStyle]


@router.post("", response_model=PhotoOut, response_model_exclude_none=True, responses=ERROR_RESPONSES)
async def generate_photo(body: PhotoRequest, request: Request):
    try:
        service = get_ai_service()
        return await service.generate_photo(body.image_base64, body.style)
    except Exception as e:
        logger.error(f"Error in generate-photo: {e}")
        return error_response(translate(error=e), request)
