"""
Turns gateway response envelopes into the stable result shapes the UI reads.
"""
import json
import logging
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .errors import EmptyCompletion, MalformedStructuredOutput
from .prompts import parse_kind
from .schemas import AnalysisOutcome, AnalysisResult, ParsedAnalysis, RawAnalysis, RequestKind

logger = logging.getLogger(__name__)

FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")

NO_IMAGE_MESSAGE = "Photo processed. For best results, upload a clear, well-lit face photo."


def _first_message(body: Any) -> Dict[str, Any]:
    try:
        message = body["choices"][0]["message"]
    except (KeyError, IndexError, TypeError):
        return {}
    return message if isinstance(message, dict) else {}


def extract_completion_text(body: Any) -> str:
    content = _first_message(body).get("content")
    if not isinstance(content, str) or not content:
        raise EmptyCompletion()
    return content


def _load_analysis(candidate: str) -> AnalysisResult:
    try:
        return AnalysisResult.model_validate(json.loads(candidate.strip()))
    except (json.JSONDecodeError, ValidationError) as e:
        raise MalformedStructuredOutput(str(e)) from e


def parse_analysis(text: str) -> AnalysisOutcome:
    """Strict JSON first, then the first fenced block, then the raw text."""
    try:
        return ParsedAnalysis(analysis=_load_analysis(text))
    except MalformedStructuredOutput:
        pass

    match = FENCED_BLOCK.search(text)
    if match:
        try:
            return ParsedAnalysis(analysis=_load_analysis(match.group(1)))
        except MalformedStructuredOutput as e:
            logger.warning(f"Failed to parse analysis JSON: {e}")
    else:
        logger.warning("Analysis output is not JSON, returning raw text")
    return RawAnalysis(text=text)


def normalize_text(body: Any) -> Dict[str, Any]:
    return {"result": extract_completion_text(body)}


def normalize_analysis(body: Any) -> Dict[str, Any]:
    outcome = parse_analysis(extract_completion_text(body))
    if isinstance(outcome, ParsedAnalysis):
        return {"result": outcome.analysis.model_dump()}
    return {"result": outcome.text}


def extract_image_url(body: Any) -> Optional[str]:
    images = _first_message(body).get("images") or []
    try:
        url = images[0]["image_url"]["url"]
    except (KeyError, IndexError, TypeError):
        return None
    return url or None


def normalize_photo(body: Any, original_image: str) -> Dict[str, Any]:
    url = extract_image_url(body)
    if url is None:
        # The model may decline to edit some photos; echo the upload back
        logger.info("No image generated, returning original")
        return {"image": original_image, "message": NO_IMAGE_MESSAGE}
    return {"image": url}


def normalize(kind: Any, body: Any, original_image: Optional[str] = None) -> Dict[str, Any]:
    kind = parse_kind(kind)
    if kind is RequestKind.ANALYZE_RESUME:
        return normalize_analysis(body)
    if kind is RequestKind.GENERATE_PHOTO:
        return normalize_photo(body, original_image or "")
    return normalize_text(body)
