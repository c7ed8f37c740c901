# app/handler.py
"""
Request handling independent of the web framework.

Each handler takes the raw request body (string, bytes or an already-parsed
object), validates it, runs one operation and returns a HandlerResponse that
the HTTP layer renders as-is.
"""

import json
from dataclasses import dataclass, field
from email.utils import formatdate
from typing import Any, Dict

from app.analysis import AnalysisError, ProductAnalyzer
from app.config import DEFAULT_INDUSTRY, get_logger
from app.schemas import ErrorResponse, SuccessResponse
from app.taxonomy import CategoryInputError, process_categories

logger = get_logger(__name__)


@dataclass
class HandlerResponse:
    status_code: int
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)


class BadRequest(Exception):
    pass


def _error(status_code: int, message: str) -> HandlerResponse:
    return HandlerResponse(status_code, ErrorResponse(error=message).model_dump())


def _success(details: Dict[str, Any]) -> HandlerResponse:
    headers = {
        "Content-Type": "application/json",
        "Vary": "*",
        "Cache-Control": "no-cache",
        "Last-Modified": formatdate(usegmt=True),
    }
    body = SuccessResponse(product_details=details).model_dump(by_alias=True)
    return HandlerResponse(200, body, headers)


def parse_body(body: Any) -> Dict[str, Any]:
    """Return the request body as a non-empty dict or raise BadRequest."""
    if body is None or body == "" or body == b"":
        raise BadRequest("Missing request body")

    if isinstance(body, (str, bytes, bytearray)):
        try:
            body = json.loads(body)
        except (ValueError, RecursionError):
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            raise BadRequest("Invalid JSON format in request body") from None

    if not isinstance(body, dict) or not body:
        raise BadRequest("Request body must be a valid JSON object")
    return body


async def handle_analyze(
    body: Any,
    analyzer: ProductAnalyzer,
    default_industry: str = DEFAULT_INDUSTRY,
) -> HandlerResponse:
    logger.debug(f"Received analyze body: {body!r}")
    try:
        record = parse_body(body)
    except BadRequest as e:
        logger.warning(f"Rejected analyze request: {e}")
        return _error(400, str(e))

    logger.info(f"Parsed request body: {record}")

    record = dict(record)
    industry = record.pop("industry", None)
    if not isinstance(industry, str) or not industry.strip():
        industry = default_industry
    if not record:
        logger.warning("Rejected analyze request: no product fields besides industry")
        return _error(400, "Request body must be a valid JSON object")

    try:
        details = await analyzer.analyze(record, industry)
    except AnalysisError as e:
        logger.error(f"Error processing request: {e}")
        return _error(500, str(e))

    return _success(details.model_dump(by_alias=True))


def handle_categories(body: Any) -> HandlerResponse:
    """
    Offline categorization from attributes already present in the request.

    Body shape: {"categories": [...], "product": {...}}. Without "product",
    the remaining top-level fields are used as the record.
    """
    logger.debug(f"Received categories body: {body!r}")
    try:
        payload = parse_body(body)
    except BadRequest as e:
        logger.warning(f"Rejected categories request: {e}")
        return _error(400, str(e))

    payload = dict(payload)
    categories = payload.pop("categories", None)
    record = payload.pop("product", payload)
    if not isinstance(record, dict):
        logger.warning("Rejected categories request: product is not an object")
        return _error(400, "Request body must be a valid JSON object")

    try:
        result = process_categories(categories, record)
    except CategoryInputError as e:
        logger.warning(f"Rejected categories request: {e}")
        return _error(400, str(e))

    return _success(result.model_dump(by_alias=True))
