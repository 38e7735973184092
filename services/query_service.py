import logging
from typing import Dict, Optional

from models.common_models import ProcessedSheet, QueryResponse
from services.column_matcher_service import match_columns
from services.errors import QueryEvaluationError
from services.intent_service import classify_query
from services.response_service import generate_response

logger = logging.getLogger(__name__)


def answer_query(
    sheets: Optional[Dict[str, ProcessedSheet]],
    question: str,
    strict: Optional[bool] = None,
) -> Optional[QueryResponse]:
    """
    Classify the question, pick the sheet and columns it refers to and build
    the answer. Returns None when there is no sheet to answer from.
    """
    if not sheets:
        return None

    try:
        intent = classify_query(question)
        sheet_name, matched = match_columns(question, sheets)
        sheet = sheets.get(sheet_name) if sheet_name is not None else None
        if sheet is None:
            return None

        logger.debug("Question intent=%s sheet=%s columns=%s", intent, sheet_name, matched)
        return generate_response(intent, sheet, matched, strict=strict)
    except Exception as e:
        logger.exception("Failed to answer question %r", question)
        raise QueryEvaluationError(str(e)) from e
