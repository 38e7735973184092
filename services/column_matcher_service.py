from typing import Dict, List, Optional, Tuple

from models.common_models import ProcessedSheet


def match_columns(question: str, sheets: Dict[str, ProcessedSheet]) -> Tuple[Optional[str], List[str]]:
    """
    Find the headers mentioned in the question and the sheet to answer from.

    The first sheet is the default; every sheet holding a mentioned header
    replaces it, so the last matching sheet wins. A header matches either
    verbatim or with underscores read as spaces. Matched names are returned
    once each, in first-seen order.
    """
    text = question.lower()
    chosen = next(iter(sheets), None)
    matched: List[str] = []

    for sheet_name, sheet in sheets.items():
        for header in sheet.headers:
            name = header.lower()
            if name in text or name.replace("_", " ") in text:
                chosen = sheet_name
                if header not in matched:
                    matched.append(header)

    return chosen, matched
