from typing import Any, Optional
import math
import numbers
import re

from models.common_models import Record

_NUMERIC_LITERAL = re.compile(r"^-?\d*\.?\d+$")


def clean_value(value: Any) -> Any:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, numbers.Real):
        # NaN/inf are the decoder's way of saying "no value"
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        trimmed = value.strip()
        if _NUMERIC_LITERAL.match(trimmed):
            number = float(trimmed)
            if math.isfinite(number):
                return int(trimmed) if "." not in trimmed else number
        return trimmed
    return str(value).strip()


def clean_row(row: Record) -> Optional[Record]:
    """
    Coerce the cells of one row; return None when nothing is left in it.
    """
    cleaned = {header: clean_value(value) for header, value in row.items()}
    if all(v is None or v == "" for v in cleaned.values()):
        return None
    return cleaned
