from datetime import date, datetime, time
from typing import Any, Dict, List, Optional, Sequence
import math
import re
import numbers
import warnings

import pandas as pd

from config import TYPE_SAMPLE_SIZE, TYPE_THRESHOLD
from models.common_models import DataType, Record

# pandas warns when it has to fall back to per-value date parsing
warnings.filterwarnings("ignore", category=UserWarning)

_TIME_ONLY = re.compile(r"^\d{1,2}(:\d{2}){0,2}(\.\d+)?\s*([ap]\.?m\.?)?$", re.I)
MIN_YEAR = 1000


def to_number(value: Any) -> Optional[float]:
    """Return a finite float for numbers and numeric strings, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_date(value: Any) -> Optional[date]:
    """
    Calendar date for date-like values. Numbers, times of day and strings
    without a digit ("May", "a") are never dates.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, time):
        return None
    if not isinstance(value, str) or not any(ch.isdigit() for ch in value):
        return None
    text = value.strip()
    # a bare time of day would be dated today
    if _TIME_ONLY.match(text):
        return None
    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    # ordinals like "1st" come back with a filled-in year 1
    if parsed.year < MIN_YEAR:
        return None
    return parsed.date()


def infer_column_type(values: Sequence[Any], threshold: float = TYPE_THRESHOLD) -> DataType:
    sample = [v for v in values if v is not None and v != ""]
    if not sample:
        return "text"

    numeric_count = sum(1 for v in sample if to_number(v) is not None)
    if numeric_count / len(sample) > threshold:
        return "number"

    date_count = sum(1 for v in sample if parse_date(v) is not None)
    if date_count / len(sample) > threshold:
        return "date"

    return "text"


def infer_types(data: List[Record], headers: List[str], sample_size: int = TYPE_SAMPLE_SIZE) -> Dict[str, DataType]:
    """Classify every column from the first `sample_size` cleaned rows."""
    sample_rows = data[:sample_size]
    return {
        header: infer_column_type([row.get(header) for row in sample_rows])
        for header in headers
    }
