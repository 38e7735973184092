from datetime import date, datetime, time
from typing import Any, Dict, List
import io
import logging

import numpy as np
import pandas as pd

from services.errors import WorkbookDecodeError

logger = logging.getLogger(__name__)


def _to_cell(value: Any) -> Any:
    """Map a pandas cell onto number | string | "" ."""
    if value is None:
        return ""
    if isinstance(value, (pd.Timestamp, datetime)):
        if pd.isna(value):
            return ""
        if value.hour == value.minute == value.second == value.microsecond == 0:
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (bool, np.bool_)):
        return str(bool(value))
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, (float, np.floating)):
        return "" if np.isnan(value) else float(value)
    if isinstance(value, (int, str)):
        return value
    if pd.isna(value):
        return ""
    return str(value)


def read_workbook(content: bytes) -> Dict[str, List[List[Any]]]:
    """
    Decode workbook bytes into {sheet name: rows of cells}, in workbook order.
    Blank cells come back as empty strings.
    """
    workbook: Dict[str, List[List[Any]]] = {}
    try:
        xls = pd.ExcelFile(io.BytesIO(content))
        frames = [(name, xls.parse(name, header=None, dtype=object)) for name in xls.sheet_names]
    except Exception as e:
        raise WorkbookDecodeError(f"Could not read workbook: {e}") from e

    for sheet_name, df in frames:
        workbook[str(sheet_name)] = [
            [_to_cell(v) for v in row]
            for row in df.itertuples(index=False, name=None)
        ]
        logger.debug("Decoded sheet '%s': %d rows", sheet_name, df.shape[0])

    return workbook
