from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from models.common_models import ColumnStat, DataType, Record, Summary


def numeric_values(values: Sequence[Any]) -> pd.Series:
    """Finite numbers among `values`; anything else is dropped."""
    series = pd.to_numeric(pd.Series(list(values), dtype=object), errors="coerce")
    return series.replace([np.inf, -np.inf], np.nan).dropna().astype(float)


def build_summary(data: List[Record], headers: List[str], types: Dict[str, DataType]) -> Summary:
    summary = Summary(row_count=len(data), column_count=len(headers))

    for header in headers:
        series = pd.Series([row.get(header) for row in data], dtype=object)
        values = series[series.notna() & (series != "")]
        col_type = types[header]

        stat = ColumnStat(
            type=col_type,
            non_null_count=int(values.count()),
            null_count=len(data) - int(values.count()),
        )

        # -------------- NUMERICAL ----------------
        if col_type == "number":
            summary.numeric_columns.append(header)
            numbers = numeric_values(values)
            if numbers.count() > 0:
                stat.min = float(numbers.min())
                stat.max = float(numbers.max())
                stat.avg = float(numbers.mean())

        # -------------- TEXT ----------------
        elif col_type == "text":
            summary.text_columns.append(header)
            stat.unique_values = int(values.nunique())

        # -------------- DATE ----------------
        else:
            summary.date_columns.append(header)

        summary.columns[header] = stat

    return summary


def completeness(sheet_rows: int, null_counts: Sequence[int]) -> float:
    """Percentage of filled cells in a sheet of `sheet_rows` x len(null_counts)."""
    cells = sheet_rows * len(null_counts)
    if cells == 0:
        return 0.0
    return round((cells - sum(null_counts)) / cells * 100, 1)
