from typing import Any, Dict, List, Optional, Sequence

from config import STRICT_INTENTS, TOP_N
from models.common_models import ChartSpec, Intent, ProcessedSheet, QueryResponse, Record
from services.stats_service import numeric_values
from services.type_inference_service import parse_date, to_number


def _present(value: Any) -> bool:
    return value is not None and value != ""


def aggregate_column(values: Sequence[Any]) -> Dict[str, Any]:
    """total/average/count/max/min over the values that parse as finite numbers."""
    numbers = numeric_values(values)
    if numbers.empty:
        return {"total": 0.0, "average": None, "count": 0, "max": None, "min": None}
    return {
        "total": float(numbers.sum()),
        "average": float(numbers.mean()),
        "count": int(numbers.count()),
        "max": float(numbers.max()),
        "min": float(numbers.min()),
    }


def _summary_response(sheet: ProcessedSheet) -> QueryResponse:
    summary = sheet.summary
    text = (
        "Here's a summary of your data:\n\n"
        f"• **{summary.row_count}** total rows\n"
        f"• **{summary.column_count}** columns\n"
        f"• **{len(summary.numeric_columns)}** numeric columns: {', '.join(summary.numeric_columns)}\n"
        f"• **{len(summary.text_columns)}** text columns: {', '.join(summary.text_columns)}"
    )
    return QueryResponse(type="summary", text=text, table=sheet.data[:5])


def _aggregation_response(sheet: ProcessedSheet) -> QueryResponse:
    aggregations = {
        col: aggregate_column([row.get(col) for row in sheet.data])
        for col in sheet.summary.numeric_columns
    }

    chart_data = []
    table = []
    for col, stats in aggregations.items():
        average = round(stats["average"], 2) if stats["average"] is not None else None
        chart_data.append({"name": col, "total": stats["total"], "average": average})
        table.append({
            "Column": col,
            "Total": stats["total"],
            "Average": average,
            "Count": stats["count"],
            "Max": stats["max"],
            "Min": stats["min"],
        })

    return QueryResponse(
        type="aggregation",
        text="Here are the key statistics for your numeric data:",
        chart=ChartSpec(kind="bar", data=chart_data, x_key="name", y_key="total"),
        table=table,
    )


def _ranking_response(sheet: ProcessedSheet, top_n: int) -> QueryResponse:
    num_col = sheet.summary.numeric_columns[0]
    label_col = sheet.headers[0]

    def sort_key(row: Record):
        value = to_number(row.get(num_col))
        # rows without a number go last, in their original order
        return (value is None, -(value or 0.0))

    top_rows = sorted(sheet.data, key=sort_key)[:top_n]

    chart_data = []
    for index, row in enumerate(top_rows):
        label = row.get(label_col)
        chart_data.append({
            "name": label if _present(label) else f"Row {index + 1}",
            "value": to_number(row.get(num_col)) or 0,
        })

    return QueryResponse(
        type="ranking",
        text=f"Here are the top entries by {num_col}:",
        chart=ChartSpec(kind="bar", data=chart_data, x_key="name", y_key="value"),
        table=top_rows,
    )


def _trend_response(sheet: ProcessedSheet, top_n: int) -> QueryResponse:
    date_col = sheet.summary.date_columns[0]
    num_col = sheet.summary.numeric_columns[0]

    points = []
    for row in sheet.data:
        if not (_present(row.get(date_col)) and _present(row.get(num_col))):
            continue
        day = parse_date(row[date_col])
        if day is None:
            continue
        points.append({"date": day.isoformat(), "value": to_number(row[num_col]) or 0})
    points.sort(key=lambda p: p["date"])

    return QueryResponse(
        type="trend",
        text=f"Showing trend of {num_col} over {date_col}:",
        chart=ChartSpec(kind="line", data=points, x_key="date", y_key="value"),
        table=points[:top_n],
    )


def _data_response(sheet: ProcessedSheet, matched: List[str], top_n: int) -> QueryResponse:
    if matched:
        table = [{col: row.get(col) for col in matched} for row in sheet.data]
        text = f"Here's the data for columns: {', '.join(matched)}:"
    else:
        table = sheet.data[:top_n]
        text = "Here's the data:"
    return QueryResponse(type="data", text=text, table=table)


def _unsupported_response(intent: Intent, needs: str) -> QueryResponse:
    return QueryResponse(
        type="unsupported",
        text=f"A {intent} answer needs {needs}, and this sheet has none.",
    )


def generate_response(
    intent: Intent,
    sheet: ProcessedSheet,
    matched: List[str],
    strict: Optional[bool] = None,
    top_n: int = TOP_N,
) -> QueryResponse:
    """
    Compute the answer for a classified question against one sheet.

    aggregation, topbottom and trend fall back to the raw-data answer when
    the sheet lacks the columns they need, unless `strict` is set, in which
    case an `unsupported` response is returned instead.
    """
    if strict is None:
        strict = STRICT_INTENTS
    summary = sheet.summary

    if intent == "summary":
        return _summary_response(sheet)

    if intent == "aggregation":
        if summary.numeric_columns:
            return _aggregation_response(sheet)
        if strict:
            return _unsupported_response(intent, "a numeric column")

    elif intent == "topbottom":
        if summary.numeric_columns:
            return _ranking_response(sheet, top_n)
        if strict:
            return _unsupported_response(intent, "a numeric column")

    elif intent == "trend":
        if summary.date_columns and summary.numeric_columns:
            return _trend_response(sheet, top_n)
        if strict:
            return _unsupported_response(intent, "a date column and a numeric column")

    return _data_response(sheet, matched, top_n)
