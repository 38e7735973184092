import logging
from typing import Any, Dict, List, Optional, Sequence

from models.common_models import ProcessedSheet, Record, SheetInfo
from services.cleaning_service import clean_row
from services.errors import EmptyWorkbookError
from services.normalize_service import build_headers, is_blank
from services.stats_service import build_summary, completeness
from services.type_inference_service import infer_types

logger = logging.getLogger(__name__)

RawSheet = List[List[Any]]
Workbook = Dict[str, RawSheet]


def _row_is_empty(row: Sequence[Any]) -> bool:
    return all(is_blank(cell) for cell in row)


def _last_filled_index(row: Sequence[Any]) -> int:
    for index in range(len(row) - 1, -1, -1):
        if not is_blank(row[index]):
            return index
    return -1


def process_sheet(raw_rows: RawSheet) -> Optional[ProcessedSheet]:
    """
    Turn one raw 2-D sheet into a ProcessedSheet.
    Returns None when the sheet has no header row or no surviving data rows.
    """
    header_index = 0
    while header_index < len(raw_rows) and _row_is_empty(raw_rows[header_index]):
        header_index += 1
    if header_index >= len(raw_rows):
        return None

    body = raw_rows[header_index + 1:]
    if not body:
        return None

    # Drop trailing columns that hold nothing in any data row
    last_index = max(_last_filled_index(row) for row in body)
    headers = build_headers(raw_rows[header_index])[: last_index + 1]
    if not headers:
        return None

    data: List[Record] = []
    for row in body:
        if _row_is_empty(row):
            continue
        record = {
            header: (row[i] if i < len(row) else "")
            for i, header in enumerate(headers)
        }
        cleaned = clean_row(record)
        if cleaned is not None:
            data.append(cleaned)

    if not data:
        return None

    types = infer_types(data, headers)
    return ProcessedSheet(
        data=data,
        headers=headers,
        types=types,
        row_count=len(data),
        summary=build_summary(data, headers, types),
    )


def ingest_workbook(workbook: Workbook, file_name: str = "") -> Dict[str, ProcessedSheet]:
    """
    Process every sheet in workbook order, keeping only sheets with data.
    Raises EmptyWorkbookError when no sheet yields a row.
    """
    processed: Dict[str, ProcessedSheet] = {}

    for sheet_name, raw_rows in workbook.items():
        sheet = process_sheet(raw_rows)
        if sheet is None:
            logger.info("Skipping sheet '%s': no data rows", sheet_name)
            continue
        processed[sheet_name] = sheet

    if not processed:
        raise EmptyWorkbookError(file_name)

    logger.info(
        "Ingested %d sheet(s) from '%s' (%d rows)",
        len(processed),
        file_name,
        sum(s.row_count for s in processed.values()),
    )
    return processed


def sheet_infos(sheets: Dict[str, ProcessedSheet]) -> List[SheetInfo]:
    return [
        SheetInfo(
            sheet_name=name,
            n_rows=sheet.row_count,
            n_cols=len(sheet.headers),
            completeness=completeness(
                sheet.row_count, [stat.null_count for stat in sheet.summary.columns.values()]
            ),
        )
        for name, sheet in sheets.items()
    ]
