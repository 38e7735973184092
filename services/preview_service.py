from typing import Any, Dict, Optional
from models.common_models import ProcessedSheet


def get_preview_rows(sheets: Dict[str, ProcessedSheet], sheet_name: Optional[str] = None, n_rows: int = 10) -> Dict[str, Any]:
    """First rows of a sheet; the first sheet with data when no name is given."""
    if not sheets:
        raise KeyError("No data loaded for this session.")
    if sheet_name is None:
        sheet_name = next(iter(sheets))
    if sheet_name not in sheets:
        raise KeyError(f"Sheet '{sheet_name}' not found for this session.")

    sheet = sheets[sheet_name]
    return {
        "sheet_name": sheet_name,
        "headers": sheet.headers,
        "rows": sheet.data[:n_rows],
        "total_rows": sheet.row_count,
    }
