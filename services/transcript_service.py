from typing import Any, Dict, List, Optional

from config import TABLE_DISPLAY_ROWS
from models.common_models import Message, MessageKind, QueryResponse, Record

FALLBACK_ANSWER = (
    "I understand your question, but I need more specific information to provide a helpful answer. "
    "Could you try asking about specific columns or data aspects?"
)
QUERY_ERROR_TEXT = "Sorry, I encountered an error processing your question. Please try rephrasing it."


class Transcript:
    """Append-only list of chat messages."""

    def __init__(self):
        self._messages: List[Message] = []

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def append(self, kind: MessageKind, content: str, **extra) -> Message:
        message = Message(kind=kind, content=content, **extra)
        self._messages.append(message)
        return message

    def add_response(self, response: Optional[QueryResponse]) -> Message:
        if response is None:
            return self.append("ai", FALLBACK_ANSWER)
        return self.append("ai", response.text or FALLBACK_ANSWER, chart=response.chart, table=response.table)


def upload_success_text(file_name: str, n_sheets: int) -> str:
    return (
        f'File "{file_name}" processed successfully! Found {n_sheets} sheet(s) with data. '
        "You can now ask questions about your data in natural language."
    )


def upload_error_text(file_name: str, reason: str) -> str:
    return f'Error processing file "{file_name}": {reason}. Please ensure it\'s a valid Excel file with data.'


def format_cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:,.0f}" if value.is_integer() else f"{value:,.2f}".rstrip("0").rstrip(".")
    return str(value)


def table_preview(rows: Optional[List[Record]], max_rows: int = TABLE_DISPLAY_ROWS) -> Dict[str, Any]:
    """
    Rows to display for a table, columns taken from the first row, plus an
    overflow notice when the table is longer than `max_rows`.
    """
    if not rows:
        return {"columns": [], "rows": [], "notice": None}

    columns = list(rows[0].keys())
    shown = [
        {col: format_cell(row.get(col)) for col in columns}
        for row in rows[:max_rows]
    ]
    notice = f"Showing {max_rows} of {len(rows)} rows" if len(rows) > max_rows else None
    return {"columns": columns, "rows": shown, "notice": notice}
