from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field

DataType = Literal["number", "text", "date"]
Intent = Literal["summary", "trend", "comparison", "aggregation", "filter", "topbottom", "general"]
ChartKind = Literal["line", "bar", "pie"]
MessageKind = Literal["system", "user", "ai", "error"]

Record = Dict[str, Any]


class ColumnStat(BaseModel):
    type: DataType
    non_null_count: int
    null_count: int
    min: Optional[float] = None
    max: Optional[float] = None
    avg: Optional[float] = None          # numeric columns only
    unique_values: Optional[int] = None  # text columns only


class Summary(BaseModel):
    row_count: int
    column_count: int
    columns: Dict[str, ColumnStat] = {}
    numeric_columns: List[str] = []
    text_columns: List[str] = []
    date_columns: List[str] = []


class ProcessedSheet(BaseModel):
    data: List[Record]
    headers: List[str]
    types: Dict[str, DataType]
    row_count: int
    summary: Summary


class SheetInfo(BaseModel):
    sheet_name: str
    n_rows: int
    n_cols: int
    completeness: float  # % of non-null cells


class ChartSpec(BaseModel):
    kind: ChartKind
    data: List[Record]
    x_key: str
    y_key: str


class QueryResponse(BaseModel):
    type: str  # summary, aggregation, ranking, trend, data or unsupported
    text: str
    chart: Optional[ChartSpec] = None
    table: Optional[List[Record]] = None


class Message(BaseModel):
    kind: MessageKind
    content: str
    chart: Optional[ChartSpec] = None
    table: Optional[List[Record]] = None
    timestamp: datetime = Field(default_factory=datetime.now)


class PreviewRequest(BaseModel):
    session_id: str
    sheet_name: Optional[str] = None
    n_rows: int = 10


class StatsRequest(BaseModel):
    session_id: str
    sheet_name: str


class QueryRequest(BaseModel):
    session_id: str
    question: str
