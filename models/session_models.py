from typing import Dict, Literal, Optional, Union
from pydantic import BaseModel

from models.common_models import ProcessedSheet


class EmptyState(BaseModel):
    status: Literal["empty"] = "empty"


class LoadedState(BaseModel):
    status: Literal["loaded"] = "loaded"
    file_name: str
    sheets: Dict[str, ProcessedSheet]


class LoadFailedState(BaseModel):
    """The selected file failed to ingest; `previous` is still analyzable."""
    status: Literal["load_failed"] = "load_failed"
    file_name: str
    reason: str
    previous: Optional[LoadedState] = None


SessionState = Union[EmptyState, LoadedState, LoadFailedState]
