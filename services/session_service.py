import logging
import uuid
from typing import Dict, Optional

from models.common_models import ProcessedSheet, QueryResponse
from models.session_models import EmptyState, LoadedState, LoadFailedState, SessionState
from services.errors import IngestionError
from services.ingestion_service import Workbook, ingest_workbook
from services.query_service import answer_query
from services.transcript_service import Transcript

logger = logging.getLogger(__name__)


class AnalysisSession:
    """
    Holds the dataset currently open for analysis.

    A successful ingest replaces the whole dataset. A failed one moves the
    session to LoadFailedState, which keeps the previous dataset analyzable
    while recording which file was selected.
    """

    def __init__(self, strict_intents: Optional[bool] = None):
        self.state: SessionState = EmptyState()
        self.strict_intents = strict_intents

    @property
    def sheets(self) -> Optional[Dict[str, ProcessedSheet]]:
        if isinstance(self.state, LoadedState):
            return self.state.sheets
        if isinstance(self.state, LoadFailedState) and self.state.previous is not None:
            return self.state.previous.sheets
        return None

    @property
    def file_name(self) -> Optional[str]:
        return getattr(self.state, "file_name", None)

    def _last_loaded(self) -> Optional[LoadedState]:
        if isinstance(self.state, LoadedState):
            return self.state
        if isinstance(self.state, LoadFailedState):
            return self.state.previous
        return None

    def ingest(self, workbook: Workbook, file_name: str) -> Dict[str, ProcessedSheet]:
        try:
            sheets = ingest_workbook(workbook, file_name)
        except IngestionError as e:
            self.fail(file_name, str(e))
            raise
        self.state = LoadedState(file_name=file_name, sheets=sheets)
        return self.state.sheets

    def fail(self, file_name: str, reason: str) -> None:
        logger.warning("Ingestion of '%s' failed: %s", file_name, reason)
        self.state = LoadFailedState(file_name=file_name, reason=reason, previous=self._last_loaded())

    def query(self, question: str) -> Optional[QueryResponse]:
        # answers always use the dataset current at call time
        sheets = self.sheets
        return answer_query(sheets, question, strict=self.strict_intents)


# In-memory registry of sessions and their transcripts
_SESSIONS: Dict[str, AnalysisSession] = {}
_TRANSCRIPTS: Dict[str, Transcript] = {}


def create_session(session_id: Optional[str] = None) -> str:
    session_id = session_id or uuid.uuid4().hex
    _SESSIONS[session_id] = AnalysisSession()
    _TRANSCRIPTS[session_id] = Transcript()
    return session_id


def get_session(session_id: str) -> Optional[AnalysisSession]:
    return _SESSIONS.get(session_id)


def get_transcript(session_id: str) -> Optional[Transcript]:
    return _TRANSCRIPTS.get(session_id)


def drop_session(session_id: str) -> None:
    _SESSIONS.pop(session_id, None)
    _TRANSCRIPTS.pop(session_id, None)
