import logging
from typing import Optional
from fastapi import APIRouter, UploadFile, File, Form, HTTPException

from services.excel_reader_service import read_workbook
from services.file_upload_service import validate_upload
from services.errors import EmptyWorkbookError, IngestionError
from services.ingestion_service import sheet_infos
from services.preview_service import get_preview_rows
from services.session_service import create_session, get_session, get_transcript
from services.transcript_service import upload_error_text, upload_success_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("/excel")
async def upload_excel(file: UploadFile = File(...), session_id: Optional[str] = Form(None)):
    # Reuse the caller's session so a failed upload keeps its previous dataset
    if not session_id or get_session(session_id) is None:
        session_id = create_session(session_id)
    session = get_session(session_id)
    transcript = get_transcript(session_id)

    content = await file.read()
    file_name = file.filename or ""

    try:
        validate_upload(file_name, content)
        workbook = read_workbook(content)
        sheets = session.ingest(workbook, file_name)
    except EmptyWorkbookError as e:
        message = transcript.append("error", upload_error_text(file_name, str(e)))
        raise HTTPException(status_code=422, detail=message.content, headers={"X-Session-Id": session_id})
    except IngestionError as e:
        session.fail(file_name, str(e))
        message = transcript.append("error", upload_error_text(file_name, str(e)))
        raise HTTPException(status_code=400, detail=message.content, headers={"X-Session-Id": session_id})

    transcript.append("system", upload_success_text(file_name, len(sheets)))

    return {
        "session_id": session_id,
        "file_name": file_name,
        "sheets": [s.model_dump() for s in sheet_infos(sheets)],
        "preview": get_preview_rows(sheets),
    }
