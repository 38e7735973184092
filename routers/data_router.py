from fastapi import APIRouter, HTTPException
from models.common_models import ChartSpec, PreviewRequest, QueryRequest, StatsRequest
from services.errors import QueryEvaluationError
from services.ingestion_service import sheet_infos
from services.preview_service import get_preview_rows
from services.session_service import AnalysisSession, get_session, get_transcript
from services.transcript_service import QUERY_ERROR_TEXT
from services.viz_service import render_chart

router = APIRouter(prefix="/data", tags=["data"])


def _require_session(session_id: str) -> AnalysisSession:
    session = get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found.")
    return session


@router.post("/preview")
async def preview_data(req: PreviewRequest):
    session = _require_session(req.session_id)
    try:
        return get_preview_rows(session.sheets, req.sheet_name, req.n_rows)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e.args[0]))


@router.post("/stats")
async def stats_data(req: StatsRequest):
    session = _require_session(req.session_id)
    sheets = session.sheets or {}
    if req.sheet_name not in sheets:
        raise HTTPException(status_code=404, detail=f"Sheet '{req.sheet_name}' not found for this session.")
    return sheets[req.sheet_name].summary.model_dump()


@router.post("/query")
async def query_data(req: QueryRequest):
    question = req.question.strip()
    if not question:
        raise HTTPException(status_code=400, detail="Question must not be empty.")

    session = _require_session(req.session_id)
    if not session.sheets:
        raise HTTPException(status_code=409, detail="Please upload an Excel file first to start asking questions about your data.")

    transcript = get_transcript(req.session_id)
    transcript.append("user", question)

    try:
        response = session.query(question)
    except QueryEvaluationError:
        message = transcript.append("error", QUERY_ERROR_TEXT)
        return {"response_type": "error", "message": message.model_dump(mode="json")}

    message = transcript.add_response(response)
    return {
        "response_type": response.type if response else None,
        "message": message.model_dump(mode="json"),
    }


@router.get("/messages")
async def list_messages(session_id: str):
    _require_session(session_id)
    return [m.model_dump(mode="json") for m in get_transcript(session_id).messages]


@router.get("/state")
async def session_state(session_id: str):
    session = _require_session(session_id)
    state = session.state
    return {
        "status": state.status,
        "file_name": session.file_name,
        "reason": getattr(state, "reason", None),
        "sheets": list((session.sheets or {}).keys()),
        "sheet_infos": [info.model_dump() for info in sheet_infos(session.sheets or {})],
    }


@router.post("/chart")
async def chart_image(spec: ChartSpec):
    image = render_chart(spec)
    if image is None:
        raise HTTPException(status_code=422, detail="Chart could not be rendered.")
    return {"image_base64": image}
