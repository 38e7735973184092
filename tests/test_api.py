import pandas as pd

from services import query_service
from services.transcript_service import QUERY_ERROR_TEXT

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def upload(client, name, content, session_id=None):
    data = {"session_id": session_id} if session_id else {}
    return client.post("/upload/excel", files={"file": (name, content, XLSX_TYPE)}, data=data)


def test_root(client):
    assert client.get("/").status_code == 200


def test_upload_returns_sheets_and_preview(client, sales_xlsx):
    resp = upload(client, "sales.xlsx", sales_xlsx)
    assert resp.status_code == 200
    body = resp.json()
    assert body["file_name"] == "sales.xlsx"
    assert body["sheets"] == [{"sheet_name": "Sales", "n_rows": 4, "n_cols": 3, "completeness": 100.0}]
    assert body["preview"]["headers"] == ["region", "total_sales", "order_date"]
    assert body["preview"]["total_rows"] == 4

    messages = client.get("/data/messages", params={"session_id": body["session_id"]}).json()
    assert [m["kind"] for m in messages] == ["system"]
    assert 'File "sales.xlsx" processed successfully! Found 1 sheet(s)' in messages[0]["content"]


def test_query_flow(client, sales_xlsx):
    session_id = upload(client, "sales.xlsx", sales_xlsx).json()["session_id"]

    resp = client.post("/data/query", json={"session_id": session_id, "question": "trend over time"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["response_type"] == "trend"
    assert body["message"]["kind"] == "ai"
    assert body["message"]["chart"]["kind"] == "line"
    assert [p["date"] for p in body["message"]["table"]] == [
        "2024-01-01", "2024-02-01", "2024-03-01", "2024-04-01"
    ]

    resp = client.post("/data/query", json={"session_id": session_id, "question": "top 5 highest regions"})
    assert resp.json()["response_type"] == "ranking"

    messages = client.get("/data/messages", params={"session_id": session_id}).json()
    assert [m["kind"] for m in messages] == ["system", "user", "ai", "user", "ai"]


def test_query_validation(client, sales_xlsx):
    session_id = upload(client, "sales.xlsx", sales_xlsx).json()["session_id"]
    assert client.post("/data/query", json={"session_id": session_id, "question": "   "}).status_code == 400
    assert client.post("/data/query", json={"session_id": "missing", "question": "hi"}).status_code == 404


def test_failed_reupload_keeps_previous_data(client, sales_xlsx, xlsx_factory):
    session_id = upload(client, "sales.xlsx", sales_xlsx).json()["session_id"]

    blank = xlsx_factory({"Blank": pd.DataFrame({"Notes": []})})
    resp = upload(client, "blank.xlsx", blank, session_id)
    assert resp.status_code == 422
    assert "blank.xlsx" in resp.json()["detail"]

    state = client.get("/data/state", params={"session_id": session_id}).json()
    assert state["status"] == "load_failed"
    assert state["file_name"] == "blank.xlsx"
    assert state["sheets"] == ["Sales"]
    assert [i["sheet_name"] for i in state["sheet_infos"]] == ["Sales"]

    resp = client.post("/data/query", json={"session_id": session_id, "question": "show me a summary"})
    assert resp.json()["response_type"] == "summary"


def test_query_before_any_data(client, xlsx_factory):
    resp = upload(client, "blank.xlsx", xlsx_factory({"Blank": pd.DataFrame({"Notes": []})}))
    session_id = resp.headers["X-Session-Id"]
    resp = client.post("/data/query", json={"session_id": session_id, "question": "show me a summary"})
    assert resp.status_code == 409


def test_rejects_non_excel_upload(client):
    resp = upload(client, "data.csv", b"a,b\n1,2\n")
    assert resp.status_code == 400
    assert "Only Excel files" in resp.json()["detail"]


def test_rejects_corrupt_workbook(client):
    resp = upload(client, "broken.xlsx", b"not a workbook")
    assert resp.status_code == 400


def test_preview_and_stats(client, sales_xlsx):
    session_id = upload(client, "sales.xlsx", sales_xlsx).json()["session_id"]

    preview = client.post("/data/preview", json={"session_id": session_id, "n_rows": 2}).json()
    assert preview["sheet_name"] == "Sales"
    assert len(preview["rows"]) == 2

    stats = client.post("/data/stats", json={"session_id": session_id, "sheet_name": "Sales"}).json()
    assert stats["numeric_columns"] == ["total_sales"]
    assert stats["columns"]["total_sales"]["max"] == 250

    resp = client.post("/data/stats", json={"session_id": session_id, "sheet_name": "Nope"})
    assert resp.status_code == 404


def test_chart_endpoint(client):
    spec = {"kind": "bar", "data": [{"name": "a", "total": 3}], "x_key": "name", "y_key": "total"}
    resp = client.post("/data/chart", json=spec)
    assert resp.status_code == 200
    assert resp.json()["image_base64"]

    spec["y_key"] = "missing"
    assert client.post("/data/chart", json=spec).status_code == 422


def test_state_reports_completeness(client, xlsx_factory):
    frame = pd.DataFrame({"Name": ["Ann", "Bob", "Cid"], "Score": [1, None, 3]})
    session_id = upload(client, "scores.xlsx", xlsx_factory({"Scores": frame})).json()["session_id"]

    state = client.get("/data/state", params={"session_id": session_id}).json()
    assert state["status"] == "loaded"
    assert state["sheet_infos"] == [
        {"sheet_name": "Scores", "n_rows": 3, "n_cols": 2, "completeness": 83.3}
    ]


def test_query_failure_appends_error_message(client, sales_xlsx, monkeypatch):
    session_id = upload(client, "sales.xlsx", sales_xlsx).json()["session_id"]

    def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(query_service, "generate_response", broken)

    resp = client.post("/data/query", json={"session_id": session_id, "question": "show me a summary"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["response_type"] == "error"
    assert body["message"]["kind"] == "error"
    assert body["message"]["content"] == QUERY_ERROR_TEXT

    messages = client.get("/data/messages", params={"session_id": session_id}).json()
    assert [m["kind"] for m in messages] == ["system", "user", "error"]
