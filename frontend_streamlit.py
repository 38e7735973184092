import time
import base64

import streamlit as st
import pandas as pd
import requests

from config import BACKEND_URL, FRONTEND_THINKING_DELAY
from services.transcript_service import table_preview

BASE_URL = BACKEND_URL

QUICK_ACTIONS = [
    "Show me a summary",
    "What are the trends?",
    "Which has the highest values?",
    "Calculate totals and averages",
]

st.set_page_config(
    page_title="Excel Chat Analyzer",
    layout="wide"
)

# ========================
# STATE VARIABLES
# ========================
if "session_id" not in st.session_state:
    st.session_state.session_id = None

if "file_name" not in st.session_state:
    st.session_state.file_name = None

if "preview" not in st.session_state:
    st.session_state.preview = None

if "upload_error" not in st.session_state:
    st.session_state.upload_error = None


def fetch_messages():
    if not st.session_state.session_id:
        return []
    resp = requests.get(f"{BASE_URL}/data/messages", params={"session_id": st.session_state.session_id})
    return resp.json() if resp.status_code == 200 else []


def fetch_state():
    if not st.session_state.session_id:
        return None
    resp = requests.get(f"{BASE_URL}/data/state", params={"session_id": st.session_state.session_id})
    return resp.json() if resp.status_code == 200 else None


def ask(question: str):
    with st.spinner("Analyzing your data..."):
        # Pacing only; the backend answers immediately
        time.sleep(FRONTEND_THINKING_DELAY)
        requests.post(
            f"{BASE_URL}/data/query",
            json={"session_id": st.session_state.session_id, "question": question},
        )


def render_table(rows):
    preview = table_preview(rows)
    if not preview["rows"]:
        return
    st.dataframe(pd.DataFrame(preview["rows"], columns=preview["columns"]), use_container_width=True)
    if preview["notice"]:
        st.caption(preview["notice"])


def render_chart(chart):
    resp = requests.post(f"{BASE_URL}/data/chart", json=chart)
    if resp.status_code == 200:
        st.image(base64.b64decode(resp.json()["image_base64"]), width=500)


st.title("Excel Chat Analyzer")
st.markdown("Upload an Excel file, then ask questions about your data in plain language.")

left, right = st.columns([1, 2])

# 1. FILE UPLOAD + PREVIEW
with left:
    st.header("Upload Excel File")

    uploaded_file = st.file_uploader("Upload your Excel file", type=["xlsx", "xls"])

    if uploaded_file is not None and st.session_state.file_name != uploaded_file.name:
        with st.spinner("Processing..."):
            files = {"file": (uploaded_file.name, uploaded_file.getvalue())}
            data = {"session_id": st.session_state.session_id} if st.session_state.session_id else {}

            resp = requests.post(f"{BASE_URL}/upload/excel", files=files, data=data)
            st.session_state.file_name = uploaded_file.name

            if resp.status_code != 200:
                st.session_state.upload_error = resp.json().get("detail", resp.text)
                st.session_state.session_id = resp.headers.get("X-Session-Id", st.session_state.session_id)
            else:
                body = resp.json()
                st.session_state.session_id = body["session_id"]
                st.session_state.preview = body["preview"]
                st.session_state.upload_error = None

    if st.session_state.upload_error:
        st.error(st.session_state.upload_error)

    state = fetch_state()
    if state and state["status"] == "load_failed" and state["sheets"]:
        st.warning(f"Still analyzing the previously loaded data ({', '.join(state['sheets'])}).")

    preview = st.session_state.preview
    if preview:
        st.subheader("Data Preview")
        st.caption(f"{preview['total_rows']} rows, {len(preview['headers'])} columns")
        shown_headers = preview["headers"][:3]
        df_prev = pd.DataFrame(preview["rows"][:5])
        if not df_prev.empty:
            df_prev = df_prev[shown_headers]
            if len(preview["headers"]) > 3:
                df_prev["..."] = "..."
        st.dataframe(df_prev, use_container_width=True)

    if state and state["sheet_infos"]:
        st.subheader("Data Quality Summary")
        for info in state["sheet_infos"]:
            st.markdown(f"**{info['sheet_name']}**")
            st.caption(
                f"Rows: {info['n_rows']:,} | Columns: {info['n_cols']} | "
                f"Completeness: {round(info['completeness'])}%"
            )
            st.progress(min(int(info["completeness"]), 100))

# 2. CHAT
with right:
    st.header("Ask Questions About Your Data")
    st.caption('Try: "Show me a summary", "What are the trends?", "Which has the highest values?"')

    has_data = bool(state and state["sheets"])

    for message in fetch_messages():
        role = "user" if message["kind"] == "user" else "assistant"
        with st.chat_message(role):
            if message["kind"] == "error":
                st.error(message["content"])
            else:
                st.markdown(message["content"])
            if message.get("chart"):
                render_chart(message["chart"])
            if message.get("table"):
                render_table(message["table"])
            st.caption(message["timestamp"][11:19])

    if not has_data:
        st.info("Please upload an Excel file first to start asking questions about your data.")
    else:
        cols = st.columns(len(QUICK_ACTIONS))
        for i, action in enumerate(QUICK_ACTIONS):
            if cols[i].button(action, key=f"quick_{i}"):
                ask(action)
                st.rerun()

    question = st.chat_input("Ask me anything about your data...", disabled=not has_data)
    if question and question.strip():
        ask(question)
        st.rerun()
