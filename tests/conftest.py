import io
from typing import Dict

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from main import app
from services import session_service
from services.ingestion_service import ingest_workbook


def make_xlsx(frames: Dict[str, pd.DataFrame]) -> bytes:
    """Write DataFrames to an in-memory workbook, one sheet each."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for sheet_name, df in frames.items():
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    return buffer.getvalue()


@pytest.fixture()
def sales_workbook():
    return {
        "Notes": [["", ""], ["", ""]],
        "Sales": [
            ["", "", "", ""],
            ["Region", "Total Sales", "Order Date", ""],
            ["North", "100", "2024-02-01", ""],
            ["", "", "", ""],
            ["South", 250.5, "2024-01-01", ""],
            ["East", "75", "2024-03-01", ""],
        ],
        "Products": [
            ["Product", "Units"],
            ["Widget", 3],
            ["Gadget", 9],
        ],
    }


@pytest.fixture()
def sales_sheets(sales_workbook):
    return ingest_workbook(sales_workbook, "sales.xlsx")


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client
    for session_id in list(session_service._SESSIONS):
        session_service.drop_session(session_id)


@pytest.fixture()
def sales_xlsx():
    return make_xlsx({
        "Sales": pd.DataFrame({
            "Region": ["North", "South", "East", "West"],
            "Total Sales": [100, 250, 75, 180],
            "Order Date": ["2024-02-01", "2024-01-01", "2024-03-01", "2024-04-01"],
        }),
        "Empty": pd.DataFrame({"Notes": []}),
    })


@pytest.fixture()
def xlsx_factory():
    return make_xlsx
