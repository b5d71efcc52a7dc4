from io import BytesIO

import pandas as pd

from finreport.data.export import frame_to_xlsx
from finreport.data.mock_data import generate_report_records
from finreport.data.models import Report


def test_report_table_round_trips_through_xlsx():
    records = [r.to_api() for r in generate_report_records("2024-01-01", "2024-01-03", "org-1", seed=5)]
    df = Report(data=records, meta={}, source="mock").to_frame()[["name", "category", "quantity", "profit"]]

    payload = frame_to_xlsx(df)

    assert payload[:2] == b"PK"
    back = pd.read_excel(BytesIO(payload), sheet_name="Report", engine="openpyxl")
    assert list(back.columns) == ["name", "category", "quantity", "profit"]
    assert len(back) == len(df)
    assert back["quantity"].tolist() == df["quantity"].tolist()


def test_empty_table_still_produces_a_workbook():
    payload = frame_to_xlsx(pd.DataFrame(columns=["Product", "Profit"]), sheet_name="Empty")

    back = pd.read_excel(BytesIO(payload), sheet_name="Empty", engine="openpyxl")
    assert list(back.columns) == ["Product", "Profit"]
    assert back.empty
