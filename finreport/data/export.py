from __future__ import annotations

from io import BytesIO

import pandas as pd

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def frame_to_xlsx(df: pd.DataFrame, sheet_name: str = "Report") -> bytes:
    """Serialize a table to an in-memory .xlsx workbook for st.download_button."""
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
    return buf.getvalue()
