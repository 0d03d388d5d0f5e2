"""Excel export of a shift preview."""
import io
from pathlib import Path
from typing import List, Union

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from shiftgen.models.schedule import ShiftPreview

CONFLICT_FILL = PatternFill(start_color="FFF4CC", end_color="FFF4CC", fill_type="solid")
HEADER_FILL = PatternFill(start_color="DDEEFF", end_color="DDEEFF", fill_type="solid")

THIN = Side(border_style="thin", color="CCCCCC")
BORDER_THIN = Border(top=THIN, bottom=THIN, left=THIN, right=THIN)

PREVIEW_HEADERS = {
    "date": "Date",
    "day": "Day",
    "start_time": "Start",
    "end_time": "End",
    "location": "Location",
    "employee": "Employee",
    "conflict": "Conflict",
    "conflict_kinds": "Overlap",
}


def _write_header(ws, headers: List[str], row: int = 1) -> None:
    for c, label in enumerate(headers, start=1):
        cell = ws.cell(row=row, column=c, value=label)
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = BORDER_THIN


def _build_week_matrix(df: pd.DataFrame) -> pd.DataFrame:
    """Employee x date matrix of "start-end" cells."""
    if df.empty:
        return pd.DataFrame()
    cells = df.assign(slot=df["start_time"].str[:5] + "-" + df["end_time"].str[:5])
    return cells.pivot_table(
        index="employee",
        columns="date",
        values="slot",
        aggfunc=lambda x: " / ".join(sorted(x)),
        fill_value="",
    )


def export_preview_to_excel(
    preview: ShiftPreview,
    output: Union[str, Path, io.BytesIO],
) -> None:
    """
    Export a preview to an Excel workbook.

    Sheets:
        Summary: request parameters and counts
        Shifts: one row per previewed shift, conflicts highlighted
        Matrix: employee x date grid
    """
    df = preview.to_dataframe()
    wb = Workbook()

    # ========== Summary Sheet ==========
    ws_sum = wb.active
    ws_sum.title = "Summary"
    _write_header(ws_sum, ["Item", "Value"])
    for i, (key, val) in enumerate(preview.summary().items(), start=2):
        ws_sum.cell(row=i, column=1, value=key)
        ws_sum.cell(row=i, column=2, value=val)
    for i in (1, 2):
        ws_sum.column_dimensions[get_column_letter(i)].width = 24

    # ========== Shifts Sheet ==========
    ws = wb.create_sheet("Shifts")
    columns = list(PREVIEW_HEADERS)
    _write_header(ws, [PREVIEW_HEADERS[c] for c in columns])
    for r, record in enumerate(df.to_dict("records"), start=2):
        for c, col in enumerate(columns, start=1):
            value = record[col]
            if col == "conflict":
                value = "Yes" if value else ""
            cell = ws.cell(row=r, column=c, value=value)
            cell.border = BORDER_THIN
            if record["conflict"]:
                cell.fill = CONFLICT_FILL
    for i in range(1, len(columns) + 1):
        ws.column_dimensions[get_column_letter(i)].width = 16
    ws.freeze_panes = "A2"

    # ========== Matrix Sheet ==========
    ws_m = wb.create_sheet("Matrix")
    matrix = _build_week_matrix(df)
    if not matrix.empty:
        _write_header(ws_m, ["Employee"] + [str(c) for c in matrix.columns])
        for r, (name, row) in enumerate(matrix.iterrows(), start=2):
            ws_m.cell(row=r, column=1, value=name).font = Font(bold=True)
            for c, val in enumerate(row.tolist(), start=2):
                cell = ws_m.cell(row=r, column=c, value=val)
                cell.alignment = Alignment(horizontal="center")
                cell.border = BORDER_THIN
        ws_m.column_dimensions["A"].width = 24
        ws_m.freeze_panes = "B2"

    if isinstance(output, io.BytesIO):
        wb.save(output)
    else:
        wb.save(str(output))


def export_preview_to_csv(preview: ShiftPreview, output: Union[str, Path, io.StringIO]) -> None:
    df = preview.to_dataframe()
    if isinstance(output, io.StringIO):
        df.to_csv(output, index=False)
    else:
        df.to_csv(str(output), index=False)
