"""
Risk Register
=============

Tabular view of an overall DPIA risk assessment.  Each evaluated risk
factor becomes one row of a pandas DataFrame; the register can also be
exported to an Excel workbook with a summary sheet and the generated
recommendations, for attaching to the DPIA record.
"""

from __future__ import annotations

import io
import logging
from typing import Dict, Iterable

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils.dataframe import dataframe_to_rows

from dpia_risk.risk_engine import RISK_LEVELS, OverallRiskAssessment, RiskEvaluation
from dpia_risk.risk_scales import risk_factor_label

logger = logging.getLogger(__name__)

REGISTER_COLUMNS = [
    "Risk Type",
    "Likelihood",
    "Impact",
    "Score",
    "Level",
    "Description",
    "Mitigation Measures",
]

LEVEL_FILLS = {
    "critical": "FFCCCC",
    "high": "FFE6E6",
    "medium": "FFF2E6",
    "low": "E6FFE6",
}


def summarize_risk_levels(evaluations: Iterable[RiskEvaluation]) -> Dict[str, int]:
    """Count evaluations per risk level.

    All four levels are always present; unexpected level strings get their
    own key.
    """
    summary = {level: 0 for level in RISK_LEVELS}
    for e in evaluations:
        summary[e.level] = summary.get(e.level, 0) + 1
    return summary


def risk_register_dataframe(overall: OverallRiskAssessment) -> pd.DataFrame:
    """Return the evaluated risk factors as a DataFrame, one row per factor."""
    data = [
        {
            "Risk Type": risk_factor_label(e.risk_type),
            "Likelihood": e.likelihood,
            "Impact": e.impact,
            "Score": e.score,
            "Level": e.level,
            "Description": e.description or "",
            "Mitigation Measures": "; ".join(e.mitigation_measures or []),
        }
        for e in overall.risk_evaluations
    ]
    return pd.DataFrame(data, columns=REGISTER_COLUMNS)


def _store_as_text(cell) -> None:
    # openpyxl treats strings starting with "=" as formulas
    if isinstance(cell.value, str):
        cell.data_type = "s"


def _autosize(ws) -> None:
    for column in ws.columns:
        column_letter = column[0].column_letter
        max_length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column)
        ws.column_dimensions[column_letter].width = min(max_length + 2, 60)


def export_risk_register_excel(overall: OverallRiskAssessment) -> bytes:
    """Export the register, a level summary and the recommendations to Excel.

    Returns:
        The workbook as bytes (sheets "Risk Register", "Summary" and
        "Recommendations").
    """
    df = risk_register_dataframe(overall)
    buffer = io.BytesIO()
    wb = Workbook()

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="2C3E50", end_color="2C3E50", fill_type="solid")
    header_alignment = Alignment(horizontal="center", vertical="center")
    border = Border(left=Side(style='thin'), right=Side(style='thin'),
                    top=Side(style='thin'), bottom=Side(style='thin'))

    # Register sheet
    ws_register = wb.active
    ws_register.title = "Risk Register"
    for row in dataframe_to_rows(df, index=False, header=True):
        ws_register.append(row)
    for cell in ws_register[1]:
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_alignment
        cell.border = border
    level_col = REGISTER_COLUMNS.index("Level") + 1
    for row in ws_register.iter_rows(min_row=2):
        for cell in row:
            cell.border = border
            _store_as_text(cell)
        level_cell = row[level_col - 1]
        fill = LEVEL_FILLS.get(level_cell.value)
        if fill:
            level_cell.fill = PatternFill(start_color=fill, end_color=fill, fill_type="solid")
    _autosize(ws_register)

    # Summary sheet
    ws_summary = wb.create_sheet("Summary")
    ws_summary.cell(row=1, column=1, value="Overall Risk").font = Font(bold=True, size=14)
    ws_summary.cell(row=2, column=1, value="Overall Score")
    ws_summary.cell(row=2, column=2, value=overall.overall_score)
    ws_summary.cell(row=3, column=1, value="Overall Level")
    ws_summary.cell(row=3, column=2, value=overall.overall_level)

    for col, header in enumerate(["Risk Level", "Count"], 1):
        cell = ws_summary.cell(row=5, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_alignment
        cell.border = border
    summary = summarize_risk_levels(overall.risk_evaluations)
    levels = list(reversed(RISK_LEVELS)) + [level for level in summary if level not in RISK_LEVELS]
    for row, level in enumerate(levels, 6):
        level_cell = ws_summary.cell(row=row, column=1, value=level)
        level_cell.border = border
        _store_as_text(level_cell)
        ws_summary.cell(row=row, column=2, value=summary[level]).border = border
    _autosize(ws_summary)

    # Recommendations sheet
    ws_recs = wb.create_sheet("Recommendations")
    header = ws_recs.cell(row=1, column=1, value="Recommendation")
    header.font = header_font
    header.fill = header_fill
    for row, recommendation in enumerate(overall.recommendations, 2):
        _store_as_text(ws_recs.cell(row=row, column=1, value=recommendation))
    _autosize(ws_recs)

    wb.save(buffer)
    buffer.seek(0)
    logger.info(
        "Exported risk register: %d risk factors, %d recommendations",
        len(overall.risk_evaluations), len(overall.recommendations),
    )
    return buffer.getvalue()
