# GL Detail - General Ledger transaction detail reporting
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
View utilities for GL Detail.

This module prepares the report produced by ``engine.build_report`` for
display or export:

- summarize_report: one line per cost center / department with totals,
- unmatched_to_summary: one line per account number without a chart row,
- write_report_csv: timestamped CSV export.

The detail report itself is never aggregated; the summary is an additional
view built on top of it.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd

SUMMARY_COLUMNS = [
    "CostCenterName",
    "DepartmentName",
    "line_count",
    "dr_amount",
    "cr_amount",
    "NetAmount",
]


def summarize_report(report: pd.DataFrame) -> pd.DataFrame:
    """Return debit/credit totals per cost center and department.

    NetAmount is computed as ``cr_amount - dr_amount`` with missing amounts
    treated as 0, so revenues come out positive and expenses negative.

    Args:
        report: DataFrame returned by ``build_report``.

    Returns:
        A DataFrame with the SUMMARY_COLUMNS, ordered like the report
        (cost center, then department). Amounts are rounded to 2 decimals.
    """
    if report.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    df = report[["CostCenterName", "DepartmentName", "dr_amount", "cr_amount"]].copy()
    df["dr_amount"] = pd.to_numeric(df["dr_amount"], errors="coerce").fillna(0.0)
    df["cr_amount"] = pd.to_numeric(df["cr_amount"], errors="coerce").fillna(0.0)

    grouped = df.groupby(["CostCenterName", "DepartmentName"], sort=True).agg(
        line_count=("dr_amount", "size"),
        dr_amount=("dr_amount", "sum"),
        cr_amount=("cr_amount", "sum"),
    )
    grouped = grouped.reset_index()
    grouped["NetAmount"] = grouped["cr_amount"] - grouped["dr_amount"]

    for col in ("dr_amount", "cr_amount", "NetAmount"):
        grouped[col] = grouped[col].round(2)

    return grouped[SUMMARY_COLUMNS]


def unmatched_to_summary(unmatched: pd.DataFrame) -> pd.DataFrame:
    """Count unmatched history lines per account number and fiscal year."""
    columns = ["AccountNumber", "fiscal_year", "line_count"]
    if unmatched.empty:
        return pd.DataFrame(columns=columns)

    out = (
        unmatched.groupby(["AccountNumber", "fiscal_year"], sort=True)
        .size()
        .reset_index(name="line_count")
    )
    return out[columns]


def write_report_csv(
    df: pd.DataFrame,
    output_dir: Path,
    stem: str,
    timestamp: Optional[str] = None,
) -> Path:
    """Write a DataFrame to ``<output_dir>/<stem>_<timestamp>.csv``.

    The directory is created if needed. The timestamp defaults to the
    current local time (``YYYY-MM-DD-HH-MM-SS``).

    Returns:
        The path of the written file.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if timestamp is None:
        timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")

    path = output_dir / f"{stem}_{timestamp}.csv"
    df.to_csv(path, index=False)
    return path
