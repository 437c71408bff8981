# GL Detail - General Ledger transaction detail reporting
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Chart of accounts utilities for GL Detail.

This module filters the chart of accounts (``gl_chart``) with the resolved
report bounds and attaches the display fields used by the report.

Responsibilities:
- Restrict chart rows by segment ranges, cost center / department
  selectors and account type.
- Compute AccountNumber, AccountTypeCategory, CostCenterName and
  DepartmentName for each surviving row.

Chart rows are keyed by fiscal year only (no period), so the fiscal key
range is not applied here.
"""

import pandas as pd

from .filters import KEY_COLUMNS, ReportBounds, coerce_key_columns, segment_mask
from .mapping import (
    account_type_category,
    account_type_code,
    cost_center_name,
    department_name,
    format_account_number,
)

CHART_COLUMNS = [
    "fiscal_year",
    "acct_1",
    "acct_2",
    "acct_3",
    "acct_4",
    "alfre",
    "account_type",
    "description",
    "budget",
    "encumbered_amt",
]

ENRICHED_CHART_COLUMNS = [
    "fiscal_year",
    "acct_1",
    "acct_2",
    "acct_3",
    "acct_4",
    "AccountNumber",
    "alfre",
    "account_type",
    "AccountTypeCategory",
    "AccountDescription",
    "budget",
    "encumbered_amt",
    "CostCenterName",
    "DepartmentName",
]


def filter_chart(chart: pd.DataFrame, bounds: ReportBounds) -> pd.DataFrame:
    """Return the chart rows matching the segment, selector and type bounds.

    All conditions are AND'ed:
        - acct_1..acct_4 within their resolved inclusive ranges,
        - acct_1 == cost center selector (if any),
        - acct_2 == department selector (if any),
        - leading character of account_type == account type selector (if
          any). Blank or null account types never match a selector.

    Args:
        chart: Chart of accounts with at least the CHART_COLUMNS.
        bounds: Resolved bounds from ``normalize_parameters``.

    Returns:
        Filtered copy of the chart, with integer key columns.
    """
    df = coerce_key_columns(chart, KEY_COLUMNS)

    mask = segment_mask(df, bounds)
    if bounds.account_type is not None:
        type_codes = df["account_type"].map(account_type_code)
        mask &= type_codes == bounds.account_type

    return df.loc[mask].copy()


def enrich_chart(chart: pd.DataFrame) -> pd.DataFrame:
    """Attach the derived display fields to (already filtered) chart rows.

    Added columns:
        - AccountNumber:        'xx-xx-xxx-xxx'
        - AccountTypeCategory:  e.g. 'E - Expense', 'Unknown'
        - CostCenterName:       e.g. 'MW - Marina Water', 'Other/Unknown'
        - DepartmentName:       e.g. 'Engineering', 'Other/Unknown'

    The chart ``description`` column is exposed as AccountDescription.

    Returns:
        A DataFrame with the ENRICHED_CHART_COLUMNS.
    """
    if chart.empty:
        return pd.DataFrame(columns=ENRICHED_CHART_COLUMNS)

    df = chart.copy()
    df["AccountNumber"] = [
        format_account_number(a1, a2, a3, a4)
        for a1, a2, a3, a4 in zip(df["acct_1"], df["acct_2"], df["acct_3"], df["acct_4"])
    ]
    df["AccountTypeCategory"] = df["account_type"].map(account_type_category)
    df["CostCenterName"] = df["acct_1"].map(cost_center_name)
    df["DepartmentName"] = df["acct_2"].map(department_name)
    df = df.rename(columns={"description": "AccountDescription"})

    # alfre, budget and encumbered_amt are optional inputs.
    return df.reindex(columns=ENRICHED_CHART_COLUMNS)


def select_chart(chart: pd.DataFrame, bounds: ReportBounds) -> pd.DataFrame:
    """Filter then enrich the chart of accounts."""
    return enrich_chart(filter_chart(chart, bounds))
