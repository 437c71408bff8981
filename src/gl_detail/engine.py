# GL Detail - General Ledger transaction detail reporting
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Report engine for GL Detail.

This module provides the core pipeline that produces the General Ledger
transaction detail report from two input relations:

    chart   : gl_chart rows (chart of accounts, one row per fiscal year and
              account key)
    history : gl_history rows (one row per transaction line item)

The pipeline is a pure function of its inputs:

1. Parameter normalization
   ------------------------
   ``normalize_parameters()`` turns the optional FilterParameters into
   concrete inclusive bounds (see filters.py).

2. Chart enrichment
   -----------------
   ``select_chart()`` filters chart rows by segment ranges, business
   selectors and account type, and attaches the display fields
   (AccountNumber, CostCenterName, DepartmentName, AccountTypeCategory).

3. History filtering
   ------------------
   ``filter_history()`` filters history lines by fiscal key range, segment
   ranges and business selectors.

4. Join & formatting
   ------------------
   ``join_report()`` inner-joins both sides on
   (fiscal_year, acct_1, acct_2, acct_3, acct_4), projects the report
   columns and sorts the rows by cost center, department, account number,
   fiscal year, fiscal period and history id.

History lines without a chart row are not reportable and are dropped by the
inner join. ``unmatched_history()`` lists them separately for diagnostics.
"""

from typing import Optional

import pandas as pd

from .accounts import select_chart
from .filters import (
    KEY_COLUMNS,
    FilterParameters,
    coerce_key_columns,
    normalize_parameters,
)
from .history import HISTORY_COLUMNS, filter_history
from .mapping import format_account_number

REPORT_COLUMNS = [
    "AccountNumber",
    "fiscal_year",
    "fiscal_period",
    "CostCenterName",
    "DepartmentName",
    "alfre",
    "account_type",
    "AccountTypeCategory",
    "AccountDescription",
    "budget",
    "encumbered_amt",
    "dr_amount",
    "cr_amount",
    "TransactionDescription",
]

SORT_COLUMNS = [
    "CostCenterName",
    "DepartmentName",
    "AccountNumber",
    "fiscal_year",
    "fiscal_period",
    "gl_history_id",
]


def empty_report() -> pd.DataFrame:
    """Return an empty report with the standard columns."""
    return pd.DataFrame(columns=REPORT_COLUMNS)


def join_report(chart: pd.DataFrame, history: pd.DataFrame) -> pd.DataFrame:
    """Join enriched chart rows to filtered history lines.

    Args:
        chart: Output of ``select_chart`` (enriched chart rows).
        history: Output of ``filter_history``.

    Returns:
        A DataFrame with the REPORT_COLUMNS, one row per (history line,
        matching chart row) pair, ordered by SORT_COLUMNS.
    """
    if chart.empty or history.empty:
        return empty_report()

    hist = history.rename(columns={"description": "TransactionDescription"})
    merged = hist.merge(chart, on=list(KEY_COLUMNS), how="inner")

    if merged.empty:
        return empty_report()

    merged = merged.sort_values(SORT_COLUMNS, kind="mergesort")
    return merged[REPORT_COLUMNS].reset_index(drop=True)


def build_report(
    chart: pd.DataFrame,
    history: pd.DataFrame,
    params: Optional[FilterParameters] = None,
) -> pd.DataFrame:
    """Build the GL transaction detail report.

    This is the central entry point of the package:
      - Input: the chart of accounts and the transaction history as
        DataFrames (see accounts.CHART_COLUMNS and history.HISTORY_COLUMNS),
        plus optional filter parameters.
      - Output: the ordered report (see REPORT_COLUMNS).

    With no parameters, the report is the full inner join of history and
    chart. Input DataFrames are never modified.

    Args:
        chart: Chart of accounts rows.
        history: Transaction history rows.
        params: Optional filters. None means "no filters".

    Returns:
        The report DataFrame.
    """
    bounds = normalize_parameters(params)

    chart_rows = select_chart(chart, bounds)
    history_rows = filter_history(history, bounds)

    return join_report(chart_rows, history_rows)


def unmatched_history(
    chart: pd.DataFrame,
    history: pd.DataFrame,
    params: Optional[FilterParameters] = None,
) -> pd.DataFrame:
    """List history lines within the filters that have no chart row at all.

    Such lines are silently excluded from the report by the inner join. The
    chart is checked on its full key (no chart-side filters) so that only
    truly orphaned transactions are listed, not those excluded on purpose
    by an account type selector.

    Returns:
        A DataFrame with the HISTORY_COLUMNS plus AccountNumber, ordered by
        AccountNumber and gl_history_id.
    """
    columns = HISTORY_COLUMNS + ["AccountNumber"]
    bounds = normalize_parameters(params)

    hist = filter_history(history, bounds)
    if hist.empty:
        return pd.DataFrame(columns=columns)

    known = coerce_key_columns(chart, KEY_COLUMNS)[list(KEY_COLUMNS)]
    known = known.drop_duplicates()

    merged = hist.merge(known, on=list(KEY_COLUMNS), how="left", indicator=True)
    orphans = merged[merged["_merge"] == "left_only"].copy()
    if orphans.empty:
        return pd.DataFrame(columns=columns)

    orphans["AccountNumber"] = [
        format_account_number(a1, a2, a3, a4)
        for a1, a2, a3, a4 in zip(
            orphans["acct_1"], orphans["acct_2"], orphans["acct_3"], orphans["acct_4"]
        )
    ]
    orphans = orphans.sort_values(["AccountNumber", "gl_history_id"], kind="mergesort")
    return orphans[columns].reset_index(drop=True)
