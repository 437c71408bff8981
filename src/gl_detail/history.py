# GL Detail - General Ledger transaction detail reporting
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Transaction history filtering for GL Detail.

History lines (``gl_history``) are restricted by:
- the fiscal key range (``fiscal_year * 100 + fiscal_period``), which makes
  cross-year ranges a single comparison,
- the same segment ranges and cost center / department selectors as the
  chart of accounts.
"""

import pandas as pd

from .filters import KEY_COLUMNS, ReportBounds, coerce_key_columns, segment_mask

HISTORY_COLUMNS = [
    "gl_history_id",
    "fiscal_year",
    "fiscal_period",
    "acct_1",
    "acct_2",
    "acct_3",
    "acct_4",
    "dr_amount",
    "cr_amount",
    "description",
]


def add_fiscal_key(history: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``history`` with a FiscalKey column."""
    df = history.copy()
    df["FiscalKey"] = df["fiscal_year"] * 100 + df["fiscal_period"]
    return df


def filter_history(history: pd.DataFrame, bounds: ReportBounds) -> pd.DataFrame:
    """
    Filter history lines by fiscal key range, segments and selectors.

    Parameters
    ----------
    history:
        DataFrame with at least the HISTORY_COLUMNS.
    bounds:
        Resolved bounds from ``normalize_parameters``.

    Returns
    -------
    pandas.DataFrame
        Filtered copy with the original columns plus ``FiscalKey``. Rows
        whose keys or period are null never match.
    """
    df = coerce_key_columns(history, KEY_COLUMNS + ("fiscal_period",))
    df = add_fiscal_key(df)

    mask = bounds.fiscal_keys.mask(df["FiscalKey"]) & segment_mask(df, bounds)
    return df.loc[mask].copy()
