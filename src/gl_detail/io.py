# GL Detail - General Ledger transaction detail reporting
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
I/O module for GL Detail.

This module reads the two report inputs from CSV exports and normalizes them
into the column layout expected by the engine.

Expected input formats
----------------------

Column names are case-insensitive and surrounding blanks are ignored.

1) Chart of accounts (gl_chart)
   -----------------------------
       fiscal_year, acct_1, acct_2, acct_3, acct_4, account_type, description
   optional:
       alfre, budget, encumbered_amt

2) Transaction history (gl_history)
   ---------------------------------
       fiscal_year, fiscal_period, acct_1, acct_2, acct_3, acct_4,
       dr_amount, cr_amount, description
   optional:
       gl_history_id

   When ``gl_history_id`` is absent, lines are numbered 1..n in file order.

Output schema
-------------
- chart:   accounts.CHART_COLUMNS, integer keys, float amounts
- history: history.HISTORY_COLUMNS, integer keys and ids, float amounts

Any other columns present in the input file are ignored.

Structural problems (missing columns, non-numeric keys or amounts, duplicate
history ids) raise a clear ValueError.
"""

import os
from typing import Union

import pandas as pd

from .accounts import CHART_COLUMNS
from .history import HISTORY_COLUMNS

PathLike = Union[str, "os.PathLike[str]"]

_CHART_REQUIRED = {
    "fiscal_year",
    "acct_1",
    "acct_2",
    "acct_3",
    "acct_4",
    "account_type",
    "description",
}
_CHART_INTEGERS = ("fiscal_year", "acct_1", "acct_2", "acct_3", "acct_4")
_CHART_AMOUNTS = ("budget", "encumbered_amt")

_HISTORY_REQUIRED = {
    "fiscal_year",
    "fiscal_period",
    "acct_1",
    "acct_2",
    "acct_3",
    "acct_4",
    "dr_amount",
    "cr_amount",
    "description",
}
_HISTORY_INTEGERS = (
    "gl_history_id",
    "fiscal_year",
    "fiscal_period",
    "acct_1",
    "acct_2",
    "acct_3",
    "acct_4",
)
_HISTORY_AMOUNTS = ("dr_amount", "cr_amount")

# Free-text columns, read verbatim (leading zeros, numeric-looking text).
_TEXT_COLUMNS = ("alfre", "account_type", "description")


def _read_normalized(path: PathLike) -> pd.DataFrame:
    """Read a CSV file and lowercase/strip its column names."""
    header = pd.read_csv(path, nrows=0).columns
    text_dtypes = {
        col: str for col in header if str(col).lower().strip() in _TEXT_COLUMNS
    }
    df = pd.read_csv(path, dtype=text_dtypes)
    df.columns = [str(c).lower().strip() for c in df.columns]
    return df


def _require_columns(df: pd.DataFrame, required: set[str], label: str) -> None:
    missing = required.difference(df.columns)
    if missing:
        cols = ", ".join(sorted(missing))
        raise ValueError(f"Invalid {label} structure, missing column(s): {cols}")


def _to_integers(df: pd.DataFrame, columns: tuple[str, ...], label: str) -> None:
    """Convert key columns to int64 in place; blanks or text are rejected."""
    for col in columns:
        values = pd.to_numeric(df[col], errors="coerce")
        if values.isna().any() or (values % 1 != 0).any():
            raise ValueError(f"Invalid integer values in {label} '{col}' column.")
        df[col] = values.astype("int64")


def _to_amounts(df: pd.DataFrame, columns: tuple[str, ...], label: str) -> None:
    """Convert amount columns to float in place; blanks are kept as NaN."""
    for col in columns:
        values = pd.to_numeric(df[col], errors="coerce")
        if (values.isna() & df[col].notna()).any():
            raise ValueError(f"Invalid numeric values in {label} '{col}' column.")
        df[col] = values.astype(float)


def _clean_text(series: pd.Series) -> pd.Series:
    """Keep nulls as None, everything else as str."""
    return series.map(lambda v: None if pd.isna(v) else str(v))


def normalize_chart_accounts(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize a raw chart of accounts DataFrame.

    Parameters
    ----------
    df:
        Raw chart rows (column names already lowercased).

    Returns
    -------
    pandas.DataFrame
        A DataFrame with exactly the accounts.CHART_COLUMNS.

    Raises
    ------
    ValueError
        If required columns are missing or keys/amounts are not numeric.
    """
    _require_columns(df, _CHART_REQUIRED, "gl_chart")

    d = df.copy()
    for col in ("alfre",) + _CHART_AMOUNTS:
        if col not in d.columns:
            d[col] = None

    _to_integers(d, _CHART_INTEGERS, "gl_chart")
    _to_amounts(d, _CHART_AMOUNTS, "gl_chart")

    for col in _TEXT_COLUMNS:
        d[col] = _clean_text(d[col])

    return d[CHART_COLUMNS].reset_index(drop=True)


def normalize_history_lines(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize a raw transaction history DataFrame.

    Parameters
    ----------
    df:
        Raw history rows (column names already lowercased).

    Returns
    -------
    pandas.DataFrame
        A DataFrame with exactly the history.HISTORY_COLUMNS.

    Raises
    ------
    ValueError
        If required columns are missing, keys/amounts are not numeric or
        ``gl_history_id`` contains duplicates.
    """
    _require_columns(df, _HISTORY_REQUIRED, "gl_history")

    d = df.copy().reset_index(drop=True)
    if "gl_history_id" not in d.columns:
        d["gl_history_id"] = range(1, len(d) + 1)

    _to_integers(d, _HISTORY_INTEGERS, "gl_history")
    _to_amounts(d, _HISTORY_AMOUNTS, "gl_history")

    if d["gl_history_id"].duplicated().any():
        dupes = sorted(set(d.loc[d["gl_history_id"].duplicated(), "gl_history_id"]))
        raise ValueError(f"Duplicate gl_history_id values: {dupes[:10]}")

    d["description"] = _clean_text(d["description"])

    return d[HISTORY_COLUMNS]


def read_chart_accounts(path: PathLike) -> pd.DataFrame:
    """Read a gl_chart CSV export and normalize it (see module docstring)."""
    return normalize_chart_accounts(_read_normalized(path))


def read_history_lines(path: PathLike) -> pd.DataFrame:
    """Read a gl_history CSV export and normalize it (see module docstring)."""
    return normalize_history_lines(_read_normalized(path))
