# GL Detail - General Ledger transaction detail reporting
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Filter parameters and their normalization for GL Detail.

This module defines the parameter record supplied by the caller and the
fully-resolved bounds used by the chart and history filters.

Every filter is optional ("NULL = ALL"). Instead of scattering null checks
inside predicates, parameters are normalized once by
``normalize_parameters()`` into:

- an inclusive fiscal key range (``FiscalKey = fiscal_year * 100 + period``),
- one inclusive range per account segment (acct_1 .. acct_4),
- optional exact-match selectors for cost center (acct_1) and
  department (acct_2),
- an optional single uppercase character for the account type.

Default bounds
--------------
The widest ranges use the legacy report sentinels, kept as-is so that the
output matches the historical report:

    fiscal year   : 0 .. 9999
    fiscal period : 0 .. 99
    acct_1/acct_2 : 0 .. 9999
    acct_3/acct_4 : 0 .. 999999
"""

import re
from dataclasses import dataclass, fields
from typing import Optional, Union

import pandas as pd

SEGMENT_COLUMNS = ("acct_1", "acct_2", "acct_3", "acct_4")
KEY_COLUMNS = ("fiscal_year",) + SEGMENT_COLUMNS

MIN_FISCAL_YEAR = 0
MAX_FISCAL_YEAR = 9999
MIN_FISCAL_PERIOD = 0
MAX_FISCAL_PERIOD = 99

SEGMENT_MIN = 0
SEGMENT_MAX = (9999, 9999, 999999, 999999)

# TRY_CAST(char AS int): optional sign, digits, surrounding blanks.
_INT_CODE = re.compile(r"\s*[+-]?\d+\s*")
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


@dataclass(frozen=True)
class FilterParameters:
    """
    Optional filters for the GL transaction detail report.

    Each attribute defaults to None, meaning "no restriction on that
    dimension".

    Attributes
    ----------
    beg_fiscal_year, beg_fiscal_period, end_fiscal_year, end_fiscal_period:
        Fiscal range. A year without a period covers the whole year.
    beg_acct_1 .. end_acct_4:
        Inclusive ranges on the four account segments.
    cost_center:
        Two-character code matched exactly against acct_1 (e.g. "01").
    department:
        Two-character code matched exactly against acct_2 (e.g. "05").
    acct_type:
        One-character account type code ('A', 'L', 'F', 'R', 'E').
    """

    beg_fiscal_year: Optional[int] = None
    beg_fiscal_period: Optional[int] = None
    end_fiscal_year: Optional[int] = None
    end_fiscal_period: Optional[int] = None

    beg_acct_1: Optional[int] = None
    end_acct_1: Optional[int] = None
    beg_acct_2: Optional[int] = None
    end_acct_2: Optional[int] = None
    beg_acct_3: Optional[int] = None
    end_acct_3: Optional[int] = None
    beg_acct_4: Optional[int] = None
    end_acct_4: Optional[int] = None

    cost_center: Optional[str] = None
    department: Optional[str] = None
    acct_type: Optional[str] = None


PARAMETER_NAMES = tuple(f.name for f in fields(FilterParameters))
INTEGER_PARAMETERS = PARAMETER_NAMES[:12]
CODE_PARAMETERS = PARAMETER_NAMES[12:]


@dataclass(frozen=True)
class Range:
    """Inclusive integer range, the equivalent of SQL ``BETWEEN low AND high``."""

    low: int
    high: int

    def contains(self, value: int) -> bool:
        return self.low <= value <= self.high

    def mask(self, values: pd.Series) -> pd.Series:
        """Boolean mask of values inside the range (nulls never match)."""
        return values.between(self.low, self.high, inclusive="both")


@dataclass(frozen=True)
class ReportBounds:
    """
    Fully-resolved filter bounds.

    Attributes
    ----------
    fiscal_keys:
        Inclusive range on ``fiscal_year * 100 + fiscal_period``.
    segments:
        One inclusive range per account segment, in acct_1..acct_4 order.
    cost_center:
        Exact acct_1 value, or None for all cost centers.
    department:
        Exact acct_2 value, or None for all departments.
    account_type:
        Single uppercase character, or None for all account types.
    """

    fiscal_keys: Range
    segments: tuple[Range, Range, Range, Range]
    cost_center: Optional[int] = None
    department: Optional[int] = None
    account_type: Optional[str] = None


def fiscal_key(fiscal_year: int, fiscal_period: int) -> int:
    """Return the sortable cross-year ordinal ``fiscal_year * 100 + fiscal_period``."""
    return fiscal_year * 100 + fiscal_period


def parse_code(code: Union[str, int, None]) -> Optional[int]:
    """
    Parse a cost center / department selector into an integer.

    Mirrors ``TRY_CAST(@code AS int)``: anything that is not a plain signed
    integer (after trimming) resolves to None, which means "no restriction".

    Examples:
        "05"  → 5
        " 7"  → 7
        "AB"  → None
        "99999999999" → None (overflows int)
        ""    → None
        None  → None
    """
    if code is None or isinstance(code, bool):
        return None
    if isinstance(code, int):
        value = code
    else:
        text = str(code)
        if not _INT_CODE.fullmatch(text):
            return None
        value = int(text)
    if not INT_MIN <= value <= INT_MAX:
        return None
    return value


def normalize_account_type(acct_type: Optional[str]) -> Optional[str]:
    """Trim and uppercase an account type selector; blank means None."""
    if acct_type is None:
        return None
    text = str(acct_type).strip().upper()
    if not text:
        return None
    # The selector is a single-character code.
    return text[0]


def normalize_parameters(params: Optional[FilterParameters] = None) -> ReportBounds:
    """
    Resolve optional filter parameters into concrete inclusive bounds.

    Rules:
        - missing begin year → 0, missing end year → 9999,
        - missing begin period → 0, missing end period → 99 (a year given
          alone therefore covers the full year),
        - missing segment begin → 0, missing segment end → 9999 (acct_1,
          acct_2) or 999999 (acct_3, acct_4),
        - cost center / department parse failures → no restriction,
        - blank account type → no restriction.

    Args:
        params: Parameters supplied by the caller. None is equivalent to
            ``FilterParameters()`` (no filters at all).

    Returns:
        A ReportBounds instance.
    """
    if params is None:
        params = FilterParameters()

    beg_year = _or_default(params.beg_fiscal_year, MIN_FISCAL_YEAR)
    beg_period = _or_default(params.beg_fiscal_period, MIN_FISCAL_PERIOD)
    end_year = _or_default(params.end_fiscal_year, MAX_FISCAL_YEAR)
    end_period = _or_default(params.end_fiscal_period, MAX_FISCAL_PERIOD)

    fiscal_keys = Range(
        low=fiscal_key(beg_year, beg_period),
        high=fiscal_key(end_year, end_period),
    )

    segments = tuple(
        Range(
            low=_or_default(getattr(params, f"beg_acct_{i}"), SEGMENT_MIN),
            high=_or_default(getattr(params, f"end_acct_{i}"), SEGMENT_MAX[i - 1]),
        )
        for i in range(1, 5)
    )

    return ReportBounds(
        fiscal_keys=fiscal_keys,
        segments=segments,  # type: ignore[arg-type]
        cost_center=parse_code(params.cost_center),
        department=parse_code(params.department),
        account_type=normalize_account_type(params.acct_type),
    )


def _or_default(value: Optional[int], default: int) -> int:
    return default if value is None else int(value)


def coerce_key_columns(df: pd.DataFrame, columns: tuple[str, ...]) -> pd.DataFrame:
    """
    Return a copy of ``df`` with integer key columns.

    Values that are null or not numeric cannot satisfy any comparison, so
    the corresponding rows are dropped rather than raising.
    """
    out = df.copy()
    for col in columns:
        out[col] = pd.to_numeric(out[col], errors="coerce")
    out = out.dropna(subset=list(columns))
    for col in columns:
        out[col] = out[col].astype("int64")
    return out


def segment_mask(df: pd.DataFrame, bounds: ReportBounds) -> pd.Series:
    """
    Boolean mask applying segment ranges and business selectors.

    Shared by the chart and history filters so both relations are
    restricted identically:
        - acct_1..acct_4 within their resolved ranges,
        - acct_1 == cost center (when given),
        - acct_2 == department (when given).
    """
    mask = pd.Series(True, index=df.index)
    for col, rng in zip(SEGMENT_COLUMNS, bounds.segments):
        mask &= rng.mask(df[col])

    if bounds.cost_center is not None:
        mask &= df["acct_1"] == bounds.cost_center
    if bounds.department is not None:
        mask &= df["acct_2"] == bounds.department

    return mask
