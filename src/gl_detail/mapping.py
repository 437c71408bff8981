# GL Detail - General Ledger transaction detail reporting
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Business label mappings for GL Detail.

This module holds the static lookup tables that turn coded account segments
into business-friendly names, and the helpers applying them:

- Cost Center (acct_1), keyed by the zero-padded 2-digit code,
- Department (acct_2), keyed by the zero-padded 2-digit code,
- Account Type Category, keyed by the leading character of
  ``gl_chart.account_type``.

Codes that are not in a table map to a fallback label. Cost center "06" has
no entry on purpose and therefore reports as "Other/Unknown".
"""

from typing import Optional

import pandas as pd

COST_CENTER_NAMES: dict[str, str] = {
    "01": "MW - Marina Water",
    "02": "MS - Marina Sewer",
    "03": "OW - Ord Water",
    "04": "OS - Ord Sewer",
    "05": "RW - Recycled Water",
    "07": "GSA - Groundwater Sustainability Agency",
}

DEPARTMENT_NAMES: dict[str, str] = {
    "01": "Administration",
    "02": "O&M",
    "03": "Lab",
    "04": "Conservation",
    "05": "Engineering",
    "06": "Water Resources - MCWD",
    "07": "Water Resources - GSA",
}

ACCOUNT_TYPE_CATEGORIES: dict[str, str] = {
    "A": "A - Asset",
    "L": "L - Liability",
    "F": "F - Fund Balance",
    "R": "R - Revenue",
    "E": "E - Expense",
}

UNMAPPED_SEGMENT_LABEL = "Other/Unknown"
UNKNOWN_ACCOUNT_TYPE_LABEL = "Unknown"

# Zero-padding widths of acct_1..acct_4 in the formatted account number.
SEGMENT_WIDTHS = (2, 2, 3, 3)


def pad_segment(value: int, width: int) -> str:
    """Zero-pad a segment value: ``pad_segment(5, 3)`` → ``'005'``."""
    return f"{int(value):0{width}d}"


def format_account_number(acct_1: int, acct_2: int, acct_3: int, acct_4: int) -> str:
    """Format the four segments as ``xx-xx-xxx-xxx`` (e.g. ``01-05-100-200``)."""
    segments = (acct_1, acct_2, acct_3, acct_4)
    return "-".join(pad_segment(v, w) for v, w in zip(segments, SEGMENT_WIDTHS))


def cost_center_name(acct_1: int) -> str:
    """Return the cost center label for an acct_1 value."""
    return COST_CENTER_NAMES.get(pad_segment(acct_1, 2), UNMAPPED_SEGMENT_LABEL)


def department_name(acct_2: int) -> str:
    """Return the department label for an acct_2 value."""
    return DEPARTMENT_NAMES.get(pad_segment(acct_2, 2), UNMAPPED_SEGMENT_LABEL)


def account_type_code(account_type: Optional[str]) -> str:
    """
    Return the leading character of an account type, trimmed and uppercased.

    Null or blank values give an empty string, which matches no selector and
    no category.
    """
    if account_type is None or pd.isna(account_type):
        return ""
    return str(account_type).strip()[:1].upper()


def account_type_category(account_type: Optional[str]) -> str:
    """Map an account type such as ``'Expense-Op'`` to ``'E - Expense'``."""
    return ACCOUNT_TYPE_CATEGORIES.get(
        account_type_code(account_type), UNKNOWN_ACCOUNT_TYPE_LABEL
    )
