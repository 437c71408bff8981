# GL Detail - General Ledger transaction detail reporting
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
GL Detail
---------

A Python application producing a filtered, enriched General Ledger
transaction detail report. Transaction lines (gl_history) are joined to the
chart of accounts (gl_chart) and labeled with business-friendly names.

Main capabilities:
- optional fiscal range filters with cross-year support
  (FiscalKey = fiscal_year * 100 + fiscal_period),
- account segment range filters (acct_1..acct_4),
- cost center, department and account type selectors,
- formatted account numbers ('xx-xx-xxx-xxx') and label mappings for cost
  centers, departments and account type categories,
- CSV inputs or a local SQLite copy of the ledger tables,
- console table and CSV outputs, with optional totals per cost center and
  department.

GL Detail separates computation (engine), configuration (TOML), and
presentation (CLI), making it suitable for scripting and automation.


Version: 0.1.0

Usage:
    python -m gl_detail.cli --help
"""

__all__ = ["engine", "filters", "mapping", "accounts", "history", "io", "views"]

__version__ = "0.1.0"
