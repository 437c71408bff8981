import pandas as pd
import pytest

CHART_FIELDS = [
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

HISTORY_FIELDS = [
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


def make_chart(rows) -> pd.DataFrame:
    """Build a gl_chart DataFrame from tuples in CHART_FIELDS order."""
    return pd.DataFrame(rows, columns=CHART_FIELDS)


def make_history(rows) -> pd.DataFrame:
    """Build a gl_history DataFrame from tuples in HISTORY_FIELDS order."""
    return pd.DataFrame(rows, columns=HISTORY_FIELDS)


@pytest.fixture
def sample_chart() -> pd.DataFrame:
    return make_chart(
        [
            (2026, 1, 5, 100, 200, "T100", "E-Op", "Travel", 1000.0, 0.0),
            (2026, 1, 1, 100, 100, "R100", "Revenue", "Water sales", 50000.0, 0.0),
            (2026, 6, 2, 300, 10, "X300", None, "Misc", 0.0, 0.0),
            (2025, 1, 5, 100, 200, "T100", "E-Op", "Travel", 900.0, 0.0),
            (2026, 2, 3, 150, 999, "L150", " asset", "Lab equipment", 5000.0, 100.0),
        ]
    )


@pytest.fixture
def sample_history() -> pd.DataFrame:
    return make_history(
        [
            (7, 2026, 3, 1, 5, 100, 200, 50.0, 0.0, "Flight"),
            (8, 2026, 1, 1, 1, 100, 100, 0.0, 1200.0, "Billing"),
            (9, 2026, 4, 6, 2, 300, 10, 10.0, 0.0, "Supplies"),
            (10, 2025, 12, 1, 5, 100, 200, 20.0, 0.0, "Hotel"),
            (11, 2026, 2, 9, 9, 999, 999, 5.0, 0.0, "Orphan"),
            (12, 2026, 3, 1, 5, 100, 200, 30.0, 0.0, "Taxi"),
            (13, 2026, 5, 2, 3, 150, 999, 0.0, 0.0, "Calibration"),
        ]
    )
