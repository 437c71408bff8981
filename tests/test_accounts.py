from gl_detail.accounts import ENRICHED_CHART_COLUMNS, filter_chart, select_chart
from gl_detail.filters import FilterParameters, normalize_parameters

from conftest import make_chart


def test_select_chart_without_filters_keeps_all_rows(sample_chart) -> None:
    """Fiscal bounds never apply to chart rows, so both fiscal years stay."""
    bounds = normalize_parameters(
        FilterParameters(beg_fiscal_year=2026, end_fiscal_year=2026)
    )

    out = select_chart(sample_chart, bounds)

    assert list(out.columns) == ENRICHED_CHART_COLUMNS
    assert len(out) == len(sample_chart)
    assert set(out["fiscal_year"]) == {2025, 2026}


def test_enriched_fields(sample_chart) -> None:
    out = select_chart(sample_chart, normalize_parameters())
    by_number = out[out["fiscal_year"] == 2026].set_index("AccountNumber")

    travel = by_number.loc["01-05-100-200"]
    assert travel["CostCenterName"] == "MW - Marina Water"
    assert travel["DepartmentName"] == "Engineering"
    assert travel["AccountTypeCategory"] == "E - Expense"
    assert travel["AccountDescription"] == "Travel"

    misc = by_number.loc["06-02-300-010"]
    assert misc["CostCenterName"] == "Other/Unknown"
    assert misc["DepartmentName"] == "O&M"
    assert misc["AccountTypeCategory"] == "Unknown"

    lab = by_number.loc["02-03-150-999"]
    assert lab["CostCenterName"] == "MS - Marina Sewer"
    assert lab["AccountTypeCategory"] == "A - Asset"


def test_account_type_selector(sample_chart) -> None:
    """Null account types never match a specified selector."""
    bounds = normalize_parameters(FilterParameters(acct_type="e"))

    out = filter_chart(sample_chart, bounds)

    assert set(out["account_type"]) == {"E-Op"}
    assert len(out) == 2

    assets = filter_chart(sample_chart, normalize_parameters(FilterParameters(acct_type="A")))
    assert assets["description"].tolist() == ["Lab equipment"]


def test_cost_center_and_department_selectors(sample_chart) -> None:
    bounds = normalize_parameters(FilterParameters(cost_center="01", department="05"))

    out = filter_chart(sample_chart, bounds)

    assert set(zip(out["acct_1"], out["acct_2"])) == {(1, 5)}
    assert sorted(out["fiscal_year"]) == [2025, 2026]


def test_segment_ranges_are_inclusive(sample_chart) -> None:
    bounds = normalize_parameters(FilterParameters(beg_acct_3=100, end_acct_3=150))

    out = filter_chart(sample_chart, bounds)

    assert sorted(set(out["acct_3"])) == [100, 150]


def test_negative_segments_are_excluded_without_error() -> None:
    chart = make_chart(
        [
            (2026, -1, 5, 100, 200, None, "E", "Bad", None, None),
            (2026, 1, 5, 100, 200, None, "E", "Good", None, None),
        ]
    )

    out = select_chart(chart, normalize_parameters())

    assert out["AccountDescription"].tolist() == ["Good"]


def test_select_chart_does_not_modify_input(sample_chart) -> None:
    before = sample_chart.copy()
    select_chart(sample_chart, normalize_parameters(FilterParameters(acct_type="E")))
    assert sample_chart.equals(before)


def test_no_matching_rows_gives_empty_frame(sample_chart) -> None:
    bounds = normalize_parameters(FilterParameters(cost_center="03"))
    out = select_chart(sample_chart, bounds)
    assert out.empty
    assert list(out.columns) == ENRICHED_CHART_COLUMNS
