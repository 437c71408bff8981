import pandas as pd

from gl_detail.filters import (
    FilterParameters,
    Range,
    coerce_key_columns,
    fiscal_key,
    normalize_account_type,
    normalize_parameters,
    parse_code,
)


def test_no_parameters_resolve_to_widest_bounds() -> None:
    """Absent filters use the legacy sentinels on every dimension."""
    bounds = normalize_parameters(FilterParameters())

    assert bounds.fiscal_keys == Range(0, 999999)
    assert bounds.segments == (
        Range(0, 9999),
        Range(0, 9999),
        Range(0, 999999),
        Range(0, 999999),
    )
    assert bounds.cost_center is None
    assert bounds.department is None
    assert bounds.account_type is None

    # None behaves like an empty parameter record
    assert normalize_parameters(None) == bounds


def test_fiscal_key_is_monotonic_across_years() -> None:
    assert fiscal_key(2025, 99) < fiscal_key(2026, 1)
    assert fiscal_key(2025, 3) == 202503


def test_cross_year_range() -> None:
    """FY2025 P3 through FY2026 P2 resolves to 202503..202602."""
    bounds = normalize_parameters(
        FilterParameters(
            beg_fiscal_year=2025,
            beg_fiscal_period=3,
            end_fiscal_year=2026,
            end_fiscal_period=2,
        )
    )

    assert bounds.fiscal_keys == Range(202503, 202602)
    assert bounds.fiscal_keys.contains(fiscal_key(2025, 12))
    assert bounds.fiscal_keys.contains(fiscal_key(2026, 2))
    assert not bounds.fiscal_keys.contains(fiscal_key(2026, 3))


def test_year_without_period_covers_full_year() -> None:
    """A year alone is equivalent to period 0 (begin) and 99 (end)."""
    year_only = normalize_parameters(
        FilterParameters(beg_fiscal_year=2026, end_fiscal_year=2026)
    )
    explicit = normalize_parameters(
        FilterParameters(
            beg_fiscal_year=2026,
            beg_fiscal_period=0,
            end_fiscal_year=2026,
            end_fiscal_period=99,
        )
    )

    assert year_only == explicit
    assert year_only.fiscal_keys == Range(202600, 202699)


def test_period_without_year_uses_year_sentinels() -> None:
    bounds = normalize_parameters(
        FilterParameters(beg_fiscal_period=3, end_fiscal_period=4)
    )
    assert bounds.fiscal_keys == Range(3, 999904)


def test_partial_segment_bounds() -> None:
    bounds = normalize_parameters(
        FilterParameters(beg_acct_3=100, end_acct_3=199, end_acct_1=5)
    )

    assert bounds.segments[0] == Range(0, 5)
    assert bounds.segments[1] == Range(0, 9999)
    assert bounds.segments[2] == Range(100, 199)
    assert bounds.segments[3] == Range(0, 999999)


def test_parse_code_behaves_like_try_cast() -> None:
    assert parse_code("01") == 1
    assert parse_code("05") == 5
    assert parse_code(" 7") == 7
    assert parse_code("-1") == -1
    assert parse_code(3) == 3
    assert parse_code("AB") is None
    assert parse_code("1A") is None
    assert parse_code("") is None
    assert parse_code("  ") is None
    assert parse_code(None) is None


def test_parse_code_out_of_int_range_is_no_restriction() -> None:
    assert parse_code("2147483647") == 2147483647
    assert parse_code("-2147483648") == -2147483648
    assert parse_code("2147483648") is None
    assert parse_code("99999999999999999999") is None
    assert parse_code(2**40) is None


def test_malformed_selectors_mean_no_restriction() -> None:
    bounds = normalize_parameters(
        FilterParameters(cost_center="XX", department="", acct_type="   ")
    )
    assert bounds.cost_center is None
    assert bounds.department is None
    assert bounds.account_type is None


def test_account_type_is_trimmed_and_uppercased() -> None:
    assert normalize_account_type(" e ") == "E"
    assert normalize_account_type("r") == "R"
    assert normalize_account_type("") is None
    assert normalize_account_type(None) is None

    bounds = normalize_parameters(
        FilterParameters(cost_center="01", department="05", acct_type="e")
    )
    assert (bounds.cost_center, bounds.department, bounds.account_type) == (1, 5, "E")


def test_coerce_key_columns_drops_unusable_keys() -> None:
    """Null or non-numeric keys can never match and are dropped."""
    df = pd.DataFrame(
        {
            "fiscal_year": [2026, None, "2026", "n/a"],
            "acct_1": [1, 1, "2", 3],
        }
    )

    out = coerce_key_columns(df, ("fiscal_year", "acct_1"))

    assert out["fiscal_year"].tolist() == [2026, 2026]
    assert out["acct_1"].tolist() == [1, 2]
    assert str(out["acct_1"].dtype) == "int64"
    # The input frame is left untouched
    assert len(df) == 4
