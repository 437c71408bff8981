import pytest

from gl_detail.config import (
    DEFAULT_CONFIG_FILE,
    load_app_config,
    merge_parameters,
    parse_filter_parameters,
)
from gl_detail.filters import FilterParameters


def _write_config(tmp_path, text: str):
    path = tmp_path / "gl_detail_config.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_app_config_full(tmp_path) -> None:
    path = _write_config(
        tmp_path,
        """
[database]
engine = "sqlite"
path = "db/ledger.sqlite"

[filters]
beg_fiscal_year = 2026
end_fiscal_year = 2026

[presets.mw_engineering]
cost_center = "01"
department = "05"

[presets.cross_year]
beg_fiscal_year = 2025
beg_fiscal_period = 3
end_fiscal_year = 2026
end_fiscal_period = 2

[display]
mode = "both"
output_dir = "out"
show_summary = true
""",
    )

    config = load_app_config(str(path))

    assert config.database.engine == "sqlite"
    assert config.database.path == (tmp_path / "db" / "ledger.sqlite").resolve()
    assert config.filters == FilterParameters(beg_fiscal_year=2026, end_fiscal_year=2026)
    assert set(config.presets) == {"mw_engineering", "cross_year"}
    assert config.presets["mw_engineering"].cost_center == "01"
    assert config.presets["cross_year"].end_fiscal_period == 2
    assert config.display_mode == "both"
    assert config.output_dir == (tmp_path / "out").resolve()
    assert config.show_summary is True


def test_load_app_config_defaults_for_empty_file(tmp_path) -> None:
    path = _write_config(tmp_path, "")

    config = load_app_config(str(path))

    assert config.filters == FilterParameters()
    assert config.presets == {}
    assert config.display_mode == "table"
    assert config.database.path == (tmp_path / "data/db/gl_detail.sqlite").resolve()


def test_missing_default_file_gives_builtin_config(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert not (tmp_path / DEFAULT_CONFIG_FILE).exists()

    config = load_app_config()

    assert config.filters == FilterParameters()
    assert config.output_dir == (tmp_path / "data/output").resolve()


def test_missing_explicit_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_app_config(str(tmp_path / "nope.toml"))


def test_invalid_toml_raises_value_error(tmp_path) -> None:
    path = _write_config(tmp_path, "[filters\nbeg_fiscal_year = ")
    with pytest.raises(ValueError, match="Failed to parse"):
        load_app_config(str(path))


def test_invalid_display_mode(tmp_path) -> None:
    path = _write_config(tmp_path, '[display]\nmode = "pdf"\n')
    with pytest.raises(ValueError, match="display.mode"):
        load_app_config(str(path))


def test_show_summary_must_be_a_boolean(tmp_path) -> None:
    path = _write_config(tmp_path, '[display]\nshow_summary = "false"\n')
    with pytest.raises(ValueError, match="display.show_summary"):
        load_app_config(str(path))


def test_parse_filter_parameters_validation() -> None:
    with pytest.raises(ValueError, match="Unknown key"):
        parse_filter_parameters({"beg_year": 2026})

    with pytest.raises(ValueError, match="filters.beg_fiscal_year"):
        parse_filter_parameters({"beg_fiscal_year": "2026"})

    # Integer selector codes are accepted and kept as strings
    params = parse_filter_parameters({"cost_center": 1, "acct_type": "E"})
    assert params.cost_center == "1"
    assert params.acct_type == "E"


def test_merge_parameters_only_overrides_given_fields() -> None:
    base = FilterParameters(beg_fiscal_year=2026, end_fiscal_year=2026, acct_type="E")
    override = FilterParameters(end_fiscal_year=2027, cost_center="01")

    merged = merge_parameters(base, override)

    assert merged == FilterParameters(
        beg_fiscal_year=2026,
        end_fiscal_year=2027,
        cost_center="01",
        acct_type="E",
    )
    assert merge_parameters(base, None) is base
