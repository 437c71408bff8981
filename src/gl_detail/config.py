# GL Detail - General Ledger transaction detail reporting
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Configuration helpers for GL Detail.

This module is responsible for:
- loading the application configuration from a TOML file,
- parsing default report filters and named filter presets,
- exposing typed dataclasses used by the rest of the application.

Example configuration
---------------------

    [database]
    engine = "sqlite"
    path = "data/db/gl_detail.sqlite"

    [filters]
    beg_fiscal_year = 2026
    end_fiscal_year = 2026

    [presets.cross_year]
    beg_fiscal_year = 2025
    beg_fiscal_period = 3
    end_fiscal_year = 2026
    end_fiscal_period = 2

    [presets.mw_engineering]
    cost_center = "01"
    department = "05"

    [display]
    mode = "table"
    output_dir = "data/output"
    show_summary = false
"""

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from .db import DatabaseConfig
from .filters import CODE_PARAMETERS, INTEGER_PARAMETERS, FilterParameters

DEFAULT_CONFIG_FILE = "gl_detail_config.toml"
DEFAULT_DATABASE_PATH = "data/db/gl_detail.sqlite"
DEFAULT_OUTPUT_DIR = "data/output"
DISPLAY_MODES = ("table", "csv", "both")


@dataclass(frozen=True)
class AppConfig:
    """
    Application-wide configuration for GL Detail.

    This aggregates:
    - the database configuration (where imported ledger tables are stored),
    - the default report filters,
    - named filter presets,
    - display options for the report output.
    """

    database: DatabaseConfig
    filters: FilterParameters
    presets: dict[str, FilterParameters]
    display_mode: str
    output_dir: Path
    show_summary: bool


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the TOML content cannot be parsed.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Failed to parse TOML config file: {path}") from exc


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    """Return a sub-table, or an empty mapping when absent or malformed."""
    value = raw.get(name) or {}
    if not isinstance(value, Mapping):
        return {}
    return value


def parse_filter_parameters(
    data: Mapping[str, Any], where: str = "filters"
) -> FilterParameters:
    """
    Build FilterParameters from a TOML table.

    Integer keys (fiscal years/periods, segment bounds) must be integers.
    Selector keys (cost_center, department, acct_type) are kept as strings;
    integers are accepted and converted (``cost_center = 1`` → ``"1"``).

    Args:
        data: The TOML table (e.g. ``[filters]`` or ``[presets.<name>]``).
        where: Table name used in error messages.

    Raises:
        ValueError: on unknown keys or values of the wrong type.
    """
    unknown = set(data).difference(INTEGER_PARAMETERS + CODE_PARAMETERS)
    if unknown:
        keys = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown key(s) in [{where}]: {keys}")

    values: dict[str, Any] = {}
    for key, value in data.items():
        if key in INTEGER_PARAMETERS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(
                    f"Invalid value for '{where}.{key}' in the configuration. "
                    "Expected an integer."
                )
            values[key] = value
        else:
            if isinstance(value, bool) or not isinstance(value, (str, int)):
                raise ValueError(
                    f"Invalid value for '{where}.{key}' in the configuration. "
                    "Expected a string code."
                )
            values[key] = str(value)

    return FilterParameters(**values)


def merge_parameters(
    base: FilterParameters, override: Optional[FilterParameters]
) -> FilterParameters:
    """
    Overlay ``override`` on ``base`` field by field.

    Only fields set (non-None) in ``override`` replace the base value, so
    configuration defaults, presets and CLI flags can be layered.
    """
    if override is None:
        return base
    changes = {
        f.name: getattr(override, f.name)
        for f in fields(override)
        if getattr(override, f.name) is not None
    }
    return replace(base, **changes)


def default_app_config(base_dir: Optional[Path] = None) -> AppConfig:
    """Return the built-in configuration (no filters, table display)."""
    base = (base_dir or Path.cwd()).resolve()
    return AppConfig(
        database=DatabaseConfig(
            engine="sqlite", path=(base / DEFAULT_DATABASE_PATH).resolve()
        ),
        filters=FilterParameters(),
        presets={},
        display_mode="table",
        output_dir=(base / DEFAULT_OUTPUT_DIR).resolve(),
        show_summary=False,
    )


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the GL Detail application configuration from a TOML file.

    Expected top-level sections in the TOML file (all optional)
    ------------------------------------------------------------
    [database]
        Database engine and SQLite file path.

    [filters]
        Default report filters (see FilterParameters for the keys).

    [presets.<name>]
        Named filter sets, selectable from the CLI with --preset.

    [display]
        Output mode (table, csv, both), CSV output directory and whether to
        print the cost center / department summary.

    Notes
    -----
    - All file paths in the TOML are resolved relative to the directory of
      the TOML file itself.
    - When no path is given and 'gl_detail_config.toml' does not exist in
      the current directory, the built-in defaults are returned.

    Parameters
    ----------
    config_path:
        Path to the TOML configuration file.

    Returns
    -------
    AppConfig
        Parsed and validated application configuration.

    Raises
    ------
    FileNotFoundError
        If an explicit config_path does not exist.
    ValueError
        If the file cannot be parsed or contains invalid values.
    """
    if config_path is None:
        config_file = Path(DEFAULT_CONFIG_FILE).resolve()
        if not config_file.is_file():
            return default_app_config()
    else:
        config_file = Path(config_path).resolve()

    raw = _load_toml(config_file)
    base_dir = config_file.parent

    # 1) Database section
    database_section = _section(raw, "database")
    db_engine = str(database_section.get("engine") or "sqlite")
    db_path_raw = database_section.get("path") or DEFAULT_DATABASE_PATH
    database = DatabaseConfig(
        engine=db_engine, path=(base_dir / str(db_path_raw)).resolve()
    )

    # 2) Default filters
    filters = parse_filter_parameters(_section(raw, "filters"))

    # 3) Presets
    presets: dict[str, FilterParameters] = {}
    for name, table in _section(raw, "presets").items():
        if not isinstance(table, Mapping):
            raise ValueError(f"Preset '{name}' must be a table ([presets.{name}]).")
        presets[str(name)] = parse_filter_parameters(table, where=f"presets.{name}")

    # 4) Display options
    display_section = _section(raw, "display")

    display_mode = str(display_section.get("mode", "table"))
    if display_mode not in DISPLAY_MODES:
        raise ValueError(
            f"Invalid value for 'display.mode': {display_mode!r}. "
            f"Expected one of: {', '.join(DISPLAY_MODES)}."
        )

    output_dir_raw = display_section.get("output_dir") or DEFAULT_OUTPUT_DIR
    output_dir = (base_dir / str(output_dir_raw)).resolve()
    show_summary = display_section.get("show_summary", False)
    if not isinstance(show_summary, bool):
        raise ValueError(
            "Invalid value for 'display.show_summary': expected true or false, "
            f"got {show_summary!r}."
        )

    return AppConfig(
        database=database,
        filters=filters,
        presets=presets,
        display_mode=display_mode,
        output_dir=output_dir,
        show_summary=show_summary,
    )
