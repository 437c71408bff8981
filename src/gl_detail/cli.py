# GL Detail - General Ledger transaction detail reporting
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Command-Line Interface (CLI) for GL Detail.

This module wires together the building blocks of GL Detail:

- configuration (database, default filters, presets, display options),
- CSV inputs and the local SQLite store,
- the report engine,
- view helpers (summary, CSV export).

The CLI is intentionally thin: it does not implement any filtering or
enrichment logic itself.


High-level pipeline
-------------------

1) Load the TOML configuration (gl_detail_config.toml by default, built-in
   defaults if that file does not exist).

2) Optionally import chart / history CSV exports into the database
   (--import-chart, --import-history).

3) Resolve the report filters, from lowest to highest priority:
   [filters] section of the config, --preset NAME, individual flags.

4) Load the chart of accounts and the transaction history, either directly
   from CSV files (--chart-csv and --history-csv) or from the database.

5) Build the report, warn about transactions that have no chart row, and
   render the report as a console table and/or CSV files.


Examples
--------

    # FY 2026 only (all periods)
    python -m gl_detail.cli --beg-fiscal-year 2026 --end-fiscal-year 2026

    # FY 2025 P3 through FY 2026 P2
    python -m gl_detail.cli --beg-fiscal-year 2025 --beg-fiscal-period 3 \\
        --end-fiscal-year 2026 --end-fiscal-period 2

    # Expenses for MW (01), FY 2026, from CSV exports
    python -m gl_detail.cli --chart-csv gl_chart.csv --history-csv gl_history.csv \\
        --beg-fiscal-year 2026 --end-fiscal-year 2026 --cost-center 01 --acct-type E
"""

import argparse
from pathlib import Path
from typing import Optional

from . import __version__
from .config import DISPLAY_MODES, load_app_config, merge_parameters
from .db import (
    has_history,
    import_chart,
    import_history,
    init_database,
    load_chart,
    load_history,
)
from .engine import build_report, unmatched_history
from .filters import FilterParameters
from .io import read_chart_accounts, read_history_lines
from .views import summarize_report, unmatched_to_summary, write_report_csv


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the CLI."""
    ap = argparse.ArgumentParser(
        prog="python -m gl_detail.cli",
        description=(
            "GL Detail - General Ledger transaction detail report. "
            "Joins transaction history to the chart of accounts, attaches cost "
            "center, department and account type names, and applies optional "
            "fiscal range, account segment and business filters."
        ),
    )

    ap.add_argument(
        "--version",
        action="store_true",
        help="Show the installed version of gl_detail and exit.",
    )
    ap.add_argument(
        "--config",
        dest="config_path",
        help=(
            "Path to the TOML configuration file. If omitted, "
            "'gl_detail_config.toml' in the current directory is used when present."
        ),
    )

    # Data sources
    src = ap.add_argument_group("data sources")
    src.add_argument(
        "--import-chart",
        dest="import_chart_path",
        metavar="CSV_PATH",
        help="Import a gl_chart CSV export into the database before reporting.",
    )
    src.add_argument(
        "--import-history",
        dest="import_history_path",
        metavar="CSV_PATH",
        help="Import a gl_history CSV export into the database before reporting.",
    )
    src.add_argument(
        "--chart-csv",
        dest="chart_csv",
        metavar="CSV_PATH",
        help="Read the chart of accounts from this CSV instead of the database.",
    )
    src.add_argument(
        "--history-csv",
        dest="history_csv",
        metavar="CSV_PATH",
        help="Read the transaction history from this CSV instead of the database.",
    )

    # Filters
    flt = ap.add_argument_group("filters (omitted = all)")
    flt.add_argument(
        "--preset",
        help="Apply a named filter preset from the [presets] config section.",
    )
    flt.add_argument(
        "--list-presets",
        action="store_true",
        help="List the filter presets defined in the configuration and exit.",
    )
    flt.add_argument("--beg-fiscal-year", dest="beg_fiscal_year", type=int)
    flt.add_argument("--beg-fiscal-period", dest="beg_fiscal_period", type=int)
    flt.add_argument("--end-fiscal-year", dest="end_fiscal_year", type=int)
    flt.add_argument("--end-fiscal-period", dest="end_fiscal_period", type=int)
    for i in range(1, 5):
        flt.add_argument(f"--beg-acct-{i}", dest=f"beg_acct_{i}", type=int)
        flt.add_argument(f"--end-acct-{i}", dest=f"end_acct_{i}", type=int)
    flt.add_argument(
        "--cost-center",
        dest="cost_center",
        help="Cost center code matched against acct_1 (e.g. 01 = MW).",
    )
    flt.add_argument(
        "--department",
        dest="department",
        help="Department code matched against acct_2 (e.g. 05 = Engineering).",
    )
    flt.add_argument(
        "--acct-type",
        dest="acct_type",
        help="Account type: A, L, F, R or E.",
    )

    # Display options
    ap.add_argument(
        "--display-mode",
        dest="display_mode",
        choices=list(DISPLAY_MODES),
        help=(
            "Override the display.mode setting from the configuration file. "
            "'table' prints results to stdout, "
            "'csv' writes CSV files only, "
            "'both' does both."
        ),
    )
    ap.add_argument(
        "--output",
        dest="output_dir",
        help=(
            "Output directory where CSV files will be written when display "
            "mode includes 'csv'. Defaults to display.output_dir from config."
        ),
    )
    ap.add_argument(
        "--summary",
        action="store_true",
        help="Also render totals per cost center and department.",
    )

    return ap


def _parameters_from_args(args: argparse.Namespace) -> FilterParameters:
    """Collect the filter flags given on the command line."""
    names = [
        "beg_fiscal_year",
        "beg_fiscal_period",
        "end_fiscal_year",
        "end_fiscal_period",
    ]
    for i in range(1, 5):
        names += [f"beg_acct_{i}", f"end_acct_{i}"]
    names += ["cost_center", "department", "acct_type"]
    return FilterParameters(**{name: getattr(args, name) for name in names})


def _describe_parameters(params: FilterParameters) -> str:
    parts = [
        f"{name}={value!r}"
        for name, value in vars(params).items()
        if value is not None
    ]
    return ", ".join(parts) if parts else "none (all transactions)"


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the GL Detail CLI.

    This function parses command-line arguments, loads the configuration,
    optionally imports CSV exports into the database, resolves filters,
    loads the chart of accounts and transaction history, builds the report
    and renders it as a console table and/or CSV files.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"gl_detail version {__version__}")
        return

    # 1) Configuration
    config = load_app_config(args.config_path)

    if args.list_presets:
        if not config.presets:
            print("No presets defined in the configuration.")
        for name, preset in sorted(config.presets.items()):
            print(f"{name}: {_describe_parameters(preset)}")
        return

    # 2) Optional imports into the database
    for path_raw, label, reader, importer in (
        (args.import_chart_path, "chart of accounts", read_chart_accounts, import_chart),
        (args.import_history_path, "transaction lines", read_history_lines, import_history),
    ):
        if not path_raw:
            continue
        csv_path = Path(path_raw)
        if not csv_path.is_file():
            parser.error(f"CSV file for import not found: {csv_path}")

        print(f"Importing {label} from {csv_path} into the database...")
        stats = importer(reader(csv_path), config.database, source_label=str(csv_path))
        print(
            f"Imported batch #{stats.batch_id}: "
            f"{stats.rows_inserted} new rows, {stats.rows_skipped} existing."
        )

    # 3) Filters: config defaults < preset < CLI flags
    params = config.filters
    if args.preset:
        if args.preset not in config.presets:
            known = ", ".join(sorted(config.presets)) or "none"
            parser.error(f"Unknown preset {args.preset!r} (available: {known}).")
        params = merge_parameters(params, config.presets[args.preset])
    params = merge_parameters(params, _parameters_from_args(args))

    # 4) Inputs
    if args.chart_csv or args.history_csv:
        if not (args.chart_csv and args.history_csv):
            parser.error("--chart-csv and --history-csv must be used together.")
        for path_raw in (args.chart_csv, args.history_csv):
            if not Path(path_raw).is_file():
                parser.error(f"CSV file not found: {path_raw}")
        chart = read_chart_accounts(args.chart_csv)
        history = read_history_lines(args.history_csv)
        print(f"Source: CSV files ({args.chart_csv}, {args.history_csv})")
    else:
        init_database(config.database)
        if not has_history(config.database):
            print(
                "Warning: database is empty; use --import-chart and "
                "--import-history to load the ledger tables."
            )
        chart = load_chart(config.database)
        history = load_history(config.database)
        print(f"Source: database {config.database.path}")

    print(f"Chart accounts: {len(chart)}, transaction lines: {len(history)}")
    print(f"Applied filters: {_describe_parameters(params)}")

    # 5) Report
    report = build_report(chart, history, params)
    print(f"Report lines: {len(report)}")
    if report.empty:
        print("Warning: no transaction lines match the selected filters.")

    unmatched = unmatched_history(chart, history, params)
    if not unmatched.empty:
        print(
            f"Warning: {len(unmatched)} transaction line(s) have no chart of "
            "accounts row and were excluded:"
        )
        for row in unmatched_to_summary(unmatched).itertuples(index=False):
            print(
                f"  {row.AccountNumber} (FY {row.fiscal_year}): "
                f"{row.line_count} line(s)"
            )

    want_summary = args.summary or config.show_summary
    summary = summarize_report(report) if want_summary else None

    display_mode = args.display_mode or config.display_mode

    # 6) Render to console
    if display_mode in {"table", "both"}:
        print()
        print("=== GL Transaction Detail ===")
        print(report.to_string(index=False))

        if summary is not None:
            print()
            print("=== Totals by Cost Center / Department ===")
            print(summary.to_string(index=False))

    # 7) Render to CSV files
    if display_mode in {"csv", "both"}:
        output_dir = Path(args.output_dir) if args.output_dir else config.output_dir

        path = write_report_csv(report, output_dir, "gl_transaction_detail")
        print(f"Wrote {path} ({len(report)} rows)")

        if summary is not None:
            path = write_report_csv(summary, output_dir, "gl_detail_summary")
            print(f"Wrote {path} ({len(summary)} rows)")


if __name__ == "__main__":
    main()
