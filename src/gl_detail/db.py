# GL Detail - General Ledger transaction detail reporting
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.


"""
Database layer for GL Detail.

This module provides a local SQLite copy of the two ledger tables the report
reads from, so that exports from the accounting system can be imported once
and reported on many times.

------------------------------------------------------------------------------
Schema Overview
------------------------------------------------------------------------------

1) import_batches
   One row per import.

   - id             INTEGER PRIMARY KEY AUTOINCREMENT
   - created_at     TEXT    NOT NULL (ISO datetime, UTC)
   - target_table   TEXT    NOT NULL  -- "gl_chart" | "gl_history"
   - source_label   TEXT    NOT NULL  -- file path, connector name, etc.
   - rows_inserted  INTEGER NOT NULL
   - rows_skipped   INTEGER NOT NULL  -- replaced chart rows / existing ids

2) gl_chart
   Chart of accounts, one row per (fiscal_year, acct_1..acct_4).

   - fiscal_year, acct_1, acct_2, acct_3, acct_4  INTEGER NOT NULL (PK)
   - alfre, account_type, description             TEXT
   - budget_cents, encumbered_cents               INTEGER (nullable)
   - import_batch_id                              INTEGER NOT NULL

3) gl_history
   Transaction line items.

   - gl_history_id    INTEGER PRIMARY KEY
   - fiscal_year, fiscal_period, acct_1..acct_4  INTEGER NOT NULL
   - dr_cents, cr_cents                          INTEGER (nullable)
   - description                                 TEXT
   - import_batch_id                             INTEGER NOT NULL

------------------------------------------------------------------------------
SQLite Notes
------------------------------------------------------------------------------

- Amounts are stored as signed integer cents and converted back to float
  when loading, as for the rest of the application.
- Chart imports replace rows with the same key (latest import wins).
- History imports never overwrite: a line whose gl_history_id already exists
  is skipped and counted in ``rows_skipped``.
- Foreign key enforcement is explicitly enabled.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from .accounts import CHART_COLUMNS
from .history import HISTORY_COLUMNS

# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Database configuration for GL Detail.

    Attributes
    ----------
    engine:
        Database engine identifier. Only "sqlite" is supported.
    path:
        Path to the SQLite database file.
    """

    engine: str
    path: Path


@dataclass(frozen=True)
class ImportStats:
    """
    Summary of an import into the database.

    Attributes
    ----------
    batch_id:
        Identifier of the batch row in `import_batches`.
    rows_inserted:
        Number of new rows written.
    rows_skipped:
        For gl_chart, number of existing rows replaced; for gl_history,
        number of lines ignored because their id already existed.
    """

    batch_id: int
    rows_inserted: int
    rows_skipped: int


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _ensure_sqlite(cfg: DatabaseConfig) -> None:
    """Raise if the configuration does not refer to a supported engine."""
    if cfg.engine.lower() != "sqlite":
        msg = (
            f"Unsupported database engine: {cfg.engine!r}. "
            "Only 'sqlite' is supported for now."
        )
        raise ValueError(msg)


def _connect(cfg: DatabaseConfig) -> sqlite3.Connection:
    """
    Open a SQLite connection with foreign keys enabled.

    The caller is responsible for closing the connection.
    """
    _ensure_sqlite(cfg)
    conn = sqlite3.connect(cfg.path)
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def _create_schema_if_needed(conn: sqlite3.Connection) -> None:
    """
    Create tables and indexes if they do not exist yet.

    This function is idempotent and can be called multiple times safely.
    """
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS import_batches (
            id            INTEGER PRIMARY KEY AUTOINCREMENT,
            created_at    TEXT    NOT NULL,
            target_table  TEXT    NOT NULL,
            source_label  TEXT    NOT NULL,
            rows_inserted INTEGER NOT NULL DEFAULT 0,
            rows_skipped  INTEGER NOT NULL DEFAULT 0
        );
        """
    )

    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS gl_chart (
            fiscal_year      INTEGER NOT NULL,
            acct_1           INTEGER NOT NULL,
            acct_2           INTEGER NOT NULL,
            acct_3           INTEGER NOT NULL,
            acct_4           INTEGER NOT NULL,
            alfre            TEXT,
            account_type     TEXT,
            description      TEXT,
            budget_cents     INTEGER,
            encumbered_cents INTEGER,
            import_batch_id  INTEGER NOT NULL,

            PRIMARY KEY (fiscal_year, acct_1, acct_2, acct_3, acct_4),
            FOREIGN KEY (import_batch_id) REFERENCES import_batches(id)
        );
        """
    )

    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS gl_history (
            gl_history_id   INTEGER PRIMARY KEY,
            fiscal_year     INTEGER NOT NULL,
            fiscal_period   INTEGER NOT NULL,
            acct_1          INTEGER NOT NULL,
            acct_2          INTEGER NOT NULL,
            acct_3          INTEGER NOT NULL,
            acct_4          INTEGER NOT NULL,
            dr_cents        INTEGER,
            cr_cents        INTEGER,
            description     TEXT,
            import_batch_id INTEGER NOT NULL,

            FOREIGN KEY (import_batch_id) REFERENCES import_batches(id)
        );
        """
    )

    conn.execute(
        """
        CREATE INDEX IF NOT EXISTS idx_gl_history_account
            ON gl_history(fiscal_year, acct_1, acct_2, acct_3, acct_4);
        """
    )

    conn.commit()


def _ensure_dataframe_columns(df: pd.DataFrame, required: list[str]) -> None:
    """Validate that the DataFrame contains the expected columns."""
    missing = set(required).difference(df.columns)
    if missing:
        cols = ", ".join(sorted(missing))
        msg = f"DataFrame is missing required column(s): {cols}"
        raise ValueError(msg)


def _to_cents(value) -> int | None:
    """Convert an amount to integer cents, keeping nulls as NULL."""
    if value is None or pd.isna(value):
        return None
    return int(round(float(value) * 100))


def _to_text(value) -> str | None:
    if value is None or pd.isna(value):
        return None
    return str(value)


def _now_utc_iso() -> str:
    """Return the current UTC datetime as ISO string."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _create_batch(cur: sqlite3.Cursor, target_table: str, source_label: str) -> int:
    cur.execute(
        """
        INSERT INTO import_batches (created_at, target_table, source_label)
        VALUES (?, ?, ?);
        """,
        (_now_utc_iso(), target_table, source_label),
    )
    return int(cur.lastrowid)


def _close_batch(
    cur: sqlite3.Cursor, batch_id: int, rows_inserted: int, rows_skipped: int
) -> None:
    cur.execute(
        """
        UPDATE import_batches
           SET rows_inserted = ?, rows_skipped = ?
         WHERE id = ?;
        """,
        (rows_inserted, rows_skipped, batch_id),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def init_database(cfg: DatabaseConfig) -> None:
    """
    Initialize the database schema if needed.

    - Creates the SQLite file (and its parent directory) if missing.
    - Creates tables and indexes if they are missing.
    - This function is idempotent: calling it multiple times is safe.

    Raises
    ------
    ValueError
        If cfg.engine is not supported.
    sqlite3.Error
        If schema creation fails.
    """
    _ensure_sqlite(cfg)
    cfg.path.parent.mkdir(parents=True, exist_ok=True)

    conn = _connect(cfg)
    try:
        _create_schema_if_needed(conn)
    finally:
        conn.close()


def import_chart(
    df: pd.DataFrame,
    cfg: DatabaseConfig,
    *,
    source_label: str,
) -> ImportStats:
    """
    Import chart of accounts rows into `gl_chart`.

    Rows are upserted on (fiscal_year, acct_1..acct_4): an existing row with
    the same key is replaced and counted in ``rows_skipped``.

    Parameters
    ----------
    df:
        Normalized chart rows (see io.read_chart_accounts).
    cfg:
        Database configuration.
    source_label:
        Human-readable label for the batch, e.g. a filename.

    Raises
    ------
    ValueError
        If df does not contain the chart columns.
    sqlite3.Error
        If database operations fail.
    """
    _ensure_dataframe_columns(df, CHART_COLUMNS)
    init_database(cfg)

    conn = _connect(cfg)
    try:
        cur = conn.cursor()
        batch_id = _create_batch(cur, "gl_chart", source_label)

        rows_inserted = 0
        rows_replaced = 0

        for row in df.itertuples(index=False):
            key = (
                int(row.fiscal_year),
                int(row.acct_1),
                int(row.acct_2),
                int(row.acct_3),
                int(row.acct_4),
            )
            cur.execute(
                """
                SELECT 1 FROM gl_chart
                 WHERE fiscal_year = ? AND acct_1 = ? AND acct_2 = ?
                   AND acct_3 = ? AND acct_4 = ?;
                """,
                key,
            )
            exists = cur.fetchone() is not None

            cur.execute(
                """
                INSERT OR REPLACE INTO gl_chart (
                    fiscal_year, acct_1, acct_2, acct_3, acct_4,
                    alfre, account_type, description,
                    budget_cents, encumbered_cents,
                    import_batch_id
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
                """,
                key
                + (
                    _to_text(row.alfre),
                    _to_text(row.account_type),
                    _to_text(row.description),
                    _to_cents(row.budget),
                    _to_cents(row.encumbered_amt),
                    batch_id,
                ),
            )

            if exists:
                rows_replaced += 1
            else:
                rows_inserted += 1

        _close_batch(cur, batch_id, rows_inserted, rows_replaced)
        conn.commit()

        return ImportStats(
            batch_id=batch_id,
            rows_inserted=rows_inserted,
            rows_skipped=rows_replaced,
        )
    finally:
        conn.close()


def import_history(
    df: pd.DataFrame,
    cfg: DatabaseConfig,
    *,
    source_label: str,
) -> ImportStats:
    """
    Import transaction lines into `gl_history`.

    Lines whose gl_history_id already exists are left untouched and counted
    in ``rows_skipped``.

    Parameters
    ----------
    df:
        Normalized history lines (see io.read_history_lines).
    cfg:
        Database configuration.
    source_label:
        Human-readable label for the batch, e.g. a filename.

    Raises
    ------
    ValueError
        If df does not contain the history columns.
    sqlite3.Error
        If database operations fail.
    """
    _ensure_dataframe_columns(df, HISTORY_COLUMNS)
    init_database(cfg)

    conn = _connect(cfg)
    try:
        cur = conn.cursor()
        batch_id = _create_batch(cur, "gl_history", source_label)

        rows_inserted = 0
        rows_skipped = 0

        for row in df.itertuples(index=False):
            cur.execute(
                """
                INSERT OR IGNORE INTO gl_history (
                    gl_history_id, fiscal_year, fiscal_period,
                    acct_1, acct_2, acct_3, acct_4,
                    dr_cents, cr_cents, description,
                    import_batch_id
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
                """,
                (
                    int(row.gl_history_id),
                    int(row.fiscal_year),
                    int(row.fiscal_period),
                    int(row.acct_1),
                    int(row.acct_2),
                    int(row.acct_3),
                    int(row.acct_4),
                    _to_cents(row.dr_amount),
                    _to_cents(row.cr_amount),
                    _to_text(row.description),
                    batch_id,
                ),
            )
            if cur.rowcount == 1:
                rows_inserted += 1
            else:
                rows_skipped += 1

        _close_batch(cur, batch_id, rows_inserted, rows_skipped)
        conn.commit()

        return ImportStats(
            batch_id=batch_id,
            rows_inserted=rows_inserted,
            rows_skipped=rows_skipped,
        )
    finally:
        conn.close()


def load_chart(cfg: DatabaseConfig) -> pd.DataFrame:
    """
    Load the chart of accounts from the database.

    Returns
    -------
    pandas.DataFrame
        A DataFrame with the accounts.CHART_COLUMNS; budget and
        encumbered_amt are reconstructed from cents. Empty (with the same
        columns) if the table is empty.
    """
    init_database(cfg)

    conn = _connect(cfg)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            SELECT fiscal_year, acct_1, acct_2, acct_3, acct_4,
                   alfre, account_type, description,
                   budget_cents, encumbered_cents
              FROM gl_chart
             ORDER BY fiscal_year, acct_1, acct_2, acct_3, acct_4;
            """
        )
        rows = cur.fetchall()
    finally:
        conn.close()

    if not rows:
        return pd.DataFrame(columns=CHART_COLUMNS)

    raw_columns = CHART_COLUMNS[:8] + ["budget_cents", "encumbered_cents"]
    df = pd.DataFrame(rows, columns=raw_columns)
    df["budget"] = df["budget_cents"].astype(float) / 100.0
    df["encumbered_amt"] = df["encumbered_cents"].astype(float) / 100.0
    return df[CHART_COLUMNS]


def load_history(cfg: DatabaseConfig) -> pd.DataFrame:
    """
    Load all transaction lines from the database.

    Returns
    -------
    pandas.DataFrame
        A DataFrame with the history.HISTORY_COLUMNS; dr_amount and
        cr_amount are reconstructed from cents. Empty (with the same
        columns) if the table is empty.
    """
    init_database(cfg)

    conn = _connect(cfg)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            SELECT gl_history_id, fiscal_year, fiscal_period,
                   acct_1, acct_2, acct_3, acct_4,
                   dr_cents, cr_cents, description
              FROM gl_history
             ORDER BY gl_history_id;
            """
        )
        rows = cur.fetchall()
    finally:
        conn.close()

    if not rows:
        return pd.DataFrame(columns=HISTORY_COLUMNS)

    raw_columns = HISTORY_COLUMNS[:7] + ["dr_cents", "cr_cents", "description"]
    df = pd.DataFrame(rows, columns=raw_columns)
    df["dr_amount"] = df["dr_cents"].astype(float) / 100.0
    df["cr_amount"] = df["cr_cents"].astype(float) / 100.0
    return df[HISTORY_COLUMNS]


def has_history(cfg: DatabaseConfig) -> bool:
    """
    Return True if the database contains at least one line in `gl_history`.

    Useful to warn the user when a report is requested on an empty DB.
    """
    init_database(cfg)

    conn = _connect(cfg)
    try:
        cur = conn.cursor()
        cur.execute("SELECT 1 FROM gl_history LIMIT 1;")
        return cur.fetchone() is not None
    finally:
        conn.close()


def list_import_batches(cfg: DatabaseConfig) -> pd.DataFrame:
    """
    Return the list of import batches stored in the database, newest first.

    Columns:
    - id
    - created_at
    - target_table
    - source_label
    - rows_inserted
    - rows_skipped
    """
    columns = [
        "id",
        "created_at",
        "target_table",
        "source_label",
        "rows_inserted",
        "rows_skipped",
    ]
    init_database(cfg)

    conn = _connect(cfg)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            SELECT id, created_at, target_table, source_label,
                   rows_inserted, rows_skipped
              FROM import_batches
             ORDER BY id DESC;
            """
        )
        rows = cur.fetchall()
    finally:
        conn.close()

    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(rows, columns=columns)
    df["created_at"] = pd.to_datetime(df["created_at"])
    return df
