"""Table and column names of the persisted entity table."""

from __future__ import annotations

TABLE_NAME = "simplenosql"
COLUMN_ROW_ID = "_id"
COLUMN_BUCKET_ID = "bucketid"
COLUMN_ENTITY_ID = "entityid"
COLUMN_DATA = "data"

SQL_CREATE_ENTRIES = f"""
    CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
        {COLUMN_ROW_ID} INTEGER PRIMARY KEY,
        {COLUMN_BUCKET_ID} TEXT,
        {COLUMN_ENTITY_ID} TEXT NOT NULL,
        {COLUMN_DATA} TEXT,
        UNIQUE({COLUMN_BUCKET_ID}, {COLUMN_ENTITY_ID}) ON CONFLICT REPLACE
    )
"""

SQL_DELETE_ENTRIES = f"DROP TABLE IF EXISTS {TABLE_NAME}"
