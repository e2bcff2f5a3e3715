# museum_inventory/utils/integrity.py

from sqlalchemy.exc import IntegrityError


def violates_unique(exc: IntegrityError, table: str, column: str) -> bool:
    """True when exc is the unique violation on table.column.

    PostgreSQL names the constraint (uq_<table>_<column>); SQLite reports
    "UNIQUE constraint failed: <table>.<column>".
    """
    message = str(exc.orig) if exc.orig is not None else str(exc)
    return f"uq_{table}_{column}" in message or f"{table}.{column}" in message


def violates_primary_key(exc: IntegrityError, table: str) -> bool:
    message = str(exc.orig) if exc.orig is not None else str(exc)
    return f"{table}_pkey" in message or f"{table}.id" in message
