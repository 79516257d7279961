"""
utils/formatting.py
-------------------
Console rendering of recordsets returned by the database layer.
"""

from typing import Any, Mapping, Sequence

import pandas as pd
from tabulate import tabulate

EMPTY_RECORDSET = "(no rows)"


def format_recordset(rows: Sequence[Mapping[str, Any]]) -> str:
    """
    Render a recordset as a grid table.

    Args:
        rows: Rows as mappings from column name to value.

    Returns:
        The table as a multi-line string, or ``(no rows)`` when empty.
    """
    if not rows:
        return EMPTY_RECORDSET
    df = pd.DataFrame([dict(r) for r in rows])
    return tabulate(df, headers="keys", tablefmt="grid", showindex=False)


def format_record(row: Mapping[str, Any]) -> str:
    """Render a single row as ``key=value`` pairs."""
    return ", ".join(f"{key}={value!r}" for key, value in row.items())
