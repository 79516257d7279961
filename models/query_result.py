"""
models/query_result.py
----------------------
Result of running one statement: the recordset plus the affected-row count.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class QueryResult:
    """
    Rows returned by a statement and the number of rows it touched.

    Attributes:
        recordset: Ordered rows, each a mapping from column name to value.
            Empty for statements that return no rows.
        rowcount: Rows affected by a mutation (or returned by a query).
            -1 when the driver cannot tell.
    """
    recordset: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = -1

    def first(self) -> Optional[dict[str, Any]]:
        """Returns the first row, or None for an empty recordset."""
        return self.recordset[0] if self.recordset else None
