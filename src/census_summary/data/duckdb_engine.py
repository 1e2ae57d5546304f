"""DuckDB-based keyword search over catalogs and dictionaries."""

from typing import List, Optional, Sequence

import duckdb
import pandas as pd

ROW_ID = "_row"


def split_keywords(keyword: Optional[str]) -> List[str]:
    """Split a keyword string on whitespace; "*" or empty means no filter."""
    if keyword is None:
        return []
    return [kw for kw in keyword.lower().split() if kw != "*"]


class SearchEngine:
    """
    Keyword search with DuckDB.

    Every keyword must occur (case-insensitively) somewhere in the row's
    searched columns joined with spaces.
    """

    def __init__(self):
        self.conn = duckdb.connect()

    def query(self, sql: str, params: Optional[Sequence] = None) -> pd.DataFrame:
        """
        Execute a SQL query and return results as DataFrame.

        Args:
            sql: SQL query string
            params: Values for ? placeholders

        Returns:
            DataFrame with query results
        """
        result = self.conn.execute(sql, list(params or []))
        return result.fetchdf()

    def search(
        self,
        frame: pd.DataFrame,
        keyword: Optional[str],
        columns: Optional[List[str]] = None,
    ) -> pd.DataFrame:
        """
        Rows of frame matching every keyword.

        Args:
            frame: Table to search
            keyword: Space-separated keywords
            columns: Columns searched (default all)

        Returns:
            Matching rows in their original order, with the original index dropped
        """
        keywords = split_keywords(keyword)
        if not keywords:
            return frame.reset_index(drop=True)

        searched = columns or list(frame.columns)
        table = frame.reset_index(drop=True).fillna("").astype(str)
        table[ROW_ID] = range(len(table))

        combined = ", ".join(f'"{c}"' for c in searched)
        conditions = " AND ".join(["contains(lower(concat_ws(' ', " + combined + ")), ?)"] * len(keywords))
        sql = f'SELECT "{ROW_ID}" FROM search_table WHERE {conditions} ORDER BY "{ROW_ID}"'

        self.conn.register("search_table", table)
        try:
            matched = self.query(sql, keywords)[ROW_ID].tolist()
        finally:
            self.conn.unregister("search_table")

        return frame.reset_index(drop=True).iloc[matched].reset_index(drop=True)
