"""A simplified interface over driver cursors"""
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence

import pandas as pd


@dataclass
class QueryResult:
    """Results and metadata of one executed statement"""
    _cursor: Any

    @property
    def query_id(self) -> str:
        """The driver's query ID (sfqid)"""
        return self._cursor.sfqid

    @property
    def rowcount(self) -> int:
        """The number of rows affected or returned, -1 when unknown"""
        return self._cursor.rowcount if self._cursor.rowcount is not None else -1

    @property
    def sql(self) -> str:
        """The SQL statement that was executed"""
        return self._cursor.query

    @property
    def description(self) -> Optional[list[tuple]]:
        return self._cursor.description

    @property
    def columns(self) -> list[str]:
        """Lowercase result column names"""
        if not self._cursor.description:
            return []
        return [desc[0].lower() for desc in self._cursor.description]

    def fetch_one(self) -> Optional[tuple[Any, ...]]:
        """Fetch the next row of a query result set"""
        return self._cursor.fetchone()

    def fetch_all(self) -> list[tuple[Any, ...]]:
        """Fetch all remaining rows of a query result set"""
        result = self._cursor.fetchall()
        return result if result else []

    def iter_dicts(self, fields: Optional[Sequence[str]] = None) -> Iterator[dict[str, Any]]:
        """Yield remaining rows one at a time as dicts.

        Keys are ``fields`` when given, otherwise the lowercase column names.
        """
        names = list(fields) if fields else self.columns
        while True:
            row = self._cursor.fetchone()
            if row is None:
                return
            if len(row) != len(names):
                raise ValueError(
                    f"Row has {len(row)} values but {len(names)} field names were given"
                )
            yield dict(zip(names, row))

    def fetch_dicts(self, fields: Optional[Sequence[str]] = None) -> list[dict[str, Any]]:
        """Fetch all remaining rows as dicts"""
        return list(self.iter_dicts(fields))

    def to_df(self, lowercase_columns: bool = True) -> pd.DataFrame:
        """Fetch all remaining rows as a DataFrame"""
        if self._cursor.description:
            columns = [desc[0] for desc in self._cursor.description]
            df = pd.DataFrame(self.fetch_all(), columns=columns)
        else:
            df = pd.DataFrame()

        if lowercase_columns and len(df.columns) > 0:
            df.columns = df.columns.str.lower()

        return df

    def __repr__(self) -> str:
        return (
            f"QueryResult(query_id='{self.query_id}', "
            f"rowcount={self.rowcount})"
        )
