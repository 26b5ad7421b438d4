"""Append-only columnar output tables and their file export."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

import numpy as np

from .errors import SchemaError
from .schema import Column

_MIN_GROWTH = 16


class ColumnTable:
    """Append-only column store with one typed numpy buffer per column.

    Rows are kept in append order and are never modified once written.
    `reserve` pre-sizes the buffers for an expected number of rows; skipping
    it only costs extra reallocations.
    """

    def __init__(self, name: str, columns: Sequence[Column]):
        self.name = name
        self.columns = tuple(columns)
        self.column_names = tuple(col.name for col in self.columns)
        self._size = 0
        self._data: dict[str, np.ndarray] = {
            col.name: np.empty(0, dtype=col.dtype) for col in self.columns
        }

    def __len__(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        """Number of rows the buffers can hold without reallocating."""
        if not self.columns:
            return 0
        return len(self._data[self.column_names[0]])

    def reserve(self, n_rows: int) -> None:
        """Make room for `n_rows` more rows."""
        if n_rows < 0:
            raise ValueError("Cannot reserve a negative number of rows.")
        needed = self._size + n_rows
        if needed > self.capacity:
            self._grow(needed)

    def append(self, row: Mapping[str, Any]) -> None:
        """Append one row; keys must be exactly the declared column names."""
        if len(row) != len(self.column_names) or any(name not in row for name in self.column_names):
            missing = [name for name in self.column_names if name not in row]
            extra = [name for name in row if name not in self._data]
            raise SchemaError(
                f"Row does not match table '{self.name}' "
                f"(missing: {missing or 'none'}, unexpected: {extra or 'none'})."
            )
        if self._size == self.capacity:
            self._grow(max(2 * self.capacity, _MIN_GROWTH))
        for name in self.column_names:
            self._data[name][self._size] = row[name]
        self._size += 1

    def column(self, name: str) -> np.ndarray:
        """Return a read-only view of the filled part of one column."""
        view = self._data[name][: self._size]
        view.flags.writeable = False
        return view

    def row(self, index: int) -> dict[str, Any]:
        """Return row `index` as a name -> numpy scalar mapping."""
        if not -self._size <= index < self._size:
            raise IndexError(f"Row index {index} out of range for table '{self.name}'.")
        index %= self._size
        return {name: self._data[name][index] for name in self.column_names}

    def to_frame(self):
        """Return the table as a pandas DataFrame with the declared column order and dtypes."""
        pd = _require_pandas()
        return pd.DataFrame(
            {name: self._data[name][: self._size].copy() for name in self.column_names},
            columns=list(self.column_names),
        )

    def write(self, path: str | Path) -> Path:
        """Write the table into Parquet/CSV/Pickle, chosen by file suffix."""
        out = Path(path)
        suffix = out.suffix.lower()
        if suffix not in (".parquet", ".csv", ".pkl", ".pickle"):
            raise ValueError(
                f"Unsupported output format '{suffix}'. Use .parquet, .csv, or .pkl"
            )
        df = self.to_frame()
        if suffix == ".parquet":
            df.to_parquet(out, index=False)
        elif suffix == ".csv":
            df.to_csv(out, index=False)
        else:
            df.to_pickle(out)
        return out

    def _grow(self, capacity: int) -> None:
        for name, buf in self._data.items():
            grown = np.empty(capacity, dtype=buf.dtype)
            grown[: self._size] = buf[: self._size]
            self._data[name] = grown


def _require_pandas():
    """Import pandas lazily and provide a clear installation hint on failure."""
    try:
        import pandas as pd  # type: ignore
    except ModuleNotFoundError as exc:
        raise ModuleNotFoundError(
            "pandas is required to export output tables. Install pandas and pyarrow."
        ) from exc
    return pd
