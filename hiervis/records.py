from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from hiervis.errors import InvalidValueError, MissingFieldError, UnsupportedInputError
from hiervis.tree import Number, as_number

Record = Dict[str, Any]


def is_present(value: object) -> bool:
    """True unless the value is None or a pandas/numpy missing marker."""
    if value is None or value is pd.NA or value is pd.NaT:
        return False
    if isinstance(value, (float, np.floating)):
        return not math.isnan(value)
    if isinstance(value, np.datetime64):
        return not np.isnat(value)
    return True


def _scalar(value: object) -> object:
    if isinstance(value, np.generic):
        return value.item()
    return value


def project_row(row: Any, columns: Optional[Sequence[str]] = None) -> Record:
    if isinstance(row, pd.Series):
        items: Iterable[Tuple[Any, Any]] = row.items()
    elif hasattr(row, "_asdict"):
        items = row._asdict().items()
    elif isinstance(row, Mapping):
        items = row.items()
    elif columns is not None:
        items = zip(columns, row)
    else:
        raise UnsupportedInputError(
            "cannot project a row without field names", {"type": type(row).__name__}
        )

    values = {str(k): v for k, v in items}
    order = [str(c) for c in columns] if columns is not None else list(values)
    return {k: _scalar(values[k]) for k in order if k in values and is_present(values[k])}


def dataframe_to_records(df: Optional[pd.DataFrame]) -> List[Record]:
    if df is None:
        return []
    if not isinstance(df, pd.DataFrame):
        raise UnsupportedInputError("the input must be a DataFrame", {"type": type(df).__name__})
    df = df.reset_index(drop=True)
    columns = [str(c) for c in df.columns]
    return [project_row(row, columns) for row in df.itertuples(index=False, name=None)]


@dataclass(frozen=True)
class TabularRecords:
    """Row-oriented input: projected records plus the source column order."""

    columns: Tuple[str, ...] = ()
    records: Tuple[Record, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "TabularRecords":
        return cls(columns=tuple(str(c) for c in df.columns), records=tuple(dataframe_to_records(df)))

    @classmethod
    def from_mappings(cls, rows: Iterable[Mapping[str, Any]]) -> "TabularRecords":
        columns: List[str] = []
        records: List[Record] = []
        for row in rows:
            if not isinstance(row, Mapping):
                raise UnsupportedInputError(
                    "records must be mappings of field name to value", {"type": type(row).__name__}
                )
            for key in row:
                if str(key) not in columns:
                    columns.append(str(key))
            records.append(project_row(row))
        return cls(columns=tuple(columns), records=tuple(records))

    @classmethod
    def from_array(cls, arr: np.ndarray, columns: Optional[Sequence[str]] = None) -> "TabularRecords":
        if arr.dtype.names:
            columns = list(arr.dtype.names)
            return cls(columns=tuple(columns), records=tuple(project_row(tuple(r), columns) for r in arr))
        if arr.ndim != 2 or columns is None:
            raise UnsupportedInputError(
                "plain arrays must be 2-D and come with column names", {"ndim": arr.ndim}
            )
        if len(columns) != arr.shape[1]:
            raise UnsupportedInputError(
                "column names do not match the array width",
                {"columns": len(columns), "width": arr.shape[1]},
            )
        return cls.from_frame(pd.DataFrame(arr, columns=list(columns)))


def numeric_field(record: Record, name: str, index: int) -> Number:
    """Read a non-negative number from ``record[name]``."""
    if name not in record:
        raise MissingFieldError(name, index)
    raw = record[name]
    if isinstance(raw, bool):
        raise InvalidValueError("value must be numeric", {"field": name, "record": index, "value": repr(raw)})
    try:
        value = as_number(raw) if isinstance(raw, (int, float, np.generic)) else float(str(raw).strip())
    except (TypeError, ValueError):
        raise InvalidValueError(
            "value must be numeric", {"field": name, "record": index, "value": repr(raw)}
        ) from None
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise InvalidValueError(
            "value must be a finite non-negative number", {"field": name, "record": index, "value": repr(raw)}
        )
    return value
