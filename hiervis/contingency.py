"""Contingency (cross-tabulation) tables and their flattening into path records.

A ``DimensionTable`` is the Python counterpart of a multi-way frequency table:
named dimensions with ordered level labels and one count per cell. Flattening
walks every cell, including cells with a zero count, so a flattened table
always has ``prod(len(levels))`` records.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Sequence, Tuple

import numpy as np
import pandas as pd

from hiervis.errors import ConfigurationError, InvalidValueError, MissingFieldError, UnsupportedInputError
from hiervis.records import Record
from hiervis.tree import as_number

logger = logging.getLogger(__name__)

FREQ_FIELD = "Freq"


@dataclass(frozen=True, eq=False)
class DimensionTable:
    dimensions: Tuple[Tuple[str, Tuple[str, ...]], ...]
    counts: np.ndarray

    def __post_init__(self) -> None:
        if not self.dimensions:
            raise UnsupportedInputError("a dimension table needs at least one dimension")
        names = [name for name, _ in self.dimensions]
        if len(set(names)) != len(names):
            raise UnsupportedInputError("dimension names must be unique", {"dimensions": ", ".join(names)})
        for name, levels in self.dimensions:
            if len(set(levels)) != len(levels):
                raise UnsupportedInputError("levels must be unique within a dimension", {"dimension": name})
        shape = tuple(len(levels) for _, levels in self.dimensions)
        counts = np.asarray(self.counts)
        if counts.shape != shape:
            raise UnsupportedInputError(
                "cell counts do not match the dimension levels",
                {"expected": shape, "got": counts.shape},
            )
        if not np.issubdtype(counts.dtype, np.number):
            raise InvalidValueError("cell counts must be numeric", {"dtype": str(counts.dtype)})
        if np.isnan(counts.astype(float)).any() or (counts < 0).any():
            raise InvalidValueError("cell counts must be non-negative numbers")
        object.__setattr__(self, "counts", counts)

    @classmethod
    def from_levels(cls, dimensions: Mapping[str, Sequence[object]], counts: object) -> "DimensionTable":
        dims = tuple((str(name), tuple(str(level) for level in levels)) for name, levels in dimensions.items())
        return cls(dimensions=dims, counts=np.asarray(counts))

    @classmethod
    def from_series(cls, series: pd.Series) -> "DimensionTable":
        """From a count Series indexed by one level per dimension (e.g. ``groupby(...).size()``).

        Combinations absent from the index count as 0.
        """
        index = series.index
        if isinstance(index, pd.MultiIndex):
            levels = [list(index.unique(level=i)) for i in range(index.nlevels)]
            names = [str(n) if n is not None else f"Var{i + 1}" for i, n in enumerate(index.names)]
            full = pd.MultiIndex.from_product(levels, names=index.names)
        else:
            levels = [list(index.unique())]
            names = [str(index.name) if index.name is not None else "Var1"]
            full = pd.Index(levels[0], name=index.name)
        values = series.reindex(full, fill_value=0).to_numpy()
        counts = values.reshape(tuple(len(lv) for lv in levels))
        return cls.from_levels(dict(zip(names, levels)), counts)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, dims: Sequence[str], freq: str = FREQ_FIELD) -> "DimensionTable":
        """From the long layout: one row per cell, a column per dimension plus a frequency column."""
        missing = [c for c in list(dims) + [freq] if c not in df.columns]
        if missing:
            raise MissingFieldError(missing[0], message=f"column '{missing[0]}' is missing")
        series = df.groupby(list(dims), sort=False, observed=True)[freq].sum()
        return cls.from_series(series)

    @classmethod
    def crosstab(cls, df: pd.DataFrame, dims: Sequence[str]) -> "DimensionTable":
        """Count observations per combination of ``dims``."""
        missing = [c for c in dims if c not in df.columns]
        if missing:
            raise MissingFieldError(missing[0], message=f"column '{missing[0]}' is missing")
        series = df.groupby(list(dims), sort=False, observed=True).size()
        return cls.from_series(series)

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.dimensions]

    def levels(self, name: str) -> Tuple[str, ...]:
        return dict(self.dimensions)[name]

    def total(self):
        return as_number(self.counts.sum())

    def cells(self) -> Iterable[Tuple[Tuple[str, ...], object]]:
        """Yield ``(labels, count)`` for every cell, last dimension varying fastest."""
        level_lists = [levels for _, levels in self.dimensions]
        for idx in itertools.product(*(range(len(lv)) for lv in level_lists)):
            yield tuple(level_lists[d][i] for d, i in enumerate(idx)), self.counts[idx]


def flatten(
    table: DimensionTable,
    value_field: str = FREQ_FIELD,
    path_sep: str = "/",
    path_field: str = "name",
) -> List[Record]:
    """One record per cell: level labels joined into ``path_field``, the count in ``value_field``.

    Zero-count cells are kept.
    """
    for name, levels in table.dimensions:
        for level in levels:
            if path_sep in level:
                raise ConfigurationError(
                    "level label contains the path separator",
                    {"dimension": name, "level": repr(level), "path_sep": repr(path_sep)},
                )
    records = [
        {path_field: path_sep.join(labels), value_field: as_number(count)}
        for labels, count in table.cells()
    ]
    logger.debug("flattened %d dimensions into %d records", len(table.dimensions), len(records))
    return records
