from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Optional, Tuple, Union

import numpy as np
import pandas as pd

from hiervis.contingency import FREQ_FIELD, DimensionTable, flatten
from hiervis.errors import ConfigurationError, MissingFieldError, UnsupportedInputError
from hiervis.options import HiervisOptions, normalize_options
from hiervis.parents import build_from_parent_links
from hiervis.paths import build_from_paths
from hiervis.records import TabularRecords
from hiervis.tree import TreeNode, prune_zero

logger = logging.getLogger(__name__)

HierInput = Union[DimensionTable, TabularRecords]

DEFAULT_TABLE_SEP = "/"


def coerce_input(data: Any) -> HierInput:
    """Map a boundary object onto the input variant."""
    if isinstance(data, (DimensionTable, TabularRecords)):
        return data
    if isinstance(data, pd.Series):
        return DimensionTable.from_series(data)
    if isinstance(data, pd.DataFrame):
        return TabularRecords.from_frame(data)
    if isinstance(data, np.ndarray):
        return TabularRecords.from_array(data)
    if isinstance(data, (list, tuple)) and all(isinstance(row, Mapping) for row in data):
        return TabularRecords.from_mappings(data)
    raise UnsupportedInputError(
        f"do not know how to deal with data of type {type(data).__name__}", {"type": type(data).__name__}
    )


def resolve_options(data: HierInput, options: HiervisOptions) -> HiervisOptions:
    """Effective options for ``data``; contingency tables fix the value field and statistic."""
    if isinstance(data, DimensionTable):
        return replace(options, value_field=FREQ_FIELD, stat="sum", parent_field=None)
    if isinstance(data, TabularRecords):
        if (options.path_sep is None) == (options.parent_field is None):
            raise ConfigurationError(
                "Specify either path_sep (+name_field) or parent_field when supplying tabular data",
                {"path_sep": repr(options.path_sep), "parent_field": repr(options.parent_field)},
            )
        return options
    raise UnsupportedInputError(
        f"do not know how to deal with data of type {type(data).__name__}", {"type": type(data).__name__}
    )


def _build(data: HierInput, opts: HiervisOptions) -> TreeNode:
    if isinstance(data, DimensionTable):
        sep = opts.path_sep or DEFAULT_TABLE_SEP
        logger.debug("dispatch: contingency table %s", data.names)
        records = flatten(data, value_field=FREQ_FIELD, path_sep=sep, path_field=opts.name_field)
        return build_from_paths(
            records,
            name_field=opts.name_field,
            path_sep=sep,
            value_field=FREQ_FIELD,
            stat="sum",
            root_name=opts.root_name,
        )
    if opts.path_sep is not None:
        logger.debug("dispatch: %d path records split on %r", len(data), opts.path_sep)
        return build_from_paths(
            data.records,
            name_field=opts.name_field,
            path_sep=opts.path_sep,
            value_field=opts.value_field,
            stat=opts.stat,
            root_name=opts.root_name,
        )
    if opts.parent_field not in data.columns:
        raise MissingFieldError(
            opts.parent_field,  # type: ignore[arg-type]
            message=f"parent field '{opts.parent_field}' is not a column of the records",
        )
    logger.debug("dispatch: %d parent-linked records via %r", len(data), opts.parent_field)
    return build_from_parent_links(
        data.records,
        name_field=opts.name_field,
        parent_field=opts.parent_field,  # type: ignore[arg-type]
        stat=opts.stat,
        value_field=opts.value_field,
    )


def normalize_with_options(
    data: Any, options: Optional[HiervisOptions] = None, **overrides: Any
) -> Tuple[TreeNode, HiervisOptions]:
    """Like ``normalize`` but also returns the options the tree was built with."""
    if isinstance(options, HiervisOptions):
        opts = normalize_options({**vars(options), **overrides})
    else:
        opts = normalize_options(options, **overrides)
    hier_input = coerce_input(data)
    effective = resolve_options(hier_input, opts)
    tree = _build(hier_input, effective)
    if effective.drop_zero:
        tree = prune_zero(tree)
    return tree, effective


def normalize(data: Any, options: Optional[HiervisOptions] = None, **overrides: Any) -> TreeNode:
    """Convert a contingency table or tabular records into one canonical tree.

    ``options`` is a ``HiervisOptions`` or a raw dict (snake_case or the
    original camelCase keys); keyword overrides win over both. Tabular data
    needs exactly one of ``path_sep`` and ``parent_field``.
    """
    tree, _ = normalize_with_options(data, options, **overrides)
    return tree
