"""Hierarchy normalization for sankey/sunburst/partition/treemap renderers.

This package contains:
- row projection (pandas/numpy rows -> sparse records)
- tree builders (path-encoded and parent-linked records)
- contingency table flattening
- the `normalize` dispatcher and the renderer payload (`build_widget_payload`)
"""

from hiervis.contingency import DimensionTable, flatten
from hiervis.errors import (
    ConfigurationError,
    HiervisError,
    InvalidValueError,
    MissingFieldError,
    StructuralError,
    UnsupportedInputError,
)
from hiervis.normalize import coerce_input, normalize
from hiervis.options import HiervisOptions, VisOptions, normalize_options
from hiervis.parents import build_from_parent_links
from hiervis.paths import build_from_paths
from hiervis.records import TabularRecords, dataframe_to_records, project_row
from hiervis.tree import TreeNode, find_aggregate_mismatches
from hiervis.widget import build_widget_payload

__all__ = [
    "ConfigurationError",
    "DimensionTable",
    "HiervisError",
    "HiervisOptions",
    "InvalidValueError",
    "MissingFieldError",
    "StructuralError",
    "TabularRecords",
    "TreeNode",
    "UnsupportedInputError",
    "VisOptions",
    "build_from_parent_links",
    "build_from_paths",
    "build_widget_payload",
    "coerce_input",
    "dataframe_to_records",
    "find_aggregate_mismatches",
    "flatten",
    "normalize",
    "normalize_options",
    "project_row",
]
