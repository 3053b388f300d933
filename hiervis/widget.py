from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from hiervis.contingency import DimensionTable
from hiervis.normalize import coerce_input, normalize_with_options
from hiervis.options import DEFAULT_VIS, HiervisOptions, normalize_vis, normalize_vis_options

logger = logging.getLogger(__name__)


def build_widget_payload(
    data: Any,
    vis: Optional[str] = None,
    options: Optional[HiervisOptions] = None,
    vis_opts: Optional[Mapping[str, Any]] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """Renderer payload ``{"data", "vis", "opts"}`` (JSON-serializable)."""
    vis = normalize_vis(vis)
    if vis is None:
        logger.info("vis parameter empty - displaying '%s'", DEFAULT_VIS)
        vis = DEFAULT_VIS
    presentation = normalize_vis_options(vis_opts)

    hier_input = coerce_input(data)
    tree, effective = normalize_with_options(hier_input, options, **overrides)
    data_opts = effective.to_js()
    if isinstance(hier_input, DimensionTable):
        # already nested; the renderer must not split or link again
        data_opts.update(pathSep=None, parentField=None)

    return {"data": tree.to_dict(), "vis": vis, "opts": {**data_opts, **presentation.to_js()}}
