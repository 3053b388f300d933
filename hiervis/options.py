from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from hiervis.errors import ConfigurationError

STATS = ("count", "sum")
VIS_TYPES = ("sankey", "sunburst", "partition", "treemap")
DEFAULT_VIS = "sankey"

# Original widget argument names -> option attributes.
_CAMEL_KEYS = {
    "nameField": "name_field",
    "valueField": "value_field",
    "pathSep": "path_sep",
    "parentField": "parent_field",
    "rootName": "root_name",
    "dropZero": "drop_zero",
}


@dataclass(frozen=True)
class HiervisOptions:
    name_field: str = "name"
    value_field: str = "value"
    path_sep: Optional[str] = None
    parent_field: Optional[str] = None
    stat: str = "count"
    root_name: str = "root"
    drop_zero: bool = False

    def validate(self) -> "HiervisOptions":
        if self.stat not in STATS:
            raise ConfigurationError(
                f"stat must be one of {', '.join(STATS)}", {"stat": repr(self.stat)}
            )
        for name in ("name_field", "value_field", "root_name"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigurationError(f"{name} must be a non-empty string", {name: repr(value)})
        if self.parent_field is not None and (not isinstance(self.parent_field, str) or not self.parent_field):
            raise ConfigurationError("parent_field must be a non-empty string", {"parent_field": repr(self.parent_field)})
        if self.path_sep is not None and (not isinstance(self.path_sep, str) or not self.path_sep):
            raise ConfigurationError("path_sep must be a non-empty string", {"path_sep": repr(self.path_sep)})
        if not isinstance(self.drop_zero, bool):
            raise ConfigurationError("drop_zero must be true or false", {"drop_zero": repr(self.drop_zero)})
        return self

    def to_js(self) -> Dict[str, Any]:
        """Data options under the names the renderer reads."""
        return {
            "nameField": self.name_field,
            "valueField": self.value_field,
            "pathSep": self.path_sep,
            "parentField": self.parent_field,
            "stat": self.stat,
        }


@dataclass(frozen=True)
class VisOptions:
    """Renderer presentation options; never interpreted here, only passed on."""

    transitionDuration: int = 350
    showNumbers: bool = True
    numberFormat: str = ",d"
    treeColors: bool = True
    # Treemap
    treemapHier: bool = True
    # Sunburst
    sunburstLabelsRadiate: bool = False
    circleNumberFormat: str = ".2s"
    # Sankey: color links by child instead of parent
    linkColorChild: bool = False
    # Sankey: only label nodes above this value when set
    sankeyMinHeight: Optional[float] = None
    extra: Tuple[Tuple[str, Any], ...] = field(default_factory=tuple)

    def to_js(self) -> Dict[str, Any]:
        out = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        out.update(dict(self.extra))
        return out


def normalize_options(raw: Optional[Mapping[str, Any]] = None, **overrides: Any) -> HiervisOptions:
    """Build validated options from a raw dict of snake_case or camelCase keys."""
    merged: Dict[str, Any] = {}
    known = {f.name for f in fields(HiervisOptions)}
    for source in (raw or {}, overrides):
        for key, value in source.items():
            attr = _CAMEL_KEYS.get(key, key)
            if attr not in known:
                raise ConfigurationError("unknown option", {"option": key})
            merged[attr] = value
    return HiervisOptions(**merged).validate()


def normalize_vis_options(raw: Optional[Mapping[str, Any]] = None) -> VisOptions:
    known = {f.name for f in fields(VisOptions)} - {"extra"}
    raw = dict(raw or {})
    base = {k: v for k, v in raw.items() if k in known}
    extra = tuple((k, v) for k, v in raw.items() if k not in known)
    return VisOptions(extra=extra, **base)


def normalize_vis(vis: Optional[str]) -> Optional[str]:
    """None passes through (caller defaults it); anything else must be a known type."""
    if vis is None:
        return None
    if vis not in VIS_TYPES:
        raise ConfigurationError(
            f"vis must be one of {', '.join(VIS_TYPES)}", {"vis": repr(vis)}
        )
    return vis
