from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OptionsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name_field: str = "name"
    value_field: str = "value"
    path_sep: Optional[str] = None
    parent_field: Optional[str] = None
    stat: str = "count"
    root_name: str = "root"
    drop_zero: bool = False


class DimensionTableModel(BaseModel):
    dimensions: Dict[str, List[str]]
    counts: List[Any]


class NormalizeRequest(BaseModel):
    records: Optional[List[Dict[str, Any]]] = None
    table: Optional[DimensionTableModel] = None
    options: OptionsModel = Field(default_factory=OptionsModel)


class WidgetRequest(NormalizeRequest):
    vis: Optional[str] = None
    vis_opts: Dict[str, Any] = Field(default_factory=dict)


class MetaListResponse(BaseModel):
    values: List[str]
