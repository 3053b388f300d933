from __future__ import annotations

import logging
import math

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import MetaListResponse, NormalizeRequest, WidgetRequest
from hiervis.contingency import DimensionTable
from hiervis.errors import HiervisError, StructuralError, UnsupportedInputError
from hiervis.normalize import normalize
from hiervis.options import VIS_TYPES, HiervisOptions
from hiervis.widget import build_widget_payload


app = FastAPI(title="hiervis API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _input_from_request(req: NormalizeRequest):
    if (req.records is None) == (req.table is None):
        raise UnsupportedInputError("send exactly one of 'records' or 'table'")
    if req.table is not None:
        return DimensionTable.from_levels(req.table.dimensions, np.asarray(req.table.counts))
    return req.records


def _options_from_request(req: NormalizeRequest) -> HiervisOptions:
    return HiervisOptions(**req.options.model_dump())


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _error(exc: HiervisError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": exc.message,
            "type": type(exc).__name__,
            "kind": exc.kind if isinstance(exc, StructuralError) else None,
            "details": jsonable_encoder({k: str(v) for k, v in exc.details.items()}),
        },
    )


@app.get("/meta/vis-types", response_model=MetaListResponse)
def meta_vis_types():
    return _json({"values": list(VIS_TYPES)})


@app.post("/normalize")
def normalize_endpoint(req: NormalizeRequest):
    try:
        tree = normalize(_input_from_request(req), _options_from_request(req))
        return _json(tree.to_dict())
    except HiervisError as exc:
        logger.info("normalize rejected: %s", exc)
        return _error(exc)
    except Exception as exc:
        logger.exception("normalize failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.post("/widget")
def widget(req: WidgetRequest):
    try:
        payload = build_widget_payload(
            _input_from_request(req), req.vis, _options_from_request(req), vis_opts=req.vis_opts
        )
        return _json(payload)
    except HiervisError as exc:
        logger.info("widget rejected: %s", exc)
        return _error(exc)
    except Exception as exc:
        logger.exception("widget failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})
