"""Tests for the renderer payload."""

import json
import logging

import pytest

from hiervis.errors import ConfigurationError
from hiervis.widget import build_widget_payload


def test_default_vis_is_logged(caplog, titanic_class_sex):
    with caplog.at_level(logging.INFO, logger="hiervis.widget"):
        payload = build_widget_payload(titanic_class_sex)
    assert payload["vis"] == "sankey"
    assert "vis parameter empty" in caplog.text


def test_contingency_payload_options(titanic_class_sex):
    payload = build_widget_payload(titanic_class_sex, "sunburst", path_sep="/")
    opts = payload["opts"]
    assert opts["valueField"] == "Freq"
    assert opts["stat"] == "sum"
    assert opts["pathSep"] is None and opts["parentField"] is None
    assert opts["transitionDuration"] == 350
    assert payload["data"]["value"] == 2201


def test_tabular_payload_keeps_data_options(parent_child_frame):
    payload = build_widget_payload(
        parent_child_frame, "treemap", parent_field="parent", vis_opts={"treemapHier": False}
    )
    assert payload["opts"]["parentField"] == "parent"
    assert payload["opts"]["treemapHier"] is False
    assert payload["data"]["name"] == "Root Node"


def test_payload_is_json_serializable(module_paths):
    payload = build_widget_payload(
        module_paths, "partition", name_field="path", path_sep="/", value_field="size", stat="sum"
    )
    assert json.loads(json.dumps(payload)) == payload


def test_unknown_vis(titanic_class_sex):
    with pytest.raises(ConfigurationError):
        build_widget_payload(titanic_class_sex, "pie")
