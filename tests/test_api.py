"""Tests for the HTTP boundary."""

import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_vis_types(client):
    resp = client.get("/meta/vis-types")
    assert resp.status_code == 200
    assert resp.json()["values"] == ["sankey", "sunburst", "partition", "treemap"]


def test_normalize_records(client):
    body = {
        "records": [{"name": "A"}, {"name": "B", "parent": "A"}, {"name": "C", "parent": "A"}],
        "options": {"parent_field": "parent"},
    }
    resp = client.post("/normalize", json=body)
    assert resp.status_code == 200
    assert resp.json() == {
        "name": "A",
        "value": 3,
        "children": [{"name": "B", "value": 1}, {"name": "C", "value": 1}],
    }


def test_normalize_table(client):
    body = {"table": {"dimensions": {"Sex": ["Male", "Female"]}, "counts": [3, 4]}}
    resp = client.post("/normalize", json=body)
    assert resp.status_code == 200
    assert resp.json()["value"] == 7


def test_structural_error_is_400(client):
    body = {
        "records": [{"name": "A", "parent": "B"}, {"name": "B", "parent": "A"}],
        "options": {"parent_field": "parent"},
    }
    resp = client.post("/normalize", json=body)
    assert resp.status_code == 400
    assert resp.json()["type"] == "StructuralError"
    assert resp.json()["kind"] == "cycle"


def test_configuration_error_is_400(client):
    body = {"records": [{"name": "A"}], "options": {"parent_field": "parent", "path_sep": "/"}}
    resp = client.post("/normalize", json=body)
    assert resp.status_code == 400
    assert resp.json()["type"] == "ConfigurationError"


def test_needs_exactly_one_input(client):
    resp = client.post("/normalize", json={"options": {"path_sep": "/"}})
    assert resp.status_code == 400
    assert resp.json()["type"] == "UnsupportedInputError"


def test_widget(client):
    body = {
        "records": [{"path": "a/b", "size": 2}, {"path": "a/c", "size": 3}],
        "options": {"name_field": "path", "path_sep": "/", "value_field": "size", "stat": "sum"},
        "vis": "sunburst",
        "vis_opts": {"showNumbers": False},
    }
    resp = client.post("/widget", json=body)
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["vis"] == "sunburst"
    assert payload["data"]["value"] == 5
    assert payload["opts"]["showNumbers"] is False
    assert payload["opts"]["pathSep"] == "/"


def test_bad_stat_reports_configuration_error(client):
    body = {"records": [{"name": "A"}], "options": {"parent_field": "parent", "stat": "mean"}}
    resp = client.post("/normalize", json=body)
    assert resp.status_code == 400
    assert resp.json()["type"] == "ConfigurationError"
    assert resp.json()["details"]["stat"] == "'mean'"


def test_bad_vis_reports_configuration_error(client):
    body = {"records": [{"name": "A"}], "options": {"parent_field": "parent"}, "vis": "pie"}
    resp = client.post("/widget", json=body)
    assert resp.status_code == 400
    assert resp.json()["type"] == "ConfigurationError"
