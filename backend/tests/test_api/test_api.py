"""Tests for API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from charttrace.main import app
from charttrace.session import get_session
from tests.conftest import LINE_CHART_OPS, TRIANGLE_FILL_OPS


client = TestClient(app)


def _payload(ops, **extra):
    return {"operators": [{"op": op, "args": args} for op, args in ops], **extra}


@pytest.fixture(autouse=True)
def fresh_session():
    get_session().clear()
    yield
    get_session().clear()


def _calibrate_line_chart():
    client.post("/api/extract", json=_payload(LINE_CHART_OPS))
    client.post("/api/calibration/segment", json={"axis": "x", "curve_index": 0})
    client.post("/api/calibration/value", json={"axis": "x", "endpoint": "start", "value": "0"})
    client.post("/api/calibration/value", json={"axis": "x", "endpoint": "end", "value": "100"})
    client.post("/api/calibration/segment", json={"axis": "y", "curve_index": 1})
    client.post("/api/calibration/value", json={"axis": "y", "endpoint": "start", "value": "0"})
    return client.post("/api/calibration/value", json={"axis": "y", "endpoint": "end", "value": "50"})


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["stages_registered"] == 3


def test_extract_triangle():
    response = client.post("/api/extract", json=_payload(TRIANGLE_FILL_OPS, page=2))
    assert response.status_code == 200
    data = response.json()
    assert data["page"] == 2
    assert data["path_count"] == 1
    assert data["stages_completed"] == 3
    assert data["errors"] == {}
    (curve,) = data["curves"]
    assert curve["operation"] == "fill"
    assert curve["closed"] is True
    assert curve["points"] == [[0, 0], [10, 0], [10, 10], [0, 0]]
    assert curve["point_count"] == 4
    assert curve["length"] == pytest.approx(20 + 10 * 2**0.5)
    assert curve["bbox"] == [0, 0, 10, 10]


def test_extract_numeric_opcodes():
    ops = [(13, [0, 0]), (14, [3, 4]), (20, [])]
    data = client.post("/api/extract", json=_payload(ops)).json()
    assert data["curves"][0]["operation"] == "stroke"
    assert data["curves"][0]["bbox"] == [0, 0, 3, 4]


def test_extract_malformed_stream():
    response = client.post("/api/extract", json=_payload([("moveTo", [1])]))
    assert response.status_code == 200
    data = response.json()
    assert "E0.01" in data["errors"]
    assert data["curves"] == []
    assert get_session().curves == []


def test_extract_rejects_bad_tolerance():
    response = client.post("/api/extract", json=_payload(TRIANGLE_FILL_OPS, tolerance=0))
    assert response.status_code == 422


def test_calibration_flow():
    data = _calibrate_line_chart().json()
    assert data["calibrated"] is True
    assert data["segments"]["x"] == [50, 50, 250, 50]
    assert data["scale"]["x"]["scale"] == pytest.approx(0.5)
    assert data["scale"]["y"]["offset"] == pytest.approx(-25.0)
    assert data["error"] == ""

    response = client.post("/api/calibration/convert", json={"points": [[150, 70]]})
    assert response.json() == {"available": True, "points": [[50.0, 10.0]]}


def test_segment_from_points():
    response = client.post("/api/calibration/segment", json={"axis": "x", "points": [[10, 0], [30, 2]]})
    assert response.status_code == 200
    data = response.json()
    assert data["segments"]["x"] == [10, 0, 30, 2]
    assert data["x_calibrated"] is False


def test_segment_needs_a_reference():
    response = client.post("/api/calibration/segment", json={"axis": "x"})
    assert response.status_code == 422


def test_segment_unknown_curve():
    response = client.post("/api/calibration/segment", json={"axis": "y", "curve_index": 7})
    assert response.status_code == 404


def test_value_must_be_numeric():
    response = client.post("/api/calibration/value", json={"axis": "x", "endpoint": "start", "value": "abc"})
    assert response.status_code == 422


def test_degenerate_axis_is_reported():
    client.post("/api/extract", json=_payload(LINE_CHART_OPS))
    # The y axis line has no horizontal extent
    client.post("/api/calibration/segment", json={"axis": "x", "curve_index": 1})
    client.post("/api/calibration/segment", json={"axis": "y", "curve_index": 1})
    for axis in ("x", "y"):
        client.post("/api/calibration/value", json={"axis": axis, "endpoint": "start", "value": "0"})
        response = client.post("/api/calibration/value", json={"axis": axis, "endpoint": "end", "value": "1"})
    data = response.json()
    assert data["calibrated"] is True
    assert data["scale"] is None
    assert "no horizontal extent" in data["error"]

    export = client.post("/api/export", json={"curves": [{"label": "A", "curve_index": 2}]})
    assert export.status_code == 422


def test_convert_unavailable_before_calibration():
    response = client.post("/api/calibration/convert", json={"points": [[1, 2]]})
    assert response.json() == {"available": False, "points": []}


def test_reset_calibration():
    _calibrate_line_chart()
    response = client.delete("/api/calibration")
    data = response.json()
    assert data["calibrated"] is False
    assert data["segments"] == {"x": None, "y": None}


def test_export_requires_calibration():
    client.post("/api/extract", json=_payload(LINE_CHART_OPS))
    response = client.post("/api/export", json={"curves": [{"label": "A", "curve_index": 2}]})
    assert response.status_code == 409


def test_export_unknown_curve():
    _calibrate_line_chart()
    response = client.post("/api/export", json={"curves": [{"label": "A", "curve_index": 99}]})
    assert response.status_code == 404


def test_export_csv():
    _calibrate_line_chart()
    response = client.post("/api/export", json={"curves": [{"label": "Series A", "curve_index": 2}]})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="extracted_data.csv"' in response.headers["content-disposition"]
    assert response.text == (
        "Label, X, Y\n"
        "Series A, 0, 5\n"
        "Series A, 25, 15\n"
        "Series A, 50, 10\n"
        "Series A, 100, 45\n"
        "\n"
    )


def test_export_json():
    _calibrate_line_chart()
    response = client.post(
        "/api/export",
        json={"curves": [{"label": "Series A", "curve_index": 2}], "format": "json"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data[0]["label"] == "Series A"
    assert data[0]["curve_index"] == 2
    assert data[0]["points"][1] == {"x": 25.0, "y": 15.0}


def test_degenerate_axis_reported_before_other_axis():
    client.post("/api/extract", json=_payload(LINE_CHART_OPS))
    client.post("/api/calibration/segment", json={"axis": "x", "curve_index": 1})
    client.post("/api/calibration/value", json={"axis": "x", "endpoint": "start", "value": "0"})
    data = client.post("/api/calibration/value", json={"axis": "x", "endpoint": "end", "value": "100"}).json()
    assert data["calibrated"] is False
    assert data["x_calibrated"] is True
    assert "X-axis calibration error" in data["error"]


@pytest.mark.parametrize("text", ["nan", "inf", "-inf"])
def test_non_finite_value_rejected(text):
    response = client.post("/api/calibration/value", json={"axis": "x", "endpoint": "start", "value": text})
    assert response.status_code == 422
    assert get_session().calibrator.values["x"].min is None
