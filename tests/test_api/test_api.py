"""Tests for API endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from graphseg.main import app


client = TestClient(app)

UNIFORM_2X2 = [[[128, 128, 128], [128, 128, 128]], [[128, 128, 128], [128, 128, 128]]]


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["metrics"] == ["gray", "lab", "rgb"]


def test_segment_uniform_grid():
    response = client.post("/api/segment", json={"grid": UNIFORM_2X2, "granularity": 10})
    assert response.status_code == 200
    data = response.json()
    assert data["n_segments"] == 1
    assert data["n_edges"] == 6
    assert data["labels"] == [[0, 0], [0, 0]]
    assert len(data["grid"]) == 2
    assert len(data["grid"][0]) == 2
    assert data["grid"][0][0] == data["grid"][1][1]
    assert data["metric"] == "rgb"
    assert data["processing_time_ms"] >= 0


def test_segment_step_row_with_gray_metric():
    row = [[10, 10, 10, 250, 250, 250]]
    response = client.post(
        "/api/segment",
        json={"grid": row, "granularity": 1.0, "metric": "gray"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["n_segments"] == 2
    assert data["labels"] == [[0, 0, 0, 1, 1, 1]]
    assert data["granularity"] == 1.0


def test_segment_default_granularity():
    response = client.post("/api/segment", json={"grid": UNIFORM_2X2})
    assert response.status_code == 200
    assert response.json()["granularity"] == 300.0


def test_rejects_non_positive_granularity():
    response = client.post("/api/segment", json={"grid": UNIFORM_2X2, "granularity": 0})
    assert response.status_code == 422
    assert "granularity" in response.json()["detail"]


def test_rejects_ragged_grid():
    response = client.post("/api/segment", json={"grid": [[1, 2], [3]]})
    assert response.status_code == 422


def test_rejects_empty_grid():
    response = client.post("/api/segment", json={"grid": []})
    assert response.status_code == 422


def test_rejects_unknown_metric():
    response = client.post("/api/segment", json={"grid": UNIFORM_2X2, "metric": "hamming"})
    assert response.status_code == 422
    assert "Unknown metric" in response.json()["detail"]


def test_rejects_mixed_channel_counts():
    response = client.post("/api/segment", json={"grid": [[[1, 2, 3], [1, 2]]]})
    assert response.status_code == 422
    assert "channels" in response.json()["detail"]


def test_rejects_non_numeric_colors():
    response = client.post("/api/segment", json={"grid": [["a", "b"]]})
    assert response.status_code == 422
    assert "Color at (0, 0)" in response.json()["detail"]


def test_gray_metric_rejects_two_channel_colors():
    response = client.post(
        "/api/segment",
        json={"grid": [[[200, 10], [0, 10]]], "metric": "gray", "granularity": 1.0},
    )
    assert response.status_code == 422
