def test_traceparent_header(client):
    resp = client.get("/__ok")
    assert resp.status_code == 200
    assert "traceparent" in resp.headers


def test_metrics_endpoint(client):
    client.get("/__ok")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert b"flask_http_request" in resp.data
