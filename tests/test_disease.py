"""
Tests for the plant health assessment proxy.
"""

import base64
import json

import httpx

IMAGE = b"\x89PNG\r\n\x1a\nfake-leaf-bytes"


def upload(client, content=IMAGE):
    return client.post(
        "/api/disease", files={"image": ("leaf.png", content, "image/png")},
    )


def test_forwards_image(client, upstream):
    assessment = {"result": {"is_healthy": {"binary": False, "probability": 0.12}}}
    upstream.respond_with(lambda request: httpx.Response(201, json=assessment))

    r = upload(client)

    assert r.status_code == 200
    assert r.json() == assessment

    sent = upstream.last
    assert sent.method == "POST"
    assert str(sent.url) == "https://plant.id/api/v3/health_assessment"
    assert sent.headers["Api-Key"] == "test-disease-key"
    assert json.loads(sent.content) == {
        "images": [base64.b64encode(IMAGE).decode("ascii")],
        "classification_level": "species",
        "similar_images": True,
        "health": "only",
    }


def test_no_image(client, upstream):
    r = client.post("/api/disease")
    assert r.status_code == 400
    assert r.json()["error"] == "No image uploaded"
    assert upstream.requests == []


def test_empty_image(client, upstream):
    r = upload(client, content=b"")
    assert r.status_code == 400
    assert upstream.requests == []


def test_key_not_configured(make_client, settings, upstream):
    client = make_client(settings.model_copy(update={"disease_api_key": ""}))
    r = upload(client)
    assert r.status_code == 500
    assert r.json()["error"] == "Disease API key not configured"
    assert upstream.requests == []


def test_non_json_reply(client, upstream):
    upstream.respond_with(lambda request: httpx.Response(502, text="<html>Bad gateway</html>"))
    r = upload(client)
    assert r.status_code == 500
    body = r.json()
    assert body["error"] == "Plant.id returned a non-JSON response"
    assert body["detail"] == "<html>Bad gateway</html>"


def test_upstream_error_relayed(client, upstream):
    upstream.respond_with(lambda request: httpx.Response(401, json={"error": "Invalid api key"}))
    r = upload(client)
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid api key"}


def test_upstream_unreachable(client, upstream):
    def boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    upstream.respond_with(boom)
    r = upload(client)
    assert r.status_code == 502
    assert "unreachable" in r.json()["error"]
