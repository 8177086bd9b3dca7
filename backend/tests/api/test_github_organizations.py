"""GitHub Organization Routes: status codes, canonical names, and token privacy."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4


def _body(name="my-org", days=30, token="ghp_secret"):
    expires = datetime.now(timezone.utc) + timedelta(days=days)
    return {"name": name, "access_token": token, "token_expires_at": expires.isoformat()}


async def test_create_returns_201_uppercase_without_token(client):
    res = await client.post("/api/v1/github-organizations", json=_body())
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "MY-ORG"
    assert body["token_expired"] is False
    assert "access_token" not in body


async def test_duplicate_name_returns_400(client):
    await client.post("/api/v1/github-organizations", json=_body("my-org"))
    res = await client.post("/api/v1/github-organizations", json=_body("MY-ORG"))
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "Organization 'MY-ORG' already exists"
    assert error["field"] == "name"


async def test_past_expiry_returns_400(client):
    res = await client.post("/api/v1/github-organizations", json=_body(days=-1))
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Token expiration date must be in the future"


async def test_missing_field_returns_400_with_details(client):
    res = await client.post("/api/v1/github-organizations", json={"name": "acme"})
    assert res.status_code == 400
    fields = {d["field"] for d in res.json()["error"]["details"]}
    assert "body.access_token" in fields


async def test_get_by_id_and_by_name(client):
    created = (await client.post("/api/v1/github-organizations", json=_body("acme"))).json()

    by_id = await client.get(f"/api/v1/github-organizations/{created['id']}")
    assert by_id.status_code == 200
    by_name = await client.get("/api/v1/github-organizations/by-name/acme")
    assert by_name.json()["id"] == created["id"]


async def test_unknown_id_returns_404(client):
    res = await client.get(f"/api/v1/github-organizations/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"


async def test_malformed_id_returns_400(client):
    res = await client.get("/api/v1/github-organizations/not-a-uuid")
    assert res.status_code == 400


async def test_update_and_list(client):
    created = (await client.post("/api/v1/github-organizations", json=_body("acme"))).json()

    res = await client.put(
        f"/api/v1/github-organizations/{created['id']}", json={"name": "acme-renamed"},
    )
    assert res.status_code == 200
    assert res.json()["name"] == "ACME-RENAMED"

    listed = await client.get("/api/v1/github-organizations")
    assert [o["name"] for o in listed.json()] == ["ACME-RENAMED"]


async def test_delete_returns_204_then_404(client):
    created = (await client.post("/api/v1/github-organizations", json=_body("acme"))).json()

    res = await client.delete(f"/api/v1/github-organizations/{created['id']}")
    assert res.status_code == 204
    again = await client.delete(f"/api/v1/github-organizations/{created['id']}")
    assert again.status_code == 404
