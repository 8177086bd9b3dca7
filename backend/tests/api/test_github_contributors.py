"""GitHub Contributor Routes: identity history over HTTP, filters, links, status."""

from datetime import datetime, timezone
from uuid import uuid4


async def _create(client, username="octocat", email="octo@example.com", **extra):
    res = await client.post(
        "/api/v1/github-contributors",
        json={
            "current_username": username,
            "current_email": email,
            "current_name": "The Octocat",
            **extra,
        },
    )
    assert res.status_code == 201, res.text
    return res.json()


async def test_create_contributor(client):
    body = await _create(client, email="Octo@Example.com", all_known_emails=["A@x.com", "a@x.com"])
    assert body["current_email"] == "octo@example.com"
    assert body["all_known_emails"] == ["a@x.com"]
    assert body["status"] == "active"
    assert body["user_id"] is None


async def test_create_invalid_email_returns_400(client):
    res = await client.post(
        "/api/v1/github-contributors",
        json={"current_username": "x", "current_email": "bad", "current_name": "X"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid email format"


async def test_duplicate_username_returns_400(client):
    await _create(client)
    res = await client.post(
        "/api/v1/github-contributors",
        json={"current_username": "octocat", "current_email": "o@x.com", "current_name": "O"},
    )
    assert res.status_code == 400


async def test_rename_keeps_history_and_filters_find_it(client):
    created = await _create(client)
    res = await client.put(
        f"/api/v1/github-contributors/{created['id']}", json={"current_username": "octo2"},
    )
    assert res.status_code == 200
    assert res.json()["all_known_usernames"] == ["octocat"]

    listed = await client.get("/api/v1/github-contributors", params={"username": "octocat"})
    body = listed.json()
    assert body["total"] == 1
    assert body["data"][0]["current_username"] == "octo2"
    assert body["limit"] == 10
    assert body["offset"] == 0


async def test_get_by_username(client):
    created = await _create(client)
    res = await client.get("/api/v1/github-contributors/by-username/octocat")
    assert res.json()["id"] == created["id"]
    assert (await client.get("/api/v1/github-contributors/by-username/ghost")).status_code == 404


async def test_add_aliases(client):
    created = await _create(client)
    res = await client.post(
        f"/api/v1/github-contributors/{created['id']}/aliases",
        json={"usernames": ["old"], "names": ["Old Name"]},
    )
    assert res.status_code == 200
    assert res.json()["all_known_usernames"] == ["old"]
    assert res.json()["all_known_names"] == ["Old Name"]


async def test_link_and_unlink_user(client):
    created = await _create(client)
    user = (await client.post(
        "/api/v1/users", json={"email": "dev@example.com", "name": "Dev"},
    )).json()

    linked = await client.put(
        f"/api/v1/github-contributors/{created['id']}/user", json={"user_id": user["id"]},
    )
    assert linked.json()["user_id"] == user["id"]

    by_user = await client.get("/api/v1/github-contributors", params={"user_id": user["id"]})
    assert by_user.json()["total"] == 1

    unlinked = await client.delete(f"/api/v1/github-contributors/{created['id']}/user")
    assert unlinked.json()["user_id"] is None


async def test_link_unknown_user_returns_400(client):
    created = await _create(client)
    res = await client.put(
        f"/api/v1/github-contributors/{created['id']}/user", json={"user_id": str(uuid4())},
    )
    assert res.status_code == 400


async def test_status_and_last_active(client):
    created = await _create(client)
    res = await client.put(
        f"/api/v1/github-contributors/{created['id']}/status", json={"status": "inactive"},
    )
    assert res.json()["status"] == "inactive"
    bad = await client.put(
        f"/api/v1/github-contributors/{created['id']}/status", json={"status": "archived"},
    )
    assert bad.status_code == 400

    when = datetime(2030, 1, 2, 3, 4, tzinfo=timezone.utc)
    res = await client.put(
        f"/api/v1/github-contributors/{created['id']}/last-active",
        json={"last_active_date": when.isoformat()},
    )
    assert res.status_code == 200
    assert datetime.fromisoformat(res.json()["last_active_date"].replace("Z", "+00:00")) == when


async def test_delete_contributor(client):
    created = await _create(client)
    assert (await client.delete(f"/api/v1/github-contributors/{created['id']}")).status_code == 204
    assert (await client.get(f"/api/v1/github-contributors/{created['id']}")).status_code == 404
