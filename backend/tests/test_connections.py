from sqlalchemy import func, select

from proconnect.db.models import Connection


async def test_request_then_duplicate_in_either_direction_conflicts(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    response = await client.post(f"/api/connections/request/{bob.id}", headers=alice.headers)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["requester"]["id"] == alice.id
    assert data["recipient"]["id"] == bob.id

    for sender, target in ((alice, bob), (bob, alice)):
        response = await client.post(f"/api/connections/request/{target.id}", headers=sender.headers)
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Connection request already exists"}


async def test_request_validation(client, make_user):
    alice = await make_user("Alice")

    response = await client.post(f"/api/connections/request/{alice.id}", headers=alice.headers)
    assert response.status_code == 400
    assert response.json()["error"] == "You cannot connect with yourself"

    response = await client.post(
        "/api/connections/request/00000000-0000-0000-0000-000000000000", headers=alice.headers
    )
    assert response.status_code == 404
    assert response.json()["error"] == "User not found"


async def test_accept_makes_connection_visible_to_both(client, make_user, connect):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    connection_id = await connect(alice, bob)

    response = await client.get("/api/connections", headers=alice.headers)
    body = response.json()
    assert body["count"] == 1
    assert body["data"][0]["connection_id"] == connection_id
    assert body["data"][0]["user"]["id"] == bob.id

    response = await client.get("/api/connections", headers=bob.headers)
    assert [item["user"]["id"] for item in response.json()["data"]] == [alice.id]


async def test_only_recipient_can_accept_pending_request(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    carol = await make_user("Carol")

    response = await client.post(f"/api/connections/request/{bob.id}", headers=alice.headers)
    connection_id = response.json()["data"]["id"]

    for member in (alice, carol):
        response = await client.put(f"/api/connections/accept/{connection_id}", headers=member.headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Connection request not found"

    response = await client.put(f"/api/connections/accept/{connection_id}", headers=bob.headers)
    assert response.json()["data"]["status"] == "accepted"

    # No longer pending
    response = await client.put(f"/api/connections/accept/{connection_id}", headers=bob.headers)
    assert response.status_code == 404


async def test_rejected_pair_cannot_request_again(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    response = await client.post(f"/api/connections/request/{bob.id}", headers=alice.headers)
    connection_id = response.json()["data"]["id"]

    response = await client.get("/api/connections/pending", headers=bob.headers)
    assert [item["id"] for item in response.json()["data"]] == [connection_id]

    response = await client.put(f"/api/connections/reject/{connection_id}", headers=bob.headers)
    assert response.json()["data"]["status"] == "rejected"

    response = await client.get("/api/connections/pending", headers=bob.headers)
    assert response.json()["data"] == []

    response = await client.post(f"/api/connections/request/{alice.id}", headers=bob.headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Connection request already exists"


async def test_remove_connection(client, make_user, connect, session_factory):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    carol = await make_user("Carol")
    connection_id = await connect(alice, bob)

    response = await client.delete(f"/api/connections/{connection_id}", headers=carol.headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Connection not found"

    response = await client.delete(f"/api/connections/{connection_id}", headers=bob.headers)
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {}}

    response = await client.get("/api/connections", headers=alice.headers)
    assert response.json()["data"] == []
    async with session_factory() as session:
        assert await session.scalar(select(func.count()).select_from(Connection)) == 0


async def test_suggestions_exclude_self_and_any_existing_record(client, make_user, connect):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    carol = await make_user("Carol")
    dave = await make_user("Dave")
    erin = await make_user("Erin")

    await connect(alice, bob)
    await client.post(f"/api/connections/request/{carol.id}", headers=alice.headers)
    response = await client.post(f"/api/connections/request/{alice.id}", headers=dave.headers)
    await client.put(f"/api/connections/reject/{response.json()['data']['id']}", headers=alice.headers)

    response = await client.get("/api/connections/suggestions", headers=alice.headers)

    assert [user["id"] for user in response.json()["data"]] == [erin.id]


async def test_suggestions_are_capped(client, make_user, monkeypatch):
    from proconnect.core.config import settings

    monkeypatch.setattr(settings, "SUGGESTION_LIMIT", 3)
    alice = await make_user("Alice")
    others = [await make_user(name) for name in ("Bob", "Carol", "Dave", "Erin", "Frank")]

    response = await client.get("/api/connections/suggestions", headers=alice.headers)

    body = response.json()
    assert body["count"] == 3
    assert [user["id"] for user in body["data"]] == [member.id for member in others[:3]]


async def test_follow_and_unfollow(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    response = await client.post(f"/api/users/{alice.id}/follow", headers=alice.headers)
    assert response.status_code == 400
    assert response.json()["error"] == "You cannot follow yourself"

    response = await client.post(f"/api/users/{bob.id}/follow", headers=alice.headers)
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "pending"

    response = await client.post(f"/api/users/{bob.id}/follow", headers=alice.headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Already following or connection request pending"

    response = await client.post(f"/api/connections/request/{alice.id}", headers=bob.headers)
    assert response.status_code == 400

    # Bob never followed Alice
    response = await client.delete(f"/api/users/{alice.id}/follow", headers=bob.headers)
    assert response.status_code == 404
    assert response.json()["error"] == "You are not following this user"

    response = await client.delete(f"/api/users/{bob.id}/follow", headers=alice.headers)
    assert response.status_code == 200

    response = await client.delete(f"/api/users/{bob.id}/follow", headers=alice.headers)
    assert response.status_code == 404
