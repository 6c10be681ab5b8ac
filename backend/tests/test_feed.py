import pytest

from proconnect.core.config import settings


async def create_post(client, member, text, privacy="public"):
    response = await client.post("/api/posts", json={"text": text, "privacy": privacy}, headers=member.headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def feed_texts(client, member, **params):
    response = await client.get("/api/posts", params=params, headers=member.headers)
    assert response.status_code == 200, response.text
    return [post["text"] for post in response.json()["data"]]


async def test_public_post_visible_to_stranger_connections_post_is_not(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    carol = await make_user("Carol")

    await create_post(client, alice, "hello world", privacy="public")
    await create_post(client, carol, "friends only", privacy="connections")

    assert await feed_texts(client, bob) == ["hello world"]


async def test_feed_includes_own_and_connection_posts_newest_first(client, make_user, connect):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    await connect(alice, bob)

    await create_post(client, alice, "first", privacy="connections")
    await create_post(client, bob, "second", privacy="connections")
    await create_post(client, bob, "third", privacy="public")

    assert await feed_texts(client, alice) == ["third", "second", "first"]


async def test_private_post_of_connection_is_shown_by_default(client, make_user, connect):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    carol = await make_user("Carol")
    await connect(alice, bob)

    await create_post(client, alice, "diary", privacy="private")

    assert await feed_texts(client, bob) == ["diary"]
    assert await feed_texts(client, carol) == []


async def test_private_post_of_connection_hidden_when_flag_enabled(client, make_user, connect, monkeypatch):
    monkeypatch.setattr(settings, "FEED_HIDE_PRIVATE_CONNECTION_POSTS", True)
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    await connect(alice, bob)

    await create_post(client, alice, "diary", privacy="private")
    await create_post(client, alice, "for friends", privacy="connections")

    assert await feed_texts(client, bob) == ["for friends"]
    # Authors always see their own private posts
    assert await feed_texts(client, alice) == ["for friends", "diary"]


@pytest.mark.parametrize(
    "page, limit, expected_count, has_next, has_prev",
    [
        (1, 2, 2, True, False),
        (2, 2, 2, True, True),
        (3, 2, 1, False, True),
        (1, 5, 5, False, False),
        (4, 2, 0, False, True),
    ],
)
async def test_feed_pagination(client, make_user, page, limit, expected_count, has_next, has_prev):
    alice = await make_user("Alice")
    for index in range(5):
        await create_post(client, alice, f"post {index}")

    response = await client.get("/api/posts", params={"page": page, "limit": limit}, headers=alice.headers)

    body = response.json()
    assert body["count"] == expected_count
    assert len(body["data"]) <= limit
    assert ("next" in body["pagination"]) is has_next
    assert ("prev" in body["pagination"]) is has_prev
    if has_next:
        assert body["pagination"]["next"] == {"page": page + 1, "limit": limit}
    if has_prev:
        assert body["pagination"]["prev"] == {"page": page - 1, "limit": limit}


async def test_feed_rejects_invalid_page(client, make_user):
    alice = await make_user("Alice")

    response = await client.get("/api/posts", params={"page": 0}, headers=alice.headers)

    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_feed_posts_carry_author_summary_and_comment_authors(client, make_user):
    alice = await make_user("Alice", headline="Engineer")
    bob = await make_user("Bob")
    post = await create_post(client, alice, "look at this")

    await client.post(f"/api/posts/{post['id']}/comments", json={"text": "nice"}, headers=bob.headers)
    await client.post(f"/api/posts/{post['id']}/comments", json={"text": "thanks"}, headers=alice.headers)

    response = await client.get("/api/posts", headers=bob.headers)
    item = response.json()["data"][0]

    assert item["user"] == {"id": alice.id, "first_name": "Alice", "last_name": "Doe", "headline": "Engineer"}
    assert [comment["text"] for comment in item["comments"]] == ["nice", "thanks"]
    assert item["comments"][0]["user"] == {"id": bob.id, "first_name": "Bob", "last_name": "Doe"}


async def test_user_posts_listing(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    for index in range(3):
        await create_post(client, alice, f"post {index}")
    await create_post(client, bob, "not alice")

    response = await client.get(f"/api/users/{alice.id}/posts", params={"limit": 2}, headers=bob.headers)

    body = response.json()
    assert [post["text"] for post in body["data"]] == ["post 2", "post 1"]
    assert body["pagination"] == {"next": {"page": 2, "limit": 2}}

    response = await client.get(
        "/api/users/00000000-0000-0000-0000-000000000000/posts", headers=bob.headers
    )
    assert response.status_code == 404


async def test_feed_page_far_past_the_end_is_empty(client, make_user):
    alice = await make_user("Alice")
    await create_post(client, alice, "only post")

    response = await client.get("/api/posts", params={"page": 10**19, "limit": 10}, headers=alice.headers)

    assert response.status_code == 200
    body = response.json()
    assert body["data"] == []
    assert body["count"] == 0
    assert body["pagination"] == {"prev": {"page": 10**19 - 1, "limit": 10}}


async def test_feed_rejects_oversized_limit(client, make_user):
    alice = await make_user("Alice")

    response = await client.get("/api/posts", params={"limit": 10**19}, headers=alice.headers)

    assert response.status_code == 400
    assert response.json()["success"] is False
