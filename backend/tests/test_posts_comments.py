from sqlalchemy import func, select

from proconnect.db.models import Comment

MISSING_ID = "00000000-0000-0000-0000-000000000000"


async def create_post(client, member, text="hello", privacy="public"):
    response = await client.post("/api/posts", json={"text": text, "privacy": privacy}, headers=member.headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_post_defaults(client, make_user):
    alice = await make_user("Alice")

    post = await create_post(client, alice, "first post")

    assert post["privacy"] == "public"
    assert post["media"] == []
    assert post["likes"] == []
    assert post["comments"] == []
    assert post["user"]["id"] == alice.id


async def test_create_post_rejects_unknown_privacy(client, make_user):
    alice = await make_user("Alice")

    response = await client.post("/api/posts", json={"text": "x", "privacy": "friends"}, headers=alice.headers)

    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_get_missing_post(client, make_user):
    alice = await make_user("Alice")

    response = await client.get(f"/api/posts/{MISSING_ID}", headers=alice.headers)

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Post not found"}


async def test_only_author_can_update_or_delete_post(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    post = await create_post(client, alice)

    response = await client.put(f"/api/posts/{post['id']}", json={"text": "hacked"}, headers=bob.headers)
    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized to update this post"

    response = await client.delete(f"/api/posts/{post['id']}", headers=bob.headers)
    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized to delete this post"

    response = await client.put(
        f"/api/posts/{post['id']}", json={"text": "edited", "privacy": "connections"}, headers=alice.headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["text"] == "edited"
    assert response.json()["data"]["privacy"] == "connections"


async def test_like_and_unlike(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    carol = await make_user("Carol")
    post = await create_post(client, alice)

    await client.post(f"/api/posts/{post['id']}/like", headers=bob.headers)
    response = await client.post(f"/api/posts/{post['id']}/like", headers=carol.headers)
    assert response.status_code == 200
    # Newest like first
    assert response.json()["data"] == [{"user": carol.id}, {"user": bob.id}]

    response = await client.post(f"/api/posts/{post['id']}/like", headers=bob.headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Post already liked"

    response = await client.delete(f"/api/posts/{post['id']}/like", headers=bob.headers)
    assert response.status_code == 200
    assert response.json()["data"] == [{"user": carol.id}]

    response = await client.delete(f"/api/posts/{post['id']}/like", headers=bob.headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Post has not yet been liked"


async def test_like_missing_post(client, make_user):
    alice = await make_user("Alice")

    response = await client.post(f"/api/posts/{MISSING_ID}/like", headers=alice.headers)

    assert response.status_code == 404


async def test_comments_listed_newest_first(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    post = await create_post(client, alice)

    for text in ("one", "two", "three"):
        response = await client.post(f"/api/posts/{post['id']}/comments", json={"text": text}, headers=bob.headers)
        assert response.status_code == 201

    response = await client.get(f"/api/posts/{post['id']}/comments", headers=alice.headers)

    body = response.json()
    assert body["count"] == 3
    assert [comment["text"] for comment in body["data"]] == ["three", "two", "one"]
    assert body["data"][0]["post_id"] == post["id"]


async def test_comment_on_missing_post(client, make_user):
    alice = await make_user("Alice")

    response = await client.post(f"/api/posts/{MISSING_ID}/comments", json={"text": "hi"}, headers=alice.headers)

    assert response.status_code == 404
    assert response.json()["error"] == "Post not found"


async def test_only_comment_author_can_edit_or_delete(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    post = await create_post(client, alice)
    response = await client.post(f"/api/posts/{post['id']}/comments", json={"text": "mine"}, headers=bob.headers)
    comment_id = response.json()["data"]["id"]

    response = await client.put(f"/api/comments/{comment_id}", json={"text": "theirs"}, headers=alice.headers)
    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized to update this comment"

    response = await client.delete(f"/api/comments/{comment_id}", headers=alice.headers)
    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized to delete this comment"

    response = await client.put(f"/api/comments/{comment_id}", json={"text": "edited"}, headers=bob.headers)
    assert response.status_code == 200
    assert response.json()["data"]["text"] == "edited"

    response = await client.delete(f"/api/comments/{comment_id}", headers=bob.headers)
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {}}

    response = await client.delete(f"/api/comments/{comment_id}", headers=bob.headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Comment not found"


async def test_deleting_post_removes_its_comments(client, make_user, session_factory):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    post = await create_post(client, alice)
    other = await create_post(client, bob)
    await client.post(f"/api/posts/{post['id']}/comments", json={"text": "a"}, headers=bob.headers)
    await client.post(f"/api/posts/{post['id']}/comments", json={"text": "b"}, headers=alice.headers)
    await client.post(f"/api/posts/{other['id']}/comments", json={"text": "c"}, headers=alice.headers)

    response = await client.delete(f"/api/posts/{post['id']}", headers=alice.headers)
    assert response.status_code == 200

    async with session_factory() as session:
        remaining = await session.scalar(select(func.count(Comment.id)))
    assert remaining == 1

    response = await client.get(f"/api/posts/{post['id']}", headers=alice.headers)
    assert response.status_code == 404
