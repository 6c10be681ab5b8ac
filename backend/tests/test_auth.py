from sqlalchemy import select

from proconnect.auth import routes as auth_routes
from proconnect.db.models import User

from .conftest import PASSWORD


async def test_register_returns_token_and_user(client):
    response = await client.post(
        "/api/auth/register",
        json={
            "first_name": "Grace",
            "last_name": "Hopper",
            "email": "Grace@Example.com",
            "password": PASSWORD,
            "headline": "Rear admiral",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["token"]
    assert body["data"]["user"]["email"] == "grace@example.com"
    assert body["data"]["user"]["headline"] == "Rear admiral"
    assert "password_hash" not in body["data"]["user"]


async def test_register_rejects_weak_password(client):
    response = await client.post(
        "/api/auth/register",
        json={"first_name": "Weak", "last_name": "Pass", "email": "weak@example.com", "password": "password"},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Password must contain an uppercase letter"}


async def test_register_rejects_invalid_name(client):
    response = await client.post(
        "/api/auth/register",
        json={"first_name": "R2", "last_name": "D2", "email": "droid@example.com", "password": PASSWORD},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "First name contains invalid characters"


async def test_register_duplicate_email(client, make_user):
    member = await make_user("Ada")

    response = await client.post(
        "/api/auth/register",
        json={"first_name": "Ada", "last_name": "Again", "email": member.email.upper(), "password": PASSWORD},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Email is already registered"


async def test_login_and_me(client, make_user):
    member = await make_user("Linus")

    response = await client.post("/api/auth/login", json={"email": member.email, "password": PASSWORD})
    assert response.status_code == 200
    token = response.json()["data"]["token"]
    assert token != member.token

    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["data"]["id"] == member.id


async def test_login_with_wrong_password(client, make_user):
    member = await make_user("Linus")

    response = await client.post("/api/auth/login", json={"email": member.email, "password": "Wrong1234"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid credentials"}


async def test_protected_route_requires_token(client):
    response = await client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Not authorized to access this route"}

    response = await client.get("/api/posts", headers={"Authorization": "Bearer not-a-session"})
    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized to access this route"


async def test_password_reset_flow(client, make_user, monkeypatch):
    member = await make_user("Reset")
    sent = []

    async def fake_send_email(to_email, subject, body):
        sent.append((to_email, subject, body))

    monkeypatch.setattr(auth_routes, "send_email", fake_send_email)

    response = await client.post("/api/auth/password/reset", json={"email": member.email})
    assert response.status_code == 200
    assert response.json()["data"] == {"message": "Email sent"}
    assert len(sent) == 1
    assert sent[0][0] == member.email
    token = sent[0][2].rsplit("/", 1)[-1]

    response = await client.put(f"/api/auth/password/reset/{token}", json={"password": "weak"})
    assert response.status_code == 400

    response = await client.put(f"/api/auth/password/reset/{token}", json={"password": "NewSecret99"})
    assert response.status_code == 200
    assert response.json()["data"]["token"]

    # Token is single use
    response = await client.put(f"/api/auth/password/reset/{token}", json={"password": "NewSecret99"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid or expired reset token"

    response = await client.post("/api/auth/login", json={"email": member.email, "password": PASSWORD})
    assert response.status_code == 401
    response = await client.post("/api/auth/login", json={"email": member.email, "password": "NewSecret99"})
    assert response.status_code == 200


async def test_password_reset_unknown_email(client):
    response = await client.post("/api/auth/password/reset", json={"email": "nobody@example.com"})

    assert response.status_code == 404
    assert response.json()["error"] == "There is no user with that email"


async def test_password_reset_mail_failure_clears_token(client, make_user, monkeypatch, session_factory):
    member = await make_user("Mailfail")

    async def broken_send_email(to_email, subject, body):
        raise ConnectionRefusedError("smtp down")

    monkeypatch.setattr(auth_routes, "send_email", broken_send_email)

    response = await client.post("/api/auth/password/reset", json={"email": member.email})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Email could not be sent"}
    async with session_factory() as session:
        user = (await session.execute(select(User).where(User.email == member.email))).scalar_one()
        assert user.reset_password_token is None
        assert user.reset_password_expires_at is None


async def test_health_endpoints(client):
    assert (await client.get("/health")).json()["status"] == "ok"
    assert (await client.get("/")).status_code == 200
