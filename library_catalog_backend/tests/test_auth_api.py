import logging

import pytest


def test_register_login_flow(client):
    # CORS preflight for auth routes is answered by the middleware
    for path in ("/auth/register", "/auth/login"):
        pre = client.options(path, headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"})
        assert pre.status_code in (200, 204)

    r = client.post("/auth/register", json={"name": "Ann", "email": "ann@x.com", "password": "pw1"})
    assert r.status_code == 200, r.text
    assert r.json() == {"message": "User registered successfully", "userId": 1, "name": "Ann", "email": "ann@x.com"}

    r = client.post("/auth/login", json={"email": "ann@x.com", "password": "pw1"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Login successful"
    assert isinstance(body["token"], str) and body["token"]
    assert (body["userId"], body["name"], body["email"]) == (1, "Ann", "ann@x.com")
    assert "password" not in body

    r = client.post("/auth/login", json={"email": "ann@x.com", "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"detail": "Invalid email or password"}


@pytest.mark.auth
def test_duplicate_registration_is_400(client):
    payload = {"name": "Ann", "email": "ann@x.com", "password": "pw1"}
    assert client.post("/auth/register", json=payload).status_code == 200
    r = client.post("/auth/register", json=payload)
    assert r.status_code == 400
    assert r.json() == {"detail": "User with this email already exists"}


@pytest.mark.auth
@pytest.mark.parametrize(
    "payload",
    [{}, {"name": "Ann", "email": "ann@x.com"}, {"name": " ", "email": "ann@x.com", "password": "pw1"}],
)
def test_register_blank_fields_is_400(client, payload):
    r = client.post("/auth/register", json=payload)
    assert r.status_code == 400
    assert r.json() == {"detail": "All fields are required"}


@pytest.mark.auth
@pytest.mark.parametrize("payload", [{}, {"email": "ann@x.com", "password": ""}, {"email": "  ", "password": "pw1"}])
def test_login_blank_fields_is_400(client, payload):
    r = client.post("/auth/login", json=payload)
    assert r.status_code == 400
    assert r.json() == {"detail": "Email and password are required"}


@pytest.mark.auth
def test_unknown_user_and_wrong_password_look_the_same(client):
    client.post("/auth/register", json={"name": "Ann", "email": "ann@x.com", "password": "pw1"})
    unknown = client.post("/auth/login", json={"email": "nobody@x.com", "password": "pw1"})
    wrong = client.post("/auth/login", json={"email": "ann@x.com", "password": "PW1"})
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


def test_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_logs_never_contain_password_or_token(client, caplog):
    caplog.set_level(logging.INFO)
    client.post("/auth/register", json={"name": "Ann", "email": "ann@x.com", "password": "hunter2-secret"})
    token = client.post("/auth/login", json={"email": "ann@x.com", "password": "hunter2-secret"}).json()["token"]
    client.post("/auth/login", json={"email": "ann@x.com", "password": "bad-guess"})
    client.get("/book/getAllBooks", headers={"Authorization": f"Bearer {token}x"})

    assert "Registered user 1" in caplog.text
    assert "hunter2-secret" not in caplog.text
    assert "bad-guess" not in caplog.text
    assert token not in caplog.text
