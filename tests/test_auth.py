from tests.conftest import signup, STRONG_PASSWORD


def test_signup_logs_user_in(client):
    resp = signup(client)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["user"]["username"] == "alice"
    assert "password" not in body["user"]

    me = client.get("/auth/me").get_json()
    assert me["user"]["username"] == "alice"
    assert me["role"] == "user"


def test_password_is_not_stored_in_plaintext(app, client):
    signup(client)
    with app.app_context():
        from utils import storage
        stored = storage.load(storage.USERS_KEY)
    assert stored[0]["username"] == "alice"
    assert stored[0]["password"] != STRONG_PASSWORD
    assert stored[0]["fullName"] == "Alice Doe"


def test_duplicate_username_rejected(client, app):
    assert signup(client).status_code == 201
    resp = signup(app.test_client())
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "Username already exists."


def test_reserved_admin_username_rejected(client):
    resp = signup(client, username="admin")
    assert resp.status_code == 409


def test_duplicate_checked_before_password(client, app):
    signup(client)
    resp = signup(app.test_client(), password="weak")
    assert resp.status_code == 409


def test_password_missing_character_class_rejected(client):
    weak_passwords = ["sup3r$ecret", "SUP3R$ECRET", "Super$ecret", "Sup3rSecret", "S3$x"]
    for i, weak in enumerate(weak_passwords):
        resp = signup(client, username=f"user{i}", password=weak)
        assert resp.status_code == 400, weak
        assert resp.get_json()["error"] == "Password does not meet the requirements."


def test_missing_fields(client):
    resp = client.post("/auth/signup", json={"username": ""})
    assert resp.status_code == 400


def test_login_with_stored_user(client, app):
    signup(client)
    other = app.test_client()
    resp = other.post("/auth/login", json={"username": "alice", "password": STRONG_PASSWORD})
    assert resp.status_code == 200
    assert resp.get_json()["role"] == "user"


def test_login_bad_credentials(client):
    signup(client)
    resp = client.post("/auth/login", json={"username": "alice", "password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Invalid username or password."


def test_admin_login(client):
    resp = client.post("/auth/login", json={"username": "admin", "password": "1234"})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["role"] == "admin"
    assert body["user"]["fullName"] == "Administrator"


def test_logout_clears_session(user_client):
    assert user_client.post("/auth/logout").status_code == 200
    assert user_client.get("/auth/me").status_code == 401


def test_password_rules_checklist(client):
    body = client.get("/auth/password-rules", query_string={"password": "abcdefgh"}).get_json()
    assert body["checks"] == {
        "length": True, "upper": False, "lower": True, "number": False, "special": False,
    }
    assert body["valid"] is False


def test_email_stored_as_given(app, client):
    signup(client, email="Alice.Doe@Example.COM")
    with app.app_context():
        from utils import storage
        assert storage.load_users()[0].email == "Alice.Doe@Example.COM"


def test_non_string_fields_rejected(client):
    resp = client.post("/auth/signup", json={"username": 5, "password": STRONG_PASSWORD})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_fields"
