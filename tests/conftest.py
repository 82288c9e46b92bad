import pytest

from app import create_app
from config.config import TestConfig

STRONG_PASSWORD = "Sup3r$ecret"


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


def signup(client, username="alice", password=STRONG_PASSWORD, **extra):
    body = {
        "fullName": extra.get("fullName", "Alice Doe"),
        "email": extra.get("email", f"{username}@example.com"),
        "phone": extra.get("phone", "555-0100"),
        "username": username,
        "password": password,
    }
    return client.post("/auth/signup", json=body)


@pytest.fixture()
def user_client(app):
    c = app.test_client()
    resp = signup(c)
    assert resp.status_code == 201
    return c


@pytest.fixture()
def admin_client(app):
    c = app.test_client()
    resp = c.post("/auth/login", json={"username": "admin", "password": "1234"})
    assert resp.status_code == 200
    return c


@pytest.fixture()
def fake_llm(monkeypatch):
    """Replace the outbound LLM call; records every prompt it receives."""
    prompts = []

    def _fake(prompt, system_instruction=None, temperature=None):
        prompts.append(prompt)
        if "TICKET SUMMARY" in prompt:
            return "Green line on OnePlus 11 display"
        return "Please update your software to the latest version."

    monkeypatch.setattr("ai_engines.chatbot_llm.call_llm", _fake)
    monkeypatch.setattr("ai_engines.summarizer.call_llm", _fake)
    return prompts
