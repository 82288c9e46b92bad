import csv
import io

from tests.conftest import signup


def _escalate(client, text):
    client.post("/chatbot/chat/query", json={"message": text})
    return client.post("/chatbot/chat/escalate", json={}).get_json()["ticket"]


def test_admin_routes_require_admin_role(client, user_client):
    assert client.get("/admin/tickets").status_code == 401
    assert user_client.get("/admin/tickets").status_code == 403


def test_close_ticket_is_one_way(user_client, admin_client, fake_llm):
    ticket = _escalate(user_client, "green line")

    resp = admin_client.post(f"/admin/tickets/{ticket['id']}/close")
    assert resp.status_code == 200
    assert resp.get_json()["ticket"]["status"] == "Closed"

    again = admin_client.post(f"/admin/tickets/{ticket['id']}/close")
    assert again.status_code == 409

    detail = admin_client.get(f"/admin/tickets/{ticket['id']}").get_json()["ticket"]
    assert detail["status"] == "Closed"


def test_close_unknown_ticket(admin_client):
    assert admin_client.post("/admin/tickets/42/close").status_code == 404


def test_search_filters_and_sorts(user_client, admin_client, fake_llm):
    first = _escalate(user_client, "warranty claim help")
    second = _escalate(user_client, "battery drains")

    all_ids = [t["id"] for t in admin_client.get("/admin/tickets").get_json()["tickets"]]
    assert all_ids == [second["id"], first["id"]]

    found = admin_client.get("/admin/tickets", query_string={"q": "WARRANTY"}).get_json()["tickets"]
    assert [t["id"] for t in found] == [first["id"]]

    by_id = admin_client.get("/admin/tickets", query_string={"q": str(second["id"])}).get_json()["tickets"]
    assert [t["id"] for t in by_id] == [second["id"]]


def test_dashboard_counts(user_client, admin_client, fake_llm):
    first = _escalate(user_client, "one")
    _escalate(user_client, "two")
    admin_client.post(f"/admin/tickets/{first['id']}/close")

    stats = admin_client.get("/admin/").get_json()
    assert stats["tickets_total"] == 2
    assert stats["tickets_open"] == 1
    assert stats["tickets_closed"] == 1
    assert stats["users"] == 1


def test_csv_export_row_count_matches_tickets(user_client, admin_client, fake_llm):
    _escalate(user_client, 'screen says "error 12"')
    _escalate(user_client, "warranty")
    _escalate(user_client, "display")

    resp = admin_client.get("/admin/tickets/export")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    text = resp.get_data(as_text=True)
    assert text.splitlines()[0] == "ID,Summary,Query,Status,Created At"

    rows = list(csv.reader(io.StringIO(text)))
    assert len(rows) - 1 == 3
    assert ["screen says \"error 12\""] == [r[2] for r in rows[1:] if "error" in r[2]]
    assert '"screen says ""error 12"""' in text


def test_attachment_download(user_client, admin_client, fake_llm):
    user_client.post("/chatbot/chat/query", json={"message": "green line"})
    ticket = user_client.post(
        "/chatbot/chat/escalate",
        data={"file": (io.BytesIO(b"hello log"), "device.log", "text/plain")},
        content_type="multipart/form-data",
    ).get_json()["ticket"]

    resp = admin_client.get(f"/admin/tickets/{ticket['id']}/attachment")
    assert resp.status_code == 200
    assert resp.data == b"hello log"

    plain = _escalate(user_client, "no file")
    assert admin_client.get(f"/admin/tickets/{plain['id']}/attachment").status_code == 404


def test_delete_user(app, admin_client):
    signup(app.test_client(), username="bob")
    assert [u["username"] for u in admin_client.get("/admin/users").get_json()["users"]] == ["bob"]

    assert admin_client.delete("/admin/users/bob").status_code == 204
    assert admin_client.get("/admin/users").get_json()["users"] == []
    assert admin_client.delete("/admin/users/bob").status_code == 404


def test_reserved_admin_cannot_be_deleted(admin_client):
    assert admin_client.delete("/admin/users/admin").status_code == 403


def test_deleted_user_loses_access(admin_client, user_client, fake_llm):
    user_client.post("/chatbot/chat/query", json={"message": "green line"})
    assert admin_client.delete("/admin/users/alice").status_code == 204

    assert user_client.get("/auth/me").status_code == 401
    assert user_client.post("/chatbot/chat/query", json={"message": "hi"}).status_code == 401
    assert user_client.post("/chatbot/chat/escalate", json={}).status_code == 401
    assert admin_client.get("/admin/tickets").get_json()["tickets"] == []
