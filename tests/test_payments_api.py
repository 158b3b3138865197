# tests/test_payments_api.py
import pytest

from paydesk.errors import InternalError


def _create(client, **body):
    payload = {"developerName": "Ada", "amount": 75}
    payload.update(body)
    return client.post("/api/payments", json=payload)


def test_create_payment(client):
    r = _create(client, taskTitle="Event Bus System Test", taskId=42, project="core")
    assert r.status_code == 201
    body = r.get_json()
    assert body["success"] is True
    data = body["data"]
    assert data["developerName"] == "Ada"
    assert data["amount"] == 75.0
    assert data["paymentStatus"] == "pending"
    assert data["paymentDate"] is None
    assert data["taskId"] == "42"
    assert data["project"] == "core"


@pytest.mark.parametrize("body,field", [
    ({"amount": 0}, "amount"),
    ({"amount": -3}, "amount"),
    ({"amount": "abc"}, "amount"),
    ({"amount": True}, "amount"),
    ({"amount": False}, "amount"),
    ({"developerName": True}, "developerName"),
    ({"developerName": {}}, "developerName"),
    ({"developerName": "   "}, "developerName"),
    ({"paymentStatus": "archived"}, "paymentStatus"),
    ({"paymentMethod": "cash"}, "paymentMethod"),
])
def test_create_payment_validation(client, body, field):
    r = _create(client, **body)
    assert r.status_code == 400
    data = r.get_json()
    assert data["success"] is False
    assert field in data["errors"]


def test_create_payment_missing_amount(client):
    r = client.post("/api/payments", json={"developerName": "Ada"})
    assert r.status_code == 400
    assert "amount" in r.get_json()["errors"]


def test_create_payment_bad_payment_date(client):
    r = _create(client, paymentStatus="confirmed", paymentDate="yesterday")
    assert r.status_code == 400
    assert "paymentDate" in r.get_json()["errors"]


def test_body_must_be_object(client):
    r = client.post("/api/payments", json=[1, 2, 3])
    assert r.status_code == 400


def test_get_payment_and_404(client):
    pid = _create(client).get_json()["data"]["id"]
    r = client.get(f"/api/payments/{pid}")
    assert r.status_code == 200
    assert r.get_json()["data"]["id"] == pid

    r = client.get("/api/payments/does-not-exist")
    assert r.status_code == 404
    assert r.get_json()["success"] is False


def test_list_payments_with_filters(client, clock):
    _create(client, developerName="Ada", project="core")
    clock.advance(days=2)
    _create(client, developerName="Bob", project="core")
    _create(client, developerName="Ada", project="web")

    r = client.get("/api/payments", query_string={"developerName": "Ada", "project": "core"})
    body = r.get_json()
    assert r.status_code == 200
    assert body["count"] == 1
    assert body["data"][0]["project"] == "core"

    r = client.get("/api/payments", query_string={"fromDate": "2026-10-16"})
    assert {p["developerName"] for p in r.get_json()["data"]} == {"Ada", "Bob"}
    assert r.get_json()["count"] == 2

    r = client.get("/api/payments", query_string={"status": "all"})
    assert r.get_json()["count"] == 3


def test_list_payments_bad_date(client):
    r = client.get("/api/payments", query_string={"toDate": "31/12/2026"})
    assert r.status_code == 400


def test_list_payments_unknown_status(client):
    _create(client)
    r = client.get("/api/payments", query_string={"status": "paid"})
    assert r.status_code == 400
    assert "status" in r.get_json()["errors"]
    assert client.get("/api/payments", query_string={"status": "Pending"}).get_json()["count"] == 1


def test_update_status(client):
    pid = _create(client).get_json()["data"]["id"]
    r = client.patch(f"/api/payments/{pid}/status", json={"status": "confirmed"})
    assert r.status_code == 200
    data = r.get_json()["data"]
    assert data["paymentStatus"] == "confirmed"
    assert data["paymentDate"] is not None

    ledger = client.get("/api/payments/ledger/Ada").get_json()["data"]
    assert ledger["totalPaid"] == 75.0
    assert ledger["totalPending"] == 0
    assert ledger["paymentCount"] == 1


def test_update_status_errors(client):
    pid = _create(client).get_json()["data"]["id"]
    assert client.patch(f"/api/payments/{pid}/status", json={"status": "nope"}).status_code == 400
    assert client.patch(f"/api/payments/{pid}/status", json={}).status_code == 400
    assert client.patch("/api/payments/missing/status", json={"status": "sent"}).status_code == 404


def test_bulk_update(client):
    a = _create(client).get_json()["data"]["id"]
    b = _create(client, developerName="Bob").get_json()["data"]["id"]
    r = client.post("/api/payments/bulk", json={"paymentIds": [a, "missing", b], "status": "sent"})
    assert r.status_code == 200
    body = r.get_json()
    assert body["updated"] == 2
    assert body["requested"] == 3
    assert {p["id"] for p in body["data"]} == {a, b}
    assert all(p["paymentStatus"] == "sent" for p in body["data"])


def test_bulk_update_validation(client):
    assert client.post("/api/payments/bulk", json={"paymentIds": [], "status": "sent"}).status_code == 400
    assert client.post("/api/payments/bulk", json={"paymentIds": ["x"], "status": "gone"}).status_code == 400


def test_stats(client):
    _create(client, amount=50, paymentStatus="confirmed")
    _create(client, amount=25)
    r = client.get("/api/payments/stats")
    assert r.status_code == 200
    stats = r.get_json()["data"]
    assert stats["totalPaid"] == 50.0
    assert stats["totalPending"] == 25.0
    assert stats["thisMonth"] == 50.0
    assert stats["activeDevelopers"] == 1
    assert len(stats["recentPayments"]) == 2
    assert set(stats["recentPayments"][0]) == {
        "id", "developerName", "amount", "paymentStatus", "paymentDate", "taskTitle",
    }


def test_stats_empty(client):
    stats = client.get("/api/payments/stats").get_json()["data"]
    assert stats == {
        "totalPaid": 0,
        "totalPending": 0,
        "activeDevelopers": 0,
        "thisMonth": 0,
        "recentPayments": [],
    }


def test_ledger_attaches_three_recent_payments(client, clock):
    ids = []
    for _ in range(5):
        clock.advance(minutes=1)
        ids.append(_create(client).get_json()["data"]["id"])
    _create(client, developerName="Bob")

    rows = client.get("/api/payments/ledger").get_json()["data"]
    assert [row["developerName"] for row in rows] == ["Ada", "Bob"]
    ada = rows[0]
    assert ada["totalPending"] == 375.0
    assert [p["id"] for p in ada["recentPayments"]] == list(reversed(ids))[:3]
    assert len(rows[1]["recentPayments"]) == 1


def test_ledger_unknown_developer(client):
    assert client.get("/api/payments/ledger/Nobody").status_code == 404


def test_internal_error_is_500(client, storage, monkeypatch):
    def boom():
        raise InternalError("Payment stats aggregation failed")

    monkeypatch.setattr(storage, "get_payment_stats", boom)
    r = client.get("/api/payments/stats")
    assert r.status_code == 500
    assert r.get_json() == {"success": False, "error": "Payment stats aggregation failed"}


def test_unexpected_error_is_generic_500(client, storage, monkeypatch):
    def boom(*a, **k):
        raise RuntimeError("secret detail")

    monkeypatch.setattr(storage, "get_developer_ledgers", boom)
    r = client.get("/api/payments/ledger")
    assert r.status_code == 500
    assert "secret" not in r.get_data(as_text=True)
