from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError, ProgrammingError

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine, get_db
from backend.app.main import app
from backend.app.models.payment import Payment


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def seed_payments(rows):
    db = SessionLocal()
    try:
        for recipient, scheduled, amount in rows:
            db.add(
                Payment(
                    amount=Decimal(amount),
                    currency="USD",
                    scheduled_date=scheduled,
                    recipient=recipient,
                )
            )
        db.commit()
    finally:
        db.close()


def seed_scenario():
    seed_payments(
        [
            ("John Doe", date(2025, 9, 15), "2500.00"),
            ("John Doe", date(2025, 7, 26), "5000.00"),
            ("Jane Smith", date(2025, 7, 25), "7500.00"),
            ("Bob Wilson", date(2024, 12, 1), "1000.00"),
        ]
    )


class _BrokenSession:
    def query(self, *args, **kwargs):
        raise OperationalError("SELECT payments", {}, Exception("connection refused"))

    def close(self):
        pass


class _FailingQuerySession(_BrokenSession):
    def query(self, *args, **kwargs):
        raise ProgrammingError("SELECT payments", {}, Exception("relation does not exist"))


class _RecordingSession:
    def __init__(self):
        self.calls = 0

    def query(self, *args, **kwargs):
        self.calls += 1
        raise AssertionError("storage must not be queried")

    def close(self):
        pass


def test_list_payments_returns_all_rows_newest_first():
    seed_scenario()
    client = TestClient(app)
    resp = client.get("/payments")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 4
    assert body["count"] == 4
    assert body["limit"] == 10
    assert body["offset"] == 0
    assert [p["scheduledDate"] for p in body["data"]] == [
        "2025-09-15",
        "2025-07-26",
        "2025-07-25",
        "2024-12-01",
    ]


def test_payment_item_shape():
    seed_scenario()
    client = TestClient(app)
    payment = client.get("/payments").json()["data"][0]
    assert set(payment) == {
        "id",
        "amount",
        "currency",
        "scheduledDate",
        "recipient",
        "status",
        "createdAt",
        "updatedAt",
    }
    assert isinstance(payment["id"], str)
    assert payment["amount"] == "2500.00"
    assert payment["currency"] == "USD"
    assert payment["status"] == "pending"
    assert isinstance(payment["createdAt"], str)
    assert isinstance(payment["updatedAt"], str)


def test_filter_by_recipient_is_case_insensitive_substring():
    seed_scenario()
    client = TestClient(app)
    body = client.get("/payments", params={"recipient": "john"}).json()
    assert body["total"] == 2
    assert all("john" in p["recipient"].lower() for p in body["data"])


def test_filter_by_several_recipients_returns_union():
    seed_scenario()
    client = TestClient(app)
    body = client.get("/payments", params={"recipient": "john, JANE"}).json()
    assert body["total"] == 3
    assert {p["recipient"] for p in body["data"]} == {"John Doe", "Jane Smith"}


def test_blank_recipient_tokens_mean_no_filter():
    seed_scenario()
    client = TestClient(app)
    body = client.get("/payments", params={"recipient": " , ,"}).json()
    assert body["total"] == 4


def test_filter_by_date_range():
    seed_scenario()
    client = TestClient(app)
    body = client.get(
        "/payments",
        params={"scheduledDateFrom": "2025-01-01", "scheduledDateTo": "2025-12-31"},
    ).json()
    assert body["total"] == 3
    assert "2024-12-01" not in [p["scheduledDate"] for p in body["data"]]


def test_date_range_bounds_are_inclusive():
    seed_scenario()
    client = TestClient(app)
    body = client.get(
        "/payments",
        params={"scheduledDateFrom": "2025-07-25", "scheduledDateTo": "2025-07-26"},
    ).json()
    assert [p["scheduledDate"] for p in body["data"]] == ["2025-07-26", "2025-07-25"]


def test_date_filter_accepts_iso_datetime():
    seed_scenario()
    client = TestClient(app)
    resp = client.get(
        "/payments",
        params={"scheduledDateFrom": "2025-07-26T10:30:00Z", "scheduledDateTo": "2025-09-15T00:00:00+02:00"},
    )
    assert resp.status_code == 200
    assert [p["scheduledDate"] for p in resp.json()["data"]] == ["2025-09-15", "2025-07-26"]


def test_large_in_range_pagination_values_are_accepted():
    seed_scenario()
    client = TestClient(app)
    resp = client.get("/payments", params={"limit": 2**31 - 1, "offset": 2**31 - 1})
    assert resp.status_code == 200
    assert resp.json()["data"] == []
    assert resp.json()["total"] == 4


def test_combined_recipient_and_date_filters():
    seed_scenario()
    client = TestClient(app)
    body = client.get("/payments", params={"recipient": "john", "scheduledDateFrom": "2025-01-01"}).json()
    assert body["total"] == 2
    assert all(p["recipient"] == "John Doe" for p in body["data"])


def test_unknown_recipient_returns_empty_page():
    seed_scenario()
    client = TestClient(app)
    resp = client.get("/payments", params={"recipient": "nonexistent"})
    assert resp.status_code == 200
    assert resp.json() == {"data": [], "total": 0, "limit": 10, "offset": 0, "count": 0}


def test_pagination_pages_are_disjoint_and_ordered():
    seed_payments([(f"Recipient {i}", date(2025, 1, i + 1), "10.00") for i in range(6)])
    client = TestClient(app)
    full = client.get("/payments").json()["data"]
    first = client.get("/payments", params={"limit": 2, "offset": 0}).json()
    second = client.get("/payments", params={"limit": 2, "offset": 2}).json()

    assert first["count"] == 2 and second["count"] == 2
    assert first["total"] == second["total"] == 6
    first_ids = [p["id"] for p in first["data"]]
    second_ids = [p["id"] for p in second["data"]]
    assert not set(first_ids) & set(second_ids)
    assert first_ids + second_ids == [p["id"] for p in full[:4]]


def test_default_limit_caps_page_size():
    seed_payments([(f"Recipient {i}", date(2025, 2, i + 1), "10.00") for i in range(12)])
    client = TestClient(app)
    body = client.get("/payments").json()
    assert body["total"] == 12
    assert body["count"] == 10
    assert len(body["data"]) <= body["limit"]


def test_zero_limit_falls_back_to_default():
    seed_scenario()
    client = TestClient(app)
    body = client.get("/payments", params={"limit": 0, "offset": 0}).json()
    assert body["limit"] == 10
    assert body["count"] == 4


def test_offset_past_end_returns_empty_page_with_total():
    seed_scenario()
    client = TestClient(app)
    body = client.get("/payments", params={"offset": 50}).json()
    assert body["data"] == []
    assert body["total"] == 4
    assert body["offset"] == 50


@pytest.mark.parametrize(
    "params",
    [
        {"scheduledDateFrom": "invalid-date"},
        {"scheduledDateTo": "2025-13-45"},
        {"scheduledDateFrom": "1735689600"},
        {"scheduledDateFrom": "20250101"},
        {"scheduledDateTo": "01/02/2025"},
        {"scheduledDateTo": "2025-01-01T25:00:00"},
        {"limit": "ten"},
        {"limit": "99999999999999999999"},
        {"offset": -1},
        {"offset": "99999999999999999999"},
    ],
)
def test_invalid_query_params_return_400_without_storage_access(params):
    session = _RecordingSession()

    def _override():
        yield session

    app.dependency_overrides[get_db] = _override
    try:
        client = TestClient(app)
        resp = client.get("/payments", params=params)
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 400
    assert session.calls == 0


def test_list_recipients_sorted_and_unique():
    seed_scenario()
    client = TestClient(app)
    resp = client.get("/payments/recipients")
    assert resp.status_code == 200
    assert resp.json() == ["Bob Wilson", "Jane Smith", "John Doe"]


def test_unreachable_store_returns_503():
    def _override():
        yield _BrokenSession()

    app.dependency_overrides[get_db] = _override
    try:
        client = TestClient(app)
        list_resp = client.get("/payments")
        recipients_resp = client.get("/payments/recipients")
    finally:
        app.dependency_overrides.clear()
    assert list_resp.status_code == 503
    assert recipients_resp.status_code == 503
    assert list_resp.json() == {"detail": "Payment store is unavailable"}


def test_failing_query_returns_500():
    def _override():
        yield _FailingQuerySession()

    app.dependency_overrides[get_db] = _override
    try:
        client = TestClient(app)
        resp = client.get("/payments")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Payment store query failed"}
