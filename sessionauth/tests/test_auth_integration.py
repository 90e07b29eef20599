from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from sessionauth.app import create_app
from sessionauth.infrastructure.container import Container
from sessionauth.infrastructure.db import SessionLocal
from sessionauth.infrastructure.db.models import Account, AuthSession

pytestmark = pytest.mark.usefixtures("clean_db")

ALICE = {
    "username": "alice",
    "firstname": "Alice",
    "lastname": "Liddell",
    "password": "p1",
    "password2": "p1",
    "avatar": "cat",
    "acceptTos": "on",
}


@pytest.fixture()
def deps() -> Container:
    return Container()


@pytest.fixture()
def client(deps: Container):
    app = create_app(deps)
    app.config.update(TESTING=True)
    with app.test_client() as test_client:
        yield test_client


def _count(model) -> int:
    db = SessionLocal()
    try:
        return db.query(model).count()
    finally:
        db.close()
        SessionLocal.remove()


def test_signup_signout_signin_flow(client) -> None:
    assert client.get("/user/authenticated").headers["Location"] == "/"

    signup = client.post("/user/signup", data=ALICE)
    assert signup.status_code == 302
    assert signup.headers["Location"] == "/user/authenticated"
    assert signup.headers["user"].isdigit()
    assert client.get("/user/authenticated").status_code == 200

    token = client.get_cookie("sid").value
    signout = client.get("/user/signout")
    assert signout.status_code == 302
    assert signout.headers["Location"] == "/"
    assert client.get_cookie("sid") is None

    # The old token must not be honoured again
    client.set_cookie("sid", token)
    replay = client.get("/user/authenticated")
    assert replay.status_code == 302
    assert replay.headers["Location"] == "/"

    wrong = client.post("/user/signin", data={"username": "alice", "password": "wrong"})
    assert wrong.status_code == 400
    assert b"Wrong username or password" in wrong.data

    signin = client.post("/user/signin", data={"username": "alice", "password": "p1"})
    assert signin.status_code == 302
    assert signin.headers["Location"] == "/user/authenticated"
    assert signin.headers["user"] == signup.headers["user"]
    assert client.get("/user/authenticated").status_code == 200


def test_password_is_stored_hashed(client) -> None:
    client.post("/user/signup", data=ALICE)

    db = SessionLocal()
    try:
        row = db.query(Account).filter(Account.username == "alice").one()
        assert row.password_hash != "p1"
        assert row.password_hash.startswith("$2b$")
        assert row.first_name == "Alice"
        assert row.avatar == "cat"
    finally:
        db.close()
        SessionLocal.remove()


def test_duplicate_signup_is_rejected_by_name(client) -> None:
    client.post("/user/signup", data=ALICE)
    client.get("/user/signout")

    again = client.post("/user/signup", data={**ALICE, "firstname": "Other"})

    assert again.status_code == 400
    assert b"alice: username already used" in again.data
    assert _count(Account) == 1


def test_signup_validation_errors(client) -> None:
    mismatch = client.post("/user/signup", data={**ALICE, "password2": "p2"})
    no_terms = client.post(
        "/user/signup", data={k: v for k, v in ALICE.items() if k != "acceptTos"}
    )

    assert mismatch.status_code == 400
    assert b"passwords do not match" in mismatch.data
    assert no_terms.status_code == 400
    assert b"accepted terms of service" in no_terms.data
    assert _count(Account) == 0
    assert _count(AuthSession) == 0


def test_unknown_user_and_wrong_password_respond_identically(client) -> None:
    client.post("/user/signup", data=ALICE)
    client.get("/user/signout")

    unknown = client.post("/user/signin", data={"username": "bob", "password": "p1"})
    wrong = client.post("/user/signin", data={"username": "alice", "password": "nope"})

    assert unknown.status_code == wrong.status_code == 400
    assert b"Wrong username or password" in unknown.data
    assert b"Wrong username or password" in wrong.data
    assert unknown.headers.get("user") is None
    assert wrong.headers.get("user") is None


def test_remember_me_persists_for_fourteen_days(client, deps: Container) -> None:
    client.post("/user/signup", data=ALICE)
    client.get("/user/signout")

    response = client.post(
        "/user/signin", data={"username": "alice", "password": "p1", "rememberMe": "on"}
    )

    assert "Max-Age=" in response.headers["Set-Cookie"]
    record = deps.session_store.get(client.get_cookie("sid").value)
    assert record is not None
    expected = datetime.now(UTC) + timedelta(days=14)
    assert abs((record.expires_at - expected).total_seconds()) < 60


def test_signin_without_remember_me_is_browser_scoped(client, deps: Container) -> None:
    client.post("/user/signup", data=ALICE)
    client.get("/user/signout")

    response = client.post("/user/signin", data={"username": "alice", "password": "p1"})

    assert "Max-Age" not in response.headers["Set-Cookie"]
    record = deps.session_store.get(client.get_cookie("sid").value)
    assert record.expires_at is None


def test_health_and_metrics(client) -> None:
    health = client.get("/api/health")
    assert health.get_json() == {"ok": True, "database": "ok", "schema": "ok"}

    client.post("/user/signin", data={"username": "ghost", "password": "x"})
    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    assert b"sessionauth_auth_events_total" in metrics.data


def test_landing_page_greets_and_bad_forms_rerender(client) -> None:
    oversized = client.post(
        "/user/signup", data={**ALICE, "password": "x" * 80, "password2": "x" * 80}
    )
    assert oversized.status_code == 400
    assert oversized.mimetype == "text/html"
    assert b"Password must be at most 72 bytes" in oversized.data
    assert _count(Account) == 0

    client.post("/user/signup", data=ALICE)
    landing = client.get("/user/authenticated")
    assert b"Welcome, Alice Liddell." in landing.data

    client.get("/user/signout")
    blank = client.post("/user/signin", data={"username": "", "password": "p1"})
    assert blank.status_code == 400
    assert b"Wrong username or password" in blank.data
