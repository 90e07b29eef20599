from __future__ import annotations

from datetime import UTC, datetime

import pytest

from sessionauth.application.services.access_guard import AccessGuard, RequestKind
from sessionauth.domain.users.entities import SessionRecord
from sessionauth.domain.users.exceptions import RedirectRequiredError, UnauthorizedError


def _session(account_id: int | None) -> SessionRecord:
    return SessionRecord(
        token="tok", account_id=account_id, expires_at=None, created_at=datetime.now(UTC)
    )


@pytest.mark.parametrize("kind", list(RequestKind))
def test_authenticated_session_is_allowed(kind: RequestKind) -> None:
    decision = AccessGuard().check(_session(7), kind)

    assert decision.allowed
    decision.enforce()


@pytest.mark.parametrize("session", [None, _session(None)])
def test_anonymous_navigation_redirects_to_fallback(session) -> None:
    decision = AccessGuard(fallback="/user/signin").check(session, RequestKind.NAVIGATIONAL)

    assert not decision.allowed
    assert isinstance(decision.denial, RedirectRequiredError)
    assert decision.denial.location == "/user/signin"


def test_default_fallback_is_root() -> None:
    decision = AccessGuard().check(None, RequestKind.NAVIGATIONAL)

    assert decision.denial.location == "/"


def test_anonymous_non_navigation_is_forbidden() -> None:
    decision = AccessGuard().check(_session(None), RequestKind.NON_NAVIGATIONAL)

    assert isinstance(decision.denial, UnauthorizedError)
    assert decision.denial.status == 403
    with pytest.raises(UnauthorizedError):
        decision.enforce()


@pytest.mark.parametrize(
    ("method", "kind"),
    [
        ("GET", RequestKind.NAVIGATIONAL),
        ("head", RequestKind.NAVIGATIONAL),
        ("POST", RequestKind.NON_NAVIGATIONAL),
        ("DELETE", RequestKind.NON_NAVIGATIONAL),
        ("PUT", RequestKind.NON_NAVIGATIONAL),
    ],
)
def test_request_kind_from_method(method: str, kind: RequestKind) -> None:
    assert RequestKind.from_method(method) is kind
