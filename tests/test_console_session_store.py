from __future__ import annotations

import io
import json
from pathlib import Path

import responses

from coupon_admin_sdk import ApiSession, AuthStore
from coupon_admin_sdk.models import LoginResponse

from coupon_admin_console.app.navigation import Navigator
from coupon_admin_console.app.session_store import SessionStore
from coupon_admin_console.app.state import Route, SessionPhase
from coupon_admin_console.telemetry import TelemetryLogger

API = "https://api.example.com"
ME = {"_id": "u1", "name": "Admin", "phone": "0900", "role": "ADMIN", "isFirstLogin": False}


def _store(api_session: ApiSession) -> tuple[SessionStore, Navigator]:
    navigator = Navigator()
    return SessionStore(api_session, navigator), navigator


def test_store_starts_loading(api_session: ApiSession) -> None:
    store, _ = _store(api_session)
    assert store.loading is True
    assert store.identity is None


@responses.activate
def test_establish_success(api_session: ApiSession, auth_store: AuthStore) -> None:
    auth_store.save("stored-token")
    responses.add(responses.GET, f"{API}/auth/me", json=ME, status=200)
    store, _ = _store(api_session)

    assert store.start() is SessionPhase.AUTHENTICATED
    assert store.loading is False
    assert store.identity is not None and store.identity.name == "Admin"
    assert responses.calls[0].request.headers["Authorization"] == "Bearer stored-token"


@responses.activate
def test_establish_failure_discards_credential(api_session: ApiSession, auth_store: AuthStore) -> None:
    auth_store.save("expired")
    responses.add(responses.GET, f"{API}/auth/me", json={"message": "jwt expired"}, status=401)
    store, _ = _store(api_session)

    assert store.start() is SessionPhase.ANONYMOUS
    assert store.identity is None
    assert store.loading is False
    assert auth_store.load() is None


@responses.activate
def test_start_runs_establish_once(api_session: ApiSession) -> None:
    responses.add(responses.GET, f"{API}/auth/me", json=ME, status=200)
    store, _ = _store(api_session)

    store.start()
    store.start()

    assert len(responses.calls) == 1


@responses.activate
def test_record_login_persists_token_for_next_request(api_session: ApiSession, auth_store: AuthStore) -> None:
    responses.add(responses.GET, f"{API}/admin/stats", json={}, status=200)
    store, navigator = _store(api_session)

    identity = store.record_login(LoginResponse.model_validate({**ME, "token": "new-token"}))
    api_session.stats_client().get_stats()

    assert identity.role.value == "ADMIN"
    assert store.phase is SessionPhase.AUTHENTICATED
    assert auth_store.load() == "new-token"
    assert responses.calls[0].request.headers["Authorization"] == "Bearer new-token"
    assert navigator.current is Route.LOGIN


def test_record_login_without_token_keeps_identity(api_session: ApiSession, auth_store: AuthStore) -> None:
    store, _ = _store(api_session)
    store.record_login(LoginResponse.model_validate(ME))
    assert store.identity is not None
    assert auth_store.load() is None


@responses.activate
def test_logout_clears_state_even_when_server_fails(api_session: ApiSession, auth_store: AuthStore) -> None:
    responses.add(responses.POST, f"{API}/auth/logout", json={"message": "boom"}, status=500)
    store, navigator = _store(api_session)
    store.record_login(LoginResponse.model_validate({**ME, "token": "tok"}))
    navigator.navigate(Route.ADMIN_AGENTS)
    navigator.page(Route.ADMIN_AGENTS, object)

    store.end_session()

    assert store.identity is None
    assert store.phase is SessionPhase.ENDED
    assert auth_store.load() is None
    assert navigator.current is Route.LOGIN
    assert navigator.pages == {}
    assert responses.calls[0].request.headers["Authorization"] == "Bearer tok"


@responses.activate
def test_logout_is_idempotent(api_session: ApiSession) -> None:
    responses.add(responses.POST, f"{API}/auth/logout", json={}, status=200)
    store, navigator = _store(api_session)
    store.record_login(LoginResponse.model_validate({**ME, "token": "tok"}))

    store.end_session()
    store.end_session()

    assert len(responses.calls) == 1
    assert store.phase is SessionPhase.ENDED
    assert navigator.current is Route.LOGIN


@responses.activate
def test_logout_survives_transport_failure(api_session: ApiSession, auth_store: AuthStore) -> None:
    store, navigator = _store(api_session)
    store.record_login(LoginResponse.model_validate({**ME, "token": "tok"}))

    store.end_session()

    assert auth_store.load() is None
    assert navigator.current is Route.LOGIN


@responses.activate
def test_auth_events_carry_a_trace_per_action(api_session: ApiSession, tmp_path: Path) -> None:
    responses.add(responses.GET, f"{API}/auth/me", json=ME, status=200)
    responses.add(responses.POST, f"{API}/auth/logout", body="", status=204)
    target = tmp_path / "events.jsonl"
    telemetry = TelemetryLogger(enabled=True, log_file=target, stdout_stream=io.StringIO())
    store = SessionStore(api_session, Navigator(), telemetry)

    store.start()
    establish_trace = api_session.trace_id
    store.end_session()

    events = [json.loads(line) for line in target.read_text(encoding="utf-8").splitlines()]
    auth = [event for event in events if event["category"] == "auth"]
    assert [event["action"] for event in auth] == ["session.establish", "session.logout"]
    assert auth[0]["trace_id"] == establish_trace
    assert auth[1]["trace_id"] == api_session.trace_id != establish_trace
    assert responses.calls[1].request.headers["X-Trace-ID"] == auth[1]["trace_id"]
    assert auth[1]["context"] == {"phase": "ended"}
