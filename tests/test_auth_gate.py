"""
Tests for the auth gate transitions and its backend wiring.
Run: python -m pytest tests/ -v
"""
import pytest
import requests

from factories import make_response

from auth_gate import (
    LOGIN,
    REJECTED,
    SIGNUP,
    UNREACHABLE,
    Anonymous,
    AuthFailed,
    AuthGate,
    AuthSucceeded,
    Authenticated,
    Started,
    Verified,
    VerifyFailed,
    Verifying,
    ViewToggled,
    failure_message,
    transition,
)
from backend_client import HTTPError, NetworkError
from session_store import TOKEN_KEY


class TestTransition:
    def test_start_without_token_goes_to_login(self):
        assert transition(Anonymous(), Started(has_token=False)) == Anonymous(LOGIN)

    def test_start_with_token_verifies(self):
        assert transition(Anonymous(), Started(has_token=True)) == Verifying()

    def test_valid_token_authenticates(self):
        assert transition(Verifying(), Verified(valid=True)) == Authenticated()

    def test_rejected_token_shows_login(self):
        assert transition(Verifying(), Verified(valid=False)) == Anonymous(LOGIN, reason=REJECTED)

    def test_unreachable_backend_shows_login(self):
        assert transition(Verifying(), VerifyFailed()) == Anonymous(LOGIN, reason=UNREACHABLE)

    def test_toggle_flips_view_and_clears_error(self):
        state = Anonymous(LOGIN, error="bad password")
        toggled = transition(state, ViewToggled())
        assert toggled == Anonymous(SIGNUP)
        assert transition(toggled, ViewToggled()) == Anonymous(LOGIN)

    def test_auth_failure_keeps_view(self):
        state = transition(Anonymous(SIGNUP), AuthFailed("email taken"))
        assert state == Anonymous(SIGNUP, error="email taken")

    def test_auth_success_authenticates(self):
        assert transition(Anonymous(SIGNUP), AuthSucceeded("tok")) == Authenticated()

    def test_late_verify_result_ignored_once_anonymous(self):
        state = Anonymous(SIGNUP)
        assert transition(state, Verified(valid=True)) is state

    def test_toggle_ignored_when_authenticated(self):
        state = Authenticated()
        assert transition(state, ViewToggled()) is state

    def test_unknown_event_raises(self):
        with pytest.raises(TypeError):
            transition(Anonymous(), object())


class TestAuthGate:
    def test_no_token_skips_verify(self, context, client, http):
        gate = AuthGate(context, client)
        assert gate.start() == Anonymous(LOGIN)
        http.request.assert_not_called()

    def test_valid_stored_token_authenticates(self, context, client, http):
        context.set_token("good")
        http.request.return_value = make_response(200, {"valid": True})
        gate = AuthGate(context, client)
        gate.start()
        assert gate.authenticated
        _, kwargs = http.request.call_args
        assert kwargs["json"] == {"token": "good"}

    def test_invalid_token_shows_login_and_keeps_token(self, context, client, http, store):
        context.set_token("stale")
        http.request.return_value = make_response(200, {"valid": False})
        gate = AuthGate(context, client)
        assert gate.start() == Anonymous(LOGIN, reason=REJECTED)
        assert store.get(TOKEN_KEY) == "stale"
        assert context.token == "stale"

    def test_unauthorized_status_counts_as_rejected(self, context, client, http, store):
        context.set_token("stale")
        http.request.return_value = make_response(401, text="expired")
        gate = AuthGate(context, client)
        assert gate.start() == Anonymous(LOGIN, reason=REJECTED)
        assert store.get(TOKEN_KEY) == "stale"

    def test_network_failure_shows_login_and_keeps_token(self, context, client, http, store):
        context.set_token("maybe-good")
        http.request.side_effect = requests.exceptions.ConnectionError("down")
        gate = AuthGate(context, client)
        assert gate.start() == Anonymous(LOGIN, reason=UNREACHABLE)
        assert store.get(TOKEN_KEY) == "maybe-good"

    def test_server_error_is_unreachable(self, context, client, http):
        context.set_token("tok")
        http.request.return_value = make_response(503, text="maintenance")
        gate = AuthGate(context, client)
        assert gate.start() == Anonymous(LOGIN, reason=UNREACHABLE)

    def test_login_success_persists_token(self, context, client, http, store):
        http.request.return_value = make_response(200, {"token": "fresh"})
        gate = AuthGate(context, client)
        gate.start()
        gate.login("a@b.c", "pw")
        assert gate.authenticated
        assert store.get(TOKEN_KEY) == "fresh"
        assert client.token == "fresh"

    def test_signup_success_persists_token(self, context, client, http, store):
        http.request.return_value = make_response(200, {"token": "brand-new"})
        gate = AuthGate(context, client)
        gate.start()
        gate.toggle_view()
        gate.signup("Jane", "Doe", "j@d.io", "pw")
        assert gate.authenticated
        assert store.get(TOKEN_KEY) == "brand-new"

    def test_login_failure_shows_backend_message(self, context, client, http, store):
        http.request.return_value = make_response(401, text="Invalid credentials")
        gate = AuthGate(context, client)
        gate.start()
        state = gate.login("a@b.c", "wrong")
        assert state == Anonymous(LOGIN, error="Invalid credentials")
        assert store.get(TOKEN_KEY) is None

    def test_login_refused_with_empty_body_still_shows_message(self, context, client, http):
        http.request.return_value = make_response(401, text="")
        gate = AuthGate(context, client)
        gate.start()
        state = gate.login("a@b.c", "wrong")
        assert state.error == "Login failed. (status 401)"
        assert not gate.authenticated

    def test_signup_network_failure_shows_message(self, context, client, http):
        http.request.side_effect = requests.exceptions.ConnectionError("")
        gate = AuthGate(context, client)
        gate.start()
        gate.toggle_view()
        state = gate.signup("Jane", "Doe", "j@d.io", "pw")
        assert state == Anonymous(SIGNUP, error="Signup failed.")


class TestFailureMessage:
    def test_body_text_is_used_when_present(self):
        assert failure_message(HTTPError(409, "Email already registered"), "Signup failed.") == \
            "Email already registered"

    def test_blank_body_falls_back_with_status(self):
        assert failure_message(HTTPError(500, "  "), "Login failed.") == "Login failed. (status 500)"

    def test_blank_network_error_falls_back(self):
        assert failure_message(NetworkError(""), "Login failed.") == "Login failed."
