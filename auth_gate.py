"""
Auth Gate

Decides whether the Career Hub shows the app or the login/signup forms.
States and events are plain dataclasses; :func:`transition` is the whole
state machine and :class:`AuthGate` wires it to the backend and context.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

from app_context import AppContext
from backend_client import BackendClient, HTTPError, RequestError

logger = logging.getLogger(__name__)

LOGIN = "login"
SIGNUP = "signup"

REJECTED = "rejected"
UNREACHABLE = "unreachable"


# --- States ---
@dataclass(frozen=True)
class Verifying:
    pass


@dataclass(frozen=True)
class Authenticated:
    pass


@dataclass(frozen=True)
class Anonymous:
    view: str = LOGIN
    error: str = ""
    # Why the stored token was not accepted, if there was one
    reason: Optional[str] = None


AuthState = Union[Verifying, Authenticated, Anonymous]


# --- Events ---
@dataclass(frozen=True)
class Started:
    has_token: bool


@dataclass(frozen=True)
class Verified:
    valid: bool


@dataclass(frozen=True)
class VerifyFailed:
    pass


@dataclass(frozen=True)
class ViewToggled:
    pass


@dataclass(frozen=True)
class AuthSucceeded:
    token: str


@dataclass(frozen=True)
class AuthFailed:
    message: str


AuthEvent = Union[Started, Verified, VerifyFailed, ViewToggled, AuthSucceeded, AuthFailed]


def failure_message(error: RequestError, fallback: str) -> str:
    """Text shown under the auth form; never empty."""
    message = str(error).strip()
    if message:
        return message
    if isinstance(error, HTTPError):
        return f"{fallback} (status {error.status_code})"
    return fallback


def transition(state: AuthState, event: AuthEvent) -> AuthState:
    """Return the state that follows ``state`` after ``event``.

    Events that do not apply to the current state leave it unchanged.

    Raises:
        TypeError: If ``event`` is not an auth gate event
    """
    if isinstance(event, Started):
        return Verifying() if event.has_token else Anonymous(LOGIN)

    if isinstance(event, Verified):
        if not isinstance(state, Verifying):
            return state
        return Authenticated() if event.valid else Anonymous(LOGIN, reason=REJECTED)

    if isinstance(event, VerifyFailed):
        if not isinstance(state, Verifying):
            return state
        return Anonymous(LOGIN, reason=UNREACHABLE)

    if isinstance(event, ViewToggled):
        if not isinstance(state, Anonymous):
            return state
        return Anonymous(SIGNUP if state.view == LOGIN else LOGIN, reason=state.reason)

    if isinstance(event, AuthSucceeded):
        if not isinstance(state, Anonymous):
            return state
        return Authenticated()

    if isinstance(event, AuthFailed):
        if not isinstance(state, Anonymous):
            return state
        return Anonymous(state.view, error=event.message, reason=state.reason)

    raise TypeError(f"Unknown auth event: {event!r}")


class AuthGate:
    """Drives :func:`transition` with real backend calls."""

    def __init__(self, context: AppContext, client: BackendClient):
        self.context = context
        self.client = client
        self.state: AuthState = Anonymous(LOGIN)

    @property
    def authenticated(self) -> bool:
        return isinstance(self.state, Authenticated)

    def dispatch(self, event: AuthEvent) -> AuthState:
        new_state = transition(self.state, event)
        logger.debug("auth %s --%s--> %s", self.state, type(event).__name__, new_state)
        self.state = new_state
        return new_state

    def start(self) -> AuthState:
        """Verify the stored token, if any.

        The token stays in the store whatever the outcome, so it is
        re-verified on the next start.
        """
        token = self.context.token
        self.dispatch(Started(has_token=bool(token)))
        if not token:
            return self.state
        try:
            valid = self.client.verify_token(token)
        except HTTPError as e:
            if 400 <= e.status_code < 500:
                # The backend answered and refused the token
                logger.info("Stored token was rejected with status %s", e.status_code)
                return self.dispatch(Verified(valid=False))
            logger.warning("Token verification failed: %s", e)
            return self.dispatch(VerifyFailed())
        except RequestError as e:
            logger.warning("Token verification failed: %s", e)
            return self.dispatch(VerifyFailed())
        if not valid:
            logger.info("Stored token was rejected by the backend")
        return self.dispatch(Verified(valid=valid))

    def toggle_view(self) -> AuthState:
        return self.dispatch(ViewToggled())

    def login(self, email: str, password: str) -> AuthState:
        try:
            token = self.client.login(email, password)
        except RequestError as e:
            return self.dispatch(AuthFailed(failure_message(e, "Login failed.")))
        return self._signed_in(token)

    def signup(self, first_name: str, last_name: str, email: str, password: str) -> AuthState:
        try:
            token = self.client.signup(first_name, last_name, email, password)
        except RequestError as e:
            return self.dispatch(AuthFailed(failure_message(e, "Signup failed.")))
        return self._signed_in(token)

    def _signed_in(self, token: str) -> AuthState:
        self.context.set_token(token)
        self.client.token = token
        return self.dispatch(AuthSucceeded(token))
