"""
Backend Client

Thin ``requests`` wrapper for the Career Hub backend: JSON bodies, optional
bearer token, and one helper per endpoint. Failures propagate to the caller;
there is no retry, timeout or backoff.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError

from models import (
    Certificate,
    LearningPlan,
    LoginRequest,
    Quiz,
    QuizResult,
    QuizSubmission,
    SignupRequest,
    TokenResponse,
    VerifyResponse,
)

logger = logging.getLogger(__name__)


class RequestError(Exception):
    """Base class for failed backend calls."""
    pass


class NetworkError(RequestError):
    """The request never produced an HTTP response."""
    pass


class HTTPError(RequestError):
    """The backend answered with a non-2xx status; the message is the body text."""

    def __init__(self, status_code: int, body: str):
        super().__init__(body)
        self.status_code = status_code
        self.body = body


class ResponseFormatError(RequestError):
    """The backend answered 2xx but the body did not match the expected shape."""
    pass


def _parse(model, data: Any, path: str):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("Unexpected response shape from %s: %s", path, e)
        raise ResponseFormatError(f"Unexpected response from {path}") from e


class BackendClient:
    """Builds authenticated JSON requests against a base URL."""

    def __init__(self, base_url: str = "", token: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or "").rstrip("/")
        self.token = token
        self.session = session or requests.Session()

    def url_for(self, path: str) -> str:
        # Empty base means same-origin: the path is used as is
        return f"{self.base_url}{path}"

    def headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(self, method: str, path: str, body: Any = None,
                params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send one request and return the parsed JSON response.

        Args:
            method: HTTP method name
            path: Endpoint path, appended to the base URL
            body: JSON-serializable request body, sent for POST
            params: Query string parameters

        Raises:
            NetworkError: If the request could not be sent or the body is not JSON
            HTTPError: If the backend returned a non-success status
        """
        url = self.url_for(path)
        kwargs: Dict[str, Any] = {"headers": self.headers()}
        if params:
            kwargs["params"] = params
        if method.upper() == "POST":
            kwargs["json"] = body
        try:
            resp = self.session.request(method.upper(), url, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.warning("%s %s failed: %s", method.upper(), path, e)
            raise NetworkError(str(e)) from e

        if not resp.ok:
            logger.warning("%s %s returned %s", method.upper(), path, resp.status_code)
            raise HTTPError(resp.status_code, resp.text)
        try:
            return resp.json()
        except ValueError as e:
            raise ResponseFormatError(f"Invalid JSON from {path}: {e}") from e

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Any) -> Any:
        return self.request("POST", path, body=body)

    # --- Auth ---
    def verify_token(self, token: str) -> bool:
        path = "/api/auth/verify"
        data = self.post(path, {"token": token})
        return _parse(VerifyResponse, data or {}, path).valid

    def login(self, email: str, password: str) -> str:
        path = "/api/auth/login"
        payload = LoginRequest(email=email, password=password)
        return _parse(TokenResponse, self.post(path, payload.model_dump()), path).token

    def signup(self, first_name: str, last_name: str, email: str, password: str) -> str:
        path = "/api/auth/signup"
        payload = SignupRequest(firstName=first_name, lastName=last_name,
                                email=email, password=password)
        return _parse(TokenResponse, self.post(path, payload.model_dump()), path).token

    # --- Learning plans ---
    def learning_plan(self, query: str) -> LearningPlan:
        path = "/api/gemini/learning-plan"
        return _parse(LearningPlan, self.post(path, {"query": query}), path)

    # --- Quiz ---
    def get_quiz(self, topic: str) -> Quiz:
        path = "/api/quiz"
        return _parse(Quiz, self.get(path, params={"topic": topic}), path)

    def submit_quiz(self, name: str, topic: str, answers: List[Optional[int]]) -> QuizResult:
        path = "/api/quiz/submit"
        payload = QuizSubmission(name=name, topic=topic, answers=answers)
        return _parse(QuizResult, self.post(path, payload.model_dump()), path)

    def certificate_url(self, certificate_id: str) -> str:
        return self.url_for(f"/api/certificate/{quote(str(certificate_id), safe='')}")

    def get_certificate(self, certificate_id: str) -> Certificate:
        return self.get(f"/api/certificate/{quote(str(certificate_id), safe='')}")
