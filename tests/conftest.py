"""
Shared pytest fixtures for the Career Hub test suite.
No test talks to a real backend: HTTP goes through a mocked requests.Session.
Factory helpers live in tests/factories.py so they can be imported
directly by test modules as well as being used here.
"""
import os
import sys
from unittest import mock

_tests_dir = os.path.dirname(__file__)
_root_dir = os.path.join(_tests_dir, "..")
for _p in (_tests_dir, _root_dir):
    if _p not in sys.path:
        sys.path.insert(0, _p)

import pytest
import requests

from factories import make_response

from app_context import AppContext
from backend_client import BackendClient
from session_store import SessionStore


@pytest.fixture
def http():
    """A mocked requests.Session; set http.request.return_value per test."""
    session = mock.Mock(spec=requests.Session)
    session.request.return_value = make_response(200, {})
    return session


@pytest.fixture
def client(http):
    return BackendClient("http://backend.test", session=http)


@pytest.fixture
def store(tmp_path):
    return SessionStore(str(tmp_path / "session.db"))


@pytest.fixture
def context(store):
    return AppContext.load(store)
