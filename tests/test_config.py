"""
Smoke tests for settings loading.
Run: python -m pytest tests/ -v
"""
from config import CAREER_HUB_DEFAULT_BACKEND, QUIZ_DEFAULT_BACKEND, get_settings


class TestSettings:
    def test_career_hub_defaults_to_same_origin(self, monkeypatch):
        monkeypatch.delenv("BACKEND_URL", raising=False)
        assert get_settings(CAREER_HUB_DEFAULT_BACKEND).backend_url == ""

    def test_quiz_app_defaults_to_local_backend(self, monkeypatch):
        monkeypatch.delenv("BACKEND_URL", raising=False)
        assert get_settings(QUIZ_DEFAULT_BACKEND).backend_url == "http://localhost:8000"

    def test_backend_url_from_env_wins(self, monkeypatch):
        monkeypatch.setenv("BACKEND_URL", " https://api.example.com/ ")
        assert get_settings(QUIZ_DEFAULT_BACKEND).backend_url == "https://api.example.com"

    def test_session_db_and_log_level(self, monkeypatch):
        monkeypatch.setenv("SESSION_DB_PATH", "/tmp/hub.db")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        s = get_settings()
        assert s.session_db_path == "/tmp/hub.db"
        assert s.log_level == "DEBUG"

    def test_blank_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("SESSION_DB_PATH", "  ")
        monkeypatch.setenv("LOG_LEVEL", "")
        s = get_settings()
        assert s.session_db_path == "session.db"
        assert s.log_level == "INFO"

    def test_empty_backend_url_counts_as_unset(self, monkeypatch):
        monkeypatch.setenv("BACKEND_URL", "")
        assert get_settings(QUIZ_DEFAULT_BACKEND).backend_url == "http://localhost:8000"
        assert get_settings(CAREER_HUB_DEFAULT_BACKEND).backend_url == ""

    def test_whitespace_backend_url_counts_as_unset(self, monkeypatch):
        monkeypatch.setenv("BACKEND_URL", "   ")
        assert get_settings(QUIZ_DEFAULT_BACKEND).backend_url == "http://localhost:8000"
