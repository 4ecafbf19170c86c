import pytest

from src.platform.config.core_setting import Settings


class TestListSettings:
    def test_comma_separated_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('SEAT_LOCATIONS', 'Main Library, Reading Hall 1,')
        assert Settings().SEAT_LOCATIONS == ['Main Library', 'Reading Hall 1']

    def test_json_list_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', '["http://localhost:3000", "http://a.test"]')
        assert Settings().BACKEND_CORS_ORIGINS == ['http://localhost:3000', 'http://a.test']

    def test_python_list_passes_through(self) -> None:
        assert Settings(SEAT_LOCATIONS=['Annex']).SEAT_LOCATIONS == ['Annex']


def test_database_url_uses_asyncpg(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('POSTGRES_SERVER', 'db.internal')
    monkeypatch.setenv('POSTGRES_DB', 'seats')
    url = Settings().DATABASE_URL_ASYNC
    assert url.startswith('postgresql+asyncpg://')
    assert '@db.internal:' in url
    assert url.endswith('/seats')


def test_server_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('API_PORT', '9000')
    monkeypatch.setenv('API_WORKERS', '4')
    settings = Settings()
    assert (settings.API_PORT, settings.API_WORKERS) == (9000, 4)
