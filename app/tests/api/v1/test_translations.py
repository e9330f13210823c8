"""Tests for the translation API routes."""

import pytest

from infrastructure.i18n.static_bundle import STATIC_DICTIONARY
from infrastructure.persistence import Database

pytestmark = pytest.mark.unit

BUNDLE_URL = "/api/v1/translations/bundle"
LANGUAGES_URL = "/api/v1/translations/languages"
STATUS_URL = "/api/v1/translations/admin/status"


@pytest.fixture
def offline_client(make_client, tmp_path):
    return make_client(Database(str(tmp_path)))


class TestGetTranslationBundle:
    def test_requested_language(self, client):
        response = client.get(BUNDLE_URL, params={"lang": "fr"})

        assert response.status_code == 200
        assert response.headers["Content-Language"] == "fr"
        body = response.json()
        assert body["activeLanguage"]["code"] == "fr"
        assert body["dictionary"]["greeting.title"] == "Bonjour !"

    def test_camel_case_language_fields(self, client):
        body = client.get(BUNDLE_URL).json()

        english = body["activeLanguage"]
        assert english["code"] == "en"
        assert english["isDefault"] is True
        assert english["isActive"] is True
        assert "syncUiLanguage" in english

    def test_default_language_without_preference(self, client):
        response = client.get(BUNDLE_URL)

        assert response.headers["Content-Language"] == "en"
        assert response.json()["dictionary"]["greeting.title"] == "Hello there!"

    def test_unknown_language_falls_back_to_default(self, client):
        response = client.get(BUNDLE_URL, params={"lang": "de"})

        assert response.headers["Content-Language"] == "en"

    def test_language_cookie(self, client):
        client.cookies.set("lang", "fr")

        response = client.get(BUNDLE_URL)

        assert response.headers["Content-Language"] == "fr"

    def test_query_wins_over_cookie(self, client):
        client.cookies.set("lang", "fr")

        response = client.get(BUNDLE_URL, params={"lang": "en"})

        assert response.headers["Content-Language"] == "en"

    def test_database_outage_serves_static_bundle(self, offline_client):
        response = offline_client.get(BUNDLE_URL, params={"lang": "fr"})

        assert response.status_code == 200
        dictionary = response.json()["dictionary"]
        for key in STATIC_DICTIONARY:
            assert dictionary[key], key

    def test_rejects_overlong_language(self, client):
        response = client.get(BUNDLE_URL, params={"lang": "x" * 33})
        assert response.status_code == 422

    def test_rejects_overlong_language_cookie(self, client):
        client.cookies.set("lang", "x" * 33)

        response = client.get(BUNDLE_URL)

        assert response.status_code == 422

    def test_unknown_languages_share_the_default_entry(self, client):
        client.get(BUNDLE_URL, params={"lang": "fr"})

        for index in range(50):
            response = client.get(BUNDLE_URL, params={"lang": f"zz{index}"})
            assert response.headers["Content-Language"] == "en"

        body = client.get(STATUS_URL).json()
        assert body["cachedKeys"] == ["__default", "fr"]


class TestGetLanguages:
    def test_lists_active_languages(self, client):
        response = client.get(LANGUAGES_URL, params={"lang": "fr"})

        assert response.status_code == 200
        body = response.json()
        assert [language["code"] for language in body["languages"]] == ["en", "fr"]
        assert body["activeLanguage"]["code"] == "fr"

    def test_no_languages_configured(self, make_client, database):
        client = make_client(database)

        response = client.get(LANGUAGES_URL)

        assert response.status_code == 503

    def test_database_outage_uses_static_languages(self, offline_client):
        response = offline_client.get(LANGUAGES_URL)

        assert response.status_code == 200
        assert response.json()["languages"]


class TestCacheStatus:
    def test_reports_cached_keys(self, client):
        client.get(BUNDLE_URL, params={"lang": "fr"})

        response = client.get(STATUS_URL)

        assert response.status_code == 200
        body = response.json()
        assert body["cachedKeys"] == ["fr"]
        assert body["circuitBreaker"]["state"] == "closed"
        assert body["skipCache"] is False

    def test_reports_open_breaker(self, offline_client):
        offline_client.get(BUNDLE_URL)

        body = offline_client.get(STATUS_URL).json()

        assert body["circuitBreaker"]["state"] == "open"
