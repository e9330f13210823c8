"""Unit tests for request context binding."""

import pytest
import structlog

from infrastructure.logging import bind_request_context, get_correlation_id

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _clear_contextvars():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


class TestBindRequestContext:
    def test_binds_given_correlation_id(self):
        with bind_request_context(correlation_id="req-123") as correlation_id:
            assert correlation_id == "req-123"
            assert get_correlation_id() == "req-123"

        assert get_correlation_id() is None

    def test_generates_correlation_id(self):
        with bind_request_context() as correlation_id:
            assert correlation_id
            assert get_correlation_id() == correlation_id

    def test_binds_request_fields(self):
        with bind_request_context(
            correlation_id="req-1",
            request_path="/api/v1/translations/bundle",
            request_method="GET",
            preferred_language="fr",
            tenant="acme",
        ):
            context = structlog.contextvars.get_contextvars()

        assert context["request_path"] == "/api/v1/translations/bundle"
        assert context["request_method"] == "GET"
        assert context["preferred_language"] == "fr"
        assert context["tenant"] == "acme"
        assert structlog.contextvars.get_contextvars() == {}

    def test_omits_unset_fields(self):
        with bind_request_context(correlation_id="req-1"):
            context = structlog.contextvars.get_contextvars()

        assert context == {"correlation_id": "req-1"}

    def test_unbinds_on_error(self):
        with pytest.raises(RuntimeError):
            with bind_request_context(correlation_id="req-1"):
                raise RuntimeError("boom")

        assert get_correlation_id() is None
