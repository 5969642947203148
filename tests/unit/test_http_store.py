"""Tests for the HTTP page store."""

import httpx
import pybreaker
import pytest
import respx
from unittest.mock import patch

from pagebuilder.storage import HttpPageStore, PageNotFoundError, PersistenceError

BASE = "http://pages.test"


@pytest.fixture
def store(registry, metrics):
    store = HttpPageStore(BASE, registry=registry, metrics=metrics)
    yield store
    store.close()


def server_copy(page, new_id: str) -> dict:
    """Document as the server echoes it back, keyed by ``_id``."""
    document = page.to_document()
    document.pop("id")
    document["_id"] = new_id
    document["userId"] = "u1"
    return document


@pytest.mark.unit
class TestHttpPageStore:
    """Test request mapping and error translation."""

    @respx.mock
    def test_save_new_page_posts(self, store, page):
        route = respx.post(f"{BASE}/api/pages").mock(
            return_value=httpx.Response(201, json=server_copy(page, "abc123"))
        )

        stored = store.save_page(page)

        assert route.called
        assert stored.id == "abc123"
        assert stored.title == page.title
        assert stored.root == page.root

    @respx.mock
    def test_save_existing_page_puts(self, store, page):
        page.id = "abc123"
        route = respx.put(f"{BASE}/api/pages/abc123").mock(
            return_value=httpx.Response(200, json=page.to_document())
        )

        stored = store.save_page(page)

        assert route.called
        assert stored.id == "abc123"

    @respx.mock
    def test_load_page(self, store, page):
        respx.get(f"{BASE}/api/pages/abc123").mock(
            return_value=httpx.Response(200, json=server_copy(page, "abc123"))
        )

        loaded = store.load_page("abc123")

        assert loaded.id == "abc123"
        assert [n.id for n in loaded.root.walk()] == [n.id for n in page.root.walk()]

    @respx.mock
    def test_load_missing_page(self, store):
        respx.get(f"{BASE}/api/pages/nope").mock(
            return_value=httpx.Response(404, json={"error": "Page not found"})
        )

        with pytest.raises(PageNotFoundError):
            store.load_page("nope")

    @respx.mock
    def test_server_error(self, store, metrics):
        respx.get(f"{BASE}/api/pages/abc").mock(
            return_value=httpx.Response(500, json={"error": "Error retrieving page"})
        )

        with pytest.raises(PersistenceError) as exc_info:
            store.load_page("abc")

        assert "Error retrieving page" in str(exc_info.value)
        assert metrics.registry.get_sample_value(
            "pagebuilder_persistence_errors_total", {"operation": "load"}
        ) == 1.0

    @respx.mock
    def test_malformed_page_response(self, store):
        respx.get(f"{BASE}/api/pages/abc").mock(return_value=httpx.Response(200, json={"title": "x"}))

        with pytest.raises(PersistenceError):
            store.load_page("abc")

    @respx.mock
    def test_non_json_body(self, store, metrics):
        respx.get(f"{BASE}/api/pages/abc").mock(
            return_value=httpx.Response(200, text="<html>oops</html>")
        )

        with pytest.raises(PersistenceError) as exc_info:
            store.load_page("abc")

        assert exc_info.value.operation == "load"
        assert metrics.registry.get_sample_value(
            "pagebuilder_persistence_errors_total", {"operation": "load"}
        ) == 1.0

    @respx.mock
    def test_non_json_list_body(self, store):
        respx.get(f"{BASE}/api/pages").mock(return_value=httpx.Response(200, text="not json"))

        with pytest.raises(PersistenceError):
            store.list_pages()

    @respx.mock
    def test_list_pages(self, store):
        respx.get(f"{BASE}/api/pages").mock(
            return_value=httpx.Response(
                200,
                json=[{"_id": "a", "title": "A", "slug": "a"}, {"id": "b", "title": "B"}],
            )
        )

        summaries = store.list_pages()

        assert [(s.id, s.title) for s in summaries] == [("a", "A"), ("b", "B")]

    @respx.mock
    def test_list_pages_owner_param(self, store):
        route = respx.get(f"{BASE}/api/pages", params={"ownerId": "u1"}).mock(
            return_value=httpx.Response(200, json=[])
        )

        assert store.list_pages(owner_id="u1") == []
        assert route.called

    @respx.mock
    def test_delete_page(self, store):
        route = respx.delete(f"{BASE}/api/pages/abc").mock(
            return_value=httpx.Response(200, json={"message": "Page deleted successfully"})
        )

        store.delete_page("abc")

        assert route.called

    @respx.mock
    def test_connection_error(self, store):
        respx.get(f"{BASE}/api/pages").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(PersistenceError):
            store.list_pages()


@pytest.mark.unit
class TestCircuitBreaker:
    """Test circuit breaker integration."""

    def test_breaker_configured(self, store):
        assert isinstance(store._breaker, pybreaker.CircuitBreaker)
        assert store._breaker.name == "page-api"
        assert store._breaker.fail_max == 5

    def test_state_change_logged(self, store):
        listener = store._breaker.listeners[0]

        with patch("pagebuilder.storage.http_store.logger") as mock_logger:
            listener.state_change(store._breaker, "closed", "open")

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[0][0] == "breaker_state_change"

    @respx.mock
    def test_open_breaker_raises_persistence_error(self, store):
        respx.get(f"{BASE}/api/pages").mock(side_effect=httpx.ConnectError("refused"))

        for _ in range(10):
            with pytest.raises(PersistenceError):
                store.list_pages()

        assert store._breaker.current_state == pybreaker.STATE_OPEN
