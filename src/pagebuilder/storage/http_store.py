"""HTTP Page Store - page API client with circuit breaker protection"""

from typing import Any, Callable, List, Optional

import httpx
import pybreaker
from pydantic import ValidationError as ModelValidationError

from ..components.registry import ComponentRegistry
from ..core.logging_config import get_logger
from ..core.validate import PageDocumentValidator, ValidationError
from ..monitoring import MetricsCollector, metrics_collector
from ..tree.documents import PageDocumentParser
from ..tree.models import Page
from .base import PageNotFoundError, PageSummary, PersistenceError

logger = get_logger(__name__)


class BreakerListener(pybreaker.CircuitBreakerListener):
    """Logs circuit breaker state changes."""

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "breaker_state_change",
            breaker=cb.name,
            from_state=str(old_state),
            to_state=str(new_state),
        )


class HttpPageStore:
    """
    Client for the page REST API under ``/api/pages``.

    Pages with a temporary id are created with POST and come back with the
    server-assigned id; other pages are updated with PUT.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout: float = 5.0,
        registry: Optional[ComponentRegistry] = None,
        temp_prefix: str = "page_",
        client: Optional[httpx.Client] = None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        """
        Initialize page store client with circuit breaker.

        Args:
            base_url: Base URL of the page API server
            timeout: Request timeout in seconds
            registry: Registry used to fill missing node labels
            temp_prefix: Prefix of client-side temporary page ids
            client: Optional preconfigured httpx client
        """
        self.base_url = base_url.rstrip("/")
        self.temp_prefix = temp_prefix
        self.parser = PageDocumentParser(registry)
        self.metrics = metrics or metrics_collector
        self._client = client or httpx.Client(timeout=timeout)

        self._breaker = pybreaker.CircuitBreaker(
            fail_max=5,
            reset_timeout=30,
            name="page-api",
            listeners=[BreakerListener()],
        )

        logger.info("client_init", url=self.base_url)

    def _url(self, page_id: str | None = None) -> str:
        url = f"{self.base_url}/api/pages"
        return f"{url}/{page_id}" if page_id else url

    def _request(
        self,
        operation: str,
        make_request: Callable[[], httpx.Response],
        page_id: str | None = None,
    ) -> httpx.Response:
        """Send through the breaker and translate failures to PersistenceError."""
        try:
            response = self._breaker.call(make_request)
        except pybreaker.CircuitBreakerError as e:
            self.metrics.record_persistence_error(operation)
            logger.error(f"{operation}_failed", error="Circuit breaker open - page API unavailable")
            raise PersistenceError("Page API unavailable", operation, e) from e
        except httpx.HTTPError as e:
            self.metrics.record_persistence_error(operation)
            logger.warning(f"{operation}_http_error", error=str(e))
            raise PersistenceError(f"Page API request failed: {e}", operation, e) from e

        if response.status_code == 404 and page_id is not None:
            raise PageNotFoundError(page_id, operation=operation)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.metrics.record_persistence_error(operation)
            logger.warning(f"{operation}_http_error", status=response.status_code, error=_error_message(response))
            raise PersistenceError(
                f"Page API returned {response.status_code}: {_error_message(response)}", operation, e
            ) from e

        return response

    def _json(self, response: httpx.Response, operation: str) -> Any:
        """Decode a response body; a non-JSON body is a PersistenceError."""
        try:
            return response.json()
        except ValueError as e:
            self.metrics.record_persistence_error(operation)
            logger.error("invalid_response", operation=operation, error=str(e))
            raise PersistenceError(f"Page API returned a non-JSON body: {e}", operation, e) from e

    def _to_page(self, data: Any, operation: str) -> Page:
        if not isinstance(data, dict):
            raise PersistenceError(f"Invalid page response: expected object, got {type(data).__name__}", operation)

        document = dict(data)
        if "id" not in document and "_id" in document:
            document["id"] = str(document["_id"])

        try:
            PageDocumentValidator.validate(document)
            return self.parser.from_dict(document)
        except ValidationError as e:
            self.metrics.record_persistence_error(operation)
            logger.error("invalid_response", operation=operation, error=str(e))
            raise PersistenceError(f"Invalid page response: {e}", operation, e) from e

    def load_page(self, page_id: str) -> Page:
        response = self._request("load", lambda: self._client.get(self._url(page_id)), page_id)
        page = self._to_page(self._json(response, "load"), "load")
        logger.debug("page_loaded", page_id=page.id)
        return page

    def save_page(self, page: Page) -> Page:
        """
        Create or update a page on the server.

        Returns:
            Page as stored by the server, carrying its durable id

        Raises:
            PersistenceError: If the request fails or the response is malformed
        """
        document = page.to_document()

        if page.is_unsaved(self.temp_prefix):
            response = self._request("save", lambda: self._client.post(self._url(), json=document))
        else:
            response = self._request(
                "save", lambda: self._client.put(self._url(page.id), json=document), page.id
            )

        stored = self._to_page(self._json(response, "save"), "save")
        logger.info("page_saved", page_id=stored.id, previous_id=page.id)
        return stored

    def list_pages(self, owner_id: Optional[str] = None) -> List[PageSummary]:
        """List pages; ownership filtering is left to the server unless owner_id is given."""
        params = {"ownerId": owner_id} if owner_id else {}
        response = self._request("list", lambda: self._client.get(self._url(), params=params))

        data = self._json(response, "list")
        if not isinstance(data, list):
            logger.error("invalid_response", operation="list", type=type(data).__name__)
            raise PersistenceError("Invalid page list response", "list")

        try:
            return [PageSummary.model_validate(item) for item in data if isinstance(item, dict)]
        except ModelValidationError as e:
            raise PersistenceError(f"Invalid page list entry: {e}", "list", e) from e

    def delete_page(self, page_id: str) -> None:
        self._request("delete", lambda: self._client.delete(self._url(page_id)), page_id)
        logger.info("page_deleted", page_id=page_id)

    def close(self) -> None:
        """Close HTTP client"""
        self._client.close()

    def __enter__(self) -> "HttpPageStore":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return response.reason_phrase
