"""Async Kontent.ai Delivery API client using httpx.

Provides the content fetcher used by detection and search: it lists every
item of a content type for one language, following the Delivery API's
``skip``/``limit`` pagination until the source is exhausted.
"""

from __future__ import annotations

import abc
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import httpx

from slugcheck.errors import ConfigurationError, FetchError
from slugcheck.performance import get_performance_metrics
from slugcheck.run_config import DetectionConfig
from slugcheck.utils.logger import log_debug, log_error, log_info, log_warning

# Hard stop for runaway pagination (e.g. a proxy that ignores ``skip``)
MAX_PAGES = 1000


class ContentFetcher(abc.ABC):
    """Source of raw content items for one language."""

    @abc.abstractmethod
    async def fetch_items(
        self,
        type_id: str,
        language: str,
        field_names: Sequence[str],
        filters: Optional[Mapping[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        """Return every matching raw item for ``language``.

        Raw items have the Delivery API shape
        ``{"system": {...}, "elements": {<field>: {"value": ...}}}``.
        Zero matches is an empty list.  Failures raise ``FetchError``.
        """


class AsyncDeliveryClient(ContentFetcher):
    """Async Delivery API client with connection pooling.

    Args:
        config: Per-run settings (environment ID, key, page size, timeout).
        transport: Optional httpx transport, used by tests to stub the API.
    """

    def __init__(
        self,
        config: DetectionConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Context manager entry - creates HTTP client."""
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout),
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - closes HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.delivery_api_key:
            headers["Authorization"] = f"Bearer {self.config.delivery_api_key}"
        return headers

    def is_configured(self) -> bool:
        return self.config.is_valid()

    def items_url(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/{self.config.environment_id}/items"

    def _build_params(
        self,
        type_id: str,
        language: str,
        field_names: Sequence[str],
        skip: int,
        filters: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "system.type": type_id,
            "language": language,
            "depth": 0,
            "limit": self.config.page_size,
            "skip": skip,
        }
        if field_names:
            params["elements"] = ",".join(field_names)
        for key, value in (filters or {}).items():
            params[key] = value
        return params

    async def fetch_page(
        self,
        type_id: str,
        language: str,
        field_names: Sequence[str],
        skip: int = 0,
        filters: Optional[Mapping[str, str]] = None,
    ) -> Tuple[List[Dict[str, Any]], bool]:
        """Fetch a single page of items.

        Returns:
            Tuple of (items list, whether another page follows)

        Raises:
            ConfigurationError: No environment ID configured.
            FetchError: Transport failure, non-2xx status, or malformed body.
        """
        if not self.is_configured():
            raise ConfigurationError()

        if not self._client:
            raise FetchError(
                "AsyncDeliveryClient not initialized - use 'async with' context",
                language=language,
            )

        params = self._build_params(type_id, language, field_names, skip, filters)

        try:
            resp = await self._client.get(
                self.items_url(), params=params, headers=self._headers()
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            log_error(
                "Delivery API request rejected",
                status_code=e.response.status_code,
                language=language,
            )
            raise FetchError(
                f"Delivery API returned {e.response.status_code} for language '{language}'",
                status_code=e.response.status_code,
                language=language,
            ) from e
        except httpx.HTTPError as e:
            log_error("Delivery API request failed", error=str(e), language=language)
            raise FetchError(
                f"Delivery API request failed for language '{language}': {e}",
                language=language,
            ) from e
        except ValueError as e:
            raise FetchError(
                f"Delivery API returned invalid JSON for language '{language}'",
                language=language,
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise FetchError(
                f"Unexpected Delivery API payload for language '{language}'",
                language=language,
            )

        items = data["items"]
        if not all(isinstance(item, dict) for item in items):
            raise FetchError(
                f"Unexpected Delivery API payload for language '{language}'",
                language=language,
            )
        pagination = data.get("pagination") or {}
        has_next = bool(pagination.get("next_page")) and len(items) > 0
        return items, has_next

    async def fetch_items(
        self,
        type_id: str,
        language: str,
        field_names: Sequence[str],
        filters: Optional[Mapping[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        """Fetch every item for ``language``, paging until exhaustion."""
        metrics = get_performance_metrics()
        metrics.start_timer("delivery_fetch_items")

        results: List[Dict[str, Any]] = []
        skip = 0
        page = 0

        while True:
            page += 1
            items, has_next = await self.fetch_page(
                type_id, language, field_names, skip=skip, filters=filters
            )
            results.extend(items)
            log_debug(
                "Delivery page fetched",
                language=language,
                page=page,
                page_items=len(items),
            )

            if not has_next:
                break
            if page >= MAX_PAGES:
                metrics.end_timer("delivery_fetch_items")
                log_warning(
                    "Delivery pagination limit reached",
                    language=language,
                    pages=page,
                    items_so_far=len(results),
                )
                raise FetchError(
                    f"Pagination limit of {MAX_PAGES} pages reached for language '{language}'",
                    language=language,
                )
            skip += len(items)

        duration = metrics.end_timer("delivery_fetch_items")
        log_info(
            "Delivery items collected",
            content_type=type_id,
            language=language,
            total_items=len(results),
            pages=page,
            duration_ms=round(duration * 1000, 2),
        )
        return results
