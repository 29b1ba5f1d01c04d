"""Immutable per-invocation configuration.

``DetectionConfig`` captures every setting a detection or search run needs.
It is built once at the start of each invocation and passed explicitly to
the fetcher, detector, and search strategies so that none of them touch the
global ``Config`` singleton or ``os.environ``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from slugcheck.config import Config

DEFAULT_SLUG_FIELDS: Tuple[str, ...] = ("url_slug", "slug")


@dataclass(frozen=True)
class DetectionConfig:
    """Immutable snapshot of the settings for one run."""

    # --- Content source -----------------------------------------------------
    environment_id: str = ""
    delivery_api_key: str = ""

    # --- Content model ------------------------------------------------------
    content_type: str = "page"
    slug_fields: Tuple[str, ...] = DEFAULT_SLUG_FIELDS
    languages: Tuple[str, ...] = ("en",)

    # --- Transport ------------------------------------------------------------
    base_url: str = "https://deliver.kontent.ai"
    page_size: int = 500
    timeout: int = 30

    # --- Search diagnostics -------------------------------------------------
    similar_slugs_limit: int = 20

    def is_valid(self) -> bool:
        """True when the content source identifier is present."""
        return bool(self.environment_id)

    # ------------------------------------------------------------------
    # Factory helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_config(
        cls,
        config: Config,
        languages: Optional[Sequence[str]] = None,
    ) -> DetectionConfig:
        """Build a ``DetectionConfig`` from the current global ``Config``.

        ``languages`` overrides the configured language list for this run
        only; blank entries are dropped.
        """
        if languages:
            selected = tuple(lang.strip() for lang in languages if lang and lang.strip())
        else:
            selected = ()
        if not selected:
            selected = tuple(config.get_configured_languages())

        return cls(
            environment_id=config.delivery_environment_id,
            delivery_api_key=config.kontent_delivery_api_key,
            content_type=config.kontent_content_type,
            slug_fields=tuple(config.get_slug_fields()),
            languages=selected,
            base_url=config.delivery_base_url,
            page_size=config.delivery_page_size,
            timeout=config.delivery_timeout,
            similar_slugs_limit=config.similar_slugs_limit,
        )
