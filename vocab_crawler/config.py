"""Centralised settings for the vocabulary crawler.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Site endpoints
    # ------------------------------------------------------------------
    base_url: str = field(
        default_factory=lambda: os.environ.get(
            "CRAWL_BASE_URL", "https://dictionary.cambridge.org/browse/english/"
        )
    )
    site_origin: str = field(
        default_factory=lambda: os.environ.get(
            "CRAWL_SITE_ORIGIN", "https://dictionary.cambridge.org"
        )
    )

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    user_agent: str = field(
        default_factory=lambda: os.environ.get("CRAWL_USER_AGENT", _DESKTOP_USER_AGENT)
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Concurrency
    # ------------------------------------------------------------------
    entry_workers: int = field(
        default_factory=lambda: int(os.environ.get("CRAWL_ENTRY_WORKERS", "8"))
    )
    listing_workers: int = field(
        default_factory=lambda: int(os.environ.get("CRAWL_LISTING_WORKERS", "4"))
    )

    # ------------------------------------------------------------------
    # Crawl scope / logging
    # ------------------------------------------------------------------
    seeds: str = field(
        default_factory=lambda: os.environ.get("CRAWL_SEEDS", "")
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )

    def selected_seeds(self) -> list[str]:
        """Return the configured seed keys in crawl order.

        An empty ``seeds`` value selects every key.  Keys are returned in the
        canonical seed order regardless of how they were listed.

        Raises:
            ValueError: If a configured key is not a known seed key.
        """
        from vocab_crawler.crawl.seeds import get_seeds

        all_seeds = get_seeds()
        wanted = {s.strip().lower() for s in self.seeds.split(",") if s.strip()}
        if not wanted:
            return all_seeds
        unknown = wanted.difference(all_seeds)
        if unknown:
            raise ValueError(f"Unknown seed key(s): {', '.join(sorted(unknown))}")
        return [s for s in all_seeds if s in wanted]


# Module-level singleton — import this everywhere:
#   from vocab_crawler.config import settings
settings = Settings()
