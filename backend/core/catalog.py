"""Open Food Facts search proxy.

Products come back with whatever fields the catalog happens to have; each
hit is mapped onto a fixed candidate shape with placeholder text for
anything missing.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
import structlog

from core.config import settings
from core.exceptions import UpstreamError

logger = structlog.get_logger(__name__)

# candidate field -> (catalog field, placeholder)
CANDIDATE_FIELDS = {
    "name": ("product_name", "No name available"),
    "brands": ("brands", "No brand information"),
    "quantity": ("quantity", "Unknown quantity"),
    "categories": ("categories", "No categories available"),
    "imageUrl": ("image_url", "No image available"),
    "url": ("url", "No URL available"),
    "ingredients": ("ingredients_text", "No ingredients information"),
}


def to_candidate(product: Dict[str, Any]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for field, (source, placeholder) in CANDIDATE_FIELDS.items():
        value = product.get(source)
        out[field] = str(value) if value else placeholder
    return out


@dataclass
class CatalogClient:
    search_url: str = settings.catalog_search_url
    timeout: float = settings.catalog_timeout
    session: Optional[requests.Session] = None

    def _get(self, params: Dict[str, Any]) -> requests.Response:
        getter = self.session.get if self.session else requests.get
        return getter(
            self.search_url,
            params=params,
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )

    def search(self, term: str) -> List[Dict[str, str]]:
        """Search the catalog; an empty list means no hits."""
        try:
            resp = self._get({"search_terms": term, "json": "true"})
        except requests.RequestException as e:
            logger.error("catalog_request_failed", term=term, exc_info=True)
            raise UpstreamError("Error fetching data from Open Food Facts API") from e

        if resp.status_code >= 400:
            logger.error("catalog_bad_status", term=term, status_code=resp.status_code)
            raise UpstreamError(f"Open Food Facts API returned {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("catalog_bad_payload", term=term, exc_info=True)
            raise UpstreamError("Open Food Facts API returned invalid JSON") from e

        products = data.get("products") if isinstance(data, dict) else None
        if not products:
            logger.info("catalog_search", term=term, results=0)
            return []

        candidates = [to_candidate(p) for p in products if isinstance(p, dict)]
        logger.info("catalog_search", term=term, results=len(candidates))
        return candidates


def get_catalog_client() -> CatalogClient:
    return CatalogClient()
