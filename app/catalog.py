import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import httpx

from .config import CATALOG_TIMEOUT, CATALOG_URL

logger = logging.getLogger(__name__)


class CatalogFetchError(Exception):
    """The product feed could not be read or parsed."""


@dataclass(frozen=True)
class CatalogEntry:
    id: int
    category: str
    description: str
    image: str
    price: float
    title: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogEntry":
        """Build an entry from a feed record, ignoring keys we don't use (e.g. rating)."""
        raw_id = data["id"]
        if isinstance(raw_id, bool) or (isinstance(raw_id, float) and not raw_id.is_integer()):
            raise ValueError(f"catalog id must be an integer, got {raw_id!r}")
        return cls(
            id=int(raw_id),
            category=str(data["category"]),
            description=str(data["description"]),
            image=str(data["image"]),
            price=float(data["price"]),
            title=str(data["title"]),
        )


# Loaded once per process, on first use
CATALOG: List[CatalogEntry] = []
_loaded = False
_loading: Optional["asyncio.Task[List[CatalogEntry]]"] = None


async def fetch_catalog(
    url: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List[CatalogEntry]:
    """
    Read the product feed and return its entries in feed order.

    Any transport error, non-2xx status, invalid JSON or malformed record
    raises CatalogFetchError. Nothing is retried.
    """
    url = url or CATALOG_URL
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=CATALOG_TIMEOUT)

    try:
        response = await client.get(url)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPError as e:
        raise CatalogFetchError(f"catalog request failed: {e}") from e
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError alike
        raise CatalogFetchError("catalog response is not valid JSON") from e
    finally:
        if owns_client:
            await client.aclose()

    if not isinstance(payload, list):
        raise CatalogFetchError("catalog response is not a list")

    try:
        return [CatalogEntry.from_dict(item) for item in payload]
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogFetchError(f"malformed catalog record: {e}") from e


def set_catalog(entries: Iterable[CatalogEntry]) -> None:
    global _loaded
    CATALOG[:] = list(entries)
    _loaded = True


async def get_catalog() -> List[CatalogEntry]:
    """
    Return the process catalog, fetching it on first use.

    Callers arriving while the first fetch is in flight wait on that same
    fetch. A failed fetch leaves nothing loaded, so the next call retries.
    """
    global _loading
    if _loaded:
        return CATALOG

    if _loading is None:
        _loading = asyncio.ensure_future(fetch_catalog())
    task = _loading
    try:
        entries = await asyncio.shield(task)
    except CatalogFetchError:
        if _loading is task:
            _loading = None
        raise

    if _loading is task:
        _loading = None
        set_catalog(entries)
        logger.info("Loaded %d catalog entries from %s", len(entries), CATALOG_URL)
    return CATALOG


def reset_catalog() -> None:
    global _loaded, _loading
    CATALOG.clear()
    _loaded = False
    _loading = None


def find_entry(entries: Iterable[CatalogEntry], entry_id: int) -> Optional[CatalogEntry]:
    return next((e for e in entries if e.id == entry_id), None)


def search_catalog(entries: List[CatalogEntry], query: Optional[str]) -> List[CatalogEntry]:
    if not query:
        return list(entries)
    q = query.lower()
    return [
        e for e in entries
        if q in e.title.lower() or q in e.description.lower() or q in e.category.lower()
    ]
