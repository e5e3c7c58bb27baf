"""
Persisted page map.

The page map records, per scanned page URL, which API calls the page made
and what their payloads looked like. It is stored as one JSON value in a
KeyValueStore; every write is a read-modify-write of the whole map (last
writer wins).
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError

from harkit.core.config import SCREEN_MAP_KEY, SCREEN_MAP_VERSION
from harkit.core.models import PageMap, PageRecord
from harkit.core.store import KeyValueStore

logger = logging.getLogger(__name__)


class PageMapRepository:
    """
    Read and write the page map.

    Attributes
    ----------
    store : KeyValueStore
        Store holding the map under ``SCREEN_MAP_KEY``

    Methods
    -------
    load()
        Current map (empty when nothing is stored)
    upsert(page)
        Insert or wholesale-replace the record for ``page.url``
    clear()
        Reset to an empty map
    export_json()
        Whole map as formatted JSON text
    list_pages(search)
        Scanned pages plus linked pages not scanned yet
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self) -> PageMap:
        raw = self.store.get(SCREEN_MAP_KEY)
        if raw is None:
            return PageMap()
        try:
            return PageMap.model_validate(raw)
        except ValidationError as e:
            logger.warning("Stored page map is malformed, starting empty: %s", e)
            return PageMap()

    def save(self, page_map: PageMap) -> None:
        self.store.set(SCREEN_MAP_KEY, page_map.to_dict())

    def upsert(self, page: PageRecord) -> PageMap:
        """
        Store ``page``, replacing any earlier record for the same URL.

        Nothing from the earlier record is merged in.
        """
        page_map = self.load()
        page_map.pages[page.url] = page
        page_map.version = SCREEN_MAP_VERSION
        self.save(page_map)
        logger.info("Saved scan of %s (%d APIs)", page.url, len(page.apis))
        return page_map

    def get(self, url: str) -> Optional[PageRecord]:
        return self.load().pages.get(url)

    def clear(self) -> None:
        self.save(PageMap())
        logger.info("Cleared page map")

    def export_json(self) -> str:
        return json.dumps(self.load().to_dict(), indent=2, ensure_ascii=False)

    @staticmethod
    def export_filename(today: Optional[date] = None) -> str:
        today = today or date.today()
        return f"harkit-screen-map-{today.isoformat()}.json"

    def export_to_file(self, directory: Path, today: Optional[date] = None) -> Path:
        """
        Write the map to a dated JSON file in ``directory``.

        Raises
        ------
        OSError
            If the directory cannot be created or written
        """
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.export_filename(today)
        path.write_text(self.export_json(), encoding="utf-8")
        logger.info("Exported page map to %s", path)
        return path

    def list_pages(self, search: str = "") -> Tuple[List[PageRecord], List[str]]:
        """
        List scanned pages and the linked pages nobody has scanned yet.

        Parameters
        ----------
        search : str
            Case-insensitive substring filter on URLs

        Returns
        -------
        Tuple[List[PageRecord], List[str]]
            Scanned pages, newest scan first, and unscanned link paths in
            discovery order
        """
        pages = self.load().pages
        needle = search.strip().lower()
        scanned: List[PageRecord] = []
        unscanned: List[str] = []

        for url, page in pages.items():
            if needle and needle not in url.lower():
                continue
            scanned.append(page)
            for link in page.links:
                if link in pages or link in unscanned:
                    continue
                if not needle or needle in link.lower():
                    unscanned.append(link)

        scanned.sort(key=lambda p: p.scanned_at or "", reverse=True)
        return scanned, unscanned
