"""Cached access to the merged leasing dataset."""

import asyncio
import logging
import time
from typing import Any, Callable, Dict, List, Optional

from models.constants import DEFAULT_CACHE_DURATION, DEFAULT_SUGGESTION_LIMIT
from models.listing import BuildingSuggestion, ListingRecord, SearchOptions
from search import grouping, query
from stores.base import DataStore
from utils.cache import TimedCache
from utils.merge import merge_records

logger = logging.getLogger(__name__)


class LeasingDataService:
    """
    Fetch-and-merge front end for one data store.

    Buildings, vacancies and the merged list are each kept in a TimedCache;
    after the validity window the next access fetches and merges again.
    This service is the only writer of those caches. Readers get the cached
    list itself and must not mutate it.
    """

    def __init__(
        self,
        store: DataStore,
        cache_duration: float = DEFAULT_CACHE_DURATION,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the service.

        Args:
            store: Backend the raw mappings are read from
            cache_duration: Validity window in seconds
            suggestion_limit: Maximum autocomplete candidates per field
            clock: Time source shared by the caches (injectable for tests)
        """
        self.store = store
        self.suggestion_limit = suggestion_limit
        self._buildings: TimedCache[Dict[str, Any]] = TimedCache(cache_duration, clock)
        self._vacancies: TimedCache[Dict[str, Any]] = TimedCache(cache_duration, clock)
        self._merged: TimedCache[List[ListingRecord]] = TimedCache(cache_duration, clock)

    async def load_buildings(self) -> Dict[str, Any]:
        cached = self._buildings.get()
        if cached is not None:
            logger.debug("Using cached buildings data")
            return cached

        data = await self.store.fetch_buildings()
        logger.info(f"Loaded {len(data)} buildings")
        return self._buildings.set(data)

    async def load_vacancies(self) -> Dict[str, Any]:
        cached = self._vacancies.get()
        if cached is not None:
            logger.debug("Using cached vacancies data")
            return cached

        data = await self.store.fetch_vacancies()
        logger.info(f"Loaded vacancies for {len(data)} buildings")
        return self._vacancies.set(data)

    async def load_merged_data(self) -> List[ListingRecord]:
        """
        Return the merged record list, fetching and merging when expired.

        Raises:
            DataFetchError: If the store cannot be read
        """
        cached = self._merged.get()
        if cached is not None:
            logger.debug("Using cached merged data")
            return cached

        buildings, vacancies = await asyncio.gather(
            self.load_buildings(),
            self.load_vacancies(),
        )
        return self._merged.set(merge_records(buildings, vacancies))

    async def search(self, options: Optional[SearchOptions] = None) -> List[ListingRecord]:
        return query.search_listings(await self.load_merged_data(), options)

    async def suggest_building_names(self, text: str) -> List[BuildingSuggestion]:
        return query.suggest_building_names(
            await self.load_merged_data(), text, self.suggestion_limit
        )

    async def suggest_districts(self, text: str) -> List[str]:
        return query.suggest_districts(
            await self.load_merged_data(), text, self.suggestion_limit
        )

    async def suggest_stations(self, text: str) -> List[str]:
        return query.suggest_stations(
            await self.load_merged_data(), text, self.suggestion_limit
        )

    async def get_source_list(self) -> List[str]:
        return query.list_sources(await self.load_merged_data())

    async def get_last_update(self) -> str:
        return query.latest_publish_summary(await self.load_merged_data())

    async def get_document_pages(self, focal: ListingRecord) -> List[ListingRecord]:
        return grouping.same_document_pages(await self.load_merged_data(), focal)

    async def get_archives(self, focal: ListingRecord) -> List[ListingRecord]:
        return grouping.archive_issues(await self.load_merged_data(), focal)

    async def get_other_sources_for_building(
        self, building_name: str, exclude_source: str = ""
    ) -> List[ListingRecord]:
        return grouping.other_sources_for_building(
            await self.load_merged_data(), building_name, exclude_source
        )

    async def get_all_for_building(self, building_name: str) -> List[ListingRecord]:
        return grouping.all_for_building(await self.load_merged_data(), building_name)

    async def find_record(self, record_id: str) -> Optional[ListingRecord]:
        for record in await self.load_merged_data():
            if record.id == record_id:
                return record
        return None
