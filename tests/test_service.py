"""Integration tests for the cached data service."""

import asyncio
import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from models.listing import SearchOptions
from search.service import LeasingDataService
from stores.base import DataStore
from stores.snapshot.adapter import SnapshotStore

RAW_BUILDINGS = {"b1": {"address": "Seoul Gangnam-gu Teheran-ro"}}
RAW_VACANCIES = {
    "b1": {
        "v1": {
            "buildingName": "Tower A",
            "floor": "5F",
            "exclusiveArea": 120,
            "source": "CoA",
            "publishDate": "25.01",
            "pageImageUrl": "u1",
            "documentId": "d1",
            "pageNum": 1,
        }
    }
}


class CountingStore(DataStore):
    """In-memory store that counts fetches."""

    def __init__(self, buildings, vacancies):
        super().__init__({})
        self.buildings = buildings
        self.vacancies = vacancies
        self.calls = 0

    def get_store_name(self):
        return "memory"

    async def fetch_buildings(self):
        self.calls += 1
        return self.buildings

    async def fetch_vacancies(self):
        self.calls += 1
        return self.vacancies


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return CountingStore(RAW_BUILDINGS, RAW_VACANCIES)


class TestEndToEnd:
    """Merge then search on a minimal raw dataset."""

    def test_district_search(self, store):
        service = LeasingDataService(store)

        records = asyncio.run(service.load_merged_data())
        gangnam = asyncio.run(service.search(SearchOptions(district="Gangnam")))
        busan = asyncio.run(service.search(SearchOptions(district="Busan")))

        assert len(records) == 1
        assert [r.id for r in gangnam] == ["b1_v1"]
        assert busan == []

    def test_snapshot_store(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(
            json.dumps({"buildings": RAW_BUILDINGS, "vacancies": RAW_VACANCIES}),
            encoding="utf-8",
        )
        service = LeasingDataService(SnapshotStore({"path": str(path)}))

        records = asyncio.run(service.load_merged_data())

        assert records[0].building_name == "Tower A"
        assert records[0].address == "Seoul Gangnam-gu Teheran-ro"

    def test_lookups(self, store):
        service = LeasingDataService(store)

        assert asyncio.run(service.get_source_list()) == ["CoA"]
        assert asyncio.run(service.get_last_update()) == "2025년 1월"
        assert asyncio.run(service.find_record("b1_v1")).floor == "5F"
        assert asyncio.run(service.find_record("missing")) is None
        assert [s.name for s in asyncio.run(service.suggest_building_names("tower"))] == ["Tower A"]


class TestCaching:
    """Test the validity window of the merged data cache."""

    def test_cached_within_window(self, store, clock):
        service = LeasingDataService(store, cache_duration=300, clock=clock)

        first = asyncio.run(service.load_merged_data())
        clock.now += 299
        second = asyncio.run(service.load_merged_data())

        assert store.calls == 2
        assert second is first

    def test_refetched_after_window(self, store, clock):
        service = LeasingDataService(store, cache_duration=300, clock=clock)

        first = asyncio.run(service.load_merged_data())
        clock.now += 300
        store.vacancies = {}
        second = asyncio.run(service.load_merged_data())

        assert store.calls == 4
        assert second is not first
        assert second == []

    def test_suggestion_limit(self, clock):
        vacancies = {
            f"b{i}": {"v1": {"buildingName": f"Tower {i}"}} for i in range(8)
        }
        service = LeasingDataService(CountingStore({}, vacancies), suggestion_limit=3, clock=clock)

        assert len(asyncio.run(service.suggest_building_names("tower"))) == 3
