"""Unit tests for merging building and vacancy mappings."""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from models.listing import Coordinates
from utils.merge import merge_records


@pytest.fixture
def buildings():
    return {
        "b1": {
            "address": "서울특별시 강남구 역삼동 테헤란로 152",
            "nearbyStation": "역삼역 도보 3분",
            "coordinates": {"lat": 37.5006, "lng": 127.0364},
            "region": "GBD",
            "completionYear": "2002",
            "totalFloors": "45",
            "typicalFloorArea": "1,200",
        },
        "b2": {"address": "서울특별시 중구 을지로 100"},
    }


@pytest.fixture
def vacancies():
    return {
        "_schema": {"buildingName": "string", "floor": "string"},
        "b1": {
            "v1": {
                "buildingName": "강남파이낸스센터",
                "floor": "12F",
                "exclusiveArea": 120.5,
                "rentArea": "250",
                "source": "CoA",
                "pageImageUrl": "https://img.example/d1/page_003.jpg",
                "pageNum": 3,
                "documentId": "d1",
                "publishDate": "25.01",
                "depositPy": "1,000,000",
            },
            "v2": {"buildingName": "강남파이낸스센터", "floor": "15F"},
            "broken": "not-a-record",
            "nameless": {"floor": "3F", "exclusiveArea": 50},
        },
        "b9": {
            "v1": {"buildingName": "Orphan Tower", "floor": "B1"},
        },
    }


class TestMergeTotality:
    """Every well-formed vacancy produces exactly one record."""

    def test_one_record_per_valid_vacancy(self, buildings, vacancies):
        """Test ids are building_vacancy and malformed entries are dropped."""
        records = merge_records(buildings, vacancies)

        assert [r.id for r in records] == ["b1_v1", "b1_v2", "b9_v1"]

    def test_schema_key_skipped(self, buildings, vacancies):
        """Test the _schema pseudo-entry never becomes a record."""
        records = merge_records(buildings, vacancies)
        assert all(r.building_id != "_schema" for r in records)

    def test_non_mapping_building_entry_skipped(self, buildings):
        """Test a vacancy bucket that is not a mapping is ignored."""
        records = merge_records(buildings, {"b1": "oops", "b2": {"v": {"buildingName": "X"}}})
        assert [r.id for r in records] == ["b2_v"]

    def test_empty_inputs(self):
        """Test empty or missing mappings merge to an empty list."""
        assert merge_records({}, {}) == []
        assert merge_records(None, None) == []


class TestMergeFields:
    """Test field mapping and defaults."""

    def test_vacancy_and_building_fields(self, buildings, vacancies):
        """Test vacancy fields and denormalized building fields are copied."""
        record = merge_records(buildings, vacancies)[0]

        assert record.building_name == "강남파이낸스센터"
        assert record.floor == "12F"
        assert record.exclusive_area == 120.5
        assert record.rent_area == 250.0
        assert record.page_num == 3
        assert record.document_id == "d1"
        assert record.deposit_py == "1,000,000"
        assert record.address.startswith("서울특별시 강남구")
        assert record.nearby_station == "역삼역 도보 3분"
        assert record.coordinates == Coordinates(lat=37.5006, lng=127.0364)
        assert record.typical_floor_area == "1,200"

    def test_defaults_for_absent_vacancy_fields(self, buildings, vacancies):
        """Test numeric fields default to 0, page to 1 and strings to ''."""
        record = merge_records(buildings, vacancies)[1]

        assert record.exclusive_area == 0
        assert record.rent_area == 0
        assert record.page_num == 1
        assert record.source == ""
        assert record.page_image_url == ""
        assert record.publish_date == ""
        assert record.has_image is False

    def test_missing_building_degrades_to_empty(self, buildings, vacancies):
        """Test an unknown building id yields empty building fields, no error."""
        record = merge_records(buildings, vacancies)[2]

        assert record.building_id == "b9"
        assert record.address == ""
        assert record.nearby_station == ""
        assert record.coordinates is None
        assert record.region == ""

    def test_malformed_coordinates(self):
        """Test coordinates without lat/lng become None."""
        records = merge_records(
            {"b1": {"coordinates": {"lat": "north"}}},
            {"b1": {"v1": {"buildingName": "A"}}},
        )
        assert records[0].coordinates is None

    def test_non_numeric_area(self):
        """Test garbage area text falls back to 0."""
        records = merge_records({}, {"b1": {"v1": {"buildingName": "A", "exclusiveArea": "문의"}}})
        assert records[0].exclusive_area == 0

    def test_record_dict_round_trip(self, buildings, vacancies):
        """Test to_dict/from_dict keep coordinates as a dataclass."""
        record = merge_records(buildings, vacancies)[0]
        restored = type(record).from_dict(record.to_dict())
        assert restored == record
