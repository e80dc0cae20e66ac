"""Merge raw building and vacancy mappings into flat listing records."""

import logging
from typing import Any, Dict, List, Mapping

from models.constants import NUMERIC_VACANCY_FIELDS, SCHEMA_KEY
from models.listing import Coordinates, ListingRecord

logger = logging.getLogger(__name__)


def _to_number(value: Any) -> float:
    """Coerce loosely formatted numbers ("1,200", "85.5") to float, else 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).replace(",", "").strip())
    except ValueError:
        return 0


def _to_page_num(value: Any) -> int:
    try:
        page = int(_to_number(value))
    except (OverflowError, ValueError):
        return 1
    return page if page > 0 else 1


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def build_record(
    building_id: str,
    vacancy_key: str,
    vacancy: Mapping[str, Any],
    building: Mapping[str, Any],
) -> ListingRecord:
    """
    Build one listing record from a vacancy entry and its building entry.

    Args:
        building_id: Key of the building in both raw mappings
        vacancy_key: Key of the vacancy under the building
        vacancy: Raw vacancy fields (camelCase)
        building: Raw building fields, or an empty mapping if unknown

    Returns:
        ListingRecord with defaults for every absent field
    """
    numbers = {name: _to_number(vacancy.get(name)) for name in NUMERIC_VACANCY_FIELDS}

    return ListingRecord(
        id=f"{building_id}_{vacancy_key}",
        building_id=building_id,
        vacancy_key=vacancy_key,
        building_name=_to_text(vacancy.get("buildingName")),
        floor=_to_text(vacancy.get("floor")),
        exclusive_area=numbers["exclusiveArea"],
        rent_area=numbers["rentArea"],
        source=_to_text(vacancy.get("source")),
        page_image_url=_to_text(vacancy.get("pageImageUrl")),
        page_num=_to_page_num(vacancy.get("pageNum")),
        document_id=_to_text(vacancy.get("documentId")),
        move_in_date=_to_text(vacancy.get("moveInDate")),
        publish_date=_to_text(vacancy.get("publishDate")),
        deposit_py=_to_text(vacancy.get("depositPy")),
        rent_py=_to_text(vacancy.get("rentPy")),
        maintenance_py=_to_text(vacancy.get("maintenancePy")),
        address=_to_text(building.get("address")),
        nearby_station=_to_text(building.get("nearbyStation")),
        coordinates=Coordinates.from_raw(building.get("coordinates")),
        region=_to_text(building.get("region")),
        completion_year=_to_text(building.get("completionYear")),
        total_floors=_to_text(building.get("totalFloors")),
        typical_floor_area=_to_text(building.get("typicalFloorArea")),
    )


def merge_records(
    buildings: Mapping[str, Any],
    vacancies: Mapping[str, Any],
) -> List[ListingRecord]:
    """
    Combine building facts and vacancy facts into one record per vacancy.

    Order follows iteration of ``vacancies``. The ``_schema`` pseudo-entry,
    non-mapping entries and entries without a building name are dropped.
    A vacancy whose building is unknown still produces a record, with empty
    building fields.
    """
    merged: List[ListingRecord] = []
    dropped = 0

    for building_id, vacancy_data in (vacancies or {}).items():
        if building_id == SCHEMA_KEY:
            continue
        if not isinstance(vacancy_data, dict):
            dropped += 1
            continue

        building_info: Dict[str, Any] = (buildings or {}).get(building_id) or {}
        if not isinstance(building_info, dict):
            building_info = {}

        for vacancy_key, vacancy in vacancy_data.items():
            if not isinstance(vacancy, dict) or not vacancy.get("buildingName"):
                dropped += 1
                continue
            merged.append(build_record(building_id, vacancy_key, vacancy, building_info))

    if dropped:
        logger.debug(f"Dropped {dropped} malformed vacancy entries")
    logger.info(f"Merged {len(merged)} vacancy items")
    return merged
