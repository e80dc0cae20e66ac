"""Filtering, autocomplete suggestions and publish-date summary."""

import logging
from datetime import date
from typing import Dict, List, Optional, Sequence

from models.constants import DEFAULT_SUGGESTION_LIMIT
from models.listing import BuildingSuggestion, ListingRecord, SearchOptions
from utils.address_parser import KoreanAddressParser
from utils.publish_date import format_year_month, is_parseable, parse_publish_date
from utils.translations import LABELS

logger = logging.getLogger(__name__)

_address_parser = KoreanAddressParser()


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def matches(record: ListingRecord, options: SearchOptions) -> bool:
    """Check one record against every supplied predicate (AND semantics)."""
    if options.building_name and not _contains(record.building_name, options.building_name):
        return False

    if options.district and not _contains(record.address, options.district):
        return False

    if options.station and not _contains(record.nearby_station, options.station):
        return False

    # Area bounds are inclusive; 0 leaves that side open
    if options.area_from > 0 and record.exclusive_area < options.area_from:
        return False
    if options.area_to > 0 and record.exclusive_area > options.area_to:
        return False

    if options.source and not _contains(record.source, options.source):
        return False

    return True


def search_listings(
    records: Sequence[ListingRecord],
    options: Optional[SearchOptions] = None,
) -> List[ListingRecord]:
    """
    Filter records by the given options, keeping their original order.

    Options without any predicate match everything; rejecting an empty search
    is up to the caller.
    """
    options = options or SearchOptions()
    results = [record for record in records if matches(record, options)]
    logger.info(f"Search results: {len(results)} items")
    return results


def _normalize_query(query: Optional[str]) -> str:
    return (query or "").strip().lower()


def suggest_building_names(
    records: Sequence[ListingRecord],
    query: str,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> List[BuildingSuggestion]:
    """Distinct building names containing ``query``, first occurrence wins."""
    term = _normalize_query(query)
    if not term:
        return []

    unique: Dict[str, BuildingSuggestion] = {}
    for record in records:
        name = record.building_name
        if name and term in name.lower() and name not in unique:
            unique[name] = BuildingSuggestion(
                name=name,
                address=record.address,
                building_id=record.building_id,
            )
            if len(unique) >= limit:
                break

    return list(unique.values())


def suggest_districts(
    records: Sequence[ListingRecord],
    query: str,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> List[str]:
    """
    District tokens (구/동/로·길) taken from addresses that contain ``query``.

    Each address contributes its first token of every kind; tokens are
    deduplicated, sorted and capped.
    """
    term = _normalize_query(query)
    if not term:
        return []

    districts = set()
    for record in records:
        if not record.address:
            continue
        for token in _address_parser.district_tokens(record.address):
            if term in token.lower():
                districts.add(token)

    return sorted(districts)[:limit]


def suggest_stations(
    records: Sequence[ListingRecord],
    query: str,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> List[str]:
    """Every station name found in station texts that contain ``query``."""
    term = _normalize_query(query)
    if not term:
        return []

    stations: Dict[str, None] = {}
    for record in records:
        if record.nearby_station and term in record.nearby_station.lower():
            for station in _address_parser.extract_stations(record.nearby_station):
                stations.setdefault(station, None)

    return list(stations)[:limit]


def list_sources(records: Sequence[ListingRecord]) -> List[str]:
    """Sorted distinct publishers."""
    return sorted({record.source for record in records if record.source})


def latest_publish_date(records: Sequence[ListingRecord]) -> Optional[date]:
    """Most recent parseable publish date, or None if no record has one."""
    latest: Optional[date] = None
    for record in records:
        if not is_parseable(record.publish_date):
            continue
        parsed = parse_publish_date(record.publish_date)
        if latest is None or parsed > latest:
            latest = parsed
    return latest


def latest_publish_summary(records: Sequence[ListingRecord]) -> str:
    """Human readable latest issue month, e.g. ``2026년 1월``, or ``정보 없음``."""
    latest = latest_publish_date(records)
    if latest is None:
        return LABELS["no_data"]
    return format_year_month(latest)
