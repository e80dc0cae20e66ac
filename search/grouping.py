"""Derived views around a focal record: document pages, archive, publishers.

Every newest-first ordering uses a stable sort on the parsed publish date, so
records with the same date keep their input order.
"""

import logging
from typing import Dict, List, Sequence, Tuple

from models.listing import ListingRecord
from utils.publish_date import parse_publish_date

logger = logging.getLogger(__name__)


def sort_newest_first(records: Sequence[ListingRecord]) -> List[ListingRecord]:
    return sorted(records, key=lambda r: parse_publish_date(r.publish_date), reverse=True)


def same_document_pages(
    records: Sequence[ListingRecord],
    focal: ListingRecord,
) -> List[ListingRecord]:
    """
    Pages of the focal record's scanned document.

    One record per page number (first occurrence wins), ascending by page.
    """
    if not focal.document_id:
        return []

    unique: Dict[int, ListingRecord] = {}
    for record in records:
        if record.document_id != focal.document_id or not record.has_image:
            continue
        unique.setdefault(record.page_num, record)

    pages = sorted(unique.values(), key=lambda r: r.page_num)
    logger.debug(f"Document {focal.document_id}: {len(pages)} pages found")
    return pages


def archive_issues(
    records: Sequence[ListingRecord],
    focal: ListingRecord,
) -> List[ListingRecord]:
    """
    Issues of the same publisher's report for the same building.

    Deduplicated by (publish date, document id), newest first.
    """
    if not focal.source or not focal.building_name:
        return []

    unique: Dict[Tuple[str, str], ListingRecord] = {}
    for record in records:
        if (
            record.source != focal.source
            or record.building_name != focal.building_name
            or not record.has_image
        ):
            continue
        unique.setdefault((record.publish_date, record.document_id), record)

    issues = sort_newest_first(list(unique.values()))
    logger.debug(
        f"Archives for {focal.source}/{focal.building_name}: {len(issues)} issues found"
    )
    return issues


def latest_per_source(records: Sequence[ListingRecord]) -> List[ListingRecord]:
    """
    Newest record of each publisher, newest first.

    A later record replaces an earlier one of the same source only if its
    date is strictly newer.
    """
    latest: Dict[str, ListingRecord] = {}
    for record in records:
        existing = latest.get(record.source)
        if existing is None or (
            parse_publish_date(record.publish_date)
            > parse_publish_date(existing.publish_date)
        ):
            latest[record.source] = record
    return sort_newest_first(list(latest.values()))


def competing_publishers(
    scope: Sequence[ListingRecord],
    focal: ListingRecord,
) -> List[ListingRecord]:
    """
    Publishers covering the focal building within ``scope``.

    ``scope`` is normally the current search result set, not the whole
    dataset. The focal record's own source is included so a cursor can point
    at it.
    """
    same_building = [
        record
        for record in scope
        if record.building_name == focal.building_name and record.has_image
    ]
    publishers = latest_per_source(same_building)
    logger.debug(
        f'Same building "{focal.building_name}": {len(publishers)} sources found'
    )
    return publishers


def other_sources_for_building(
    records: Sequence[ListingRecord],
    building_name: str,
    exclude_source: str = "",
) -> List[ListingRecord]:
    """Dataset-wide newest record per publisher for a building, minus one source."""
    if not building_name:
        return []

    candidates = [
        record
        for record in records
        if record.building_name == building_name
        and record.source != exclude_source
        and record.has_image
    ]
    return latest_per_source(candidates)


def all_for_building(
    records: Sequence[ListingRecord],
    building_name: str,
) -> List[ListingRecord]:
    """Every record with an image for a building, newest first."""
    if not building_name:
        return []

    return sort_newest_first(
        [r for r in records if r.building_name == building_name and r.has_image]
    )
