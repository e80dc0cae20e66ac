"""Image viewer session state."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .listing import ListingRecord


class PagingMode(Enum):
    """How the viewer finds the previous/next page of a document."""

    # Sibling pages are known from records sharing the document id
    STRUCTURAL = "structural"
    # Only one page is known; neighbours are probed by rewriting the image URL
    PROBED = "probed"


@dataclass
class ViewerSession:
    """
    State of one open image viewer.

    Created when a record is opened and discarded on close. ``focal`` may be a
    synthetic copy of a record whose image URL, publish date, document id and
    page number were substituted by archive or page navigation.
    """

    focal: ListingRecord
    records: List[ListingRecord]
    scope: List[ListingRecord]
    document_pages: List[ListingRecord] = field(default_factory=list)
    archive_list: List[ListingRecord] = field(default_factory=list)
    publisher_list: List[ListingRecord] = field(default_factory=list)
    publisher_index: int = 0
    display_page_num: int = 1
    paging_mode: PagingMode = PagingMode.PROBED
    busy: bool = False
