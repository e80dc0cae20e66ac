"""Image viewer navigation over document pages, archive issues and publishers."""

import dataclasses
import logging
from typing import Dict, List, Optional, Sequence

from models.constants import KEY_BINDINGS
from models.listing import ListingRecord
from models.viewer import PagingMode, ViewerSession
from search.grouping import archive_issues, competing_publishers, same_document_pages
from search.prober import AdjacentPageProber
from utils.translations import LABELS

logger = logging.getLogger(__name__)


class MissingImageError(Exception):
    """Raised when a record without a page image is opened in the viewer."""


class ImageViewer:
    """
    Modal image viewer state machine.

    Closed while ``session`` is None. An open session navigates three axes:
    pages of the current document, archived issues of the same
    publisher/building, and competing publishers of the same building within
    the current result set.
    """

    def __init__(self, prober: Optional[AdjacentPageProber] = None):
        self.prober = prober or AdjacentPageProber()
        self.session: Optional[ViewerSession] = None

    @property
    def is_open(self) -> bool:
        return self.session is not None

    def open(
        self,
        record: ListingRecord,
        records: Sequence[ListingRecord],
        scope: Sequence[ListingRecord],
    ) -> ViewerSession:
        """
        Open the viewer on ``record``.

        Args:
            record: Record the user clicked
            records: Full merged dataset (document pages and archive)
            scope: Current result set (competing publishers)

        Raises:
            MissingImageError: If the record has no page image
        """
        if not record.has_image:
            raise MissingImageError(f"Record {record.id} has no page image")

        session = ViewerSession(focal=record, records=list(records), scope=list(scope))
        self.session = session
        self._recompute(session, record)
        logger.info(
            f"Opened viewer for {record.building_name} ({record.source}), "
            f"{len(session.document_pages)} pages, {len(session.archive_list)} issues, "
            f"{len(session.publisher_list)} publishers"
        )
        return session

    def close(self) -> None:
        self.session = None

    def _recompute(self, session: ViewerSession, focal: ListingRecord) -> None:
        """Point the session at ``focal`` and rebuild every derived view."""
        session.focal = focal
        session.display_page_num = focal.page_num
        session.document_pages = same_document_pages(session.records, focal)
        session.archive_list = archive_issues(session.records, focal)
        session.publisher_list = competing_publishers(session.scope, focal)
        session.publisher_index = self._publisher_index_of(session, focal.source)
        session.paging_mode = (
            PagingMode.STRUCTURAL if len(session.document_pages) > 1 else PagingMode.PROBED
        )

    @staticmethod
    def _publisher_index_of(session: ViewerSession, source: str) -> int:
        for index, record in enumerate(session.publisher_list):
            if record.source == source:
                return index
        return 0

    def current_page_index(self) -> Optional[int]:
        """Index of the displayed page in the structural page list, if known."""
        session = self.session
        if session is None:
            return None
        for index, page in enumerate(session.document_pages):
            if (
                page.document_id == session.focal.document_id
                and page.page_num == session.focal.page_num
            ):
                return index
        return None

    async def switch_document_page(self, direction: int) -> bool:
        """
        Move to the previous (-1) or next (+1) page of the current document.

        Returns:
            True if the displayed page changed
        """
        session = self.session
        if session is None:
            return False

        if session.paging_mode is PagingMode.STRUCTURAL:
            return self._switch_structural_page(session, direction)

        return await self._switch_probed_page(session, direction)

    def _switch_structural_page(self, session: ViewerSession, direction: int) -> bool:
        current = self.current_page_index()
        if current is None:
            current = 0
        target = current + direction
        if target < 0 or target >= len(session.document_pages):
            return False

        page = session.document_pages[target]
        session.focal = dataclasses.replace(
            session.focal,
            page_image_url=page.page_image_url,
            page_num=page.page_num,
        )
        session.display_page_num = page.page_num
        return True

    async def _switch_probed_page(self, session: ViewerSession, direction: int) -> bool:
        if session.busy:
            logger.debug("Page probe already in flight, ignoring request")
            return False

        origin = session.focal
        session.busy = True
        try:
            result = await self.prober.find_adjacent(origin.page_image_url, direction)
        finally:
            session.busy = False

        # The viewer may have been closed, reopened or moved to another record while probing
        if result is None or self.session is not session or session.focal is not origin:
            return False

        session.display_page_num += result.offset
        session.focal = dataclasses.replace(
            origin,
            page_image_url=result.url,
            page_num=session.display_page_num,
        )
        return True

    def switch_archive_issue(self, index: int) -> bool:
        """
        Show archived issue ``index`` of the archive list.

        The issue's image, publish date, document id and page number replace
        the focal record's; building, floor and source stay. All derived
        views are then rebuilt for what is displayed.
        """
        session = self.session
        if session is None or session.busy or not 0 <= index < len(session.archive_list):
            return False

        issue = session.archive_list[index]
        focal = dataclasses.replace(
            session.focal,
            page_image_url=issue.page_image_url,
            publish_date=issue.publish_date,
            document_id=issue.document_id,
            page_num=issue.page_num or 1,
        )
        self._recompute(session, focal)
        return True

    def switch_publisher(self, direction: int) -> bool:
        """
        Move the publisher cursor by ``direction`` and show that publisher's record.

        Refused while a page probe is in flight, as is an archive switch.
        """
        session = self.session
        if session is None or session.busy:
            return False

        target = session.publisher_index + direction
        if target < 0 or target >= len(session.publisher_list):
            return False

        record = session.publisher_list[target]
        session.focal = record
        session.display_page_num = record.page_num
        session.publisher_index = target
        session.archive_list = archive_issues(session.records, record)
        session.document_pages = same_document_pages(session.records, record)
        session.paging_mode = (
            PagingMode.STRUCTURAL if len(session.document_pages) > 1 else PagingMode.PROBED
        )
        return True

    def current_archive_index(self) -> Optional[int]:
        """Archive entry matching the displayed document id or publish date."""
        session = self.session
        if session is None:
            return None
        for index, issue in enumerate(session.archive_list):
            if (
                issue.document_id == session.focal.document_id
                or issue.publish_date == session.focal.publish_date
            ):
                return index
        return None

    async def handle_key(self, key: str) -> bool:
        """
        Apply a keyboard shortcut.

        Returns:
            True if the key was bound and changed the viewer state. Every key
            is ignored while a page probe is in flight.
        """
        if self.session is None or self.session.busy:
            return False

        action = KEY_BINDINGS.get(key)
        if action == "prev_page":
            return await self.switch_document_page(-1)
        if action == "next_page":
            return await self.switch_document_page(1)
        if action == "prev_publisher":
            return self.switch_publisher(-1)
        if action == "next_publisher":
            return self.switch_publisher(1)
        if action == "close":
            self.close()
            return True
        return False

    def describe(self) -> Dict[str, str]:
        """Captions for the viewer header, page counter and publisher navigation."""
        session = self.session
        if session is None:
            return {}

        focal = session.focal
        result = {
            "title": f"{focal.building_name} - {focal.floor}",
            "info": (
                f"{LABELS['source']}: {focal.source} | "
                f"{LABELS['published']}: {focal.publish_date}"
            ),
            "page": f"{focal.source} {session.display_page_num}{LABELS['page']}",
            "image_url": focal.page_image_url,
        }

        publishers: List[ListingRecord] = session.publisher_list
        total = len(publishers)
        if total <= 1:
            result["publishers"] = LABELS["no_other_sources"]
            result["prev_publisher"] = "-"
            result["next_publisher"] = "-"
            return result

        index = session.publisher_index
        result["publishers"] = f"{index + 1} / {total} {LABELS['companies']}"
        if index > 0:
            prev = publishers[index - 1]
            result["prev_publisher"] = f"{prev.source} ({prev.publish_date})"
        else:
            result["prev_publisher"] = LABELS["first"]
        if index < total - 1:
            nxt = publishers[index + 1]
            result["next_publisher"] = f"{nxt.source} ({nxt.publish_date})"
        else:
            result["next_publisher"] = LABELS["last"]
        return result
