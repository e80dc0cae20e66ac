"""Best-effort discovery of neighbouring scanned pages by URL rewriting."""

import logging
import re
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import httpx

from models.constants import DEFAULT_MAX_PROBE_ATTEMPTS, DEFAULT_PROBE_TIMEOUT

logger = logging.getLogger(__name__)

PAGE_FILENAME_PATTERN = re.compile(r"page_(\d+)\.jpg")

ExistsChecker = Callable[[str], Awaitable[bool]]


@dataclass
class ProbeResult:
    """A reachable neighbouring page."""

    url: str
    # Signed number of filename increments consumed (e.g. +3 if two pages were missing)
    offset: int
    attempts: int


def page_number_from_url(url: str) -> Optional[int]:
    """Page number embedded in a ``page_NNN.jpg`` filename, or None."""
    match = PAGE_FILENAME_PATTERN.search(url or "")
    if not match:
        return None
    return int(match.group(1))


def adjacent_page_url(url: str, offset: int) -> Optional[str]:
    """
    Rewrite the first ``page_NNN.jpg`` in ``url`` to the page ``offset`` away.

    Returns:
        The rewritten URL (page zero-padded to 3 digits), or None if the URL
        has no page filename or the page would drop below 1

    Example:
        ".../doc/page_009.jpg?alt=media", +1 -> ".../doc/page_010.jpg?alt=media"
    """
    current = page_number_from_url(url)
    if current is None:
        return None

    new_page = current + offset
    if new_page < 1:
        return None

    return PAGE_FILENAME_PATTERN.sub(f"page_{new_page:03d}.jpg", url, count=1)


class AdjacentPageProber:
    """Walks page filenames outward until an image answers or the bound is hit."""

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_PROBE_ATTEMPTS,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        exists_checker: Optional[ExistsChecker] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the prober.

        Args:
            max_attempts: Consecutive misses before giving up
            timeout: Per-request timeout in seconds for the HTTP check
            exists_checker: Custom async ``url -> bool`` check; replaces HTTP
            transport: Custom httpx transport for the HTTP check (tests)
        """
        self.max_attempts = max_attempts
        self.timeout = timeout
        self._exists_checker = exists_checker
        self._transport = transport

    async def check_image_exists(self, url: str, client: httpx.AsyncClient) -> bool:
        """
        Check that ``url`` serves an image.

        Tries HEAD first and falls back to GET for servers that reject HEAD.
        Any transport error counts as "does not exist".
        """
        try:
            response = await client.head(url)
            if response.status_code == 405:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.debug(f"Probe failed for {url}: {e}")
            return False

        if not response.is_success:
            return False

        content_type = response.headers.get("content-type", "")
        return not content_type or content_type.startswith("image/")

    async def find_adjacent(self, url: str, direction: int) -> Optional[ProbeResult]:
        """
        Find the nearest existing page in ``direction`` (+1 or -1).

        Returns:
            ProbeResult for the first reachable page, or None when the URL has
            no page filename, page 1 is passed, or max_attempts pages miss
        """
        if direction not in (1, -1):
            raise ValueError(f"direction must be +1 or -1, got {direction}")

        if adjacent_page_url(url, direction) is None:
            return None

        if self._exists_checker is not None:
            return await self._walk(url, direction, self._exists_checker)

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=self.timeout),
            follow_redirects=True,
            transport=self._transport,
        ) as client:

            async def http_exists(candidate: str) -> bool:
                return await self.check_image_exists(candidate, client)

            return await self._walk(url, direction, http_exists)

    async def _walk(
        self, url: str, direction: int, exists: ExistsChecker
    ) -> Optional[ProbeResult]:
        attempts = 0
        while attempts < self.max_attempts:
            candidate = adjacent_page_url(url, direction * (attempts + 1))
            if candidate is None:
                break

            attempts += 1
            if await exists(candidate):
                logger.info(f"Found valid page after {attempts} attempts")
                return ProbeResult(url=candidate, offset=attempts * direction, attempts=attempts)

        logger.info(f"No valid page found after {attempts} attempts")
        return None
