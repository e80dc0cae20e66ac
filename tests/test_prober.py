"""Unit tests for adjacent page URL probing."""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx
import pytest
from search.prober import AdjacentPageProber, adjacent_page_url, page_number_from_url

BASE_URL = "https://storage.example/o/docs%2Fd1%2Fpage_009.jpg?alt=media"


def checker_for(existing):
    """Build an async exists-checker that records every probed URL."""
    probed = []

    async def exists(url):
        probed.append(url)
        return url in existing

    return exists, probed


class TestAdjacentPageUrl:
    """Test filename rewriting."""

    def test_increment_with_padding(self):
        assert adjacent_page_url(BASE_URL, 1).endswith("page_010.jpg?alt=media")
        assert adjacent_page_url(BASE_URL, -8).endswith("page_001.jpg?alt=media")

    def test_below_one_is_none(self):
        assert adjacent_page_url(BASE_URL, -9) is None

    def test_no_pattern(self):
        assert adjacent_page_url("https://img.example/cover.png", 1) is None
        assert page_number_from_url("https://img.example/cover.png") is None

    def test_page_number(self):
        assert page_number_from_url(BASE_URL) == 9

    def test_large_page_numbers_not_truncated(self):
        url = "https://img.example/page_999.jpg"
        assert adjacent_page_url(url, 1) == "https://img.example/page_1000.jpg"


class TestFindAdjacent:
    """Test the bounded walk."""

    def test_first_candidate_exists(self):
        target = adjacent_page_url(BASE_URL, 1)
        exists, probed = checker_for({target})
        prober = AdjacentPageProber(exists_checker=exists)

        result = asyncio.run(prober.find_adjacent(BASE_URL, 1))

        assert result.url == target
        assert result.offset == 1
        assert result.attempts == 1
        assert probed == [target]

    def test_skips_missing_pages(self):
        """Test two missing pages are skipped and the offset reflects it."""
        target = adjacent_page_url(BASE_URL, 3)
        exists, probed = checker_for({target})
        prober = AdjacentPageProber(exists_checker=exists)

        result = asyncio.run(prober.find_adjacent(BASE_URL, 1))

        assert result.offset == 3
        assert len(probed) == 3

    def test_backwards(self):
        target = adjacent_page_url(BASE_URL, -2)
        exists, _ = checker_for({target})
        prober = AdjacentPageProber(exists_checker=exists)

        result = asyncio.run(prober.find_adjacent(BASE_URL, -1))

        assert result.url == target
        assert result.offset == -2

    def test_gives_up_after_max_attempts(self):
        """Test exactly max_attempts candidates are tried before failing."""
        exists, probed = checker_for(set())
        prober = AdjacentPageProber(exists_checker=exists)

        result = asyncio.run(prober.find_adjacent(BASE_URL, 1))

        assert result is None
        assert len(probed) == 20

    def test_page_beyond_bound_not_found(self):
        """Test a page 21 steps away is never reached."""
        exists, probed = checker_for({adjacent_page_url(BASE_URL, 21)})
        prober = AdjacentPageProber(exists_checker=exists)

        assert asyncio.run(prober.find_adjacent(BASE_URL, 1)) is None
        assert len(probed) == 20

    def test_backwards_stops_at_page_one(self):
        url = "https://img.example/page_003.jpg"
        exists, probed = checker_for(set())
        prober = AdjacentPageProber(exists_checker=exists)

        assert asyncio.run(prober.find_adjacent(url, -1)) is None
        assert probed == [
            "https://img.example/page_002.jpg",
            "https://img.example/page_001.jpg",
        ]

    def test_no_pattern_no_probe(self):
        exists, probed = checker_for(set())
        prober = AdjacentPageProber(exists_checker=exists)

        assert asyncio.run(prober.find_adjacent("https://img.example/cover.png", 1)) is None
        assert probed == []

    def test_invalid_direction(self):
        prober = AdjacentPageProber(exists_checker=checker_for(set())[0])
        with pytest.raises(ValueError):
            asyncio.run(prober.find_adjacent(BASE_URL, 2))


class TestHttpCheck:
    """Test the HTTP existence check through a mock transport."""

    def test_head_image_found(self):
        target = adjacent_page_url(BASE_URL, 2)

        def handler(request):
            if str(request.url) == target:
                return httpx.Response(200, headers={"content-type": "image/jpeg"})
            return httpx.Response(404)

        prober = AdjacentPageProber(transport=httpx.MockTransport(handler))
        result = asyncio.run(prober.find_adjacent(BASE_URL, 1))

        assert result.url == target
        assert result.offset == 2

    def test_falls_back_to_get_when_head_rejected(self):
        methods = []

        def handler(request):
            methods.append(request.method)
            if request.method == "HEAD":
                return httpx.Response(405)
            return httpx.Response(200, headers={"content-type": "image/jpeg"}, content=b"\xff\xd8")

        prober = AdjacentPageProber(transport=httpx.MockTransport(handler))
        result = asyncio.run(prober.find_adjacent(BASE_URL, 1))

        assert result.offset == 1
        assert methods == ["HEAD", "GET"]

    def test_non_image_response_is_a_miss(self):
        def handler(request):
            return httpx.Response(200, headers={"content-type": "text/html"}, text="<html>")

        prober = AdjacentPageProber(max_attempts=3, transport=httpx.MockTransport(handler))
        assert asyncio.run(prober.find_adjacent(BASE_URL, 1)) is None

    def test_transport_error_is_a_miss(self):
        calls = []

        def handler(request):
            calls.append(request.url)
            raise httpx.ConnectError("unreachable", request=request)

        prober = AdjacentPageProber(max_attempts=4, transport=httpx.MockTransport(handler))

        assert asyncio.run(prober.find_adjacent(BASE_URL, 1)) is None
        assert len(calls) == 4
