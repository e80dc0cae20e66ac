"""Korean address and station text parsing utilities."""

import re
from typing import Dict, List, Optional


class KoreanAddressParser:
    """Parser for the address and nearby-station text of Korean buildings."""

    # Administrative district (e.g. "강남구")
    GU_PATTERN = re.compile(r"([가-힣]+구)")

    # Neighbourhood (e.g. "역삼동")
    DONG_PATTERN = re.compile(r"([가-힣]+동)")

    # Road or street name (e.g. "테헤란로", "삼성로85길")
    ROAD_PATTERN = re.compile(r"([가-힣0-9]+(?:로|길))")

    # Station names in free text (e.g. "강남역 도보 5분, 역삼역")
    STATION_PATTERN = re.compile(r"[가-힣A-Za-z0-9]+역")

    def parse_address(self, address_text: str) -> Dict[str, Optional[str]]:
        """
        Split an address into district, neighbourhood and road tokens.

        Each token is the first match of its own pattern, so results can be
        partial or overlap (e.g. a road name that itself ends in "동").

        Args:
            address_text: Raw address string

        Returns:
            Dictionary with "gu", "dong", "road" (None when absent) and
            "full_address"
        """
        result: Dict[str, Optional[str]] = {
            "gu": None,
            "dong": None,
            "road": None,
            "full_address": address_text.strip() if address_text else None,
        }

        if not address_text:
            return result

        gu_match = self.GU_PATTERN.search(address_text)
        if gu_match:
            result["gu"] = gu_match.group(1)

        dong_match = self.DONG_PATTERN.search(address_text)
        if dong_match:
            result["dong"] = dong_match.group(1)

        road_match = self.ROAD_PATTERN.search(address_text)
        if road_match:
            result["road"] = road_match.group(1)

        return result

    def district_tokens(self, address_text: str) -> List[str]:
        """Return the non-empty gu/dong/road tokens of an address, in that order."""
        parsed = self.parse_address(address_text)
        return [parsed[key] for key in ("gu", "dong", "road") if parsed[key]]

    def extract_stations(self, station_text: str) -> List[str]:
        """
        Extract every station name from nearby-station text.

        Example:
            "강남역 도보 3분, 역삼역 도보 7분" -> ["강남역", "역삼역"]
        """
        if not station_text:
            return []
        return self.STATION_PATTERN.findall(station_text)
