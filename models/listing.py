"""Vacancy listing data model."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional


@dataclass
class Coordinates:
    """Building location as a lat/lng pair."""

    lat: float
    lng: float

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["Coordinates"]:
        """
        Build coordinates from a raw ``{"lat": ..., "lng": ...}`` mapping.

        Returns:
            Coordinates, or None if the payload is missing or malformed
        """
        if not isinstance(raw, dict):
            return None
        try:
            return cls(lat=float(raw["lat"]), lng=float(raw["lng"]))
        except (KeyError, TypeError, ValueError):
            return None


@dataclass
class ListingRecord:
    """One vacant space, merged from vacancy facts and building facts."""

    # Identity
    id: str
    building_id: str
    vacancy_key: str

    # Vacancy information
    building_name: str = ""
    floor: str = ""
    exclusive_area: float = 0
    rent_area: float = 0
    source: str = ""
    page_image_url: str = ""
    page_num: int = 1
    document_id: str = ""
    move_in_date: str = ""
    publish_date: str = ""
    deposit_py: str = ""
    rent_py: str = ""
    maintenance_py: str = ""

    # Building information (denormalized)
    address: str = ""
    nearby_station: str = ""
    coordinates: Optional[Coordinates] = None
    region: str = ""
    completion_year: str = ""
    total_floors: str = ""
    typical_floor_area: str = ""

    @property
    def has_image(self) -> bool:
        """True if the record points at a scanned page image."""
        return bool(self.page_image_url)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ListingRecord":
        """Create instance from dictionary."""
        data = dict(data)
        if isinstance(data.get("coordinates"), dict):
            data["coordinates"] = Coordinates.from_raw(data["coordinates"])

        # Filter to only valid fields
        valid_fields = {f.name for f in fields(cls)}
        filtered_data = {k: v for k, v in data.items() if k in valid_fields}

        return cls(**filtered_data)


@dataclass
class SearchOptions:
    """Search predicates. Unset fields do not constrain the result."""

    building_name: str = ""
    district: str = ""
    station: str = ""
    area_from: float = 0
    area_to: float = 0
    source: str = ""

    def has_criteria(self) -> bool:
        """Check whether at least one predicate was supplied."""
        return any(
            [
                self.building_name,
                self.district,
                self.station,
                self.area_from,
                self.area_to,
                self.source,
            ]
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchOptions":
        """Create options from a loosely typed mapping (e.g. CLI arguments)."""
        return cls(
            building_name=(data.get("building_name") or "").strip(),
            district=(data.get("district") or "").strip(),
            station=(data.get("station") or "").strip(),
            area_from=float(data.get("area_from") or 0),
            area_to=float(data.get("area_to") or 0),
            source=(data.get("source") or "").strip(),
        )


@dataclass
class BuildingSuggestion:
    """Autocomplete candidate for the building name field."""

    name: str
    address: str
    building_id: str
