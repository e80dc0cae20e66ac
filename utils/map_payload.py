"""Marker payloads handed to the external map widget."""

import html
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from models.listing import ListingRecord
from utils.formatting import format_area


@dataclass
class MapMarker:
    """One point on the map with its info window content."""

    lat: float
    lng: float
    label: str
    info_html: str = ""


@dataclass
class MapRequest:
    """Render request: a title and the markers to show."""

    title: str
    markers: List[MapMarker] = field(default_factory=list)

    @property
    def is_single(self) -> bool:
        return len(self.markers) == 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "markers": [
                {"lat": m.lat, "lng": m.lng, "label": m.label, "info": m.info_html}
                for m in self.markers
            ],
        }


def _escape(text: str) -> str:
    return html.escape(text or "")


def render_info_html(record: ListingRecord) -> str:
    """Info window body: building name, floor, exclusive area and address."""
    details = []
    if record.floor:
        details.append(f"층: {_escape(record.floor)}")
    if record.exclusive_area:
        details.append(f"전용: {format_area(record.exclusive_area)}평")

    parts = [f"<strong>{_escape(record.building_name)}</strong>"]
    if details:
        parts.append(f"<div>{' | '.join(details)}</div>")
    if record.address:
        parts.append(f"<div>{_escape(record.address)}</div>")
    return "".join(parts)


def single_marker_request(lat: float, lng: float, name: str) -> MapRequest:
    """One labelled point, e.g. for the map button of a result row."""
    marker = MapMarker(
        lat=lat,
        lng=lng,
        label=name,
        info_html=f"<strong>{_escape(name)}</strong>",
    )
    return MapRequest(title=name, markers=[marker])


def markers_for_records(records: Iterable[ListingRecord]) -> List[MapMarker]:
    """Markers for every record that has coordinates; others are skipped."""
    markers = []
    for record in records:
        if not record.coordinates:
            continue
        markers.append(
            MapMarker(
                lat=record.coordinates.lat,
                lng=record.coordinates.lng,
                label=record.building_name,
                info_html=render_info_html(record),
            )
        )
    return markers
