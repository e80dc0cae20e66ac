"""User-checked result rows."""

from typing import Dict, Iterator, List

from .listing import ListingRecord


class SelectionSet:
    """
    Set of selected listing records keyed by record id.

    Membership is what matters; insertion order is kept only so the summary
    chips render in the order the user ticked the rows.
    """

    def __init__(self):
        self._items: Dict[str, ListingRecord] = {}

    def add(self, record: ListingRecord) -> None:
        self._items[record.id] = record

    def remove(self, record_id: str) -> None:
        self._items.pop(record_id, None)

    def toggle(self, record: ListingRecord, checked: bool) -> None:
        """Apply a checkbox change for ``record``."""
        if checked:
            self.add(record)
        else:
            self.remove(record.id)

    def clear(self) -> None:
        self._items.clear()

    def records(self) -> List[ListingRecord]:
        return list(self._items.values())

    def chip_labels(self) -> List[str]:
        """Summary chip text, e.g. ``"Tower A (5F)"``."""
        return [f"{r.building_name} ({r.floor})" for r in self._items.values()]

    def with_coordinates(self) -> List[ListingRecord]:
        """Selected records that can be placed on a map."""
        return [r for r in self._items.values() if r.coordinates]

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ListingRecord]:
        return iter(self._items.values())
