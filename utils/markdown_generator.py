"""Markdown export of selected listings."""

import html
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

import yaml

from models.listing import ListingRecord
from utils.colors import SourceColorPicker
from utils.formatting import format_area, format_price
from utils.translations import LABELS, TABLE_HEADERS

EXPORT_COLUMNS = [
    "building_name",
    "floor",
    "exclusive_area",
    "rent_area",
    "deposit_py",
    "rent_py",
    "maintenance_py",
    "source",
    "publish_date",
]


class MarkdownGenerator:
    """Generator for a selection summary file with YAML frontmatter."""

    def __init__(
        self,
        output_dir: str = "output",
        color_picker: Optional[SourceColorPicker] = None,
    ):
        """
        Initialize the generator.

        Args:
            output_dir: Directory the export files are written to
            color_picker: Shared publisher colour picker (badges match the UI)
        """
        self.output_dir = output_dir
        self.color_picker = color_picker or SourceColorPicker()

    def generate_filename(self, generated_at: datetime) -> str:
        return f"selection_{generated_at.strftime('%Y-%m-%d-%H%M%S')}.md"

    def generate_yaml_frontmatter(
        self, records: List[ListingRecord], generated_at: datetime
    ) -> str:
        """Generate YAML frontmatter describing the export."""
        frontmatter: Dict[str, Any] = {
            "generated": generated_at.isoformat(timespec="seconds"),
            "count": len(records),
            "listing_ids": [r.id for r in records],
        }

        sources = sorted({r.source for r in records if r.source})
        if sources:
            frontmatter["sources"] = sources

        buildings = []
        for record in records:
            if record.building_name not in buildings:
                buildings.append(record.building_name)
        if buildings:
            frontmatter["buildings"] = buildings

        return yaml.dump(
            frontmatter, allow_unicode=True, sort_keys=False, default_flow_style=False
        )

    def render_source_badge(self, source: str) -> str:
        color = self.color_picker.color_for(source)
        return f'<span style="background-color: {color}; color: #fff">{html.escape(source)}</span>'

    def _cell(self, record: ListingRecord, column: str) -> str:
        if column in ("exclusive_area", "rent_area"):
            return format_area(getattr(record, column))
        if column in ("deposit_py", "rent_py", "maintenance_py"):
            return format_price(getattr(record, column))
        if column == "source":
            return self.render_source_badge(record.source) if record.source else "-"
        value = getattr(record, column)
        return str(value).replace("|", "\\|") if value else "-"

    def generate_markdown_content(self, records: List[ListingRecord]) -> str:
        """Generate the markdown body: a results table and an address list."""
        content = [f"# {LABELS['selected_buildings']} {len(records)}\n"]

        header = [TABLE_HEADERS[c] for c in EXPORT_COLUMNS]
        content.append("| " + " | ".join(header) + " |")
        content.append("|" + "---|" * len(header))
        for record in records:
            cells = [self._cell(record, c) for c in EXPORT_COLUMNS]
            content.append("| " + " | ".join(cells) + " |")

        addressed = [r for r in records if r.address]
        if addressed:
            content.append(f"\n## {TABLE_HEADERS['address']}\n")
            for record in addressed:
                line = f"- **{record.building_name}**: {record.address}"
                if record.nearby_station:
                    line += f" ({record.nearby_station})"
                content.append(line)

        return "\n".join(content) + "\n"

    def generate_selection_file(
        self,
        records: List[ListingRecord],
        generated_at: Optional[datetime] = None,
    ) -> str:
        """
        Write the export file for ``records``.

        Returns:
            Path to the generated file
        """
        generated_at = generated_at or datetime.now()
        os.makedirs(self.output_dir, exist_ok=True)
        filepath = os.path.join(self.output_dir, self.generate_filename(generated_at))

        frontmatter = self.generate_yaml_frontmatter(records, generated_at)
        body = self.generate_markdown_content(records)
        full_content = f"---\n{frontmatter}---\n\n{body}"

        with open(filepath, "w", encoding="utf-8") as f:
            f.write(full_content)

        return filepath
