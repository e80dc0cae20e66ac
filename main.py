"""Commercial real-estate leasing search: controller and command line."""

import argparse
import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional

from models.constants import (
    DEFAULT_CACHE_DURATION,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_MAX_PROBE_ATTEMPTS,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_SUGGESTION_LIMIT,
)
from models.listing import ListingRecord, SearchOptions
from models.selection import SelectionSet
from search.prober import AdjacentPageProber
from search.service import LeasingDataService
from search.viewer import ImageViewer, MissingImageError
from stores import get_store
from stores.base import DataFetchError, DataStore
from utils.colors import SourceColorPicker
from utils.debounce import Debouncer
from utils.formatting import format_area, format_price
from utils.map_payload import MapRequest, markers_for_records, single_marker_request
from utils.markdown_generator import MarkdownGenerator
from utils.pagination import Page, paginate
from utils.translations import LABELS, LOADING, MESSAGES

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Suppress per-request logs from the HTTP client
logging.getLogger("httpx").setLevel(logging.WARNING)


class NoSearchCriteriaError(Exception):
    """Raised when a search is submitted with every field empty."""


class LeasingSearchApp:
    """
    Application controller for the leasing search UI.

    Holds the state the browser build kept in the page: the current result
    set and page, the row selection, the image viewer, the loading flag and
    the last notice shown to the user.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        store: Optional[DataStore] = None,
        prober: Optional[AdjacentPageProber] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the controller with configuration.

        Args:
            config: Configuration dictionary from config.json
            store: Data store override (default: built from config["store"])
            prober: Page prober override (default: built from config["viewer"])
            clock: Time source for the data cache
        """
        self.config = config

        cache_config = config.get("cache", {})
        search_config = config.get("search", {})
        viewer_config = config.get("viewer", {})
        autocomplete_config = config.get("autocomplete", {})

        self.service = LeasingDataService(
            store or get_store(config),
            cache_duration=cache_config.get("duration_seconds", DEFAULT_CACHE_DURATION),
            suggestion_limit=search_config.get("suggestion_limit", DEFAULT_SUGGESTION_LIMIT),
            clock=clock,
        )

        if prober is None:
            prober = AdjacentPageProber(
                max_attempts=viewer_config.get("max_probe_attempts", DEFAULT_MAX_PROBE_ATTEMPTS),
                timeout=viewer_config.get("probe_timeout", DEFAULT_PROBE_TIMEOUT),
            )
        self.viewer = ImageViewer(prober)

        self.color_picker = SourceColorPicker()
        self.md_generator = MarkdownGenerator(
            output_dir=config.get("output_folder", "output"),
            color_picker=self.color_picker,
        )

        # Result table state
        self.current_results: List[ListingRecord] = []
        self.current_page = 1
        self.page_size = search_config.get("page_size", DEFAULT_PAGE_SIZE)
        self.selection = SelectionSet()

        # UI feedback
        self.is_loading = False
        self.loading_text = ""
        self.last_update = LABELS["no_data"]
        self.notices: List[str] = []

        # Autocomplete
        debounce_seconds = autocomplete_config.get("debounce_ms", DEFAULT_DEBOUNCE_MS) / 1000
        self._suggesters: Dict[str, Callable[[str], Awaitable[List[Any]]]] = {
            "building": self.service.suggest_building_names,
            "district": self.service.suggest_districts,
            "station": self.service.suggest_stations,
        }
        self._debouncers = {field: Debouncer(debounce_seconds) for field in self._suggesters}

    # ===== Loading / notices =====

    def show_loading(self, text: str = LOADING["default"]) -> None:
        self.loading_text = text
        self.is_loading = True

    def hide_loading(self) -> None:
        self.loading_text = ""
        self.is_loading = False

    def show_notice(self, message: str) -> None:
        logger.warning(message)
        self.notices.append(message)

    @property
    def last_notice(self) -> Optional[str]:
        return self.notices[-1] if self.notices else None

    # ===== Search =====

    async def initialize(self) -> bool:
        """
        Load the dataset and the latest-issue label.

        Returns:
            False if the data could not be loaded (a notice is recorded)
        """
        logger.info("Initializing Leasing Search App...")
        self.show_loading(LOADING["initializing"])
        try:
            await self.service.load_merged_data()
            self.last_update = await self.service.get_last_update()
        except DataFetchError as e:
            logger.error(f"Initialization error: {e}")
            self.show_notice(MESSAGES["load_error"])
            return False
        finally:
            self.hide_loading()

        logger.info(f"App initialized ({LABELS['latest']}: {self.last_update})")
        return True

    async def perform_search(self, options: SearchOptions) -> Optional[List[ListingRecord]]:
        """
        Run a search from the form fields.

        Returns:
            The new result set, or None if the search was rejected or failed
        """
        try:
            self._check_criteria(options)
        except NoSearchCriteriaError:
            self.show_notice(MESSAGES["no_criteria"])
            return None

        self.show_loading(LOADING["searching"])
        try:
            results = await self.service.search(options)
        except DataFetchError as e:
            logger.error(f"Search error: {e}")
            self.show_notice(MESSAGES["search_error"])
            return None
        finally:
            self.hide_loading()

        self._set_results(results)
        return results

    @staticmethod
    def _check_criteria(options: SearchOptions) -> None:
        if not options.has_criteria():
            raise NoSearchCriteriaError("At least one search field is required")

    async def load_all(self) -> Optional[List[ListingRecord]]:
        """Show the whole dataset as the result set."""
        self.show_loading(LOADING["loading_all"])
        try:
            results = await self.service.load_merged_data()
        except DataFetchError as e:
            logger.error(f"Load all error: {e}")
            self.show_notice(MESSAGES["load_error"])
            return None
        finally:
            self.hide_loading()

        self._set_results(list(results))
        return self.current_results

    def reset_search(self) -> None:
        self.current_results = []
        self.current_page = 1

    def _set_results(self, results: List[ListingRecord]) -> None:
        self.current_results = results
        self.current_page = 1

    # ===== Pagination =====

    def page_items(self) -> Page[ListingRecord]:
        return paginate(self.current_results, self.current_page, self.page_size)

    def go_to_page(self, page: int) -> bool:
        """Move to 1-indexed ``page``; out-of-range pages are ignored."""
        total = self.page_items().total_pages
        if page < 1 or page > total:
            return False
        self.current_page = page
        return True

    def set_page_size(self, page_size: int) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page_size = page_size
        self.current_page = 1

    # ===== Selection =====

    def find_result(self, record_id: str) -> Optional[ListingRecord]:
        for record in self.current_results:
            if record.id == record_id:
                return record
        return None

    def toggle_selection(self, record_id: str, checked: bool) -> bool:
        """Apply a row checkbox change. Ids outside the result set are ignored."""
        record = self.find_result(record_id)
        if record is None and checked:
            return False
        if record is None:
            self.selection.remove(record_id)
            return True
        self.selection.toggle(record, checked)
        return True

    def remove_selected(self, record_id: str) -> None:
        self.selection.remove(record_id)

    def export_selection(self) -> Optional[str]:
        """Write the selection to a markdown file and return its path."""
        if not len(self.selection):
            self.show_notice(MESSAGES["no_selection"])
            return None
        path = self.md_generator.generate_selection_file(self.selection.records())
        logger.info(f"Selection exported: {path}")
        return path

    # ===== Viewer =====

    async def open_viewer(self, record_id: str) -> bool:
        """Open the image viewer on a row of the current result set."""
        record = self.find_result(record_id)
        if record is None:
            self.show_notice(MESSAGES["record_not_found"])
            return False

        try:
            records = await self.service.load_merged_data()
            self.viewer.open(record, records, self.current_results)
        except MissingImageError:
            self.show_notice(MESSAGES["no_image"])
            return False
        except DataFetchError as e:
            logger.error(f"Viewer load error: {e}")
            self.show_notice(MESSAGES["load_error"])
            return False
        return True

    def close_viewer(self) -> None:
        self.viewer.close()

    async def handle_key(self, key: str) -> bool:
        return await self.viewer.handle_key(key)

    # ===== Map =====

    def show_single_marker_map(self, record: ListingRecord) -> Optional[MapRequest]:
        if not record.coordinates:
            self.show_notice(MESSAGES["no_coordinates"])
            return None
        return single_marker_request(
            record.coordinates.lat, record.coordinates.lng, record.building_name
        )

    def show_selected_on_map(self) -> Optional[MapRequest]:
        """Marker request for every selected building with coordinates."""
        if not len(self.selection):
            self.show_notice(MESSAGES["no_selection"])
            return None

        markers = markers_for_records(self.selection.with_coordinates())
        if not markers:
            self.show_notice(MESSAGES["no_coordinates"])
            return None

        return MapRequest(
            title=f"{LABELS['selected_buildings']} {len(markers)}개",
            markers=markers,
        )

    # ===== Autocomplete =====

    def autocomplete(
        self,
        field: str,
        text: str,
        on_results: Callable[[List[Any]], None],
    ) -> Optional[asyncio.Task]:
        """
        Schedule a debounced suggestion lookup for an input field.

        Args:
            field: "building", "district" or "station"
            text: Current input value
            on_results: Called with the suggestions once the lookup runs

        Returns:
            The scheduled task, or None if the input is blank
        """
        if field not in self._suggesters:
            raise ValueError(f"Unknown autocomplete field: {field}")

        debouncer = self._debouncers[field]
        query = text.strip()
        if not query:
            debouncer.cancel()
            return None

        suggest = self._suggesters[field]

        async def lookup() -> None:
            on_results(await suggest(query))

        return debouncer.trigger(lookup)


# ===== Command line =====


def print_results(app: LeasingSearchApp) -> None:
    page = app.page_items()
    print(f"{len(app.current_results)} results (page {page.number}/{max(page.total_pages, 1)})")
    if not page.items:
        print(MESSAGES["no_results"])
        return
    for record in page.items:
        print(
            f"  {record.id} | {record.building_name} | {record.floor} | "
            f"{format_area(record.exclusive_area)} | {format_price(record.rent_py)} | "
            f"{record.source} {record.publish_date}"
        )


def print_viewer(app: LeasingSearchApp) -> None:
    captions = app.viewer.describe()
    if not captions:
        return
    print(captions["title"])
    print(f"  {captions['info']}")
    print(f"  {captions['page']}: {captions['image_url']}")
    print(
        f"  [{captions['prev_publisher']}] {captions['publishers']} "
        f"[{captions['next_publisher']}]"
    )
    session = app.viewer.session
    if session and len(session.archive_list) > 1:
        current = app.viewer.current_archive_index()
        for index, issue in enumerate(session.archive_list):
            marker = "*" if index == current else " "
            print(f"  {marker} a {index}: {issue.publish_date} ({issue.source})")


VIEWER_COMMANDS = {
    "p": "ArrowLeft",
    "n": "ArrowRight",
    "[": "ArrowUp",
    "]": "ArrowDown",
    "q": "Escape",
}


async def run_viewer(app: LeasingSearchApp, record_id: str) -> None:
    """Interactive viewer: p/n pages, [/] publishers, a N archive, q quit."""
    if not await app.open_viewer(record_id):
        print(app.last_notice)
        return

    print_viewer(app)
    while app.viewer.is_open:
        command = (await asyncio.to_thread(input, "> ")).strip()
        if command.startswith("a "):
            try:
                app.viewer.switch_archive_issue(int(command[2:]))
            except ValueError:
                print("usage: a <index>")
                continue
        else:
            await app.handle_key(VIEWER_COMMANDS.get(command, command))
        print_viewer(app)


async def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from config.json"""
    config_path = config_path or Path(__file__).parent / "config.json"
    with open(config_path, "r", encoding="utf-8") as f:
        config = json.load(f)

    # Validate required fields
    if "store" not in config:
        raise ValueError("Missing required field 'store' in config.json")

    if config["store"].get("type") == "snapshot" and "path" not in config["store"]:
        raise ValueError("Missing required field 'path' for snapshot store")

    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CRE leasing vacancy search")
    parser.add_argument("--config", type=Path, help="Path to config.json")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Search vacancies")
    search_parser.add_argument("--building", dest="building_name", default="")
    search_parser.add_argument("--district", default="")
    search_parser.add_argument("--station", default="")
    search_parser.add_argument("--area-from", type=float, default=0)
    search_parser.add_argument("--area-to", type=float, default=0)
    search_parser.add_argument("--source", default="")
    search_parser.add_argument("--all", action="store_true", help="Show the whole dataset")
    search_parser.add_argument("--page", type=int, default=1)
    search_parser.add_argument("--page-size", type=int)
    search_parser.add_argument("--select", nargs="+", default=[], help="Record ids or 'all'")
    search_parser.add_argument("--export", action="store_true", help="Export selection to markdown")
    search_parser.add_argument("--map", action="store_true", help="Print map markers for selection")

    suggest_parser = subparsers.add_parser("suggest", help="Autocomplete a field")
    suggest_parser.add_argument("field", choices=["building", "district", "station"])
    suggest_parser.add_argument("query")

    view_parser = subparsers.add_parser("view", help="Open the image viewer on a record")
    view_parser.add_argument("record_id")
    view_parser.add_argument("--building", dest="building_name", default="",
                             help="Result scope for publisher navigation")

    subparsers.add_parser("latest", help="Show the latest publish month")
    subparsers.add_parser("sources", help="List publishers")
    return parser


async def run_command(app: LeasingSearchApp, args: argparse.Namespace) -> None:
    if args.command == "latest":
        print(f"{LABELS['latest']}: {app.last_update}")

    elif args.command == "sources":
        for source in await app.service.get_source_list():
            print(source)

    elif args.command == "suggest":
        results: List[Any] = []
        task = app.autocomplete(args.field, args.query, results.extend)
        if task:
            await task
        for item in results:
            print(getattr(item, "name", item))

    elif args.command == "view":
        record = await app.service.find_record(args.record_id)
        name = args.building_name or (record.building_name if record else "")
        if name:
            await app.perform_search(SearchOptions(building_name=name))
        await run_viewer(app, args.record_id)

    elif args.command == "search":
        if args.page_size:
            app.set_page_size(args.page_size)
        if args.all:
            await app.load_all()
        else:
            await app.perform_search(SearchOptions.from_dict(vars(args)))
        if app.last_notice and not app.current_results:
            print(app.last_notice)
            return
        app.go_to_page(args.page)
        print_results(app)

        ids = [r.id for r in app.current_results] if args.select == ["all"] else args.select
        for record_id in ids:
            app.toggle_selection(record_id, True)
        if args.map:
            request = app.show_selected_on_map()
            if request:
                print(json.dumps(request.to_dict(), ensure_ascii=False, indent=2))
        if args.export:
            path = app.export_selection()
            if path:
                print(f"Exported: {path}")


async def main():
    """Main entry point for the leasing search CLI."""
    args = build_parser().parse_args()
    try:
        config = await load_config(args.config)
        app = LeasingSearchApp(config)
        if not await app.initialize():
            print(app.last_notice)
            return
        await run_command(app, args)

    except FileNotFoundError:
        logger.error("config.json not found")
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")


def cli():
    asyncio.run(main())


if __name__ == "__main__":
    cli()
