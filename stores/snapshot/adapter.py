"""Local JSON snapshot store for offline use and fixtures."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from stores.base import DataFetchError, DataStore

logger = logging.getLogger(__name__)


class SnapshotStore(DataStore):
    """
    Reads both collections from one JSON file shaped like a database export:
    ``{"buildings": {...}, "vacancies": {...}}``.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize the snapshot store.

        Args:
            config: Store config with required "path"

        Raises:
            ValueError: If no path is configured
        """
        super().__init__(config)
        if not config.get("path"):
            raise ValueError("Missing required field 'path' for snapshot store")
        self.path = Path(config["path"])

    def get_store_name(self) -> str:
        return "snapshot"

    async def fetch_buildings(self) -> Dict[str, Any]:
        return self._load().get("buildings") or {}

    async def fetch_vacancies(self) -> Dict[str, Any]:
        return self._load().get("vacancies") or {}

    def _load(self) -> Dict[str, Any]:
        # Re-read on every call so an expired cache sees file updates
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise DataFetchError(f"Snapshot not found: {self.path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise DataFetchError(f"Cannot read snapshot {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise DataFetchError(f"Snapshot {self.path} is not a JSON object")

        logger.debug(f"Read snapshot {self.path}")
        return data
