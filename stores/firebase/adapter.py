"""Firebase Realtime Database store (read-only REST access)."""

import logging
from typing import Any, Dict, Optional

import httpx

from stores.base import DataFetchError, DataStore

logger = logging.getLogger(__name__)


class FirebaseStore(DataStore):
    """
    Reads the ``buildings`` and ``vacancies`` nodes of a Firebase Realtime
    Database through its REST interface (``GET {database_url}/{node}.json``).
    """

    DEFAULT_DATABASE_URL = (
        "https://cre-unified-default-rtdb.asia-southeast1.firebasedatabase.app"
    )
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        config: Dict[str, Any],
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Firebase store.

        Args:
            config: Store config with optional "database_url", "timeout"
                and "auth" (database secret or ID token)
            transport: Custom httpx transport (used by tests)
        """
        super().__init__(config)
        self.database_url = config.get("database_url", self.DEFAULT_DATABASE_URL).rstrip("/")
        self.timeout = float(config.get("timeout", self.DEFAULT_TIMEOUT))
        self.auth = config.get("auth")
        self._transport = transport

    def get_store_name(self) -> str:
        return "firebase"

    async def fetch_buildings(self) -> Dict[str, Any]:
        return await self._fetch_node("buildings")

    async def fetch_vacancies(self) -> Dict[str, Any]:
        return await self._fetch_node("vacancies")

    async def _fetch_node(self, node: str) -> Dict[str, Any]:
        """
        Fetch one top-level node as a whole snapshot.

        Returns:
            The node's JSON object, or {} when the node is empty (null)

        Raises:
            DataFetchError: On transport errors, non-200 responses or a
                payload that is not a JSON object
        """
        url = f"{self.database_url}/{node}.json"
        params = {"auth": self.auth} if self.auth else None

        logger.info(f"Loading {node} from Firebase...")
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=10.0),
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            raise DataFetchError(f"Failed to fetch {node}: {e}") from e

        if response.status_code != 200:
            raise DataFetchError(
                f"Failed to fetch {node}: status={response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DataFetchError(f"Invalid JSON for {node}: {e}") from e

        if data is None:
            logger.warning(f"Firebase node '{node}' is empty")
            return {}
        if not isinstance(data, dict):
            raise DataFetchError(
                f"Unexpected payload for {node}: {type(data).__name__}"
            )

        logger.info(f"Loaded {len(data)} entries from {node}")
        return data
