"""Abstract base class for leasing data stores."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class DataFetchError(Exception):
    """Raised when a raw collection cannot be fetched from the store."""


class DataStore(ABC):
    """
    Abstract base class for the key-value store holding the leasing dataset.

    Each backend returns two whole snapshots: ``buildings`` keyed by building
    id, and ``vacancies`` keyed by building id then vacancy key. The store
    does not validate entries; malformed data is filtered when merging.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize store with configuration.

        Args:
            config: The "store" section of config.json
        """
        self.config = config

    @abstractmethod
    def get_store_name(self) -> str:
        """
        Return store identifier.

        Returns:
            Store name (e.g., "firebase", "snapshot")
        """
        pass

    @abstractmethod
    async def fetch_buildings(self) -> Dict[str, Any]:
        """
        Fetch the raw building mapping.

        Returns:
            Mapping of building id -> building facts ({} if the store is empty)

        Raises:
            DataFetchError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def fetch_vacancies(self) -> Dict[str, Any]:
        """
        Fetch the raw vacancy mapping.

        Returns:
            Mapping of building id -> vacancy key -> vacancy facts

        Raises:
            DataFetchError: If the store cannot be read
        """
        pass
