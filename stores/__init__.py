"""Data store factory and exports."""

import logging
from typing import Any, Dict

from stores.base import DataFetchError, DataStore

logger = logging.getLogger(__name__)


def get_store(config: Dict[str, Any]) -> DataStore:
    """
    Factory function to get the configured data store.

    Args:
        config: Configuration dictionary from config.json

    Returns:
        Store instance (FirebaseStore or SnapshotStore)

    Raises:
        ValueError: If the store type is not supported

    Example:
        >>> config = {"store": {"type": "snapshot", "path": "data.json"}}
        >>> store = get_store(config)
        >>> print(store.get_store_name())
        "snapshot"
    """
    store_config = config.get("store", {})
    store_type = store_config.get("type", "firebase").lower()

    if store_type == "firebase":
        from stores.firebase.adapter import FirebaseStore

        logger.info("Initializing Firebase store")
        return FirebaseStore(store_config)

    elif store_type == "snapshot":
        from stores.snapshot.adapter import SnapshotStore

        logger.info("Initializing snapshot store")
        return SnapshotStore(store_config)

    else:
        raise ValueError(
            f"Unsupported store: {store_type}. "
            f"Supported stores: 'firebase', 'snapshot'"
        )


__all__ = ["get_store", "DataStore", "DataFetchError"]
