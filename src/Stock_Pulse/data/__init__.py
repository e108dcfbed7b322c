"""Persistence for the dashboard's search history and favorites.

Re-exports the store types:
    from Stock_Pulse.data import InMemoryStore, JsonFileStore, KeyValueStore
"""

from Stock_Pulse.data.store import InMemoryStore, JsonFileStore, KeyValueStore

__all__ = ["InMemoryStore", "JsonFileStore", "KeyValueStore"]
