"""Repository backends."""

from goalpilot.repositories.factory import Backend, create_backend
from goalpilot.repositories.memory import InMemoryStore, StoreSnapshot, load_store, save_store

__all__ = ["Backend", "InMemoryStore", "StoreSnapshot", "create_backend", "load_store", "save_store"]
