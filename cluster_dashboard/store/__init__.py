"""
The store module provides the state and actions shared by every feature of the
dashboard for managing a remote collection of entities.

- `Store` is the read capability: state, fetch, reset and listeners.
- `Creatable`, `Updatable` and `Removable` are write capabilities composed per
  feature, so a read-only store simply has no `create` method.
- `RemoteStore` implements the contract against a `Transport`.
"""

from .state import Phase, StoreState
from .store import Creatable, Listener, Removable, Store, Updatable
from .remote import CreateAction, RemoteStore, RemoveAction, UpdateAction

__all__ = [
    "Phase",
    "StoreState",
    "Store",
    "Listener",
    "Creatable",
    "Updatable",
    "Removable",
    "RemoteStore",
    "CreateAction",
    "UpdateAction",
    "RemoveAction",
]
