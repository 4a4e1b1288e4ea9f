"""
Remote — the inventory/sales backend.

    from lonja import remote as R

    store = R.HttpStore.from_settings(get_settings())
    products = await store.list_active_products()
"""

from __future__ import annotations

from lonja.remote._types import RemoteError, RemoteErrorKind
from lonja.remote._protocol import RemoteStore
from lonja.remote._http import HttpStore
from lonja.remote._memory import MemoryStore

__all__ = (
    "RemoteError",
    "RemoteErrorKind",
    "RemoteStore",
    "HttpStore",
    "MemoryStore",
)
