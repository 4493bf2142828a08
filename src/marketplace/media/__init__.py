"""Media store factory.

``MEDIA_ADAPTER`` selects the store on first use; tests swap it with
``set_media_store`` / ``reset_media_store``.
"""

import os

from marketplace.media.port import MediaStore

_current_store: MediaStore | None = None


def get_media_store() -> MediaStore:
    global _current_store
    if _current_store is None:
        adapter = os.getenv("MEDIA_ADAPTER", "fake")
        if adapter != "fake":
            raise ValueError(f"Unknown media adapter: {adapter}")

        from marketplace.media.fake_adapter import FakeMediaStore

        _current_store = FakeMediaStore()
    return _current_store


def set_media_store(store: MediaStore) -> None:
    global _current_store
    _current_store = store


def reset_media_store() -> None:
    global _current_store
    _current_store = None
