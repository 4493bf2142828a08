"""Media store port (abstract interface) for product images."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class MediaAsset:
    """A stored file, addressed by the store's public id."""

    public_id: str
    url: str

    def to_dict(self) -> dict:
        return {"public_id": self.public_id, "url": self.url}


class MediaStore(ABC):
    """Abstract media store interface."""

    @abstractmethod
    def upload(self, payload: str, folder: str) -> MediaAsset:
        """Store ``payload`` (a data URI or remote URL) under ``folder``."""
        ...

    @abstractmethod
    def destroy(self, public_id: str) -> None:
        """Delete a stored file. Unknown ids are ignored."""
        ...
