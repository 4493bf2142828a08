"""In-memory media store for development and testing."""

from uuid import uuid4

from marketplace.errors import UpstreamFailure
from marketplace.media.port import MediaAsset, MediaStore


class FakeMediaStore(MediaStore):
    """Keeps uploads in a dict; can be told to fail."""

    def __init__(self) -> None:
        self.assets: dict[str, str] = {}
        self.destroyed: list[str] = []
        self.should_succeed: bool = True
        self.failure_reason: str = "Media store unavailable"

    def configure(self, should_succeed: bool, failure_reason: str = "Media store unavailable") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def upload(self, payload: str, folder: str) -> MediaAsset:
        if not self.should_succeed:
            raise UpstreamFailure(self.failure_reason)

        public_id = f"{folder}/{uuid4().hex[:12]}"
        self.assets[public_id] = payload
        return MediaAsset(public_id=public_id, url=f"https://media.example.test/{public_id}")

    def destroy(self, public_id: str) -> None:
        if not self.should_succeed:
            raise UpstreamFailure(self.failure_reason)

        self.assets.pop(public_id, None)
        self.destroyed.append(public_id)
