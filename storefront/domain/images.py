from typing import Callable, Optional

from storefront.core.config import settings

ImageResolver = Callable[[Optional[str]], Optional[str]]


class StorageImageResolver:
    """Maps a stored relative image path to its public URL."""

    def __init__(self, base_url: str = None, bucket: str = None):
        self.base_url = (settings.STORAGE_URL if base_url is None else base_url).rstrip("/")
        self.bucket = settings.STORAGE_BUCKET if bucket is None else bucket

    def __call__(self, path: Optional[str]) -> Optional[str]:
        if not path or not path.strip():
            return None
        path = path.strip()
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{path.lstrip('/')}"
