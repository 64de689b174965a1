import logging

import httpx

from app.exceptions.custom import RateLimitError, StorageError

logger = logging.getLogger(__name__)

STORAGE_PATH = "/storage/v1"


class StorageService:
    def __init__(self, client: httpx.AsyncClient, base_url: str, api_key: str, bucket: str):
        self._client = client
        self._storage_url = base_url.rstrip("/") + STORAGE_PATH
        self._bucket = bucket
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
        }

    def public_url(self, path: str) -> str:
        return f"{self._storage_url}/object/public/{self._bucket}/{path}"

    async def upload(self, path: str, content: bytes, content_type: str | None = None) -> str:
        """Upload an object and return its public URL."""
        headers = {
            **self._headers,
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "false",
        }
        resp = await self._client.post(
            f"{self._storage_url}/object/{self._bucket}/{path}",
            content=content,
            headers=headers,
        )

        if resp.status_code == 429:
            raise RateLimitError("Supabase Storage")
        if resp.status_code >= 400:
            raise StorageError(resp.text, status_code=resp.status_code)

        logger.info("Uploaded %s (%d bytes) to bucket %s", path, len(content), self._bucket)
        return self.public_url(path)
