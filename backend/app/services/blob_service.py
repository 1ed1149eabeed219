"""
Glee Threads Backend — Blob Storage Service
=============================================

What:  Stores uploaded design/product images and deletes them again.
Why:   Product photos and customer artwork must be reachable by URL from the
       storefront; the API server's own disk is not durable on serverless hosts.
How:   Two backends, picked by STORAGE_BACKEND:

       vercel  PUT  {BLOB_API_URL}/{pathname}   (Bearer BLOB_READ_WRITE_TOKEN)
               POST {BLOB_API_URL}/delete       {"urls": [...]}
               via one shared httpx.AsyncClient
       local   writes under STORAGE_ROOT with aiofiles; files are served
               back by GET /api/files/{path}

Pathnames:
    images/<sanitized-name>-<random suffix>.<ext>
    The random suffix keeps two uploads of "design.png" from overwriting
    each other (Vercel adds it server-side via x-add-random-suffix).
"""

import logging
import re
import time
import uuid
from pathlib import Path
from typing import Iterable, List, Optional

import aiofiles
import aiofiles.os
import httpx

from app.config import settings
from app.constants import BLOB_HOST_MARKER
from app.exceptions import BlobStorageError, StorefrontError, ValidationError
from app.schemas.store import UploadResponse

logger = logging.getLogger(__name__)

LOCAL_URL_PREFIX = "/api/files/"
UPLOAD_FOLDER = "images"


def safe_filename(filename: Optional[str]) -> str:
    """Strip directories and anything outside [A-Za-z0-9._-]; default to upload-<ms>.png."""
    name = Path(filename or "").name
    name = re.sub(r"[^A-Za-z0-9._-]+", "-", name).strip(".-")
    if not name:
        name = f"upload-{int(time.time() * 1000)}.png"
    return name


def is_blob_url(url: Optional[str]) -> bool:
    return bool(url) and BLOB_HOST_MARKER in url


class BlobStorageService:

    def __init__(self, storage_root: Optional[str] = None):
        self.storage_root = Path(storage_root or settings.storage_root).resolve()
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        # Created lazily so importing the module never opens sockets.
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=settings.blob_timeout,
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            )
        return self._client

    async def close(self) -> None:
        """Shut down the shared client. Called from the app lifespan."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    # ── Upload ────────────────────────────────────────────────────────────

    async def upload(
        self,
        content: bytes,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> UploadResponse:
        """
        Validate and store one file.

        Raises:
            ValidationError:  empty body or file over MAX_UPLOAD_SIZE
            StorefrontError:  vercel backend selected without a token (500)
            BlobStorageError: the backend rejected or failed the write
        """
        if not content:
            raise ValidationError("File body missing", field="file")
        if len(content) > settings.max_upload_size:
            max_mb = settings.max_upload_size / (1024 * 1024)
            raise ValidationError(
                f"File exceeds maximum upload size of {max_mb:.1f}MB",
                field="file",
                context={"size": len(content), "max": settings.max_upload_size},
            )

        pathname = f"{UPLOAD_FOLDER}/{safe_filename(filename)}"
        content_type = content_type or "application/octet-stream"

        if settings.storage_backend == "local":
            return await self._put_local(pathname, content, content_type)

        if not settings.blob_read_write_token:
            logger.error("Upload rejected: BLOB_READ_WRITE_TOKEN is not configured")
            raise StorefrontError("Server configuration error: Missing Blob Token")
        return await self._put_vercel(pathname, content, content_type)

    async def _put_vercel(self, pathname: str, content: bytes, content_type: str) -> UploadResponse:
        url = f"{settings.blob_api_url.rstrip('/')}/{pathname}"
        headers = {
            **self._auth_headers(),
            "x-add-random-suffix": "1",
            "x-content-type": content_type,
        }
        try:
            response = await self.client.put(url, content=content, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Blob upload rejected: status=%d body=%s",
                e.response.status_code,
                e.response.text[:300],
            )
            raise BlobStorageError(details=f"Blob storage returned {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Blob upload failed: %s", str(e))
            raise BlobStorageError(details=str(e) or type(e).__name__) from e

        logger.info("Uploaded %s (%d bytes) to blob storage", payload.get("pathname", pathname), len(content))
        return UploadResponse.model_validate(payload)

    async def _put_local(self, pathname: str, content: bytes, content_type: str) -> UploadResponse:
        stem, dot, ext = pathname.rpartition(".")
        if not dot:
            stem, ext = pathname, ""
        suffixed = f"{stem}-{uuid.uuid4().hex[:12]}{dot}{ext}"
        absolute_path = self.storage_root / suffixed

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store file at %s: %s", absolute_path, str(e))
            raise BlobStorageError(details="Could not write file to local storage") from e

        logger.info("File stored locally: %s (%d bytes)", suffixed, len(content))
        url = f"{LOCAL_URL_PREFIX}{suffixed}"
        return UploadResponse(
            url=url,
            downloadUrl=f"{url}?download=1",
            pathname=suffixed,
            contentType=content_type,
            contentDisposition=f'inline; filename="{Path(suffixed).name}"',
        )

    # ── Delete ────────────────────────────────────────────────────────────

    async def delete(self, urls: Iterable[Optional[str]]) -> List[str]:
        """
        Delete stored files by URL. Returns the URLs that were submitted for deletion.

        URLs that belong to neither backend (e.g. external image links pasted
        by an admin) are skipped.
        """
        urls = [u for u in urls if u]
        blob_urls = [u for u in urls if is_blob_url(u)]
        local_urls = [u for u in urls if u.startswith(LOCAL_URL_PREFIX)]

        for url in local_urls:
            await self._delete_local(url)

        if blob_urls:
            if not settings.blob_read_write_token:
                raise BlobStorageError("Blob delete failed", details="Missing Blob Token")
            endpoint = f"{settings.blob_api_url.rstrip('/')}/delete"
            try:
                response = await self.client.post(
                    endpoint, json={"urls": blob_urls}, headers=self._auth_headers()
                )
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.error("Blob delete failed for %d url(s): %s", len(blob_urls), str(e))
                raise BlobStorageError("Blob delete failed", details=str(e)) from e
            logger.info("Deleted %d blob(s)", len(blob_urls))

        return blob_urls + local_urls

    async def _delete_local(self, url: str) -> None:
        path = self.resolve_local(url[len(LOCAL_URL_PREFIX):])
        if path is None or not path.exists():
            logger.debug("Local delete: file already gone: %s", url)
            return
        try:
            await aiofiles.os.remove(path)
        except OSError as e:
            raise BlobStorageError("Blob delete failed", details=str(e)) from e
        logger.info("Deleted local file: %s", path.name)

    def resolve_local(self, relative_path: str) -> Optional[Path]:
        """Absolute path inside STORAGE_ROOT, or None if the path escapes it."""
        full_path = (self.storage_root / relative_path).resolve()
        if not full_path.is_relative_to(self.storage_root):
            return None
        return full_path

    def _auth_headers(self) -> dict:
        return {
            "authorization": f"Bearer {settings.blob_read_write_token}",
            "x-api-version": settings.blob_api_version,
        }


blob_service = BlobStorageService()
