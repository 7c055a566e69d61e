"""Signed URL resolution for stored product images."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from cafe_receipt.config import API_BASE_URL, SIGNED_URL_PATH, SIGNED_URL_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageSource:
    """Where to load an image from; ``url`` is None when a placeholder is shown."""

    url: str | None

    @property
    def is_placeholder(self) -> bool:
        return not self.url


def _fallback(fallback_url: str | None) -> ImageSource:
    return ImageSource(url=fallback_url or None)


async def fetch_signed_url(client: httpx.AsyncClient, file_path: str, token: str | None) -> str | None:
    response = await client.post(
        SIGNED_URL_PATH,
        json={"filePath": file_path},
        headers={"Authorization": f"Bearer {token or ''}"},
    )
    if not response.is_success:
        logger.warning("Signed URL request for %s failed: HTTP %s", file_path, response.status_code)
        return None
    data = response.json()
    if not isinstance(data, dict):
        return None
    signed_url = data.get("signedUrl")
    return str(signed_url) if signed_url else None


async def resolve_image_url(
    file_path: str | None,
    fallback_url: str | None = None,
    *,
    token: str | None,
    base_url: str = API_BASE_URL,
    client: httpx.AsyncClient | None = None,
) -> ImageSource:
    """Resolve a stored file into a short-lived URL, else the fallback, else a placeholder."""
    if not file_path:
        return _fallback(fallback_url)

    try:
        if client is not None:
            signed_url = await fetch_signed_url(client, file_path, token)
        else:
            async with httpx.AsyncClient(base_url=base_url, timeout=SIGNED_URL_TIMEOUT_SECONDS) as own_client:
                signed_url = await fetch_signed_url(own_client, file_path, token)
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Signed URL request for %s failed: %s", file_path, exc)
        signed_url = None

    if signed_url:
        return ImageSource(url=signed_url)
    return _fallback(fallback_url)
