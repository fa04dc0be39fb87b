"""
Image Upload Service - stores example images on imgbb.
"""

import base64
import logging
from typing import Optional

import httpx

from app.config.settings import ImgbbSettings, get_settings
from app.core.exceptions import ImageUploadError, RequestFieldError
from app.schemas.idiom import ImageInfo

logger = logging.getLogger(__name__)


class ImageUploadService:
    """Uploads images to imgbb; returns a stub URL when no API key is configured."""

    def __init__(
        self,
        imgbb_settings: Optional[ImgbbSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = imgbb_settings or get_settings().imgbb
        self.api_url = self.settings.api_url
        self.api_key = self.settings.api_key
        self.timeout = self.settings.timeout_seconds
        self._transport = transport

        if not self.api_key:
            logger.warning(
                "imgbb API key not configured; uploads return a placeholder URL. "
                "Set IMGBB_API_KEY in .env file."
            )

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def upload(self, content: bytes, filename: str = "image", idiom: Optional[str] = None) -> ImageInfo:
        """
        Upload one image.

        Args:
            content: Raw image bytes
            filename: Original file name, sent as the image name
            idiom: Idiom the image belongs to (logging only)

        Returns:
            ImageInfo with the hosted URL and its delete link
        """
        if not content:
            raise RequestFieldError("Image file is required", fields=["image"])

        if not self.enabled:
            logger.info(f"Stub upload for idiom '{idiom}'", extra={"idiom": idiom})
            return ImageInfo(url=self.settings.stub_url)

        data = {
            "image": base64.b64encode(content).decode("ascii"),
            "name": filename.rsplit(".", 1)[0],
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, params={"key": self.api_key}, data=data)
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout uploading image for '{idiom}'")
            raise ImageUploadError("Image upload timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Error uploading image to imgbb: {e}")
            raise ImageUploadError() from e

        if response.status_code != 200:
            logger.warning(f"imgbb returned {response.status_code} for '{idiom}'")
            raise ImageUploadError(details={"upstream_status": response.status_code})

        body = response.json().get("data") or {}
        url = body.get("url")
        if not url:
            raise ImageUploadError("Image host returned no URL")

        logger.info(f"Uploaded image for '{idiom}'", extra={"idiom": idiom, "url": url})
        return ImageInfo(url=url, delete_url=body.get("delete_url"))
