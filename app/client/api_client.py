"""
HTTP client for the idiom editor API.

Wraps every endpoint the editor uses and the direct imgbb upload the
browser client performs, returning the same pydantic schemas the server
serves.
"""

import asyncio
import base64
import logging
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Union
from urllib.parse import urlencode

import httpx

from app.config.settings import ClientSettings, ImgbbSettings, get_settings
from app.schemas.category import MajorTypeRead, MinorTypeRead, TypeMutationResult
from app.schemas.idiom import IdiomPayload, IdiomRead, ImageInfo, UpsertResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]

UPLOAD_CHUNK_SIZE = 64 * 1024


class IdiomApiError(Exception):
    """A request failed or the API answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class ClientTimeoutError(IdiomApiError):
    """The request did not complete within the configured timeout."""


class IdiomApiClient:
    """Async client for the idiom editor API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        client_settings: Optional[ClientSettings] = None,
        imgbb_settings: Optional[ImgbbSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.settings = client_settings or settings.client
        self.imgbb = imgbb_settings or settings.imgbb
        self.base_url = (base_url or self.settings.base_url).rstrip("/")
        self.update_timeout = self.settings.update_timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.settings.request_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "IdiomApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        error_message: str,
        deadline: Optional[float] = None,
        **kwargs,
    ) -> httpx.Response:
        """Send a request; `deadline` bounds the whole call, not just each I/O phase."""
        try:
            if deadline is not None:
                response = await asyncio.wait_for(self._client.request(method, url, **kwargs), deadline)
            else:
                response = await self._client.request(method, url, **kwargs)
        except asyncio.TimeoutError as e:
            logger.warning(f"{method} {url} exceeded {deadline}s")
            raise ClientTimeoutError("操作超时，请重试") from e
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {url} timed out")
            raise ClientTimeoutError(f"{error_message}: request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise IdiomApiError(error_message) from e

        if response.is_error:
            details = {}
            try:
                body = response.json()
                if isinstance(body, dict):
                    details = body
            except ValueError:
                pass
            message = details.get("message") or details.get("error") or error_message
            raise IdiomApiError(message, status_code=response.status_code, details=details)
        return response

    # Idioms

    async def get_idioms(self) -> List[IdiomRead]:
        response = await self._request("GET", "/idioms", "获取成语失败")
        return [IdiomRead.model_validate(item) for item in response.json()]

    async def get_idiom(self, name: str) -> Optional[IdiomRead]:
        """Fetch one idiom; None when the API answers 404."""
        try:
            response = await self._request("GET", "/idiom", "获取成语失败", params={"idiom": name})
        except IdiomApiError as e:
            if e.status_code == 404:
                return None
            raise
        return IdiomRead.model_validate(response.json())

    async def update_idiom(self, idiom: Union[IdiomPayload, IdiomRead]) -> UpsertResult:
        payload = idiom.to_payload() if isinstance(idiom, IdiomRead) else idiom
        response = await self._request(
            "POST",
            "/update-idiom",
            "更新成语失败",
            json=payload.model_dump(by_alias=True, mode="json"),
            deadline=self.update_timeout,
        )
        return UpsertResult.model_validate(response.json())

    # Images

    async def upload_image(self, content: bytes, filename: str, idiom: Optional[str] = None) -> ImageInfo:
        """Upload through the API's /upload-image endpoint."""
        data = {"idiom": idiom} if idiom else None
        response = await self._request(
            "POST",
            "/upload-image",
            "上传图片失败",
            files={"image": (filename, content)},
            data=data,
        )
        return ImageInfo.model_validate(response.json())

    async def upload_image_to_imgbb(
        self,
        content: bytes,
        filename: str = "image",
        on_progress: Optional[ProgressCallback] = None,
        api_key: Optional[str] = None,
    ) -> ImageInfo:
        """
        Upload straight to imgbb, reporting progress as a percentage.

        Args:
            content: Raw image bytes
            filename: Used as the image name on imgbb
            on_progress: Called with 0-100 as the body is sent
            api_key: Overrides IMGBB_API_KEY

        Returns:
            ImageInfo with the hosted URL and delete link
        """
        key = api_key or self.imgbb.api_key
        if not key:
            raise IdiomApiError("上传失败: imgbb API key not configured")

        body = urlencode({
            "image": base64.b64encode(content).decode("ascii"),
            "name": filename.rsplit(".", 1)[0],
        }).encode("ascii")
        total = len(body)

        async def stream() -> AsyncIterator[bytes]:
            sent = 0
            for start in range(0, total, UPLOAD_CHUNK_SIZE):
                chunk = body[start:start + UPLOAD_CHUNK_SIZE]
                yield chunk
                sent += len(chunk)
                if on_progress:
                    on_progress(sent / total * 100)

        response = await self._request(
            "POST",
            self.imgbb.api_url,
            "上传失败",
            params={"key": key},
            content=stream(),
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Content-Length": str(total),
            },
            timeout=self.imgbb.timeout_seconds,
        )
        data = response.json().get("data") or {}
        if not data.get("url"):
            raise IdiomApiError("上传失败: image host returned no URL", status_code=response.status_code)
        return ImageInfo(url=data["url"], delete_url=data.get("delete_url"))

    async def delete_remote_image(self, delete_url: str) -> bool:
        """Best-effort removal from the image host; failures are logged, not raised."""
        try:
            response = await self._client.request("DELETE", delete_url)
        except httpx.HTTPError as e:
            logger.warning(f"删除图片失败: {delete_url}: {e}")
            return False
        if response.is_error:
            logger.warning(f"删除图片失败: {delete_url} returned {response.status_code}")
            return False
        return True

    # Categories

    async def fetch_all_major_types(self) -> List[MajorTypeRead]:
        response = await self._request(
            "GET", "/idiom_major_types", "获取大类失败", params={"type_code": "all"}
        )
        return [MajorTypeRead.model_validate(item) for item in response.json()]

    async def fetch_all_minor_types(self) -> List[MinorTypeRead]:
        response = await self._request(
            "GET", "/idiom_minor_types", "获取小类失败", params={"type_code": "all"}
        )
        return [MinorTypeRead.model_validate(item) for item in response.json()]

    async def fetch_major_type_info(self, type_code: str) -> Optional[MajorTypeRead]:
        response = await self._request(
            "GET", "/idiom_major_types", "获取大类失败", params={"type_code": type_code}
        )
        rows = response.json()
        return MajorTypeRead.model_validate(rows[0]) if rows else None

    async def fetch_minor_type_info(self, type_code: str) -> Optional[MinorTypeRead]:
        response = await self._request(
            "GET", "/idiom_minor_types", "获取小类失败", params={"type_code": type_code}
        )
        rows = response.json()
        return MinorTypeRead.model_validate(rows[0]) if rows else None

    async def create_major_type(
        self, type_code: str, type_name: str, description: Optional[str] = None
    ) -> TypeMutationResult:
        response = await self._request(
            "POST",
            "/major-types",
            "创建大类失败",
            json={"type_code": type_code, "type_name": type_name, "description": description},
            deadline=self.update_timeout,
        )
        return TypeMutationResult.model_validate(response.json())

    async def update_major_type(
        self, type_code: str, type_name: str, description: Optional[str] = None
    ) -> TypeMutationResult:
        body = {"type_name": type_name}
        if description is not None:
            body["description"] = description
        response = await self._request(
            "PUT", f"/major-types/{type_code}", "更新大类失败", json=body, deadline=self.update_timeout
        )
        return TypeMutationResult.model_validate(response.json())

    async def create_minor_type(
        self,
        type_code: str,
        major_type_code: str,
        type_name: str,
        description: Optional[str] = None,
    ) -> TypeMutationResult:
        response = await self._request(
            "POST",
            "/minor-types",
            "创建小类失败",
            json={
                "type_code": type_code,
                "major_type_code": major_type_code,
                "type_name": type_name,
                "description": description,
            },
            deadline=self.update_timeout,
        )
        return TypeMutationResult.model_validate(response.json())

    async def update_minor_type(
        self, type_code: str, type_name: str, description: Optional[str] = None
    ) -> TypeMutationResult:
        body = {"type_name": type_name}
        if description is not None:
            body["description"] = description
        response = await self._request(
            "PUT", f"/minor-types/{type_code}", "更新小类失败", json=body, deadline=self.update_timeout
        )
        return TypeMutationResult.model_validate(response.json())
