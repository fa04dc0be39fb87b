"""
View-model for the idiom browser.

Holds the state the editor screens render (grouped idioms, category lists,
current idiom, search suggestions, busy flag, notifications) and exposes
the actions that change it. All server calls go through IdiomApiClient.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from app.client.api_client import ClientTimeoutError, IdiomApiClient, IdiomApiError
from app.client.browse import BrowseCursor, Grouping, browse_order, group_idioms
from app.client.type_codes import generate_type_code
from app.core.exceptions import IdiomEditorException
from app.schemas.category import MajorTypeRead, MinorTypeRead
from app.schemas.idiom import IdiomPayload, IdiomRead, ImageInfo

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


@dataclass
class Notification:
    level: str
    message: str
    created_at: datetime = field(default_factory=datetime.utcnow)


class IdiomBrowserStore:
    """State and actions behind the idiom browse/edit screens"""

    def __init__(self, api: IdiomApiClient, resort: bool = True):
        self.api = api
        self.resort = resort

        self.idioms: List[IdiomRead] = []
        self.grouping: Grouping = {}
        self.major_types: List[MajorTypeRead] = []
        self.minor_types: List[MinorTypeRead] = []
        self.current: Optional[IdiomRead] = None
        self.search_term = ""
        self.suggestions: List[IdiomRead] = []
        self.busy = False
        self.notifications: List[Notification] = []

        self._cursor = BrowseCursor({})

    # Notifications

    def notify(self, level: str, message: str) -> None:
        log = logger.error if level == "error" else logger.info
        log(message)
        self.notifications.append(Notification(level=level, message=message))

    def drain_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    # Loading

    def _regroup(self) -> None:
        self.grouping = group_idioms(self.idioms, resort=self.resort)
        self._cursor = BrowseCursor(self.grouping)

    @property
    def ordered_idioms(self) -> List[IdiomRead]:
        return browse_order(self.grouping)

    async def load(self) -> bool:
        """Fetch idioms and both category lists; select the first idiom."""
        results = await asyncio.gather(
            self.api.get_idioms(),
            self.api.fetch_all_major_types(),
            self.api.fetch_all_minor_types(),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, IdiomApiError):
                self.notify("error", f"加载失败: {result.message}")
                return False
            if isinstance(result, BaseException):
                raise result

        idioms, majors, minors = results
        self.idioms = idioms
        self.major_types = majors
        self.minor_types = minors
        self._regroup()
        self.current = self._cursor.first()
        return True

    async def refresh(self) -> bool:
        """Reload everything and keep the current idiom selected when it still exists."""
        current_name = self.current.idiom if self.current else None
        if not await self.load():
            return False
        if current_name:
            found = self.find(current_name)
            if found:
                self.current = found
        return True

    # Selection

    def find(self, name: str) -> Optional[IdiomRead]:
        for item in self.idioms:
            if item.idiom == name:
                return item
        return None

    def search(self, term: str) -> List[IdiomRead]:
        self.search_term = term
        needle = term.strip().lower()
        if not needle:
            self.suggestions = []
        else:
            self.suggestions = [item for item in self.ordered_idioms if needle in item.idiom.lower()]
        return self.suggestions

    def select(self, name: str) -> Optional[IdiomRead]:
        found = self.find(name)
        if found is None:
            self.notify("error", f"未找到成语: {name}")
            return None
        self.current = found
        self.search_term = ""
        self.suggestions = []
        return found

    def next(self) -> Optional[IdiomRead]:
        self.current = self._cursor.next(self.current)
        return self.current

    def previous(self) -> Optional[IdiomRead]:
        self.current = self._cursor.previous(self.current)
        return self.current

    def start_new_idiom(self, name: str) -> Optional[IdiomRead]:
        """Begin editing an idiom that is not persisted until save()."""
        name = (name or "").strip()
        if not name:
            self.notify("error", "请输入成语")
            return None
        existing = self.find(name)
        if existing:
            self.current = existing
            return existing
        self.current = IdiomRead(idiom=name, description="")
        return self.current

    # Saving

    async def _call(self, action, failure: str) -> Any:
        """Run an API call with the busy flag set; failures become notifications."""
        self.busy = True
        try:
            return await action
        except ClientTimeoutError:
            self.notify("error", "操作超时，请重试")
        except IdiomApiError as e:
            self.notify("error", f"{failure}: {e.message}")
        finally:
            self.busy = False
        return None

    def _merge(self, idiom: IdiomRead) -> None:
        for i, item in enumerate(self.idioms):
            if item.idiom == idiom.idiom:
                self.idioms[i] = idiom
                break
        else:
            self.idioms.append(idiom)
        self._regroup()

    async def save(self, idiom: Optional[IdiomRead] = None) -> bool:
        """Upsert an idiom (default: the current one) and merge it locally."""
        idiom = idiom or self.current
        if idiom is None:
            self.notify("error", "没有可保存的成语")
            return False

        result = await self._call(self.api.update_idiom(idiom), "保存失败")
        if result is None:
            return False

        self._merge(idiom)
        self.current = idiom
        self.notify("success", result.message or "保存成功")
        return True

    # Categories

    def minor_types_for(self, major_code: Optional[str]) -> List[MinorTypeRead]:
        if not major_code:
            return []
        return [m for m in self.minor_types if m.major_type_code == major_code]

    def set_category(self, major_code: Optional[str], minor_code: Optional[str] = None) -> Optional[IdiomRead]:
        """
        Change the current idiom's category locally; save() persists it.

        Changing the major clears the minor unless a minor of the new major is
        given. A minor without a major is rejected.
        """
        if self.current is None:
            return None

        major_code = major_code or None
        minor_code = minor_code or None

        if minor_code and not major_code:
            self.notify("error", "请先选择大类")
            return None

        if minor_code and minor_code not in {m.type_code for m in self.minor_types_for(major_code)}:
            self.notify("error", f"小类 {minor_code} 不属于大类 {major_code}")
            return None

        if minor_code is None and major_code == self.current.major_type_code:
            minor_code = self.current.minor_type_code

        self.current = self.current.model_copy(
            update={"major_type_code": major_code, "minor_type_code": minor_code}
        )
        return self.current

    async def add_major_category(self, name: str, description: Optional[str] = None) -> Optional[MajorTypeRead]:
        try:
            code = generate_type_code(name, (m.type_code for m in self.major_types))
        except IdiomEditorException as e:
            self.notify("error", e.message)
            return None

        result = await self._call(
            self.api.create_major_type(code, name.strip(), description), "创建大类失败"
        )
        if result is None:
            return None

        created = MajorTypeRead(type_code=code, type_name=name.strip(), description=description)
        self.major_types.append(created)
        self.notify("success", f"大类已创建: {created.type_name}")
        return created

    async def add_minor_category(
        self, major_code: str, name: str, description: Optional[str] = None
    ) -> Optional[MinorTypeRead]:
        if not any(m.type_code == major_code for m in self.major_types):
            self.notify("error", "请先选择大类")
            return None
        try:
            code = generate_type_code(name, (m.type_code for m in self.minor_types), minor=True)
        except IdiomEditorException as e:
            self.notify("error", e.message)
            return None

        result = await self._call(
            self.api.create_minor_type(code, major_code, name.strip(), description), "创建小类失败"
        )
        if result is None:
            return None

        created = MinorTypeRead(
            type_code=code, major_type_code=major_code, type_name=name.strip(), description=description
        )
        self.minor_types.append(created)
        self.notify("success", f"小类已创建: {created.type_name}")
        return created

    async def rename_category(
        self, kind: str, type_code: str, name: str, description: Optional[str] = None
    ) -> bool:
        """Rename a major ("major") or minor ("minor") type; codes never change."""
        name = (name or "").strip()
        if not name:
            self.notify("error", "类别名称不能为空")
            return False

        if kind == "major":
            items: List[Any] = self.major_types
            call = self.api.update_major_type(type_code, name, description)
        elif kind == "minor":
            items = self.minor_types
            call = self.api.update_minor_type(type_code, name, description)
        else:
            raise ValueError(f"Unknown category kind: {kind}")

        if await self._call(call, "更新类别失败") is None:
            return False

        changes: Dict[str, Any] = {"type_name": name}
        if description is not None:
            changes["description"] = description
        for i, item in enumerate(items):
            if item.type_code == type_code:
                items[i] = item.model_copy(update=changes)
        self.notify("success", f"类别已更新: {name}")
        return True

    # Images

    async def add_images(
        self, files: Iterable[tuple], on_progress: Optional[ProgressCallback] = None
    ) -> bool:
        """Upload (filename, bytes) pairs to the image host and save them on the current idiom."""
        if self.current is None:
            return False
        uploaded: List[ImageInfo] = []
        for filename, content in files:
            image = await self._call(
                self.api.upload_image_to_imgbb(content, filename, on_progress=on_progress), "上传失败"
            )
            if image is None:
                return False
            uploaded.append(image)

        self.current = self.current.model_copy(
            update={"exam_images": list(self.current.exam_images) + uploaded}
        )
        return await self.save()

    async def remove_image(self, index: int) -> bool:
        if self.current is None or not 0 <= index < len(self.current.exam_images):
            return False
        images = list(self.current.exam_images)
        removed = images.pop(index)
        if removed.delete_url:
            await self.api.delete_remote_image(removed.delete_url)
        self.current = self.current.model_copy(update={"exam_images": images})
        return await self.save()

    # Bulk import

    async def import_idioms(
        self, items: Iterable[Dict[str, Any]], on_progress: Optional[ProgressCallback] = None
    ) -> int:
        """
        Upsert {idiom, description, examples} records one call at a time.

        Stops at the first failure and returns how many were imported.
        Reloads the store afterwards so the new rows appear in browse order.
        """
        records = list(items)
        total = len(records)
        imported = 0
        for record in records:
            name = (record.get("idiom") or "").strip()
            if not name:
                self.notify("error", f"第 {imported + 1} 条记录缺少成语")
                break
            payload = IdiomPayload(
                idiom=name,
                description=record.get("description") or "",
                examples=record.get("examples") or [],
            )
            if await self._call(self.api.update_idiom(payload), f"导入失败 ({name})") is None:
                break
            imported += 1
            if on_progress:
                on_progress(imported / total * 100)

        if imported:
            self.notify("success", f"已导入 {imported}/{total} 条成语")
            await self.refresh()
        return imported
