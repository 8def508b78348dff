"""Client-held view of the task list.

Local state changes only after the server confirms a request. On failure the
view keeps (or restores) its previous state and the error goes to ``alert``.
"""
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from tasklist.client.api import ApiError, TaskApi
from tasklist.core.clock import Clock, SystemClock
from tasklist.core.errors import ValidationError
from tasklist.core.validation import check_deadline, parse_due_date

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    CLEAN = "clean"
    PENDING = "pending"


@dataclass
class TaskItem:
    id: int
    title: str
    status: bool
    due_date: Optional[date] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    position: Optional[int] = None
    state: SyncState = SyncState.CLEAN

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "TaskItem":
        return cls(
            id=int(row["id"]),
            title=row["title"],
            status=bool(row["status"]),
            due_date=parse_due_date(row.get("due_date")),
            category_id=row.get("category_id"),
            category_name=row.get("category_name"),
            position=row.get("position"),
        )

    @property
    def category_label(self) -> str:
        return self.category_name or ""


class TaskListView:
    def __init__(
        self,
        api: TaskApi,
        clock: Optional[Clock] = None,
        alert: Optional[Callable[[str], None]] = None,
    ):
        self.api = api
        self.clock = clock or SystemClock()
        self.alert = alert or (lambda message: logger.error("%s", message))
        self.items: List[TaskItem] = []

    def _find(self, task_id: int) -> TaskItem:
        for item in self.items:
            if item.id == task_id:
                return item
        raise KeyError(task_id)

    @property
    def ids(self) -> List[int]:
        return [item.id for item in self.items]

    @property
    def completed_count(self) -> int:
        return sum(1 for item in self.items if item.status)

    @property
    def uncompleted_count(self) -> int:
        return len(self.items) - self.completed_count

    def load(self) -> None:
        self.items = [TaskItem.from_row(row) for row in self.api.list_tasks()]

    def add(
        self,
        title: str,
        category_id: Optional[int] = None,
        due_date=None,
    ) -> Optional[TaskItem]:
        title = (title or "").strip()
        if not title:
            self.alert("Please write down a task")
            return None
        try:
            due = check_deadline(due_date, self.clock.today())
        except ValidationError as exc:
            self.alert(exc.message)
            return None

        try:
            row = self.api.create_task(title, category_id=category_id, due_date=due)
        except ApiError as exc:
            self.alert(exc.message or "Create failed")
            return None
        item = TaskItem.from_row(row)
        self.items.append(item)
        return item

    def toggle(self, task_id: int, checked: bool) -> bool:
        item = self._find(task_id)
        previous = item.status
        item.state = SyncState.PENDING
        try:
            row = self.api.update_task(task_id, status=checked)
        except ApiError as exc:
            item.status = previous
            self.alert(f"Update failed: {exc.message}")
            return False
        finally:
            item.state = SyncState.CLEAN
        item.status = bool(row["status"])
        return True

    def edit(self, task_id: int, title: str) -> bool:
        item = self._find(task_id)
        try:
            row = self.api.update_task(task_id, title=title)
        except ApiError as exc:
            self.alert(f"Edit failed: {exc.message}")
            return False
        item.title = row["title"]
        item.status = bool(row["status"])
        return True

    def delete(self, task_id: int, confirm: Optional[Callable[[TaskItem], bool]] = None) -> bool:
        item = self._find(task_id)
        if confirm is not None and not confirm(item):
            return False
        try:
            self.api.delete_task(task_id)
        except ApiError as exc:
            self.alert(f"Delete failed: {exc.message}")
            return False
        self.items.remove(item)
        return True

    def move(self, task_id: int, new_index: int) -> bool:
        """Apply a drag-and-drop move, persist the order, then reload.

        The reload happens whether or not the reorder succeeded; it is the
        only way positions and the due-date ordering get back in sync.
        """
        item = self._find(task_id)
        self.items.remove(item)
        self.items.insert(new_index, item)

        ok = True
        try:
            self.api.reorder(self.ids)
        except ApiError as exc:
            logger.warning("Reorder failed: %s", exc.message)
            self.alert(f"Reorder failed: {exc.message}")
            ok = False
        try:
            self.load()
        except ApiError as exc:
            self.alert(f"Reload failed: {exc.message}")
            return False
        return ok
