from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import NotificationType
from .model import Notice


class NoticeRepository(Protocol):
    def create(self, *, title: str, content: str, type: NotificationType) -> int:
        raise NotImplementedError

    def get_by_id(self, notice_id: int) -> Optional[Notice]:
        raise NotImplementedError

    def list_notices(self, *, active_only: bool = False) -> Sequence[Notice]:
        raise NotImplementedError

    def update(self, notice_id: int, *, title: str, content: str, type: NotificationType, active: bool) -> None:
        raise NotImplementedError

    def delete_by_id(self, notice_id: int) -> bool:
        raise NotImplementedError
