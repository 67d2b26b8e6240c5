import time
from typing import Callable, Literal, Optional

from pydantic import BaseModel

SUCCESS_DISMISS_SECONDS = 5.0
ERROR_DISMISS_SECONDS = 8.0


class Notification(BaseModel):
    message: str
    type: Literal["success", "error"]
    expires_at: float


class NotificationCenter:
    """Holds at most one notification; a newer one replaces the old one."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._current: Optional[Notification] = None

    def success(self, message: str) -> Notification:
        return self._show(message, "success", SUCCESS_DISMISS_SECONDS)

    def error(self, message: str) -> Notification:
        return self._show(message, "error", ERROR_DISMISS_SECONDS)

    def _show(self, message: str, kind: str, delay: float) -> Notification:
        self._current = Notification(message=message, type=kind, expires_at=self.clock() + delay)
        return self._current

    def dismiss(self):
        self._current = None

    @property
    def current(self) -> Optional[Notification]:
        if self._current and self.clock() >= self._current.expires_at:
            self._current = None
        return self._current
