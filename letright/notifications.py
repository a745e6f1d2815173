"""
Notification queue: transient toasts the host renders.

An instance is injected wherever feedback is needed instead of sharing a
process-wide store.
"""
import asyncio
import itertools
import logging
from typing import Dict, List, Optional

from .types import Toast
from .config import Cfg

logger = logging.getLogger(__name__)

TOAST_KINDS = ("success", "error", "info", "match", "shortlist", "pass")


class NotificationQueue:
    """
    Holds active toasts and expires each one after its duration.

    Expiry is scheduled on the running event loop; toasts pushed with no
    loop running stay until dismissed.
    """

    def __init__(self, cfg: Cfg):
        self.cfg = cfg
        self._toasts: Dict[str, Toast] = {}
        self._timers: Dict[str, asyncio.TimerHandle] = {}
        self._ids = itertools.count(1)

    @property
    def toasts(self) -> List[Toast]:
        """Active toasts, oldest first."""
        return list(self._toasts.values())

    def push(self, kind: str, message: str, title: Optional[str] = None,
             duration: Optional[float] = None) -> Toast:
        """Add a toast and schedule its removal."""
        if kind not in TOAST_KINDS:
            raise ValueError(f"Unknown toast kind {kind!r}")

        if duration is None:
            if kind == "match":
                duration = self.cfg.notifications.match_duration_s
            else:
                duration = self.cfg.notifications.default_duration_s

        toast = Toast(
            id=f"toast-{next(self._ids)}",
            kind=kind,
            message=message,
            title=title,
            duration=duration
        )
        self._toasts[toast.id] = toast

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            self._timers[toast.id] = loop.call_later(duration, self.dismiss, toast.id)

        logger.debug("Toast %s (%s): %s", toast.id, kind, message)
        return toast

    def success(self, message: str, duration: Optional[float] = None) -> Toast:
        return self.push("success", message, duration=duration)

    def error(self, message: str, title: Optional[str] = None,
              duration: Optional[float] = None) -> Toast:
        return self.push("error", message, title=title, duration=duration)

    def info(self, message: str, duration: Optional[float] = None) -> Toast:
        return self.push("info", message, duration=duration)

    def match(self, message: str, title: Optional[str] = None,
              duration: Optional[float] = None) -> Toast:
        return self.push("match", message, title=title, duration=duration)

    def dismiss(self, toast_id: str) -> bool:
        """Remove a toast. Returns False if it had already gone."""
        timer = self._timers.pop(toast_id, None)
        if timer is not None:
            timer.cancel()
        return self._toasts.pop(toast_id, None) is not None

    def clear(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._toasts.clear()
