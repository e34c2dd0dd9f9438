import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"

# red swatch shown for the out-of-stock notice
OUT_OF_STOCK_STYLE = {
    "background": "#fee2e2",
    "border": "1px solid #fecaca",
    "color": "#dc2626",
}


@dataclass(frozen=True)
class Notification:
    message: str
    level: str = SUCCESS
    style: Optional[Dict[str, str]] = None


class Notifier:
    """Fire-and-forget notices for the shopper, newest last."""

    def __init__(self, maxlen: int = 50):
        self._notices: Deque[Notification] = deque(maxlen=maxlen)

    def success(self, message: str, style: Optional[Dict[str, str]] = None) -> None:
        self._push(Notification(message, SUCCESS, style))

    def error(self, message: str, style: Optional[Dict[str, str]] = None) -> None:
        self._push(Notification(message, ERROR, style))

    def _push(self, notice):
        self._notices.append(notice)
        logger.log(logging.INFO if notice.level == SUCCESS else logging.WARNING,
                   "notify %s: %s", notice.level, notice.message)

    @property
    def notices(self) -> List[Notification]:
        return list(self._notices)

    @property
    def last(self) -> Optional[Notification]:
        return self._notices[-1] if self._notices else None

    def clear(self) -> None:
        self._notices.clear()


__all__ = ["Notification", "Notifier", "SUCCESS", "ERROR", "OUT_OF_STOCK_STYLE"]
