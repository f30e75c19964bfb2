"""
Commentary message stream fed by game lifecycle events.

Events are handed off to a thread pool so the simulation never waits on
the LLM. Replies are appended to an in-memory list of messages that the
HTTP layer and CLI read.
"""

import logging
import threading
import time
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from domain.constants import EVENT_START, LIFECYCLE_EVENTS
from domain.engine import LifecycleEvent
from services.commentary_service import CommentaryService


logger = logging.getLogger(__name__)

SENDER_AI = "ai"
SENDER_SYSTEM = "system"


@dataclass(frozen=True)
class CommentaryMessage:
    id: str
    text: str
    sender: str
    timestamp: float

    def to_dict(self) -> Dict:
        return asdict(self)


class CommentaryFeed:
    """
    Observer for lifecycle events.

    handle_event() returns immediately; the reply arrives later on a
    worker thread. A failing worker is logged and otherwise ignored.
    """

    def __init__(self, service: CommentaryService, max_workers: int = 2):
        self.service = service
        self._messages: List[CommentaryMessage] = []
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="commentary")

    @property
    def messages(self) -> List[CommentaryMessage]:
        with self._lock:
            return list(self._messages)

    def add_message(self, text: str, sender: str) -> CommentaryMessage:
        message = CommentaryMessage(
            id=uuid.uuid4().hex[:9],
            text=text,
            sender=sender,
            timestamp=time.time(),
        )
        with self._lock:
            self._messages.append(message)
        return message

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()

    def handle_event(self, event: LifecycleEvent) -> Optional[Future]:
        """Record the event and request commentary for it in the background."""
        if event.type not in LIFECYCLE_EVENTS:
            logger.warning(f"Ignoring unknown lifecycle event '{event.type}'")
            return None

        if event.type == EVENT_START:
            self.clear()
            self.add_message("System: Game Started", SENDER_SYSTEM)

        try:
            future = self._executor.submit(self._comment_on, event)
        except RuntimeError:
            logger.warning(f"Commentary feed is shut down; dropping '{event.type}' event")
            return None
        future.add_done_callback(self._log_failure)
        return future

    def _comment_on(self, event: LifecycleEvent) -> str:
        comment = self.service.generate_commentary(event.type, event.score, event.high_score)
        if comment:
            self.add_message(comment, SENDER_AI)
        return comment

    @staticmethod
    def _log_failure(future: Future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error(f"Commentary worker failed: {exc}")

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
