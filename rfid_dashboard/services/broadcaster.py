# =======================================================================================
# rfid_dashboard/services/broadcaster.py - Live Viewer Fan-out
# =======================================================================================
import asyncio
import itertools
import logging
import threading
from typing import Any, Dict, Optional, Set

from ..models.schemas import AccessEvent, LiveMessage

logger = logging.getLogger(__name__)

NEW_RFID_LOG = "new-rfid-log"

_viewer_ids = itertools.count(1)


class Viewer:
    """
    One attached live client: a bounded queue living on the event loop
    that serves its connection.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, maxsize: int = 100, label: str = None):
        self.id = next(_viewer_ids)
        self.label = label or f"viewer-{self.id}"
        self.loop = loop
        self.queue: "asyncio.Queue[Dict[str, Any]]" = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0

    def offer(self, message: Dict[str, Any]) -> None:
        """Runs on the viewer's loop. Never waits; a full queue drops the message."""
        try:
            self.queue.put_nowait(message)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning("Dropped live message for %s (queue full, %d dropped so far)",
                           self.label, self.dropped)

    async def next_message(self) -> Dict[str, Any]:
        return await self.queue.get()


class Broadcaster:
    """Tracks attached viewers and pushes every newly persisted event to all of them."""

    def __init__(self, queue_size: int = 100):
        self.queue_size = queue_size
        self._viewers: Set[Viewer] = set()
        self._lock = threading.Lock()

    # ----------------------------------------------------------------------
    # Connection lifecycle
    # ----------------------------------------------------------------------
    def attach(self, loop: Optional[asyncio.AbstractEventLoop] = None, label: str = None) -> Viewer:
        viewer = Viewer(loop or asyncio.get_running_loop(), self.queue_size, label)
        with self._lock:
            self._viewers.add(viewer)
        logger.info("Live viewer attached: %s (%d connected)", viewer.label, self.viewer_count)
        return viewer

    def detach(self, viewer: Viewer) -> None:
        with self._lock:
            self._viewers.discard(viewer)
        logger.info("Live viewer detached: %s (%d connected)", viewer.label, self.viewer_count)

    @property
    def viewer_count(self) -> int:
        with self._lock:
            return len(self._viewers)

    # ----------------------------------------------------------------------
    # Fan-out
    # ----------------------------------------------------------------------
    def publish(self, event: AccessEvent) -> int:
        """
        Hand the event to every attached viewer and return immediately.
        Safe to call from any thread. Returns the number of viewers it was offered to.
        """
        message = LiveMessage(event=NEW_RFID_LOG, data=event).model_dump(mode="json")

        with self._lock:
            viewers = list(self._viewers)

        offered = 0
        for viewer in viewers:
            try:
                viewer.loop.call_soon_threadsafe(viewer.offer, message)
                offered += 1
            except RuntimeError:
                # the viewer's loop has been closed underneath it
                logger.warning("Live viewer %s has a closed loop; detaching", viewer.label)
                self.detach(viewer)

        return offered
