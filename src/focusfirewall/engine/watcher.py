"""
Change detection for Focus Firewall.

Two trigger sources feed one debounced rescan:
- structural insertions reported by the document
- address changes found by polling (single-page navigation)

The debounce timer is cancel-and-replace: a new trigger restarts the
pending timer, so a burst of changes produces one rescan once it settles.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from ..page.document import HostDocument, MutationRecord


logger = logging.getLogger(__name__)


class ChangeWatcher:
    """Schedules debounced rescans on page mutations and navigation."""

    def __init__(
        self,
        document: HostDocument,
        rescan: Callable[[], object],
        debounce_seconds: float = 0.3,
        poll_seconds: float = 1.0,
    ):
        """
        Initialize the watcher.

        Args:
            document: Page to observe
            rescan: Called once per settled burst of changes
            debounce_seconds: Quiet period after the last change
            poll_seconds: Address polling interval
        """
        self.document = document
        self.rescan = rescan
        self.debounce_seconds = debounce_seconds
        self.poll_seconds = poll_seconds

        self.last_url = document.url
        self.scan_count = 0

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._poll_task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._loop is not None

    @property
    def pending(self) -> bool:
        """True while a debounced rescan is waiting to fire."""
        return self._timer is not None

    def start(self) -> None:
        """
        Start observing. Must be called from a running event loop.
        """
        if self.running:
            return

        self._loop = asyncio.get_running_loop()
        self.last_url = self.document.url

        self.document.add_mutation_listener(self._on_mutations)
        self._poll_task = self._loop.create_task(self._poll_navigation())

    def stop(self) -> None:
        """Stop observing and drop any pending rescan."""
        self.document.remove_mutation_listener(self._on_mutations)

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        if self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None

        self._loop = None

    def schedule_rescan(self) -> None:
        """(Re)start the debounce timer."""
        if self._loop is None:
            return

        if self._timer is not None:
            self._timer.cancel()

        self._timer = self._loop.call_later(self.debounce_seconds, self._fire)

    def _on_mutations(self, records: List[MutationRecord]) -> None:
        if any(record.added_nodes for record in records):
            self.schedule_rescan()

    async def _poll_navigation(self) -> None:
        while True:
            await asyncio.sleep(self.poll_seconds)

            if self.document.url != self.last_url:
                logger.debug("Navigation detected: %s -> %s", self.last_url, self.document.url)
                self.last_url = self.document.url
                self.schedule_rescan()

    def _fire(self) -> None:
        self._timer = None
        self.scan_count += 1

        try:
            self.rescan()
        except Exception as e:
            logger.warning("Debounced rescan failed: %s", e)
