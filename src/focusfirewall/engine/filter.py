"""
Focus Firewall engine.

Wires the scan coordinator, change watcher and goal/toggle sync together
for one page.
"""

import logging
from typing import Dict, Optional

from ..annotate.marker import AnnotationController
from ..classify.run import ScanCoordinator
from ..page.config import EngineConfig
from ..page.document import HostDocument
from .state import FocusState
from .sync import GoalStateSync, StateStore
from .watcher import ChangeWatcher


logger = logging.getLogger(__name__)


class FocusFilter:
    """
    Keeps a page's content items annotated according to the focus goal.

    Usage:
        async with FocusFilter(document, store) as engine:
            ...
    """

    def __init__(
        self,
        document: HostDocument,
        store: Optional[StateStore] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.document = document
        self.config = config or EngineConfig()

        self.annotator = AnnotationController(document, self.config.thumbnail_selectors)
        self.coordinator = ScanCoordinator(document, self.config, self.annotator)
        self.sync = GoalStateSync(
            self.coordinator,
            store,
            timeout_seconds=self.config.state_timeout_seconds,
        )
        self.watcher = ChangeWatcher(
            document,
            self.rescan,
            debounce_seconds=self.config.debounce_seconds,
            poll_seconds=self.config.poll_seconds,
        )

    @property
    def state(self) -> FocusState:
        return self.sync.state

    async def start(self) -> None:
        """Install styles, start watching and seed state from the store."""
        self.annotator.install_styles()
        self.watcher.start()
        await self.sync.start()
        logger.debug("Engine started on %s", self.document.url)

    def stop(self) -> None:
        self.watcher.stop()
        self.sync.stop()

    def rescan(self) -> Dict[str, int]:
        """Scan the page with the current state snapshot."""
        return self.sync.scan()

    async def __aenter__(self) -> "FocusFilter":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.stop()
